"""
Core processing modules for the YNAB CSV importer.

This package contains:
- config: Application configuration and settings
- exceptions: Custom exception classes
- logger: Logging configuration
- normalize: Row to transaction mapping (milliunits, dates)
- parsing: CSV file reading
- schema: Pydantic models for the YNAB API payloads
"""
