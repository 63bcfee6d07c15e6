"""
YNAB API integration.

This package contains:
- client: REST client for the transaction-creation endpoint
"""
