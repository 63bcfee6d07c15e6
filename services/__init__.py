"""
Service layer for business logic.

This package contains the import service that composes CSV reading,
row mapping and submission to YNAB.
"""
