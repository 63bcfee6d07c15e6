"""
Custom exceptions for the YNAB CSV importer.
"""
from typing import Any, Dict, Optional


class YnabImportException(Exception):
    """Base exception for all importer errors."""
    
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        """
        Initialize exception.
        
        Args:
            message: Error message
            details: Additional error details
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(YnabImportException):
    """Raised when required configuration is missing or invalid."""
    pass


class InputFileError(YnabImportException):
    """Raised when the CSV input file is missing or unreadable."""
    pass


class ValidationError(YnabImportException):
    """Raised when data passed between stages is invalid."""
    pass


class YnabApiError(YnabImportException):
    """Raised when the YNAB API returns a non-success response or cannot be reached."""
    
    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(message, details)
        self.status_code = status_code
