# app/exceptions/domain_exceptions.py

from typing import Any, Dict, Optional


class DomainException(Exception):
    """Base class for all domain exceptions"""
    
    def __init__(
        self,
        message: str,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class NotFoundException(DomainException):
    """Exception raised when a resource is not found"""
    
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            status_code=404,
            details=details
        )


class ValidationException(DomainException):
    """Exception raised when a required field is missing or empty"""
    
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            status_code=400,
            details=details
        )


class StoreUnavailableException(DomainException):
    """Exception raised when the message store is unreachable or an operation on it failed"""
    
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            status_code=500,
            details=details
        )


class ConfigurationError(Exception):
    """Raised at startup when required configuration is missing. Fatal."""
    
    def __init__(self, message: str, missing: Optional[list[str]] = None):
        self.message = message
        self.missing = missing or []
        super().__init__(self.message)
