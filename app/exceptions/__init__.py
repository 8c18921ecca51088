# app/exceptions/__init__.py

from exceptions.domain_exceptions import (
    DomainException,
    NotFoundException,
    ValidationException,
    StoreUnavailableException,
    ConfigurationError
)

__all__ = [
    'DomainException',
    'NotFoundException',
    'ValidationException',
    'StoreUnavailableException',
    'ConfigurationError'
]
