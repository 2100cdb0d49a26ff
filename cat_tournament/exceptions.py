"""
Exception classes for the cat tournament system.

Centralized location for all custom exceptions to avoid circular imports.
"""


class ValidationError(Exception):
    """Base exception for validation-related errors."""
    pass


class ConfigurationError(Exception):
    """Base exception for configuration-related errors."""
    pass


class StorageError(Exception):
    """Raised when a rating store or backup file cannot be read or written."""
    pass
