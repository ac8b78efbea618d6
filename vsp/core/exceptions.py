"""
Custom exceptions for the portal core.
"""

from typing import Optional, Any, Dict


class VSPException(Exception):
    """Base exception for all portal errors."""
    
    def __init__(self, message: str, error_code: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}


class ValidationError(VSPException):
    """Raised when input validation fails."""
    pass


class InvalidFormatParameters(ValidationError):
    """Raised when an identifier format is missing or given an unusable parameter."""
    
    def __init__(self, message: str, format_name: Optional[str] = None, parameter: Optional[str] = None):
        super().__init__(
            message,
            error_code="invalid_format_parameters",
            details={"format": format_name, "parameter": parameter},
        )
        self.format_name = format_name
        self.parameter = parameter


class SequenceExhaustedError(ValidationError):
    """Raised when a sequence no longer fits the digits its format reserves."""
    pass


class ConfigurationError(VSPException):
    """Raised when configuration is invalid."""
    pass
