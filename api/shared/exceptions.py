"""Shared exceptions for the Assistant API."""
from typing import Any, Dict, Optional


class AppException(Exception):
    """Base exception for the Assistant API."""

    def __init__(
        self,
        message: str,
        error_code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


class ExternalServiceError(AppException):
    """Raised when external service calls fail."""

    def __init__(self, service: str, message: str, details: Optional[Dict[str, Any]] = None):
        full_message = f"{service} service error: {message}"
        self.service = service
        self.reason = message
        super().__init__(full_message, "EXTERNAL_SERVICE_ERROR", details)
