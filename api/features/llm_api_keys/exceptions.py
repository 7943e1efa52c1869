"""Exceptions for the LLM API keys feature."""
from typing import Any, Dict, Optional

from api.shared.exceptions import AppException


class InvalidCredentialError(AppException):
    """Raised when a stored credential does not match the expected schema."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            f"Invalid API key configuration: {message}", "INVALID_LLM_API_KEY", details
        )
