"""
Shared error handling for the Employee Access Service.
"""

from typing import Dict, Any, Optional
from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Standard error response format."""

    code: str
    message: str
    details: Dict[str, Any] = {}


class AccessLayerException(Exception):
    """Base exception for Access Layer services."""

    status_code: int = 500

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        """Convert to error response."""
        return ErrorResponse(
            code=self.code,
            message=self.message,
            details=self.details
        )


class InvalidInputError(AccessLayerException):
    """Client-supplied data failed validation."""

    status_code = 400

    def __init__(self, message: str = "Invalid input", details: Optional[Dict[str, Any]] = None):
        super().__init__("INVALID_INPUT", message, details)


class NotFoundError(AccessLayerException):
    """Requested resource or derived aggregate does not exist."""

    status_code = 404

    def __init__(self, message: str = "Resource not found", details: Optional[Dict[str, Any]] = None):
        super().__init__("NOT_FOUND", message, details)


class UpstreamServerError(AccessLayerException):
    """Upstream 5xx, timeout or transport failure."""

    status_code = 500

    def __init__(self, service: str, message: str = "Upstream server error", details: Optional[Dict[str, Any]] = None):
        super().__init__("UPSTREAM_SERVER_ERROR", f"{service}: {message}", details)


class UpstreamClientError(AccessLayerException):
    """Upstream 4xx that is not otherwise classified."""

    status_code = 500

    def __init__(self, service: str, message: str = "Upstream client error", details: Optional[Dict[str, Any]] = None):
        super().__init__("UPSTREAM_CLIENT_ERROR", f"{service}: {message}", details)
