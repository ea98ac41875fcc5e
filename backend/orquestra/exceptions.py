"""
Exception hierarchy for the Orquestra services.

Services raise these instead of ``HTTPException`` so they can be used outside a
request. The handlers registered in ``orquestra.main`` turn them into the
``{"error": ..., "details": ...}`` response body.

Hierarchy:
    OrquestraError (500)
    ├── ValidationFailedError (400)
    ├── AuthenticationError (401)
    ├── PermissionDeniedError (403)
    └── NotFoundError (404)
"""

from typing import Dict, Optional


class OrquestraError(Exception):
    """Base exception for all service-level failures.

    Attributes:
        error: Short, client-safe summary
        details: Human readable explanation
    """

    status_code = 500
    default_error = "Internal server error"
    headers: Optional[Dict[str, str]] = None

    def __init__(self, details: str = "", error: Optional[str] = None):
        self.error = error or self.default_error
        self.details = details
        super().__init__(details or self.error)

    def to_dict(self) -> Dict[str, object]:
        return {"error": self.error, "details": self.details}


class ValidationFailedError(OrquestraError):
    """Raised when input fails validation.

    Carries per-field messages so the client can point at the offending field.
    """

    status_code = 400
    default_error = "Validation error"

    def __init__(self, fields: Dict[str, str], details: Optional[str] = None):
        self.fields = fields
        if details is None:
            details = "; ".join(f"{name}: {message}" for name, message in fields.items())
        super().__init__(details)

    def to_dict(self) -> Dict[str, object]:
        body = super().to_dict()
        body["fields"] = self.fields
        return body


class AuthenticationError(OrquestraError):
    """Missing, malformed or expired credentials, or a failed login."""

    status_code = 401
    default_error = "Not authenticated"
    headers = {"WWW-Authenticate": "Bearer"}


class PermissionDeniedError(OrquestraError):
    status_code = 403
    default_error = "Access denied"


class NotFoundError(OrquestraError):
    """Raised when a project, member or user id does not resolve."""

    status_code = 404
    default_error = "Not found"
