from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import status


class PortalError(Exception):
    """Base class for errors surfaced to API callers.

    Each subclass carries the HTTP status and a generic public message. The
    exception's own ``str()`` is meant for logs only and may name internals.
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "error"
    public_message: str = "Something went wrong."

    def __init__(self, detail: Optional[str] = None) -> None:
        super().__init__(detail or self.public_message)

    def to_payload(self) -> Dict[str, Any]:
        return {"error": {"code": self.code, "message": self.public_message}}


class NotAuthenticated(PortalError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "not_authenticated"
    public_message = "Login required."


class NotFound(PortalError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"
    public_message = "Not found."


class Forbidden(PortalError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "forbidden"
    public_message = "Access denied."


class ValidationError(PortalError):
    """Rejected input. Nothing has been persisted when this is raised.

    ``values`` echoes the submitted form so the caller can re-render it.
    """

    status_code = status.HTTP_400_BAD_REQUEST
    code = "validation_error"

    def __init__(self, message: str, *, values: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.public_message = message
        self.values = values or {}

    def to_payload(self) -> Dict[str, Any]:
        payload = super().to_payload()
        payload["error"]["values"] = self.values
        return payload


class PayloadTooLarge(PortalError):
    status_code = status.HTTP_413_REQUEST_ENTITY_TOO_LARGE
    code = "payload_too_large"
    public_message = "Uploaded file too large."


class StorageError(PortalError):
    """A document record exists but its file is gone from storage."""

    status_code = status.HTTP_404_NOT_FOUND
    code = "file_not_found"
    public_message = "File not found."


class PersistenceError(PortalError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "persistence_error"
