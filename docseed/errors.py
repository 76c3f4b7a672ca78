"""Errors raised by the Google API clients and the creation workflow."""
from __future__ import annotations

from typing import Optional

NOT_FOUND = 404
FORBIDDEN = 403


class ApiError(Exception):
    """A Drive or Docs API call failed.

    ``status`` is the HTTP status code when the service answered, or None for
    transport failures (DNS, timeouts, refused connections).
    """

    def __init__(self, status: Optional[int], message: str) -> None:
        super().__init__(message)
        self.status = status
        self.message = message


class DocumentError(Exception):
    """Caller-facing failure of createDocument."""


class InvalidParent(DocumentError):
    def __init__(self) -> None:
        super().__init__("Parent folder not found. Check the folder ID.")


class PermissionDenied(DocumentError):
    def __init__(self) -> None:
        super().__init__("Permission denied. Make sure you have write access to the destination folder.")


class CreationFailed(DocumentError):
    def __init__(self, cause: str) -> None:
        super().__init__(f"Failed to create document: {cause or 'Unknown error'}")
        self.cause = cause


def error_message(exc: BaseException) -> str:
    message = getattr(exc, "message", None)
    if isinstance(message, str) and message:
        return message
    return str(exc)


def map_creation_error(exc: BaseException) -> DocumentError:
    status = getattr(exc, "status", None)
    if status == NOT_FOUND:
        return InvalidParent()
    if status == FORBIDDEN:
        return PermissionDenied()
    return CreationFailed(error_message(exc))
