"""Domain exception hierarchy rendered as structured error responses."""

from __future__ import annotations


class AppException(Exception):
    """Base exception for all domain errors.

    Subclasses set ``code`` and ``status_code`` at the class level; callers
    provide ``message`` and an optional ``details`` list.
    """

    code: str = "APP_ERROR"
    status_code: int = 500

    def __init__(self, message: str, details: list[dict] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or []


class BadRequestException(AppException):
    """Malformed id, invalid or missing field, unparseable filter value."""

    code = "BAD_REQUEST"
    status_code = 400


class NotFoundException(AppException):
    code = "NOT_FOUND"
    status_code = 404
