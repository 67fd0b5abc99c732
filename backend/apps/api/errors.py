"""Error taxonomy raised by the services.

Kept free of ``rest_framework.views`` so the authentication class, which DRF
imports while loading its views module, can depend on it.
"""
from __future__ import annotations

from typing import Any, Mapping, Optional

from rest_framework import status
from rest_framework.response import Response

from apps.api.utils import error_response

GENERIC_SERVER_MESSAGE = "Something went wrong"


class ApplicationError(Exception):
    """Error raised by services and rendered as-is at the API boundary.

    ``status_code`` may be left out, in which case ``error_response`` derives
    it from ``code``.
    """

    def __init__(
        self,
        code: str,
        message: str,
        *,
        status_code: Optional[int] = None,
        details: Optional[Any] = None,
        hint: Optional[str] = None,
        headers: Optional[Mapping[str, Any]] = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details
        self.hint = hint
        self.headers = headers

    def to_response(self) -> Response:
        return error_response(
            self.code,
            self.message,
            self.details,
            http_status=self.status_code,
            hint=self.hint,
            headers=self.headers,
        )


class _DomainError(ApplicationError):
    """ApplicationError with a fixed code/status pair per subclass."""

    code: str = "SERVER_ERROR"
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = GENERIC_SERVER_MESSAGE

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        details: Optional[Any] = None,
        hint: Optional[str] = None,
    ):
        super().__init__(
            type(self).code,
            message or self.default_message,
            status_code=type(self).status_code,
            details=details,
            hint=hint,
        )


class InvalidInputError(_DomainError):
    """Rejected input such as a non-positive or non-integer quantity."""

    code = "VALIDATION_ERROR"
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Validation failed"


class NotFoundError(_DomainError):
    code = "NOT_FOUND"
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found"


class EmptyCartError(_DomainError):
    code = "EMPTY_CART"
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Cart is empty"


class ConflictError(_DomainError):
    """Stored state advanced since it was read; retry the whole operation."""

    code = "CONFLICT"
    status_code = status.HTTP_409_CONFLICT
    default_message = "Resource was modified concurrently"


class ConsistencyError(_DomainError):
    code = "CONSISTENCY_ERROR"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Stored data failed a consistency check"


class AuthError(_DomainError):
    code = "UNAUTHORIZED"
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Authentication required"

