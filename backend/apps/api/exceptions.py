"""HTTP rendering of errors.

DRF hands every exception raised in a view to :func:`global_exception_handler`,
which renders the ``{"error": {...}}`` envelope built by
:func:`apps.api.utils.error_response`. The error classes live in
:mod:`apps.api.errors` and are re-exported here.
"""
from __future__ import annotations

from typing import Any, Dict, Optional, Sequence, Tuple, Type

from django.core.exceptions import (
    PermissionDenied as DjangoPermissionDenied,
    ValidationError as DjangoValidationError,
)
from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import (
    AuthenticationFailed,
    MethodNotAllowed,
    NotAuthenticated,
    NotFound,
    ParseError,
    PermissionDenied,
    Throttled,
    UnsupportedMediaType,
    ValidationError,
)
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from apps.api.errors import (
    GENERIC_SERVER_MESSAGE,
    ApplicationError,
    AuthError,
    ConflictError,
    ConsistencyError,
    EmptyCartError,
    InvalidInputError,
    NotFoundError,
)
from apps.api.utils import error_response
from apps.common import get_logger

logger = get_logger(__name__).bind(component="api", layer="exception")


# (exception types, code, fallback message, keep payload as details)
_FRAMEWORK_ERRORS: Sequence[Tuple[Tuple[Type[Exception], ...], str, str, bool]] = (
    ((ValidationError,), "VALIDATION_ERROR", "Validation failed", True),
    ((ParseError,), "VALIDATION_ERROR", "Malformed request", True),
    ((AuthenticationFailed,), "UNAUTHORIZED", "Authentication failed", False),
    ((NotAuthenticated,), "UNAUTHORIZED", "Authentication required", False),
    (
        (PermissionDenied, DjangoPermissionDenied),
        "FORBIDDEN",
        "You do not have permission to perform this action",
        False,
    ),
    ((NotFound, Http404), "NOT_FOUND", "Resource not found", False),
    ((MethodNotAllowed,), "METHOD_NOT_ALLOWED", "Method not allowed", False),
    ((UnsupportedMediaType,), "UNSUPPORTED_MEDIA_TYPE", "Unsupported media type", False),
    ((Throttled,), "TOO_MANY_REQUESTS", "Request was throttled", False),
)


def global_exception_handler(exc: Exception, context: Dict[str, Any]) -> Response:
    """DRF ``EXCEPTION_HANDLER``: every error leaves the API in one envelope."""

    log = _bind_logger(context)

    if isinstance(exc, ApplicationError):
        if exc.status_code and exc.status_code >= 500:
            log.error(
                "Application error reached the API boundary",
                code=exc.code,
                status=exc.status_code,
                error=exc.message,
            )
        else:
            log.info("Handled application error", code=exc.code, status=exc.status_code)
        return exc.to_response()

    if isinstance(exc, DjangoValidationError):
        exc = ValidationError(_django_validation_detail(exc))

    response = drf_exception_handler(exc, context)
    if response is None:
        log.exception("Unhandled exception bubbled to global handler")
        return error_response(
            "SERVER_ERROR",
            GENERIC_SERVER_MESSAGE,
            http_status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    code, message, details, hint = _describe(exc, response.data, response.status_code)
    log.info("Converted API exception", code=code, status=response.status_code)
    headers = dict(response.headers) if getattr(response, "headers", None) else None
    return error_response(
        code,
        message,
        details,
        http_status=response.status_code,
        hint=hint,
        headers=headers,
    )


def _bind_logger(context: Dict[str, Any]):
    log = logger
    view = context.get("view")
    request = context.get("request")
    if view:
        log = log.bind(view=type(view).__name__)
    if request is not None:
        log = log.bind(
            method=getattr(request, "method", None),
            path=getattr(request, "path", None),
        )
    return log


def _django_validation_detail(exc: DjangoValidationError) -> Any:
    if hasattr(exc, "message_dict"):
        return exc.message_dict
    return list(exc.messages)


def _describe(
    exc: Exception, payload: Any, status_code: int
) -> Tuple[str, str, Optional[Any], Optional[str]]:
    if status_code >= 500:
        return "SERVER_ERROR", GENERIC_SERVER_MESSAGE, None, None

    for types, code, fallback, keep_details in _FRAMEWORK_ERRORS:
        if isinstance(exc, types):
            details = payload if keep_details else None
            hint = None
            if isinstance(exc, Throttled) and exc.wait is not None:
                details = {"retryAfter": exc.wait}
                hint = "Wait before retrying this request."
            return code, _message_from(payload, fallback), details, hint

    return "UNKNOWN_ERROR", _message_from(payload, "Request failed"), None, None


def _message_from(payload: Any, fallback: str) -> str:
    if isinstance(payload, str) and payload:
        return payload
    if isinstance(payload, dict) and isinstance(payload.get("detail"), str):
        return payload["detail"]
    if isinstance(payload, list) and payload and isinstance(payload[0], str):
        return payload[0]
    return fallback


__all__ = [
    "ApplicationError",
    "AuthError",
    "ConflictError",
    "ConsistencyError",
    "EmptyCartError",
    "InvalidInputError",
    "NotFoundError",
    "global_exception_handler",
]
