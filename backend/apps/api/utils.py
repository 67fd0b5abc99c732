from collections.abc import Mapping
from typing import Any, Dict, Optional

from rest_framework import status
from rest_framework.response import Response

# Codes raised by this service; anything else defaults to 400
CODE_STATUS = {
    "VALIDATION_ERROR": status.HTTP_400_BAD_REQUEST,
    "EMPTY_CART": status.HTTP_400_BAD_REQUEST,
    "UNAUTHORIZED": status.HTTP_401_UNAUTHORIZED,
    "FORBIDDEN": status.HTTP_403_FORBIDDEN,
    "NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "METHOD_NOT_ALLOWED": status.HTTP_405_METHOD_NOT_ALLOWED,
    "CONFLICT": status.HTTP_409_CONFLICT,
    "UNSUPPORTED_MEDIA_TYPE": status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
    "TOO_MANY_REQUESTS": status.HTTP_429_TOO_MANY_REQUESTS,
    "SERVER_ERROR": status.HTTP_500_INTERNAL_SERVER_ERROR,
    "CONSISTENCY_ERROR": status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def error_response(
    code: str,
    message: str,
    details: Optional[Any] = None,
    http_status: Optional[int] = None,
    *,
    hint: Optional[str] = None,
    headers: Optional[Mapping[str, Any]] = None,
) -> Response:
    """
    Build the error envelope ``{"error": {"code", "message", "status", ...}}``.

    ``details`` and ``hint`` are only present when given. The status comes from
    ``http_status`` or, failing that, from ``CODE_STATUS``.
    """

    if not isinstance(code, str) or not code.strip():
        raise ValueError("error_response requires a non-empty string code")
    if not isinstance(message, str) or not message.strip():
        raise ValueError("error_response requires a non-empty string message")

    code = code.strip().upper()
    status_code = int(http_status) if http_status is not None else CODE_STATUS.get(
        code, status.HTTP_400_BAD_REQUEST
    )

    body: Dict[str, Any] = {"code": code, "message": message.strip(), "status": status_code}
    if details is not None:
        body["details"] = dict(details) if isinstance(details, Mapping) else details
    if hint is not None:
        body["hint"] = hint

    return Response(
        {"error": body},
        status=status_code,
        headers={str(k): str(v) for k, v in headers.items()} if headers else None,
    )
