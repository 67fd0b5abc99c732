"""Bearer token verification.

``verify`` is a pure function: it checks the signature, expiry and token type
of an access token and returns the principal it names. It never touches the
database, so cart and order code can rely on it without depending on any
particular auth framework.
"""
from __future__ import annotations

from dataclasses import dataclass

from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.settings import api_settings
from rest_framework_simplejwt.tokens import AccessToken

from apps.api.errors import AuthError


@dataclass(frozen=True)
class Principal:
    """Verified caller identity attached to ``request.user``."""

    id: int
    token_id: str = ""

    @property
    def is_authenticated(self) -> bool:
        return True

    @property
    def is_anonymous(self) -> bool:
        return False


def verify(token: str) -> Principal:
    if not token or not isinstance(token, str):
        raise AuthError("Authentication required")
    try:
        access = AccessToken(token)
    except TokenError as exc:
        raise AuthError("Invalid or expired token") from exc
    raw_user_id = access.get(api_settings.USER_ID_CLAIM)
    if raw_user_id is None:
        raise AuthError("Token does not identify a user")
    try:
        user_id = int(raw_user_id)
    except (TypeError, ValueError) as exc:
        raise AuthError("Token does not identify a user") from exc
    if user_id <= 0:
        raise AuthError("Token does not identify a user")
    return Principal(id=user_id, token_id=str(access.get(api_settings.JTI_CLAIM, "")))
