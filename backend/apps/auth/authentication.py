from __future__ import annotations

from typing import Optional, Tuple

from django.contrib.auth import get_user_model
from rest_framework.authentication import BaseAuthentication, get_authorization_header
from rest_framework.exceptions import AuthenticationFailed

from apps.api.errors import AuthError
from apps.common import get_logger
from .tokens import Principal, verify

logger = get_logger(__name__).bind(component="auth", layer="authentication")

KEYWORD = "Bearer"


class BearerPrincipalAuthentication(BaseAuthentication):
    """Resolve ``Authorization: Bearer <token>`` to a :class:`Principal`.

    A missing header yields no credentials so ``IsAuthenticated`` answers 401;
    a malformed or invalid token fails immediately.
    """

    keyword = KEYWORD

    def authenticate(self, request) -> Optional[Tuple[Principal, str]]:
        header = get_authorization_header(request).split()
        if not header or header[0].decode("latin-1").lower() != self.keyword.lower():
            return None
        if len(header) != 2:
            logger.warning("Malformed bearer header", parts=len(header))
            raise AuthenticationFailed("Invalid Authorization header")
        try:
            raw = header[1].decode("utf-8")
        except UnicodeDecodeError as exc:
            raise AuthenticationFailed("Invalid Authorization header") from exc
        try:
            principal = verify(raw)
        except AuthError as exc:
            logger.info("Bearer token rejected", reason=exc.message)
            raise AuthenticationFailed(exc.message) from exc
        if not self.principal_exists(principal):
            logger.info("Bearer token names an unknown or inactive user", user_id=principal.id)
            raise AuthenticationFailed("User not found")
        logger.debug("Authenticated principal", user_id=principal.id)
        return principal, raw

    def principal_exists(self, principal: Principal) -> bool:
        # verify() checks the token only, not the account
        return get_user_model().objects.filter(pk=principal.id, is_active=True).exists()

    def authenticate_header(self, request) -> str:
        return f'{self.keyword} realm="api"'
