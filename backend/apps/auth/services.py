from __future__ import annotations

from typing import Any, Callable, Dict

from django.contrib.auth.hashers import make_password

from apps.api.errors import InvalidInputError
from apps.common import get_logger
from .protocols import UserRegistrationRepositoryProtocol

logger = get_logger(__name__).bind(component="auth", service="RegistrationService")


class RegistrationService:
    """Create accounts; the password is hashed here, before the insert."""

    def __init__(
        self,
        users: UserRegistrationRepositoryProtocol,
        hasher: Callable[[str], str] = make_password,
    ):
        self.users = users
        self.hasher = hasher
        self.logger = logger

    def hash_password(self, raw_password: str) -> str:
        if not raw_password:
            raise InvalidInputError(
                "Password must not be empty", details={"password": None}
            )
        return self.hasher(raw_password)

    def _build_payload(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "username": data["username"].strip(),
            "email": data["email"].strip(),
            "password": self.hash_password(data["password"]),
            "first_name": data.get("first_name", "").strip(),
            "last_name": data.get("last_name", "").strip(),
        }

    def _check_uniqueness(self, username: str, email: str) -> None:
        if self.users.username_exists(username):
            self.logger.info(
                "Registration rejected: username already exists", username=username
            )
            raise InvalidInputError(
                "Username already exists", details={"username": username}
            )
        if self.users.email_exists(email):
            self.logger.info("Registration rejected: email already exists", email=email)
            raise InvalidInputError("Email already exists", details={"email": email})

    def register(self, data: Dict[str, Any]) -> Dict[str, Any]:
        username = data["username"].strip()
        email = data["email"].strip()
        self.logger.debug(
            "Received registration request", username=username, email=email
        )
        self._check_uniqueness(username, email)
        user = self.users.create_user(**self._build_payload(data))
        self.logger.info(
            "User registered successfully", user_id=user.id, username=user.username
        )
        return {
            "id": user.id,
            "username": user.username,
            "email": user.email,
        }
