from __future__ import annotations

from typing import Any

from django.contrib.auth import get_user_model

from apps.common.repository import GenericRepository


class DjangoUserRegistrationRepository(GenericRepository):
    def __init__(self) -> None:
        super().__init__(get_user_model())

    def username_exists(self, username: str) -> bool:
        return self.exists(username__iexact=username)

    def email_exists(self, email: str) -> bool:
        return self.exists(email__iexact=email)

    def create_user(self, **data: Any):
        # Plain insert: the caller hands over an already hashed password.
        return self.create(**data)
