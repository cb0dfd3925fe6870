"""Data access for staff user accounts."""
from __future__ import annotations

from typing import Any, Mapping

from sqlalchemy import select

from freightdesk.core.errors import DuplicateRecordError
from freightdesk.core.log import get_logger
from freightdesk.core.security import hash_password
from freightdesk.models import User

from .base import BaseRepository

LOGGER = get_logger(__name__)

_USER_FIELDS = frozenset({"username", "full_name", "role", "email", "phone", "is_active"})


class UserRepository(BaseRepository):
    """CRUD access to the ``users`` table; passwords are stored hashed."""

    def list_users(self) -> list[User]:
        with self._guard("load users"):
            return list(
                self._session.execute(select(User).order_by(User.created_at.desc()))
                .scalars()
                .all()
            )

    def get_user(self, user_id: str) -> User:
        return self._get_or_missing(User, user_id, "User")

    def _ensure_username_free(self, username: str, *, exclude_id: str | None = None) -> None:
        statement = select(User.id).where(User.username == username)
        if exclude_id is not None:
            statement = statement.where(User.id != exclude_id)
        with self._guard("check the username"):
            taken = self._session.execute(statement).first() is not None
        if taken:
            raise DuplicateRecordError(f"Username {username} is already taken")

    def create_user(
        self, data: Mapping[str, Any], *, password: str, created_by: str | None = None
    ) -> User:
        values = {key: value for key, value in data.items() if key in _USER_FIELDS}
        self._ensure_username_free(values["username"])
        user = User(**values, password_hash=hash_password(password), created_by=created_by)
        with self._guard("create the user"):
            self._session.add(user)
            self._session.commit()
        LOGGER.info("User created", extra={"user_id": user.id, "role": user.role})
        return user

    def update_user(
        self, user_id: str, data: Mapping[str, Any], *, password: str | None = None
    ) -> User:
        user = self.get_user(user_id)
        username = data.get("username")
        if username and username != user.username:
            self._ensure_username_free(username, exclude_id=user_id)
        for key, value in data.items():
            if key in _USER_FIELDS:
                setattr(user, key, value)
        if password:
            user.password_hash = hash_password(password)
        with self._guard("update the user"):
            self._session.commit()
        return user

    def delete_user(self, user_id: str) -> None:
        user = self.get_user(user_id)
        with self._guard("delete the user"):
            self._session.delete(user)
            self._session.commit()
        LOGGER.info("User deleted", extra={"user_id": user_id})


__all__ = ["UserRepository"]
