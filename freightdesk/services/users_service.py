"""Staff account administration and the signed-in profile."""
from __future__ import annotations

from sqlalchemy.orm import Session

from freightdesk.core.permissions import ROLE_LABELS, menu_for
from freightdesk.core.security import AuthenticatedUser
from freightdesk.repositories import UserRepository
from freightdesk.schemas import MenuItemOut, ProfileOut, UserCreate, UserOut, UserUpdate


def build_profile(user: AuthenticatedUser) -> ProfileOut:
    """Describe ``user`` together with the menu entries its role unlocks."""

    return ProfileOut(
        user_id=user.user_id,
        username=user.username,
        full_name=user.full_name,
        role=user.role,
        role_label=ROLE_LABELS.get(user.role, user.role),
        menu=[MenuItemOut(section=item.section.value, label=item.label) for item in menu_for(user.role)],
    )


class UsersService:
    def list_users(self, session: Session) -> list[UserOut]:
        return [UserOut.model_validate(user) for user in UserRepository(session).list_users()]

    def create_user(
        self, session: Session, payload: UserCreate, *, created_by: str | None = None
    ) -> UserOut:
        data = payload.model_dump(exclude={"password"})
        data["role"] = payload.role.value
        user = UserRepository(session).create_user(
            data, password=payload.password, created_by=created_by
        )
        return UserOut.model_validate(user)

    def update_user(self, session: Session, user_id: str, payload: UserUpdate) -> UserOut:
        data = payload.model_dump(exclude_unset=True, exclude={"password"})
        if payload.role is not None:
            data["role"] = payload.role.value
        user = UserRepository(session).update_user(user_id, data, password=payload.password)
        return UserOut.model_validate(user)

    def delete_user(self, session: Session, user_id: str) -> None:
        UserRepository(session).delete_user(user_id)


__all__ = ["UsersService", "build_profile"]
