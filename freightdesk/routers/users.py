"""Staff account administration routes (administrators only)."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from freightdesk.core.security import AuthenticatedUser, require_admin_user
from freightdesk.schemas import UserCreate, UserOut, UserUpdate
from freightdesk.services import UsersService

from .deps import get_db_session

router = APIRouter(prefix="/users", tags=["users"])


def get_users_service() -> UsersService:
    return UsersService()


@router.get("", response_model=list[UserOut])
def list_users(
    admin: AuthenticatedUser = Depends(require_admin_user),
    session: Session = Depends(get_db_session),
    service: UsersService = Depends(get_users_service),
) -> list[UserOut]:
    return service.list_users(session)


@router.post("", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def create_user(
    payload: UserCreate,
    admin: AuthenticatedUser = Depends(require_admin_user),
    session: Session = Depends(get_db_session),
    service: UsersService = Depends(get_users_service),
) -> UserOut:
    return service.create_user(session, payload, created_by=admin.user_id)


@router.put("/{user_id}", response_model=UserOut)
def update_user(
    user_id: str,
    payload: UserUpdate,
    admin: AuthenticatedUser = Depends(require_admin_user),
    session: Session = Depends(get_db_session),
    service: UsersService = Depends(get_users_service),
) -> UserOut:
    return service.update_user(session, user_id, payload)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: str,
    admin: AuthenticatedUser = Depends(require_admin_user),
    session: Session = Depends(get_db_session),
    service: UsersService = Depends(get_users_service),
) -> Response:
    service.delete_user(session, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


__all__ = ["router"]
