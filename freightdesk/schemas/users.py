"""Schemas for staff accounts and the signed-in profile."""
from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from freightdesk.models import UserRole


class LoginRequest(BaseModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class UserCreate(BaseModel):
    username: str = Field(min_length=3, max_length=64)
    password: str = Field(min_length=6)
    full_name: str = Field(min_length=1, max_length=120)
    role: UserRole = UserRole.SALES
    email: str | None = None
    phone: str | None = None
    is_active: bool = True


class UserUpdate(BaseModel):
    """Partial update; a password is only re-hashed when supplied."""

    username: str | None = Field(default=None, min_length=3, max_length=64)
    password: str | None = Field(default=None, min_length=6)
    full_name: str | None = Field(default=None, min_length=1, max_length=120)
    role: UserRole | None = None
    email: str | None = None
    phone: str | None = None
    is_active: bool | None = None


class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    username: str
    full_name: str
    role: str
    email: str | None = None
    phone: str | None = None
    is_active: bool
    created_at: datetime | None = None


class MenuItemOut(BaseModel):
    section: str
    label: str


class ProfileOut(BaseModel):
    """The signed-in principal and the navigation its role unlocks."""

    user_id: str
    username: str
    full_name: str
    role: str
    role_label: str
    menu: list[MenuItemOut]


__all__ = [
    "LoginRequest",
    "MenuItemOut",
    "ProfileOut",
    "UserCreate",
    "UserOut",
    "UserUpdate",
]
