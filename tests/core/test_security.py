"""Tests for password hashing, access tokens and role permissions."""
from __future__ import annotations

import pytest
from sqlalchemy import select

from freightdesk.core.config import AuthSettings
from freightdesk.core.permissions import Section, can_access, menu_for, sections_for
from freightdesk.core.security import (
    AuthenticatedUser,
    AuthenticationError,
    SecurityProvider,
    hash_password,
    verify_password,
)
from freightdesk.db.seed import seed_demo_users
from freightdesk.models import User

AUTH = AuthSettings(secret_key="unit-secret", algorithm="HS256", access_token_expire_minutes=5)


def test_password_hash_round_trip() -> None:
    encoded = hash_password("s3cret!")

    assert encoded.startswith("pbkdf2_sha256$")
    assert verify_password("s3cret!", encoded)
    assert not verify_password("S3cret!", encoded)
    assert not verify_password("s3cret!", "plain-text")
    assert hash_password("same", salt="abc") == hash_password("same", salt="abc")


def test_token_round_trip() -> None:
    provider = SecurityProvider(AUTH)
    user = AuthenticatedUser(user_id="u1", username="layla", full_name="Layla", role="financial")

    decoded = provider.decode_token(provider.create_access_token(user))

    assert decoded == user
    assert provider.token_ttl_seconds == 300


def test_token_signed_with_other_key_is_rejected() -> None:
    other = SecurityProvider(AuthSettings(secret_key="other", algorithm="HS256", access_token_expire_minutes=5))
    user = AuthenticatedUser(user_id="u1", username="layla", full_name="Layla", role="sales")

    with pytest.raises(AuthenticationError):
        SecurityProvider(AUTH).decode_token(other.create_access_token(user))


def test_expired_token_is_rejected() -> None:
    provider = SecurityProvider(
        AuthSettings(secret_key="unit-secret", algorithm="HS256", access_token_expire_minutes=-1)
    )
    user = AuthenticatedUser(user_id="u1", username="layla", full_name="Layla", role="sales")

    with pytest.raises(AuthenticationError, match="expired"):
        provider.decode_token(provider.create_access_token(user))


def test_database_authentication(session_factory) -> None:
    with session_factory() as session:
        seed_demo_users(session)
        sales = session.execute(select(User).where(User.username == "sales")).scalar_one()
        sales.is_active = False
        session.commit()
    provider = SecurityProvider(AUTH, session_factory=session_factory)

    admin = provider.authenticate("admin", "admin123")

    assert admin is not None and admin.is_admin
    assert provider.authenticate("admin", "wrong") is None
    assert provider.authenticate("sales", "123456") is None
    assert provider.authenticate("nobody", "123456") is None


def test_local_demo_accounts() -> None:
    provider = SecurityProvider(
        AuthSettings(secret_key="k", algorithm="HS256", access_token_expire_minutes=5, use_local_auth=True)
    )

    user = provider.authenticate(" financial ", "123456")

    assert user is not None
    assert user.role == "financial"
    assert provider.authenticate("financial", "bad") is None


def test_role_sections() -> None:
    assert sections_for("admin") == frozenset(Section)
    assert can_access("financial", Section.REPORTS)
    assert not can_access("sales", Section.ACCOUNTING)
    assert sections_for("intruder") == frozenset()
    assert [item.section for item in menu_for("customer_service")] == [
        Section.DASHBOARD,
        Section.CUSTOMERS,
        Section.SHIPMENTS,
    ]
