"""JWT-backed authentication and role-based section access."""
from __future__ import annotations

import hashlib
import hmac
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Callable

import jwt
from fastapi import Depends, HTTPException, Request, status
from jwt import ExpiredSignatureError, InvalidTokenError
from sqlalchemy import select
from sqlalchemy.orm import Session

from freightdesk.core.config import AuthSettings, get_settings
from freightdesk.core.log import get_logger
from freightdesk.core.permissions import Section, can_access
from freightdesk.models import User, UserRole

LOGGER = get_logger(__name__)

_HASH_ALGORITHM = "sha256"
_HASH_ITERATIONS = 260_000


class AuthenticationError(Exception):
    """Bad credentials, or a session token that is expired, forged or incomplete."""


@dataclass(frozen=True, slots=True)
class DemoAccount:
    username: str
    password: str
    full_name: str
    role: str


# Used when USE_LOCAL_AUTH is enabled and no user table is reachable.
DEMO_ACCOUNTS: tuple[DemoAccount, ...] = (
    DemoAccount("admin", "admin123", "System Administrator", UserRole.ADMIN.value),
    DemoAccount("financial", "123456", "Finance Officer", UserRole.FINANCIAL.value),
    DemoAccount("sales", "123456", "Sales Officer", UserRole.SALES.value),
    DemoAccount("service", "123456", "Customer Service", UserRole.CUSTOMER_SERVICE.value),
)


def hash_password(password: str, *, salt: str | None = None) -> str:
    """Return ``pbkdf2_sha256$<iterations>$<salt>$<hex digest>`` for ``password``."""

    salt = salt or secrets.token_hex(16)
    digest = hashlib.pbkdf2_hmac(
        _HASH_ALGORITHM, password.encode("utf-8"), salt.encode("utf-8"), _HASH_ITERATIONS
    )
    return f"pbkdf2_{_HASH_ALGORITHM}${_HASH_ITERATIONS}${salt}${digest.hex()}"


def verify_password(password: str, encoded: str) -> bool:
    try:
        scheme, raw_iterations, salt, expected = encoded.split("$", 3)
        iterations = int(raw_iterations)
    except ValueError:
        return False
    if scheme != f"pbkdf2_{_HASH_ALGORITHM}":
        return False
    digest = hashlib.pbkdf2_hmac(
        _HASH_ALGORITHM, password.encode("utf-8"), salt.encode("utf-8"), iterations
    )
    return hmac.compare_digest(digest.hex(), expected)


@dataclass(frozen=True, slots=True)
class AuthenticatedUser:
    user_id: str
    username: str
    full_name: str
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value


class SecurityProvider:
    """Authenticate staff users and issue/verify JWT access tokens."""

    def __init__(
        self,
        settings: AuthSettings,
        session_factory: Callable[[], Session] | None = None,
    ) -> None:
        self._settings = settings
        self._session_factory = session_factory

    @property
    def cookie_name(self) -> str:
        return self._settings.cookie_name

    @property
    def token_ttl_seconds(self) -> int:
        return int(self._settings.access_token_expire_minutes * 60)

    @property
    def is_enabled(self) -> bool:
        return self._settings.enabled

    def default_admin_user(self) -> AuthenticatedUser:
        return AuthenticatedUser(
            user_id="local-admin",
            username="admin",
            full_name="System Administrator",
            role=UserRole.ADMIN.value,
        )

    def _session(self) -> Session:
        if self._session_factory is None:
            from freightdesk.db.session import get_default_sessionmaker

            self._session_factory = get_default_sessionmaker()
        return self._session_factory()

    def authenticate(self, username: str, password: str) -> AuthenticatedUser | None:
        """Check ``username``/``password`` against the demo accounts or the ``users`` table.

        Returns ``None`` for unknown, inactive or mismatched users.
        """

        username = username.strip()
        if self._settings.use_local_auth:
            for account in DEMO_ACCOUNTS:
                if account.username == username and hmac.compare_digest(
                    account.password, password
                ):
                    return AuthenticatedUser(
                        user_id=f"demo-{account.username}",
                        username=account.username,
                        full_name=account.full_name,
                        role=account.role,
                    )
            return None

        with self._session() as session:
            user = session.execute(
                select(User).where(User.username == username)
            ).scalar_one_or_none()
            if user is None or not user.is_active:
                return None
            if not verify_password(password, user.password_hash):
                return None
            return AuthenticatedUser(
                user_id=user.id,
                username=user.username,
                full_name=user.full_name,
                role=user.role,
            )

    def create_access_token(self, user: AuthenticatedUser) -> str:
        issued = datetime.now(tz=timezone.utc)
        claims = {
            "sub": user.username,
            "uid": user.user_id,
            "name": user.full_name,
            "role": user.role,
            "iat": issued,
            "exp": issued + timedelta(seconds=self.token_ttl_seconds),
        }
        return jwt.encode(claims, self._settings.secret_key, algorithm=self._settings.algorithm)

    def decode_token(self, token: str) -> AuthenticatedUser:
        """Verify signature and expiry, then rebuild the principal from its claims."""

        try:
            payload = jwt.decode(
                token,
                self._settings.secret_key,
                algorithms=[self._settings.algorithm],
            )
        except ExpiredSignatureError as exc:
            raise AuthenticationError("Session token has expired") from exc
        except InvalidTokenError as exc:
            raise AuthenticationError("Session token is not valid") from exc

        username, user_id, role = (payload.get(claim) for claim in ("sub", "uid", "role"))
        if not all(isinstance(value, str) for value in (username, user_id, role)):
            raise AuthenticationError("Session token lacks the sub, uid or role claim")

        full_name = payload.get("name")
        return AuthenticatedUser(
            user_id=user_id,
            username=username,
            full_name=full_name if isinstance(full_name, str) else username,
            role=role,
        )


@lru_cache(maxsize=1)
def get_security_provider() -> SecurityProvider:
    return SecurityProvider(get_settings().auth)


def get_authenticated_user(request: Request) -> AuthenticatedUser:
    """The principal ``AuthMiddleware`` stored on ``request.state``."""

    user: AuthenticatedUser | None = getattr(request.state, "user", None)
    if user is not None:
        return user
    raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Login required")


def require_section(section: Section) -> Callable[..., AuthenticatedUser]:
    """Build a dependency ensuring the current user's role may open ``section``."""

    def _dependency(
        user: AuthenticatedUser = Depends(get_authenticated_user),
    ) -> AuthenticatedUser:
        if not can_access(user.role, section):
            LOGGER.info(
                "Section access denied",
                extra={"username": user.username, "role": user.role, "section": section.value},
            )
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Access denied")
        return user

    return _dependency


def require_admin_user(
    user: AuthenticatedUser = Depends(get_authenticated_user),
) -> AuthenticatedUser:
    if user.is_admin:
        return user
    LOGGER.info("Admin-only route refused", extra={"username": user.username, "role": user.role})
    raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Only administrators may manage users")


__all__ = [
    "AuthenticatedUser",
    "AuthenticationError",
    "DEMO_ACCOUNTS",
    "SecurityProvider",
    "get_authenticated_user",
    "get_security_provider",
    "hash_password",
    "require_admin_user",
    "require_section",
    "verify_password",
]
