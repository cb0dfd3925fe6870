"""Authentication routes providing login, logout and the current profile."""
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import JSONResponse, Response

from freightdesk.core.log import get_logger
from freightdesk.core.security import (
    AuthenticatedUser,
    SecurityProvider,
    get_authenticated_user,
)
from freightdesk.schemas import LoginRequest, MessageResponse, ProfileOut
from freightdesk.services import build_profile

LOGGER = get_logger(__name__)
router = APIRouter(tags=["auth"])


def get_security(request: Request) -> SecurityProvider:
    """Return the provider the application was created with."""

    return request.app.state.security_provider


@router.post("/login", response_model=ProfileOut)
def login(
    credentials: LoginRequest,
    security: SecurityProvider = Depends(get_security),
) -> Response:
    """Check credentials and issue the access token cookie."""

    user = security.authenticate(credentials.username, credentials.password)
    if user is None:
        LOGGER.info("Invalid login attempt", extra={"username": credentials.username})
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid username or password"
        )

    token = security.create_access_token(user)
    response = JSONResponse(build_profile(user).model_dump(mode="json"))
    response.set_cookie(
        security.cookie_name,
        token,
        max_age=security.token_ttl_seconds,
        httponly=True,
        samesite="lax",
    )
    LOGGER.info("User logged in", extra={"username": user.username, "role": user.role})
    return response


@router.get("/logout", response_model=MessageResponse)
def logout(security: SecurityProvider = Depends(get_security)) -> Response:
    """Clear the access token cookie."""

    response = JSONResponse({"detail": "Signed out"})
    response.delete_cookie(security.cookie_name)
    return response


@router.get("/me", response_model=ProfileOut)
def me(user: AuthenticatedUser = Depends(get_authenticated_user)) -> ProfileOut:
    return build_profile(user)


__all__ = ["router"]
