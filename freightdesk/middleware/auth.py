"""Cookie authentication for every API route except login, logout and docs."""
from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Iterable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from freightdesk.core.log import get_logger, log_context
from freightdesk.core.security import AuthenticatedUser, AuthenticationError, SecurityProvider

LOGGER = get_logger(__name__)

PUBLIC_PATHS = frozenset(
    {"/login", "/logout", "/health", "/openapi.json", "/docs", "/redoc", "/favicon.ico"}
)

NextHandler = Callable[[Request], Awaitable[Response]]


class AuthMiddleware(BaseHTTPMiddleware):
    """Resolve the session cookie into ``request.state.user``.

    Anonymous requests to protected paths get a 401 JSON body; a cookie that
    no longer decodes is also cleared so the client stops sending it. The
    resolved username is bound to the log context for the rest of the request.
    """

    def __init__(
        self,
        app,
        security_provider: SecurityProvider,
        *,
        public_paths: Iterable[str] = PUBLIC_PATHS,
    ) -> None:
        super().__init__(app)
        self._security = security_provider
        self._public_paths = frozenset(public_paths)

    def _resolve(self, token: str | None) -> tuple[AuthenticatedUser | None, bool]:
        """Return the principal and whether a present token was rejected."""

        if not self._security.is_enabled:
            return self._security.default_admin_user(), False
        if not token:
            return None, False
        try:
            return self._security.decode_token(token), False
        except AuthenticationError as exc:
            LOGGER.info("Rejected session cookie", extra={"reason": str(exc)})
            return None, True

    async def dispatch(self, request: Request, call_next: NextHandler) -> Response:
        token = request.cookies.get(self._security.cookie_name)
        user, rejected = self._resolve(token)
        request.state.user = user

        path = request.url.path
        if user is None and path not in self._public_paths:
            response = JSONResponse(
                {"detail": "Session expired, please sign in again" if rejected else "Login required"},
                status_code=401,
            )
            if token:
                response.delete_cookie(self._security.cookie_name)
            return response

        with log_context.scoped(user=user.username if user else None, path=path):
            return await call_next(request)


__all__ = ["AuthMiddleware", "PUBLIC_PATHS"]
