"""FastAPI application instance and exception translation."""
from __future__ import annotations

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from freightdesk import __version__
from freightdesk.core import get_logger
from freightdesk.core.errors import BackendError, DuplicateRecordError, RecordNotFoundError
from freightdesk.core.security import SecurityProvider, get_security_provider
from freightdesk.domain.accounting import LedgerValidationError
from freightdesk.middleware import AuthMiddleware
from freightdesk.routers import (
    accounting_router,
    auth_router,
    customers_router,
    dashboard_router,
    reports_router,
    shipments_router,
    users_router,
)
from freightdesk.services import RequestInFlightError

LOGGER = get_logger(__name__)


def _error(status_code: int, detail: str) -> JSONResponse:
    return JSONResponse({"detail": detail}, status_code=status_code)


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(LedgerValidationError)
    async def handle_validation(request: Request, exc: LedgerValidationError) -> JSONResponse:
        return _error(422, str(exc))

    @app.exception_handler(RecordNotFoundError)
    async def handle_not_found(request: Request, exc: RecordNotFoundError) -> JSONResponse:
        return _error(status.HTTP_404_NOT_FOUND, exc.message)

    @app.exception_handler(DuplicateRecordError)
    async def handle_duplicate(request: Request, exc: DuplicateRecordError) -> JSONResponse:
        return _error(status.HTTP_409_CONFLICT, exc.message)

    @app.exception_handler(RequestInFlightError)
    async def handle_in_flight(request: Request, exc: RequestInFlightError) -> JSONResponse:
        return _error(status.HTTP_409_CONFLICT, str(exc))

    @app.exception_handler(BackendError)
    async def handle_backend(request: Request, exc: BackendError) -> JSONResponse:
        LOGGER.warning(
            "Backend error surfaced to client",
            extra={"path": request.url.path, "reason": exc.message},
        )
        return _error(status.HTTP_502_BAD_GATEWAY, exc.message)


def create_app(security_provider: SecurityProvider | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(title="Freight Desk", version=__version__)
    app.state.security_provider = security_provider or get_security_provider()
    app.add_middleware(AuthMiddleware, security_provider=app.state.security_provider)
    register_exception_handlers(app)
    app.include_router(auth_router)
    app.include_router(dashboard_router)
    app.include_router(customers_router)
    app.include_router(shipments_router)
    app.include_router(accounting_router)
    app.include_router(reports_router)
    app.include_router(users_router)

    @app.get("/health", include_in_schema=False)
    def health() -> dict[str, str]:
        return {"status": "ok"}

    LOGGER.info("FastAPI application initialised")
    return app


app = create_app()
