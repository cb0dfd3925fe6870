"""FastAPI routers for the freight administration application."""

from .accounting import router as accounting_router
from .auth import router as auth_router
from .customers import router as customers_router
from .dashboard import router as dashboard_router
from .reports import router as reports_router
from .shipments import router as shipments_router
from .users import router as users_router

__all__ = [
    "accounting_router",
    "auth_router",
    "customers_router",
    "dashboard_router",
    "reports_router",
    "shipments_router",
    "users_router",
]
