"""Service layer entrypoints for domain logic."""

from .accounting_service import ChartOfAccountsService, JournalEntryService
from .customers_service import CustomersService
from .dashboard_service import DashboardService
from .report_service import ReportService
from .screen import DEFAULT_REGISTRY, RequestInFlightError, ScreenRegistry, ScreenState
from .shipments_service import ShipmentsService
from .users_service import UsersService, build_profile

__all__ = [
    "ChartOfAccountsService",
    "CustomersService",
    "DEFAULT_REGISTRY",
    "DashboardService",
    "JournalEntryService",
    "ReportService",
    "RequestInFlightError",
    "ScreenRegistry",
    "ScreenState",
    "ShipmentsService",
    "UsersService",
    "build_profile",
]
