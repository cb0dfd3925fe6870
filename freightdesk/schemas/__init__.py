"""Pydantic schemas for request and response payloads."""

from .accounting import (
    AccountOut,
    AccountTreeOut,
    AccountTreeScreen,
    ChartScreen,
    JournalEntryCreated,
    JournalEntryIn,
    JournalLineIn,
    JournalScreen,
    JournalTotalsOut,
    PostedEntryOut,
    PostedLineOut,
    TreeRowOut,
)
from .common import Amount, MessageResponse, ScreenPayload
from .customers import CustomerCreate, CustomerOut, CustomerUpdate, SupplierOut
from .dashboard import DashboardOut, DashboardStats
from .reports import (
    BalanceSheetOut,
    BalanceSheetScreen,
    IncomeStatementOut,
    IncomeStatementScreen,
    TrialBalanceOut,
    TrialBalanceScreen,
)
from .shipments import CustomerRef, ShipmentCreate, ShipmentOut, ShipmentUpdate
from .users import LoginRequest, MenuItemOut, ProfileOut, UserCreate, UserOut, UserUpdate

__all__ = [
    "AccountOut",
    "AccountTreeOut",
    "AccountTreeScreen",
    "Amount",
    "BalanceSheetOut",
    "BalanceSheetScreen",
    "ChartScreen",
    "CustomerCreate",
    "CustomerOut",
    "CustomerRef",
    "CustomerUpdate",
    "DashboardOut",
    "DashboardStats",
    "IncomeStatementOut",
    "IncomeStatementScreen",
    "JournalEntryCreated",
    "JournalEntryIn",
    "JournalLineIn",
    "JournalScreen",
    "JournalTotalsOut",
    "LoginRequest",
    "MenuItemOut",
    "MessageResponse",
    "PostedEntryOut",
    "PostedLineOut",
    "ProfileOut",
    "ScreenPayload",
    "ShipmentCreate",
    "ShipmentOut",
    "ShipmentUpdate",
    "SupplierOut",
    "TreeRowOut",
    "TrialBalanceOut",
    "TrialBalanceScreen",
    "UserCreate",
    "UserOut",
    "UserUpdate",
]
