"""Repositories wrapping SQL access and the ledger backend contract."""

from .accounting_repository import CURRENT_EARNINGS_NAME, SqlLedgerBackend
from .contracts import LedgerBackend
from .customer_repository import CustomerRepository
from .shipment_repository import ShipmentRepository
from .user_repository import UserRepository

__all__ = [
    "CURRENT_EARNINGS_NAME",
    "CustomerRepository",
    "LedgerBackend",
    "ShipmentRepository",
    "SqlLedgerBackend",
    "UserRepository",
]
