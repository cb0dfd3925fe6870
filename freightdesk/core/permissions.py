"""Static role -> section capability table driving navigation and access checks."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType

from freightdesk.models.users import UserRole


class Section(str, Enum):
    DASHBOARD = "dashboard"
    CUSTOMERS = "customers"
    SHIPMENTS = "shipments"
    ACCOUNTING = "accounting"
    REPORTS = "reports"
    SETTINGS = "settings"


@dataclass(frozen=True, slots=True)
class MenuItem:
    section: Section
    label: str


# Navigation order is fixed; a role only filters it.
MENU: tuple[MenuItem, ...] = (
    MenuItem(Section.DASHBOARD, "Dashboard"),
    MenuItem(Section.CUSTOMERS, "Customers"),
    MenuItem(Section.SHIPMENTS, "Shipments"),
    MenuItem(Section.ACCOUNTING, "Accounting"),
    MenuItem(Section.REPORTS, "Reports"),
    MenuItem(Section.SETTINGS, "Settings"),
)

_OPERATIONAL = frozenset({Section.DASHBOARD, Section.CUSTOMERS, Section.SHIPMENTS})

ROLE_SECTIONS = MappingProxyType(
    {
        UserRole.ADMIN.value: frozenset(Section),
        UserRole.FINANCIAL.value: _OPERATIONAL | {Section.ACCOUNTING, Section.REPORTS},
        UserRole.SALES.value: _OPERATIONAL,
        UserRole.CUSTOMER_SERVICE.value: _OPERATIONAL,
        UserRole.OPERATIONS.value: _OPERATIONAL,
    }
)

ROLE_LABELS = MappingProxyType(
    {
        UserRole.ADMIN.value: "System administrator",
        UserRole.FINANCIAL.value: "Finance",
        UserRole.SALES.value: "Sales",
        UserRole.CUSTOMER_SERVICE.value: "Customer service",
        UserRole.OPERATIONS.value: "Operations",
    }
)


def sections_for(role: str) -> frozenset[Section]:
    """Return the sections ``role`` may open; unknown roles get none."""

    return ROLE_SECTIONS.get(role, frozenset())


def can_access(role: str, section: Section) -> bool:
    return section in sections_for(role)


def menu_for(role: str) -> list[MenuItem]:
    allowed = sections_for(role)
    return [item for item in MENU if item.section in allowed]


__all__ = [
    "MENU",
    "MenuItem",
    "ROLE_LABELS",
    "ROLE_SECTIONS",
    "Section",
    "can_access",
    "menu_for",
    "sections_for",
]
