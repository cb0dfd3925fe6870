"""Schema creation and demo data for local development."""
from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy import Engine, select
from sqlalchemy.orm import Session

from freightdesk.core.log import get_logger
from freightdesk.core.security import DEMO_ACCOUNTS, hash_password
from freightdesk.models import Base, ChartOfAccount, User

LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class SeedAccount:
    code: str
    name: str
    account_type: str
    parent_code: str | None = None


STANDARD_CHART: tuple[SeedAccount, ...] = (
    SeedAccount("1", "Assets", "asset"),
    SeedAccount("11", "Current assets", "asset", "1"),
    SeedAccount("1101", "Cash on hand", "asset", "11"),
    SeedAccount("1102", "Bank accounts", "asset", "11"),
    SeedAccount("1103", "Accounts receivable", "asset", "11"),
    SeedAccount("12", "Fixed assets", "asset", "1"),
    SeedAccount("1201", "Vehicles and equipment", "asset", "12"),
    SeedAccount("2", "Liabilities", "liability"),
    SeedAccount("21", "Current liabilities", "liability", "2"),
    SeedAccount("2101", "Accounts payable", "liability", "21"),
    SeedAccount("2102", "Customs duties payable", "liability", "21"),
    SeedAccount("3", "Equity", "equity"),
    SeedAccount("31", "Owner's capital", "equity", "3"),
    SeedAccount("32", "Retained earnings", "equity", "3"),
    SeedAccount("4", "Revenue", "revenue"),
    SeedAccount("41", "Freight revenue", "revenue", "4"),
    SeedAccount("42", "Customs clearance fees", "revenue", "4"),
    SeedAccount("5", "Expenses", "expense"),
    SeedAccount("51", "Carrier charges", "expense", "5"),
    SeedAccount("52", "Port and handling fees", "expense", "5"),
    SeedAccount("53", "Salaries", "expense", "5"),
    SeedAccount("54", "Office rent", "expense", "5"),
)


def create_schema(engine: Engine) -> None:
    Base.metadata.create_all(engine)


def seed_chart_of_accounts(session: Session) -> dict[str, ChartOfAccount]:
    """Insert ``STANDARD_CHART``, skipping codes that already exist."""

    existing = {
        account.account_code: account
        for account in session.execute(select(ChartOfAccount)).scalars()
    }
    created = 0
    for seed in STANDARD_CHART:
        if seed.code in existing:
            continue
        parent = existing.get(seed.parent_code) if seed.parent_code else None
        account = ChartOfAccount(
            account_code=seed.code,
            account_name=seed.name,
            account_type=seed.account_type,
            parent_account_id=parent.id if parent else None,
            level=parent.level + 1 if parent else 1,
        )
        session.add(account)
        session.flush()
        existing[seed.code] = account
        created += 1
    session.commit()
    LOGGER.info("Chart of accounts seeded", extra={"seeded": created})
    return existing


def seed_demo_users(session: Session) -> int:
    """Create the demo sign-in accounts that are missing."""

    usernames = set(session.execute(select(User.username)).scalars())
    created = 0
    for account in DEMO_ACCOUNTS:
        if account.username in usernames:
            continue
        session.add(
            User(
                username=account.username,
                password_hash=hash_password(account.password),
                full_name=account.full_name,
                role=account.role,
            )
        )
        created += 1
    session.commit()
    LOGGER.info("Demo users seeded", extra={"seeded": created})
    return created


__all__ = [
    "STANDARD_CHART",
    "SeedAccount",
    "create_schema",
    "seed_chart_of_accounts",
    "seed_demo_users",
]
