"""Shared fixtures: in-memory databases and a recording ledger backend."""
from __future__ import annotations

import pytest
from sqlalchemy.orm import Session, sessionmaker

from fakes import FakeLedgerBackend, make_account
from freightdesk.db.engine import create_sync_engine
from freightdesk.db.seed import seed_chart_of_accounts
from freightdesk.domain.accounting import AccountType
from freightdesk.models import Base, ChartOfAccount
from freightdesk.services import ScreenRegistry


@pytest.fixture()
def engine():
    engine = create_sync_engine("sqlite://")
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session_factory(engine) -> sessionmaker:
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture()
def session(session_factory) -> Session:
    """Provide an in-memory database session for each test."""

    with session_factory() as session:
        yield session


@pytest.fixture()
def chart(session: Session) -> dict[str, ChartOfAccount]:
    """The standard chart of accounts keyed by account code."""

    return seed_chart_of_accounts(session)


@pytest.fixture()
def screens() -> ScreenRegistry:
    return ScreenRegistry()


@pytest.fixture()
def fake_backend() -> FakeLedgerBackend:
    return FakeLedgerBackend(
        accounts=[
            make_account("cash", level=1),
            make_account("revenue", level=1, account_type=AccountType.REVENUE),
        ]
    )
