"""Dashboard route shared by every role."""
from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from freightdesk.core.config import get_settings
from freightdesk.core.permissions import Section
from freightdesk.core.security import AuthenticatedUser, require_section
from freightdesk.schemas import DashboardOut
from freightdesk.services import DashboardService

from .deps import get_db_session

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


def get_dashboard_service() -> DashboardService:
    """Return a new ``DashboardService`` instance for the request lifecycle."""

    return DashboardService(currency_code=get_settings().currency_code)


@router.get("/", response_model=DashboardOut)
def dashboard(
    user: AuthenticatedUser = Depends(require_section(Section.DASHBOARD)),
    session: Session = Depends(get_db_session),
    service: DashboardService = Depends(get_dashboard_service),
) -> DashboardOut:
    return service.get_dashboard(session)


__all__ = ["router"]
