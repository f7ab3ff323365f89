# =============================================================================
# app/routers/dashboard.py - Dashboard Endpoints
# =============================================================================
# Workshops, membership, and the combined dashboard for the caller.
#
# The bearer token is optional. Without one the caller is not signed in and
# every section comes back empty with no error. Fetch failures are returned
# as section error text with HTTP 200, never as an error status.
# =============================================================================

import logging

from fastapi import APIRouter, Depends

from app.auth.dependencies import BearerSessionProvider, get_session_provider
from app.dependencies import DashboardServiceDep
from core.models.dashboard import DashboardView
from core.models.records import FetchResult, MembershipRecord, WorkshopRecord
from core.services.session_gate import SessionGate

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=DashboardView)
async def get_dashboard(
    service: DashboardServiceDep,
    provider: BearerSessionProvider = Depends(get_session_provider),
) -> DashboardView:
    """
    Full dashboard: workshops, membership card (or join prompt), and links.

    Both sections are fetched concurrently; each carries its own error.
    """
    view = await service.load(SessionGate(provider))
    return view.model_copy(update={"email": provider.email})


@router.get("/workshops", response_model=FetchResult[WorkshopRecord])
async def get_workshops(
    service: DashboardServiceDep,
    provider: BearerSessionProvider = Depends(get_session_provider),
) -> FetchResult:
    """Workshop registrations, one per form with a ticket count."""
    return await service.fetch_workshops(SessionGate(provider))


@router.get("/membership", response_model=FetchResult[MembershipRecord])
async def get_membership(
    service: DashboardServiceDep,
    provider: BearerSessionProvider = Depends(get_session_provider),
) -> FetchResult:
    """Membership records for the caller."""
    return await service.fetch_membership(SessionGate(provider))
