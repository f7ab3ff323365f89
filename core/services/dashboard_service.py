# =============================================================================
# core/services/dashboard_service.py - Dashboard Assembly
# =============================================================================
# Runs the membership and workshop fetchers side by side and shapes their
# records into the display-ready DashboardView:
# - workshop labels ("Pre-reg", event date, "Waitlisted")
# - membership card values (formatted expiry, Yes/No auto renew)
# - fixed links (calendar, join, contact)
# =============================================================================

from __future__ import annotations

import asyncio
import logging
import math
from typing import Any

from core.models.dashboard import (
    DashboardLinks,
    DashboardView,
    MembershipCard,
    MembershipSection,
    WorkshopItem,
    WorkshopSection,
)
from core.models.records import FetchResult, MembershipRecord, WorkshopRecord
from core.services.data_proxy import DataProxyClient, FetchConfig
from core.services.fetchers import MembershipFetcher, WorkshopFetcher
from core.services.session_gate import SessionGate
from lib.dates import DEFAULT_TIMEZONE, format_workshop_date

logger = logging.getLogger(__name__)


# =============================================================================
# Display Helpers
# =============================================================================

def workshop_label(record: WorkshopRecord, tz: str = DEFAULT_TIMEZONE) -> str | None:
    """Short status label for a workshop, or None if there is nothing to show."""
    if record.status == "pre-registered":
        return "Pre-reg"
    if record.status == "completed" and record.eventdate:
        return format_workshop_date(record.eventdate, tz)
    if record.status == "waitlisted":
        return "Waitlisted"
    return None


def autorenew_label(value: Any) -> str:
    """
    "Yes" when the value is a non-zero number, otherwise "No".

    The backend sends 1/0, "1"/"0" or booleans; anything non-numeric is "No".
    """
    if value is None or isinstance(value, bool):
        return "Yes" if value else "No"
    try:
        number = float(str(value).strip() or 0)
    except ValueError:
        return "No"
    return "Yes" if number and not math.isnan(number) else "No"


def to_workshop_item(record: WorkshopRecord, tz: str = DEFAULT_TIMEZONE) -> WorkshopItem:
    return WorkshopItem(
        formid=record.formid,
        title=record.workshop_name,
        label=workshop_label(record, tz),
        tickets=record.tickets,
        details_url=record.resolved_url,
    )


def to_membership_card(record: MembershipRecord, tz: str = DEFAULT_TIMEZONE) -> MembershipCard:
    return MembershipCard(
        member_id="" if record.memberid is None else str(record.memberid),
        status=record.memberstatus or "",
        expires=format_workshop_date(record.expirationdate, tz) or "",
        auto_renew=autorenew_label(record.autorenew),
        level=record.levelname or "",
    )


# =============================================================================
# Service
# =============================================================================

class DashboardService:
    """
    Loads and shapes the dashboard for one session.

    Example:
        service = DashboardService(FetchConfig.from_settings(settings), links)
        view = await service.load(SessionGate(client.auth))
    """

    def __init__(
        self,
        config: FetchConfig,
        links: DashboardLinks,
        timezone: str = DEFAULT_TIMEZONE,
    ):
        self.config = config
        self.links = links
        self.timezone = timezone

    @classmethod
    def from_settings(cls, settings: Any) -> "DashboardService":
        """Build the service and its fetch configuration from app settings."""
        return cls(
            config=FetchConfig.from_settings(settings),
            links=DashboardLinks(
                calendar=settings.CALENDAR_URL,
                join=settings.JOIN_URL,
                contact=settings.CONTACT_URL,
            ),
            timezone=settings.DASHBOARD_TIMEZONE,
        )

    def _client(self) -> DataProxyClient:
        return DataProxyClient(self.config)

    async def fetch_membership(self, gate: SessionGate) -> FetchResult:
        """Run the membership fetcher on its own."""
        return await MembershipFetcher(gate, self._client()).fetch()

    async def fetch_workshops(self, gate: SessionGate) -> FetchResult:
        """Run the workshop fetcher on its own."""
        return await WorkshopFetcher(gate, self._client()).fetch()

    async def load(self, gate: SessionGate, email: str | None = None) -> DashboardView:
        """
        Fetch both sections concurrently and build the view.

        Each fetcher resolves the session on its own; neither waits for
        the other, and one failing does not affect the other.
        """
        workshops, membership = await asyncio.gather(
            self.fetch_workshops(gate),
            self.fetch_membership(gate),
        )

        logger.debug(
            f"Dashboard loaded: {len(workshops.data)} workshops, "
            f"{len(membership.data)} memberships"
        )

        card = None
        if not membership.error and membership.data:
            card = to_membership_card(membership.data[0], self.timezone)

        return DashboardView(
            email=email,
            workshops=WorkshopSection(
                items=[to_workshop_item(r, self.timezone) for r in workshops.data],
                is_loading=workshops.is_loading,
                error=workshops.error,
            ),
            membership=MembershipSection(
                card=card,
                join_url=self.links.join,
                is_loading=membership.is_loading,
                error=membership.error,
            ),
            links=self.links,
        )
