# =============================================================================
# core/models/dashboard.py - Dashboard View Schemas
# =============================================================================
# Response models for GET /api/v1/dashboard. These are already shaped for
# display (labels, formatted dates, Yes/No) so the mobile shell only renders.
#
# Each section carries its own loading flag and error text; a failure in
# one section never hides the other.
# =============================================================================

from pydantic import BaseModel, Field


class WorkshopItem(BaseModel):
    """A workshop registration as shown in "My Workshops"."""

    formid: int | str
    title: str | None = None

    # "Pre-reg", a formatted event date, "Waitlisted", or None
    label: str | None = None

    tickets: int = Field(default=1, ge=1)
    details_url: str | None = None


class WorkshopSection(BaseModel):
    """The "My Workshops" section."""
    items: list[WorkshopItem] = Field(default_factory=list)
    is_loading: bool = False
    error: str | None = None


class MembershipCard(BaseModel):
    """Display values for the first membership record."""
    member_id: str = ""
    status: str = ""
    expires: str = ""
    auto_renew: str = "No"
    level: str = ""


class MembershipSection(BaseModel):
    """
    The "My Membership" section.

    `card` is None when the member has no membership; the shell then shows
    the join call-to-action pointing at `join_url`.
    """
    card: MembershipCard | None = None
    join_url: str
    is_loading: bool = False
    error: str | None = None


class DashboardLinks(BaseModel):
    """Fixed links shown on the dashboard."""
    calendar: str
    join: str
    contact: str


class DashboardView(BaseModel):
    """Complete dashboard payload."""
    email: str | None = None
    workshops: WorkshopSection
    membership: MembershipSection
    links: DashboardLinks
