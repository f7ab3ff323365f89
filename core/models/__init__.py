# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - session.py: SessionState variants (Loading, Unauthenticated, Authenticated)
# - records.py: Normalized membership/workshop records and FetchResult
# - dashboard.py: Display-ready dashboard response schemas
#
# These models define the "contract" between the service and its clients.
# =============================================================================

# -----------------------------------------------------------------------------
# Session Models - Tagged session state
# -----------------------------------------------------------------------------
from .session import (
    Authenticated,
    Loading,
    SessionState,
    SessionStatus,
    Unauthenticated,
)

# -----------------------------------------------------------------------------
# Record Models - Normalized rows from the data endpoint
# -----------------------------------------------------------------------------
from .records import (
    FetchResult,
    MembershipRecord,
    WorkshopRecord,
)

# -----------------------------------------------------------------------------
# Dashboard Models - Display-ready payload
# -----------------------------------------------------------------------------
from .dashboard import (
    DashboardLinks,
    DashboardView,
    MembershipCard,
    MembershipSection,
    WorkshopItem,
    WorkshopSection,
)

# -----------------------------------------------------------------------------
# __all__ - Explicit public API
# -----------------------------------------------------------------------------
__all__ = [
    # Session
    "Authenticated",
    "Loading",
    "SessionState",
    "SessionStatus",
    "Unauthenticated",
    # Records
    "FetchResult",
    "MembershipRecord",
    "WorkshopRecord",
    # Dashboard
    "DashboardLinks",
    "DashboardView",
    "MembershipCard",
    "MembershipSection",
    "WorkshopItem",
    "WorkshopSection",
]
