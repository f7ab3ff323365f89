# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - dashboard.py: Workshops, membership and the combined dashboard
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import dashboard
from . import health

__all__ = [
    "dashboard",
    "health",
]
