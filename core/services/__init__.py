# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .auth_service import AuthService, SignUpOutcome
from .dashboard_service import DashboardService
from .data_proxy import DataProxyClient, FetchConfig
from .fetchers import MembershipFetcher, WorkshopFetcher
from .session_gate import SessionGate

__all__ = [
    "AuthService",
    "SignUpOutcome",
    "DashboardService",
    "DataProxyClient",
    "FetchConfig",
    "MembershipFetcher",
    "WorkshopFetcher",
    "SessionGate",
]
