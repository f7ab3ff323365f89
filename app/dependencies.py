# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends().
# =============================================================================

from typing import Annotated

from fastapi import Depends, Request

from app.exceptions import DashboardException
from core.services.auth_service import AuthService
from core.services.dashboard_service import DashboardService
from lib.supabase_client import SupabaseClient, SupabaseClientError


def get_dashboard_service(request: Request) -> DashboardService:
    """
    Get the DashboardService built at startup.

    The service and its FetchConfig live on app.state (see main.lifespan).
    """
    return request.app.state.dashboard_service


def get_auth_service() -> AuthService:
    """
    AuthService around a fresh, non-persisting Supabase client.

    A new client per request keeps callers' sessions apart.
    """
    try:
        client = SupabaseClient.create_client(persist_session=False)
    except SupabaseClientError as e:
        raise DashboardException(
            message=e.message,
            code=e.code,
            status_code=503,
            suggestion=e.suggestion,
        ) from e
    return AuthService(client)


# Type aliases for dependency injection
DashboardServiceDep = Annotated[DashboardService, Depends(get_dashboard_service)]
AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
