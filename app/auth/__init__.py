# =============================================================================
# app/auth/__init__.py - Authentication Module
# =============================================================================
# Login-screen endpoints backed by Supabase Auth, plus JWT verification for
# bearer tokens.
#
# Usage:
#   from app.auth import get_current_user, AuthUser
#
#   @router.get("/protected")
#   async def protected(user: AuthUser = Depends(get_current_user)):
#       return {"user_id": user.id}
# =============================================================================

from app.auth.dependencies import (
    BearerSessionProvider,
    get_current_user,
    get_session_provider,
    verify_access_token,
)
from app.auth.models import AuthSessionResponse, AuthUser

__all__ = [
    "BearerSessionProvider",
    "get_current_user",
    "get_session_provider",
    "verify_access_token",
    "AuthSessionResponse",
    "AuthUser",
]
