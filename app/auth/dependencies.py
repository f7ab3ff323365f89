# =============================================================================
# app/auth/dependencies.py - FastAPI Auth Dependencies
# =============================================================================
# Provides dependency injection for authentication.
#
# Supports both:
# - ES256 (new Supabase JWT signing keys) via JWKS
# - HS256 (legacy Supabase JWT secret) as fallback
#
# Dashboard routes use an *optional* bearer token: no header means the
# caller is not signed in, which gives an empty dashboard rather than 401.
#
# Usage:
#   from app.auth import get_current_user, AuthUser
#
#   @router.get("/protected")
#   async def protected(user: AuthUser = Depends(get_current_user)):
#       return {"user_id": user.id}
# =============================================================================

import logging
import time
from dataclasses import dataclass
from typing import Optional
from uuid import UUID

import httpx
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError, ExpiredSignatureError

from app.config import settings
from app.auth.models import AuthUser
from app.exceptions import SessionRetrievalError

logger = logging.getLogger(__name__)

# HTTP Bearer token extractor
security = HTTPBearer()
security_optional = HTTPBearer(auto_error=False)

# Cache for JWKS keys
_jwks_cache: dict = {}
_jwks_cache_time: float = 0
JWKS_CACHE_TTL = 3600  # 1 hour


def _get_jwks_url() -> str:
    """Get the JWKS URL from the Supabase URL."""
    supabase_url = (settings.SUPABASE_URL or "").rstrip('/')
    return f"{supabase_url}/auth/v1/.well-known/jwks.json"


def _fetch_jwks() -> dict:
    """Fetch JWKS from Supabase with caching."""
    global _jwks_cache, _jwks_cache_time

    current_time = time.time()

    # Return cached if valid
    if _jwks_cache and (current_time - _jwks_cache_time) < JWKS_CACHE_TTL:
        return _jwks_cache

    if not settings.SUPABASE_URL:
        return {"keys": []}

    try:
        jwks_url = _get_jwks_url()
        response = httpx.get(jwks_url, timeout=10)
        response.raise_for_status()
        _jwks_cache = response.json()
        _jwks_cache_time = current_time
        logger.debug(f"Fetched JWKS from {jwks_url}")
        return _jwks_cache
    except (httpx.HTTPError, ValueError) as e:
        logger.warning(f"Failed to fetch JWKS: {e}")
        # Return cached even if expired, as fallback
        if _jwks_cache:
            return _jwks_cache
        return {"keys": []}


def _get_signing_key(token: str) -> tuple[str | dict, str]:
    """
    Get the appropriate signing key for a token.

    Returns:
        Tuple of (key, algorithm) to use for verification
    """
    # Decode header without verification to get algorithm and key ID
    try:
        unverified_header = jwt.get_unverified_header(token)
    except JWTError:
        # Fall back to HS256 if we can't read the header
        return settings.SUPABASE_JWT_SECRET, "HS256"

    alg = unverified_header.get("alg", "HS256")
    kid = unverified_header.get("kid")

    # If HS256, use the legacy secret
    if alg == "HS256":
        return settings.SUPABASE_JWT_SECRET, "HS256"

    # For ES256 or other algorithms, use JWKS
    if kid:
        for key in _fetch_jwks().get("keys", []):
            if key.get("kid") == kid:
                return key, alg

    # Fallback to HS256
    logger.warning(f"Could not find key for alg={alg}, kid={kid}, falling back to HS256")
    return settings.SUPABASE_JWT_SECRET, "HS256"


def verify_access_token(token: str) -> AuthUser:
    """
    Validate a Supabase access token and extract the user.

    Signature checks can be switched off with VERIFY_ACCESS_TOKENS=false;
    the claims are then read without verification.

    Raises:
        SessionRetrievalError: If the token is invalid, expired or malformed
    """
    try:
        if settings.VERIFY_ACCESS_TOKENS:
            signing_key, algorithm = _get_signing_key(token)
            payload = jwt.decode(
                token,
                signing_key,
                algorithms=[algorithm],
                audience="authenticated"
            )
        else:
            payload = jwt.get_unverified_claims(token)

    except ExpiredSignatureError as e:
        logger.warning("JWT token has expired")
        raise SessionRetrievalError("Token has expired") from e

    except JWTError as e:
        logger.warning(f"JWT validation failed: {e}")
        raise SessionRetrievalError(f"Invalid token: {str(e)}") from e

    user_id = payload.get("sub")
    if not user_id:
        logger.warning("JWT token missing 'sub' claim")
        raise SessionRetrievalError("Invalid token: missing user ID")

    try:
        user_uuid = UUID(user_id)
    except ValueError as e:
        logger.warning(f"Invalid UUID in token: {user_id}")
        raise SessionRetrievalError("Invalid token: malformed user ID") from e

    logger.debug(f"Authenticated user: {user_id}")
    return AuthUser(id=user_uuid, email=payload.get("email"))


# =============================================================================
# Session provider for dashboard routes
# =============================================================================

@dataclass
class BearerSession:
    """A verified session built from the request's bearer token."""
    access_token: str
    user: AuthUser


class BearerSessionProvider:
    """
    Session provider backed by the request's Authorization header.

    Plugs into SessionGate: no token means no session; a token that fails
    verification is a session retrieval error.
    """

    def __init__(self, token: Optional[str]):
        self._token = token
        self.session: Optional[BearerSession] = None

    def get_session(self) -> Optional[BearerSession]:
        if not self._token:
            return None
        self.session = BearerSession(
            access_token=self._token,
            user=verify_access_token(self._token),
        )
        return self.session

    @property
    def email(self) -> Optional[str]:
        return self.session.user.email if self.session else None


def get_session_provider(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security_optional)
) -> BearerSessionProvider:
    """Session provider for the current request (token may be absent)."""
    return BearerSessionProvider(credentials.credentials if credentials else None)


# =============================================================================
# Required user
# =============================================================================

async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security)
) -> AuthUser:
    """
    Extract and validate user from Supabase JWT token.

    Returns:
        AuthUser: The authenticated user

    Raises:
        HTTPException: 401 if token is invalid or expired

    Usage:
        @router.get("/protected")
        async def protected_route(user: AuthUser = Depends(get_current_user)):
            return {"user_id": user.id}
    """
    try:
        return verify_access_token(credentials.credentials)
    except SessionRetrievalError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=e.message,
            headers={"WWW-Authenticate": "Bearer"},
        )

