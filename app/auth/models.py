# =============================================================================
# app/auth/models.py - Authentication Models
# =============================================================================
# Pydantic models for authentication requests and responses.
# =============================================================================

from pydantic import BaseModel, Field
from uuid import UUID
from typing import Any, Literal, Optional


class AuthUser(BaseModel):
    """
    Authenticated user extracted from a Supabase JWT.

    This is the minimal user info available from the token itself,
    without querying the auth provider.
    """
    id: UUID
    email: Optional[str] = None

    class Config:
        frozen = True  # Make immutable


# =============================================================================
# Requests
# =============================================================================

class LoginRequest(BaseModel):
    """Email/password sign-in."""
    email: str
    password: str


class SignUpRequest(BaseModel):
    """Account creation."""
    email: str
    password: str
    confirm_password: str


class OtpSendRequest(BaseModel):
    """Request a one-time login code."""
    email: str


class OtpVerifyRequest(BaseModel):
    """Exchange a one-time code for a session."""
    email: str
    code: str
    otp_type: Literal["email", "signup"] = "email"


class PasswordResetRequest(BaseModel):
    """Request a password reset link."""
    email: str


class LogoutRequest(BaseModel):
    """Refresh token of the session to end (the access token comes from the header)."""
    refresh_token: Optional[str] = None


# =============================================================================
# Responses
# =============================================================================

class AuthSessionResponse(BaseModel):
    """Session issued by the auth provider."""
    access_token: str
    refresh_token: Optional[str] = None
    token_type: str = "bearer"
    expires_at: Optional[int] = None
    user_id: Optional[str] = None
    email: Optional[str] = None

    @classmethod
    def from_session(cls, session: Any) -> "AuthSessionResponse":
        """Build from a supabase Session object."""
        user = getattr(session, "user", None)
        user_id = getattr(user, "id", None)
        return cls(
            access_token=session.access_token,
            refresh_token=getattr(session, "refresh_token", None),
            token_type=getattr(session, "token_type", None) or "bearer",
            expires_at=getattr(session, "expires_at", None),
            user_id=str(user_id) if user_id else None,
            email=getattr(user, "email", None),
        )


class SignUpResponse(BaseModel):
    """
    Result of a sign-up.

    If `verification_required` is true there is no session yet; verify the
    emailed code with `otp_type` via POST /otp/verify.
    """
    session: Optional[AuthSessionResponse] = None
    verification_required: bool = False
    otp_type: Literal["email", "signup"] = "signup"


class MessageResponse(BaseModel):
    """Plain confirmation message."""
    message: str
    otp_type: Optional[Literal["email", "signup"]] = Field(
        default=None,
        description="Code type to send back to /otp/verify, when a code was sent"
    )
