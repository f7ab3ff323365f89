# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# API endpoints for the login screen: password sign-in, sign-up, one-time
# codes, password reset, sign-out, and token verification.
#
# Each request gets its own Supabase client (see app/dependencies.py).
# =============================================================================

import logging
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.security import HTTPAuthorizationCredentials

from app.auth.dependencies import get_current_user, security_optional
from app.auth.models import (
    AuthSessionResponse,
    AuthUser,
    LoginRequest,
    LogoutRequest,
    MessageResponse,
    OtpSendRequest,
    OtpVerifyRequest,
    PasswordResetRequest,
    SignUpRequest,
    SignUpResponse,
)
from app.config import settings
from app.dependencies import AuthServiceDep

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/login", response_model=AuthSessionResponse)
async def login(body: LoginRequest, auth: AuthServiceDep) -> AuthSessionResponse:
    """
    Sign in with email and password.

    Raises:
        400: Invalid email or missing password
        401: Wrong credentials or email not confirmed
    """
    session = auth.sign_in_with_password(body.email, body.password)
    logger.info(f"Password sign-in for {body.email}")
    return AuthSessionResponse.from_session(session)


@router.post("/signup", response_model=SignUpResponse)
async def signup(body: SignUpRequest, auth: AuthServiceDep) -> SignUpResponse:
    """
    Create an account.

    If email confirmation is required, no session is returned and the
    emailed code must be verified with otp_type "signup".
    """
    outcome = auth.sign_up(body.email, body.password, body.confirm_password)
    session = AuthSessionResponse.from_session(outcome.session) if outcome.session else None
    return SignUpResponse(
        session=session,
        verification_required=outcome.verification_required,
        otp_type=outcome.otp_type,
    )


@router.post("/otp/send", response_model=MessageResponse)
async def send_login_code(body: OtpSendRequest, auth: AuthServiceDep) -> MessageResponse:
    """Email a one-time login code to an existing account."""
    auth.send_login_code(body.email)
    return MessageResponse(message="Check your email for a login code.", otp_type="email")


@router.post("/otp/verify", response_model=AuthSessionResponse)
async def verify_login_code(body: OtpVerifyRequest, auth: AuthServiceDep) -> AuthSessionResponse:
    """Exchange a one-time code for a session."""
    session = auth.verify_code(body.email, body.code, body.otp_type)
    logger.info(f"Verified {body.otp_type} code for {body.email}")
    return AuthSessionResponse.from_session(session)


@router.post("/password/reset", response_model=MessageResponse)
async def reset_password(body: PasswordResetRequest, auth: AuthServiceDep) -> MessageResponse:
    """Send a password reset link if the account exists."""
    auth.reset_password(body.email, redirect_to=settings.PASSWORD_RESET_REDIRECT_URL)
    return MessageResponse(
        message="If an account exists for that email, you'll receive a password reset link shortly."
    )


@router.post("/logout", response_model=MessageResponse)
async def logout(
    auth: AuthServiceDep,
    body: Optional[LogoutRequest] = None,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security_optional),
) -> MessageResponse:
    """
    End the caller's session.

    Send the access token as a bearer header and the refresh token in the
    body to revoke the session with the provider.
    """
    access_token = credentials.credentials if credentials else None
    refresh_token = body.refresh_token if body else None
    auth.sign_out(access_token=access_token, refresh_token=refresh_token)
    return MessageResponse(message="Signed out.")


@router.get("/verify")
async def verify_token(
    user: AuthUser = Depends(get_current_user)
) -> dict:
    """
    Verify that the current token is valid.

    Useful for checking if a stored token is still valid.

    Raises:
        401: If token is invalid or expired
    """
    return {
        "valid": True,
        "user_id": str(user.id),
        "email": user.email
    }
