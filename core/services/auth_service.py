# =============================================================================
# core/services/auth_service.py - Auth Operations
# =============================================================================
# Sign-in, sign-up, one-time codes, password reset and sign-out against
# Supabase Auth. Input is validated here before the provider is called, and
# provider failures are turned into messages a member can act on.
#
# The service wraps one Supabase client; the API creates a fresh client per
# request (see lib/supabase_client.py).
# =============================================================================

import logging
import re
from dataclasses import dataclass
from typing import Any, Literal

from app.exceptions import AuthProviderError, AuthValidationError

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

MIN_PASSWORD_LENGTH = 6

OtpType = Literal["email", "signup"]


def is_valid_email(value: str) -> bool:
    return bool(EMAIL_PATTERN.match(value or ""))


def _provider_message(exc: Exception) -> str:
    """Best message from a supabase auth error."""
    return getattr(exc, "message", None) or str(exc) or "Authentication failed"


@dataclass
class SignUpOutcome:
    """
    Result of a sign-up.

    When the project requires email confirmation no session is issued;
    the caller must verify the code sent by email using `otp_type`.
    """
    session: Any = None
    verification_required: bool = False
    otp_type: OtpType = "signup"


class AuthService:
    """
    Auth operations for one Supabase client.

    Example:
        auth = AuthService(SupabaseClient.create_client(persist_session=False))
        session = auth.sign_in_with_password("member@example.com", "hunter22")
    """

    def __init__(self, client: Any):
        self.client = client

    # -------------------------------------------------------------------------
    # Session
    # -------------------------------------------------------------------------

    def get_session(self) -> Any:
        """Current session, or None if nobody is signed in."""
        return self.client.auth.get_session()

    def get_user_email(self, token: str | None = None) -> str | None:
        """Email of the user owning `token` (or the current session)."""
        try:
            response = self.client.auth.get_user(token) if token else self.client.auth.get_user()
        except Exception as e:
            logger.warning(f"Could not fetch user: {_provider_message(e)}")
            return None
        user = getattr(response, "user", None)
        return getattr(user, "email", None)

    def sign_out(self, access_token: str | None = None, refresh_token: str | None = None) -> None:
        """
        End the session.

        With both tokens the session is restored on this client first, which
        is how the API signs out a caller; otherwise the client's own session
        is ended.
        """
        try:
            if access_token and refresh_token:
                self.client.auth.set_session(access_token, refresh_token)
            self.client.auth.sign_out()
        except Exception as e:
            logger.warning(f"Sign-out failed: {_provider_message(e)}")
            raise AuthProviderError(_provider_message(e), operation="sign_out") from e
        logger.info("Signed out")

    # -------------------------------------------------------------------------
    # Password sign-in / sign-up
    # -------------------------------------------------------------------------

    def sign_in_with_password(self, email: str, password: str) -> Any:
        """
        Sign in with email and password.

        Returns:
            The new session

        Raises:
            AuthValidationError: Invalid email or empty password
            AuthProviderError: Provider rejected the credentials
        """
        if not is_valid_email(email):
            raise AuthValidationError("Please enter a valid email address.", field="email")
        if not password:
            raise AuthValidationError("Please enter your password.", field="password")

        try:
            response = self.client.auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        except Exception as e:
            message = _provider_message(e)
            logger.warning(f"Password sign-in failed for {email}: {message}")
            if "email not confirmed" in message.lower():
                message = (
                    "Please verify your email first. Check your inbox for a "
                    "confirmation email or code."
                )
            raise AuthProviderError(message, operation="sign_in") from e

        return self._require_session(response, operation="sign_in")

    def sign_up(self, email: str, password: str, confirm_password: str) -> SignUpOutcome:
        """
        Create an account.

        Raises:
            AuthValidationError: Invalid email, short password, or mismatch
            AuthProviderError: Provider rejected the sign-up
        """
        if not is_valid_email(email):
            raise AuthValidationError("Please enter a valid email address.", field="email")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise AuthValidationError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters long.",
                field="password",
            )
        if password != confirm_password:
            raise AuthValidationError("Passwords do not match.", field="confirm_password")

        try:
            response = self.client.auth.sign_up({"email": email, "password": password})
        except Exception as e:
            logger.warning(f"Sign-up failed for {email}: {_provider_message(e)}")
            raise AuthProviderError(_provider_message(e), operation="sign_up") from e

        session = getattr(response, "session", None)
        if session is not None:
            return SignUpOutcome(session=session)

        logger.info(f"Sign-up for {email} needs email verification")
        return SignUpOutcome(verification_required=True, otp_type="signup")

    # -------------------------------------------------------------------------
    # One-time codes
    # -------------------------------------------------------------------------

    def send_login_code(self, email: str) -> None:
        """
        Email a one-time login code. Never creates a new user.

        Raises:
            AuthValidationError: Invalid email
            AuthProviderError: Code could not be sent
        """
        if not is_valid_email(email):
            raise AuthValidationError("Please enter a valid email address.", field="email")

        try:
            self.client.auth.sign_in_with_otp(
                {"email": email, "options": {"should_create_user": False}}
            )
        except Exception as e:
            logger.warning(f"Sending login code to {email} failed: {_provider_message(e)}")
            raise AuthProviderError(
                "We couldn't send a login code for this email. Check that you "
                "typed it correctly or create an account.",
                operation="send_otp",
            ) from e

    def verify_code(self, email: str, code: str, otp_type: OtpType = "email") -> Any:
        """
        Exchange an emailed code for a session.

        Args:
            email: The address the code was sent to
            code: The code from the email
            otp_type: "email" for login codes, "signup" for sign-up confirmation
        """
        if not code or not code.strip():
            raise AuthValidationError("Enter the 6-digit code from your email.", field="code")
        if otp_type not in ("email", "signup"):
            raise AuthValidationError(f"Unsupported code type: {otp_type}", field="otp_type")

        try:
            response = self.client.auth.verify_otp(
                {"email": email, "token": code.strip(), "type": otp_type}
            )
        except Exception as e:
            logger.warning(f"Code verification failed for {email}: {_provider_message(e)}")
            raise AuthProviderError(_provider_message(e), operation="verify_otp") from e

        return self._require_session(response, operation="verify_otp")

    # -------------------------------------------------------------------------
    # Password reset
    # -------------------------------------------------------------------------

    def reset_password(self, email: str, redirect_to: str) -> None:
        """
        Send a password reset link.

        The provider does not reveal whether the account exists.
        """
        if not is_valid_email(email):
            raise AuthValidationError(
                "Enter your email first to reset your password.", field="email"
            )

        try:
            self.client.auth.reset_password_for_email(email, {"redirect_to": redirect_to})
        except Exception as e:
            logger.warning(f"Password reset for {email} failed: {_provider_message(e)}")
            raise AuthProviderError(_provider_message(e), operation="reset_password") from e

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def _require_session(response: Any, operation: str) -> Any:
        session = getattr(response, "session", None)
        if session is None:
            raise AuthProviderError("No session was returned", operation=operation)
        return session
