# =============================================================================
# core/services/session_gate.py - Session Gate
# =============================================================================
# Turns "whatever the auth provider says about the current session" into a
# SessionState the fetchers can act on.
#
# A provider is any object with get_session() returning something that has an
# access_token (or None when nobody is signed in). get_session() may be sync
# or async. The Supabase auth client (client.auth) qualifies, and so does the
# request-scoped BearerSessionProvider in app/auth/dependencies.py.
#
# If the provider also has on_auth_state_change(callback), watch() keeps the
# gate's state current as sessions are issued, refreshed and destroyed.
# =============================================================================

from __future__ import annotations

import inspect
import logging
from typing import Any, Protocol

from app.exceptions import SessionRetrievalError
from core.models.session import Authenticated, Loading, SessionState, Unauthenticated

logger = logging.getLogger(__name__)


class SessionProvider(Protocol):
    """Anything that can report the current session."""

    def get_session(self) -> Any:
        ...


def state_from_session(session: Any) -> SessionState:
    """
    Map a provider session to a resolved SessionState.

    Accepts provider objects (attribute access) and plain dicts.
    A missing session or an empty token is Unauthenticated.
    """
    if session is None:
        return Unauthenticated()

    if isinstance(session, dict):
        token = session.get("access_token")
    else:
        token = getattr(session, "access_token", None)

    if not token:
        return Unauthenticated()
    return Authenticated(token=token)


class SessionGate:
    """
    Resolves and tracks the current session.

    `state` is Loading until the first resolve() or pushed auth event.

    Example:
        gate = SessionGate(SupabaseClient.get_client().auth)
        state = await gate.resolve()
        if isinstance(state, Authenticated):
            headers = {"Authorization": f"Bearer {state.token}"}
    """

    def __init__(self, provider: SessionProvider):
        self._provider = provider
        self._subscription: Any = None
        self.state: SessionState = Loading()

    async def resolve(self) -> SessionState:
        """
        Ask the provider for the current session.

        Returns:
            Unauthenticated or Authenticated

        Raises:
            SessionRetrievalError: If the provider call itself fails
        """
        try:
            session = self._provider.get_session()
            if inspect.isawaitable(session):
                session = await session
        except SessionRetrievalError:
            raise
        except Exception as e:
            message = getattr(e, "message", None) or str(e) or "Session retrieval failed"
            logger.error(f"Session retrieval failed: {message}")
            raise SessionRetrievalError(message) from e

        self.state = state_from_session(session)
        return self.state

    # -------------------------------------------------------------------------
    # Auth state feed
    # -------------------------------------------------------------------------

    def watch(self) -> bool:
        """
        Subscribe to the provider's auth-state-change feed.

        Returns:
            True if the provider supports the feed and we subscribed
        """
        subscribe = getattr(self._provider, "on_auth_state_change", None)
        if subscribe is None or self._subscription is not None:
            return self._subscription is not None

        self._subscription = subscribe(self._on_auth_event)
        logger.debug("Subscribed to auth state changes")
        return True

    def _on_auth_event(self, event: Any, session: Any) -> None:
        self.state = state_from_session(session)
        logger.info(f"Auth state changed ({event}): {self.state.status.value}")

    def close(self) -> None:
        """Unsubscribe from the auth-state-change feed, if subscribed."""
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None
