# =============================================================================
# core/models/session.py - Session State
# =============================================================================
# The session gate reports one of three states:
# - Loading: the session has not been resolved yet
# - Unauthenticated: resolved, nobody is signed in
# - Authenticated: resolved, carries the bearer token for the data endpoint
#
# The states are separate models joined by a discriminated union on `status`,
# so callers match on the variant instead of checking None vs. missing.
# =============================================================================

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field


class SessionStatus(str, Enum):
    """Discriminator values for SessionState."""
    LOADING = "loading"
    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATED = "authenticated"


class Loading(BaseModel):
    """Session not resolved yet."""

    status: Literal[SessionStatus.LOADING] = SessionStatus.LOADING

    class Config:
        frozen = True

    @property
    def is_resolved(self) -> bool:
        return False


class Unauthenticated(BaseModel):
    """Session resolved and absent. Not an error."""

    status: Literal[SessionStatus.UNAUTHENTICATED] = SessionStatus.UNAUTHENTICATED

    class Config:
        frozen = True

    @property
    def is_resolved(self) -> bool:
        return True


class Authenticated(BaseModel):
    """Session resolved and present."""

    status: Literal[SessionStatus.AUTHENTICATED] = SessionStatus.AUTHENTICATED

    # Bearer token sent to the data endpoint
    token: str = Field(
        ...,
        min_length=1,
        description="Access token from the auth provider"
    )

    class Config:
        frozen = True

    @property
    def is_resolved(self) -> bool:
        return True


SessionState = Annotated[
    Union[Loading, Unauthenticated, Authenticated],
    Field(discriminator="status"),
]
