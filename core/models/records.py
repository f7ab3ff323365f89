# =============================================================================
# core/models/records.py - Normalized Dashboard Records
# =============================================================================
# The data endpoint returns untyped rows. After classification each row is
# projected onto one of these stable shapes:
# - MembershipRecord: membership status for the signed-in member
# - WorkshopRecord: one workshop registration, with a ticket count after
#   rows sharing a form id are collapsed
#
# FetchResult is what a fetcher publishes: data, loading flag, error text.
# =============================================================================

import json
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field, field_validator


def as_text(value: Any) -> str | None:
    """
    Render any JSON value as display text.

    Rows are untyped, so a text column can arrive as a number, a boolean or
    even a nested value. None stays None.
    """
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (int, float)):
        return str(value)
    return json.dumps(value)


class MembershipRecord(BaseModel):
    """
    Normalized membership row.

    Every field is nullable; missing fields in the source row become None.

    Example:
        {
            "memberstatus": "Active",
            "expirationdate": "2026-06-30",
            "autorenew": 1,
            "levelname": "Family",
            "memberid": 4182
        }
    """

    memberstatus: str | None = None
    expirationdate: str | None = None
    # The backend sends 0/1, "0"/"1" or a boolean depending on the driver
    autorenew: bool | int | str | None = None
    levelname: str | None = None
    memberid: int | str | None = None

    @field_validator("memberstatus", "expirationdate", "levelname", mode="before")
    @classmethod
    def coerce_text(cls, value: Any) -> str | None:
        return as_text(value)


class WorkshopRecord(BaseModel):
    """
    Normalized workshop (ticket) row.

    Rows sharing a form id are grouped into a single record; `tickets`
    counts how many rows were collapsed into it.

    Example:
        {
            "formid": 7,
            "workshop_name": "Intro to Beekeeping",
            "status": "pre-registered",
            "eventdate": "2026-01-03",
            "resolved_url": "https://schoolofranch.org/workshops/bees",
            "tickets": 2
        }
    """

    formid: int | str = Field(
        ...,
        description="Registration form identifier (grouping key)"
    )

    workshop_name: str | None = None
    status: str | None = None
    eventdate: str | None = None
    start_time: str | None = None
    end_time: str | None = None
    webpage_url: str | None = None

    # Details link shown to the user; falls back to webpage_url
    resolved_url: str | None = None

    tickets: int = Field(
        default=1,
        ge=1,
        description="Number of ticket rows sharing this form id"
    )

    @field_validator(
        "workshop_name",
        "status",
        "eventdate",
        "start_time",
        "end_time",
        "webpage_url",
        "resolved_url",
        mode="before",
    )
    @classmethod
    def coerce_text(cls, value: Any) -> str | None:
        return as_text(value)


T = TypeVar("T")


class FetchResult(BaseModel, Generic[T]):
    """
    State published by a dashboard fetcher.

    `is_loading` starts True and is cleared when the fetch finishes on
    any path. `error` is set only for real failures; an unauthenticated
    caller gets an empty `data` list and no error.
    """

    data: list[T] = Field(default_factory=list)
    is_loading: bool = True
    error: str | None = None
