# =============================================================================
# lib/rows.py - Data Endpoint Row Handling
# =============================================================================
# The data proxy returns one untyped list mixing membership rows and
# workshop (ticket) rows. This module:
# - parses the response body and unwraps the envelope
# - classifies each row by which fields are present
# - projects rows onto the normalized record models
# - collapses workshop rows sharing a form id into one record
#
# Classification:
#   membership row = memberid present AND every workshop field absent
#   workshop row   = not a membership row AND formid present
# Rows matching neither are dropped.
# =============================================================================

from __future__ import annotations

import json
import logging
import re
from typing import Any, Iterable

from app.exceptions import ResponseFormatError
from core.models.records import MembershipRecord, WorkshopRecord

logger = logging.getLogger(__name__)

# Fields that only workshop rows carry
WORKSHOP_FIELDS = (
    "workshop_name",
    "formid",
    "eventdate",
    "webpage_url",
    "start_time",
    "end_time",
)

MEMBERSHIP_FIELDS = (
    "memberstatus",
    "expirationdate",
    "autorenew",
    "levelname",
    "memberid",
)

# Keys an object iterates in ascending numeric order ahead of other keys
_INDEX_KEY = re.compile(r"^(0|[1-9][0-9]*)$")
_MAX_INDEX_KEY = 2**32 - 1


# =============================================================================
# Parsing
# =============================================================================

def safe_parse(body: str) -> Any:
    """Parse a JSON body, returning None instead of raising."""
    try:
        return json.loads(body)
    except (ValueError, TypeError):
        return None


def parse_body(body: str) -> Any:
    """
    Parse the response body as JSON.

    Empty arrays and objects are valid; null, false, 0 and "" are not.

    Raises:
        ResponseFormatError: If the body is not JSON or parses to a falsy scalar
    """
    parsed = safe_parse(body)
    if not parsed and not isinstance(parsed, (list, dict)):
        raise ResponseFormatError("Response was not valid JSON")
    return parsed


def extract_rows(payload: Any) -> list[Any]:
    """
    Unwrap the row array from a parsed response.

    Accepts a bare array or an object with a `data` array.

    Raises:
        ResponseFormatError: For any other shape
    """
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict) and isinstance(payload.get("data"), list):
        return payload["data"]
    raise ResponseFormatError("JSON shape unexpected")


# =============================================================================
# Classification
# =============================================================================

def is_membership_row(row: Any) -> bool:
    """True if the row has a member id and none of the workshop fields."""
    if not isinstance(row, dict):
        return False
    has_member_id = row.get("memberid") is not None
    no_workshop_data = all(row.get(field) is None for field in WORKSHOP_FIELDS)
    return has_member_id and no_workshop_data


def is_workshop_row(row: Any) -> bool:
    """True if the row carries a form id and is not a membership row."""
    if not isinstance(row, dict):
        return False
    return row.get("formid") is not None and not is_membership_row(row)


# =============================================================================
# Projection
# =============================================================================

def to_membership_record(row: dict[str, Any]) -> MembershipRecord:
    """Project a membership row, defaulting missing fields to None."""
    return MembershipRecord(**{field: row.get(field) for field in MEMBERSHIP_FIELDS})


def to_workshop_record(row: dict[str, Any]) -> WorkshopRecord:
    """Project a workshop row. The details link prefers resolved_url."""
    return WorkshopRecord(
        formid=row["formid"],
        workshop_name=row.get("workshop_name"),
        status=row.get("status"),
        eventdate=row.get("eventdate"),
        start_time=row.get("start_time"),
        end_time=row.get("end_time"),
        webpage_url=row.get("webpage_url"),
        resolved_url=row.get("resolved_url") or row.get("webpage_url"),
    )


def membership_records(rows: Iterable[Any]) -> list[MembershipRecord]:
    """Filter and project membership rows."""
    return [to_membership_record(row) for row in rows if is_membership_row(row)]


def workshop_records(rows: Iterable[Any]) -> list[WorkshopRecord]:
    """Filter and project workshop rows (ungrouped)."""
    records = []
    for row in rows:
        if is_workshop_row(row):
            records.append(to_workshop_record(row))
        elif not is_membership_row(row):
            logger.debug(f"Dropping unclassified row: {row!r}")
    return records


def _is_index_key(key: str) -> bool:
    """True for canonical non-negative integer keys ("0", "7", "12", not "07")."""
    return bool(_INDEX_KEY.match(key)) and int(key) < _MAX_INDEX_KEY


def group_by_form(records: Iterable[WorkshopRecord]) -> list[WorkshopRecord]:
    """
    Collapse records sharing a form id into one record per form.

    Form ids are compared as text, so 7 and "7" are the same form. The
    first record for a form supplies the fields; `tickets` counts every
    record seen for it.

    Order: forms with integer ids come first in ascending numeric order,
    then the remaining forms in order of first appearance.

    Example:
        >>> grouped = group_by_form([WorkshopRecord(formid=12), WorkshopRecord(formid=7),
        ...                          WorkshopRecord(formid="7")])
        >>> [(r.formid, r.tickets) for r in grouped]
        [(7, 2), (12, 1)]
    """
    groups: dict[str, WorkshopRecord] = {}
    for record in records:
        key = str(record.formid)
        existing = groups.get(key)
        if existing is None:
            groups[key] = record.model_copy(update={"tickets": 1})
        else:
            groups[key] = existing.model_copy(update={"tickets": existing.tickets + 1})

    index_keys = sorted((k for k in groups if _is_index_key(k)), key=int)
    other_keys = [k for k in groups if not _is_index_key(k)]
    return [groups[k] for k in index_keys + other_keys]
