# =============================================================================
# tests/test_rows.py - Row Handling Tests
# =============================================================================
# Tests for lib/rows.py:
# - Body parsing and envelope unwrapping
# - Membership / workshop classification
# - Projection onto normalized records
# - Grouping workshop rows by form id
# =============================================================================

import pytest

from app.exceptions import ResponseFormatError
from core.models.records import MembershipRecord, WorkshopRecord
from lib.rows import (
    WORKSHOP_FIELDS,
    extract_rows,
    group_by_form,
    is_membership_row,
    is_workshop_row,
    membership_records,
    parse_body,
    safe_parse,
    to_membership_record,
    to_workshop_record,
    workshop_records,
)


# =============================================================================
# Parsing Tests
# =============================================================================

class TestParsing:
    """Tests for safe_parse and parse_body."""

    def test_safe_parse_valid(self):
        assert safe_parse('{"data": []}') == {"data": []}

    def test_safe_parse_invalid_returns_none(self):
        assert safe_parse("<html>oops</html>") is None

    def test_parse_body_rejects_non_json(self):
        with pytest.raises(ResponseFormatError) as exc_info:
            parse_body("not json")
        assert exc_info.value.message == "Response was not valid JSON"

    @pytest.mark.parametrize("body", ["null", "0", "false", '""'])
    def test_parse_body_rejects_falsy(self, body):
        with pytest.raises(ResponseFormatError):
            parse_body(body)

    def test_parse_body_accepts_empty_containers(self):
        """No rows is a valid answer; an empty object fails later on shape."""
        assert parse_body("[]") == []
        assert parse_body("{}") == {}


class TestExtractRows:
    """Tests for extract_rows envelope handling."""

    def test_bare_array(self):
        rows = [{"memberid": 1}]
        assert extract_rows(rows) is rows

    def test_data_envelope(self):
        rows = [{"formid": 3}]
        assert extract_rows({"data": rows}) is rows

    def test_empty_data_envelope(self):
        assert extract_rows({"data": []}) == []

    @pytest.mark.parametrize("payload", [
        {"rows": []},
        {"data": {"formid": 1}},
        {"data": None},
        "a string",
        42,
    ])
    def test_unexpected_shape(self, payload):
        with pytest.raises(ResponseFormatError) as exc_info:
            extract_rows(payload)
        assert exc_info.value.message == "JSON shape unexpected"


# =============================================================================
# Classification Tests
# =============================================================================

class TestClassification:
    """Tests for the row-kind discriminator."""

    def test_membership_row(self, membership_row):
        assert is_membership_row(membership_row)
        assert not is_workshop_row(membership_row)

    def test_membership_row_without_workshop_keys(self):
        """Absent keys count the same as null values."""
        assert is_membership_row({"memberid": "A-17", "memberstatus": "Active"})

    def test_missing_memberid_is_not_membership(self):
        assert not is_membership_row({"memberstatus": "Active"})

    @pytest.mark.parametrize("field", WORKSHOP_FIELDS)
    def test_any_workshop_field_disqualifies_membership(self, membership_row, field):
        row = dict(membership_row, **{field: "x"})
        assert not is_membership_row(row)

    def test_workshop_row(self, workshop_rows):
        for row in workshop_rows:
            assert is_workshop_row(row)
            assert not is_membership_row(row)

    def test_row_with_memberid_and_formid_is_workshop(self):
        row = {"memberid": 5, "formid": 9}
        assert is_workshop_row(row)
        assert not is_membership_row(row)

    def test_row_matching_neither(self):
        row = {"workshop_name": "Orphan", "memberid": None}
        assert not is_membership_row(row)
        assert not is_workshop_row(row)

    @pytest.mark.parametrize("row", [None, 3, "row", ["memberid"]])
    def test_non_object_rows_match_neither(self, row):
        assert not is_membership_row(row)
        assert not is_workshop_row(row)

    def test_every_row_lands_in_at_most_one_set(self, mixed_rows):
        for row in mixed_rows:
            assert not (is_membership_row(row) and is_workshop_row(row))


# =============================================================================
# Projection Tests
# =============================================================================

class TestProjection:
    """Tests for mapping rows onto normalized records."""

    def test_membership_record_fields(self, membership_row):
        record = to_membership_record(membership_row)

        assert isinstance(record, MembershipRecord)
        assert record.memberid == 4182
        assert record.memberstatus == "Active"
        assert record.expirationdate == "2026-06-30"
        assert record.autorenew == 1
        assert record.levelname == "Family"

    def test_membership_record_defaults_to_none(self):
        record = to_membership_record({"memberid": 9})

        assert record.memberid == 9
        assert record.memberstatus is None
        assert record.expirationdate is None
        assert record.autorenew is None
        assert record.levelname is None

    def test_workshop_record_uses_webpage_url_as_fallback(self, workshop_rows):
        record = to_workshop_record(workshop_rows[0])

        assert record.formid == 7
        assert record.workshop_name == "Intro to Beekeeping"
        assert record.resolved_url == "https://schoolofranch.org/workshops/bees"
        assert record.tickets == 1

    def test_workshop_record_prefers_resolved_url(self):
        record = to_workshop_record({
            "formid": 1,
            "webpage_url": "https://example.org/page",
            "resolved_url": "https://example.org/resolved",
        })
        assert record.resolved_url == "https://example.org/resolved"

    def test_numeric_text_fields_become_text(self):
        record = to_membership_record({"memberid": 1, "memberstatus": "Active", "levelname": 3})

        assert record.levelname == "3"
        assert record.memberstatus == "Active"

    def test_workshop_text_fields_accept_any_json_value(self):
        record = to_workshop_record({
            "formid": 8,
            "workshop_name": 2026,
            "status": True,
            "eventdate": 20260103.0,
            "start_time": 9.5,
            "webpage_url": ["https://example.org"],
        })

        assert record.workshop_name == "2026"
        assert record.status == "true"
        assert record.eventdate == "20260103"
        assert record.start_time == "9.5"
        assert record.webpage_url == '["https://example.org"]'

    def test_one_odd_row_does_not_sink_the_rest(self):
        records = workshop_records([
            {"formid": 7, "workshop_name": "Bees"},
            {"formid": 8, "workshop_name": 2026},
        ])
        assert [r.workshop_name for r in records] == ["Bees", "2026"]

    def test_membership_records_filters(self, mixed_rows):
        records = membership_records(mixed_rows)
        assert [r.memberid for r in records] == [4182]

    def test_workshop_records_drops_other_rows(self, mixed_rows):
        records = workshop_records(mixed_rows)
        assert [r.formid for r in records] == [7, 7, 12]


# =============================================================================
# Grouping Tests
# =============================================================================

class TestGroupByForm:
    """Tests for collapsing ticket rows by form id."""

    def test_two_rows_same_form(self):
        grouped = group_by_form([WorkshopRecord(formid=7), WorkshopRecord(formid=7)])

        assert len(grouped) == 1
        assert grouped[0].formid == 7
        assert grouped[0].tickets == 2

    def test_first_row_supplies_fields(self):
        grouped = group_by_form([
            WorkshopRecord(formid=7, workshop_name="First"),
            WorkshopRecord(formid=7, workshop_name="Second"),
        ])
        assert grouped[0].workshop_name == "First"

    def test_integer_ids_in_ascending_order(self, workshop_rows):
        grouped = group_by_form(workshop_records(list(reversed(workshop_rows))))
        assert [(r.formid, r.tickets) for r in grouped] == [(7, 2), (12, 1)]

    def test_numeric_and_text_ids_are_one_form(self):
        grouped = group_by_form([
            WorkshopRecord(formid="7", workshop_name="First"),
            WorkshopRecord(formid=7, workshop_name="Second"),
        ])

        assert len(grouped) == 1
        assert grouped[0].formid == "7"
        assert grouped[0].workshop_name == "First"
        assert grouped[0].tickets == 2

    def test_other_ids_follow_in_first_appearance_order(self):
        grouped = group_by_form([
            WorkshopRecord(formid="spring-b"),
            WorkshopRecord(formid=30),
            WorkshopRecord(formid="spring-a"),
            WorkshopRecord(formid="07"),
            WorkshopRecord(formid=4),
        ])
        assert [r.formid for r in grouped] == [4, 30, "spring-b", "spring-a", "07"]

    def test_does_not_mutate_input(self):
        records = [WorkshopRecord(formid=1), WorkshopRecord(formid=1)]
        group_by_form(records)
        assert [r.tickets for r in records] == [1, 1]

    def test_empty(self):
        assert group_by_form([]) == []
