# =============================================================================
# tests/test_models.py - Pydantic Model Tests
# =============================================================================
# Unit tests for the Pydantic models to ensure:
# - Valid data is accepted and parsed correctly
# - Invalid data raises ValidationError
# - Models serialize to JSON properly
# - Default values work as expected
#
# Run with: poetry run pytest tests/test_models.py -v
# =============================================================================

import pytest
from pydantic import TypeAdapter, ValidationError

from core.models import (
    Authenticated,
    DashboardLinks,
    DashboardView,
    FetchResult,
    Loading,
    MembershipRecord,
    MembershipSection,
    SessionState,
    SessionStatus,
    Unauthenticated,
    WorkshopRecord,
    WorkshopSection,
)


# =============================================================================
# Session State Tests
# =============================================================================

class TestSessionState:
    """Tests for the SessionState union."""

    def test_discriminator_selects_variant(self):
        adapter = TypeAdapter(SessionState)

        assert isinstance(adapter.validate_python({"status": "loading"}), Loading)
        assert isinstance(adapter.validate_python({"status": "unauthenticated"}), Unauthenticated)

        state = adapter.validate_python({"status": "authenticated", "token": "abc"})
        assert isinstance(state, Authenticated)
        assert state.token == "abc"

    def test_unknown_status_rejected(self):
        with pytest.raises(ValidationError):
            TypeAdapter(SessionState).validate_python({"status": "expired"})

    def test_authenticated_requires_token(self):
        with pytest.raises(ValidationError):
            Authenticated()

        with pytest.raises(ValidationError):
            Authenticated(token="")

    def test_states_are_frozen(self):
        state = Authenticated(token="abc")
        with pytest.raises(ValidationError):
            state.token = "other"

    def test_is_resolved(self):
        assert not Loading().is_resolved
        assert Unauthenticated().is_resolved
        assert Authenticated(token="abc").is_resolved

    def test_serializes_status(self):
        assert Unauthenticated().model_dump(mode="json") == {"status": "unauthenticated"}
        assert Loading().status == SessionStatus.LOADING


# =============================================================================
# Record Tests
# =============================================================================

class TestRecords:
    """Tests for the normalized record models."""

    def test_workshop_requires_formid(self):
        with pytest.raises(ValidationError):
            WorkshopRecord()

    def test_workshop_ticket_default(self):
        record = WorkshopRecord(formid="F-12")
        assert record.formid == "F-12"
        assert record.tickets == 1
        assert record.resolved_url is None

    def test_workshop_tickets_positive(self):
        with pytest.raises(ValidationError):
            WorkshopRecord(formid=1, tickets=0)

    def test_membership_all_optional(self):
        record = MembershipRecord()
        assert record.model_dump() == {
            "memberstatus": None,
            "expirationdate": None,
            "autorenew": None,
            "levelname": None,
            "memberid": None,
        }

    @pytest.mark.parametrize("value", [True, 0, "1"])
    def test_membership_autorenew_shapes(self, value):
        assert MembershipRecord(autorenew=value).autorenew == value


class TestFetchResult:
    """Tests for FetchResult defaults."""

    def test_defaults(self):
        result = FetchResult[WorkshopRecord]()
        assert result.data == []
        assert result.is_loading is True
        assert result.error is None

    def test_parametrized_validates_items(self):
        result = FetchResult[WorkshopRecord](data=[{"formid": 3}], is_loading=False)
        assert isinstance(result.data[0], WorkshopRecord)

    def test_json(self):
        result = FetchResult[MembershipRecord](is_loading=False, error="HTTP 500: oops")
        assert result.model_dump(mode="json") == {
            "data": [],
            "is_loading": False,
            "error": "HTTP 500: oops",
        }


# =============================================================================
# Dashboard View Tests
# =============================================================================

class TestDashboardView:
    """Tests for the dashboard payload."""

    def test_minimal_view(self, links):
        view = DashboardView(
            workshops=WorkshopSection(),
            membership=MembershipSection(join_url=links.join),
            links=links,
        )

        data = view.model_dump(mode="json")
        assert data["email"] is None
        assert data["workshops"] == {"items": [], "is_loading": False, "error": None}
        assert data["membership"]["card"] is None
        assert data["links"]["contact"] == "mailto:info@schoolofranch.org"

    def test_links_required(self):
        with pytest.raises(ValidationError):
            DashboardLinks(calendar="https://schoolofranch.org/calendar")
