# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - Provides sample data endpoint rows and a mocked data endpoint
# =============================================================================

import os
import time
import uuid

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-jwt-secret-with-enough-length")
os.environ.setdefault("VERIFY_ACCESS_TOKENS", "true")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

import httpx
import pytest
from jose import jwt

from core.models.dashboard import DashboardLinks
from core.services.data_proxy import FetchConfig


TEST_BASE_URL = "https://test-project.supabase.co"
TEST_ENDPOINT = f"{TEST_BASE_URL}/functions/v1/mysql"


# =============================================================================
# Helpers
# =============================================================================

class FakeSession:
    """Stand-in for a supabase Session."""

    def __init__(self, access_token, refresh_token="refresh-token", email="member@example.com"):
        self.access_token = access_token
        self.refresh_token = refresh_token
        self.token_type = "bearer"
        self.expires_at = 1893456000
        self.user = FakeUser(email)


class FakeUser:
    def __init__(self, email):
        self.id = "3f0c1b8e-6a55-4c8e-9d0a-2b8f5f2f7c11"
        self.email = email


class FakeProvider:
    """
    Session provider returning a fixed session, or raising `error`.

    Counts get_session() calls so tests can check each fetcher resolves
    the session on its own.
    """

    def __init__(self, session=None, error=None):
        self.session = session
        self.error = error
        self.calls = 0

    def get_session(self):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.session


class RecordingHandler:
    """httpx.MockTransport handler that records requests and returns a fixed response."""

    def __init__(self, status_code=200, body="[]"):
        self.status_code = status_code
        self.body = body
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, text=self.body)


def make_token(email="member@example.com", expires_in=3600, secret=None, sub=None):
    """HS256 Supabase-style access token signed with the test secret."""
    now = int(time.time())
    claims = {
        "sub": sub or str(uuid.uuid4()),
        "email": email,
        "aud": "authenticated",
        "role": "authenticated",
        "iat": now,
        "exp": now + expires_in,
    }
    return jwt.encode(
        claims,
        secret or os.environ["SUPABASE_JWT_SECRET"],
        algorithm="HS256",
    )


def fetch_config_for(handler, base_url=TEST_BASE_URL) -> FetchConfig:
    return FetchConfig(base_url=base_url, transport=httpx.MockTransport(handler))


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def membership_row():
    """A membership row as returned by the data function."""
    return {
        "memberid": 4182,
        "memberstatus": "Active",
        "expirationdate": "2026-06-30",
        "autorenew": 1,
        "levelname": "Family",
        "workshop_name": None,
        "formid": None,
        "eventdate": None,
        "webpage_url": None,
        "start_time": None,
        "end_time": None,
    }


@pytest.fixture
def workshop_rows():
    """Two tickets for form 7 and one for form 12."""
    return [
        {
            "formid": 7,
            "workshop_name": "Intro to Beekeeping",
            "status": "pre-registered",
            "eventdate": "2026-01-03",
            "webpage_url": "https://schoolofranch.org/workshops/bees",
            "start_time": "09:00",
            "end_time": "15:00",
            "memberid": 4182,
        },
        {
            "formid": 7,
            "workshop_name": "Intro to Beekeeping",
            "status": "pre-registered",
            "eventdate": "2026-01-03",
            "webpage_url": "https://schoolofranch.org/workshops/bees",
            "start_time": "09:00",
            "end_time": "15:00",
            "memberid": 4182,
        },
        {
            "formid": 12,
            "workshop_name": "Fence Building",
            "status": "completed",
            "eventdate": "2025-11-15",
            "resolved_url": "https://schoolofranch.org/workshops/fences",
        },
    ]


@pytest.fixture
def mixed_rows(membership_row, workshop_rows):
    """Everything the data function returns for one member, plus a stray row."""
    return workshop_rows + [membership_row, {"note": "row with neither shape"}]


@pytest.fixture
def links():
    return DashboardLinks(
        calendar="https://schoolofranch.org/calendar",
        join="https://schoolofranch.org/join",
        contact="mailto:info@schoolofranch.org",
    )
