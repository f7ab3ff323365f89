# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the dashboard service:
# - test_rows.py / test_dates.py: Row handling and date formatting
# - test_session_gate.py / test_fetchers.py: Session-gated fetching
# - test_dashboard_service.py: Concurrent load and display shaping
# - test_auth_service.py: Sign-in, sign-up, codes, reset, sign-out
# - test_api.py: FastAPI endpoints
#
# Run tests with: poetry run pytest
# =============================================================================
