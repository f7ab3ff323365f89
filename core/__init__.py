# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the dashboard's business logic:
# - models/: Pydantic schemas (session state, records, dashboard view)
# - services/: Session gate, data fetchers, dashboard assembly, auth
#
# Routing lives in app/; services here are shared by the API and the
# terminal client (scripts/dashboard_cli.py).
# =============================================================================
