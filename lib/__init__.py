# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - supabase_client.py: Supabase client factory for auth operations
# - rows.py: Data endpoint parsing, row classification and grouping
# - dates.py: Date formatting in the dashboard timezone
# - links.py: Opening dashboard links in a browser
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.dates import format_workshop_date
from lib.links import open_link
from lib.rows import (
    extract_rows,
    group_by_form,
    is_membership_row,
    is_workshop_row,
    safe_parse,
)

__all__ = [
    # Supabase
    "SupabaseClient",
    "SupabaseClientError",
    # Dates / links
    "format_workshop_date",
    "open_link",
    # Rows
    "extract_rows",
    "group_by_form",
    "is_membership_row",
    "is_workshop_row",
    "safe_parse",
]
