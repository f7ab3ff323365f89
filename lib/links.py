# =============================================================================
# lib/links.py - Link Opener
# =============================================================================
# Opens dashboard links (workshop details, calendar, join, contact) in the
# user's browser. Used by the terminal client; the API only returns URLs.
# =============================================================================

import logging
import webbrowser

logger = logging.getLogger(__name__)


def open_link(url: str) -> None:
    """
    Open a URL in a new browser tab.

    The browser's return value is not used; a browser that cannot be
    launched is only logged.
    """
    logger.debug(f"Opening link: {url}")
    if not webbrowser.open_new_tab(url):
        logger.warning(f"No browser available to open {url}")
