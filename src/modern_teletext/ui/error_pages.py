"""Teletext-styled error pages.

Error pages are ordinary pages flagged ``error_page`` so that keyboard
input is disabled on them. Each offers a red INDEX link back to page 100.
"""

from datetime import datetime
from typing import List, Optional

from ..models import InputMode, Page, PageLink, PageMeta
from .layout_engine import WIDTH, NavigationHint, render_single_column


ERROR_SOURCE = "error-handler"
INDEX_LINK = PageLink(label="INDEX", target_page="100", color="red")
RETURN_LINE = "Press 100 for main index"


def _error_page(page_id: str, title: str, banner: str, message: str,
                details: Optional[str] = None, action: Optional[str] = None) -> Page:
    content: List[str] = [banner.center(WIDTH).rstrip(), "", message]
    if details:
        content += ["", details]
    content.append("")
    if action:
        content.append(action)
    content.append(RETURN_LINE)

    now = datetime.now()
    rows = render_single_column(
        page_id,
        title,
        content,
        timestamp=now.strftime("%H:%M"),
        hints=[NavigationHint(text="RED=INDEX", color="red")],
    )
    return Page(
        id=page_id,
        title=title,
        rows=rows,
        links=[INDEX_LINK],
        meta=PageMeta(
            source=ERROR_SOURCE,
            last_updated=now,
            input_mode=InputMode.DISABLED,
            error_page=True,
            rendered_with_layout_engine=True,
        ),
    )


def create_not_found_page(page_id: str) -> Page:
    return _error_page(
        page_id,
        "PAGE NOT FOUND",
        "404",
        f"Page {page_id} could not be found.",
        "This page may not exist or is not yet implemented.",
    )


def create_invalid_input_page(input_text: str, expected: str, page_id: str = "100") -> Page:
    """Page explaining what was typed and what the page expected instead."""
    return _error_page(
        page_id,
        "INVALID INPUT",
        "X INPUT ERROR X",
        f'Invalid input: "{input_text}"',
        f"Expected: {expected}",
        "Press any key to continue",
    )


def create_offline_page(page_id: str) -> Page:
    return _error_page(
        page_id,
        "NETWORK ERROR",
        "! CONNECTION LOST !",
        "You appear to be offline. Please check your connection.",
        "Displaying cached content where available.",
        "Press R to retry",
    )


def create_generic_error_page(page_id: str, message: str = "An unexpected error occurred.") -> Page:
    return _error_page(
        page_id,
        "ERROR",
        "! ERROR !",
        message,
        "Please try again or return to the main index.",
        "Press R to retry",
    )
