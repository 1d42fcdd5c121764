"""
Page Renderer - lays pages out on the grid before display.

Pages fetched from a store may carry raw ``content`` or rows that were
never fitted to the grid. The renderer runs them through the layout
engine with a header, a column layout chosen by page range and footer
hints, and marks the result so it is not laid out twice.
"""

import logging
from typing import List, Optional

from ..logging_config import page_context
from ..models import Page
from ..navigation.hints import generate_navigation_hints
from .layout_engine import (
    FOOTER_HEIGHT,
    HEADER_HEIGHT,
    HEIGHT,
    WIDTH,
    render_multi_column,
    render_single_column,
    validate_output,
)


logger = logging.getLogger(__name__)

INDEX_COLUMNS = 2


def determine_column_count(page: Page) -> int:
    """The index page uses two columns; everything else reads best in one."""
    if page.base_number == 100:
        return INDEX_COLUMNS
    return 1


def extract_page_content(page: Page) -> List[str]:
    """
    Content lines of a page, without header and footer.

    Raw ``content`` wins when present. Otherwise the first and last two
    rows are assumed to be header and footer, and blank rows are trimmed
    from both ends of what remains.
    """
    if page.content is not None:
        if isinstance(page.content, str):
            return page.content.split("\n")
        return list(page.content)

    rows = page.rows
    if not rows:
        return []

    end = max(len(rows) - FOOTER_HEIGHT, HEADER_HEIGHT)
    content = rows[HEADER_HEIGHT:end]

    start = 0
    stop = len(content)
    while start < stop and not content[start].strip():
        start += 1
    while stop > start and not content[stop - 1].strip():
        stop -= 1
    return [row.rstrip() for row in content[start:stop]]


def should_use_layout_engine(page: Page) -> bool:
    return not page.is_pre_rendered()


def _timestamp(page: Page) -> Optional[str]:
    if page.meta.last_updated is None:
        return None
    return page.meta.last_updated.strftime("%H:%M")


def render_page_with_layout_engine(page: Page,
                                   force_column_count: Optional[int] = None,
                                   can_go_back: bool = False) -> Page:
    """
    Lay a page out on the grid.

    Args:
        page: Page to render
        force_column_count: Column count to use instead of the page-range default
        can_go_back: Passed to the hint generator for the back hint

    Returns:
        A copy of the page with HEIGHT rows and ``rendered_with_layout_engine`` set
    """
    columns = force_column_count if force_column_count is not None else determine_column_count(page)
    content = extract_page_content(page)
    hints = generate_navigation_hints(page, can_go_back=can_go_back)
    timestamp = _timestamp(page)

    if columns <= 1:
        rows = render_single_column(page.id, page.title, content, timestamp, hints)
    else:
        rows = render_multi_column(page.id, page.title, content, columns, timestamp, hints)

    result = validate_output(rows)
    if not result.valid:
        for error in result.errors:
            logger.warning(f"Layout problem: {error}", extra=page_context(page.id))

    logger.debug(f"Rendered in {columns} column(s), {HEIGHT}x{WIDTH}", extra=page_context(page.id))
    meta = page.meta.model_copy(update={"rendered_with_layout_engine": True})
    return page.model_copy(update={"rows": rows, "meta": meta})


class PageRenderer:
    """Applies the layout engine to pages that have not been laid out yet."""

    def render(self, page: Page,
               use_layout_engine: Optional[bool] = None,
               force_column_count: Optional[int] = None,
               can_go_back: bool = False) -> Page:
        use_engine = use_layout_engine if use_layout_engine is not None else should_use_layout_engine(page)
        if not use_engine:
            return page
        return render_page_with_layout_engine(page, force_column_count, can_go_back)

    def get_column_count(self, page: Page) -> int:
        return determine_column_count(page)


page_renderer = PageRenderer()
