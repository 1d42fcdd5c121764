"""
Layout Engine - deterministic text layout into the fixed teletext grid.

Every rendered page is exactly HEIGHT rows of exactly WIDTH characters.
Header and footer take two rows each, leaving HEIGHT - 4 rows of content.

These functions never raise on odd input. Oversized content is truncated
and short content is padded, so the engine acts as a formatting safety net
rather than a validator of caller correctness.

Content is measured in plain characters. Colour markup or wide glyphs must
be stripped by the presentation layer before text reaches this module.
"""

import math
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Union


WIDTH = 40
HEIGHT = 24

HEADER_HEIGHT = 2
FOOTER_HEIGHT = 2
CONTENT_HEIGHT = HEIGHT - HEADER_HEIGHT - FOOTER_HEIGHT

PAGE_NUMBER_FIELD = 8
TIMESTAMP_FIELD = 8
DEFAULT_GUTTER = 2

BLANK_ROW = " " * WIDTH

Content = Union[str, Sequence[str]]


@dataclass(frozen=True)
class NavigationHint:
    """A short footer hint, optionally tied to a coloured key."""
    text: str
    color: Optional[str] = None


@dataclass
class ValidationResult:
    """Outcome of checking a grid against the fixed dimensions."""
    valid: bool
    errors: List[str] = field(default_factory=list)


def wrap_text(text: str, width: int = WIDTH) -> List[str]:
    """
    Wrap text at word boundaries.

    Explicit line breaks start a new paragraph and blank lines are kept as
    empty strings. Leading spaces are kept, so pre-indented lines survive.
    A word longer than ``width`` is split into ``width``-sized chunks.

    Args:
        text: Text to wrap
        width: Maximum characters per line

    Returns:
        Wrapped lines; an empty list for empty input
    """
    if not text or width < 1:
        return []

    lines: List[str] = []
    for paragraph in text.split("\n"):
        if not paragraph:
            lines.append("")
            continue

        # None until the line has a first word; leading spaces count as words
        current: Optional[str] = None
        for word in paragraph.split(" "):
            if len(word) > width:
                if current and current.strip():
                    lines.append(current.rstrip())
                current = None
                for start in range(0, len(word), width):
                    lines.append(word[start:start + width])
                continue

            candidate = word if current is None else f"{current} {word}"
            if len(candidate) <= width:
                current = candidate
            else:
                if current and current.strip():
                    lines.append(current)
                current = word

        if current:
            lines.append(current)

    return lines


def pad_text(text: str, width: int = WIDTH, align: str = "left") -> str:
    """
    Pad or truncate text to exactly ``width`` characters.

    Truncation drops the tail without an ellipsis. ``align`` is one of
    ``left``, ``right`` or ``center``; centering puts the odd space on
    the right.
    """
    width = max(width, 0)
    if len(text) >= width:
        return text[:width]

    padding = width - len(text)
    if align == "center":
        left = padding // 2
        return " " * left + text + " " * (padding - left)
    if align == "right":
        return " " * padding + text
    return text + " " * padding


def truncate_text(text: str, max_length: int = WIDTH, ellipsis: str = "...") -> str:
    """Shorten text to ``max_length`` characters, ending with ``ellipsis``."""
    max_length = max(max_length, 0)
    if len(text) <= max_length:
        return text

    ellipsis_length = min(len(ellipsis), max_length)
    content_length = max_length - ellipsis_length
    if content_length <= 0:
        return ellipsis[:max_length]
    return text[:content_length] + ellipsis[:ellipsis_length]


def validate_output(rows: Sequence[str]) -> ValidationResult:
    """Check that rows form an exact HEIGHT x WIDTH grid."""
    errors: List[str] = []

    if len(rows) != HEIGHT:
        errors.append(f"Invalid row count: expected {HEIGHT}, got {len(rows)}")

    for index, row in enumerate(rows):
        if len(row) != WIDTH:
            errors.append(
                f"Row {index} has invalid width: expected {WIDTH}, got {len(row)}"
            )

    return ValidationResult(valid=not errors, errors=errors)


def normalize_output(rows: Sequence[str]) -> List[str]:
    """Force rows into an exact HEIGHT x WIDTH grid by padding or cutting."""
    normalized = [pad_text(row, WIDTH, "left") for row in list(rows)[:HEIGHT]]
    while len(normalized) < HEIGHT:
        normalized.append(BLANK_ROW)
    return normalized


def render_header(page_number: str, title: str, timestamp: Optional[str] = None) -> List[str]:
    """
    Render the two header rows.

    Row one holds the page number in an 8-column field on the left, the
    title centered in the middle and the timestamp right-justified in an
    8-column field. Row two is a blank separator.
    """
    center_width = WIDTH - PAGE_NUMBER_FIELD - TIMESTAMP_FIELD
    number_field = pad_text(page_number, PAGE_NUMBER_FIELD, "left")
    title_field = pad_text(truncate_text(title, center_width), center_width, "center")
    time_field = pad_text(timestamp or "", TIMESTAMP_FIELD, "right")
    return [number_field + title_field + time_field, BLANK_ROW]


def render_footer(hints: Sequence[NavigationHint]) -> List[str]:
    """Render the two footer rows: a blank separator, then the hints centered."""
    if not hints:
        return [BLANK_ROW, BLANK_ROW]

    hints_text = "  ".join(hint.text for hint in hints)
    return [BLANK_ROW, pad_text(truncate_text(hints_text, WIDTH), WIDTH, "center")]


def calculate_column_widths(total_width: int = WIDTH, columns: int = 1,
                            gutter: int = DEFAULT_GUTTER) -> List[int]:
    """
    Split ``total_width`` into ``columns`` columns separated by gutters.

    Columns share the space evenly; any remainder goes to the last one.
    Fewer than two columns yields a single full-width column.
    """
    if columns <= 1:
        return [total_width]

    available = total_width - gutter * (columns - 1)
    base = available // columns
    widths = [base] * columns
    widths[-1] += available - base * columns
    return widths


def flow_text_to_columns(lines: Sequence[str], column_widths: Sequence[int]) -> List[List[str]]:
    """
    Distribute lines over columns in contiguous chunks.

    Each column receives ``ceil(len(lines) / columns)`` lines (the last may
    get fewer) and every line is re-wrapped to its column's width.
    """
    column_count = len(column_widths)
    if column_count == 0:
        return []
    if column_count == 1:
        return [list(lines)]

    per_column = math.ceil(len(lines) / column_count)
    columns: List[List[str]] = []
    for index, width in enumerate(column_widths):
        chunk = lines[index * per_column:(index + 1) * per_column]
        wrapped: List[str] = []
        for line in chunk:
            wrapped.extend(wrap_text(line, width) or [""])
        columns.append(wrapped)
    return columns


def merge_columns(columns: Sequence[Sequence[str]], column_widths: Sequence[int],
                  gutter: int = DEFAULT_GUTTER) -> List[str]:
    """Join columns side by side, one output row per row of the tallest column."""
    if not columns:
        return []

    gutter_text = " " * max(gutter, 0)
    row_count = max(len(column) for column in columns)
    merged: List[str] = []
    for row in range(row_count):
        cells = []
        for index, column in enumerate(columns):
            width = column_widths[index] if index < len(column_widths) else 0
            cell = column[row] if row < len(column) else ""
            cells.append(pad_text(cell, width, "left"))
        merged.append(gutter_text.join(cells))
    return merged


def _content_lines(content: Content) -> List[str]:
    if isinstance(content, str):
        return wrap_text(content, WIDTH)
    lines: List[str] = []
    for line in content:
        lines.extend(wrap_text(line, WIDTH) or [""])
    return lines


def _assemble(header: List[str], body: List[str], footer: List[str]) -> List[str]:
    rows = header + [pad_text(line, WIDTH, "left") for line in body[:CONTENT_HEIGHT]]
    while len(rows) < HEIGHT - FOOTER_HEIGHT:
        rows.append(BLANK_ROW)
    rows.extend(footer)
    return normalize_output(rows)


def render_single_column(page_number: str, title: str, content: Content = "",
                         timestamp: Optional[str] = None,
                         hints: Sequence[NavigationHint] = ()) -> List[str]:
    """
    Render a full single-column page.

    Lines that do not fit the content area are dropped, not carried over
    to another page.

    Returns:
        Exactly HEIGHT rows of WIDTH characters
    """
    return _assemble(
        render_header(page_number, title, timestamp),
        _content_lines(content),
        render_footer(hints),
    )


def render_multi_column(page_number: str, title: str, content: Content = "",
                        columns: int = 2, timestamp: Optional[str] = None,
                        hints: Sequence[NavigationHint] = (),
                        gutter: int = DEFAULT_GUTTER) -> List[str]:
    """Render a full page with content flowed over ``columns`` columns."""
    widths = calculate_column_widths(WIDTH, columns, gutter)
    flowed = flow_text_to_columns(_content_lines(content), widths)
    return _assemble(
        render_header(page_number, title, timestamp),
        merge_columns(flowed, widths, gutter),
        render_footer(hints),
    )
