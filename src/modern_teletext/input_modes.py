"""
Input mode resolution for teletext pages.

Both the navigation router and the input context manager need to know how
keystrokes on a page should be read. The inference lives here, once, as a
chain of small rules. Each rule looks at a page and either names a mode or
passes (returns None); the first rule with an answer wins and the
resolver's default covers the rest.

The router and the context manager use differently configured resolvers:
the router only needs enough to decide the expected digit count, while the
context manager also recognises question pages and sub-pages. Both treat an
error page as taking no input. An input handler validates with the
router's resolver, so what it accepts is what its keys act on.
"""

import re
from typing import Callable, Dict, Iterable, List, Optional

from .models import InputMode, Page


ModeRule = Callable[[Page], Optional[InputMode]]

_SINGLE_DIGIT = re.compile(r"^[0-9]$")
_SUB_PAGE = re.compile(r"^[0-9]+-[0-9]+$")

QUESTION_KEYWORDS = ("question", "ask", "enter")

#: Expected length on a page that takes no input at all
NO_INPUT = -1

#: Characters a user must type to complete a selection in each mode
EXPECTED_INPUT_LENGTH: Dict[InputMode, int] = {
    InputMode.SINGLE: 1,
    InputMode.DOUBLE: 2,
    InputMode.TRIPLE: 3,
    InputMode.TEXT: 0,      # variable length
    InputMode.DISABLED: NO_INPUT,
}


def explicit_mode(page: Page) -> Optional[InputMode]:
    """Metadata is the authoritative source when present."""
    return page.meta.input_mode


def error_page_disabled(page: Page) -> Optional[InputMode]:
    return InputMode.DISABLED if page.meta.error_page else None


def numbered_links(page: Page) -> Optional[InputMode]:
    """Links labelled "1", "2", ... in order form a selection menu."""
    links = page.links
    if 0 < len(links) <= 9 and all(
        link.label == str(index + 1) for index, link in enumerate(links)
    ):
        return InputMode.SINGLE
    return None


def numeric_options(page: Page) -> Optional[InputMode]:
    options = page.meta.input_options
    if options is not None and len(options) <= 9 and all(
        _SINGLE_DIGIT.fullmatch(option) for option in options
    ):
        return InputMode.SINGLE
    return None


def options_in_range(low: int, high: int) -> ModeRule:
    """Pages numbered in [low, high) with at most nine options take one digit."""

    def rule(page: Page) -> Optional[InputMode]:
        number = page.base_number
        if number is None or not low <= number < high:
            return None
        options = page.meta.input_options
        if options is not None and len(options) <= 9:
            return InputMode.SINGLE
        return None

    rule.__name__ = f"options_in_range_{low}_{high}"
    return rule


def question_title(low: int = 500, high: int = 600) -> ModeRule:
    """Question pages in the AI range take free text."""

    def rule(page: Page) -> Optional[InputMode]:
        number = page.base_number
        if number is None or not low <= number < high:
            return None
        title = page.title.lower()
        if any(keyword in title for keyword in QUESTION_KEYWORDS):
            return InputMode.TEXT
        return None

    rule.__name__ = f"question_title_{low}_{high}"
    return rule


def sub_page_double(page: Page) -> Optional[InputMode]:
    return InputMode.DOUBLE if _SUB_PAGE.fullmatch(page.id) else None


class InputModeResolver:
    """Resolves a page's input mode from an ordered list of rules."""

    def __init__(self, rules: Iterable[ModeRule], default: InputMode = InputMode.TRIPLE):
        self.rules: List[ModeRule] = list(rules)
        self.default = default

    def resolve(self, page: Page) -> InputMode:
        for rule in self.rules:
            mode = rule(page)
            if mode is not None:
                return mode
        return self.default

    def __call__(self, page: Page) -> InputMode:
        return self.resolve(page)

    def __repr__(self) -> str:
        names = ", ".join(getattr(rule, "__name__", repr(rule)) for rule in self.rules)
        return f"InputModeResolver([{names}], default={self.default.value})"


NAVIGATION_MODE_RESOLVER = InputModeResolver([
    explicit_mode,
    error_page_disabled,
    numbered_links,
    options_in_range(500, 700),
])

CONTEXT_MODE_RESOLVER = InputModeResolver([
    explicit_mode,
    error_page_disabled,
    question_title(500, 600),
    options_in_range(500, 800),
    numeric_options,
    numbered_links,
    sub_page_double,
])


def expected_input_length(mode: InputMode) -> int:
    return EXPECTED_INPUT_LENGTH[mode]
