"""
Input Context Manager - what a page accepts from the keyboard.

Maps a page to its input context (mode, length limit, allowed characters,
hint and whether a complete entry submits itself) and validates typed
input against it. Everything here is a pure function of the page; no
router or handler state is consulted.
"""

import re
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Pattern

from ..input_modes import CONTEXT_MODE_RESOLVER
from ..models import InputMode, Page


MAX_TEXT_LENGTH = 200

DIGIT = re.compile(r"[0-9]")
NOTHING = re.compile(r"(?!)")
TEXT_CHARACTER = re.compile(
    "[A-Za-z0-9 " + re.escape(".,!?;:'\"()-_@#$%&*+=/<>[]{}|\\`~") + "]"
)

DISABLED_ERROR = "Input is disabled on this page"
DISABLED_HINT = "Press back button to return"
EMPTY_ERROR = "Input cannot be empty"


@dataclass(frozen=True)
class InputContext:
    mode: InputMode
    max_length: int
    allowed_characters: Pattern
    hint: str
    auto_submit: bool
    validation_rules: List[str] = field(default_factory=list)


@dataclass
class InputValidationResult:
    valid: bool
    error: Optional[str] = None
    hint: Optional[str] = None


INPUT_CONTEXTS: Dict[InputMode, InputContext] = {
    InputMode.SINGLE: InputContext(
        mode=InputMode.SINGLE,
        max_length=1,
        allowed_characters=DIGIT,
        hint="Enter option number",
        auto_submit=True,
        validation_rules=["Must be a single digit (0-9)"],
    ),
    InputMode.DOUBLE: InputContext(
        mode=InputMode.DOUBLE,
        max_length=2,
        allowed_characters=DIGIT,
        hint="Enter 2-digit page",
        auto_submit=True,
        validation_rules=["Must be 1-2 digits"],
    ),
    InputMode.TRIPLE: InputContext(
        mode=InputMode.TRIPLE,
        max_length=3,
        allowed_characters=DIGIT,
        hint="Enter 3-digit page",
        auto_submit=True,
        validation_rules=["Must be 3 digits (100-999)"],
    ),
    InputMode.TEXT: InputContext(
        mode=InputMode.TEXT,
        max_length=MAX_TEXT_LENGTH,
        allowed_characters=TEXT_CHARACTER,
        hint="Type your text and press Enter",
        auto_submit=False,
        validation_rules=["Enter text and press Enter"],
    ),
    InputMode.DISABLED: InputContext(
        mode=InputMode.DISABLED,
        max_length=0,
        allowed_characters=NOTHING,
        hint=DISABLED_HINT,
        auto_submit=False,
        validation_rules=["Input disabled on this page"],
    ),
}


def context_for_mode(mode: InputMode) -> InputContext:
    return INPUT_CONTEXTS[mode]


class InputContextManager:
    """
    Detects a page's input context and validates input against it.

    The mode inference is the shared CONTEXT_MODE_RESOLVER unless another
    page-to-mode callable is supplied, such as a router's
    ``get_page_input_mode``.
    """

    def __init__(self, mode_resolver: Callable[[Page], InputMode] = CONTEXT_MODE_RESOLVER):
        self._mode_resolver = mode_resolver

    def detect_input_mode(self, page: Page) -> InputMode:
        return self._mode_resolver(page)

    def get_input_context(self, page: Page) -> InputContext:
        return context_for_mode(self.detect_input_mode(page))

    def validate_input(self, input_text: str, page: Page) -> InputValidationResult:
        """
        Validate a complete entry for ``page``.

        Disabled pages reject everything. Then empty and over-long input is
        rejected before the mode-specific checks run.
        """
        context = self.get_input_context(page)
        mode = context.mode

        if mode == InputMode.DISABLED:
            return InputValidationResult(False, DISABLED_ERROR, DISABLED_HINT)

        if not input_text:
            return InputValidationResult(False, EMPTY_ERROR, context.hint)

        if len(input_text) > context.max_length:
            return InputValidationResult(
                False, f"Input too long (max {context.max_length} characters)", context.hint
            )

        if mode == InputMode.SINGLE:
            return self._validate_single_choice(input_text, page)
        if mode == InputMode.DOUBLE:
            return self._validate_double(input_text)
        if mode == InputMode.TRIPLE:
            return self._validate_triple(input_text)
        return self._validate_text(input_text)

    def _validate_single_choice(self, input_text: str, page: Page) -> InputValidationResult:
        if not DIGIT.fullmatch(input_text):
            return InputValidationResult(False, "Must be a single digit (0-9)", "Enter option number")

        options = page.meta.input_options
        if options is not None and input_text not in options:
            valid_options = ", ".join(options)
            return InputValidationResult(
                False,
                f"Invalid option. Valid options: {valid_options}",
                f"Choose from: {valid_options}",
            )
        return InputValidationResult(True)

    def _validate_double(self, input_text: str) -> InputValidationResult:
        if not re.fullmatch(r"[0-9]{1,2}", input_text):
            return InputValidationResult(False, "Must be 1-2 digits", "Enter 2-digit page")
        return InputValidationResult(True)

    def _validate_triple(self, input_text: str) -> InputValidationResult:
        if not re.fullmatch(r"[0-9]{1,3}", input_text):
            return InputValidationResult(False, "Must be 1-3 digits", "Enter 3-digit page (100-999)")

        if len(input_text) == 3 and not 100 <= int(input_text) <= 999:
            return InputValidationResult(
                False,
                "Page number must be between 100 and 999",
                "Enter valid page number (100-999)",
            )
        return InputValidationResult(True)

    def _validate_text(self, input_text: str) -> InputValidationResult:
        if not input_text.strip():
            return InputValidationResult(False, "Text cannot be empty", "Enter some text")
        if len(input_text) > MAX_TEXT_LENGTH:
            return InputValidationResult(
                False,
                f"Text too long (max {MAX_TEXT_LENGTH} characters)",
                f"Keep text under {MAX_TEXT_LENGTH} characters",
            )
        return InputValidationResult(True)

    def is_character_allowed(self, char: str, page: Page) -> bool:
        """Live keystroke filter: does ``char`` belong to the page's character class?"""
        if len(char) != 1:
            return False
        return bool(self.get_input_context(page).allowed_characters.fullmatch(char))

    def get_error_message(self, input_text: str, page: Page) -> str:
        return self.validate_input(input_text, page).error or "Invalid input"

    def get_hint_message(self, page: Page) -> str:
        return self.get_input_context(page).hint

    def should_auto_submit(self, page: Page) -> bool:
        return self.get_input_context(page).auto_submit

    def get_max_length(self, page: Page) -> int:
        return self.get_input_context(page).max_length
