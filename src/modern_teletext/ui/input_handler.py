"""
Input Handler - turns keystrokes into page navigation.

Processes keys according to the current page's input mode:

- single: a valid option navigates immediately
- double/triple: digits collect in a buffer and navigation fires when it is full
- text: characters collect until Enter submits them
- disabled: digits are rejected

Invalid input never raises. It is reported through the ``on_error``
callback and the buffer is left in a well-defined state.
"""

import inspect
import logging
from dataclasses import dataclass
from typing import Any, Callable, List, Optional

from ..errors import NavigationError
from ..logging_config import page_context
from ..models import InputMode, Page
from ..navigation.router import NavigationRouter
from .input_context import DISABLED_ERROR, EMPTY_ERROR, InputContextManager, context_for_mode


logger = logging.getLogger(__name__)

DIGITS = "0123456789"


@dataclass
class KeyEvent:
    """A key press as delivered by the presentation layer."""
    key: str
    default_prevented: bool = False

    def prevent_default(self) -> None:
        self.default_prevented = True


class InputHandler:
    """
    Mode-aware keyboard input processing on top of a NavigationRouter.

    The handler keeps its own input buffer; the router's buffer copy is
    only reset by successful navigation.
    """

    def __init__(self,
                 navigation_router: NavigationRouter,
                 on_navigate: Optional[Callable[[str], None]] = None,
                 on_error: Optional[Callable[[str], None]] = None,
                 on_buffer_change: Optional[Callable[[str], None]] = None,
                 on_text_submit: Optional[Callable[[str], Any]] = None,
                 context_manager: Optional[InputContextManager] = None):
        """Initialize the input handler.

        Args:
            navigation_router: Router used for mode lookup and navigation
            on_navigate: Called with the page id after a successful navigation
            on_error: Called with a message whenever input is rejected
            on_buffer_change: Called with the buffer after every change
            on_text_submit: Called with the text when Enter submits it; may be async
            context_manager: Validation rules for ``validate_input``; by default
                they follow the router's input modes, like the keys do
        """
        self.navigation_router = navigation_router
        self.context_manager = context_manager or InputContextManager(
            navigation_router.get_page_input_mode
        )
        self._on_navigate = on_navigate
        self._on_error = on_error
        self._on_buffer_change = on_buffer_change
        self._on_text_submit = on_text_submit
        self._buffer = ""

    def _current(self) -> Optional[Page]:
        return self.navigation_router.get_current_page()

    def _mode(self, page: Page) -> InputMode:
        return self.navigation_router.get_page_input_mode(page)

    # Keystrokes

    async def handle_digit_input(self, digit: int) -> None:
        """Process a single digit 0-9; anything else is ignored."""
        if not isinstance(digit, int) or not 0 <= digit <= 9:
            return

        page = self._current()
        if page is None:
            return

        mode = self._mode(page)
        digit_str = str(digit)

        if mode == InputMode.SINGLE:
            await self._select_option(page, digit_str)
        elif mode == InputMode.TEXT:
            self.handle_text_input(digit_str)
        elif mode == InputMode.DISABLED:
            self._notify_error(DISABLED_ERROR)
        else:
            await self._collect_digit(digit_str, context_for_mode(mode).max_length)

    async def _select_option(self, page: Page, digit: str) -> None:
        options = self._valid_options(page)
        if digit not in options:
            self._notify_error(f"Invalid option: {digit}. Valid options: {', '.join(options)}")
            return

        link = next((link for link in page.links if link.label == digit), None)
        target = link.target_page if link else f"{page.id}-{digit}"
        await self._navigate(target)

    def _valid_options(self, page: Page) -> List[str]:
        if page.meta.input_options is not None:
            return list(page.meta.input_options)
        # Numbered menus without explicit options accept their link labels
        return [link.label for link in page.links if len(link.label) == 1 and link.label in DIGITS]

    async def _collect_digit(self, digit: str, max_length: int) -> None:
        if len(self._buffer) >= max_length:
            return

        self._buffer += digit
        self._notify_buffer_change()

        if len(self._buffer) == max_length:
            await self._navigate(self._buffer)

    async def _navigate(self, page_id: str) -> None:
        try:
            await self.navigation_router.navigate_to_page(page_id)
        except NavigationError as e:
            self._notify_error(e.message)
        else:
            self._notify_navigate(page_id)
        # A failed entry must not leave the user stuck with a full buffer
        self.clear_input_buffer()

    def handle_text_input(self, char: str) -> None:
        """Append to the buffer; text is validated when submitted."""
        self._buffer += char
        self._notify_buffer_change()

    async def handle_enter_key(self) -> None:
        """Submit the buffered text."""
        if not self._buffer:
            self._notify_error(EMPTY_ERROR)
            return

        text = self._buffer
        self.clear_input_buffer()
        if self._on_text_submit:
            result = self._on_text_submit(text)
            if inspect.isawaitable(result):
                await result

    def remove_last_digit(self) -> None:
        if self._buffer:
            self._buffer = self._buffer[:-1]
            self._notify_buffer_change()

    def clear_input_buffer(self) -> None:
        self._buffer = ""
        self._notify_buffer_change()

    def get_input_buffer(self) -> str:
        return self._buffer

    async def handle_key_press(self, event: KeyEvent) -> None:
        """Route a key event: digits, Backspace and Escape, plus typing in text mode."""
        key = event.key

        if len(key) == 1 and key in DIGITS:
            event.prevent_default()
            await self.handle_digit_input(int(key))
            return

        if key == "Backspace":
            event.prevent_default()
            self.remove_last_digit()
            return

        if key == "Escape":
            event.prevent_default()
            self.clear_input_buffer()
            return

        page = self._current()
        if page is None or self._mode(page) != InputMode.TEXT:
            return

        if key == "Enter":
            event.prevent_default()
            await self.handle_enter_key()
        elif len(key) == 1 and key.isprintable():
            event.prevent_default()
            self.handle_text_input(key)

    # Display helpers

    def render_input_buffer(self) -> str:
        """Buffer as shown on screen, e.g. ``[20_]`` for a triple-digit page."""
        page = self._current()
        if page is None:
            return ""

        mode = self._mode(page)
        if mode in (InputMode.SINGLE, InputMode.DISABLED):
            return ""
        if mode == InputMode.TEXT:
            return self._buffer

        length = context_for_mode(mode).max_length
        return f"[{self._buffer.ljust(length, '_')}]"

    def show_input_hint(self) -> str:
        page = self._current()
        if page is None:
            return ""
        return context_for_mode(self._mode(page)).hint

    def update_input_mode(self) -> None:
        """Drop partial input after the page, and so the mode, has changed."""
        self.clear_input_buffer()

    def validate_input(self, input_text: str) -> bool:
        page = self._current()
        if page is None:
            return False
        return self.context_manager.validate_input(input_text, page).valid

    # Callbacks

    def _notify_navigate(self, page_id: str) -> None:
        if self._on_navigate:
            self._on_navigate(page_id)

    def _notify_error(self, message: str) -> None:
        page = self._current()
        logger.debug(f"Input rejected: {message}",
                     extra=page_context(page.id if page else None))
        if self._on_error:
            self._on_error(message)

    def _notify_buffer_change(self) -> None:
        if self._on_buffer_change:
            self._on_buffer_change(self._buffer)
