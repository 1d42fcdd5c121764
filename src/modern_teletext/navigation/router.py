"""
Navigation Router - page transitions, history and input expectations.

The router owns a single NavigationState: the current page, a bounded
history of page ids with a cursor, the digit count the current page
expects, and the transient loading/error status of the last request.

Pages come from an external async PageFetcher. Prior pages are never kept;
moving back or forward through history fetches the id again.

Concurrency:
    Every fetch is tagged with a generation number. When a newer navigation
    starts before an older one resolves, the older result is discarded
    instead of overwriting the newer page.
"""

import asyncio
import logging
import re
from dataclasses import dataclass, field, replace
from typing import Awaitable, Callable, List, Optional

from ..errors import NavigationError, NavigationErrorType
from ..input_modes import NAVIGATION_MODE_RESOLVER, InputModeResolver, expected_input_length
from ..logging_config import page_context
from ..models import InputMode, Page


logger = logging.getLogger(__name__)

MIN_PAGE = 100
MAX_PAGE = 999
DEFAULT_MAX_HISTORY = 50

_PAGE_ID = re.compile(r"([0-9]{3})(?:-([0-9]+))?(?:-([0-9]+))?")


@dataclass
class FetchPageOptions:
    """Options forwarded untouched to the page fetcher."""
    signal: Optional[asyncio.Event] = None
    session_id: Optional[str] = None


@dataclass
class FetchPageResult:
    page: Optional[Page]
    from_cache: bool = False


PageFetcher = Callable[[str, Optional[FetchPageOptions]], Awaitable[FetchPageResult]]


@dataclass
class NavigationState:
    """Router-owned navigation state."""
    current_page: Optional[Page] = None
    input_buffer: str = ""
    history: List[str] = field(default_factory=list)
    history_index: int = -1
    expected_input_length: int = 3
    loading: bool = False
    error: Optional[str] = None


def is_valid_page_number(page_id: str) -> bool:
    """
    Check a page id against the three accepted shapes.

    ``NNN`` (100-999), ``NNN-k`` (k in 1-99) and ``NNN-k-j`` (j in 2-99;
    part 1 of an article is the sub-page itself).
    """
    if not isinstance(page_id, str):
        return False
    match = _PAGE_ID.fullmatch(page_id)
    if not match:
        return False

    base, sub_page, part = match.groups()
    if not MIN_PAGE <= int(base) <= MAX_PAGE:
        return False
    if sub_page is not None and not 1 <= int(sub_page) <= 99:
        return False
    if part is not None and not 2 <= int(part) <= 99:
        return False
    return True


class NavigationRouter:
    """
    Manages navigation state, history and page transitions.

    Failures of ``navigate_to_page`` are raised as NavigationError and also
    recorded in the state, so both awaiting callers and polling UIs see
    them. Back, forward and channel up/down never raise.
    """

    def __init__(self,
                 page_fetcher: PageFetcher,
                 initial_page: Optional[Page] = None,
                 max_history_size: int = DEFAULT_MAX_HISTORY,
                 mode_resolver: InputModeResolver = NAVIGATION_MODE_RESOLVER):
        """
        Initialize the router.

        Args:
            page_fetcher: Async callable returning a FetchPageResult for a page id
            initial_page: Page to start on, recorded as the first history entry
            max_history_size: Oldest history entries are dropped beyond this size
            mode_resolver: Input mode inference used for the expected input length
        """
        self._fetcher = page_fetcher
        self._max_history_size = max(1, max_history_size)
        self._mode_resolver = mode_resolver
        self._generation = 0

        self._state = NavigationState(
            current_page=initial_page,
            history=[initial_page.id] if initial_page else [],
            history_index=0 if initial_page else -1,
        )
        if initial_page is not None:
            self._state.expected_input_length = expected_input_length(
                self.get_page_input_mode(initial_page)
            )

    # Validation and mode

    def is_valid_page_number(self, page_id: str) -> bool:
        return is_valid_page_number(page_id)

    def get_page_input_mode(self, page: Page) -> InputMode:
        """Input mode the router assumes for ``page``."""
        return self._mode_resolver.resolve(page)

    # Transitions

    async def navigate_to_page(self, page_id: str, options: Optional[FetchPageOptions] = None) -> None:
        """
        Fetch ``page_id`` and make it the current page.

        Raises:
            NavigationError: INVALID_PAGE_NUMBER for a malformed id,
                PAGE_NOT_FOUND when the fetcher has no such page, the
                fetcher's own NavigationError, or NAVIGATION_FAILED for any
                other fetcher exception. The current page is left unchanged.
        """
        if not is_valid_page_number(page_id):
            error = NavigationError(
                NavigationErrorType.INVALID_PAGE_NUMBER,
                f"Invalid page number: {page_id}. Page numbers must be between 100 and 999.",
            )
            self._state.error = error.message
            raise error

        generation = self._begin_request()
        try:
            result = await self._fetcher(page_id, options)

            if result.page is None:
                raise NavigationError(
                    NavigationErrorType.PAGE_NOT_FOUND,
                    f"Page {page_id} not found. Press 100 to return to index.",
                    page_id=page_id,
                )

            if not self._is_current(generation):
                logger.debug(f"Discarding stale result for page {page_id}", extra=page_context(page_id))
                return

            self._state.current_page = result.page
            self._add_to_history(page_id)
            self._update_expected_input_length(result.page)
            self._state.input_buffer = ""

        except NavigationError as e:
            logger.warning(f"Navigation to {page_id} failed: {e.message}", extra=page_context(page_id))
            if self._is_current(generation):
                self._state.error = e.message
            raise
        except Exception as e:
            logger.error(f"Navigation to {page_id} failed: {e}", extra=page_context(page_id))
            error = NavigationError(
                NavigationErrorType.NAVIGATION_FAILED,
                f"Failed to navigate to page {page_id}. Press 100 to return to index.",
                page_id=page_id,
            )
            if self._is_current(generation):
                self._state.error = error.message
            raise error from e
        finally:
            self._end_request(generation)

    async def navigate_back(self, options: Optional[FetchPageOptions] = None) -> None:
        """Refetch the previous history entry; no-op when there is none."""
        if not self.can_go_back():
            return
        await self._move_in_history(self._state.history_index - 1, "back", options)

    async def navigate_forward(self, options: Optional[FetchPageOptions] = None) -> None:
        """Refetch the next history entry; no-op when there is none."""
        if not self.can_go_forward():
            return
        await self._move_in_history(self._state.history_index + 1, "forward", options)

    async def navigate_up(self, options: Optional[FetchPageOptions] = None) -> None:
        """Channel up: the next page number, staying put if it does not exist."""
        await self._scan(1, options)

    async def navigate_down(self, options: Optional[FetchPageOptions] = None) -> None:
        """Channel down: the previous page number, staying put if it does not exist."""
        await self._scan(-1, options)

    async def _move_in_history(self, new_index: int, direction: str,
                               options: Optional[FetchPageOptions]) -> None:
        page_id = self._state.history[new_index]
        generation = self._begin_request()
        try:
            result = await self._fetcher(page_id, options)
            if result.page is not None and self._is_current(generation):
                self._state.current_page = result.page
                self._state.history_index = new_index
                self._update_expected_input_length(result.page)
        except Exception as e:
            logger.error(f"{direction.capitalize()} navigation to {page_id} failed: {e}",
                         extra=page_context(page_id))
            if self._is_current(generation):
                self._state.error = f"Failed to navigate {direction}"
        finally:
            self._end_request(generation)

    async def _scan(self, step: int, options: Optional[FetchPageOptions]) -> None:
        page = self._state.current_page
        if page is None or page.base_number is None:
            return

        target = page.base_number + step
        if not MIN_PAGE <= target <= MAX_PAGE:
            return

        try:
            await self.navigate_to_page(str(target), options)
        except NavigationError:
            logger.debug(f"Page {target} not available, staying put", extra=page_context(page.id))

    # Internal state updates

    def _begin_request(self) -> int:
        self._generation += 1
        self._state.loading = True
        self._state.error = None
        return self._generation

    def _is_current(self, generation: int) -> bool:
        return generation == self._generation

    def _end_request(self, generation: int) -> None:
        if self._is_current(generation):
            self._state.loading = False

    def _add_to_history(self, page_id: str) -> None:
        state = self._state
        # Forward entries beyond the cursor are abandoned
        state.history = state.history[:state.history_index + 1]
        state.history.append(page_id)
        state.history_index = len(state.history) - 1

        while len(state.history) > self._max_history_size:
            state.history.pop(0)
            state.history_index -= 1

    def _update_expected_input_length(self, page: Page) -> None:
        self._state.expected_input_length = expected_input_length(self.get_page_input_mode(page))

    # Accessors

    def get_current_page(self) -> Optional[Page]:
        return self._state.current_page

    def get_input_buffer(self) -> str:
        return self._state.input_buffer

    def get_expected_input_length(self) -> int:
        return self._state.expected_input_length

    def get_navigation_history(self) -> List[str]:
        return list(self._state.history)

    def can_go_back(self) -> bool:
        return self._state.history_index > 0

    def can_go_forward(self) -> bool:
        return self._state.history_index < len(self._state.history) - 1

    def get_state(self) -> NavigationState:
        """Snapshot of the navigation state; mutating it does not affect the router."""
        return replace(self._state, history=list(self._state.history))

    def get_error(self) -> Optional[str]:
        return self._state.error

    def clear_error(self) -> None:
        self._state.error = None

    def is_loading(self) -> bool:
        return self._state.loading
