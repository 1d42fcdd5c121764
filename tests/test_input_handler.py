"""
Tests for the input handler: keystrokes, buffering and auto-navigation.
"""

from unittest.mock import AsyncMock, Mock

import pytest

from modern_teletext.input_modes import NO_INPUT
from modern_teletext.navigation.router import NavigationRouter
from modern_teletext.ui.input_context import DISABLED_ERROR, EMPTY_ERROR, InputContextManager
from modern_teletext.ui.input_handler import InputHandler, KeyEvent


@pytest.fixture
def callbacks():
    return {
        "on_navigate": Mock(),
        "on_error": Mock(),
        "on_buffer_change": Mock(),
        "on_text_submit": Mock(),
    }


@pytest.fixture
def handler(router, callbacks):
    return InputHandler(router, **callbacks)


async def start_on(router, page_id):
    await router.navigate_to_page(page_id)


class TestTripleDigitEntry:
    """Test page-number entry with auto-navigation."""

    @pytest.mark.asyncio
    async def test_typing_a_page_number_navigates(self, handler, router, callbacks):
        await handler.handle_digit_input(2)
        assert handler.get_input_buffer() == "2"
        await handler.handle_digit_input(0)
        assert handler.get_input_buffer() == "20"
        await handler.handle_digit_input(0)

        assert handler.get_input_buffer() == ""
        assert router.get_current_page().id == "200"
        callbacks["on_navigate"].assert_called_once_with("200")
        buffers = [call.args[0] for call in callbacks["on_buffer_change"].call_args_list]
        assert buffers[:3] == ["2", "20", "200"]
        assert buffers[-1] == ""

    @pytest.mark.asyncio
    async def test_missing_page_clears_buffer_and_reports(self, handler, router, callbacks):
        for digit in (1, 2, 3):
            await handler.handle_digit_input(digit)

        assert handler.get_input_buffer() == ""
        assert router.get_current_page().id == "100"
        callbacks["on_error"].assert_called_once_with("Page 123 not found. Press 100 to return to index.")
        callbacks["on_navigate"].assert_not_called()

    @pytest.mark.asyncio
    async def test_out_of_range_number_clears_buffer(self, handler, callbacks):
        for digit in (0, 9, 9):
            await handler.handle_digit_input(digit)

        assert handler.get_input_buffer() == ""
        assert "Invalid page number: 099" in callbacks["on_error"].call_args.args[0]

    @pytest.mark.asyncio
    async def test_double_digit_page(self, handler, router):
        await start_on(router, "700")

        await handler.handle_digit_input(7)
        assert handler.render_input_buffer() == "[7_]"
        await handler.handle_digit_input(0)

        # "70" is not a page number
        assert handler.get_input_buffer() == ""
        assert router.get_current_page().id == "700"


class TestSingleDigitSelection:
    """Test immediate single-digit menus."""

    @pytest.mark.asyncio
    async def test_invalid_option_is_rejected(self, handler, router, callbacks):
        await start_on(router, "200")

        await handler.handle_digit_input(9)

        assert router.get_current_page().id == "200"
        assert handler.get_input_buffer() == ""
        message = callbacks["on_error"].call_args.args[0]
        assert "Invalid option" in message
        assert message == "Invalid option: 9. Valid options: 1, 2, 3"

    @pytest.mark.asyncio
    async def test_invalid_option_leaves_buffer_alone(self, handler, router):
        await start_on(router, "500")
        handler.handle_text_input("x")
        await start_on(router, "200")

        await handler.handle_digit_input(9)

        assert handler.get_input_buffer() == "x"

    @pytest.mark.asyncio
    async def test_option_follows_matching_link(self, handler, router, callbacks):
        await start_on(router, "200")

        await handler.handle_digit_input(1)

        assert router.get_current_page().id == "200-1"
        assert handler.get_input_buffer() == ""
        callbacks["on_navigate"].assert_called_once_with("200-1")

    @pytest.mark.asyncio
    async def test_option_without_link_goes_to_sub_page(self, handler, router):
        await start_on(router, "600")

        await handler.handle_digit_input(2)

        assert router.get_current_page().id == "600-2"

    @pytest.mark.asyncio
    async def test_failed_option_navigation_is_reported(self, handler, router, callbacks):
        await start_on(router, "200")

        await handler.handle_digit_input(3)

        assert router.get_current_page().id == "200"
        assert handler.get_input_buffer() == ""
        callbacks["on_error"].assert_called_once_with("Page 999 not found. Press 100 to return to index.")

    @pytest.mark.asyncio
    async def test_numbered_menu_without_options(self, router, page_store, page_factory, callbacks):
        page_store.add_page(page_factory("350", links=[
            {"label": "1", "target_page": "300"},
            {"label": "2", "target_page": "400"},
        ]))
        await start_on(router, "350")
        handler = InputHandler(router, **callbacks)

        await handler.handle_digit_input(2)
        assert router.get_current_page().id == "400"

    @pytest.mark.asyncio
    async def test_single_mode_renders_no_buffer(self, handler, router):
        await start_on(router, "200")
        assert handler.render_input_buffer() == ""


class TestOtherModes:
    """Test text, disabled and ignored input."""

    @pytest.mark.asyncio
    async def test_disabled_page_reports_error(self, handler, router, callbacks):
        await start_on(router, "900")

        await handler.handle_digit_input(1)

        callbacks["on_error"].assert_called_once_with(DISABLED_ERROR)
        assert handler.get_input_buffer() == ""
        assert handler.render_input_buffer() == ""

    @pytest.mark.asyncio
    async def test_digits_append_in_text_mode(self, handler, router):
        await start_on(router, "500")

        for digit in (1, 2, 3, 4):
            await handler.handle_digit_input(digit)

        assert handler.get_input_buffer() == "1234"
        assert router.get_current_page().id == "500"
        assert handler.render_input_buffer() == "1234"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("digit", [-1, 10, "5", 2.0])
    async def test_non_digits_are_ignored(self, handler, callbacks, digit):
        await handler.handle_digit_input(digit)

        assert handler.get_input_buffer() == ""
        callbacks["on_buffer_change"].assert_not_called()
        callbacks["on_error"].assert_not_called()

    @pytest.mark.asyncio
    async def test_no_current_page_ignores_digits(self, page_store, callbacks):
        handler = InputHandler(NavigationRouter(page_store), **callbacks)

        await handler.handle_digit_input(1)

        assert handler.get_input_buffer() == ""
        assert handler.render_input_buffer() == ""
        assert handler.show_input_hint() == ""
        assert handler.validate_input("100") is False


class TestBufferAndSubmit:
    """Test buffer editing and text submission."""

    def test_text_input_appends_anything(self, handler, callbacks):
        handler.handle_text_input("h")
        handler.handle_text_input("!")

        assert handler.get_input_buffer() == "h!"
        callbacks["on_buffer_change"].assert_called_with("h!")

    def test_remove_last_digit(self, handler, callbacks):
        handler.handle_text_input("a")
        handler.handle_text_input("b")

        handler.remove_last_digit()
        assert handler.get_input_buffer() == "a"
        handler.remove_last_digit()
        handler.remove_last_digit()
        assert handler.get_input_buffer() == ""
        assert callbacks["on_buffer_change"].call_count == 4

    def test_clear_and_update_input_mode(self, handler, callbacks):
        handler.handle_text_input("20")
        handler.update_input_mode()

        assert handler.get_input_buffer() == ""
        callbacks["on_buffer_change"].assert_called_with("")

    @pytest.mark.asyncio
    async def test_enter_with_empty_buffer(self, handler, callbacks):
        await handler.handle_enter_key()

        callbacks["on_error"].assert_called_once_with(EMPTY_ERROR)
        callbacks["on_text_submit"].assert_not_called()

    @pytest.mark.asyncio
    async def test_enter_submits_and_clears(self, handler, callbacks):
        handler.handle_text_input("hi")

        await handler.handle_enter_key()

        callbacks["on_text_submit"].assert_called_once_with("hi")
        assert handler.get_input_buffer() == ""

    @pytest.mark.asyncio
    async def test_async_submit_callback_is_awaited(self, router):
        submit = AsyncMock()
        handler = InputHandler(router, on_text_submit=submit)
        handler.handle_text_input("question")

        await handler.handle_enter_key()

        submit.assert_awaited_once_with("question")

    def test_works_without_callbacks(self, router):
        handler = InputHandler(router)
        handler.handle_text_input("1")
        handler.clear_input_buffer()
        assert handler.get_input_buffer() == ""


class TestDisplayHelpers:
    """Test buffer rendering, hints and validation helpers."""

    @pytest.mark.asyncio
    async def test_render_triple_buffer(self, handler):
        assert handler.render_input_buffer() == "[___]"
        await handler.handle_digit_input(2)
        assert handler.render_input_buffer() == "[2__]"
        await handler.handle_digit_input(0)
        assert handler.render_input_buffer() == "[20_]"

    @pytest.mark.asyncio
    async def test_hints_follow_the_page(self, handler, router):
        assert handler.show_input_hint() == "Enter 3-digit page"
        await start_on(router, "200")
        assert handler.show_input_hint() == "Enter option number"
        await start_on(router, "500")
        assert handler.show_input_hint() == "Type your text and press Enter"

    def test_validate_input(self, handler):
        assert handler.validate_input("250") is True
        assert handler.validate_input("099") is False
        assert handler.validate_input("") is False


class TestModeAgreement:
    """Validation, hints and key handling read a page the same way."""

    @pytest.mark.asyncio
    async def test_sub_page_takes_a_page_number(self, handler, router):
        await start_on(router, "200-1")
        page = router.get_current_page()

        assert handler.context_manager.detect_input_mode(page) == router.get_page_input_mode(page)
        assert handler.show_input_hint() == "Enter 3-digit page"
        assert handler.validate_input("200") is True

        for digit in (2, 0, 0):
            await handler.handle_digit_input(digit)
        assert router.get_current_page().id == "200"

    @pytest.mark.asyncio
    async def test_error_flag_alone_disables_input(self, handler, router, page_store, page_factory, callbacks):
        page_store.add_page(page_factory("301", error_page=True))
        await start_on(router, "301")

        assert handler.validate_input("200") is False
        assert router.get_expected_input_length() == NO_INPUT

        for digit in (2, 0, 0):
            await handler.handle_digit_input(digit)

        assert router.get_current_page().id == "301"
        assert callbacks["on_error"].call_count == 3
        callbacks["on_error"].assert_called_with(DISABLED_ERROR)

    def test_explicit_context_manager_is_kept(self, router):
        manager = InputContextManager()
        assert InputHandler(router, context_manager=manager).context_manager is manager


class TestKeyPress:
    """Test key event routing."""

    @pytest.mark.asyncio
    async def test_digit_key(self, handler):
        event = KeyEvent("2")
        await handler.handle_key_press(event)

        assert event.default_prevented
        assert handler.get_input_buffer() == "2"

    @pytest.mark.asyncio
    async def test_backspace_and_escape(self, handler):
        await handler.handle_key_press(KeyEvent("2"))
        await handler.handle_key_press(KeyEvent("0"))

        backspace = KeyEvent("Backspace")
        await handler.handle_key_press(backspace)
        assert backspace.default_prevented
        assert handler.get_input_buffer() == "2"

        escape = KeyEvent("Escape")
        await handler.handle_key_press(escape)
        assert escape.default_prevented
        assert handler.get_input_buffer() == ""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("key", ["a", "Enter", "ArrowUp", "F1"])
    async def test_unrecognized_keys_are_ignored(self, handler, key):
        event = KeyEvent(key)
        await handler.handle_key_press(event)

        assert not event.default_prevented
        assert handler.get_input_buffer() == ""

    @pytest.mark.asyncio
    async def test_typing_in_text_mode(self, handler, router, callbacks):
        await start_on(router, "500")

        for key in ["h", "i", " ", "2"]:
            await handler.handle_key_press(KeyEvent(key))
        enter = KeyEvent("Enter")
        await handler.handle_key_press(enter)

        assert enter.default_prevented
        callbacks["on_text_submit"].assert_called_once_with("hi 2")
        assert handler.get_input_buffer() == ""
