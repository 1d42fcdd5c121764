"""
Tests for the page models and error types.
"""

import pytest
from pydantic import ValidationError

from modern_teletext.errors import NavigationError, NavigationErrorType, PageStoreError
from modern_teletext.models import InputMode, Page, PageMeta


class TestPage:
    """Test page parsing and helpers."""

    def test_camel_case_aliases(self):
        page = Page.model_validate({
            "id": "200",
            "links": [{"label": "1", "targetPage": "200-1"}],
            "meta": {"inputMode": "single", "errorPage": True, "renderedWithLayoutEngine": True},
        })

        assert page.links[0].target_page == "200-1"
        assert page.meta.input_mode == InputMode.SINGLE
        assert page.meta.error_page is True
        assert page.is_pre_rendered()

    def test_unknown_meta_keys_are_kept(self):
        meta = PageMeta.model_validate({"source": "news", "region": "north"})
        assert meta.region == "north"

    def test_pages_are_immutable(self):
        page = Page(id="100")
        with pytest.raises(ValidationError):
            page.title = "changed"

    def test_defaults(self):
        page = Page(id="100")
        assert page.rows == []
        assert page.links == []
        assert page.meta == PageMeta()
        assert not page.is_pre_rendered()

    @pytest.mark.parametrize("page_id, number", [
        ("100", 100),
        ("202-1", 202),
        ("202-1-2", 202),
        ("abc", None),
        ("", None),
        ("١٢٣", None),
    ])
    def test_base_number(self, page_id, number):
        assert Page(id=page_id).base_number == number

    def test_invalid_link_colour(self):
        with pytest.raises(ValidationError):
            Page.model_validate({"id": "100", "links": [{"label": "A", "targetPage": "200", "color": "pink"}]})


class TestErrors:
    """Test error types and their messages."""

    def test_navigation_error(self):
        error = NavigationError(NavigationErrorType.PAGE_NOT_FOUND, "Page 123 not found.")

        assert error.message == "Page 123 not found."
        assert error.error_type == NavigationErrorType.PAGE_NOT_FOUND
        assert error.hint == "Press 100 to return to the index."
        assert "PAGE_NOT_FOUND" in repr(error)
        assert error.format_message() == "Page 123 not found."
        assert error.exit_code == 1

    def test_page_id_prefixes_the_message(self):
        error = NavigationError(NavigationErrorType.PAGE_NOT_FOUND, "Not found", page_id="123")
        assert error.page_id == "123"
        assert error.format_message() == "P123  Not found"

    def test_show_prints_message_and_hint(self, capsys):
        error = NavigationError(NavigationErrorType.FETCH_ERROR, "offline", hint="Try later", page_id="200")

        error.show()

        assert capsys.readouterr().err.splitlines() == ["P200  offline", "Try later"]

    def test_page_store_error(self):
        error = PageStoreError("bad file", "pages.yaml")
        assert error.message == "Page store problem – bad file"
        assert "pages.yaml" in error.hint
        assert error.path == "pages.yaml"
        assert error.page_id is None
