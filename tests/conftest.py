import logging

import pytest

from modern_teletext.logging_config import PACKAGE_LOGGER
from modern_teletext.models import InputMode, Page, PageLink, PageMeta
from modern_teletext.navigation.router import NavigationRouter
from modern_teletext.storage.memory import MemoryPageStore


def make_page(page_id, title="", links=(), content=None, **meta):
    """Build a Page; keyword arguments become PageMeta fields."""
    return Page(
        id=page_id,
        title=title or f"PAGE {page_id}",
        links=[PageLink(**link) if isinstance(link, dict) else link for link in links],
        meta=PageMeta(**meta),
        content=content,
    )


@pytest.fixture
def page_factory():
    return make_page


# ----------------------------------------------------------------------
# Page sets
# ----------------------------------------------------------------------
@pytest.fixture
def pages():
    """A small page set covering every input mode."""
    page_list = [
        make_page("100", "Main Index", content="Welcome", input_mode=InputMode.TRIPLE),
        make_page("101", "Contents"),
        make_page(
            "200", "News",
            links=[
                {"label": "1", "target_page": "200-1"},
                {"label": "2", "target_page": "200-2"},
                {"label": "3", "target_page": "999"},
            ],
            input_options=["1", "2", "3"],
        ),
        make_page("200-1", "Story One", content="First story"),
        make_page("200-2", "Story Two", content="Second story"),
        make_page("201", "More News"),
        make_page("300", "Sport"),
        make_page("400", "Markets"),
        make_page("500", "Ask AI", input_mode=InputMode.TEXT),
        make_page("600", "Quiz", input_options=["1", "2"]),
        make_page("600-2", "Answer Two"),
        make_page("700", "Two Digit", input_mode=InputMode.DOUBLE),
        make_page("900", "Error", error_page=True, input_mode=InputMode.DISABLED),
    ]
    return {page.id: page for page in page_list}


@pytest.fixture
def page_store(pages):
    return MemoryPageStore(pages.values())


@pytest.fixture
def router(page_store, pages):
    """Router starting on the index page."""
    return NavigationRouter(page_store, initial_page=pages["100"])


# ----------------------------------------------------------------------
# Logging isolation
# ----------------------------------------------------------------------
@pytest.fixture(autouse=True)
def restore_logging():
    """CLI tests reconfigure the package logger; put it back afterwards."""
    package = logging.getLogger(PACKAGE_LOGGER)
    handlers = list(package.handlers)
    level = package.level
    propagate = package.propagate
    yield
    package.handlers = handlers
    package.setLevel(level)
    package.propagate = propagate
