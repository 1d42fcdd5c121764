"""CLI entry point for Modern Teletext."""

from __future__ import annotations

import asyncio
import sys
from dataclasses import dataclass
from typing import List, Optional

import click
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.text import Text

from modern_teletext import __version__
from modern_teletext.errors import NavigationError, NavigationErrorType, TeletextError
from modern_teletext.logging_config import configure_logging
from modern_teletext.models import Page
from modern_teletext.navigation.router import NavigationRouter, is_valid_page_number
from modern_teletext.settings import AppSettings
from modern_teletext.storage.yaml_store import YamlPageStore
from modern_teletext.ui.error_pages import (
    create_generic_error_page,
    create_invalid_input_page,
    create_not_found_page,
    create_offline_page,
)
from modern_teletext.ui.input_handler import InputHandler, KeyEvent
from modern_teletext.ui.page_renderer import page_renderer

console = Console()

PAGE_NUMBER_FORMAT = "3-digit page number (100-999)"

BROWSE_COMMANDS = {
    ":back": "navigate_back",
    ":forward": "navigate_forward",
    ":up": "navigate_up",
    ":down": "navigate_down",
}


@dataclass
class CliState:
    settings: AppSettings
    pages_file: Optional[str]

    def open_store(self) -> YamlPageStore:
        return YamlPageStore.from_settings(self.pages_file)

    def new_router(self, store: YamlPageStore) -> NavigationRouter:
        return NavigationRouter(store, max_history_size=self.settings.max_history_size)


def _load_settings() -> AppSettings:
    try:
        return AppSettings()
    except ValidationError as e:
        raise TeletextError(
            f"Invalid configuration – {e.errors()[0]['msg']}",
            "Check the TELETEXT_* environment variables and your .env file.",
        ) from e


def _show_page(page: Page, raw: bool) -> None:
    if raw:
        for row in page.rows:
            click.echo(row)
        return
    console.print(Panel(Text("\n".join(page.rows)), title=f"P{page.id}", expand=False))


def _error_page_for(error: NavigationError, page_id: str) -> Page:
    if error.error_type == NavigationErrorType.INVALID_PAGE_NUMBER:
        return create_invalid_input_page(page_id, PAGE_NUMBER_FORMAT)
    if error.error_type == NavigationErrorType.PAGE_NOT_FOUND:
        return create_not_found_page(page_id)
    if error.error_type == NavigationErrorType.FETCH_ERROR:
        return create_offline_page(page_id)
    return create_generic_error_page(page_id, "Page could not be loaded.")


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="teletext")
@click.option("--log-level", default=None, help="Log level (override env)")
@click.option("--log-format", default=None, type=click.Choice(["json", "text"]))
@click.option("--pages", "pages_file", default=None, type=click.Path(dir_okay=False),
              help="YAML page set (defaults to the bundled demo pages)")
@click.pass_context
def main(ctx: click.Context, log_level: Optional[str], log_format: Optional[str],
         pages_file: Optional[str]) -> None:
    """📺 Modern Teletext - browse numbered pages on a 40x24 screen."""
    settings = _load_settings()
    configure_logging(log_level or settings.log_level, log_format or settings.log_format)
    ctx.obj = CliState(settings=settings, pages_file=pages_file or settings.pages_file)


@main.command("check")
@click.argument("page_id")
def check(page_id: str) -> None:
    """Check whether PAGE_ID is a valid page number."""
    if not is_valid_page_number(page_id):
        raise NavigationError(
            NavigationErrorType.INVALID_PAGE_NUMBER,
            f"Invalid page number: {page_id}. Page numbers must be between 100 and 999.",
            "Use NNN, NNN-k or NNN-k-j, e.g. 100, 202-1 or 202-1-2.",
        )
    console.print(f"✅ [bold green]{page_id}[/bold green] is a valid page number")


@main.command("render")
@click.argument("page_id")
@click.option("--columns", type=click.IntRange(1, 4), default=None,
              help="Force the column layout")
@click.option("--raw", is_flag=True, help="Print the bare 24x40 grid")
@click.pass_obj
def render(state: CliState, page_id: str, columns: Optional[int], raw: bool) -> None:
    """Render PAGE_ID as it appears on screen."""

    async def run_render() -> Page:
        store = state.open_store()
        try:
            router = state.new_router(store)
            await router.navigate_to_page(page_id)
            return router.get_current_page()
        finally:
            await store.close()

    try:
        page = asyncio.run(run_render())
    except NavigationError as e:
        _show_page(_error_page_for(e, page_id), raw)
        raise
    _show_page(page_renderer.render(page, force_column_count=columns), raw)


@main.command("browse")
@click.option("--start", "start_page", default=None, help="Page to start on")
@click.option("--raw", is_flag=True, help="Print bare grids instead of framed pages")
@click.pass_obj
def browse(state: CliState, start_page: Optional[str], raw: bool) -> None:
    """Browse pages interactively.

    Type digits as on a remote control; each line is fed key by key and
    Enter submits text on text pages. Commands: :back, :forward, :up,
    :down and :quit.
    """
    try:
        asyncio.run(_browse(state, start_page or state.settings.start_page, raw))
    except KeyboardInterrupt:
        console.print("\n🛑 Browsing stopped")


async def _browse(state: CliState, start_page: str, raw: bool) -> None:
    store = state.open_store()
    router = state.new_router(store)
    messages: List[str] = []

    def on_text_submit(text: str) -> None:
        console.print(f"📨 Submitted: {escape(text)}")

    handler = InputHandler(router, on_error=messages.append, on_text_submit=on_text_submit)

    try:
        await router.navigate_to_page(start_page)
        shown = router.get_current_page()
        _show_page(page_renderer.render(shown), raw)

        while True:
            console.print(f"{handler.show_input_hint()} {handler.render_input_buffer()}> ", end="", markup=False)
            line = sys.stdin.readline()
            if not line:
                break
            line = line.rstrip("\n")

            if line == ":quit":
                break
            if line in BROWSE_COMMANDS:
                await getattr(router, BROWSE_COMMANDS[line])()
                if router.get_error():
                    messages.append(router.get_error())
            else:
                for key in line:
                    await handler.handle_key_press(KeyEvent(key))
                await handler.handle_key_press(KeyEvent("Enter"))
            # Keystroke failures already arrived through on_error
            router.clear_error()

            for message in messages:
                console.print(f"❌ [bold red]{escape(message)}[/bold red]")
            messages.clear()

            current = router.get_current_page()
            if current is not shown:
                handler.update_input_mode()
                shown = current
                _show_page(page_renderer.render(current, can_go_back=router.can_go_back()), raw)
    finally:
        await store.close()

