"""Exceptions that end a teletext command with a message and a hint.

They derive from ``click.ClickException``, so a command that lets one
escape exits with status 1 and prints the message, prefixed with the page
number it concerns, followed by the hint on its own line.
"""

from __future__ import annotations

from enum import Enum
from typing import IO, Any, Optional

import click


class TeletextError(click.ClickException):
    """Base class for failures reported on the command line."""

    def __init__(self, message: str, hint: Optional[str] = None,
                 page_id: Optional[str] = None) -> None:
        super().__init__(message)
        self.hint = hint
        self.page_id = page_id

    def format_message(self) -> str:
        if self.page_id:
            return f"P{self.page_id}  {self.message}"
        return self.message

    def show(self, file: Optional[IO[Any]] = None) -> None:
        click.secho(self.format_message(), file=file, err=True, fg="red", bold=True)
        if self.hint:
            click.secho(self.hint, file=file, err=True, fg="yellow")


class NavigationErrorType(str, Enum):
    """Kinds of navigation failure reported by the router."""
    INVALID_PAGE_NUMBER = "INVALID_PAGE_NUMBER"
    PAGE_NOT_FOUND = "PAGE_NOT_FOUND"
    NAVIGATION_FAILED = "NAVIGATION_FAILED"
    FETCH_ERROR = "FETCH_ERROR"


class NavigationError(TeletextError):
    """Raised when a page transition cannot be completed."""

    def __init__(self, error_type: NavigationErrorType, message: str,
                 hint: Optional[str] = None, page_id: Optional[str] = None):
        super().__init__(message, hint or "Press 100 to return to the index.", page_id)
        self.error_type = error_type

    def __repr__(self) -> str:
        return f"NavigationError({self.error_type.value}, {self.message!r})"


class PageStoreError(TeletextError):
    """Raised when a page set cannot be loaded."""

    def __init__(self, details: str, path: Optional[str] = None):
        where = path or "the page file"
        super().__init__(
            f"Page store problem – {details}",
            f"Check {where}: it must be YAML with a top-level 'pages' list.",
        )
        self.path = path
