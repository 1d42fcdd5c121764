"""Core data models for teletext pages.

A page is the unit of navigation and display. Pages are produced by page
factories or fetched through a PageFetcher and are immutable afterwards;
the router only ever swaps one page reference for another.

Field names are snake_case in Python. The camelCase names used by page
sources (``inputMode``, ``targetPage``, ``renderedWithLayoutEngine`` ...)
are accepted as aliases, so page sets written by other tools load as-is.
"""

from datetime import datetime
from enum import Enum
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class InputMode(str, Enum):
    """How raw keystrokes are interpreted on a page."""
    SINGLE = "single"       # one digit, navigates immediately
    DOUBLE = "double"       # two digits
    TRIPLE = "triple"       # three-digit page number
    TEXT = "text"           # free text, submitted with Enter
    DISABLED = "disabled"   # no keyboard input (error pages)


LinkColor = Literal["red", "green", "yellow", "blue"]


class _PageModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class PageLink(_PageModel):
    label: str
    target_page: str
    color: Optional[LinkColor] = None


class PageProgress(_PageModel):
    current: int
    total: int
    label: Optional[str] = None


class PageMeta(_PageModel):
    """Optional page metadata. Unknown keys are kept as extra attributes."""

    model_config = ConfigDict(extra="allow")

    source: Optional[str] = None
    last_updated: Optional[datetime] = None
    input_mode: Optional[InputMode] = None
    input_options: Optional[List[str]] = None
    error_page: bool = False
    loading: bool = False
    progress: Optional[PageProgress] = None
    custom_hints: Optional[List[str]] = None
    settings_page: bool = False
    use_layout_manager: bool = False
    rendered_with_layout_engine: bool = False


class Page(_PageModel):
    id: str
    title: str = ""
    rows: List[str] = Field(default_factory=list)
    links: List[PageLink] = Field(default_factory=list)
    meta: PageMeta = Field(default_factory=PageMeta)
    content: Optional[Union[str, List[str]]] = Field(
        default=None, description="Raw content still to be laid out"
    )

    @property
    def base_number(self) -> Optional[int]:
        """Numeric part of the id before the first '-', if any."""
        head = self.id.split("-")[0]
        return int(head) if head.isascii() and head.isdigit() else None

    def is_pre_rendered(self) -> bool:
        return self.meta.use_layout_manager or self.meta.rendered_with_layout_engine
