from typing import Dict, Iterable, List, Optional

from ..models import Page
from .base import BasePageStore


class MemoryPageStore(BasePageStore):
    """In-memory page store for development and testing."""

    def __init__(self, pages: Iterable[Page] = ()):
        self._pages: Dict[str, Page] = {page.id: page for page in pages}

    async def get_page(self, page_id: str) -> Optional[Page]:
        return self._pages.get(page_id)

    def add_page(self, page: Page) -> None:
        """Add or replace a page."""
        self._pages[page.id] = page

    def page_ids(self) -> List[str]:
        return sorted(self._pages)

    async def close(self) -> None:
        """Close the memory store (drops all pages)."""
        self._pages.clear()
