from abc import ABC, abstractmethod
from typing import Optional

from ..models import Page
from ..navigation.router import FetchPageOptions, FetchPageResult


class BasePageStore(ABC):
    """Abstract base class for page stores."""

    @abstractmethod
    async def get_page(self, page_id: str) -> Optional[Page]:
        """Retrieve a page by id, or None when the store has no such page."""
        pass

    async def fetch_page(self, page_id: str,
                         options: Optional[FetchPageOptions] = None) -> FetchPageResult:
        """PageFetcher entry point, so a store can be handed to the router directly."""
        return FetchPageResult(page=await self.get_page(page_id))

    async def __call__(self, page_id: str,
                       options: Optional[FetchPageOptions] = None) -> FetchPageResult:
        return await self.fetch_page(page_id, options)

    @abstractmethod
    async def close(self) -> None:
        """Release the store's resources."""
        pass
