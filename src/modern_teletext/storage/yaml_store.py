"""YAML-backed page store.

The file holds a top-level ``pages`` list; each entry is a page in the
same shape the models accept, camelCase keys included::

    pages:
      - id: "100"
        title: INDEX
        content: |
          Welcome to Modern Teletext
        links:
          - {label: "2", targetPage: "200", color: red}
"""

import logging
from importlib import resources
from pathlib import Path
from typing import Any, List, Optional, Union

import yaml
from pydantic import ValidationError

from ..errors import PageStoreError
from ..models import Page
from .memory import MemoryPageStore


logger = logging.getLogger(__name__)

DEMO_PAGES = "demo_pages.yaml"


def load_pages(path: Union[str, Path]) -> List[Page]:
    """Parse a YAML page set.

    Raises:
        PageStoreError: If the file is missing, not YAML, or an entry is not a valid page
    """
    path = Path(path)
    if not path.exists():
        raise PageStoreError(f"page file not found: {path}", str(path))

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise PageStoreError(f"invalid YAML in {path}: {e}", str(path)) from e

    return parse_pages(data, str(path))


def parse_pages(data: Any, source: str = "<data>") -> List[Page]:
    if not isinstance(data, dict) or not isinstance(data.get("pages", []), list):
        raise PageStoreError(f"{source} must contain a 'pages' list", source)

    pages: List[Page] = []
    for index, entry in enumerate(data.get("pages", [])):
        try:
            pages.append(Page.model_validate(_normalize_entry(entry)))
        except ValidationError as e:
            raise PageStoreError(f"page #{index} in {source} is invalid: {e}", source) from e
    return pages


def _normalize_entry(entry: Any) -> Any:
    # YAML reads unquoted 100 as an int
    if isinstance(entry, dict) and isinstance(entry.get("id"), int):
        entry = {**entry, "id": str(entry["id"])}
    return entry


class YamlPageStore(MemoryPageStore):
    """Page store loaded once from a YAML file."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        pages = load_pages(self.path)
        super().__init__(pages)
        logger.info(f"Loaded {len(pages)} pages from {self.path}")

    @classmethod
    def demo(cls) -> "YamlPageStore":
        """Store backed by the bundled demo page set."""
        return cls(Path(str(resources.files("modern_teletext.data").joinpath(DEMO_PAGES))))

    @classmethod
    def from_settings(cls, pages_file: Optional[str]) -> "YamlPageStore":
        return cls(pages_file) if pages_file else cls.demo()
