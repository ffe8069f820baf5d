"""Practice session: the working model and the operations user events trigger."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from pathlib import Path

from .content_loader import flatten, load_bundled_catalog, load_catalog
from .exporter import dumps_catalog, save_catalog, to_catalog
from .models import CatalogEntry, FormatError, PracticeItem
from .progress import ProgressSnapshot, summarize
from .sampler import draw_distinct

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PresentedItem:
    """One drawn item as shown to the user."""

    index: int
    name: str
    counter: int

    @property
    def label(self) -> str:
        return f"{self.name} (Repeated {self.counter} times)"


class PracticeSession:
    """Owns the flat working model for one user session."""

    def __init__(self, items: list[PracticeItem] | None = None, rng: random.Random | None = None) -> None:
        self.items: list[PracticeItem] = list(items) if items is not None else []
        self.current_draw: list[int] = []
        self._rng = rng

    def load(self, source: Path | str | None = None) -> bool:
        """Load the catalog once at startup.

        A missing or malformed catalog leaves the session with an empty model so
        the page still renders. Returns whether loading succeeded.
        """
        self.items = []
        self.current_draw = []
        try:
            items = load_bundled_catalog() if source is None else load_catalog(source)
        except FormatError as exc:
            logger.error("Error loading data from %s: %s", source or "bundled catalog", exc)
            return False
        except OSError as exc:
            logger.error("Could not read catalog %s: %s", source, exc)
            return False
        self.items = items
        logger.info("Loaded %d practice items from %s", len(items), source or "bundled catalog")
        return True

    def replace_from_document(self, raw: object) -> int:
        """Replace the working model with an imported catalog document.

        The document is validated in full before anything is replaced.
        """
        items = flatten(raw)
        self.items = items
        self.current_draw = []
        logger.info("Imported catalog with %d practice items", len(items))
        return len(items)

    def draw(self, count: int = 1) -> list[int]:
        """Draw ``count`` distinct items to present; replaces the previous draw."""
        indexes = draw_distinct(count, len(self.items), rng=self._rng)
        self.current_draw = sorted(indexes)
        return list(self.current_draw)

    def presented(self) -> list[PresentedItem]:
        """Return the items of the current draw."""
        return [self.describe(index) for index in self.current_draw]

    def describe(self, index: int) -> PresentedItem:
        item = self._item(index)
        return PresentedItem(index=index, name=item.qualified_name, counter=item.counter)

    def mark_practiced(self, index: int) -> PracticeItem:
        """Increment the counter of one practiced item."""
        item = self._item(index)
        item.counter += 1
        logger.debug("Practiced %s (%d times)", item.qualified_name, item.counter)
        return item

    def snapshot(self) -> ProgressSnapshot:
        return summarize(self.items)

    def to_catalog(self) -> list[CatalogEntry]:
        return to_catalog(self.items)

    def export_json(self) -> str:
        return dumps_catalog(self.items)

    def save(self, path: Path | str) -> Path:
        """Write the updated catalog to a file."""
        target = save_catalog(self.items, path)
        logger.info("Saved %d practice items to %s", len(self.items), target)
        return target

    def _item(self, index: int) -> PracticeItem:
        if index < 0 or index >= len(self.items):
            raise IndexError(f"No practice item at index {index}.")
        return self.items[index]
