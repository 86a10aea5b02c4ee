from __future__ import annotations

import json
import logging
from typing import List

from sqlalchemy.exc import SQLAlchemyError

from weather_informer.repositories.kv_repository import KeyValueRepository

logger = logging.getLogger(__name__)

STORAGE_KEY = "weather-informer-recent-searches"
DEFAULT_MAX_ITEMS = 5


class RecentSearches:
    """
    Most-recent-first list of successful search queries.

    Owned by the application (stored on `app.state`) and persisted
    explicitly through `load` / `save`. Reads fail open: missing or
    corrupted data gives an empty list. Writes never raise.
    """

    def __init__(self, max_items: int = DEFAULT_MAX_ITEMS, items: List[str] | None = None):
        self.max_items = max_items
        self._items: List[str] = list(items or [])[:max_items]

    @property
    def items(self) -> List[str]:
        return list(self._items)

    def add(self, query: str) -> List[str]:
        """
        Put `query` first, dropping any case-insensitive duplicate, and
        keep at most `max_items` entries.
        """
        folded = query.lower()
        self._items = [query] + [s for s in self._items if s.lower() != folded]
        self._items = self._items[: self.max_items]
        return self.items

    def parse(self, raw: str | None) -> List[str]:
        """Decode stored JSON, returning [] for anything but a list of strings."""
        if not raw:
            return []
        try:
            data = json.loads(raw)
        except ValueError:
            logger.warning("Ignoring corrupted recent searches data")
            return []
        if not isinstance(data, list) or not all(isinstance(s, str) for s in data):
            logger.warning("Ignoring malformed recent searches data")
            return []
        return data[: self.max_items]

    async def load(self, repo: KeyValueRepository) -> List[str]:
        """
        Replace the in-memory list with the stored one.
        """
        try:
            raw = await repo.get(STORAGE_KEY)
        except SQLAlchemyError as e:
            logger.warning("Could not read recent searches: %s", e)
            raw = None
        self._items = self.parse(raw)
        return self.items

    async def save(self, repo: KeyValueRepository) -> bool:
        """
        Persist the current list. Returns False when the write failed.
        """
        try:
            await repo.set(STORAGE_KEY, json.dumps(self._items))
        except SQLAlchemyError as e:
            logger.warning("Could not save recent searches: %s", e)
            await repo.db.rollback()
            return False
        return True
