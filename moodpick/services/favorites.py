"""Favorites persisted as one versioned JSON envelope in a key-value store."""

import json

from loguru import logger
from pydantic import ValidationError as ModelValidationError

from moodpick.core.exceptions import PersistenceError
from moodpick.models.results import AnimeResult, FavoriteEntry, FavoritesEnvelope, MovieResult
from moodpick.services.storage import KeyValueStore


class FavoritesStore:
    """
    Favorites collection in insertion order, unique by derived id.

    Every mutation rewrites the whole envelope before returning. When the
    backing store fails, the collection keeps working in memory and
    ``persisted`` turns False.
    """

    def __init__(self, store: KeyValueStore, key: str = "favorites"):
        self.store = store
        self.key = key
        self._entries: list[FavoriteEntry] = []
        self.persisted = True

    async def load(self) -> list[FavoriteEntry]:
        """Load favorites from the store. A missing key means no favorites."""
        try:
            raw = await self.store.get(self.key)
        except PersistenceError as e:
            self._degrade("load", e)
            return self.list()

        self._entries = self._decode(raw)
        logger.info(f"Loaded {len(self._entries)} favorites")
        return self.list()

    def contains(self, entry_id: str) -> bool:
        return any(entry.id == entry_id for entry in self._entries)

    def is_favorite(self, result: MovieResult | AnimeResult) -> bool:
        return self.contains(FavoriteEntry.derive_id(result))

    async def toggle(self, result: MovieResult | AnimeResult) -> bool:
        """Add the result if absent, remove it if present. Returns True if now a favorite."""
        entry_id = FavoriteEntry.derive_id(result)
        if self.contains(entry_id):
            self._entries = [entry for entry in self._entries if entry.id != entry_id]
            added = False
        else:
            self._entries.append(FavoriteEntry.from_result(result))
            added = True
        await self._save()
        return added

    async def remove(self, entry_id: str) -> bool:
        if not self.contains(entry_id):
            return False
        self._entries = [entry for entry in self._entries if entry.id != entry_id]
        await self._save()
        return True

    async def clear(self) -> None:
        """Drop all favorites and erase the persisted copy."""
        self._entries = []
        try:
            await self.store.delete(self.key)
        except PersistenceError as e:
            self._degrade("clear", e)

    def dumps(self) -> str:
        return FavoritesEnvelope(favorites=self._entries).model_dump_json()

    async def _save(self) -> None:
        try:
            await self.store.set(self.key, self.dumps())
            self.persisted = True
        except PersistenceError as e:
            self._degrade("save", e)

    def _decode(self, raw: str | None) -> list[FavoriteEntry]:
        if not raw:
            return []
        try:
            data = json.loads(raw)
            # Unversioned data is a bare list of entries
            if isinstance(data, list):
                data = {"version": 0, "favorites": data}
            return FavoritesEnvelope.model_validate(data).favorites
        except (ValueError, ModelValidationError) as e:
            logger.warning(f"Ignoring unreadable favorites under '{self.key}': {e}")
            return []

    def _degrade(self, action: str, error: PersistenceError) -> None:
        logger.warning(f"Favorites {action} failed, keeping favorites in memory only: {error}")
        self.persisted = False

    # Defined last: the name would shadow the builtin in later annotations.
    def list(self) -> list[FavoriteEntry]:
        """Favorites in insertion order."""
        return [entry for entry in self._entries]
