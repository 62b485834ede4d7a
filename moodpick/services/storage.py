import asyncio
import json
from pathlib import Path
from typing import Protocol

import redis.asyncio as redis
from loguru import logger

from moodpick.core.config import Settings
from moodpick.core.exceptions import PersistenceError


class KeyValueStore(Protocol):
    """String key-value storage used to persist favorites."""

    async def get(self, key: str) -> str | None: ...

    async def set(self, key: str, value: str) -> None: ...

    async def delete(self, key: str) -> None: ...

    async def close(self) -> None: ...


class FileKeyValueStore:
    """All keys live in one local JSON object file, rewritten on every change.

    File I/O runs in a worker thread. A file that does not hold a JSON object
    is moved aside to ``<name>.bak`` and treated as empty, so the next write
    replaces it.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path)

    @property
    def backup_path(self) -> Path:
        return self.path.with_suffix(self.path.suffix + ".bak")

    def _read_all(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except OSError as exc:
            raise PersistenceError(f"Failed to read {self.path}: {exc}") from exc
        except ValueError:
            # also covers UnicodeDecodeError
            data = None
        if not isinstance(data, dict):
            self._discard_unreadable()
            return {}
        return data

    def _discard_unreadable(self) -> None:
        logger.warning(f"Unreadable store file {self.path}, moving it to {self.backup_path}")
        try:
            self.path.replace(self.backup_path)
        except OSError as exc:
            raise PersistenceError(f"Failed to move aside {self.path}: {exc}") from exc

    def _write_all(self, data: dict[str, str]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
            tmp_path.replace(self.path)
        except OSError as exc:
            raise PersistenceError(f"Failed to write {self.path}: {exc}") from exc

    def _set(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        self._write_all(data)

    def _delete(self, key: str) -> None:
        data = self._read_all()
        if data.pop(key, None) is not None:
            self._write_all(data)

    async def get(self, key: str) -> str | None:
        data = await asyncio.to_thread(self._read_all)
        return data.get(key)

    async def set(self, key: str, value: str) -> None:
        await asyncio.to_thread(self._set, key, value)

    async def delete(self, key: str) -> None:
        await asyncio.to_thread(self._delete, key)

    async def close(self) -> None:
        return None


class RedisKeyValueStore:
    def __init__(self, url: str, client: redis.Redis | None = None) -> None:
        self.url = url
        self._client: redis.Redis | None = client

    async def get_client(self) -> redis.Redis:
        if self._client is None:
            logger.info("Creating Redis client for favorites storage")
            self._client = redis.from_url(
                self.url,
                decode_responses=True,
                encoding="utf-8",
                socket_connect_timeout=5,
                socket_timeout=5,
                health_check_interval=30,
            )
        return self._client

    async def get(self, key: str) -> str | None:
        try:
            client = await self.get_client()
            return await client.get(key)
        except (redis.RedisError, OSError) as exc:
            raise PersistenceError(f"Failed to get key '{key}' from Redis: {exc}") from exc

    async def set(self, key: str, value: str) -> None:
        try:
            client = await self.get_client()
            await client.set(key, value)
        except (redis.RedisError, OSError) as exc:
            raise PersistenceError(f"Failed to set key '{key}' in Redis: {exc}") from exc

    async def delete(self, key: str) -> None:
        try:
            client = await self.get_client()
            await client.delete(key)
        except (redis.RedisError, OSError) as exc:
            raise PersistenceError(f"Failed to delete key '{key}' from Redis: {exc}") from exc

    async def close(self) -> None:
        """Close and disconnect the Redis client"""
        if self._client is not None:
            try:
                await self._client.aclose()
                logger.info("Favorites Redis client closed")
            except Exception as exc:
                logger.warning(f"Failed to close favorites Redis client: {exc}")
            finally:
                self._client = None


def create_store(settings: Settings) -> KeyValueStore:
    if settings.STORAGE_BACKEND == "redis":
        return RedisKeyValueStore(settings.REDIS_URL)
    return FileKeyValueStore(settings.FAVORITES_PATH)
