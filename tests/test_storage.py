import json

import pytest
import redis.asyncio as redis

from moodpick.core.config import Settings
from moodpick.core.exceptions import PersistenceError
from moodpick.services.storage import FileKeyValueStore, RedisKeyValueStore, create_store


class FakeRedis:
    def __init__(self, fail=False):
        self.data = {}
        self.fail = fail
        self.closed = False

    def _check(self):
        if self.fail:
            raise redis.ConnectionError("redis down")

    async def get(self, key):
        self._check()
        return self.data.get(key)

    async def set(self, key, value):
        self._check()
        self.data[key] = value
        return True

    async def delete(self, key):
        self._check()
        return 1 if self.data.pop(key, None) is not None else 0

    async def aclose(self):
        self.closed = True


class TestFileKeyValueStore:
    async def test_missing_file_reads_as_empty(self, tmp_path):
        store = FileKeyValueStore(tmp_path / "nested" / "store.json")
        assert await store.get("favorites") is None

    async def test_set_get_delete(self, tmp_path):
        path = tmp_path / "nested" / "store.json"
        store = FileKeyValueStore(path)

        await store.set("favorites", "[]")
        await store.set("other", "x")
        assert await store.get("favorites") == "[]"
        assert json.loads(path.read_text(encoding="utf-8")) == {"favorites": "[]", "other": "x"}

        await store.delete("favorites")
        assert await store.get("favorites") is None
        assert await store.get("other") == "x"

    @pytest.mark.parametrize("content", ["{oops", "[1, 2]", "null"])
    async def test_unreadable_file_is_moved_aside_and_reads_empty(self, tmp_path, content):
        path = tmp_path / "store.json"
        path.write_text(content, encoding="utf-8")
        store = FileKeyValueStore(path)

        assert await store.get("favorites") is None
        assert not path.exists()
        assert store.backup_path.read_text(encoding="utf-8") == content

    async def test_write_after_corrupt_file_succeeds(self, tmp_path):
        path = tmp_path / "store.json"
        path.write_bytes(b"\xff\xfe not utf-8")
        store = FileKeyValueStore(path)

        await store.set("favorites", "[]")

        assert json.loads(path.read_text(encoding="utf-8")) == {"favorites": "[]"}
        assert await store.get("favorites") == "[]"

    async def test_unwritable_location_raises_persistence_error(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory", encoding="utf-8")

        with pytest.raises(PersistenceError):
            await FileKeyValueStore(blocker / "store.json").set("favorites", "[]")


class TestRedisKeyValueStore:
    async def test_set_get_delete(self):
        client = FakeRedis()
        store = RedisKeyValueStore("redis://unused", client=client)

        await store.set("favorites", "[]")
        assert await store.get("favorites") == "[]"
        await store.delete("favorites")
        assert await store.get("favorites") is None

        await store.close()
        assert client.closed is True

    async def test_redis_errors_raise_persistence_error(self):
        store = RedisKeyValueStore("redis://unused", client=FakeRedis(fail=True))

        with pytest.raises(PersistenceError):
            await store.get("favorites")
        with pytest.raises(PersistenceError):
            await store.set("favorites", "[]")


def test_create_store_picks_backend(tmp_path):
    file_store = create_store(Settings(STORAGE_BACKEND="file", FAVORITES_PATH=tmp_path / "s.json"))
    redis_store = create_store(Settings(STORAGE_BACKEND="redis", REDIS_URL="redis://localhost:6399/0"))

    assert isinstance(file_store, FileKeyValueStore)
    assert file_store.path == tmp_path / "s.json"
    assert isinstance(redis_store, RedisKeyValueStore)
