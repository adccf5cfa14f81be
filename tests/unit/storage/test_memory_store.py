"""
MemoryKeyValueStore 테스트

테스트 범위:
1. 문자열 키 (get/set/delete/exists, 카운터)
2. TTL 계산 함수 / max_keys LRU 제거 (TTL 키만 대상)
3. 집합 (삽입 순서, 빈 집합 제거)
4. 정렬 집합 (ZREVRANGE 인덱스 규칙)
5. flush / 통계
"""

import pytest

from search_cache.infrastructure.storage.kv.memory_store import MemoryKeyValueStore, _time_to_use


@pytest.mark.unit
class TestStringKeys:
    """문자열 키"""

    @pytest.mark.asyncio
    async def test_set_get_delete(self, memory_store: MemoryKeyValueStore) -> None:
        await memory_store.set("k", "v", ttl=60)

        assert await memory_store.get("k") == "v"
        assert await memory_store.exists("k") is True
        assert await memory_store.delete("k") == 1
        assert await memory_store.get("k") is None
        assert await memory_store.delete("k") == 0

    @pytest.mark.asyncio
    async def test_counters(self, memory_store: MemoryKeyValueStore) -> None:
        assert await memory_store.incrby("counter", 1) == 1
        assert await memory_store.incrby("counter", 2) == 3
        assert await memory_store.decrby("counter", 5) == -2
        assert await memory_store.get("counter") == "-2"

    def test_time_to_use(self) -> None:
        assert _time_to_use("k", ("v", 5), 10.0) == 15.0

    @pytest.mark.asyncio
    async def test_max_keys_evicts_oldest_ttl_key(self) -> None:
        store = MemoryKeyValueStore(max_keys=2)
        await store.set("a", "1", ttl=60)
        await store.set("b", "2", ttl=60)
        await store.set("c", "3", ttl=60)

        assert await store.exists("a") is False
        assert await store.exists("b") is True
        assert await store.exists("c") is True

    @pytest.mark.asyncio
    async def test_keys_without_ttl_are_not_bounded(self) -> None:
        """메타데이터/카운터처럼 TTL 없는 키는 용량 제한으로 사라지지 않음"""
        store = MemoryKeyValueStore(max_keys=2)
        await store.set("cache:meta:a", "meta")
        await store.incrby("keyword:freq:laptop", 1)
        for key in ("a", "b", "c"):
            await store.set(key, key, ttl=60)

        assert await store.get("cache:meta:a") == "meta"
        assert await store.get("keyword:freq:laptop") == "1"
        assert await store.exists("a") is False
        assert store.get_stats()["persistent_keys"] == 2

    @pytest.mark.asyncio
    async def test_set_moves_key_between_ttl_and_persistent(self, memory_store: MemoryKeyValueStore) -> None:
        await memory_store.set("k", "ttl", ttl=60)
        await memory_store.set("k", "forever")

        assert await memory_store.get("k") == "forever"
        assert await memory_store.delete("k") == 1

        await memory_store.set("k", "forever")
        await memory_store.set("k", "ttl", ttl=60)

        assert await memory_store.get("k") == "ttl"
        assert memory_store.get_stats()["persistent_keys"] == 0

    @pytest.mark.asyncio
    async def test_incrby_keeps_ttl(self, memory_store: MemoryKeyValueStore) -> None:
        await memory_store.set("counter", "4", ttl=60)

        assert await memory_store.incrby("counter", 1) == 5
        assert memory_store._strings["counter"] == ("5", 60)


@pytest.mark.unit
class TestSets:
    """집합"""

    @pytest.mark.asyncio
    async def test_sadd_keeps_insertion_order(self, memory_store: MemoryKeyValueStore) -> None:
        assert await memory_store.sadd("s", "b", "a") == 2
        assert await memory_store.sadd("s", "a", "c") == 1

        assert await memory_store.smembers("s") == ["b", "a", "c"]
        assert await memory_store.scard("s") == 3

    @pytest.mark.asyncio
    async def test_srem_removes_empty_set(self, memory_store: MemoryKeyValueStore) -> None:
        await memory_store.sadd("s", "a")

        assert await memory_store.srem("s", "a", "missing") == 1
        assert await memory_store.exists("s") is False
        assert await memory_store.srem("s", "a") == 0
        assert await memory_store.smembers("s") == []


@pytest.mark.unit
class TestSortedSets:
    """정렬 집합"""

    @pytest.mark.asyncio
    async def test_zrevrange_orders_by_score(self, memory_store: MemoryKeyValueStore) -> None:
        await memory_store.zincrby("z", 1, "low")
        await memory_store.zincrby("z", 5, "high")
        await memory_store.zincrby("z", 3, "mid")

        assert await memory_store.zrevrange("z", 0, -1) == ["high", "mid", "low"]
        assert await memory_store.zrevrange("z", 0, 1) == ["high", "mid"]
        assert await memory_store.zrevrange("z", -1, -1) == ["low"]
        assert await memory_store.zrevrange("z", 0, 0, withscores=True) == [("high", 5.0)]

    @pytest.mark.asyncio
    async def test_zrevrange_empty_ranges(self, memory_store: MemoryKeyValueStore) -> None:
        await memory_store.zincrby("z", 1, "only")

        assert await memory_store.zrevrange("z", 2, 5) == []
        assert await memory_store.zrevrange("missing", 0, -1) == []

    @pytest.mark.asyncio
    async def test_zincrby_and_zrem(self, memory_store: MemoryKeyValueStore) -> None:
        assert await memory_store.zincrby("z", 2, "a") == 2.0
        assert await memory_store.zincrby("z", -1, "a") == 1.0

        assert await memory_store.zrem("z", "a") == 1
        assert await memory_store.exists("z") is False


@pytest.mark.unit
class TestLifecycle:
    """flush / 통계 / 생명주기"""

    @pytest.mark.asyncio
    async def test_flush(self, memory_store: MemoryKeyValueStore) -> None:
        await memory_store.set("k", "v")
        await memory_store.sadd("s", "a")
        await memory_store.zincrby("z", 1, "a")

        await memory_store.flush()

        assert memory_store.get_stats() == {
            "string_keys": 0,
            "persistent_keys": 0,
            "set_keys": 0,
            "sorted_set_keys": 0,
            "max_keys": 1000,
        }

    @pytest.mark.asyncio
    async def test_async_context_manager(self) -> None:
        async with MemoryKeyValueStore() as store:
            assert await store.ping() is True
            await store.set("k", "v")
            assert await store.get("k") == "v"
