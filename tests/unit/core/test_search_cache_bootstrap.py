"""
Search Cache 부트스트랩 / DI Container 테스트

테스트 범위:
1. 설정 → Container → 서비스 구성 (전략, 공유 인스턴스)
2. 저장소 연결 실패 시 memory 폴백
3. 폴백 비활성화 시 예외 전파
4. 컨텍스트 종료 시 저장소 연결 해제
"""

from unittest.mock import AsyncMock

import pytest

from search_cache.config.schemas.cache import EvictionConfig, SearchCacheConfig, StoreConfig
from search_cache.config.schemas.root import RootConfig
from search_cache.core.bootstrap import build_search_cache, create_container, open_search_cache
from search_cache.core.di_container import create_store_via_factory
from search_cache.infrastructure.storage.kv.memory_store import MemoryKeyValueStore
from search_cache.infrastructure.storage.kv.redis_store import RedisKeyValueStore
from search_cache.lib.errors import StoreUnavailableError
from search_cache.modules.core.cache.search_cache import SearchCacheService


def failing_store() -> AsyncMock:
    store = AsyncMock()
    store.connect.side_effect = StoreUnavailableError(reason="connection refused", operation="ping")
    return store


@pytest.mark.unit
class TestContainer:
    """Container 구성"""

    def test_build_search_cache(self, cache_config: SearchCacheConfig) -> None:
        service = build_search_cache(cache_config)

        assert isinstance(service, SearchCacheService)
        assert isinstance(service.store, MemoryKeyValueStore)
        assert service.policy.get_strategy_name() == "LFU"

    def test_shared_instances(self, cache_config: SearchCacheConfig) -> None:
        container = create_container(cache_config)
        service = container.search_cache()

        assert service.keyword_index is container.keyword_index()
        assert service.policy.keyword_index is service.keyword_index
        assert service.policy.store is service.store
        assert service.normalizer is service.policy.normalizer

    def test_root_config_and_strategy(self) -> None:
        config = RootConfig(
            cache=SearchCacheConfig(
                store=StoreConfig(provider="memory"),
                eviction=EvictionConfig(strategy="hybrid", max_entries=5, batch_size=2),
            )
        )

        service = build_search_cache(config)

        assert service.policy.get_strategy_name() == "Hybrid"
        assert service.policy.max_entries == 5
        assert service.policy.batch_size == 2

    def test_injected_store(self, cache_config: SearchCacheConfig, memory_store: MemoryKeyValueStore) -> None:
        service = build_search_cache(cache_config, store=memory_store)

        assert service.store is memory_store

    def test_store_factory_helper(self) -> None:
        store = create_store_via_factory({"provider": "redis", "host": "cache.internal"})

        assert isinstance(store, RedisKeyValueStore)
        assert store.host == "cache.internal"


@pytest.mark.unit
class TestOpenSearchCache:
    """open_search_cache 생명주기"""

    @pytest.mark.asyncio
    async def test_memory_config(self, cache_config: SearchCacheConfig) -> None:
        async with open_search_cache(cache_config) as cache:
            assert await cache.set("laptop charger", 1, 10, {"results": []}) is True
            hit = await cache.get("chargers laptop")
            assert hit is not None

    @pytest.mark.asyncio
    async def test_fallback_to_memory(self, cache_config: SearchCacheConfig) -> None:
        store = failing_store()

        async with open_search_cache(cache_config, store=store) as cache:
            assert isinstance(cache.store, MemoryKeyValueStore)
            assert cache.policy.store is cache.store
            assert await cache.set("laptop", 1, 10, "data") is True

        store.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_no_fallback_raises(self) -> None:
        config = SearchCacheConfig(store=StoreConfig(provider="memory", fallback_to_memory=False))

        with pytest.raises(StoreUnavailableError):
            async with open_search_cache(config, store=failing_store()):
                pass

    @pytest.mark.asyncio
    async def test_store_closed_on_exit(self, cache_config: SearchCacheConfig) -> None:
        store = AsyncMock()

        with pytest.raises(RuntimeError):
            async with open_search_cache(cache_config, store=store):
                raise RuntimeError("boom")

        store.connect.assert_awaited_once()
        store.close.assert_awaited_once()
