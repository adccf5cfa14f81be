"""
DI Container - Search Cache 의존성 컨테이너

dependency-injector 라이브러리 기반으로 저장소 → 정규화기 → 키워드 인덱스 →
eviction 정책 → 검색 캐시 서비스를 연결합니다.

Provider 타입:
- Configuration: RootConfig.model_dump() 결과를 from_dict로 주입
- Singleton: 프로세스 내 공유 인스턴스 (store, normalizer, policy, service)
"""

from typing import Any

from dependency_injector import containers, providers

from ..config.schemas.cache import EvictionConfig, SearchCacheConfig, StoreConfig
from ..infrastructure.storage.kv.factory import KeyValueStoreFactory
from ..infrastructure.storage.kv.memory_store import MemoryKeyValueStore
from ..lib.errors import StoreUnavailableError
from ..lib.logger import get_logger
from ..modules.core.cache.eviction.factory import EvictionPolicyFactory
from ..modules.core.cache.eviction.policy import KeywordEvictionPolicy
from ..modules.core.cache.keyword_index import KeywordIndex
from ..modules.core.cache.search_cache import SearchCacheService
from ..modules.core.keywords.normalizer import KeywordNormalizer
from ..modules.core.keywords.stopwords import StopwordFilter
from .interfaces.storage import IKeyValueStore

logger = get_logger(__name__)


# ========================================
# Helper Functions
# ========================================


def create_store_via_factory(store_config: dict[str, Any] | None) -> IKeyValueStore:
    """
    KeyValueStoreFactory 기반 저장소 생성

    Args:
        store_config: cache.store 설정 딕셔너리

    Returns:
        연결 전 상태의 저장소 인스턴스
    """
    config = StoreConfig.model_validate(store_config or {})
    return KeyValueStoreFactory.create_from_config(config)


def create_eviction_policy(
    eviction_config: dict[str, Any] | None,
    store: IKeyValueStore,
    normalizer: KeywordNormalizer,
    keyword_index: KeywordIndex,
) -> KeywordEvictionPolicy:
    """cache.eviction.strategy 기반 정책 생성"""
    config = EvictionConfig.model_validate(eviction_config or {})
    return EvictionPolicyFactory.create_from_config(
        config,
        store,
        normalizer=normalizer,
        keyword_index=keyword_index,
    )


def create_search_cache_config(cache_config: dict[str, Any] | None) -> SearchCacheConfig:
    return SearchCacheConfig.model_validate(cache_config or {})


class SearchCacheContainer(containers.DeclarativeContainer):
    """
    Search Cache DI Container

    Provider 그룹:
    ┌─────────────────────────────────────────────┐
    │ 1. Storage                                  │
    │    - store (KeyValueStoreFactory)           │
    ├─────────────────────────────────────────────┤
    │ 2. Keywords                                 │
    │    - stopword_filter, normalizer            │
    │    - keyword_index                          │
    ├─────────────────────────────────────────────┤
    │ 3. Cache                                    │
    │    - eviction_policy, search_cache          │
    └─────────────────────────────────────────────┘

    저장소 연결은 initialize_async_resources()에서 수행합니다.
    """

    config = providers.Configuration()

    cache_config = providers.Singleton(create_search_cache_config, cache_config=config.cache)

    # 1. Storage
    store = providers.Singleton(create_store_via_factory, store_config=config.cache.store)

    # 2. Keywords
    stopword_filter = providers.Singleton(StopwordFilter)

    normalizer = providers.Singleton(KeywordNormalizer, stopword_filter=stopword_filter)

    keyword_index = providers.Singleton(KeywordIndex, store=store, normalizer=normalizer)

    # 3. Cache
    eviction_policy = providers.Singleton(
        create_eviction_policy,
        eviction_config=config.cache.eviction,
        store=store,
        normalizer=normalizer,
        keyword_index=keyword_index,
    )

    search_cache = providers.Singleton(
        SearchCacheService,
        store=store,
        policy=eviction_policy,
        normalizer=normalizer,
        config=cache_config,
        keyword_index=keyword_index,
    )


async def initialize_async_resources(container: SearchCacheContainer) -> IKeyValueStore:
    """
    저장소 연결 (PING 헬스체크 포함)

    원격 저장소 연결에 실패하고 cache.store.fallback_to_memory 가 켜져 있으면
    MemoryKeyValueStore로 폴백하여 store provider를 override 합니다.

    Raises:
        StoreUnavailableError: 연결 실패 + 폴백 비활성화
    """
    cache_config: SearchCacheConfig = container.cache_config()
    store = container.store()

    try:
        await store.connect()
        logger.info(
            "키-값 저장소 연결 성공",
            extra={"provider": cache_config.store.provider},
        )
    except StoreUnavailableError as e:
        if not cache_config.store.fallback_to_memory:
            logger.error(
                "키-값 저장소 연결 실패",
                extra={"provider": cache_config.store.provider, "error": str(e)},
            )
            raise

        logger.warning(
            "키-값 저장소 연결 실패, MemoryKeyValueStore로 폴백",
            extra={
                "provider": cache_config.store.provider,
                "error": str(e),
                "error_code": e.error_code,
            },
        )
        await store.close()
        store = MemoryKeyValueStore(max_keys=cache_config.store.max_keys)
        await store.connect()
        container.store.override(providers.Object(store))

    return store


async def cleanup_resources(container: SearchCacheContainer) -> None:
    """저장소 연결 종료 후 폴백 override 해제"""
    try:
        await container.store().close()
        logger.info("키-값 저장소 종료 완료")
    finally:
        container.store.reset_override()
