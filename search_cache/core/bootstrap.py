"""
Search Cache 부트스트랩

설정 로딩 → DI Container 구성 → 저장소 연결 → 서비스 반환 → 종료 시 연결 해제

사용 예시:
    from search_cache.core.bootstrap import open_search_cache

    async with open_search_cache() as cache:
        await cache.set("laptop charger usb", 1, 10, {"results": [...]})
        hit = await cache.get("usb laptop chargers")
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from dependency_injector import providers

from ..config.schemas.cache import SearchCacheConfig
from ..config.schemas.root import RootConfig
from ..lib.config_loader import load_config
from ..lib.logger import get_logger
from ..modules.core.cache.search_cache import SearchCacheService
from .di_container import SearchCacheContainer, cleanup_resources, initialize_async_resources
from .interfaces.storage import IKeyValueStore

logger = get_logger(__name__)


def create_container(
    config: RootConfig | SearchCacheConfig | None = None,
    store: IKeyValueStore | None = None,
) -> SearchCacheContainer:
    """
    DI Container 생성

    Args:
        config: 전체 설정, cache 섹션 설정, 또는 None (YAML + 환경변수에서 로딩)
        store: 직접 주입할 저장소 (설정의 provider 무시)
    """
    if config is None:
        config = load_config()

    cache_config = config.cache if isinstance(config, RootConfig) else config

    container = SearchCacheContainer()
    container.config.from_dict({"cache": cache_config.model_dump()})

    if store is not None:
        container.store.override(providers.Object(store))

    return container


def build_search_cache(
    config: RootConfig | SearchCacheConfig | None = None,
    store: IKeyValueStore | None = None,
) -> SearchCacheService:
    """
    연결 전 상태의 SearchCacheService 생성

    저장소 연결/종료는 호출자가 직접 관리합니다 (service.store.connect()).
    """
    return create_container(config, store).search_cache()


@asynccontextmanager
async def open_search_cache(
    config: RootConfig | SearchCacheConfig | None = None,
    store: IKeyValueStore | None = None,
) -> AsyncIterator[SearchCacheService]:
    """
    저장소 연결까지 마친 SearchCacheService 컨텍스트

    원격 저장소 연결 실패 시 fallback_to_memory 설정에 따라 memory 저장소로 폴백하며,
    블록을 벗어나면 항상 저장소 연결을 닫습니다.
    """
    container = create_container(config, store)
    await initialize_async_resources(container)

    try:
        service = container.search_cache()
        logger.info(
            "Search Cache 준비 완료",
            extra={"strategy": service.policy.get_strategy_name()},
        )
        yield service
    finally:
        await cleanup_resources(container)
