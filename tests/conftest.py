"""
테스트 공통 설정 및 픽스처

pytest conftest.py - 모든 테스트에서 공유되는 설정과 픽스처 정의.
"""

import os
import sys
from pathlib import Path

import pytest

# 프로젝트 루트 경로를 sys.path에 추가
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from search_cache.config.schemas.cache import (  # noqa: E402
    EvictionConfig,
    FuzzyMatchConfig,
    SearchCacheConfig,
    StoreConfig,
)
from search_cache.infrastructure.storage.kv.memory_store import MemoryKeyValueStore  # noqa: E402
from search_cache.modules.core.cache.codec import encode_metadata  # noqa: E402
from search_cache.modules.core.cache.keys import CACHE_ENTRIES_KEY, meta_key  # noqa: E402
from search_cache.modules.core.cache.models import CacheEntryMetadata  # noqa: E402
from search_cache.modules.core.keywords.normalizer import KeywordNormalizer  # noqa: E402

HOUR_MS = 3_600_000


def pytest_configure(config: pytest.Config) -> None:
    """
    pytest 설정 훅

    테스트 환경에서는 memory 저장소를 사용하는 test.yaml 이 선택되도록 설정.
    """
    os.environ["ENVIRONMENT"] = "test"
    os.environ.setdefault("ERROR_LANGUAGE", "ko")


@pytest.fixture(scope="session")
def project_root_path() -> Path:
    """프로젝트 루트 경로"""
    return project_root


@pytest.fixture
def memory_store() -> MemoryKeyValueStore:
    """빈 인메모리 저장소 (연결 불필요)"""
    return MemoryKeyValueStore(max_keys=1000)


@pytest.fixture
def normalizer() -> KeywordNormalizer:
    return KeywordNormalizer()


@pytest.fixture
def cache_config() -> SearchCacheConfig:
    """테스트용 작은 캐시 설정"""
    return SearchCacheConfig(
        default_ttl=3600,
        store=StoreConfig(provider="memory"),
        eviction=EvictionConfig(strategy="lfu", max_entries=100, batch_size=10),
        fuzzy=FuzzyMatchConfig(enabled=True, similarity_threshold=0.7, max_candidates=10),
    )


@pytest.fixture
def seed_metadata(memory_store: MemoryKeyValueStore):
    """
    메타데이터 레코드를 직접 저장하고 cache:entries 에 추가하는 헬퍼

    eviction 점수 테스트에서 frequency / last_access 를 임의로 지정할 때 사용.
    """

    async def _seed(key: str, frequency: int, last_access: int, keywords: list[str] | None = None) -> None:
        metadata = CacheEntryMetadata(
            key=key,
            keywords=keywords or [],
            frequency=frequency,
            last_access=last_access,
            created=last_access,
            size=10,
        )
        await memory_store.set(meta_key(key), encode_metadata(metadata))
        await memory_store.sadd(CACHE_ENTRIES_KEY, key)

    return _seed
