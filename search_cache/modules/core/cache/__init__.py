"""
Search Cache 모듈

키워드 정규화 기반 검색 결과 캐시와 eviction 정책
"""

from .eviction import EvictionPolicyFactory, IEvictionPolicy, KeywordEvictionPolicy
from .keyword_index import KeywordIndex
from .models import (
    CacheEntry,
    CacheEntryMetadata,
    CacheHit,
    CacheInfo,
    CacheMetrics,
    EvictionCandidate,
    HitType,
    KeywordStats,
)
from .search_cache import SearchCacheService

__all__ = [
    "CacheEntry",
    "CacheEntryMetadata",
    "CacheHit",
    "CacheInfo",
    "CacheMetrics",
    "EvictionCandidate",
    "EvictionPolicyFactory",
    "HitType",
    "IEvictionPolicy",
    "KeywordEvictionPolicy",
    "KeywordIndex",
    "KeywordStats",
    "SearchCacheService",
]
