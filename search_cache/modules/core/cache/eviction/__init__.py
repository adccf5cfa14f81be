"""
Eviction 모듈

키워드 인덱스 기반 캐시 eviction 정책 (LFU / LRU / Hybrid)
"""

from .factory import SUPPORTED_STRATEGIES, EvictionPolicyFactory
from .interfaces import IEvictionPolicy
from .policy import KeywordEvictionPolicy
from .scoring import HybridScoring, LFUScoring, LRUScoring, ScoringStrategy

__all__ = [
    "EvictionPolicyFactory",
    "HybridScoring",
    "IEvictionPolicy",
    "KeywordEvictionPolicy",
    "LFUScoring",
    "LRUScoring",
    "SUPPORTED_STRATEGIES",
    "ScoringStrategy",
]
