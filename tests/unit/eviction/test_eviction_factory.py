"""
EvictionPolicyFactory 테스트

테스트 범위:
1. 전략 이름 → 점수 전략 매핑 (대소문자 무시)
2. 알 수 없는 전략 → lfu 대체 (CACHE-004)
3. EvictionConfig 값 전달 (max_entries, batch_size, Hybrid 가중치)
4. 레지스트리 조회
"""

import pytest

from search_cache.config.schemas.cache import EvictionConfig
from search_cache.modules.core.cache.eviction import (
    EvictionPolicyFactory,
    HybridScoring,
    LFUScoring,
    LRUScoring,
)
from search_cache.modules.core.cache.keyword_index import KeywordIndex


@pytest.mark.unit
class TestEvictionPolicyFactory:
    """EvictionPolicyFactory"""

    @pytest.mark.parametrize(
        ("strategy", "scoring_class"),
        [("lfu", LFUScoring), ("LRU", LRUScoring), (" hybrid ", HybridScoring)],
    )
    def test_create_by_name(self, memory_store, strategy: str, scoring_class: type) -> None:
        policy = EvictionPolicyFactory.create(strategy, memory_store)

        assert isinstance(policy.scoring, scoring_class)

    def test_unknown_strategy_falls_back_to_lfu(self, memory_store) -> None:
        policy = EvictionPolicyFactory.create("mru", memory_store)

        assert policy.get_strategy_name() == "LFU"

    def test_empty_strategy_uses_default(self, memory_store) -> None:
        assert EvictionPolicyFactory.create("", memory_store).get_strategy_name() == "LFU"

    def test_config_values_are_applied(self, memory_store) -> None:
        config = EvictionConfig(
            strategy="hybrid",
            max_entries=25,
            batch_size=5,
            frequency_weight=0.9,
            recency_weight=0.1,
        )

        policy = EvictionPolicyFactory.create_from_config(config, memory_store)

        assert policy.max_entries == 25
        assert policy.batch_size == 5
        assert policy.scoring == HybridScoring(frequency_weight=0.9, recency_weight=0.1)

    def test_shared_keyword_index(self, memory_store, normalizer) -> None:
        index = KeywordIndex(memory_store, normalizer)

        policy = EvictionPolicyFactory.create(
            "lru", memory_store, normalizer=normalizer, keyword_index=index
        )

        assert policy.keyword_index is index
        assert policy.normalizer is normalizer

    def test_registry(self) -> None:
        assert EvictionPolicyFactory.get_supported_strategies() == ["lfu", "lru", "hybrid"]
        assert EvictionPolicyFactory.get_strategy_info("LRU")["name"] == "LRU"
        assert EvictionPolicyFactory.get_strategy_info("mru") is None
