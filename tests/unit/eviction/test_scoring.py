"""
Eviction 점수 전략 테스트

LFU:    1/(f+1) + ageHours*0.1
LRU:    now - last_access
Hybrid: fw*1/(f+1) + rw*ageHours*0.1
"""

import pytest

from search_cache.modules.core.cache.eviction.scoring import (
    MS_PER_HOUR,
    HybridScoring,
    LFUScoring,
    LRUScoring,
    age_in_hours,
)
from search_cache.modules.core.cache.models import CacheEntryMetadata

NOW = 1_700_000_000_000


def make_metadata(frequency: int, hours_ago: float) -> CacheEntryMetadata:
    last_access = int(NOW - hours_ago * MS_PER_HOUR)
    return CacheEntryMetadata(
        key="search:laptop:1:10",
        keywords=["laptop"],
        frequency=frequency,
        last_access=last_access,
        created=last_access,
        size=10,
    )


@pytest.mark.unit
class TestScoring:
    """전략별 점수"""

    def test_age_in_hours(self) -> None:
        assert age_in_hours(make_metadata(1, 3), NOW) == pytest.approx(3.0)

    def test_lfu_score(self) -> None:
        scoring = LFUScoring()

        assert scoring.score(make_metadata(1, 0), NOW) == pytest.approx(0.5)
        assert scoring.score(make_metadata(3, 2), NOW) == pytest.approx(0.45)

    def test_lfu_prefers_rarely_used(self) -> None:
        scoring = LFUScoring()

        rare = scoring.score(make_metadata(1, 0), NOW)
        popular = scoring.score(make_metadata(20, 0), NOW)
        assert rare > popular

    def test_lru_ignores_frequency(self) -> None:
        scoring = LRUScoring()

        assert scoring.score(make_metadata(1, 1), NOW) == scoring.score(make_metadata(500, 1), NOW)
        assert scoring.score(make_metadata(1, 1), NOW) == float(MS_PER_HOUR)

    def test_hybrid_combines_weights(self) -> None:
        scoring = HybridScoring()

        assert scoring.score(make_metadata(1, 0), NOW) == pytest.approx(0.3)
        assert scoring.score(make_metadata(1, 10), NOW) == pytest.approx(0.7)

    def test_hybrid_custom_weights(self) -> None:
        scoring = HybridScoring(frequency_weight=1.0, recency_weight=0.0)

        assert scoring.score(make_metadata(1, 10), NOW) == pytest.approx(0.5)

    def test_frequency_increment_flags(self) -> None:
        assert LFUScoring().increments_frequency is True
        assert HybridScoring().increments_frequency is True
        assert LRUScoring().increments_frequency is False

    def test_strategy_names(self) -> None:
        assert [LFUScoring().name, LRUScoring().name, HybridScoring().name] == ["LFU", "LRU", "Hybrid"]
