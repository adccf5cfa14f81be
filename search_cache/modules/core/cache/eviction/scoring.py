"""
Eviction 점수 전략

점수가 높을수록 먼저 제거됩니다.

- LFU:    1/(frequency+1) + ageHours*0.1
- LRU:    마지막 접근 이후 경과 ms (빈도 무시)
- Hybrid: frequency_weight * 1/(frequency+1) + recency_weight * ageHours*0.1

ageHours 는 마지막 접근(last_access) 이후 경과 시간(시간 단위)입니다.
"""

from dataclasses import dataclass
from typing import Protocol

from ..models import CacheEntryMetadata

MS_PER_HOUR = 3_600_000
AGE_HOURS_FACTOR = 0.1


def age_in_hours(metadata: CacheEntryMetadata, now: int) -> float:
    return (now - metadata.last_access) / MS_PER_HOUR


class ScoringStrategy(Protocol):
    """eviction 점수 전략 프로토콜"""

    name: str
    increments_frequency: bool

    def score(self, metadata: CacheEntryMetadata, now: int) -> float:
        """eviction 점수 (높을수록 제거 우선)"""
        ...


@dataclass(frozen=True)
class LFUScoring:
    """빈도 기반: 적게 쓰이고 오래된 엔트리 우선 제거"""

    name: str = "LFU"
    increments_frequency: bool = True

    def score(self, metadata: CacheEntryMetadata, now: int) -> float:
        return 1 / (metadata.frequency + 1) + age_in_hours(metadata, now) * AGE_HOURS_FACTOR


@dataclass(frozen=True)
class LRUScoring:
    """최근성 기반: 마지막 접근이 가장 오래된 엔트리 우선 제거"""

    name: str = "LRU"
    increments_frequency: bool = False

    def score(self, metadata: CacheEntryMetadata, now: int) -> float:
        return float(now - metadata.last_access)


@dataclass(frozen=True)
class HybridScoring:
    """빈도 + 최근성 가중합"""

    frequency_weight: float = 0.6
    recency_weight: float = 0.4
    name: str = "Hybrid"
    increments_frequency: bool = True

    def score(self, metadata: CacheEntryMetadata, now: int) -> float:
        frequency_score = 1 / (metadata.frequency + 1)
        recency_score = age_in_hours(metadata, now) * AGE_HOURS_FACTOR
        return self.frequency_weight * frequency_score + self.recency_weight * recency_score
