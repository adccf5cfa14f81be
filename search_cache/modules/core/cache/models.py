"""
Cache 데이터 모델

저장소에 JSON으로 저장되는 레코드(CacheEntry, CacheEntryMetadata)는 Pydantic으로,
조회/통계 결과처럼 프로세스 안에서만 쓰이는 값은 dataclass로 정의합니다.

타임스탬프는 모두 epoch 밀리초입니다.
"""

import time
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


def now_ms() -> int:
    """현재 시각 (epoch 밀리초)"""
    return int(time.time() * 1000)


# ========================================
# 저장소 레코드 (JSON)
# ========================================


class CacheEntry(BaseModel):
    """
    캐시 페이로드 레코드

    Attributes:
        data: 캐시된 검색 결과 (JSON 직렬화 가능한 값)
        timestamp: 저장 시각 (ms)
        ttl: 유효 시간 (초)
        keywords: 저장 당시 추출된 키워드
        frequency: 저장 시점 빈도 (항상 1, 호환용)
    """

    model_config = ConfigDict(populate_by_name=True)

    data: Any = None
    timestamp: int
    ttl: int = Field(ge=0)
    keywords: list[str] = Field(default_factory=list)
    frequency: int = 1

    def is_expired(self, now: int | None = None) -> bool:
        """now - timestamp > ttl * 1000 이면 만료"""
        current = now if now is not None else now_ms()
        return current - self.timestamp > self.ttl * 1000


class CacheEntryMetadata(BaseModel):
    """
    eviction 점수 계산용 엔트리 메타데이터 (cache:meta:<key>)

    JSON 필드명은 lastAccess (camelCase) 를 사용합니다.
    """

    model_config = ConfigDict(populate_by_name=True)

    key: str
    keywords: list[str] = Field(default_factory=list)
    frequency: int = Field(default=1, ge=1)
    last_access: int = Field(alias="lastAccess")
    created: int
    size: int = Field(default=0, ge=0)


# ========================================
# 조회 결과 / 통계 (프로세스 내부)
# ========================================


class HitType(str, Enum):
    """캐시 조회 결과 유형 (cache:metrics:hit_types 멤버)"""

    NORMALIZED = "normalized"
    FUZZY = "fuzzy"
    MISS = "miss"


@dataclass
class EvictionCandidate:
    """eviction 스캔 중에만 만들어지는 후보 (저장되지 않음)"""

    key: str
    frequency: int
    score: float
    keywords: list[str] = field(default_factory=list)


@dataclass
class KeywordStats:
    """키워드 통계"""

    keyword: str
    frequency: int
    associated_entry_count: int
    most_recent_access: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class CacheInfo:
    """캐시 사용량 요약"""

    total_entries: int
    max_entries: int
    utilization_percentage: float
    top_keywords: list[str]
    strategy_name: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class CacheHit:
    """
    캐시 히트 결과

    Attributes:
        data: 캐시된 페이로드
        hit_type: normalized (정규 키 일치) 또는 fuzzy (키워드 유사도 일치)
        key: 요청 쿼리의 정규 캐시 키
        original_key: 실제로 데이터를 가져온 저장 키 (exact 히트면 key와 동일)
        similarity: 키워드 Jaccard 유사도 (exact 히트면 1.0)
        fuzzy_match: 퍼지 히트 여부
    """

    data: Any
    hit_type: HitType
    key: str
    original_key: str
    similarity: float = 1.0
    fuzzy_match: bool = False

    def to_dict(self) -> dict[str, Any]:
        """HTTP 응답용: 페이로드에 _cacheMetadata 블록을 병합"""
        payload = dict(self.data) if isinstance(self.data, dict) else {"data": self.data}
        payload["_cacheMetadata"] = {
            "fuzzyMatch": self.fuzzy_match,
            "similarity": self.similarity,
            "originalKey": self.original_key,
            "hitType": self.hit_type.value,
        }
        return payload


@dataclass
class CacheMetrics:
    """조회 유형별 누적 카운트"""

    normalized: int = 0
    fuzzy: int = 0
    miss: int = 0

    @property
    def total(self) -> int:
        return self.normalized + self.fuzzy + self.miss

    @property
    def hit_rate(self) -> float:
        """(normalized + fuzzy) / total, 조회가 없으면 0.0"""
        if self.total == 0:
            return 0.0
        return round((self.normalized + self.fuzzy) / self.total, 4)

    def to_dict(self) -> dict[str, Any]:
        return {
            "normalized": self.normalized,
            "fuzzy": self.fuzzy,
            "miss": self.miss,
            "total": self.total,
            "hit_rate": self.hit_rate,
        }
