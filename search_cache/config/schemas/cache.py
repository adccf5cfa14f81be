"""
Cache (검색 캐시) 설정 스키마

키-값 저장소 연결, eviction 정책, 퍼지 매칭 설정을 정의합니다.
"""

from typing import Literal

from pydantic import Field, field_validator, model_validator

from .base import BaseConfig


class StoreConfig(BaseConfig):
    """
    키-값 저장소 설정

    지원 저장소: redis, dragonfly (Redis 프로토콜 호환), memory (단일 프로세스)

    Examples:
        >>> config = StoreConfig(provider="dragonfly", host="cache.internal")
        >>> config.port
        6379
    """

    provider: Literal["redis", "dragonfly", "memory"] = Field(
        default="redis",
        description="저장소 프로바이더 (redis, dragonfly, memory)",
    )

    url: str | None = Field(
        default=None,
        description="연결 URL (redis://...). 설정 시 host/port/password/db보다 우선",
    )

    host: str = Field(default="localhost", description="저장소 호스트")

    port: int = Field(default=6379, ge=1, le=65535, description="저장소 포트")

    password: str | None = Field(default=None, description="저장소 비밀번호")

    db: int = Field(default=0, ge=0, le=15, description="Redis DB 번호 (0-15)")

    operation_timeout: float = Field(
        default=2.0,
        gt=0.0,
        le=60.0,
        description="개별 저장소 명령 타임아웃 (초)",
    )

    max_keys: int = Field(
        default=10000,
        ge=1,
        description="memory 저장소의 TTL 키 (캐시 페이로드) 최대 수. eviction.max_entries 이상이어야 함",
    )

    fallback_to_memory: bool = Field(
        default=True,
        description="원격 저장소 연결 실패 시 memory 저장소로 대체",
    )

    @field_validator("url", "password")
    @classmethod
    def empty_to_none(cls, v: str | None) -> str | None:
        """빈 문자열은 미설정으로 취급"""
        if v is not None and not v.strip():
            return None
        return v


class EvictionConfig(BaseConfig):
    """
    Eviction 정책 설정

    strategy는 lfu, lru, hybrid 중 하나이며 알 수 없는 값은
    EvictionPolicyFactory에서 경고 후 lfu로 대체됩니다.
    """

    strategy: str = Field(default="lfu", description="eviction 전략 (lfu, lru, hybrid)")

    max_entries: int = Field(
        default=1000,
        ge=1,
        description="eviction 없이 유지할 최대 엔트리 수",
    )

    batch_size: int = Field(
        default=50,
        ge=1,
        description="한 번의 eviction 패스에서 제거할 엔트리 수",
    )

    frequency_weight: float = Field(
        default=0.6,
        ge=0.0,
        le=1.0,
        description="Hybrid 전략의 빈도 가중치",
    )

    recency_weight: float = Field(
        default=0.4,
        ge=0.0,
        le=1.0,
        description="Hybrid 전략의 최근성 가중치",
    )

    @field_validator("strategy")
    @classmethod
    def normalize_strategy(cls, v: str) -> str:
        return v.strip().lower()


class FuzzyMatchConfig(BaseConfig):
    """퍼지 매칭 (키워드 유사도 기반 조회) 설정"""

    enabled: bool = Field(default=True, description="퍼지 매칭 활성화 여부")

    similarity_threshold: float = Field(
        default=0.7,
        ge=0.0,
        le=1.0,
        description="퍼지 히트로 인정할 최소 Jaccard 유사도 (0.0-1.0)",
    )

    max_candidates: int = Field(
        default=10,
        ge=1,
        le=1000,
        description="유사도를 계산할 최대 후보 수",
    )


class SearchCacheConfig(BaseConfig):
    """
    검색 캐시 전체 설정

    Attributes:
        default_ttl: set() 호출 시 ttl 미지정이면 사용할 TTL (초)
        store: 키-값 저장소 설정
        eviction: eviction 정책 설정
        fuzzy: 퍼지 매칭 설정
    """

    default_ttl: int = Field(
        default=3600,
        ge=1,
        description="기본 캐시 TTL (초)",
    )

    store: StoreConfig = Field(default_factory=StoreConfig)

    eviction: EvictionConfig = Field(default_factory=EvictionConfig)

    fuzzy: FuzzyMatchConfig = Field(default_factory=FuzzyMatchConfig)

    @model_validator(mode="after")
    def validate_memory_capacity(self) -> "SearchCacheConfig":
        """memory 저장소 용량은 eviction 상한보다 작을 수 없음"""
        if self.store.provider == "memory" and self.store.max_keys < self.eviction.max_entries:
            raise ValueError(
                f"store.max_keys({self.store.max_keys})는 "
                f"eviction.max_entries({self.eviction.max_entries}) 이상이어야 함"
            )
        return self
