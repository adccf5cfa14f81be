"""
EvictionPolicyFactory - 설정 기반 eviction 정책 선택 팩토리

YAML 설정의 cache.eviction.strategy 값에 따라 점수 전략을 골라
KeywordEvictionPolicy 인스턴스를 생성합니다.

사용 예시:
    from search_cache.modules.core.cache.eviction import EvictionPolicyFactory

    policy = EvictionPolicyFactory.create("hybrid", store, config=eviction_config)

    # 지원 전략 조회
    EvictionPolicyFactory.get_supported_strategies()
"""

from typing import Any

from ...keywords.normalizer import KeywordNormalizer
from .....config.schemas.cache import EvictionConfig
from .....core.interfaces.storage import IKeyValueStore
from .....lib.errors import ErrorCode
from .....lib.logger import get_logger
from ..keyword_index import KeywordIndex
from .policy import KeywordEvictionPolicy
from .scoring import HybridScoring, LFUScoring, LRUScoring, ScoringStrategy

logger = get_logger(__name__)

DEFAULT_STRATEGY = "lfu"

# 지원 전략 레지스트리
# 새 전략 추가 시 여기에 등록
SUPPORTED_STRATEGIES: dict[str, dict[str, Any]] = {
    "lfu": {
        "name": "LFU",
        "scoring": LFUScoring,
        "description": "빈도 기반: 적게 쓰이고 오래된 엔트리 우선 제거",
    },
    "lru": {
        "name": "LRU",
        "scoring": LRUScoring,
        "description": "최근성 기반: 마지막 접근이 가장 오래된 엔트리 우선 제거",
    },
    "hybrid": {
        "name": "Hybrid",
        "scoring": HybridScoring,
        "description": "빈도/최근성 가중합 (frequency_weight, recency_weight)",
    },
}


class EvictionPolicyFactory:
    """
    설정 기반 eviction 정책 팩토리

    설정 예시 (cache.yaml):
        cache:
          eviction:
            strategy: "lfu"   # lfu, lru, hybrid
            max_entries: 1000
            batch_size: 50
            frequency_weight: 0.6
            recency_weight: 0.4
    """

    @staticmethod
    def create(
        strategy: str,
        store: IKeyValueStore,
        normalizer: KeywordNormalizer | None = None,
        config: EvictionConfig | None = None,
        keyword_index: KeywordIndex | None = None,
    ) -> KeywordEvictionPolicy:
        """
        전략 이름으로 eviction 정책 생성

        알 수 없는 전략은 경고(CACHE-004) 후 lfu로 대체합니다.

        Args:
            strategy: 전략 이름 (대소문자 무시)
            store: 키-값 저장소
            normalizer: 키워드 정규화기
            config: eviction 설정 (없으면 기본값)
            keyword_index: 서비스와 공유할 키워드 인덱스

        Returns:
            KeywordEvictionPolicy 인스턴스
        """
        config = config or EvictionConfig()
        name = (strategy or DEFAULT_STRATEGY).strip().lower()

        if name not in SUPPORTED_STRATEGIES:
            logger.warning(
                f"알 수 없는 eviction 전략: {strategy}, {DEFAULT_STRATEGY}로 대체",
                extra={
                    "error_code": ErrorCode.CACHE_004.value,
                    "supported": list(SUPPORTED_STRATEGIES.keys()),
                },
            )
            name = DEFAULT_STRATEGY

        scoring = EvictionPolicyFactory._create_scoring(name, config)

        return KeywordEvictionPolicy(
            store=store,
            scoring=scoring,
            normalizer=normalizer,
            max_entries=config.max_entries,
            batch_size=config.batch_size,
            keyword_index=keyword_index,
        )

    @staticmethod
    def create_from_config(
        config: EvictionConfig,
        store: IKeyValueStore,
        normalizer: KeywordNormalizer | None = None,
        keyword_index: KeywordIndex | None = None,
    ) -> KeywordEvictionPolicy:
        """EvictionConfig.strategy 기반 생성"""
        return EvictionPolicyFactory.create(
            config.strategy,
            store,
            normalizer=normalizer,
            config=config,
            keyword_index=keyword_index,
        )

    @staticmethod
    def _create_scoring(name: str, config: EvictionConfig) -> ScoringStrategy:
        if name == "hybrid":
            return HybridScoring(
                frequency_weight=config.frequency_weight,
                recency_weight=config.recency_weight,
            )
        scoring_class = SUPPORTED_STRATEGIES[name]["scoring"]
        return scoring_class()

    @staticmethod
    def get_supported_strategies() -> list[str]:
        """지원하는 모든 전략 이름 반환"""
        return list(SUPPORTED_STRATEGIES.keys())

    @staticmethod
    def get_strategy_info(name: str) -> dict[str, Any] | None:
        """
        특정 전략의 상세 정보 반환

        Args:
            name: 전략 이름

        Returns:
            전략 정보 딕셔너리 또는 None
        """
        return SUPPORTED_STRATEGIES.get(name.lower())
