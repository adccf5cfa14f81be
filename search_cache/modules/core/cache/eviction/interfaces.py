"""
Eviction Policy 인터페이스

SearchCacheService는 구체 정책 클래스가 아닌 이 프로토콜에 의존합니다.
"""

from typing import Protocol

from ..models import CacheInfo, EvictionCandidate, KeywordStats


class IEvictionPolicy(Protocol):
    """
    Eviction 정책 프로토콜

    모든 메서드는 저장소 장애/손상 레코드를 내부에서 로그로 남기고
    안전한 기본값을 반환합니다 (호출자에게 예외를 전파하지 않음).
    """

    async def register_cache_entry(self, key: str, keywords: list[str], size_bytes: int) -> None:
        """새 엔트리 메타데이터 기록 + 키워드 인덱스 등록"""
        ...

    async def record_access(self, key: str) -> None:
        """캐시 히트 기록 (메타데이터 없으면 아무 것도 하지 않음)"""
        ...

    async def find_entries_for_eviction(self, count: int) -> list[EvictionCandidate]:
        """점수 내림차순 eviction 후보"""
        ...

    async def check_and_evict(self) -> bool:
        """최대 엔트리 수 초과 시 eviction 실행 (실행 여부 반환)"""
        ...

    async def evict(self, candidates: list[EvictionCandidate]) -> int:
        """후보 제거 (제거된 수 반환)"""
        ...

    async def evict_entry(self, key: str) -> bool:
        """단일 엔트리 제거 (인덱스 정리 → 메타데이터 → 살아있는 집합 → 페이로드)"""
        ...

    async def clear_all(self) -> None:
        """모든 엔트리 제거 + 키워드 랭킹 삭제"""
        ...

    async def get_keyword_stats(self, limit: int = 50) -> list[KeywordStats]:
        ...

    async def get_cache_info(self) -> CacheInfo:
        ...

    def get_strategy_name(self) -> str:
        ...
