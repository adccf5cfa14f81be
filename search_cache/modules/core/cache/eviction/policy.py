"""
Keyword Eviction Policy
키워드 인덱스 기반 캐시 eviction 정책

하나의 정책 클래스에 ScoringStrategy(LFU / LRU / Hybrid)를 조합합니다.
정책마다 다른 것은 점수 계산식과 조회 시 빈도 증가 여부뿐이며
메타데이터/인덱스 관리 흐름은 동일합니다.

엔트리 상태: Active → Evicted (종료 상태)

eviction 순서:
    키워드 인덱스 정리 → 메타데이터 삭제 → cache:entries 제거 → 페이로드 삭제
"""

from ...keywords.normalizer import KeywordNormalizer
from .....core.interfaces.storage import IKeyValueStore
from .....lib.errors import CorruptEntryError, ErrorCode, StoreUnavailableError
from .....lib.logger import get_logger
from ..codec import decode_metadata, encode_metadata
from ..keys import CACHE_ENTRIES_KEY, meta_key
from ..keyword_index import KeywordIndex
from ..models import CacheEntryMetadata, CacheInfo, EvictionCandidate, KeywordStats, now_ms
from .scoring import ScoringStrategy

logger = get_logger(__name__)

TOP_KEYWORDS_IN_INFO = 10


class KeywordEvictionPolicy:
    """
    키워드 기반 eviction 정책

    특징:
    - 엔트리별 메타데이터 (빈도, 마지막 접근, 키워드, 크기)
    - 키워드 인덱스와 메타데이터를 하나의 논리 단위로 생성/삭제
    - 스캔 중 한 엔트리 실패는 로그 후 건너뜀 (CACHE-003)
    - 저장소 장애는 로그 후 안전한 기본값 반환
    """

    def __init__(
        self,
        store: IKeyValueStore,
        scoring: ScoringStrategy,
        normalizer: KeywordNormalizer | None = None,
        max_entries: int = 1000,
        batch_size: int = 50,
        keyword_index: KeywordIndex | None = None,
    ):
        """
        Args:
            store: 키-값 저장소
            scoring: 점수 전략 (LFUScoring, LRUScoring, HybridScoring)
            normalizer: 키워드 정규화기 (인덱스 키 생성용)
            max_entries: eviction 없이 유지할 최대 엔트리 수
            batch_size: eviction 패스당 제거 수
            keyword_index: 공유할 키워드 인덱스 (없으면 생성)
        """
        self.store = store
        self.scoring = scoring
        self.normalizer = normalizer or KeywordNormalizer()
        self.max_entries = max_entries
        self.batch_size = batch_size
        self.keyword_index = keyword_index or KeywordIndex(store, self.normalizer)

        logger.info(
            f"KeywordEvictionPolicy 초기화: strategy={scoring.name}, "
            f"max_entries={max_entries}, batch_size={batch_size}"
        )

    def get_strategy_name(self) -> str:
        return self.scoring.name

    # ========================================
    # 생성 / 접근
    # ========================================

    async def register_cache_entry(self, key: str, keywords: list[str], size_bytes: int) -> None:
        """
        새 캐시 엔트리 등록

        메타데이터(frequency=1, created=last_access=now) 저장 후
        cache:entries 와 각 키워드 인덱스에 추가합니다.
        """
        now = now_ms()
        metadata = CacheEntryMetadata(
            key=key,
            keywords=keywords,
            frequency=1,
            last_access=now,
            created=now,
            size=size_bytes,
        )

        try:
            await self.store.set(meta_key(key), encode_metadata(metadata))
            await self.store.sadd(CACHE_ENTRIES_KEY, key)
            await self.keyword_index.add_entry(key, keywords)

            logger.debug(
                "캐시 엔트리 등록",
                extra={"key": key, "keywords": keywords, "size_bytes": size_bytes},
            )
        except StoreUnavailableError as e:
            logger.warning(
                "캐시 엔트리 등록 실패",
                extra={"key": key, "error": str(e), "error_code": e.error_code},
            )

    async def record_access(self, key: str) -> None:
        """
        캐시 히트 기록

        LFU/Hybrid는 frequency를 증가시키고, LRU는 last_access만 갱신합니다.
        모든 전략이 키워드 빈도를 다시 증가시킵니다.
        """
        try:
            metadata = await self._load_metadata(key)
            if metadata is None:
                return

            if self.scoring.increments_frequency:
                metadata.frequency += 1
            metadata.last_access = now_ms()

            await self.store.set(meta_key(key), encode_metadata(metadata))
            await self.keyword_index.touch(metadata.keywords)

        except (StoreUnavailableError, CorruptEntryError) as e:
            logger.warning(
                "캐시 접근 기록 실패",
                extra={"key": key, "error": str(e), "error_code": e.error_code},
            )

    # ========================================
    # Eviction
    # ========================================

    async def find_entries_for_eviction(self, count: int) -> list[EvictionCandidate]:
        """
        eviction 후보 조회 (점수 내림차순, 최대 count개)

        동점은 cache:entries 조회 순서를 따르며 저장소 구현에 따라 달라질 수 있습니다.
        """
        if count <= 0:
            return []

        try:
            keys = await self.store.smembers(CACHE_ENTRIES_KEY)
        except StoreUnavailableError as e:
            logger.warning(
                "eviction 후보 조회 실패",
                extra={"error": str(e), "error_code": e.error_code},
            )
            return []

        now = now_ms()
        candidates: list[EvictionCandidate] = []
        for key in keys:
            try:
                metadata = await self._load_metadata(key)
            except (StoreUnavailableError, CorruptEntryError) as e:
                logger.warning(
                    "eviction 스캔 중 엔트리 건너뜀",
                    extra={"key": key, "error": str(e), "error_code": ErrorCode.CACHE_003.value},
                )
                continue

            if metadata is None:
                continue

            candidates.append(
                EvictionCandidate(
                    key=key,
                    frequency=metadata.frequency,
                    score=self.scoring.score(metadata, now),
                    keywords=metadata.keywords,
                )
            )

        candidates.sort(key=lambda candidate: candidate.score, reverse=True)
        return candidates[:count]

    async def check_and_evict(self) -> bool:
        """
        최대 엔트리 수 초과 시 eviction 실행

        eviction_count = min(excess + batch_size, batch_size)

        Returns:
            eviction 실행 여부
        """
        try:
            total_entries = await self.store.scard(CACHE_ENTRIES_KEY)
        except StoreUnavailableError as e:
            logger.warning(
                "엔트리 수 조회 실패",
                extra={"error": str(e), "error_code": e.error_code},
            )
            return False

        if total_entries <= self.max_entries:
            return False

        excess = total_entries - self.max_entries
        eviction_count = min(excess + self.batch_size, self.batch_size)

        candidates = await self.find_entries_for_eviction(eviction_count)
        evicted = await self.evict(candidates)

        logger.info(
            f"{self.scoring.name} eviction 실행: {evicted}/{len(candidates)}개 제거",
            extra={"total_entries": total_entries, "max_entries": self.max_entries},
        )
        return True

    async def evict(self, candidates: list[EvictionCandidate]) -> int:
        """후보 목록 제거 (제거 성공 수 반환)"""
        evicted = 0
        for candidate in candidates:
            if await self.evict_entry(candidate.key):
                evicted += 1
        return evicted

    async def evict_entry(self, key: str) -> bool:
        """
        단일 엔트리 제거

        인덱스 정리를 페이로드 삭제보다 먼저 수행하므로
        메타데이터 없는 페이로드가 남는 순간은 없습니다.

        Returns:
            실제로 제거한 레코드가 있으면 True (존재하지 않는 엔트리, 저장소 장애 시 False)
        """
        try:
            try:
                metadata = await self._load_metadata(key)
            except CorruptEntryError as e:
                # 키워드를 알 수 없으므로 인덱스 정리는 건너뛰고 레코드만 제거
                logger.warning(
                    "손상된 메타데이터 제거",
                    extra={"key": key, "error_code": e.error_code},
                )
                metadata = None

            if metadata is not None:
                await self.keyword_index.remove_entry(key, metadata.keywords)

            removed = await self.store.delete(meta_key(key))
            removed += await self.store.srem(CACHE_ENTRIES_KEY, key)
            removed += await self.store.delete(key)

            if removed == 0:
                logger.debug("제거할 캐시 엔트리 없음", extra={"key": key})
                return False

            logger.debug("캐시 엔트리 제거", extra={"key": key})
            return True

        except StoreUnavailableError as e:
            logger.warning(
                "캐시 엔트리 제거 실패",
                extra={"key": key, "error": str(e), "error_code": e.error_code},
            )
            return False

    async def clear_all(self) -> None:
        """모든 엔트리를 하나씩 제거한 뒤 키워드 랭킹 삭제 (반복 호출 안전)"""
        try:
            keys = await self.store.smembers(CACHE_ENTRIES_KEY)
        except StoreUnavailableError as e:
            logger.warning(
                "전체 초기화 실패",
                extra={"error": str(e), "error_code": e.error_code},
            )
            return

        for key in keys:
            await self.evict_entry(key)

        try:
            await self.keyword_index.clear_ranking()
        except StoreUnavailableError as e:
            logger.warning(
                "키워드 랭킹 삭제 실패",
                extra={"error": str(e), "error_code": e.error_code},
            )

        logger.info(f"캐시 전체 초기화 완료: {len(keys)}개 엔트리 제거")

    # ========================================
    # 통계
    # ========================================

    async def get_keyword_stats(self, limit: int = 50) -> list[KeywordStats]:
        """
        빈도 상위 키워드 통계

        Returns:
            [{keyword, frequency, associated_entry_count, most_recent_access}, ...]
        """
        try:
            ranked = await self.keyword_index.top_keywords(limit)
        except StoreUnavailableError as e:
            logger.warning(
                "키워드 통계 조회 실패",
                extra={"error": str(e), "error_code": e.error_code},
            )
            return []

        stats: list[KeywordStats] = []
        for keyword in ranked:
            try:
                frequency = await self.keyword_index.frequency(keyword)
                members = await self.keyword_index.members(keyword)
                most_recent_access = await self._most_recent_access(members)
            except StoreUnavailableError as e:
                logger.warning(
                    "키워드 통계 항목 건너뜀",
                    extra={"keyword": keyword, "error": str(e), "error_code": ErrorCode.CACHE_003.value},
                )
                continue

            stats.append(
                KeywordStats(
                    keyword=keyword,
                    frequency=frequency,
                    associated_entry_count=len(members),
                    most_recent_access=most_recent_access,
                )
            )

        return stats

    async def get_cache_info(self) -> CacheInfo:
        """캐시 사용량 요약 (저장소 장애 시 0으로 채운 기본값)"""
        try:
            total_entries = await self.store.scard(CACHE_ENTRIES_KEY)
            top_keywords = await self.keyword_index.top_keywords(TOP_KEYWORDS_IN_INFO)
        except StoreUnavailableError as e:
            logger.warning(
                "캐시 정보 조회 실패",
                extra={"error": str(e), "error_code": e.error_code},
            )
            total_entries, top_keywords = 0, []

        utilization = total_entries / self.max_entries * 100 if self.max_entries > 0 else 0.0

        return CacheInfo(
            total_entries=total_entries,
            max_entries=self.max_entries,
            utilization_percentage=round(utilization, 2),
            top_keywords=top_keywords,
            strategy_name=self.scoring.name,
        )

    # ========================================
    # 내부 헬퍼 메서드
    # ========================================

    async def _load_metadata(self, key: str) -> CacheEntryMetadata | None:
        """메타데이터 조회 (없으면 None, 손상 시 CorruptEntryError)"""
        raw = await self.store.get(meta_key(key))
        if raw is None:
            return None
        return decode_metadata(raw, key)

    async def _most_recent_access(self, keys: list[str]) -> int | None:
        most_recent: int | None = None
        for key in keys:
            try:
                metadata = await self._load_metadata(key)
            except CorruptEntryError:
                continue
            if metadata is not None and (most_recent is None or metadata.last_access > most_recent):
                most_recent = metadata.last_access
        return most_recent
