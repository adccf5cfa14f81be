"""
Search Cache Service
키워드 정규화 기반 검색 결과 캐시 오케스트레이터

조회 순서:
    1. 정규 키 exact 조회 (어순/어형 변화와 무관)
    2. 키워드 인덱스 기반 퍼지 조회 (Jaccard 유사도 ≥ threshold)
    3. 미스

저장 시 엔트리 메타데이터와 키워드 인덱스를 등록하고 곧바로 eviction 검사를 수행합니다.
저장소 장애와 손상된 레코드는 호출자에게 예외로 전파하지 않고 미스/False/빈 결과로 처리합니다.
"""

from typing import Any

from ....config.schemas.cache import SearchCacheConfig
from ....core.interfaces.storage import IKeyValueStore
from ....lib.errors import CorruptEntryError, GeneralError, StoreUnavailableError
from ....lib.logger import get_logger
from ..keywords.normalizer import KeywordNormalizer
from .codec import byte_length, decode_entry, decode_metadata, encode_entry
from .eviction.interfaces import IEvictionPolicy
from .keys import HIT_METRICS_KEY, canonical_key, meta_key, page_suffix
from .keyword_index import KeywordIndex
from .models import CacheEntry, CacheHit, CacheInfo, CacheMetrics, HitType, KeywordStats, now_ms

logger = get_logger(__name__)


class SearchCacheService:
    """
    키워드 기반 검색 캐시 서비스

    특징:
    - "laptop usb" 와 "usb laptops" 는 같은 캐시 엔트리를 공유
    - exact 미스 시 키워드가 겹치는 엔트리를 퍼지 히트로 반환
    - 조회 유형(normalized / fuzzy / miss) 누적 카운트를 저장소에 기록
    - 저장소 장애 시 Graceful Degradation (미스로 처리)

    사용 예시:
        service = SearchCacheService(store, policy, config=config.cache)
        await service.set("laptop charger usb", 1, 10, {"results": [...]})
        hit = await service.get("usb laptop chargers")
    """

    def __init__(
        self,
        store: IKeyValueStore,
        policy: IEvictionPolicy,
        normalizer: KeywordNormalizer | None = None,
        config: SearchCacheConfig | None = None,
        keyword_index: KeywordIndex | None = None,
    ):
        """
        Args:
            store: 키-값 저장소
            policy: eviction 정책
            normalizer: 키워드 정규화기 (정책과 같은 인스턴스 권장)
            config: 검색 캐시 설정 (없으면 기본값)
            keyword_index: 후보 탐색용 키워드 인덱스 (없으면 생성)
        """
        self.store = store
        self.policy = policy
        self.normalizer = normalizer or KeywordNormalizer()
        self.config = config or SearchCacheConfig()
        self.keyword_index = keyword_index or KeywordIndex(store, self.normalizer)

        # 통계 (로컬 프로세스 단위)
        self.stats = {
            "hits": 0,
            "fuzzy_hits": 0,
            "misses": 0,
            "sets": 0,
            "invalidations": 0,
            "clears": 0,
            "errors": 0,
            "purged": 0,
        }

        logger.info(
            f"SearchCacheService 초기화: strategy={policy.get_strategy_name()}, "
            f"TTL={self.config.default_ttl}s, fuzzy={self.config.fuzzy.enabled}, "
            f"threshold={self.config.fuzzy.similarity_threshold}"
        )

    def build_cache_key(self, query: str, page: int = 1, size: int = 10) -> str:
        """쿼리 → 정규 캐시 키 (search:<정렬된 어간>:<page>:<size>)"""
        return canonical_key(self.normalizer.extract_keywords(query), page, size)

    # ========================================
    # 조회
    # ========================================

    async def get(self, query: str, page: int = 1, size: int = 10) -> CacheHit | None:
        """
        캐시 조회 (exact → fuzzy → miss)

        Args:
            query: 검색 쿼리 원문
            page: 페이지 번호
            size: 페이지 크기

        Returns:
            CacheHit (없으면 None)
        """
        keywords = self.normalizer.extract_keywords(query)
        key = canonical_key(keywords, page, size)

        try:
            # [Step 1] 정규 키 exact 조회
            try:
                raw = await self.store.get(key)
            except CorruptEntryError as e:
                logger.warning(
                    "디코딩할 수 없는 캐시 엔트리 삭제",
                    extra={"key": key, "error_code": e.error_code},
                )
                await self._purge(key)
                await self._record_hit_type(HitType.MISS)
                self.stats["misses"] += 1
                return None

            if raw is not None:
                entry = await self._decode_or_purge(raw, key)
                if entry is None:
                    await self._record_hit_type(HitType.MISS)
                    self.stats["misses"] += 1
                    return None

                await self.policy.record_access(key)
                await self._record_hit_type(HitType.NORMALIZED)
                self.stats["hits"] += 1

                logger.debug("정규 키 캐시 히트", extra={"key": key})
                return CacheHit(
                    data=entry.data,
                    hit_type=HitType.NORMALIZED,
                    key=key,
                    original_key=key,
                )

            # [Step 2] 퍼지 조회
            if self.config.fuzzy.enabled and keywords:
                hit = await self._fuzzy_lookup(key, keywords, page, size)
                if hit is not None:
                    await self._record_hit_type(HitType.FUZZY)
                    self.stats["fuzzy_hits"] += 1
                    return hit

        except StoreUnavailableError as e:
            self.stats["errors"] += 1
            logger.warning(
                "캐시 조회 실패, 미스로 처리",
                extra={"key": key, "error": str(e), "error_code": e.error_code},
            )

        # [Step 3] 미스
        await self._record_hit_type(HitType.MISS)
        self.stats["misses"] += 1
        return None

    async def exists(self, query: str, page: int = 1, size: int = 10) -> bool:
        """정규 키 존재 여부 (퍼지 매칭 없음)"""
        key = self.build_cache_key(query, page, size)
        try:
            return await self.store.exists(key)
        except StoreUnavailableError as e:
            logger.warning(
                "캐시 존재 확인 실패",
                extra={"key": key, "error": str(e), "error_code": e.error_code},
            )
            return False

    # ========================================
    # 저장 / 무효화
    # ========================================

    async def set(
        self,
        query: str,
        page: int,
        size: int,
        data: Any,
        ttl: int | None = None,
    ) -> bool:
        """
        검색 결과 저장 후 eviction 검사

        Args:
            query: 검색 쿼리 원문
            page: 페이지 번호
            size: 페이지 크기
            data: 저장할 검색 결과 (JSON 직렬화 가능)
            ttl: Time-To-Live (초, None이면 default_ttl)

        Returns:
            저장 성공 여부
        """
        keywords = self.normalizer.extract_keywords(query)
        key = canonical_key(keywords, page, size)
        effective_ttl = ttl if ttl is not None else self.config.default_ttl

        try:
            serialized = encode_entry(
                CacheEntry(
                    data=data,
                    timestamp=now_ms(),
                    ttl=effective_ttl,
                    keywords=keywords,
                    frequency=1,
                )
            )
        except GeneralError as e:
            self.stats["errors"] += 1
            logger.warning(
                "캐시 데이터 직렬화 실패",
                extra={"key": key, "error": str(e), "error_code": e.error_code},
            )
            return False

        try:
            await self.store.set(key, serialized, ttl=effective_ttl)
        except StoreUnavailableError as e:
            self.stats["errors"] += 1
            logger.warning(
                "캐시 저장 실패",
                extra={"key": key, "error": str(e), "error_code": e.error_code},
            )
            return False

        await self.policy.register_cache_entry(key, keywords, byte_length(serialized))
        await self.policy.check_and_evict()

        self.stats["sets"] += 1
        logger.debug(
            "캐시 저장",
            extra={"key": key, "ttl_seconds": effective_ttl, "keywords": keywords},
        )
        return True

    async def invalidate(self, query: str | None = None, page: int = 1, size: int = 10) -> None:
        """
        캐시 무효화

        쿼리가 주어지면 해당 정규 키 하나를 인덱스까지 정리하여 제거하고,
        없으면 저장소 전체를 비운 뒤 정책 상태를 초기화합니다.
        """
        if query is not None:
            key = self.build_cache_key(query, page, size)
            if await self.policy.evict_entry(key):
                self.stats["invalidations"] += 1
                logger.info("캐시 무효화", extra={"key": key})
            return

        try:
            await self.store.flush()
        except StoreUnavailableError as e:
            self.stats["errors"] += 1
            logger.warning(
                "캐시 전체 삭제 실패",
                extra={"error": str(e), "error_code": e.error_code},
            )
            return

        await self.policy.clear_all()
        self.stats["clears"] += 1
        logger.info("캐시 전체 무효화 완료")

    # ========================================
    # 통계 / 관리
    # ========================================

    async def get_keyword_statistics(self, limit: int = 50) -> list[KeywordStats]:
        return await self.policy.get_keyword_stats(limit)

    async def get_cache_info(self) -> CacheInfo:
        return await self.policy.get_cache_info()

    async def manual_eviction(self, count: int) -> dict[str, Any]:
        """
        수동 eviction

        Returns:
            {"evicted": 제거 수, "candidates": [{key, frequency, score}, ...]}
        """
        candidates = await self.policy.find_entries_for_eviction(count)
        evicted = await self.policy.evict(candidates)

        logger.info(f"수동 eviction 실행: {evicted}/{len(candidates)}개 제거")
        return {
            "evicted": evicted,
            "candidates": [
                {"key": c.key, "frequency": c.frequency, "score": c.score}
                for c in candidates
            ],
        }

    async def get_cache_metrics(self) -> CacheMetrics:
        """조회 유형별 누적 카운트 (저장소 장애 시 0)"""
        try:
            ranked = await self.store.zrevrange(HIT_METRICS_KEY, 0, -1, withscores=True)
        except StoreUnavailableError as e:
            logger.warning(
                "캐시 메트릭 조회 실패",
                extra={"error": str(e), "error_code": e.error_code},
            )
            return CacheMetrics()

        counts = {str(member): int(score) for member, score in ranked}
        return CacheMetrics(
            normalized=counts.get(HitType.NORMALIZED.value, 0),
            fuzzy=counts.get(HitType.FUZZY.value, 0),
            miss=counts.get(HitType.MISS.value, 0),
        )

    def get_stats(self) -> dict[str, Any]:
        """
        로컬 프로세스 통계 조회

        Returns:
            히트/미스/저장/무효화 카운트와 히트율
        """
        total_requests = self.stats["hits"] + self.stats["fuzzy_hits"] + self.stats["misses"]
        hit_rate = (
            (self.stats["hits"] + self.stats["fuzzy_hits"]) / total_requests
            if total_requests > 0
            else 0.0
        )

        return {
            **self.stats,
            "total_requests": total_requests,
            "hit_rate": round(hit_rate, 4),
            "strategy": self.policy.get_strategy_name(),
        }

    # ========================================
    # 내부 헬퍼 메서드
    # ========================================

    async def _fuzzy_lookup(
        self,
        key: str,
        keywords: list[str],
        page: int,
        size: int,
    ) -> CacheHit | None:
        """키워드 인덱스 후보 중 유사도가 가장 높은 엔트리 반환"""
        candidates = await self._find_candidate_keys(key, keywords, page, size)
        if not candidates:
            return None

        threshold = self.config.fuzzy.similarity_threshold
        best_key: str | None = None
        best_similarity = 0.0

        for candidate in candidates:
            try:
                raw_meta = await self.store.get(meta_key(candidate))
                if raw_meta is None:
                    continue
                metadata = decode_metadata(raw_meta, candidate)
            except CorruptEntryError as e:
                logger.warning(
                    "퍼지 후보 메타데이터 손상, 건너뜀",
                    extra={"key": candidate, "error_code": e.error_code},
                )
                continue

            similarity = self.normalizer.calculate_similarity(keywords, metadata.keywords)
            if similarity >= threshold and (best_key is None or similarity > best_similarity):
                best_key = candidate
                best_similarity = similarity

        if best_key is None:
            return None

        try:
            raw = await self.store.get(best_key)
        except CorruptEntryError as e:
            logger.warning(
                "디코딩할 수 없는 퍼지 후보 삭제",
                extra={"key": best_key, "error_code": e.error_code},
            )
            raw = None

        if raw is None:
            # 페이로드가 사라졌거나 읽을 수 없지만 인덱스가 남아있는 경우
            await self.policy.evict_entry(best_key)
            self.stats["purged"] += 1
            return None

        entry = await self._decode_or_purge(raw, best_key)
        if entry is None:
            return None

        await self.policy.record_access(best_key)

        logger.debug(
            "퍼지 캐시 히트",
            extra={"key": key, "matched_key": best_key, "similarity": best_similarity},
        )
        return CacheHit(
            data=entry.data,
            hit_type=HitType.FUZZY,
            key=key,
            original_key=best_key,
            similarity=best_similarity,
            fuzzy_match=True,
        )

    async def _find_candidate_keys(
        self,
        key: str,
        keywords: list[str],
        page: int,
        size: int,
    ) -> list[str]:
        """같은 page/size 를 가진 후보 키 (첫 등장 순서, exact 키 제외)"""
        suffix = page_suffix(page, size)
        candidates: dict[str, None] = {}

        for keyword in keywords:
            for member in await self.keyword_index.members(keyword):
                if member != key and member.endswith(suffix):
                    candidates.setdefault(member, None)

        return list(candidates)[: self.config.fuzzy.max_candidates]

    async def _decode_or_purge(self, raw: str, key: str) -> CacheEntry | None:
        """페이로드 디코딩 (만료/손상 시 삭제 후 None)"""
        try:
            entry = decode_entry(raw, key)
        except CorruptEntryError as e:
            logger.warning(
                "손상된 캐시 엔트리 삭제",
                extra={"key": key, "error_code": e.error_code},
            )
            await self._purge(key)
            return None

        if entry.is_expired():
            logger.debug("만료된 캐시 엔트리 삭제", extra={"key": key})
            await self._purge(key)
            return None

        return entry

    async def _purge(self, key: str) -> None:
        await self.store.delete(key)
        await self.policy.evict_entry(key)
        self.stats["purged"] += 1

    async def _record_hit_type(self, hit_type: HitType) -> None:
        try:
            await self.store.zincrby(HIT_METRICS_KEY, 1, hit_type.value)
        except StoreUnavailableError as e:
            logger.debug(
                "조회 유형 기록 실패",
                extra={"hit_type": hit_type.value, "error_code": e.error_code},
            )
