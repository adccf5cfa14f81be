"""
Memory Key-Value Store
단일 프로세스용 인메모리 키-값 저장소

Redis 없이 동작하는 개발/테스트 환경과 Redis 장애 시 폴백에 사용합니다.
- TTL이 있는 문자열 키 (캐시 페이로드): cachetools TLRUCache (키별 TTL + 최대 항목 수)
- TTL이 없는 문자열 키 (메타데이터, 키워드 카운터): dict (용량 제한으로 제거되지 않음)
- 집합/정렬 집합: dict (삽입 순서 유지)

메타데이터와 카운터는 eviction 정책만 제거합니다. 용량 제한은 TTL 키에만 적용됩니다.

모든 명령은 await 지점 없이 실행되므로 이벤트 루프 안에서 원자적입니다.
"""

from typing import Any

from cachetools import TLRUCache

from ....core.interfaces.storage import IKeyValueStore
from ....lib.logger import get_logger

logger = get_logger(__name__)


def _time_to_use(key: str, value: tuple[str, int], now: float) -> float:
    """TLRUCache 만료 시각 계산"""
    _, ttl = value
    return now + ttl


class MemoryKeyValueStore(IKeyValueStore):
    """
    인메모리 키-값 저장소

    특징:
    - 키별 TTL (TLRUCache ttu 함수)
    - max_keys 초과 시 TTL 키 중 가장 오래 사용되지 않은 키부터 제거
    - TTL 없는 키는 delete/flush로만 제거 (Redis noeviction과 동일하게 취급)
    - 집합은 삽입 순서를 유지하여 조회 결과가 결정적
    """

    def __init__(self, max_keys: int = 10000, **kwargs: Any):
        """
        Args:
            max_keys: TTL이 있는 문자열 키 최대 수 (TTL 없는 키, 집합/정렬 집합은 제외)
        """
        self.max_keys = max_keys
        self._strings: TLRUCache[str, tuple[str, int]] = TLRUCache(maxsize=max_keys, ttu=_time_to_use)
        self._persistent: dict[str, str] = {}
        self._sets: dict[str, dict[str, None]] = {}
        self._zsets: dict[str, dict[str, float]] = {}
        self._connected = False

        logger.info(f"MemoryKeyValueStore 초기화: max_keys={max_keys}")

    # ========================================
    # 생명주기
    # ========================================

    async def connect(self) -> None:
        self._connected = True

    async def close(self) -> None:
        self._connected = False

    async def ping(self) -> bool:
        return True

    # ========================================
    # 문자열 키
    # ========================================

    async def get(self, key: str) -> str | None:
        if key in self._persistent:
            return self._persistent[key]
        item = self._strings.get(key)
        return item[0] if item is not None else None

    async def set(self, key: str, value: str, ttl: int | None = None) -> None:
        if ttl is None:
            self._strings.pop(key, None)
            self._persistent[key] = value
        else:
            self._persistent.pop(key, None)
            self._strings[key] = (value, ttl)

    async def delete(self, key: str) -> int:
        deleted = 0
        if self._strings.pop(key, None) is not None:
            deleted += 1
        if self._persistent.pop(key, None) is not None:
            deleted += 1
        if self._sets.pop(key, None) is not None:
            deleted += 1
        if self._zsets.pop(key, None) is not None:
            deleted += 1
        return deleted

    async def exists(self, key: str) -> bool:
        return (
            key in self._persistent
            or key in self._strings
            or key in self._sets
            or key in self._zsets
        )

    async def incrby(self, key: str, amount: int = 1) -> int:
        # INCRBY는 기존 TTL을 유지
        item = self._strings.get(key)
        if item is not None:
            value, ttl = item
            new_value = int(value) + amount
            self._strings[key] = (str(new_value), ttl)
            return new_value

        new_value = int(self._persistent.get(key, "0")) + amount
        self._persistent[key] = str(new_value)
        return new_value

    async def decrby(self, key: str, amount: int = 1) -> int:
        return await self.incrby(key, -amount)

    # ========================================
    # 집합
    # ========================================

    async def sadd(self, key: str, *members: str) -> int:
        bucket = self._sets.setdefault(key, {})
        added = 0
        for member in members:
            if member not in bucket:
                bucket[member] = None
                added += 1
        if not bucket:
            del self._sets[key]
        return added

    async def srem(self, key: str, *members: str) -> int:
        bucket = self._sets.get(key)
        if bucket is None:
            return 0
        removed = 0
        for member in members:
            if member in bucket:
                del bucket[member]
                removed += 1
        # 빈 집합은 키 자체를 제거 (Redis 동작과 동일)
        if not bucket:
            del self._sets[key]
        return removed

    async def smembers(self, key: str) -> list[str]:
        return list(self._sets.get(key, {}))

    async def scard(self, key: str) -> int:
        return len(self._sets.get(key, {}))

    # ========================================
    # 정렬 집합
    # ========================================

    async def zincrby(self, key: str, amount: float, member: str) -> float:
        scores = self._zsets.setdefault(key, {})
        scores[member] = scores.get(member, 0.0) + amount
        return scores[member]

    async def zrem(self, key: str, *members: str) -> int:
        scores = self._zsets.get(key)
        if scores is None:
            return 0
        removed = 0
        for member in members:
            if scores.pop(member, None) is not None:
                removed += 1
        if not scores:
            del self._zsets[key]
        return removed

    async def zrevrange(
        self, key: str, start: int, stop: int, withscores: bool = False
    ) -> list[str] | list[tuple[str, float]]:
        scores = self._zsets.get(key, {})
        # 점수 내림차순, 동점은 멤버 역사전순 (Redis ZREVRANGE와 동일)
        ordered = sorted(scores.items(), key=lambda item: (item[1], item[0]), reverse=True)

        size = len(ordered)
        if start < 0:
            start = max(size + start, 0)
        if stop < 0:
            stop = size + stop
        selected = ordered[start : stop + 1] if stop >= start else []

        if withscores:
            return [(member, score) for member, score in selected]
        return [member for member, _ in selected]

    # ========================================
    # 전체
    # ========================================

    async def flush(self) -> None:
        self._strings.clear()
        self._persistent.clear()
        self._sets.clear()
        self._zsets.clear()
        logger.info("MemoryKeyValueStore 초기화 완료")

    def get_stats(self) -> dict[str, Any]:
        """저장소 크기 통계"""
        return {
            "string_keys": len(self._strings) + len(self._persistent),
            "persistent_keys": len(self._persistent),
            "set_keys": len(self._sets),
            "sorted_set_keys": len(self._zsets),
            "max_keys": self.max_keys,
        }
