"""
Keyword Index

키워드 → (전역 빈도 카운터, 엔트리 키 집합) 인덱스와 키워드 빈도 랭킹을 관리합니다.

불변 조건:
- keyword:keys:<kw> 는 메타데이터에 kw를 가진 살아있는 엔트리 집합과 정확히 같다
- keyword:freq:<kw> 는 0 이하로 내려가면 0으로 저장하지 않고 키를 삭제한다

모든 키워드는 normalize_keyword()를 거친 뒤 키로 사용됩니다.
저장소의 원자적 명령(INCRBY, DECRBY, SADD, SREM, ZINCRBY)만 사용하며 클라이언트 락은 없습니다.
"""

from collections.abc import Iterable

from ..keywords.normalizer import KeywordNormalizer
from ....core.interfaces.storage import IKeyValueStore
from ....lib.logger import get_logger
from .keys import KEYWORD_RANKING_KEY, keyword_freq_key, keyword_members_key

logger = get_logger(__name__)


class KeywordIndex:
    """키워드 인덱스 (빈도 카운터 + 멤버 집합 + 랭킹)"""

    def __init__(self, store: IKeyValueStore, normalizer: KeywordNormalizer):
        self.store = store
        self.normalizer = normalizer

    async def add_entry(self, key: str, keywords: Iterable[str]) -> None:
        """엔트리를 각 키워드 집합에 등록하고 빈도/랭킹 증가"""
        for keyword in self._normalized(keywords):
            await self.store.sadd(keyword_members_key(keyword), key)
            await self.store.incrby(keyword_freq_key(keyword), 1)
            await self.store.zincrby(KEYWORD_RANKING_KEY, 1, keyword)

    async def touch(self, keywords: Iterable[str]) -> None:
        """조회 시 키워드 빈도/랭킹 증가"""
        for keyword in self._normalized(keywords):
            await self.store.incrby(keyword_freq_key(keyword), 1)
            await self.store.zincrby(KEYWORD_RANKING_KEY, 1, keyword)

    async def remove_entry(self, key: str, keywords: Iterable[str]) -> None:
        """엔트리를 각 키워드 집합에서 제거하고 빈도 감소 (0 이하면 카운터 삭제)"""
        for keyword in self._normalized(keywords):
            await self.store.srem(keyword_members_key(keyword), key)

            remaining = await self.store.decrby(keyword_freq_key(keyword), 1)
            if remaining <= 0:
                await self.store.delete(keyword_freq_key(keyword))
                await self.store.zrem(KEYWORD_RANKING_KEY, keyword)
            else:
                await self.store.zincrby(KEYWORD_RANKING_KEY, -1, keyword)

    async def members(self, keyword: str) -> list[str]:
        """키워드가 가리키는 엔트리 키 목록"""
        return await self.store.smembers(keyword_members_key(self.normalizer.normalize_keyword(keyword)))

    async def member_count(self, keyword: str) -> int:
        return await self.store.scard(keyword_members_key(self.normalizer.normalize_keyword(keyword)))

    async def frequency(self, keyword: str) -> int:
        """키워드 전역 빈도 (카운터가 없으면 0)"""
        raw = await self.store.get(keyword_freq_key(self.normalizer.normalize_keyword(keyword)))
        return int(raw) if raw is not None else 0

    async def top_keywords(self, limit: int) -> list[str]:
        """빈도 내림차순 상위 키워드"""
        if limit <= 0:
            return []
        ranked = await self.store.zrevrange(KEYWORD_RANKING_KEY, 0, limit - 1)
        return [str(member) for member in ranked]

    async def clear_ranking(self) -> None:
        await self.store.delete(KEYWORD_RANKING_KEY)

    def _normalized(self, keywords: Iterable[str]) -> list[str]:
        # 정규화 후 같은 키워드가 되는 경우 한 번만 처리
        return list(dict.fromkeys(self.normalizer.normalize_keyword(k) for k in keywords))
