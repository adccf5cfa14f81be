"""
KeywordIndex 테스트 (MemoryKeyValueStore 기반)

테스트 범위:
1. 엔트리 등록 시 멤버 집합 / 빈도 / 랭킹 증가
2. 제거 시 감소, 0 이하면 카운터 삭제 + 랭킹 제거
3. 정규화 후 같은 키워드는 한 번만 처리
"""

import pytest

from search_cache.modules.core.cache.keys import KEYWORD_RANKING_KEY, keyword_freq_key
from search_cache.modules.core.cache.keyword_index import KeywordIndex


@pytest.fixture
def index(memory_store, normalizer) -> KeywordIndex:
    return KeywordIndex(memory_store, normalizer)


@pytest.mark.unit
class TestKeywordIndex:
    """KeywordIndex"""

    @pytest.mark.asyncio
    async def test_add_entry(self, index: KeywordIndex) -> None:
        await index.add_entry("search:laptop usb:1:10", ["laptop", "usb"])
        await index.add_entry("search:laptop:1:10", ["laptop"])

        assert await index.members("laptop") == ["search:laptop usb:1:10", "search:laptop:1:10"]
        assert await index.member_count("usb") == 1
        assert await index.frequency("laptop") == 2
        assert await index.top_keywords(1) == ["laptop"]

    @pytest.mark.asyncio
    async def test_touch_increments_frequency_only(self, index: KeywordIndex) -> None:
        await index.add_entry("search:usb:1:10", ["usb"])
        await index.touch(["usb"])

        assert await index.frequency("usb") == 2
        assert await index.member_count("usb") == 1

    @pytest.mark.asyncio
    async def test_remove_entry_deletes_counter_at_zero(self, index: KeywordIndex, memory_store) -> None:
        await index.add_entry("search:usb:1:10", ["usb"])
        await index.remove_entry("search:usb:1:10", ["usb"])

        assert await index.members("usb") == []
        assert await memory_store.exists(keyword_freq_key("usb")) is False
        assert await index.frequency("usb") == 0
        assert await index.top_keywords(10) == []

    @pytest.mark.asyncio
    async def test_remove_entry_decrements_shared_keyword(self, index: KeywordIndex, memory_store) -> None:
        await index.add_entry("search:laptop usb:1:10", ["laptop", "usb"])
        await index.add_entry("search:laptop:1:10", ["laptop"])

        await index.remove_entry("search:laptop usb:1:10", ["laptop", "usb"])

        assert await index.members("laptop") == ["search:laptop:1:10"]
        assert await index.frequency("laptop") == 1
        ranking = await memory_store.zrevrange(KEYWORD_RANKING_KEY, 0, -1, withscores=True)
        assert ranking == [("laptop", 1.0)]

    @pytest.mark.asyncio
    async def test_accented_keywords_share_index(self, index: KeywordIndex) -> None:
        """José 와 jose 는 같은 인덱스 키"""
        await index.add_entry("search:josé:1:10", ["José", "jose"])

        assert await index.frequency("jose") == 1
        assert await index.members("JOSÉ") == ["search:josé:1:10"]

    @pytest.mark.asyncio
    async def test_top_keywords_non_positive_limit(self, index: KeywordIndex) -> None:
        await index.add_entry("search:usb:1:10", ["usb"])

        assert await index.top_keywords(0) == []

    @pytest.mark.asyncio
    async def test_clear_ranking(self, index: KeywordIndex) -> None:
        await index.add_entry("search:usb:1:10", ["usb"])
        await index.clear_ranking()

        assert await index.top_keywords(10) == []
