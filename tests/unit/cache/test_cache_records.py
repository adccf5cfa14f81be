"""
Cache 레코드 / 키 공간 테스트

테스트 범위:
1. 정규 캐시 키 (어순 무관, page/size 접미사)
2. CacheEntry 만료 판정
3. codec 디코딩 실패 → CorruptEntryError (CACHE-002)
4. 메타데이터 JSON 필드명 (lastAccess)
5. CacheHit / CacheMetrics 직렬화
"""

import json

import pytest

from search_cache.lib.errors import CorruptEntryError, GeneralError
from search_cache.modules.core.cache.codec import (
    byte_length,
    decode_entry,
    decode_metadata,
    encode_entry,
    encode_metadata,
)
from search_cache.modules.core.cache.keys import (
    canonical_key,
    keyword_freq_key,
    keyword_members_key,
    meta_key,
)
from search_cache.modules.core.cache.models import (
    CacheEntry,
    CacheEntryMetadata,
    CacheHit,
    CacheMetrics,
    HitType,
)


@pytest.mark.unit
class TestCacheKeys:
    """키 공간"""

    def test_canonical_key_sorts_keywords(self) -> None:
        assert canonical_key(["usb", "laptop"], 1, 10) == "search:laptop usb:1:10"
        assert canonical_key(["laptop", "usb"], 1, 10) == canonical_key(["usb", "laptop"], 1, 10)

    def test_canonical_key_includes_page_and_size(self) -> None:
        assert canonical_key(["laptop"], 2, 20) == "search:laptop:2:20"

    def test_canonical_key_without_keywords(self) -> None:
        assert canonical_key([], 1, 10) == "search::1:10"

    def test_derived_keys(self) -> None:
        assert meta_key("search:laptop:1:10") == "cache:meta:search:laptop:1:10"
        assert keyword_freq_key("laptop") == "keyword:freq:laptop"
        assert keyword_members_key("laptop") == "keyword:keys:laptop"


@pytest.mark.unit
class TestCacheEntry:
    """CacheEntry 만료"""

    def test_not_expired_within_ttl(self) -> None:
        entry = CacheEntry(data={"ok": True}, timestamp=1_000_000, ttl=60)

        assert entry.is_expired(now=1_000_000 + 60_000) is False

    def test_expired_after_ttl(self) -> None:
        entry = CacheEntry(data={"ok": True}, timestamp=1_000_000, ttl=60)

        assert entry.is_expired(now=1_000_000 + 60_001) is True

    def test_negative_ttl_rejected(self) -> None:
        with pytest.raises(ValueError):
            CacheEntry(data=None, timestamp=0, ttl=-1)


@pytest.mark.unit
class TestCodec:
    """JSON 인코딩 / 디코딩"""

    def test_entry_roundtrip_keeps_payload(self) -> None:
        entry = CacheEntry(data={"results": [1, 2]}, timestamp=1, ttl=10, keywords=["laptop"])

        decoded = decode_entry(encode_entry(entry), "k")

        assert decoded.data == {"results": [1, 2]}
        assert decoded.keywords == ["laptop"]
        assert decoded.frequency == 1

    def test_metadata_uses_camel_case_last_access(self) -> None:
        metadata = CacheEntryMetadata(
            key="search:laptop:1:10",
            keywords=["laptop"],
            frequency=2,
            last_access=123,
            created=100,
            size=42,
        )

        raw = json.loads(encode_metadata(metadata))

        assert raw["lastAccess"] == 123
        assert "last_access" not in raw

    def test_metadata_decodes_original_field_names(self) -> None:
        raw = json.dumps(
            {
                "key": "search:laptop:1:10",
                "keywords": ["laptop"],
                "frequency": 3,
                "lastAccess": 500,
                "created": 400,
                "size": 12,
            }
        )

        metadata = decode_metadata(raw, "search:laptop:1:10")

        assert metadata.last_access == 500
        assert metadata.frequency == 3

    @pytest.mark.parametrize("raw", ["{not json", "[]", '{"data": 1}'])
    def test_corrupt_entry(self, raw: str) -> None:
        with pytest.raises(CorruptEntryError) as exc_info:
            decode_entry(raw, "search:laptop:1:10")

        assert exc_info.value.error_code == "CACHE-002"
        assert exc_info.value.context["key"] == "search:laptop:1:10"

    def test_corrupt_metadata(self) -> None:
        with pytest.raises(CorruptEntryError):
            decode_metadata('{"key": "k", "frequency": 0, "lastAccess": 1, "created": 1}', "k")

    def test_unserializable_data(self) -> None:
        entry = CacheEntry(data={"value": object()}, timestamp=1, ttl=10)

        with pytest.raises(GeneralError) as exc_info:
            encode_entry(entry)
        assert exc_info.value.error_code == "GENERAL-002"

    def test_byte_length_counts_utf8(self) -> None:
        assert byte_length("abc") == 3
        assert byte_length("한글") == 6


@pytest.mark.unit
class TestResultModels:
    """CacheHit / CacheMetrics"""

    def test_fuzzy_hit_to_dict(self) -> None:
        hit = CacheHit(
            data={"results": ["a"]},
            hit_type=HitType.FUZZY,
            key="search:cabl charger laptop usb:1:10",
            original_key="search:charger laptop usb:1:10",
            similarity=0.75,
            fuzzy_match=True,
        )

        payload = hit.to_dict()

        assert payload["results"] == ["a"]
        assert payload["_cacheMetadata"] == {
            "fuzzyMatch": True,
            "similarity": 0.75,
            "originalKey": "search:charger laptop usb:1:10",
            "hitType": "fuzzy",
        }

    def test_non_dict_payload_is_wrapped(self) -> None:
        hit = CacheHit(data=[1, 2], hit_type=HitType.NORMALIZED, key="k", original_key="k")

        payload = hit.to_dict()

        assert payload["data"] == [1, 2]
        assert payload["_cacheMetadata"]["fuzzyMatch"] is False

    def test_metrics_hit_rate(self) -> None:
        metrics = CacheMetrics(normalized=2, fuzzy=1, miss=4)

        assert metrics.total == 7
        assert metrics.hit_rate == round(3 / 7, 4)
        assert metrics.to_dict()["hit_rate"] == 0.4286

    def test_metrics_empty(self) -> None:
        assert CacheMetrics().hit_rate == 0.0
