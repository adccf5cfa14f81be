"""
Cache 키 공간

저장소에 영속되는 키 형식을 한 곳에 정의합니다.

    search:<정렬된 키워드 공백 연결>:<page>:<size>   캐시 페이로드
    cache:meta:<key>                                 엔트리 메타데이터
    cache:entries                                    살아있는 엔트리 집합
    keyword:freq:<kw>                                키워드 전역 빈도 카운터
    keyword:keys:<kw>                                키워드 → 엔트리 키 집합
    keywords:ranking                                 키워드 빈도 정렬 집합
    cache:metrics:hit_types                          조회 유형별 카운트
"""

from collections.abc import Iterable

SEARCH_KEY_PREFIX = "search:"
CACHE_META_PREFIX = "cache:meta:"
CACHE_ENTRIES_KEY = "cache:entries"
KEYWORD_FREQ_PREFIX = "keyword:freq:"
KEYWORD_KEYS_PREFIX = "keyword:keys:"
KEYWORD_RANKING_KEY = "keywords:ranking"
HIT_METRICS_KEY = "cache:metrics:hit_types"


def canonical_key(keywords: Iterable[str], page: int, size: int) -> str:
    """
    어순과 무관한 정규 캐시 키

    Example:
        >>> canonical_key(["usb", "laptop"], 1, 10)
        'search:laptop usb:1:10'
    """
    joined = " ".join(sorted(keywords))
    return f"{SEARCH_KEY_PREFIX}{joined}{page_suffix(page, size)}"


def page_suffix(page: int, size: int) -> str:
    return f":{page}:{size}"


def meta_key(key: str) -> str:
    return f"{CACHE_META_PREFIX}{key}"


def keyword_freq_key(keyword: str) -> str:
    return f"{KEYWORD_FREQ_PREFIX}{keyword}"


def keyword_members_key(keyword: str) -> str:
    return f"{KEYWORD_KEYS_PREFIX}{keyword}"
