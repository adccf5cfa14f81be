"""
Keywords Module - 검색 쿼리 키워드 추출

- KeywordNormalizer: 스테밍/불용어/악센트 정규화, Jaccard 유사도
- StopwordFilter: 영어 + 포르투갈어 불용어
"""

from .normalizer import KeywordNormalizer
from .stopwords import StopwordFilter

__all__ = [
    "KeywordNormalizer",
    "StopwordFilter",
]
