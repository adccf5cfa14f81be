"""
Keyword Normalizer

검색 쿼리에서 캐시 키용 키워드를 추출하는 모듈.

처리 흐름:
    소문자 변환 → 특수문자 제거 → 공백 분리 → 짧은 토큰/불용어 제거
    → Porter 스테밍 → 순서 유지 중복 제거

"Laptops USB-C charger" 와 "charger for usb laptop" 은 같은 키워드 집합이 되므로
정렬 후 같은 캐시 슬롯을 공유합니다.
"""

import re
import unicodedata
from collections.abc import Iterable, Mapping
from typing import Any

from nltk.stem import PorterStemmer

from .stopwords import StopwordFilter

# 영문/숫자/밑줄, 공백, 포르투갈어 악센트 모음과 ç 외에는 모두 구분자로 취급
NON_KEYWORD_CHARS = re.compile(r"[^\w\sàáâãèéêìíòóôõùúç]", re.ASCII)
COMBINING_MARKS = re.compile("[\u0300-\u036f]")

MIN_KEYWORD_LENGTH = 3


class KeywordNormalizer:
    """
    키워드 추출 및 정규화

    Attributes:
        stopword_filter: 스테밍 전에 적용되는 불용어 필터
        min_length: 유지할 최소 토큰 길이
    """

    def __init__(
        self,
        stopword_filter: StopwordFilter | None = None,
        min_length: int = MIN_KEYWORD_LENGTH,
    ):
        self.stopword_filter = stopword_filter or StopwordFilter()
        self.min_length = min_length
        # NLTK_EXTENSIONS 의 불규칙형 사전(news→news 등) 없이 원래 Porter 규칙만 적용
        self._stemmer = PorterStemmer(mode=PorterStemmer.ORIGINAL_ALGORITHM)

    def extract_keywords(self, text: Any) -> list[str]:
        """
        텍스트에서 스테밍된 키워드 추출

        Args:
            text: 검색 쿼리 (문자열이 아니면 빈 리스트)

        Returns:
            처음 등장한 순서를 유지한 중복 없는 키워드 리스트

        Example:
            >>> KeywordNormalizer().extract_keywords("Laptops and chargers")
            ['laptop', 'charger']
        """
        if not isinstance(text, str) or not text:
            return []

        cleaned = NON_KEYWORD_CHARS.sub(" ", text.lower())

        keywords: list[str] = []
        seen: set[str] = set()
        for token in cleaned.split():
            if len(token) < self.min_length or self.stopword_filter.is_stopword(token):
                continue
            stem = self._stemmer.stem(token)
            if stem not in seen:
                seen.add(stem)
                keywords.append(stem)

        return keywords

    def normalize_keyword(self, keyword: str) -> str:
        """
        인덱스 키용 키워드 정규화 (소문자, 공백 제거, 악센트 제거)

        Example:
            >>> KeywordNormalizer().normalize_keyword(" José ")
            'jose'
        """
        decomposed = unicodedata.normalize("NFD", keyword.lower().strip())
        return COMBINING_MARKS.sub("", decomposed)

    def calculate_similarity(self, keywords_a: Iterable[str], keywords_b: Iterable[str]) -> float:
        """
        Jaccard 유사도 |A ∩ B| / |A ∪ B|

        둘 다 비어 있으면 1.0, 한쪽만 비어 있으면 0.0
        """
        set_a = set(keywords_a)
        set_b = set(keywords_b)

        if not set_a and not set_b:
            return 1.0
        if not set_a or not set_b:
            return 0.0

        return len(set_a & set_b) / len(set_a | set_b)

    # ========================================
    # 보조 유틸리티
    # ========================================

    def calculate_keyword_score(
        self, keywords: list[str], keyword_frequencies: Mapping[str, int | float]
    ) -> float:
        """키워드 목록의 평균 빈도 (빈 목록이면 0.0)"""
        if not keywords:
            return 0.0

        total = sum(keyword_frequencies.get(keyword, 0) for keyword in keywords)
        return total / len(keywords)

    def group_similar_keywords(self, keyword_lists: Iterable[list[str]]) -> dict[str, list[str]]:
        """
        정규화 후 같은 키워드 집합끼리 묶기

        Returns:
            {"정렬된 정규화 키워드를 |로 연결한 그룹 키": [원본 키워드들]}
        """
        groups: dict[str, list[str]] = {}
        for keywords in keyword_lists:
            group_key = "|".join(sorted(self.normalize_keyword(k) for k in keywords))
            groups.setdefault(group_key, []).extend(keywords)
        return groups

    def has_relevant_keywords(self, query: Any) -> bool:
        """캐시 키를 만들 수 있는 키워드가 하나라도 있는지"""
        return len(self.extract_keywords(query)) > 0

    def get_most_significant_keyword(self, keywords: list[str]) -> str | None:
        """가장 긴 키워드 (동일 길이면 먼저 나온 것, 빈 목록이면 None)"""
        if not keywords:
            return None

        longest = keywords[0]
        for keyword in keywords[1:]:
            if len(keyword) > len(longest):
                longest = keyword
        return longest
