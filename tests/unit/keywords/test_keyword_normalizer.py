"""
KeywordNormalizer 테스트

테스트 범위:
1. 키워드 추출 (소문자, 특수문자, 길이, 불용어, 스테밍, 중복 제거)
2. 어순 무관 / 재추출 멱등성
3. 키워드 정규화 (악센트 제거)
4. Jaccard 유사도 경계값
5. 보조 유틸리티
"""

import pytest

from search_cache.modules.core.keywords import KeywordNormalizer, StopwordFilter


@pytest.fixture
def normalizer() -> KeywordNormalizer:
    return KeywordNormalizer()


@pytest.mark.unit
class TestExtractKeywords:
    """extract_keywords"""

    def test_stems_and_removes_stopwords(self, normalizer: KeywordNormalizer) -> None:
        """
        Given: 복수형 + 불용어가 섞인 쿼리
        When: extract_keywords 호출
        Then: 불용어 제거 + 어간만 남음
        """
        keywords = normalizer.extract_keywords("Laptops and chargers for USB")

        assert keywords == ["laptop", "charger", "usb"]

    def test_stemming_equivalence(self, normalizer: KeywordNormalizer) -> None:
        assert normalizer.extract_keywords("laptops") == normalizer.extract_keywords("laptop")
        assert normalizer.extract_keywords("cables") == ["cabl"]
        assert normalizer.extract_keywords("charging") == ["charg"]
        assert normalizer.extract_keywords("students") == ["student"]

    def test_irregular_forms_follow_porter_rules(self, normalizer: KeywordNormalizer) -> None:
        """불규칙형 예외 사전 없이 원래 Porter 규칙으로 스테밍"""
        assert normalizer.extract_keywords("news") == ["new"]
        assert normalizer.extract_keywords("skies") == ["ski"]
        assert normalizer.extract_keywords("news skies") == normalizer.extract_keywords("new ski")

    def test_word_order_does_not_matter(self, normalizer: KeywordNormalizer) -> None:
        a = normalizer.extract_keywords("usb laptop charger")
        b = normalizer.extract_keywords("charger laptop usb")

        assert sorted(a) == sorted(b)

    def test_punctuation_is_separator(self, normalizer: KeywordNormalizer) -> None:
        """USB-C → usb + c (c 는 3글자 미만이라 제거)"""
        assert normalizer.extract_keywords("USB-C cables!!!") == ["usb", "cabl"]

    def test_short_tokens_removed(self, normalizer: KeywordNormalizer) -> None:
        assert normalizer.extract_keywords("ab abc") == ["abc"]

    def test_duplicates_removed_in_first_seen_order(self, normalizer: KeywordNormalizer) -> None:
        assert normalizer.extract_keywords("cable usb cables USB") == ["cabl", "usb"]

    def test_portuguese_stopwords(self, normalizer: KeywordNormalizer) -> None:
        keywords = normalizer.extract_keywords("notebook para estudantes com desconto")

        assert "para" not in keywords
        assert "com" not in keywords
        assert keywords[0] == "notebook"
        assert len(keywords) == 3

    def test_only_stopwords(self, normalizer: KeywordNormalizer) -> None:
        assert normalizer.extract_keywords("the and for with") == []

    @pytest.mark.parametrize("value", [None, "", 123, ["laptop"]])
    def test_non_string_or_empty(self, normalizer: KeywordNormalizer, value) -> None:
        assert normalizer.extract_keywords(value) == []

    def test_reextraction_is_idempotent(self, normalizer: KeywordNormalizer) -> None:
        first = normalizer.extract_keywords("laptops chargers usb cables")
        second = normalizer.extract_keywords(" ".join(first))

        assert first == ["laptop", "charger", "usb", "cabl"]
        assert second == first

    def test_custom_stopwords(self) -> None:
        normalizer = KeywordNormalizer(stopword_filter=StopwordFilter(custom_stopwords={"Cheap"}))

        assert normalizer.extract_keywords("cheap laptop") == ["laptop"]

    def test_custom_min_length(self) -> None:
        normalizer = KeywordNormalizer(min_length=5)

        assert normalizer.extract_keywords("usb laptop") == ["laptop"]


@pytest.mark.unit
class TestNormalizeKeyword:
    """normalize_keyword"""

    def test_accent_and_case(self, normalizer: KeywordNormalizer) -> None:
        assert normalizer.normalize_keyword(" José ") == "jose"
        assert normalizer.normalize_keyword("jose") == "jose"

    def test_cedilla_and_tilde(self, normalizer: KeywordNormalizer) -> None:
        assert normalizer.normalize_keyword("AÇÃO") == "acao"


@pytest.mark.unit
class TestCalculateSimilarity:
    """Jaccard 유사도"""

    def test_both_empty(self, normalizer: KeywordNormalizer) -> None:
        assert normalizer.calculate_similarity([], []) == 1.0

    def test_one_empty(self, normalizer: KeywordNormalizer) -> None:
        assert normalizer.calculate_similarity(["laptop"], []) == 0.0
        assert normalizer.calculate_similarity([], ["laptop"]) == 0.0

    def test_partial_overlap(self, normalizer: KeywordNormalizer) -> None:
        a = ["laptop", "charger", "usb", "cabl"]
        b = ["laptop", "charger", "usb"]

        assert normalizer.calculate_similarity(a, b) == 0.75
        assert normalizer.calculate_similarity(b, a) == 0.75

    def test_identical_and_disjoint(self, normalizer: KeywordNormalizer) -> None:
        assert normalizer.calculate_similarity(["a", "b"], ["b", "a"]) == 1.0
        assert normalizer.calculate_similarity(["a"], ["b"]) == 0.0


@pytest.mark.unit
class TestKeywordUtilities:
    """보조 유틸리티"""

    def test_keyword_score_is_mean_frequency(self, normalizer: KeywordNormalizer) -> None:
        score = normalizer.calculate_keyword_score(["laptop", "usb", "cabl"], {"laptop": 4, "usb": 2})

        assert score == 2.0

    def test_keyword_score_empty(self, normalizer: KeywordNormalizer) -> None:
        assert normalizer.calculate_keyword_score([], {"laptop": 4}) == 0.0

    def test_group_similar_keywords(self, normalizer: KeywordNormalizer) -> None:
        groups = normalizer.group_similar_keywords([["Laptop", "USB"], ["usb", "laptop"], ["mouse"]])

        assert groups == {
            "laptop|usb": ["Laptop", "USB", "usb", "laptop"],
            "mouse": ["mouse"],
        }

    def test_has_relevant_keywords(self, normalizer: KeywordNormalizer) -> None:
        assert normalizer.has_relevant_keywords("the and for") is False
        assert normalizer.has_relevant_keywords("gaming laptop") is True

    def test_most_significant_keyword(self, normalizer: KeywordNormalizer) -> None:
        assert normalizer.get_most_significant_keyword(["usb", "laptop", "charger"]) == "charger"
        assert normalizer.get_most_significant_keyword(["abc", "xyz"]) == "abc"
        assert normalizer.get_most_significant_keyword([]) is None
