"""
불용어 필터 (StopwordFilter)

검색 쿼리 키워드 추출용 영어 + 포르투갈어 불용어 처리:
- 관사, 전치사, 접속사, 대명사
- 조동사, 빈도/수량 부사

불용어는 거의 모든 쿼리에 등장하여 캐시 키의 구별력을 떨어뜨리는 단어들입니다.
"""

from collections.abc import Iterable

from ....lib.logger import get_logger

logger = get_logger(__name__)


class StopwordFilter:
    """
    불용어 필터

    키워드 추출 단계에서 스테밍 전에 적용됩니다.
    """

    # ========================================
    # 영어 불용어
    # ========================================
    ENGLISH_STOPWORDS: frozenset[str] = frozenset(
        {
            "the", "a", "an", "and", "or", "but", "in", "on", "at", "to",
            "for", "of", "with", "by", "from", "as", "is", "was", "are", "were",
            "be", "been", "being", "have", "has", "had", "do", "does", "did", "will",
            "would", "should", "can", "could", "may", "might", "must", "shall", "this", "that",
            "these", "those", "what", "which", "who", "when", "where", "why", "how", "all",
            "each", "every", "both", "few", "more", "most", "other", "some", "such", "no",
            "nor", "not", "only", "own", "same", "so", "than", "too", "very", "just",
            "now",
        }
    )

    # ========================================
    # 포르투갈어 불용어
    # ========================================
    PORTUGUESE_STOPWORDS: frozenset[str] = frozenset(
        {
            "o", "a", "os", "as", "um", "uma", "uns", "umas", "de", "da",
            "do", "das", "dos", "em", "no", "na", "nos", "nas", "por", "para",
            "com", "sem", "sob", "sobre", "e", "ou", "mas", "se", "que", "como",
            "quando", "onde", "porque", "porquê", "qual", "quais", "quem", "este", "esta", "estes",
            "estas", "esse", "essa", "esses", "essas", "aquele", "aquela", "aqueles", "aquelas", "isto",
            "isso", "aquilo", "meu", "minha", "meus", "minhas", "teu", "tua", "teus", "tuas",
            "seu", "sua", "seus", "suas", "nosso", "nossa", "nossos", "nossas", "vosso", "vossa",
            "vossos", "vossas", "todo", "toda", "todos", "todas", "muito", "muita", "muitos", "muitas",
            "pouco", "pouca", "poucos", "poucas", "mais", "menos", "bem", "mal", "já", "ainda",
            "sempre", "nunca", "também", "só", "apenas", "depois", "antes", "agora", "hoje", "ontem",
            "amanhã", "sim", "não", "talvez",
        }
    )

    DEFAULT_STOPWORDS: frozenset[str] = ENGLISH_STOPWORDS | PORTUGUESE_STOPWORDS

    def __init__(
        self,
        custom_stopwords: Iterable[str] | None = None,
        use_defaults: bool = True,
        enabled: bool = True,
    ):
        """
        Args:
            custom_stopwords: 추가 불용어 (set, list 등 Iterable 지원)
            use_defaults: 기본 불용어 사용 여부
            enabled: 불용어 필터 기능 활성화 여부 (기본: True)
        """
        self.enabled = enabled
        self.stopwords: set[str] = set()

        if self.enabled:
            if use_defaults:
                self.stopwords.update(self.DEFAULT_STOPWORDS)

            if custom_stopwords:
                self.stopwords.update(word.lower() for word in custom_stopwords)

            logger.debug(f"불용어 필터 초기화: {len(self.stopwords)}개 불용어")
        else:
            logger.info("불용어 필터 비활성화됨")

    def filter(self, tokens: list[str]) -> list[str]:
        """토큰 리스트에서 불용어 제거"""
        if not self.enabled:
            return tokens

        return [t for t in tokens if t not in self.stopwords]

    def is_stopword(self, word: str) -> bool:
        """
        단어가 불용어인지 확인

        Args:
            word: 소문자 단어
        """
        return self.enabled and word in self.stopwords

    def add_stopwords(self, words: Iterable[str]) -> None:
        """런타임에 불용어 추가"""
        self.stopwords.update(word.lower() for word in words)

    def remove_stopwords(self, words: Iterable[str]) -> None:
        """런타임에 불용어 제거"""
        self.stopwords.difference_update(word.lower() for word in words)

    def __len__(self) -> int:
        return len(self.stopwords)
