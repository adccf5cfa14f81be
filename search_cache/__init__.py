"""
Keyword Search Cache

키워드 정규화 기반 검색 결과 캐시:
- 순서/대소문자/불용어/단복수와 무관한 정규 캐시 키
- 키워드 유사도(Jaccard) 기반 퍼지 조회
- LFU / LRU / Hybrid eviction 정책
"""

__version__ = "1.0.0"
