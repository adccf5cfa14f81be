"""에러 코드 정의 모듈.

검색 캐시 시스템의 모든 에러 코드를 Enum으로 정의합니다.
도메인별로 그룹화되어 있어 에러 분류 및 추적이 용이합니다.
"""

from enum import Enum


class ErrorCode(str, Enum):
    """검색 캐시 에러 코드 Enum.

    형식: {DOMAIN}-{NUMBER}
    - CACHE: 캐시 저장소/엔트리/인덱스
    - CONFIG: 설정 관리
    - GENERAL: 일반 오류
    """

    # CACHE (캐시) - 6개
    CACHE_001 = "CACHE-001"  # 키-값 저장소 연결/응답 실패
    CACHE_002 = "CACHE-002"  # 캐시 엔트리 또는 메타데이터 파싱 실패
    CACHE_003 = "CACHE-003"  # 키워드 인덱스 부분 실패 (개별 엔트리 스킵)
    CACHE_004 = "CACHE-004"  # 알 수 없는 eviction 전략 (lfu로 대체)
    CACHE_005 = "CACHE-005"  # 알 수 없는 저장소 provider
    CACHE_006 = "CACHE-006"  # 저장소가 연결되지 않음
    STORE_UNAVAILABLE = "CACHE-001"  # 별칭: 저장소 사용 불가
    CORRUPT_ENTRY = "CACHE-002"  # 별칭: 손상된 엔트리

    # CONFIG (설정 관리) - 4개
    CONFIG_001 = "CONFIG-001"  # 설정 파일 없음
    CONFIG_002 = "CONFIG-002"  # 중복 키
    CONFIG_003 = "CONFIG-003"  # 설정 검증 실패
    CONFIG_004 = "CONFIG-004"  # 잘못된 설정 형식

    # GENERAL (일반) - 2개
    GENERAL_001 = "GENERAL-001"  # 예상하지 못한 오류
    GENERAL_002 = "GENERAL-002"  # 잘못된 입력값
