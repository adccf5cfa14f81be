"""에러 메시지 및 해결 방법 저장소.

모든 에러 메시지를 한국어와 영어로 저장하며,
각 에러에 대한 해결 방법도 제공합니다.
"""


# 에러 메시지 저장소: {error_code: {"ko": "한국어 메시지", "en": "English message"}}
ERROR_MESSAGES: dict[str, dict[str, str]] = {
    # CACHE (캐시) - 6개
    "CACHE-001": {
        "ko": "캐시 저장소를 사용할 수 없습니다: {reason}",
        "en": "Cache store is unavailable: {reason}",
    },
    "CACHE-002": {
        "ko": "손상된 캐시 엔트리입니다: {key}",
        "en": "Corrupt cache entry: {key}",
    },
    "CACHE-003": {
        "ko": "키워드 인덱스 처리 중 일부 엔트리 실패: {key}",
        "en": "Keyword index operation partially failed for entry: {key}",
    },
    "CACHE-004": {
        "ko": "알 수 없는 eviction 전략입니다: {strategy}",
        "en": "Unknown eviction strategy: {strategy}",
    },
    "CACHE-005": {
        "ko": "지원하지 않는 캐시 저장소 provider입니다: {provider}",
        "en": "Unsupported cache store provider: {provider}",
    },
    "CACHE-006": {
        "ko": "캐시 저장소가 연결되지 않았습니다",
        "en": "Cache store is not connected",
    },
    # CONFIG (설정 관리) - 4개
    "CONFIG-001": {
        "ko": "설정 파일을 찾을 수 없습니다",
        "en": "Configuration file not found",
    },
    "CONFIG-002": {
        "ko": "설정 파일에서 중복된 키가 발견되었습니다",
        "en": "Duplicate keys found in configuration file",
    },
    "CONFIG-003": {
        "ko": "설정 검증 실패",
        "en": "Configuration validation failed",
    },
    "CONFIG-004": {
        "ko": "잘못된 설정 형식",
        "en": "Invalid configuration format",
    },
    # GENERAL (일반) - 2개
    "GENERAL-001": {
        "ko": "예상하지 못한 오류가 발생했습니다",
        "en": "An unexpected error occurred",
    },
    "GENERAL-002": {
        "ko": "잘못된 입력값입니다",
        "en": "Invalid input value",
    },
}


# 에러 해결 방법 저장소: {error_code: {"ko": [...], "en": [...]}}
ERROR_SOLUTIONS: dict[str, dict[str, list[str]]] = {
    "CACHE-001": {
        "ko": [
            "Redis/Dragonfly 서버가 실행 중인지 확인하세요 (redis-cli ping)",
            "CACHE_HOST, CACHE_PORT 또는 REDIS_URL 환경 변수를 확인하세요",
            "store.operation_timeout 값이 너무 작지 않은지 확인하세요",
        ],
        "en": [
            "Verify the Redis/Dragonfly server is running (redis-cli ping)",
            "Check CACHE_HOST, CACHE_PORT or REDIS_URL environment variables",
            "Make sure store.operation_timeout is not too small",
        ],
    },
    "CACHE-002": {
        "ko": [
            "손상된 엔트리는 자동으로 삭제되며 다음 요청에서 다시 캐시됩니다",
            "다른 버전의 서비스가 같은 키 공간을 사용하는지 확인하세요",
        ],
        "en": [
            "Corrupt entries are deleted automatically and re-cached on the next request",
            "Check whether another service version writes to the same key space",
        ],
    },
    "CACHE-003": {
        "ko": [
            "해당 엔트리는 이번 스캔에서 제외되었습니다",
            "반복되면 invalidate()로 캐시를 초기화하세요",
        ],
        "en": [
            "The entry was skipped for this scan",
            "If it repeats, reset the cache with invalidate()",
        ],
    },
    "CACHE-004": {
        "ko": [
            "EVICTION_STRATEGY 값을 lfu, lru, hybrid 중 하나로 설정하세요",
            "설정하지 않으면 lfu 전략이 사용됩니다",
        ],
        "en": [
            "Set EVICTION_STRATEGY to one of lfu, lru, hybrid",
            "The lfu strategy is used when unset",
        ],
    },
    "CACHE-005": {
        "ko": [
            "CACHE_TYPE 값을 redis, dragonfly, memory 중 하나로 설정하세요",
            "커스텀 저장소는 KeyValueStoreFactory.register_provider()로 등록하세요",
        ],
        "en": [
            "Set CACHE_TYPE to one of redis, dragonfly, memory",
            "Register custom stores with KeyValueStoreFactory.register_provider()",
        ],
    },
    "CACHE-006": {
        "ko": [
            "저장소 사용 전에 connect()를 호출하세요",
            "open_search_cache() 컨텍스트 매니저 사용을 권장합니다",
        ],
        "en": [
            "Call connect() before using the store",
            "Prefer the open_search_cache() context manager",
        ],
    },
    "CONFIG-001": {
        "ko": [
            "search_cache/config/base.yaml 파일이 존재하는지 확인하세요",
            "패키지가 package-data와 함께 설치되었는지 확인하세요",
        ],
        "en": [
            "Verify that search_cache/config/base.yaml exists",
            "Make sure the package was installed with its package data",
        ],
    },
    "CONFIG-002": {
        "ko": [
            "설정 파일에서 중복된 키를 검색하세요",
            "들여쓰기가 올바른지 확인하세요 (공백 2칸 사용)",
        ],
        "en": [
            "Search for duplicate keys in the configuration file",
            "Verify indentation is correct (2 spaces)",
        ],
    },
    "CONFIG-003": {
        "ko": [
            "Pydantic 스키마 정의를 참고하세요 (search_cache/config/schemas/)",
            "타입이 올바른지 확인하세요 (문자열, 숫자, 불린 등)",
            "검증에 실패한 섹션은 기본값으로 대체됩니다",
        ],
        "en": [
            "Refer to the Pydantic schemas (search_cache/config/schemas/)",
            "Verify value types (string, number, boolean)",
            "Sections that fail validation fall back to defaults",
        ],
    },
    "CONFIG-004": {
        "ko": [
            "YAML 파일 형식이 올바른지 확인하세요",
            "파일 인코딩이 UTF-8인지 확인하세요",
        ],
        "en": [
            "Verify the YAML file format",
            "Make sure the file is UTF-8 encoded",
        ],
    },
    "GENERAL-001": {
        "ko": [
            "로그에서 상세 오류 정보를 확인하세요",
            "문제가 계속되면 이슈를 등록하세요",
        ],
        "en": [
            "Check the logs for detailed error information",
            "Open an issue if the problem persists",
        ],
    },
    "GENERAL-002": {
        "ko": ["입력값의 타입과 범위를 확인하세요"],
        "en": ["Check the type and range of the input value"],
    },
}


def get_message_template(error_code: str, lang: str = "ko") -> str:
    """에러 메시지 템플릿 가져오기.

    Args:
        error_code: 에러 코드 (예: "CACHE-001")
        lang: 언어 코드 ("ko" 또는 "en")

    Returns:
        에러 메시지 템플릿 문자열

    Raises:
        KeyError: 에러 코드가 존재하지 않는 경우
        ValueError: 지원하지 않는 언어 코드인 경우
    """
    if error_code not in ERROR_MESSAGES:
        raise KeyError(f"Unknown error code: {error_code}")

    if lang not in ("ko", "en"):
        raise ValueError(f"Unsupported language: {lang}")

    return ERROR_MESSAGES[error_code][lang]


def get_solutions_list(error_code: str, lang: str = "ko") -> list[str]:
    """에러 해결 방법 목록 가져오기.

    Raises:
        KeyError: 에러 코드가 존재하지 않는 경우
        ValueError: 지원하지 않는 언어 코드인 경우
    """
    if error_code not in ERROR_SOLUTIONS:
        raise KeyError(f"Unknown error code: {error_code}")

    if lang not in ("ko", "en"):
        raise ValueError(f"Unsupported language: {lang}")

    return ERROR_SOLUTIONS[error_code][lang]
