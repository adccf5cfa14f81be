"""커스텀 예외 클래스 모듈.

검색 캐시 시스템의 모든 커스텀 예외 클래스를 정의합니다.
각 예외는 에러 코드와 컨텍스트 정보를 포함하며,
양언어 에러 응답을 생성할 수 있습니다.
"""

from typing import Any

from search_cache.lib.errors.codes import ErrorCode
from search_cache.lib.errors.formatter import format_error_response


class SearchCacheException(Exception):
    """검색 캐시 기본 예외 클래스.

    모든 커스텀 예외의 베이스 클래스입니다.
    에러 코드와 컨텍스트 정보를 저장하고,
    양언어 에러 응답을 생성할 수 있습니다.

    Attributes:
        error_code: 에러 코드 (예: "CACHE-001")
        context: 에러 컨텍스트 정보 (메시지 포맷팅에 사용)
    """

    def __init__(self, error_code: str | ErrorCode, **context: Any) -> None:
        self.error_code = error_code.value if isinstance(error_code, ErrorCode) else error_code
        self.context = context

        # Exception의 메시지는 한국어 기본값으로 설정
        message = format_error_response(self.error_code, lang="ko", include_solutions=False, **context)["message"]
        super().__init__(message)

    def to_dict(self, lang: str = "ko", include_solutions: bool = True) -> dict[str, Any]:
        """에러 응답 딕셔너리로 변환.

        Args:
            lang: 언어 코드 ("ko" 또는 "en")
            include_solutions: 해결 방법 포함 여부

        Example:
            >>> exc = StoreUnavailableError(ErrorCode.CACHE_001, reason="timeout")
            >>> exc.to_dict(lang="en")["error_code"]
            'CACHE-001'
        """
        return format_error_response(
            self.error_code,
            lang=lang,
            include_solutions=include_solutions,
            **self.context,
        )


# 도메인별 예외 클래스


class CacheError(SearchCacheException):
    """캐시 관련 예외."""

    pass


class StoreUnavailableError(CacheError):
    """키-값 저장소 연결/응답 실패.

    호출자(SearchCacheService)는 이 예외를 로그로 남기고 miss/기본값으로 처리합니다.
    """

    def __init__(self, error_code: str | ErrorCode = ErrorCode.CACHE_001, **context: Any) -> None:
        super().__init__(error_code, **context)


class CorruptEntryError(CacheError):
    """저장된 JSON 엔트리/메타데이터를 해석할 수 없음."""

    def __init__(self, error_code: str | ErrorCode = ErrorCode.CACHE_002, **context: Any) -> None:
        super().__init__(error_code, **context)


class ConfigError(SearchCacheException):
    """설정 관련 예외."""

    pass


class GeneralError(SearchCacheException):
    """일반 예외."""

    pass


def get_exception_class(error_code: str | ErrorCode) -> type[SearchCacheException]:
    """에러 코드에 해당하는 예외 클래스 반환.

    Example:
        >>> get_exception_class("CACHE-002").__name__
        'CorruptEntryError'
    """
    code_str = error_code.value if isinstance(error_code, ErrorCode) else error_code

    # 세분화된 캐시 예외 우선
    specific_map: dict[str, type[SearchCacheException]] = {
        ErrorCode.CACHE_001.value: StoreUnavailableError,
        ErrorCode.CACHE_006.value: StoreUnavailableError,
        ErrorCode.CACHE_002.value: CorruptEntryError,
    }
    if code_str in specific_map:
        return specific_map[code_str]

    domain = code_str.split("-")[0]
    domain_map: dict[str, type[SearchCacheException]] = {
        "CACHE": CacheError,
        "CONFIG": ConfigError,
        "GENERAL": GeneralError,
    }

    return domain_map.get(domain, SearchCacheException)


def wrap_exception(
    error: Exception,
    default_code: str | ErrorCode = "GENERAL-001",
    **context: Any,
) -> SearchCacheException:
    """기존 예외를 SearchCacheException으로 래핑.

    Example:
        >>> try:
        ...     await client.get("k")
        ... except RedisError as e:
        ...     raise wrap_exception(e, ErrorCode.CACHE_001, reason=str(e))
    """
    # 이미 SearchCacheException이면 그대로 반환
    if isinstance(error, SearchCacheException):
        return error

    code_str = default_code.value if isinstance(default_code, ErrorCode) else default_code

    # 컨텍스트에 원본 에러 정보 추가
    context["original_error_type"] = type(error).__name__
    context["original_error_message"] = str(error)

    exc_class = get_exception_class(code_str)

    return exc_class(code_str, **context)
