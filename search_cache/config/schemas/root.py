"""
Root 설정 스키마

전체 설정을 통합하고 검증하는 최상위 스키마입니다.
"""

from typing import Any

from pydantic import Field, ValidationError

from ...lib.errors import ErrorCode
from ...lib.logger import get_logger
from .base import BaseConfig
from .cache import EvictionConfig, FuzzyMatchConfig, SearchCacheConfig, StoreConfig

logger = get_logger(__name__)

# 섹션 단위 Graceful Degradation 대상
CACHE_SECTIONS: dict[str, type[BaseConfig]] = {
    "store": StoreConfig,
    "eviction": EvictionConfig,
    "fuzzy": FuzzyMatchConfig,
}


class RootConfig(BaseConfig):
    """
    전체 설정 통합 스키마

    cache 섹션은 Pydantic으로 타입 검증하고,
    logging 등 나머지 설정은 dict로 유연하게 처리합니다.
    """

    cache: SearchCacheConfig = Field(
        default_factory=SearchCacheConfig,
        description="검색 캐시 설정 (저장소, eviction, 퍼지 매칭)",
    )

    logging: dict[str, Any] | None = Field(
        default=None,
        description="로깅 설정",
    )


def validate_config(config_dict: dict[str, Any]) -> tuple[RootConfig | None, list[str]]:
    """
    설정 딕셔너리를 Pydantic 모델로 검증

    Returns:
        tuple[RootConfig | None, list[str]]:
            - RootConfig: 검증된 설정 객체 (실패 시 None)
            - list[str]: 검증 오류 메시지 목록 (성공 시 빈 리스트)

    Examples:
        >>> validated, errors = validate_config({"cache": {"eviction": {"max_entries": 500}}})
        >>> validated.cache.eviction.max_entries
        500
    """
    try:
        return RootConfig(**config_dict), []

    except ValidationError as e:
        return None, _format_validation_errors(e)


def _format_validation_errors(error: ValidationError) -> list[str]:
    error_messages = []
    for item in error.errors():
        loc = " → ".join(str(x) for x in item["loc"])
        error_messages.append(f"[{loc}] {item['msg']} (type: {item['type']})")
    return error_messages


def _drop_invalid_sections(config_dict: dict[str, Any]) -> dict[str, Any]:
    """검증에 실패한 cache 하위 섹션을 제거하여 기본값이 적용되도록 함"""
    cache_dict = dict(config_dict.get("cache") or {})

    for name, schema in CACHE_SECTIONS.items():
        section = cache_dict.get(name)
        if section is None:
            continue
        try:
            schema.model_validate(section)
        except ValidationError as e:
            logger.warning(
                f"설정 섹션 검증 실패, 기본값 사용: cache.{name}",
                extra={
                    "error_code": ErrorCode.CONFIG_003.value,
                    "errors": _format_validation_errors(e),
                },
            )
            cache_dict.pop(name)

    return {**config_dict, "cache": cache_dict}


def validate_config_safe(
    config_dict: dict[str, Any],
    *,
    raise_on_error: bool = False,
    log_errors: bool = True,
) -> RootConfig:
    """
    안전한 설정 검증 (Graceful Degradation 지원)

    검증 실패 시 실패한 섹션만 기본값으로 대체합니다.
    그래도 실패하면 전체 기본 설정을 사용합니다.

    Args:
        config_dict: YAML에서 로드한 설정 딕셔너리
        raise_on_error: True이면 검증 실패 시 예외 발생 (기본값: False)
        log_errors: True이면 검증 오류를 로깅 (기본값: True)

    Returns:
        RootConfig: 검증된 (또는 부분적으로 기본값이 적용된) 설정 객체

    Raises:
        ValueError: raise_on_error=True 이고 검증 실패 시
    """
    validated_config, errors = validate_config(config_dict)

    if not errors and validated_config is not None:
        return validated_config

    if log_errors:
        logger.warning(
            "⚠️ 설정 검증 실패 - 섹션별 기본값 적용 (Graceful Degradation)",
            extra={"error_code": ErrorCode.CONFIG_003.value, "errors": errors},
        )

    if raise_on_error:
        error_msg = "\n".join(errors)
        raise ValueError(f"Configuration validation failed:\n{error_msg}")

    repaired, repaired_errors = validate_config(_drop_invalid_sections(config_dict))
    if repaired is not None:
        return repaired

    if log_errors:
        logger.warning(
            "⚠️ 섹션 대체 후에도 검증 실패 - 전체 기본 설정 사용",
            extra={"error_code": ErrorCode.CONFIG_003.value, "errors": repaired_errors},
        )
    return RootConfig()


__all__ = [
    "RootConfig",
    "validate_config",
    "validate_config_safe",
]
