"""
Configuration loader for the search cache
YAML 기반 계층적 설정 로더 + Pydantic 검증

- base.yaml (+ imports) → environments/<env>.yaml 순서로 깊은 병합
- ${VAR:-default} 환경 변수 치환
- 환경 변수 오버라이드 (CACHE_*, EVICTION_*, FUZZY_*, ...)
- Graceful Degradation (검증 실패한 섹션은 기본값 사용)
"""

import os
import re
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from ..config.schemas.root import RootConfig, validate_config_safe
from .environment import get_environment_name
from .errors import ConfigError, ErrorCode
from .logger import get_logger

logger = get_logger(__name__)

# 환경 변수 → 설정 경로 매핑
ENV_MAPPINGS: dict[str, tuple[str, ...]] = {
    "CACHE_TYPE": ("cache", "store", "provider"),
    "CACHE_HOST": ("cache", "store", "host"),
    "CACHE_PORT": ("cache", "store", "port"),
    "CACHE_PASSWORD": ("cache", "store", "password"),
    "CACHE_DB": ("cache", "store", "db"),
    "REDIS_URL": ("cache", "store", "url"),
    "CACHE_TTL": ("cache", "default_ttl"),
    "EVICTION_STRATEGY": ("cache", "eviction", "strategy"),
    "EVICTION_MAX_ENTRIES": ("cache", "eviction", "max_entries"),
    "EVICTION_BATCH_SIZE": ("cache", "eviction", "batch_size"),
    "EVICTION_FREQUENCY_WEIGHT": ("cache", "eviction", "frequency_weight"),
    "EVICTION_RECENCY_WEIGHT": ("cache", "eviction", "recency_weight"),
    "ENABLE_FUZZY_CACHE": ("cache", "fuzzy", "enabled"),
    "FUZZY_SIMILARITY_THRESHOLD": ("cache", "fuzzy", "similarity_threshold"),
    "FUZZY_MAX_CANDIDATES": ("cache", "fuzzy", "max_candidates"),
    "LOG_LEVEL": ("logging", "level"),
}

# 타입 변환 없이 문자열 그대로 사용하는 변수
RAW_STRING_VARS = frozenset({"CACHE_HOST", "CACHE_PASSWORD", "REDIS_URL"})

TOP_LEVEL_KEY_PATTERN = re.compile(r"^([a-zA-Z_][a-zA-Z0-9_]*):\s*")


def detect_duplicate_keys_in_yaml(yaml_path: Path) -> list[str]:
    """
    YAML 파일에서 중복된 최상위 키 탐지

    Returns:
        중복된 키 목록
    """
    with open(yaml_path, encoding="utf-8") as f:
        lines = f.readlines()

    keys_seen: dict[str, int] = {}
    duplicates = []

    for i, line in enumerate(lines, start=1):
        match = TOP_LEVEL_KEY_PATTERN.match(line)
        if match:
            key = match.group(1)
            if key in keys_seen:
                duplicates.append(f"{key} (첫 번째: {keys_seen[key]}줄, 중복: {i}줄)")
            else:
                keys_seen[key] = i

    return duplicates


class ConfigLoader:
    """설정 로더 클래스"""

    def __init__(self, base_path: Path | None = None, environment: str | None = None) -> None:
        env_file = Path.cwd() / ".env"
        if env_file.exists():
            load_dotenv(env_file)

        self.base_path = base_path or Path(__file__).parent.parent / "config"
        self.environment = (environment or get_environment_name()).lower()

        logger.debug(f"🔧 환경 감지: {self.environment}")

    def load_raw_config(self) -> dict[str, Any]:
        """
        검증 없이 병합된 설정 딕셔너리 로드

        Raises:
            ConfigError: base.yaml 없음(CONFIG-001), 중복 키(CONFIG-002), 형식 오류(CONFIG-004)
        """
        base_config_path = self.base_path / "base.yaml"
        if not base_config_path.exists():
            raise ConfigError(
                ErrorCode.CONFIG_001,
                searched_paths=[str(base_config_path)],
                config_directory=str(self.base_path),
                environment=self.environment,
            )

        try:
            duplicates = detect_duplicate_keys_in_yaml(base_config_path)
            if duplicates:
                raise ConfigError(
                    ErrorCode.CONFIG_002,
                    config_file=str(base_config_path),
                    duplicate_keys=duplicates,
                    duplicate_count=len(duplicates),
                )

            config = self._load_yaml_file(base_config_path)
            env_config_path = self.base_path / "environments" / f"{self.environment}.yaml"
            if env_config_path.exists():
                config = self._merge_configs(config, self._load_yaml_file(env_config_path))

            config = self._substitute_env_vars(config)
            return self._apply_env_overrides(config)
        except ConfigError:
            raise
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(
                ErrorCode.CONFIG_004,
                config_path=str(self.base_path),
                environment=self.environment,
                original_error=str(e),
            ) from e

    def load_config(self, raise_on_validation_error: bool = False) -> RootConfig:
        """
        설정 로드 및 검증

        Args:
            raise_on_validation_error: 검증 실패 시 예외 발생 여부 (기본 False)
                - False: Graceful Degradation (실패한 섹션은 기본값)
                - True: 검증 실패 시 ConfigError(CONFIG-003) 발생

        Returns:
            검증된 RootConfig
        """
        raw_config = self.load_raw_config()
        try:
            return validate_config_safe(raw_config, raise_on_error=raise_on_validation_error)
        except ValueError as e:
            raise ConfigError(
                ErrorCode.CONFIG_003,
                validation_errors=str(e),
                environment=self.environment,
            ) from e

    def _load_yaml_file(self, file_path: Path) -> dict[str, Any]:
        """
        YAML 파일 로드 (imports 지원)

        imports 키가 있으면 해당 파일들을 재귀적으로 로드하여 병합.
        상대 경로는 현재 파일 기준으로 해석.
        """
        if not file_path.exists():
            return {}
        with open(file_path, encoding="utf-8") as f:
            config = yaml.safe_load(f) or {}
        if not isinstance(config, dict):
            raise ConfigError(
                ErrorCode.CONFIG_004,
                config_path=str(file_path),
                environment=self.environment,
                original_error="top-level YAML node must be a mapping",
            )
        if "imports" in config:
            imports = config.pop("imports") or []
            for import_path in imports:
                import_file = Path(import_path)
                if not import_file.is_absolute():
                    import_file = file_path.parent / import_path
                config = self._merge_configs(config, self._load_yaml_file(import_file))
                logger.debug(f"  ✓ Imported: {import_path}")
        return config

    def _merge_configs(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """설정 깊은 병합"""
        merged = base.copy()
        for key, value in override.items():
            if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
                merged[key] = self._merge_configs(merged[key], value)
            else:
                merged[key] = value
        return merged

    def _apply_env_overrides(self, config: dict[str, Any]) -> dict[str, Any]:
        """환경 변수 오버라이드 적용"""
        for env_var, config_path in ENV_MAPPINGS.items():
            value = os.getenv(env_var)
            if value is None:
                continue
            converted = value if env_var in RAW_STRING_VARS else self._convert_value(value)
            self._set_nested_value(config, config_path, converted)
        return config

    def _set_nested_value(self, config: dict[str, Any], path: tuple[str, ...], value: Any) -> None:
        """중첩된 딕셔너리에 값 설정"""
        current = config
        for key in path[:-1]:
            if not isinstance(current.get(key), dict):
                current[key] = {}
            current = current[key]
        current[path[-1]] = value

    def _convert_value(self, value: str) -> Any:
        """환경 변수 값 타입 변환"""
        if value.lower() in ("true", "false"):
            return value.lower() == "true"
        try:
            if "." in value:
                return float(value)
            return int(value)
        except ValueError:
            pass
        return value

    def _substitute_env_vars(self, config: dict[str, Any]) -> dict[str, Any]:
        """환경 변수 치환 적용"""

        def replace_env_var(match: re.Match[str]) -> str:
            var_expr = match.group(1)
            if ":-" in var_expr:
                var_name, default_value = var_expr.split(":-", 1)
                return os.getenv(var_name, default_value)
            return os.getenv(var_expr, match.group(0))

        def substitute_value(value: Any) -> Any:
            if isinstance(value, str):
                return re.sub(r"\$\{([^}]+)\}", replace_env_var, value)
            if isinstance(value, dict):
                return {k: substitute_value(v) for k, v in value.items()}
            if isinstance(value, list):
                return [substitute_value(item) for item in value]
            return value

        substituted = substitute_value(config)
        if not isinstance(substituted, dict):
            return config
        return substituted


def load_config(raise_on_validation_error: bool = False) -> RootConfig:
    """
    전역 설정 로드 함수

    Examples:
        >>> config = load_config()
        >>> config.cache.eviction.strategy
        'lfu'
    """
    return ConfigLoader().load_config(raise_on_validation_error=raise_on_validation_error)
