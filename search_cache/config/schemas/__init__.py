"""
설정 스키마 패키지

Pydantic 기반 설정 검증 스키마를 제공합니다.
"""

from .base import BaseConfig
from .cache import EvictionConfig, FuzzyMatchConfig, SearchCacheConfig, StoreConfig
from .root import RootConfig, validate_config, validate_config_safe

__all__ = [
    "BaseConfig",
    "StoreConfig",
    "EvictionConfig",
    "FuzzyMatchConfig",
    "SearchCacheConfig",
    "RootConfig",
    "validate_config",
    "validate_config_safe",
]
