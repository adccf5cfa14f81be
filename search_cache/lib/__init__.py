"""
Library package initialization
"""

# config_loader는 config.schemas → lib.errors 순환 import를 피하기 위해 여기서 export하지 않음
# (필요시 from search_cache.lib.config_loader import load_config 사용)
from .logger import get_logger

__all__ = [
    "get_logger",
]
