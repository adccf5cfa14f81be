"""
Core Interfaces

비즈니스 로직이 의존하는 추상 인터페이스 모음.
"""

from .storage import IKeyValueStore

__all__ = ["IKeyValueStore"]
