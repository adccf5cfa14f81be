"""
Key-Value Store 구현체

- RedisKeyValueStore: Redis / Dragonfly (Redis 프로토콜 호환)
- MemoryKeyValueStore: 단일 프로세스 인메모리 저장소

팩토리:
- KeyValueStoreFactory: 설정 기반 저장소 선택
"""

from .factory import KeyValueStoreFactory
from .memory_store import MemoryKeyValueStore
from .redis_store import RedisKeyValueStore

__all__ = [
    "KeyValueStoreFactory",
    "MemoryKeyValueStore",
    "RedisKeyValueStore",
]
