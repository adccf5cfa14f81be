"""
KeyValueStoreFactory - 설정 기반 키-값 저장소 생성 팩토리

Redis, Dragonfly, 인메모리 저장소를 설정에 따라
동적으로 선택하고 인스턴스화하는 팩토리 클래스입니다.

주요 기능:
- 지연 로딩(Lazy Import)으로 불필요한 의존성 방지
- 런타임에 새 provider 등록 가능
- 친절한 에러 메시지로 설치 가이드 제공
"""

from importlib import import_module
from typing import Any, TypedDict

from ....config.schemas.cache import StoreConfig
from ....core.interfaces.storage import IKeyValueStore
from ....lib.errors import CacheError, ErrorCode
from ....lib.logger import get_logger

logger = get_logger(__name__)


class ProviderInfo(TypedDict):
    """Provider 정보를 담는 타입"""
    class_path: str
    description: str


_REDIS_STORE_PATH = "search_cache.infrastructure.storage.kv.redis_store.RedisKeyValueStore"

# 기본 등록된 저장소 provider 레지스트리
_DEFAULT_PROVIDERS: dict[str, ProviderInfo] = {
    "redis": {
        "class_path": _REDIS_STORE_PATH,
        "description": "Redis - 멀티 인스턴스 공유 캐시",
    },
    "dragonfly": {
        "class_path": _REDIS_STORE_PATH,
        "description": "Dragonfly - Redis 프로토콜 호환 고성능 캐시",
    },
    "memory": {
        "class_path": "search_cache.infrastructure.storage.kv.memory_store.MemoryKeyValueStore",
        "description": "인메모리 저장소 - 단일 프로세스 개발/테스트/폴백용",
    },
}


class KeyValueStoreFactory:
    """
    키-값 저장소 팩토리 클래스

    사용 예시:
        store = KeyValueStoreFactory.create("redis", {"host": "localhost", "port": 6379})

        store = KeyValueStoreFactory.create_from_config(config.cache.store)
    """

    # 클래스 레벨 provider 레지스트리 (런타임 수정 가능)
    _providers: dict[str, ProviderInfo] = _DEFAULT_PROVIDERS.copy()

    @classmethod
    def get_available_providers(cls) -> list[str]:
        """등록된 provider 목록을 반환합니다."""
        return list(cls._providers.keys())

    @classmethod
    def register_provider(cls, name: str, class_path: str, description: str = "") -> None:
        """
        새로운 저장소 provider를 등록합니다.

        Args:
            name: provider 이름 (예: "keydb")
            class_path: 클래스의 전체 경로
            description: provider 설명 (선택사항)
        """
        cls._providers[name] = {
            "class_path": class_path,
            "description": description or f"{name} 키-값 저장소",
        }
        logger.info(f"KeyValueStoreFactory: '{name}' provider 등록 완료")

    @classmethod
    def get_provider_info(cls, name: str) -> ProviderInfo | None:
        return cls._providers.get(name)

    @classmethod
    def create(cls, provider: str, config: dict[str, Any]) -> IKeyValueStore:
        """
        지정된 provider의 저장소 인스턴스를 생성합니다.

        Args:
            provider: 저장소 provider 이름 (예: "redis", "memory")
            config: 저장소 초기화 설정 딕셔너리

        Returns:
            IKeyValueStore: 생성된 저장소 인스턴스 (연결 전 상태)

        Raises:
            CacheError: 지원하지 않는 provider인 경우 (CACHE-005)
            ImportError: 필요한 라이브러리가 설치되지 않은 경우
        """
        if provider not in cls._providers:
            raise CacheError(
                ErrorCode.CACHE_005,
                provider=provider,
                available=", ".join(cls._providers.keys()),
            )

        class_path = cls._providers[provider]["class_path"]

        try:
            store_class = cls._import_class(class_path)
            instance = store_class(**config)
            logger.info(f"KeyValueStoreFactory: '{provider}' 인스턴스 생성 완료")
            return instance

        except ModuleNotFoundError as e:
            missing_module = str(e).replace("No module named ", "").strip("'")
            raise ImportError(
                f"'{provider}' 저장소를 사용하려면 필요한 라이브러리가 설치되어야 합니다. "
                f"누락된 모듈: {missing_module}. "
                f"설치 방법: pip install {cls._get_install_package(provider)}"
            ) from e

        except Exception as e:
            logger.error(f"KeyValueStoreFactory: '{provider}' 인스턴스 생성 실패 - {e}")
            raise

    @classmethod
    def create_from_config(cls, store_config: StoreConfig) -> IKeyValueStore:
        """StoreConfig 스키마로부터 저장소 생성"""
        provider = store_config.provider

        if provider == "memory":
            return cls.create(provider, {"max_keys": store_config.max_keys})

        return cls.create(
            provider,
            {
                "url": store_config.url,
                "host": store_config.host,
                "port": store_config.port,
                "password": store_config.password,
                "db": store_config.db,
                "operation_timeout": store_config.operation_timeout,
                "provider_name": provider,
            },
        )

    @classmethod
    def _import_class(cls, class_path: str) -> type[IKeyValueStore]:
        module_path, class_name = class_path.rsplit(".", 1)
        module = import_module(module_path)
        store_class: type[IKeyValueStore] = getattr(module, class_name)
        return store_class

    @classmethod
    def _get_install_package(cls, provider: str) -> str:
        package_map = {
            "redis": "redis",
            "dragonfly": "redis",
            "memory": "cachetools",
        }
        return package_map.get(provider, provider)
