"""
Redis Key-Value Store
Redis 프로토콜 기반 키-값 저장소 (Redis, Dragonfly 공용)

주요 특징:
- redis.asyncio 비동기 클라이언트 (decode_responses=True, encoding_errors="replace")
  UTF-8이 아닌 바이트는 U+FFFD로 치환되어 코덱 단계에서 손상 엔트리(CACHE-002)로 처리됨
- 명령별 타임아웃 (asyncio.wait_for)
- 저장소 예외를 StoreUnavailableError(CACHE-001)로 변환
- Dragonfly는 Redis 프로토콜 호환이므로 같은 구현 사용
"""

import asyncio
from collections.abc import Awaitable
from typing import Any, TypeVar

from redis.asyncio import Redis
from redis.exceptions import ConnectionError, RedisError, TimeoutError

from ....core.interfaces.storage import IKeyValueStore
from ....lib.errors import CorruptEntryError, ErrorCode, StoreUnavailableError
from ....lib.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class RedisKeyValueStore(IKeyValueStore):
    """
    Redis/Dragonfly 키-값 저장소

    url이 주어지면 Redis.from_url()을, 아니면 host/port/password/db로 클라이언트를 생성합니다.
    테스트나 커넥션 풀 공유를 위해 이미 생성된 클라이언트를 주입할 수도 있습니다.
    """

    def __init__(
        self,
        url: str | None = None,
        host: str = "localhost",
        port: int = 6379,
        password: str | None = None,
        db: int = 0,
        operation_timeout: float = 2.0,
        client: Redis | None = None,
        provider_name: str = "redis",
        **kwargs: Any,
    ):
        """
        Args:
            url: 연결 URL (redis://, rediss://)
            host: 호스트 (url 미지정 시)
            port: 포트
            password: 비밀번호
            db: DB 번호
            operation_timeout: 명령당 최대 대기 시간 (초)
            client: 외부에서 생성한 Redis 클라이언트 (선택)
            provider_name: 로그용 프로바이더 이름 (redis, dragonfly)
        """
        self.url = url
        self.host = host
        self.port = port
        self.password = password
        self.db = db
        self.operation_timeout = operation_timeout
        self.provider_name = provider_name
        self._client = client
        self._owns_client = client is None

        if kwargs:
            logger.debug(f"RedisKeyValueStore: 사용하지 않는 설정 무시 {sorted(kwargs)}")

    @property
    def client(self) -> Redis:
        if self._client is None:
            raise StoreUnavailableError(ErrorCode.CACHE_006)
        return self._client

    # ========================================
    # 생명주기
    # ========================================

    async def connect(self) -> None:
        if self._client is None:
            if self.url:
                self._client = Redis.from_url(
                    self.url, decode_responses=True, encoding_errors="replace"
                )
            else:
                self._client = Redis(
                    host=self.host,
                    port=self.port,
                    password=self.password,
                    db=self.db,
                    decode_responses=True,
                    encoding_errors="replace",
                )
            self._owns_client = True

        await self._execute(self.client.ping(), "ping")
        logger.info(
            f"{self.provider_name} 저장소 연결 완료",
            extra={"target": self._describe_target(), "timeout": self.operation_timeout},
        )

    async def close(self) -> None:
        if self._client is None:
            return
        try:
            if self._owns_client:
                await self._client.aclose()
            logger.info(f"{self.provider_name} 연결 종료 완료")
        except (RedisError, OSError) as e:
            logger.warning(
                f"{self.provider_name} 연결 종료 실패",
                extra={"error": str(e), "error_type": type(e).__name__},
            )
        finally:
            self._client = None

    async def ping(self) -> bool:
        try:
            return bool(await self._execute(self.client.ping(), "ping"))
        except StoreUnavailableError as e:
            logger.error(
                f"{self.provider_name} Health Check 실패",
                extra={"error": str(e), "error_code": e.error_code},
            )
            return False

    # ========================================
    # 문자열 키
    # ========================================

    async def get(self, key: str) -> str | None:
        try:
            return await self._execute(self.client.get(key), "get")
        except UnicodeDecodeError as e:
            # encoding_errors="strict" 로 주입된 클라이언트
            raise CorruptEntryError(key=key, reason=f"UTF-8 디코딩 실패: {e.reason}") from e

    async def set(self, key: str, value: str, ttl: int | None = None) -> None:
        if ttl is not None:
            await self._execute(self.client.setex(key, ttl, value), "setex")
        else:
            await self._execute(self.client.set(key, value), "set")

    async def delete(self, key: str) -> int:
        return int(await self._execute(self.client.delete(key), "del"))

    async def exists(self, key: str) -> bool:
        return bool(await self._execute(self.client.exists(key), "exists"))

    async def incrby(self, key: str, amount: int = 1) -> int:
        return int(await self._execute(self.client.incrby(key, amount), "incrby"))

    async def decrby(self, key: str, amount: int = 1) -> int:
        return int(await self._execute(self.client.decrby(key, amount), "decrby"))

    # ========================================
    # 집합
    # ========================================

    async def sadd(self, key: str, *members: str) -> int:
        if not members:
            return 0
        return int(await self._execute(self.client.sadd(key, *members), "sadd"))

    async def srem(self, key: str, *members: str) -> int:
        if not members:
            return 0
        return int(await self._execute(self.client.srem(key, *members), "srem"))

    async def smembers(self, key: str) -> list[str]:
        members = await self._execute(self.client.smembers(key), "smembers")
        return list(members or [])

    async def scard(self, key: str) -> int:
        return int(await self._execute(self.client.scard(key), "scard"))

    # ========================================
    # 정렬 집합
    # ========================================

    async def zincrby(self, key: str, amount: float, member: str) -> float:
        return float(await self._execute(self.client.zincrby(key, amount, member), "zincrby"))

    async def zrem(self, key: str, *members: str) -> int:
        if not members:
            return 0
        return int(await self._execute(self.client.zrem(key, *members), "zrem"))

    async def zrevrange(
        self, key: str, start: int, stop: int, withscores: bool = False
    ) -> list[str] | list[tuple[str, float]]:
        result = await self._execute(
            self.client.zrevrange(key, start, stop, withscores=withscores), "zrevrange"
        )
        if withscores:
            return [(member, float(score)) for member, score in result]
        return list(result)

    # ========================================
    # 전체
    # ========================================

    async def flush(self) -> None:
        await self._execute(self.client.flushdb(), "flushdb")
        logger.info(f"{self.provider_name} DB 초기화 완료", extra={"db": self.db})

    # ========================================
    # 내부 헬퍼 메서드
    # ========================================

    async def _execute(self, command: Awaitable[T], operation: str) -> T:
        """명령 실행 (타임아웃 + 예외 변환)"""
        try:
            return await asyncio.wait_for(command, timeout=self.operation_timeout)
        except (ConnectionError, TimeoutError, RedisError, asyncio.TimeoutError, OSError) as e:
            logger.warning(
                f"{self.provider_name} 명령 실패: {operation}",
                extra={"error": str(e), "error_type": type(e).__name__},
            )
            raise StoreUnavailableError(
                reason=f"{operation}: {type(e).__name__} {e}".strip(),
                operation=operation,
            ) from e

    def _describe_target(self) -> str:
        if self.url:
            # 비밀번호 노출 방지
            return self.url.split("@")[-1]
        return f"{self.host}:{self.port}/{self.db}"
