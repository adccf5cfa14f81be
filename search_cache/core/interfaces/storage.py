"""
Storage Interfaces

검색 캐시가 사용하는 키-값 저장소 추상화 인터페이스 정의.
이 인터페이스를 통해 캐시 로직은 구체적인 저장소 구현체(Redis, Dragonfly, 인메모리)로부터 분리됩니다.

문자열 값, 집합(set), 정렬 집합(sorted set), 원자적 카운터를 지원하는
Redis 프로토콜 호환 저장소라면 모두 이 계약을 만족합니다.
"""
from abc import ABC, abstractmethod
from types import TracebackType
from typing import Self


class IKeyValueStore(ABC):
    """
    키-값 저장소 인터페이스

    모든 메서드는 저장소 장애 시 StoreUnavailableError(CACHE-001)를 발생시킵니다.
    """

    # ------------------------------------------------------------------
    # 생명주기
    # ------------------------------------------------------------------

    @abstractmethod
    async def connect(self) -> None:
        """저장소 연결 (연결 실패 시 StoreUnavailableError)"""
        pass

    @abstractmethod
    async def close(self) -> None:
        """저장소 연결 종료 (여러 번 호출해도 안전)"""
        pass

    @abstractmethod
    async def ping(self) -> bool:
        """연결 상태 확인"""
        pass

    async def __aenter__(self) -> Self:
        await self.connect()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()

    # ------------------------------------------------------------------
    # 문자열 키
    # ------------------------------------------------------------------

    @abstractmethod
    async def get(self, key: str) -> str | None:
        """값 조회 (없으면 None)"""
        pass

    @abstractmethod
    async def set(self, key: str, value: str, ttl: int | None = None) -> None:
        """값 저장 (ttl 초 단위, None이면 만료 없음)"""
        pass

    @abstractmethod
    async def delete(self, key: str) -> int:
        """키 삭제 (삭제된 키 수 반환)"""
        pass

    @abstractmethod
    async def exists(self, key: str) -> bool:
        """키 존재 여부"""
        pass

    @abstractmethod
    async def incrby(self, key: str, amount: int = 1) -> int:
        """원자적 증가 (증가 후 값 반환)"""
        pass

    @abstractmethod
    async def decrby(self, key: str, amount: int = 1) -> int:
        """원자적 감소 (감소 후 값 반환)"""
        pass

    # ------------------------------------------------------------------
    # 집합
    # ------------------------------------------------------------------

    @abstractmethod
    async def sadd(self, key: str, *members: str) -> int:
        """집합에 멤버 추가 (새로 추가된 수 반환)"""
        pass

    @abstractmethod
    async def srem(self, key: str, *members: str) -> int:
        """집합에서 멤버 제거 (제거된 수 반환)"""
        pass

    @abstractmethod
    async def smembers(self, key: str) -> list[str]:
        """집합 전체 멤버 조회 (삽입 순서가 보장되지 않을 수 있음)"""
        pass

    @abstractmethod
    async def scard(self, key: str) -> int:
        """집합 크기"""
        pass

    # ------------------------------------------------------------------
    # 정렬 집합
    # ------------------------------------------------------------------

    @abstractmethod
    async def zincrby(self, key: str, amount: float, member: str) -> float:
        """정렬 집합 멤버 점수 증감 (변경 후 점수 반환)"""
        pass

    @abstractmethod
    async def zrem(self, key: str, *members: str) -> int:
        """정렬 집합에서 멤버 제거 (제거된 수 반환)"""
        pass

    @abstractmethod
    async def zrevrange(
        self, key: str, start: int, stop: int, withscores: bool = False
    ) -> list[str] | list[tuple[str, float]]:
        """점수 내림차순 범위 조회 (stop 포함, -1은 끝)"""
        pass

    # ------------------------------------------------------------------
    # 전체
    # ------------------------------------------------------------------

    @abstractmethod
    async def flush(self) -> None:
        """현재 DB의 모든 키 삭제"""
        pass
