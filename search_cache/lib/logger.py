"""
Structured logging for the search cache
구조화된 로깅 시스템
"""

import logging
import os
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, cast

import structlog
from structlog.stdlib import LoggerFactory

# 한국 시간대 (KST = UTC+9)
KST = timezone(timedelta(hours=9))

SERVICE_NAME = "search-cache"


def add_kst_timestamp(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """KST(한국 시간) 타임스탬프 추가"""
    event_dict["timestamp"] = datetime.now(KST).isoformat()
    return event_dict


class SearchCacheLogger:
    """검색 캐시 로깅 시스템

    환경 변수:
        LOG_LEVEL: 로그 레벨 (기본 INFO, 프로덕션 기본 WARNING)
        LOG_FORMAT: console | json
        LOG_FILE: 설정 시 해당 경로에도 로그 기록
    """

    def __init__(self) -> None:
        self.log_level = os.getenv("LOG_LEVEL", "INFO").upper()
        self.is_production = os.getenv("NODE_ENV", "development") == "production"

        if self.is_production:
            self.log_level = os.getenv("LOG_LEVEL", "WARNING").upper()

        log_file = os.getenv("LOG_FILE")
        self.log_file = Path(log_file) if log_file else None

        self._setup_logging()

    def _setup_logging(self) -> None:
        """로깅 설정"""
        level = getattr(logging, self.log_level, logging.INFO)

        handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
        if self.log_file is not None:
            self.log_file.parent.mkdir(exist_ok=True, parents=True)
            handlers.append(logging.FileHandler(self.log_file))

        logging.basicConfig(level=level, format="%(message)s", handlers=handlers)

        # redis 클라이언트 내부 로그는 경고 이상만
        logging.getLogger("redis").setLevel(logging.WARNING)

        structlog.configure(
            processors=[
                structlog.stdlib.filter_by_level,
                structlog.stdlib.add_logger_name,
                structlog.stdlib.add_log_level,
                structlog.stdlib.PositionalArgumentsFormatter(),
                add_kst_timestamp,  # type: ignore[list-item]
                structlog.processors.StackInfoRenderer(),
                structlog.processors.format_exc_info,
                structlog.processors.UnicodeDecoder(),
                self._add_context,  # type: ignore[list-item]
                (
                    structlog.processors.JSONRenderer()
                    if self._should_use_json()
                    else structlog.dev.ConsoleRenderer()
                ),
            ],
            context_class=dict,
            logger_factory=LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )

    def _should_use_json(self) -> bool:
        """JSON 형식 사용 여부 결정"""
        return os.getenv("LOG_FORMAT", "console").lower() == "json"

    def _add_context(
        self, logger: Any, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        """컨텍스트 정보 추가"""
        event_dict["service"] = SERVICE_NAME
        event_dict["environment"] = os.getenv("NODE_ENV", "development")
        event_dict["pid"] = os.getpid()
        return event_dict

    def get_logger(self, name: str | None = None) -> structlog.BoundLogger:
        """구조화된 로거 반환"""
        return cast(structlog.BoundLogger, structlog.get_logger(name or __name__))


# 글로벌 로거 인스턴스
_search_cache_logger = SearchCacheLogger()


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """로거 인스턴스 반환"""
    return _search_cache_logger.get_logger(name)
