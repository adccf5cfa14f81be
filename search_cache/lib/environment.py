"""
환경 감지 모듈

다층 환경 감지 로직:
- 명시적 환경 변수(ENVIRONMENT, NODE_ENV)를 최우선으로 판단
- 인프라 기반 체크(TLS Redis URL)를 보조 지표로 사용

프로덕션 지표:
1. ENVIRONMENT=production 또는 prod
2. NODE_ENV=production 또는 prod
3. REDIS_URL이 rediss://로 시작
"""

import os

from .logger import get_logger

logger = get_logger(__name__)


def is_production_environment() -> bool:
    """
    프로덕션 환경 여부 판단

    감지 우선순위:
    1. ENVIRONMENT 환경변수 (명시적 설정 최우선)
    2. NODE_ENV 환경변수
    3. 인프라 기반 체크 (TLS 사용 여부만)

    Returns:
        프로덕션 환경 여부
    """
    environment = os.getenv("ENVIRONMENT", "").lower()
    if environment in ("production", "prod"):
        logger.info("🔒 프로덕션 환경 감지됨 (ENVIRONMENT 환경변수)")
        return True
    if environment in ("development", "dev", "test", "local"):
        logger.info("🔓 개발/테스트 환경으로 판단됨 (ENVIRONMENT 환경변수)")
        return False

    node_env = os.getenv("NODE_ENV", "").lower()
    if node_env in ("production", "prod"):
        logger.info("🔒 프로덕션 환경 감지됨 (NODE_ENV 환경변수)")
        return True
    if node_env in ("development", "dev", "test"):
        logger.info("🔓 개발/테스트 환경으로 판단됨 (NODE_ENV 환경변수)")
        return False

    redis_url = os.getenv("REDIS_URL", "")
    if redis_url.startswith("rediss://"):
        logger.info("🔒 프로덕션 환경 감지됨 (TLS Redis URL)")
        return True

    # 기본값: 개발 환경
    logger.info("🔓 개발 환경으로 판단됨 (명시적 환경 설정 없음)")
    return False


def get_environment_name() -> str:
    """설정 파일 선택에 사용할 환경 이름 반환

    ENVIRONMENT가 명시되어 있으면 그대로 사용하고,
    없으면 is_production_environment() 결과로 production/development를 고릅니다.
    """
    environment = os.getenv("ENVIRONMENT", "").lower()
    aliases = {"prod": "production", "dev": "development", "local": "development"}
    if environment:
        return aliases.get(environment, environment)

    return "production" if is_production_environment() else "development"
