"""
Cache 레코드 직렬화

저장소에 쓰고 읽는 JSON 레코드의 인코딩/디코딩은 모두 이 모듈을 거칩니다.
해석할 수 없는 값은 CorruptEntryError(CACHE-002)로 변환됩니다.
"""

from pydantic import ValidationError
from pydantic_core import PydanticSerializationError

from ....lib.errors import CorruptEntryError, ErrorCode, GeneralError
from .models import CacheEntry, CacheEntryMetadata


def encode_entry(entry: CacheEntry) -> str:
    """
    CacheEntry → JSON 문자열

    Raises:
        GeneralError: data가 JSON으로 직렬화되지 않는 경우 (GENERAL-002)
    """
    try:
        return entry.model_dump_json(by_alias=True)
    except PydanticSerializationError as e:
        raise GeneralError(ErrorCode.GENERAL_002, reason=str(e)) from e


def decode_entry(raw: str | bytes, key: str) -> CacheEntry:
    """JSON 문자열 → CacheEntry"""
    try:
        return CacheEntry.model_validate_json(raw)
    except ValidationError as e:
        raise CorruptEntryError(key=key, reason=str(e)) from e


def encode_metadata(metadata: CacheEntryMetadata) -> str:
    return metadata.model_dump_json(by_alias=True)


def decode_metadata(raw: str | bytes, key: str) -> CacheEntryMetadata:
    """JSON 문자열 → CacheEntryMetadata"""
    try:
        return CacheEntryMetadata.model_validate_json(raw)
    except ValidationError as e:
        raise CorruptEntryError(key=key, reason=str(e)) from e


def byte_length(serialized: str) -> int:
    """UTF-8 바이트 길이 (메타데이터 size 필드)"""
    return len(serialized.encode("utf-8"))
