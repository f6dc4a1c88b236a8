"""
ATMS 데이터 직렬화/역직렬화 헬퍼
==================================

TinyDB와 JSON 응답에 담을 수 있는 형태로 변환한다.
FR 원소는 10진 문자열, 바이트 인코딩(점, 서명, 비밀키)은 hex 문자열.
"""

from atms.encoding import (
    decode_public_key, decode_signature,
    encode_point, encode_signature,
)
from atms.errors import EncodingError
from atms.field import FR, FR_MODULUS


# ─── FR ───

def serialize_fr(val):
    """FR → str(int)"""
    return str(int(val))


def deserialize_fr(s):
    """str(int) → FR. 정규형(0 ≤ x < r)만 허용한다."""
    try:
        n = int(s)
    except (TypeError, ValueError):
        raise EncodingError(f"field element: 10진 정수 문자열이 아닙니다 ({s!r})")
    if not 0 <= n < FR_MODULUS:
        raise EncodingError("field element: 범위를 벗어났습니다")
    return FR(n)


# ─── bytes ───

def from_hex(s):
    """hex 문자열 → bytes"""
    if not isinstance(s, str):
        raise EncodingError(f"hex 문자열이 필요합니다 ({type(s).__name__})")
    try:
        return bytes.fromhex(s)
    except ValueError:
        raise EncodingError(f"올바른 hex 문자열이 아닙니다 ({s!r})")


# ─── 공개키 ───

def serialize_pk(pk):
    """곡선 점 → 32바이트 hex"""
    return encode_point(pk).hex()


def deserialize_pk(s):
    """32바이트 hex → 곡선 점 (부분군 검사 포함)"""
    return decode_public_key(from_hex(s))


def serialize_pk_list(pks):
    return [serialize_pk(pk) for pk in pks]


def deserialize_pk_list(data):
    return [deserialize_pk(s) for s in data]


# ─── 서명 ───

def serialize_signature(sig):
    """(R, s) 또는 None → 64바이트 hex 또는 None"""
    if sig is None:
        return None
    return encode_signature(sig).hex()


def deserialize_signature(s):
    """64바이트 hex 또는 None → (R, s) 또는 None"""
    if s is None:
        return None
    return decode_signature(from_hex(s))
