"""
바이트 인코딩
==============

외부 경계(바인딩, HTTP)에서 사용하는 고정 길이 바이트 형식.

  | 객체      | 길이 | 형식                                              |
  |-----------|------|---------------------------------------------------|
  | 점/공개키 | 32   | y 리틀엔디안, 마지막 바이트 최상위 비트 = x 홀짝 |
  | 스칼라    | 32   | 리틀엔디안, s 미만 (정규형만 허용)               |
  | 비밀키    | 64   | 리틀엔디안 wide 정수, s로 축약                   |
  | 서명      | 64   | R(32) ‖ s(32)                                    |

해석할 수 없는 입력은 기본값으로 대체하지 않고 항상 EncodingError를 발생시킨다.
"""

from atms.errors import EncodingError
from atms.field import FR, FS, FR_MODULUS, FS_MODULUS, fs_from_bytes_wide
from atms.jubjub import is_odd, is_torsion_free, point_from_y


POINT_BYTES = 32
SCALAR_BYTES = 32
PRIVATE_KEY_BYTES = 64
SIGNATURE_BYTES = 64


def _check_length(data, expected, what):
    if not isinstance(data, (bytes, bytearray)):
        raise EncodingError(f"{what}: bytes가 필요합니다 ({type(data).__name__})")
    if len(data) != expected:
        raise EncodingError(f"{what}: 길이 {expected}바이트가 필요합니다 (받은 길이: {len(data)})")


# ─── 점 ───

def encode_point(pt):
    """곡선 점을 32바이트 압축 형식으로 인코딩한다."""
    x, y = pt
    raw = bytearray(int(y).to_bytes(POINT_BYTES, "little"))
    if is_odd(x):
        raw[31] |= 0x80
    return bytes(raw)


def decode_point(data):
    """32바이트 압축 점을 복원한다.

    Raises:
        EncodingError: 길이 오류, y ≥ p, 곡선 위의 점이 아닌 경우,
                       x = 0인데 부호 비트가 1인 경우
    """
    _check_length(data, POINT_BYTES, "point")
    sign = data[31] >> 7
    y_int = int.from_bytes(bytes(data[:31]) + bytes([data[31] & 0x7F]), "little")
    if y_int >= FR_MODULUS:
        raise EncodingError("point: y 좌표가 정규형이 아닙니다")
    pt = point_from_y(FR(y_int), sign)
    if pt is None:
        raise EncodingError("point: 곡선 위의 점이 아닙니다")
    return pt


def decode_public_key(data):
    """공개키를 복원한다. 소수 위수 부분군에 속하지 않으면 거부한다."""
    pt = decode_point(data)
    if not is_torsion_free(pt):
        raise EncodingError("public key is invalid")
    return pt


# ─── 스칼라 ───

def encode_scalar(s):
    return int(s).to_bytes(SCALAR_BYTES, "little")


def decode_scalar(data):
    """32바이트 정규 스칼라를 FS 원소로 복원한다."""
    _check_length(data, SCALAR_BYTES, "scalar")
    n = int.from_bytes(data, "little")
    if n >= FS_MODULUS:
        raise EncodingError("scalar: 정규형이 아닙니다 (≥ s)")
    return FS(n)


def decode_private_key(data):
    """64바이트 비밀키를 wide 축약하여 FS 원소로 만든다."""
    _check_length(data, PRIVATE_KEY_BYTES, "private key")
    return fs_from_bytes_wide(bytes(data))


# ─── 서명 ───

def encode_signature(sig):
    """(R, s) 서명을 64바이트로 인코딩한다."""
    announcement, response = sig
    return encode_point(announcement) + encode_scalar(response)


def decode_signature(data):
    """64바이트 서명을 (R, s)로 복원한다."""
    _check_length(data, SIGNATURE_BYTES, "signature")
    return decode_point(bytes(data[:32])), decode_scalar(bytes(data[32:]))
