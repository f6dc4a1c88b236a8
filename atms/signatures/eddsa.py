"""
EdDSA 서명 (네이티브, 바이트 메시지)
======================================

회로 밖에서 쓰는 독립 서명 방식. Schnorr와 같은 검증식을 쓰지만
챌린지 입력이 다르다.

    m = SHA-512(message)  → FR로 wide 축약
    h = Rescue_tag(R.x, pk.x, m)  → FS로 재인코딩
    s = r + h·sk
    verify: s·G == R + h·pk

Rescue 스펀지의 capacity 원소에 EdDSA 전용 도메인 태그를 넣어
회로의 Schnorr 챌린지(태그 없음)와 섞이지 않게 한다.
"""

import hashlib

from atms.field import FR, FS, fr_from_bytes_wide, fs_from_fr, random_fs
from atms.jubjub import GENERATOR, add, multiply
from atms.rescue.sponge import RescueSponge


EDDSA_DOMAIN_TAG = FR(int.from_bytes(b"atms.eddsa.sha512", "little"))


def hash_message(message):
    """바이트 메시지를 SHA-512 후 FR로 wide 축약한다."""
    return fr_from_bytes_wide(hashlib.sha512(bytes(message)).digest())


def challenge(announcement, public_point, message):
    h = RescueSponge.hash(
        [announcement[0], public_point[0], hash_message(message)],
        EDDSA_DOMAIN_TAG,
    )
    return fs_from_fr(h)


def sign(message, private_scalar, rng=None):
    """바이트 메시지에 서명한다.

    Args:
        message: bytes
        private_scalar: FS 원소 (또는 정수)
        rng: 논스용 난수 발생기 (None이면 secrets)

    Returns:
        (R, s)
    """
    sk = FS(int(private_scalar))
    pk = multiply(GENERATOR, sk)
    r = random_fs(rng)
    announcement = multiply(GENERATOR, r)
    return announcement, r + challenge(announcement, pk, message) * sk


def verify(signature, public_point, message):
    """서명을 검증한다. 성공하면 True."""
    announcement, response = signature
    h = challenge(announcement, public_point, message)
    return multiply(GENERATOR, response) == add(announcement, multiply(public_point, h))
