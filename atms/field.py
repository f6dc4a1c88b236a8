"""
ATMS 기반 모듈: 유한체(Finite Field)
======================================

회로 전체에서 사용되는 두 개의 소수체를 정의한다.

**기반체 FR (𝔹)**:
  BLS12-381 곡선의 스칼라 필드. 회로의 모든 배선(wire) 값은 FR 원소이며,
  JubJub 곡선의 좌표 역시 FR 위에 정의된다.
  - 위수 r ≈ 2^255 (255비트)
  - r - 1 = 2^32 × t (t는 홀수) → Tonelli-Shanks 제곱근에 사용

**스칼라체 FS (𝕊)**:
  JubJub 소수 위수 부분군의 위수 s ≈ 2^252 위의 필드.
  서명 스칼라(비밀키, 응답 s, 논스 k)는 FS 원소이다.

두 필드 사이를 오갈 때는 반드시 명시적으로 재인코딩해야 한다
(wide-byte 축약: fr_from_bytes_wide / fs_from_bytes_wide / fs_from_fr).
py_ecc의 FQ는 다른 필드의 원소를 그대로 받아들이므로 항상 int()를 거친다.

사용 예시:
    >>> from atms.field import FR, FS, sqrt
    >>> a = FR(3)
    >>> b = a * a          # FR(9)
    >>> sqrt(b) in (FR(3), -FR(3))
    True
"""

import secrets

from py_ecc.fields import bls12_381_FQ as FQ
from py_ecc import bls12_381


# ─────────────────────────────────────────────────────────────────────
# 유한체 FR / FS
# ─────────────────────────────────────────────────────────────────────

class FR(FQ):
    """BLS12-381 스칼라 필드 위의 유한체 원소 (회로 기반체).

    py_ecc의 FQ 클래스를 상속하여 +, -, *, /, ** 등의 필드 연산을 제공한다.

    예시:
        >>> x = FR(3)
        >>> x * x          # FR(9)
        >>> FR(1) / FR(3)   # 3의 모듈러 역원
    """
    field_modulus = bls12_381.curve_order


class FS(FQ):
    """JubJub 소수 위수 부분군의 스칼라 필드 원소."""
    field_modulus = 0x0e7db4ea6533afa906673b0101343b00a6682093ccc81082d0970e5ed6f72cb7


# 필드 크기
FR_MODULUS = FR.field_modulus
FS_MODULUS = FS.field_modulus

# 정규(canonical) 원소를 표현하는 데 필요한 비트 수
FR_NUM_BITS = FR_MODULUS.bit_length()   # 255
FS_NUM_BITS = FS_MODULUS.bit_length()   # 252


# ─────────────────────────────────────────────────────────────────────
# 바이트 변환
# ─────────────────────────────────────────────────────────────────────

def fr_to_bytes(x):
    """FR 원소를 32바이트 리틀엔디안으로 직렬화한다."""
    return int(x).to_bytes(32, "little")


def fr_from_bytes_wide(data):
    """64바이트 리틀엔디안 정수를 r로 축약하여 FR 원소를 만든다.

    Args:
        data: 길이 64의 bytes

    Returns:
        FR 원소

    예시:
        >>> fr_from_bytes_wide(hashlib.sha512(b"msg").digest())
    """
    if len(data) != 64:
        raise ValueError(f"wide 축약에는 64바이트가 필요합니다 (받은 길이: {len(data)})")
    return FR(int.from_bytes(data, "little") % FR_MODULUS)


def fs_from_bytes_wide(data):
    """64바이트 리틀엔디안 정수를 s로 축약하여 FS 원소를 만든다."""
    if len(data) != 64:
        raise ValueError(f"wide 축약에는 64바이트가 필요합니다 (받은 길이: {len(data)})")
    return FS(int.from_bytes(data, "little") % FS_MODULUS)


def fs_from_fr(x):
    """기반체 원소를 스칼라체로 재인코딩한다.

    32바이트 표현을 64바이트로 0-패딩한 뒤 wide 축약하는 것과 같다.
    Fiat-Shamir 챌린지(FR)를 곡선 스칼라로 쓸 때 사용한다.
    """
    return fs_from_bytes_wide(fr_to_bytes(x) + bytes(32))


def random_fs(rng=None):
    """0이 아닌 무작위 스칼라.

    Args:
        rng: random.Random 호환 객체 (테스트 재현용). None이면 secrets 사용.
    """
    if rng is None:
        return FS(1 + secrets.randbelow(FS_MODULUS - 1))
    return FS(1 + rng.randrange(FS_MODULUS - 1))


def random_fr(rng=None):
    if rng is None:
        return FR(secrets.randbelow(FR_MODULUS))
    return FR(rng.randrange(FR_MODULUS))


# ─────────────────────────────────────────────────────────────────────
# 역원 / 제곱근
# ─────────────────────────────────────────────────────────────────────

def inv0(x):
    """0이면 0, 아니면 모듈러 역원을 반환한다."""
    if int(x) == 0:
        return FR(0)
    return FR(1) / x


def _find_non_residue(p):
    # 오일러 판정법: z^((p-1)/2) == -1 이면 이차 비잉여
    z = 2
    while pow(z, (p - 1) // 2, p) != p - 1:
        z += 1
    return z


def sqrt(x):
    """FR 위의 제곱근 (Tonelli-Shanks).

    Args:
        x: FR 원소

    Returns:
        y * y == x 를 만족하는 FR 원소 y, 제곱근이 없으면 None.
        두 근 중 어느 쪽이 반환되는지는 보장하지 않는다.
    """
    p = FR_MODULUS
    n = int(x) % p
    if n == 0:
        return FR(0)
    if pow(n, (p - 1) // 2, p) != 1:
        return None

    # p - 1 = q · 2^m (q 홀수)
    q, m = p - 1, 0
    while q % 2 == 0:
        q //= 2
        m += 1

    c = pow(_find_non_residue(p), q, p)
    t = pow(n, q, p)
    res = pow(n, (q + 1) // 2, p)
    while t != 1:
        # t^(2^i) == 1 이 되는 최소 i
        i, t2 = 0, t
        while t2 != 1:
            t2 = t2 * t2 % p
            i += 1
        b = pow(c, 1 << (m - i - 1), p)
        m = i
        c = b * b % p
        t = t * c % p
        res = res * b % p
    return FR(res)
