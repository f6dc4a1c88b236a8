"""
JubJub 뒤틀린 에드워즈(Twisted Edwards) 곡선 연산
===================================================

BLS12-381 스칼라 필드 FR 위에 정의된 곡선:

    -x² + y² = 1 + d·x²·y²,   d = -(10240 / 10241)

**완전 덧셈 법칙 (complete addition)**:
  d가 FR에서 이차 비잉여이므로 아래 공식은 예외(분모 0)가 없다.
  회로에서도 같은 공식을 그대로 제약으로 쓴다.

    λ  = x₁·x₂·y₁·y₂
    x₃ = (x₁·y₂ + x₂·y₁) / (1 + d·λ)
    y₃ = (y₁·y₂ + x₁·x₂) / (1 - d·λ)

**항등원**: (0, 1).
  전체 군의 위수는 8·s (여인수 8), 서명은 위수 s인 부분군에서만 사용한다.

점 표현은 py_ecc와 같이 (x, y) 튜플이고 함수 이름도 py_ecc를 따른다
(add, double, neg, multiply, is_on_curve).

사용 예시:
    >>> from atms.jubjub import GENERATOR, multiply, add
    >>> P = multiply(GENERATOR, 5)
    >>> add(P, multiply(GENERATOR, 2)) == multiply(GENERATOR, 7)
    True
"""

from atms.field import FR, FS_MODULUS, sqrt


# ─────────────────────────────────────────────────────────────────────
# 곡선 상수
# ─────────────────────────────────────────────────────────────────────

# 곡선 계수 d = -(10240/10241)
EDWARDS_D = -(FR(10240) / FR(10241))

# 소수 위수 부분군의 위수와 여인수
SUBGROUP_ORDER = FS_MODULUS
COFACTOR = 8

# 항등원
IDENTITY = (FR(0), FR(1))


# ─────────────────────────────────────────────────────────────────────
# 군 연산
# ─────────────────────────────────────────────────────────────────────

def is_on_curve(pt):
    """점이 곡선 방정식을 만족하는지 확인한다."""
    x, y = pt
    xx = x * x
    yy = y * y
    return yy - xx == FR(1) + EDWARDS_D * xx * yy


def is_identity(pt):
    return pt == IDENTITY


def add(p1, p2):
    """완전 덧셈 법칙으로 두 점을 더한다.

    Args:
        p1, p2: 곡선 위의 점 (x, y)

    Returns:
        p1 + p2
    """
    x1, y1 = p1
    x2, y2 = p2
    lam = EDWARDS_D * x1 * x2 * y1 * y2
    x3 = (x1 * y2 + x2 * y1) / (FR(1) + lam)
    y3 = (y1 * y2 + x1 * x2) / (FR(1) - lam)
    return (x3, y3)


def double(pt):
    return add(pt, pt)


def neg(pt):
    x, y = pt
    return (-x, y)


def multiply(pt, n):
    """스칼라 곱셈 n·pt (LSB부터 double-and-add).

    Args:
        pt: 곡선 위의 점
        n: 정수, FR 또는 FS 원소 (축약하지 않고 정수 값 그대로 사용)

    Returns:
        n·pt
    """
    n = int(n)
    if n < 0:
        return multiply(neg(pt), -n)
    result = IDENTITY
    addend = pt
    while n:
        if n & 1:
            result = add(result, addend)
        addend = double(addend)
        n >>= 1
    return result


def mul_by_cofactor(pt):
    return double(double(double(pt)))


def is_torsion_free(pt):
    """점이 위수 s 부분군에 속하는지 확인한다 (s·P == O)."""
    return multiply(pt, SUBGROUP_ORDER) == IDENTITY


def is_odd(x):
    return int(x) & 1 == 1


def point_from_y(y, sign):
    """y 좌표와 x의 부호 비트로부터 점을 복원한다.

    x² = (y² - 1) / (1 + d·y²)

    Args:
        y: FR 원소
        sign: x가 홀수여야 하면 1, 짝수여야 하면 0

    Returns:
        (x, y) 또는 복원할 수 없으면 None
    """
    yy = y * y
    x = sqrt((yy - FR(1)) / (FR(1) + EDWARDS_D * yy))
    if x is None:
        return None
    if int(x) == 0 and sign:
        return None
    if is_odd(x) != bool(sign):
        x = -x
    return (x, y)


def _find_generator(start=11):
    # y = start 부터 차례로 시도해 짝수 x로 복원되는 첫 점을 찾고
    # 필요하면 여인수를 곱해 소수 위수 부분군으로 보낸다.
    y = start
    while True:
        pt = point_from_y(FR(y), 0)
        if pt is not None:
            if not is_torsion_free(pt):
                pt = mul_by_cofactor(pt)
            if not is_identity(pt) and is_torsion_free(pt):
                return pt
        y += 1


# 소수 위수 부분군의 고정 생성자
GENERATOR = _find_generator()
