"""
고정 기저 윈도우 테이블
=========================

고정된 공개 기저 B에 대한 스칼라 곱을 2비트 윈도우로 나누어 계산한다.

    k = Σ w_i · 4^i          (w_i ∈ {0,1,2,3})
    k·B = Σ P_i(w_i),   P_i(w) = w · 4^i · B

테이블 P_i(w)는 공개 상수이므로 위트니스가 아니라 게이트 계수로 들어간다.
비밀 값에 의존한 테이블 조회 없이, 두 비트 (b0, b1)에 대한 쌍선형 보간
한 행으로 좌표를 고른다:

    x = x0 + b0·(x1 - x0) + b1·(x2 - x0) + b0·b1·(x3 - x2 - x1 + x0)
"""

from functools import lru_cache

from atms.field import FR
from atms.jubjub import IDENTITY, add, double
from atms.ecc.point import AssignedEccPoint


@lru_cache(maxsize=None)
def window_table(base_x, base_y, num_windows):
    """기저 점의 윈도우 테이블을 계산한다 (순수 함수, 캐시됨).

    Args:
        base_x, base_y: 기저 점 좌표 (정수)
        num_windows: 윈도우 수

    Returns:
        tuple: num_windows개의 (P_i(0), P_i(1), P_i(2), P_i(3)),
               각 점은 (x, y) 정수 튜플
    """
    table = []
    base = (FR(base_x), FR(base_y))
    for _ in range(num_windows):
        b2 = double(base)
        b3 = add(b2, base)
        table.append(tuple(
            (int(x), int(y)) for x, y in (IDENTITY, base, b2, b3)
        ))
        base = double(b2)
    return tuple(table)


def point_selection(main_gate, ctx, b0, b1, window):
    """비트 두 개로 윈도우의 네 점 중 하나를 고른다 (좌표당 main gate 한 행).

    Args:
        main_gate: MainGate
        ctx: RegionCtx
        b0, b1: 비트 셀 (호출자가 비트 제약을 보장)
        window: (P(0), P(1), P(2), P(3)) 정수 좌표

    Returns:
        AssignedEccPoint
    """
    index = int(b0.value) + 2 * int(b1.value)
    coords = []
    for k in (0, 1):
        v0, v1, v2, v3 = (FR(window[w][k]) for w in range(4))
        coords.append(main_gate.assign_row(
            ctx,
            {"a": b0, "b": b1, "e": FR(window[index][k])},
            {
                "sa": v1 - v0,
                "sb": v2 - v0,
                "s_mul_ab": v3 - v2 - v1 + v0,
                "s_constant": v0,
                "se": -1,
            },
        )["e"])
    return AssignedEccPoint(*coords)
