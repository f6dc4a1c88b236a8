"""
Rescue 순열 (PRP)
===================

    st ← st + V[0]
    for r in 0..11:
        st ← M · st^(1/5) + V[2r+1]
        st ← M · st^5     + V[2r+2]

V는 고정 키 모드에서 RC_VECTOR, 키 모드에서는 키 스케줄의 결과이다.
키 스케줄은 같은 core_permutation을 키에 대해 KI_VECTOR로 한 번 돌리고
모든 중간 상태(25개)를 라운드 키로 쓴다.

사용 예시:
    >>> RescuePRP().permute([FR(1), FR(2), FR(3), FR(4)])
    >>> key = RescuePRP.keygen()
    >>> RescuePRP(key).permute([FR(0)] * 4)
"""

from atms.field import FR, FR_MODULUS, random_fr
from atms.rescue.parameters import (
    ALPHA, ALPHA_INV, KI_VECTOR, MDS, N_ROUNDS, RC_VECTOR, STATE_WIDTH,
)


def sbox(state):
    return [x ** ALPHA for x in state]


def sbox_inv(state):
    return [FR(pow(int(x), ALPHA_INV, FR_MODULUS)) for x in state]


def linear_op(state, vector):
    """st ← M · st + vector."""
    return [
        sum((MDS[i][j] * state[j] for j in range(STATE_WIDTH)), FR(0)) + vector[i]
        for i in range(STATE_WIDTH)
    ]


def core_permutation(state, vector):
    """Rescue의 핵심 알고리즘. 모든 중간 상태를 반환한다.

    Args:
        state: 길이 4의 FR 리스트
        vector: 25개의 상태 벡터 상수

    Returns:
        list: 25개의 상태 (마지막이 순열 출력)
    """
    state = [s + v for s, v in zip(state, vector[0])]
    result = [state]
    for r in range(N_ROUNDS):
        state = linear_op(sbox_inv(state), vector[2 * r + 1])
        result.append(state)
        state = linear_op(sbox(state), vector[2 * r + 2])
        result.append(state)
    return result


class RescuePRP:
    """키가 있거나(블록 암호) 없는(해시) Rescue 의사난수 순열."""

    def __init__(self, key=None):
        if key is None:
            self.key = [FR(0)] * STATE_WIDTH
            self.round_keys = RC_VECTOR
        else:
            self.key = [FR(int(k)) for k in key]
            self.round_keys = core_permutation(self.key, KI_VECTOR)

    @staticmethod
    def keygen(rng=None):
        """무작위 키 (FR 원소 4개)."""
        return [random_fr(rng) for _ in range(STATE_WIDTH)]

    def permute(self, state):
        if len(state) != STATE_WIDTH:
            raise ValueError(f"Rescue 상태의 폭은 {STATE_WIDTH}이어야 합니다 (받은 길이: {len(state)})")
        state = [FR(int(s)) for s in state]
        return core_permutation(state, self.round_keys)[-1]
