"""
Rescue 스펀지 해시
====================

rate 3, capacity 1 스펀지. 공개키 집합 커밋먼트와 Fiat-Shamir 챌린지에 쓴다.

    state = [0, 0, 0, domain_tag]
    입력 뒤에 1을 하나 붙이고 0으로 채워 3의 배수로 만든 뒤
    블록마다 state[0..2] += block, state = permute(state)
    출력: state[0]

패딩은 항상 1을 붙이므로 단사적이다: [a]와 [a, 0, 0]은 서로 다른
패딩 결과([a, 1, 0]과 [a, 0, 0, 1, 0, 0])를 가진다. 따라서 명단 끝에
x = 0인 키를 덧붙여 같은 커밋먼트를 만들 수 없다.
"""

from atms.field import FR
from atms.rescue.parameters import RATE, STATE_WIDTH
from atms.rescue.permutation import RescuePRP


def pad_inputs(inputs):
    """입력 뒤에 1을 붙이고 RATE의 배수 길이가 되도록 0-패딩한다."""
    inputs = list(inputs) + [FR(1)]
    return inputs + [FR(0)] * (-len(inputs) % RATE)


class RescueSponge:

    @staticmethod
    def hash(inputs, domain_tag=None):
        """FR 원소 리스트를 FR 원소 하나로 압축한다.

        Args:
            inputs: FR 원소(또는 정수) 리스트
            domain_tag: 용도 분리 상수 (capacity 원소의 초기값, 기본 0)

        Returns:
            FR 원소

        예시:
            >>> RescueSponge.hash([R_x, pk_x, msg])
        """
        prp = RescuePRP()
        state = [FR(0)] * STATE_WIDTH
        state[STATE_WIDTH - 1] = FR(int(domain_tag)) if domain_tag is not None else FR(0)

        padded = [FR(int(x)) for x in pad_inputs(inputs)]
        for i in range(0, len(padded), RATE):
            block = padded[i:i + RATE]
            state = [s + b for s, b in zip(state[:RATE], block)] + state[RATE:]
            state = prp.permute(state)
        return state[0]
