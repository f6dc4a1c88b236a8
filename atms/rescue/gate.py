"""
Rescue 회로 게이트
====================

네이티브 RescuePRP(고정 키 모드)와 비트 단위로 같은 결과를 내는
main gate 행 시퀀스.

**행 배치** (라운드마다 12행, 시작 4행 → 순열당 148행):
  | 단계            | 배선                 | 계수                                  |
  |-----------------|----------------------|---------------------------------------|
  | st + V[0]       | a=t, e=t+c           | sa=1, s_constant=c, se=-1  (×4)       |
  | 역 S-box        | a=s, e=t             | q_h1=1, se=-1  (s⁵ = t)  (×4)         |
  | M·s + V[2r+1]   | a..d=s, e=out_i      | sa..sd=M[i], s_constant, se=-1 (×4)   |
  | M·s⁵ + V[2r+2]  | a..d=s, e=out_i      | q_h1..q_h4=M[i], s_constant, se=-1 (×4)|

역 S-box 값 t^(1/5)는 위트니스로 넣고 s⁵ = t로 확인한다.
"""

from atms.field import FR, FR_MODULUS
from atms.circuit.main_gate import MainGate
from atms.rescue.parameters import (
    ALPHA_INV, MDS, N_ROUNDS, RATE, RC_VECTOR, STATE_WIDTH,
)
from atms.rescue.sponge import pad_inputs


LINEAR = ("sa", "sb", "sc", "sd")
POW5 = ("q_h1", "q_h2", "q_h3", "q_h4")


class RescuePermGate:
    """고정 키 Rescue 순열 게이트."""

    def __init__(self, main_gate_config):
        self.main_gate = MainGate(main_gate_config)

    def _affine_layer(self, ctx, state, constants, terms):
        values = [cell.value for cell in state]
        if terms is POW5:
            values = [v ** 5 for v in values]
        out = []
        for i in range(STATE_WIDTH):
            coeffs = {terms[j]: MDS[i][j] for j in range(STATE_WIDTH)}
            coeffs["s_constant"] = constants[i]
            coeffs["se"] = -1
            result = sum((MDS[i][j] * values[j] for j in range(STATE_WIDTH)), FR(0)) + constants[i]
            cells = dict(zip(("a", "b", "c", "d"), state))
            cells["e"] = result
            out.append(self.main_gate.assign_row(ctx, cells, coeffs)["e"])
        return out

    def _sbox_inv_layer(self, ctx, state):
        out = []
        for cell in state:
            root = FR(pow(int(cell.value), ALPHA_INV, FR_MODULUS))
            out.append(self.main_gate.assign_row(
                ctx, {"a": root, "e": cell}, {"q_h1": 1, "se": -1}
            )["a"])
        return out

    def permute(self, ctx, state):
        """할당된 상태 4개에 순열을 적용한다.

        Args:
            ctx: RegionCtx
            state: AssignedCell 4개

        Returns:
            list[AssignedCell]: 출력 상태
        """
        if len(state) != STATE_WIDTH:
            raise ValueError(f"Rescue 상태의 폭은 {STATE_WIDTH}이어야 합니다 (받은 길이: {len(state)})")
        state = [
            self.main_gate.add_constant(ctx, cell, rc)
            for cell, rc in zip(state, RC_VECTOR[0])
        ]
        for r in range(N_ROUNDS):
            state = self._sbox_inv_layer(ctx, state)
            state = self._affine_layer(ctx, state, RC_VECTOR[2 * r + 1], LINEAR)
            state = self._affine_layer(ctx, state, RC_VECTOR[2 * r + 2], POW5)
        return state


class RescueCrhfGate(RescuePermGate):
    """Rescue 스펀지 해시 게이트 (RescueSponge.hash와 동일한 출력)."""

    def hash(self, ctx, inputs, domain_tag=None):
        """할당된 셀 리스트를 해시한다.

        입력 바로 뒤의 패딩 1은 상수 덧셈 행으로 넣는다.
        그 뒤의 0은 더해도 값이 변하지 않으므로 행을 쓰지 않는다.

        Args:
            ctx: RegionCtx
            inputs: AssignedCell 리스트
            domain_tag: capacity 초기값 (기본 0)

        Returns:
            AssignedCell: state[0]
        """
        tag = FR(int(domain_tag)) if domain_tag is not None else FR(0)
        state = [self.main_gate.assign_constant(ctx, 0) for _ in range(RATE)]
        state.append(self.main_gate.assign_constant(ctx, tag))

        inputs = list(inputs)
        num_blocks = len(pad_inputs(inputs)) // RATE
        for block in range(num_blocks):
            for j in range(RATE):
                index = block * RATE + j
                if index < len(inputs):
                    state[j] = self.main_gate.add(ctx, state[j], inputs[index])
                elif index == len(inputs):
                    state[j] = self.main_gate.add_constant(ctx, state[j], 1)
            state = self.permute(ctx, state)
        return state[0]
