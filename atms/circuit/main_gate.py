"""
Main Gate: 5배선 범용 산술 게이트
===================================

모든 상위 가젯(ECC, Rescue, Schnorr, ATMS)이 공유하는 PLONK 스타일 게이트.

**게이트 방정식** (advice a..e, 나머지는 fixed 계수):

    sa·a + sb·b + sc·c + sd·d + se·e
      + s_mul_ab·a·b + s_mul_cd·c·d
      + se_next·e_next + s_constant
      + q_h1·a⁵ + q_h2·b⁵ + q_h3·c⁵ + q_h4·d⁵ = 0

  - e_next: 다음 행의 e 값 (누적 합 체인에 사용)
  - q_h*: 5제곱 S-box 항 (Rescue에서 사용)
  - 공개 입력은 instance 열과의 복사 제약으로 들어온다.

**명령별 계수 설정**:
  | 명령            | 배선                  | 계수                                   |
  |-----------------|-----------------------|----------------------------------------|
  | assign_constant | a=c                   | sa=1, s_constant=-c                    |
  | assert_zero     | a                     | sa=1                                   |
  | assert_one      | a                     | sa=1, s_constant=-1                    |
  | assert_bit      | a=b=x                 | s_mul_ab=1, sa=-1  (x² - x = 0)        |
  | add             | a, b, e=a+b           | sa=sb=1, se=-1                         |
  | sub             | a, b, e=a-b           | sa=1, sb=-1, se=-1                     |
  | add_constant    | a, e=a+k              | sa=1, s_constant=k, se=-1              |
  | mul             | a, b, e=a·b           | s_mul_ab=1, se=-1                      |
  | select          | a, b=c=cond, d, e     | s_mul_ab=1, s_mul_cd=-1, sd=1, se=-1   |

사용 예시:
    >>> config = MainGate.configure(meta)
    >>> gate = MainGate(config)
    >>> ctx = RegionCtx(region)
    >>> x = gate.assign_value(ctx, FR(3))
    >>> y = gate.mul(ctx, x, x)      # 9
"""

import logging

from atms.field import FR
from atms.circuit.layouter import AssignedCell


logger = logging.getLogger(__name__)


ADVICE_NAMES = ("a", "b", "c", "d", "e")
FIXED_NAMES = (
    "sa", "sb", "sc", "sd", "se", "se_next",
    "s_mul_ab", "s_mul_cd", "s_constant",
    "q_h1", "q_h2", "q_h3", "q_h4",
)


class MainGateConfig:
    """Main gate의 열 핸들.

    속성:
        a, b, c, d, e: advice 열 (equality 활성화)
        sa, sb, ..., q_h4: fixed 계수 열
        instance: 공개 입력 열
        advice, fixed: 이름 → 열 딕셔너리
    """

    def __init__(self, advice, fixed, instance):
        self.advice = advice
        self.fixed = fixed
        self.instance = instance
        for name, column in advice.items():
            setattr(self, name, column)
        for name, column in fixed.items():
            setattr(self, name, column)

    def constraints(self, row):
        """게이트 방정식의 값을 계산한다 (RowView → [(이름, 값)])."""
        a, b, c, d, e = (row.advice(self.advice[n]) for n in ADVICE_NAMES)
        e_next = row.advice(self.e, 1)
        f = {n: row.fixed(self.fixed[n]) for n in FIXED_NAMES}

        value = (
            f["sa"] * a + f["sb"] * b + f["sc"] * c + f["sd"] * d + f["se"] * e
            + f["s_mul_ab"] * a * b + f["s_mul_cd"] * c * d
            + f["se_next"] * e_next + f["s_constant"]
        )
        # S-box 항은 계수가 있을 때만 계산
        for q, x in (("q_h1", a), ("q_h2", b), ("q_h3", c), ("q_h4", d)):
            if int(f[q]) != 0:
                value = value + f[q] * x ** 5
        return [("main_gate", value)]


class MainGate:
    """Main gate 명령 모음. 모든 명령은 RegionCtx를 받아 한 행 이상을 채운다."""

    def __init__(self, config):
        self.config = config

    @staticmethod
    def configure(meta):
        """열을 할당하고 게이트를 등록한다.

        Args:
            meta: ConstraintSystem

        Returns:
            MainGateConfig
        """
        advice = {name: meta.advice_column(name) for name in ADVICE_NAMES}
        fixed = {name: meta.fixed_column(name) for name in FIXED_NAMES}
        instance = meta.instance_column("instance")
        for column in advice.values():
            meta.enable_equality(column)
        meta.enable_equality(instance)

        config = MainGateConfig(advice, fixed, instance)
        meta.create_gate("main_gate", config.constraints)
        return config

    # ─────────────────────────────────────────────────────────────
    # 기본 행 작성
    # ─────────────────────────────────────────────────────────────

    def assign_row(self, ctx, cells=None, coeffs=None):
        """현재 행에 배선 값과 계수를 쓰고 다음 행으로 넘어간다.

        AssignedCell이 주어지면 새 셀에 값을 복사하고 복사 제약을 건다.

        Args:
            ctx: RegionCtx
            cells: {"a".."e": FR 값 또는 AssignedCell}
            coeffs: {"sa".."q_h4": 계수}

        Returns:
            {"a".."e": AssignedCell} (주어진 배선만)

        예시:
            >>> gate.assign_row(ctx, {"a": x, "b": y, "e": x + y},
            ...                 {"sa": 1, "sb": 1, "se": -1})
        """
        assigned = {}
        for name, value in (cells or {}).items():
            column = self.config.advice[name]
            if isinstance(value, AssignedCell):
                new = ctx.assign_advice(column, value.value)
                ctx.constrain_equal(new, value)
            else:
                new = ctx.assign_advice(column, value)
            assigned[name] = new
        for name, coeff in (coeffs or {}).items():
            ctx.assign_fixed(self.config.fixed[name], coeff)
        ctx.next()
        return assigned

    def expose_public(self, layouter, cell, row):
        """셀을 공개 입력 row번째 값과 같도록 제약한다."""
        layouter.constrain_instance(cell.cell, self.config.instance, row)

    # ─────────────────────────────────────────────────────────────
    # 할당 / 단정
    # ─────────────────────────────────────────────────────────────

    def assign_value(self, ctx, value):
        """제약 없는 위트니스 값 하나를 할당한다."""
        return self.assign_row(ctx, {"a": value})["a"]

    def assign_values(self, ctx, values):
        """여러 위트니스 값을 한 행에 최대 5개씩 할당한다."""
        cells = []
        values = list(values)
        for i in range(0, len(values), len(ADVICE_NAMES)):
            chunk = dict(zip(ADVICE_NAMES, values[i:i + len(ADVICE_NAMES)]))
            row = self.assign_row(ctx, chunk)
            cells.extend(row[name] for name in ADVICE_NAMES if name in row)
        return cells

    def assign_constant(self, ctx, constant):
        """고정 상수를 가진 셀을 만든다: a - c = 0."""
        constant = FR(int(constant))
        return self.assign_row(ctx, {"a": constant}, {"sa": 1, "s_constant": -constant})["a"]

    def assert_equal(self, ctx, a, b):
        ctx.constrain_equal(a, b)

    def assert_zero(self, ctx, a):
        self.assign_row(ctx, {"a": a}, {"sa": 1})

    def assert_one(self, ctx, a):
        self.assign_row(ctx, {"a": a}, {"sa": 1, "s_constant": -1})

    def assert_bit(self, ctx, a):
        """a·a - a = 0.  a, b 배선은 같은 셀로 묶인다."""
        row = self.assign_row(ctx, {"a": a, "b": a}, {"s_mul_ab": 1, "sa": -1})
        ctx.constrain_equal(row["a"], row["b"])
        return row["a"]

    # ─────────────────────────────────────────────────────────────
    # 산술
    # ─────────────────────────────────────────────────────────────

    def add(self, ctx, a, b):
        res = a.value + b.value
        return self.assign_row(
            ctx, {"a": a, "b": b, "e": res}, {"sa": 1, "sb": 1, "se": -1}
        )["e"]

    def sub(self, ctx, a, b):
        res = a.value - b.value
        return self.assign_row(
            ctx, {"a": a, "b": b, "e": res}, {"sa": 1, "sb": -1, "se": -1}
        )["e"]

    def add_constant(self, ctx, a, constant):
        constant = FR(int(constant))
        return self.assign_row(
            ctx, {"a": a, "e": a.value + constant},
            {"sa": 1, "s_constant": constant, "se": -1},
        )["e"]

    def mul(self, ctx, a, b):
        res = a.value * b.value
        return self.assign_row(
            ctx, {"a": a, "b": b, "e": res}, {"s_mul_ab": 1, "se": -1}
        )["e"]

    def select(self, ctx, a, b, cond):
        """cond ? a : b.  (cond는 호출자가 비트임을 보장해야 한다)

        a·cond - cond·b + b - res = 0
        """
        res = a.value if int(cond.value) == 1 else b.value
        return self.assign_row(
            ctx,
            {"a": a, "b": cond, "c": cond, "d": b, "e": res},
            {"s_mul_ab": 1, "s_mul_cd": -1, "sd": 1, "se": -1},
        )["e"]

    def conditional_assert_equal(self, ctx, a, b, cond):
        """cond·(a - b) = 0. cond가 0이면 아무것도 강제하지 않는다."""
        self.assign_row(
            ctx, {"a": cond, "b": a, "c": cond, "d": b},
            {"s_mul_ab": 1, "s_mul_cd": -1},
        )

    # ─────────────────────────────────────────────────────────────
    # 비트 분해
    # ─────────────────────────────────────────────────────────────

    def to_bits(self, ctx, a, num_bits):
        """a를 리틀엔디안 num_bits 비트로 분해한다.

        1. 각 비트 b_i에 assert_bit 행 (b_i² - b_i = 0)
        2. 4비트씩 누적 체인으로 합을 강제:
             r_0 = a
             r_{j+1} = r_j - Σ 2^(4j+i)·b_(4j+i)     (se=-1, se_next=1)
             마지막 r_m = 0                          (se=1)

        a가 num_bits 비트에 들어가지 않으면 잘린 비트를 할당한다.
        그 결과 회로는 만족 불가능해진다 (예외는 발생하지 않는다).

        Args:
            ctx: RegionCtx
            a: AssignedCell
            num_bits: 비트 수

        Returns:
            list[AssignedCell]: LSB부터의 비트 셀
        """
        value = int(a.value)
        if value >> num_bits:
            logger.warning("value does not fit in %d bits; decomposition will be unsatisfiable",
                           num_bits)
        bits = [
            self.assert_bit(ctx, FR((value >> i) & 1))
            for i in range(num_bits)
        ]

        # 첫 행의 e는 a의 복사본, 이후 행의 e는 새 나머지 값
        remainder = a
        remainder_value = a.value
        for j in range(0, num_bits, 4):
            chunk = bits[j:j + 4]
            cells = dict(zip(("a", "b", "c", "d"), chunk))
            cells["e"] = remainder
            coeffs = {
                name: FR(1 << (j + i))
                for i, name in enumerate(("sa", "sb", "sc", "sd")[:len(chunk)])
            }
            coeffs["se"] = -1
            coeffs["se_next"] = 1
            self.assign_row(ctx, cells, coeffs)

            for i, bit in enumerate(chunk):
                remainder_value = remainder_value - FR(1 << (j + i)) * bit.value
            remainder = remainder_value

        self.assign_row(ctx, {"e": remainder}, {"se": 1})
        return bits
