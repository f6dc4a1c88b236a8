"""
ECC 칩: 회로 안의 JubJub 연산
===============================

Main gate의 열을 공유하면서 점 위트니스/덧셈 게이트를 추가한 칩.

**열 배치**:
  | 역할      | 열                      |
  |-----------|-------------------------|
  | x_p, y_p  | main gate a, b          |
  | x_qr, y_qr| main gate c, d          |
  | alpha     | main gate e             |
  | beta      | 새 advice 열            |
  | scalar_mul| 새 advice 열 (스칼라)   |

**연산**:
  - witness_point / witness_scalar: 위트니스 할당
  - add: 완전 덧셈 (2행)
  - cond_add(p, q, cond): cond ? p + q : p
  - mul: 가변 기저 곱셈, MSB→LSB double-and-add (FR 비트 길이 전체)
  - fixed_mul: 고정 기저 곱셈, 2비트 윈도우 + 공개 테이블
  - constrain_equal: 두 점의 좌표 복사 제약

회로 안의 항등원은 (0, 1)이다. 완전 덧셈 법칙이 이 점을 특별 취급 없이
처리하므로 누적자의 시작값과 cond_add의 "더하지 않음" 분기에 쓴다.

사용 예시:
    >>> config = EccChip.configure(meta)
    >>> chip = EccChip(config)
    >>> pk = chip.witness_point(ctx, public_key)
    >>> c = chip.witness_scalar(ctx, challenge)
    >>> c_pk = chip.mul(ctx, c, pk)
    >>> s_g = chip.fixed_mul(ctx, s, GENERATOR)
"""

from atms.field import FR, FR_NUM_BITS, FS_NUM_BITS
from atms.circuit.main_gate import MainGate
from atms.ecc.add import AddConfig
from atms.ecc.fixed_base import point_selection, window_table
from atms.ecc.point import AssignedEccPoint
from atms.ecc.witness_point import WitnessPointConfig


class EccInstructions:
    """곡선 연산 능력 집합. 다른 곡선/필드 백엔드로 교체할 수 있는 경계."""

    def witness_point(self, ctx, point):
        raise NotImplementedError

    def witness_scalar(self, ctx, scalar):
        raise NotImplementedError

    def add(self, ctx, p, q):
        """p + q. 덧셈의 항등원은 (0, 1) 하나뿐이다."""
        raise NotImplementedError

    def cond_add(self, ctx, p, q, cond):
        raise NotImplementedError

    def mul(self, ctx, scalar, base):
        raise NotImplementedError

    def fixed_mul(self, ctx, scalar, base):
        raise NotImplementedError

    def constrain_equal(self, ctx, p, q):
        raise NotImplementedError


class EccConfig:
    """ECC 칩 설정.

    속성:
        main_gate_config: 공유하는 MainGateConfig
        beta, scalar_mul: 추가 advice 열
        add_config: AddConfig
        witness_point_config: WitnessPointConfig
    """

    def __init__(self, main_gate_config, beta, scalar_mul, add_config, witness_point_config):
        self.main_gate_config = main_gate_config
        self.beta = beta
        self.scalar_mul = scalar_mul
        self.add_config = add_config
        self.witness_point_config = witness_point_config


class EccChip(EccInstructions):
    """JubJub ECC 칩 (EccInstructions의 유일한 구현)."""

    def __init__(self, config):
        self.config = config
        self.main_gate = MainGate(config.main_gate_config)

    @staticmethod
    def configure(meta, main_gate_config=None):
        """열과 게이트를 선언한다.

        Args:
            meta: ConstraintSystem
            main_gate_config: 이미 구성된 main gate (없으면 새로 구성)

        Returns:
            EccConfig
        """
        main = main_gate_config or MainGate.configure(meta)
        beta = meta.advice_column("beta")
        scalar_mul = meta.advice_column("scalar_mul")
        meta.enable_equality(beta)
        meta.enable_equality(scalar_mul)

        add_config = AddConfig.configure(
            meta, x_p=main.a, y_p=main.b, x_qr=main.c, y_qr=main.d,
            alpha=main.e, beta=beta,
        )
        witness_point_config = WitnessPointConfig.configure(meta, main.a, main.b)
        return EccConfig(main, beta, scalar_mul, add_config, witness_point_config)

    # ─────────────────────────────────────────────────────────────
    # 위트니스
    # ─────────────────────────────────────────────────────────────

    def witness_point(self, ctx, point):
        """곡선 점(또는 (0, 0))을 할당한다.

        (0, 0)은 항등원이 아니다. 항등원이 필요하면 assign_identity의 (0, 1)을 쓴다.
        """
        return self.config.witness_point_config.assign_region(ctx, point)

    def witness_scalar(self, ctx, scalar):
        """스칼라를 scalar_mul 열에 할당한다. FS/FR/정수 모두 정수 값으로 옮긴다."""
        cell = ctx.assign_advice(self.config.scalar_mul, FR(int(scalar)))
        ctx.next()
        return cell

    def assign_identity(self, ctx):
        """상수 (0, 1) 점을 할당한다."""
        x = self.main_gate.assign_constant(ctx, 0)
        y = self.main_gate.assign_constant(ctx, 1)
        return AssignedEccPoint(x, y)

    # ─────────────────────────────────────────────────────────────
    # 덧셈
    # ─────────────────────────────────────────────────────────────

    def add(self, ctx, p, q):
        """완전 덧셈 p + q. 항등원은 (0, 1)이며 (0, 0)은 결과를 (0, 0)으로 만든다."""
        return self.config.add_config.assign_region(ctx, p, q)

    def cond_add(self, ctx, p, q, cond):
        """cond가 1이면 p + q, 0이면 p. cond는 여기서 비트로 제약된다."""
        cond = self.main_gate.assert_bit(ctx, cond)
        identity = self.assign_identity(ctx)
        return self._cond_add(ctx, p, q, cond, identity)

    def _cond_add(self, ctx, p, q, cond, identity):
        x = self.main_gate.select(ctx, q.x, identity.x, cond)
        y = self.main_gate.select(ctx, q.y, identity.y, cond)
        return self.add(ctx, p, AssignedEccPoint(x, y))

    # ─────────────────────────────────────────────────────────────
    # 스칼라 곱셈
    # ─────────────────────────────────────────────────────────────

    def mul(self, ctx, scalar, base):
        """가변 기저 스칼라 곱 scalar·base.

        스칼라를 FR 비트 길이(255)로 분해하고 MSB부터
            acc ← 2·acc
            acc ← acc + bit·base
        를 반복한다. 누적자는 (0, 1)에서 시작하므로 scalar = 0이면 (0, 1).

        Args:
            ctx: RegionCtx
            scalar: AssignedCell
            base: AssignedEccPoint

        Returns:
            AssignedEccPoint
        """
        bits = self.main_gate.to_bits(ctx, scalar, FR_NUM_BITS)
        identity = self.assign_identity(ctx)
        acc = identity
        for bit in reversed(bits):
            acc = self.add(ctx, acc, acc)
            acc = self._cond_add(ctx, acc, base, bit, identity)
        return acc

    def fixed_mul(self, ctx, scalar, base):
        """고정 기저 스칼라 곱 scalar·base (2비트 윈도우).

        스칼라는 FS 비트 길이(252)로 분해되어 126개 윈도우가 된다.
        2^252 이상의 값은 분해가 만족되지 않는다. 호출자는 s 미만의 정규 스칼라를 넣는다.

        Args:
            ctx: RegionCtx
            scalar: AssignedCell
            base: 공개 기저 점 (x, y) 튜플

        Returns:
            AssignedEccPoint
        """
        bits = self.main_gate.to_bits(ctx, scalar, FS_NUM_BITS)
        table = window_table(int(base[0]), int(base[1]), FS_NUM_BITS // 2)

        acc = None
        for i, window in enumerate(table):
            selected = point_selection(self.main_gate, ctx, bits[2 * i], bits[2 * i + 1], window)
            acc = selected if acc is None else self.add(ctx, acc, selected)
        return acc

    def constrain_equal(self, ctx, p, q):
        ctx.constrain_equal(p.x, q.x)
        ctx.constrain_equal(p.y, q.y)
