"""
Schnorr 검증 게이트
=====================

ECC 칩과 Rescue 게이트를 조합해 회로 안에서 Schnorr 서명을 검증한다.

    c   = Rescue(R.x, pk.x, msg)          (RescueCrhfGate)
    lhs = s·G                              (fixed_mul, 고정 기저 G)
    rhs = R + c·pk                         (mul + add)
    lhs == rhs                             (constrain_equal)

verify_conditional은 같은 행 구성을 쓰되 마지막 등식만
cond·(lhs - rhs) = 0 으로 바꾼다. ATMS의 모든 슬롯이 동일한 게이트를
갖게 하기 위한 것이다.
"""

from atms.circuit.main_gate import MainGate
from atms.ecc.chip import EccChip
from atms.jubjub import GENERATOR
from atms.rescue.gate import RescueCrhfGate


class AssignedSchnorrSignature:
    """할당된 서명: announcement(AssignedEccPoint), response(AssignedCell)."""

    def __init__(self, announcement, response):
        self.announcement = announcement
        self.response = response


class SchnorrVerifierConfig:

    def __init__(self, main_gate_config, ecc_config):
        self.main_gate_config = main_gate_config
        self.ecc_config = ecc_config


class SchnorrVerifierGate:

    def __init__(self, config):
        self.config = config
        self.main_gate = MainGate(config.main_gate_config)
        self.ecc_chip = EccChip(config.ecc_config)
        self.rescue_gate = RescueCrhfGate(config.main_gate_config)

    @staticmethod
    def configure(meta):
        main = MainGate.configure(meta)
        ecc = EccChip.configure(meta, main)
        return SchnorrVerifierConfig(main, ecc)

    def assign_sig(self, ctx, sig):
        """(R, s) 서명을 할당한다."""
        announcement, response = sig
        return AssignedSchnorrSignature(
            self.ecc_chip.witness_point(ctx, announcement),
            self.ecc_chip.witness_scalar(ctx, response),
        )

    def assign_pk(self, ctx, pk):
        return self.ecc_chip.witness_point(ctx, pk)

    def _equation(self, ctx, sig, pk, msg):
        challenge = self.rescue_gate.hash(ctx, [sig.announcement.x, pk.x, msg])
        lhs = self.ecc_chip.fixed_mul(ctx, sig.response, GENERATOR)
        c_pk = self.ecc_chip.mul(ctx, challenge, pk)
        rhs = self.ecc_chip.add(ctx, sig.announcement, c_pk)
        return lhs, rhs

    def verify(self, ctx, sig, pk, msg):
        """s·G == R + c·pk 를 강제한다.

        Args:
            ctx: RegionCtx
            sig: AssignedSchnorrSignature
            pk: AssignedEccPoint
            msg: AssignedCell
        """
        lhs, rhs = self._equation(ctx, sig, pk, msg)
        self.ecc_chip.constrain_equal(ctx, lhs, rhs)

    def verify_conditional(self, ctx, sig, pk, msg, cond):
        """cond가 1일 때만 검증 등식을 강제한다 (cond는 비트 셀)."""
        lhs, rhs = self._equation(ctx, sig, pk, msg)
        self.main_gate.conditional_assert_equal(ctx, lhs.x, rhs.x, cond)
        self.main_gate.conditional_assert_equal(ctx, lhs.y, rhs.y, cond)
