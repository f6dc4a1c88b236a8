"""
ATMS 검증 게이트
==================

Ad-hoc Threshold Multi-Signature: 등록된 공개키 명단 중 정확히 t명이
같은 메시지에 서명했음을 회로로 증명한다.

  1. 명단의 x 좌표를 Rescue로 해시 → 공개된 커밋먼트와 같아야 한다.
  2. counter = 0
  3. 슬롯마다 (서명, 공개키) 쌍에 대해
        present가 1이면 Schnorr 검증 등식 강제
        counter += present
  4. counter == threshold (정확히 같음)

**슬롯 구성**:
  모든 슬롯은 같은 게이트를 갖는다. 서명이 없는 슬롯은 더미 서명
  (항등원, 0)과 present = 0을 위트니스로 넣는다. 빈 슬롯은 등식이
  강제되지 않고 카운터에도 더해지지 않는다.

사용 예시:
    >>> slots = [gate.assign_slot(ctx, sig) for sig in [sig0, sig1, sig2, None]]
    >>> pks = [gate.schnorr_gate.assign_pk(ctx, pk) for pk in roster]
    >>> gate.verify(ctx, slots, pks, commitment, msg, threshold)
"""

from atms.field import FR
from atms.signatures.schnorr import DUMMY_SIGNATURE
from atms.signatures.schnorr_gate import SchnorrVerifierGate


class AssignedSlot:
    """명단의 한 자리: 할당된 서명과 present 비트 셀."""

    def __init__(self, signature, present):
        self.signature = signature
        self.present = present


class AtmsVerifierGate:

    def __init__(self, config):
        self.config = config
        self.schnorr_gate = SchnorrVerifierGate(config)
        self.main_gate = self.schnorr_gate.main_gate
        self.rescue_gate = self.schnorr_gate.rescue_gate

    @staticmethod
    def configure(meta):
        return SchnorrVerifierGate.configure(meta)

    def assign_slot(self, ctx, signature):
        """서명 하나(또는 None)를 슬롯으로 할당한다.

        Args:
            ctx: RegionCtx
            signature: (R, s) 또는 None (서명하지 않은 자리)

        Returns:
            AssignedSlot
        """
        present = FR(0) if signature is None else FR(1)
        sig = self.schnorr_gate.assign_sig(ctx, signature or DUMMY_SIGNATURE)
        return AssignedSlot(sig, self.main_gate.assert_bit(ctx, present))

    def verify(self, ctx, slots, pks, committed_pks, msg, threshold):
        """ATMS 검증 제약을 건다.

        Args:
            ctx: RegionCtx
            slots: AssignedSlot 리스트 (명단 순서)
            pks: AssignedEccPoint 리스트 (명단 전체)
            committed_pks: 공개키 커밋먼트 셀
            msg: 메시지 셀
            threshold: 임계값 셀
        """
        if len(slots) != len(pks):
            raise ValueError(f"슬롯 수({len(slots)})와 공개키 수({len(pks)})가 다릅니다")

        commitment = self.rescue_gate.hash(ctx, [pk.x for pk in pks])
        self.main_gate.assert_equal(ctx, commitment, committed_pks)

        counter = self.main_gate.assign_constant(ctx, 0)
        for slot, pk in zip(slots, pks):
            self.schnorr_gate.verify_conditional(ctx, slot.signature, pk, msg, slot.present)
            counter = self.main_gate.add(ctx, counter, slot.present)

        self.main_gate.assert_equal(ctx, counter, threshold)
