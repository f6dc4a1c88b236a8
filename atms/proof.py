"""
ATMS 회로와 증명 진입점
=========================

공개 입력 (instance 열):
  | 행 | 값                           |
  |----|------------------------------|
  | 0  | 공개키 명단 커밋먼트         |
  | 1  | 메시지 (FR)                  |
  | 2  | 임계값 t                     |

prove()는 회로를 합성하고 MockProver로 모든 제약을 검사한다.
다항식 커밋먼트 기반의 실제 증명 생성은 이 라이브러리 범위 밖이다.

사용 예시:
    >>> commitment = commit_roster(pks)
    >>> prove(pks, [sig0, sig1, sig2, None], commitment, msg, 3)
    True
"""

import logging

from atms.field import FR, FR_MODULUS
from atms.circuit.constraint_system import Circuit
from atms.circuit.mock_prover import MockProver
from atms.circuit.region import RegionCtx
from atms.rescue.sponge import RescueSponge
from atms.signatures.atms_gate import AtmsVerifierGate


logger = logging.getLogger(__name__)


def commit_roster(pks):
    """공개키 명단의 x 좌표를 순서대로 해시한다. 순서가 바뀌면 값도 바뀐다."""
    return RescueSponge.hash([pk[0] for pk in pks])


class AtmsCircuit(Circuit):
    """ATMS 검증 회로.

    Args:
        pks: 명단 공개키 리스트
        signatures: 같은 길이의 (R, s) 또는 None 리스트
        commitment: 명단 커밋먼트 (FR)
        msg: 메시지 (FR)
        threshold: 임계값 (정수), 0 <= t < r
    """

    def __init__(self, pks, signatures, commitment, msg, threshold):
        if len(pks) != len(signatures):
            raise ValueError(f"공개키 수({len(pks)})와 서명 슬롯 수({len(signatures)})가 다릅니다")
        self.pks = list(pks)
        self.signatures = list(signatures)
        self.commitment = FR(int(commitment))
        self.msg = FR(int(msg))
        threshold = int(threshold)
        if not 0 <= threshold < FR_MODULUS:
            raise ValueError(f"임계값은 0 이상 {FR_MODULUS} 미만이어야 합니다 (받은 값: {threshold})")
        self.threshold = FR(threshold)

    @classmethod
    def configure(cls, meta):
        return AtmsVerifierGate.configure(meta)

    def public_inputs(self):
        return [self.commitment, self.msg, self.threshold]

    def synthesize(self, config, layouter):
        gate = AtmsVerifierGate(config)

        def assign(region):
            ctx = RegionCtx(region)
            slots = [gate.assign_slot(ctx, sig) for sig in self.signatures]
            pks = [gate.schnorr_gate.assign_pk(ctx, pk) for pk in self.pks]
            commitment, msg, threshold = gate.main_gate.assign_values(
                ctx, self.public_inputs()
            )
            gate.verify(ctx, slots, pks, commitment, msg, threshold)
            return commitment, msg, threshold

        public = layouter.assign_region("atms", assign)
        for row, cell in enumerate(public):
            gate.main_gate.expose_public(layouter, cell, row)


def check(pks, signatures, commitment, msg, threshold, k=None):
    """ATMS 회로를 합성하고 제약 실패 목록을 반환한다 (만족하면 빈 리스트)."""
    circuit = AtmsCircuit(pks, signatures, commitment, msg, threshold)
    prover = MockProver.run(circuit, circuit.public_inputs(), k)
    failures = prover.verify()
    logger.info("atms circuit: %d slots, %d present, %d rows, %s",
                len(pks), sum(1 for s in signatures if s is not None),
                prover.assignment.num_rows,
                "satisfied" if not failures else f"{len(failures)} failure(s)")
    return failures


def prove(pks, signatures, commitment, msg, threshold, k=None):
    """ATMS 회로가 만족되는지 확인한다.

    Args:
        pks: 명단 공개키 리스트
        signatures: 슬롯별 (R, s) 또는 None
        commitment: 검증자가 알고 있는 명단 커밋먼트
        msg: 메시지 (FR)
        threshold: 임계값
        k: 테이블 크기 상한 2^k (None이면 제한 없음)

    Returns:
        bool: 모든 제약이 만족되면 True

    Raises:
        ValueError: 공개키 수와 슬롯 수가 다를 때, 임계값이 0 <= t < r 범위 밖일 때
        SynthesisError: 회로 구성 오류 (예: 행 수 초과)
    """
    return not check(pks, signatures, commitment, msg, threshold, k)
