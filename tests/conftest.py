import os
import random
import sys

import pytest

# 프로젝트 루트를 sys.path에 추가
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from atms.circuit.constraint_system import Circuit
from atms.circuit.mock_prover import MockProver
from atms.circuit.region import RegionCtx
from atms.signatures.schnorr_gate import SchnorrVerifierGate


class GadgetCircuit(Circuit):
    """테스트용 회로: build(gate, ctx)가 반환한 셀들을 공개 입력 0, 1, ...에 노출한다.

    gate는 SchnorrVerifierGate이므로 main_gate, ecc_chip, rescue_gate를 모두 쓸 수 있다.
    """

    def __init__(self, build):
        self.build = build

    @classmethod
    def configure(cls, meta):
        return SchnorrVerifierGate.configure(meta)

    def synthesize(self, config, layouter):
        gate = SchnorrVerifierGate(config)
        exposed = layouter.assign_region(
            "gadget", lambda region: self.build(gate, RegionCtx(region))
        )
        for row, cell in enumerate(exposed or []):
            gate.main_gate.expose_public(layouter, cell, row)


@pytest.fixture
def run_gadget():
    """build 함수로 회로를 합성한 MockProver를 반환하는 헬퍼."""
    def run(build, instance=(), k=None):
        return MockProver.run(GadgetCircuit(build), list(instance), k)
    return run


@pytest.fixture
def rng():
    """재현 가능한 난수 발생기."""
    return random.Random(1234)
