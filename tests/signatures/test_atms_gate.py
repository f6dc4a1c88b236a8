"""
ATMS 회로 종단 테스트 (proof.prove / proof.check).

테스트 대상:
  - 정확히 t개의 유효한 서명 → 만족
  - 서명 부족 / 초과 → 불만족 (임계값은 정확히 일치해야 한다)
  - present 슬롯의 잘못된 서명 → 불만족
  - 잘못된 명단 커밋먼트 → 불만족
  - 항등원 키를 덧붙인 명단 → 원래 커밋먼트와 다름
  - 입력 길이 불일치, 범위 밖 임계값, 행 예산 초과 → 예외
"""

import random

import pytest

from atms.errors import SynthesisError
from atms.field import FR, FR_MODULUS, FS
from atms.circuit.mock_prover import CopyConstraintViolated
from atms.jubjub import GENERATOR, IDENTITY, multiply
from atms.proof import AtmsCircuit, check, commit_roster, prove
from atms.signatures.schnorr import Schnorr


MSG = FR(0xC0FFEE)


@pytest.fixture(scope="module")
def roster():
    rng = random.Random(99)
    key_pairs = [Schnorr.keygen(rng) for _ in range(4)]
    signatures = [Schnorr.sign(kp, MSG, rng) for kp in key_pairs]
    pks = [pk for _, pk in key_pairs]
    return pks, signatures


class TestCommitment:

    def test_order_sensitive(self, roster):
        pks, _ = roster
        assert commit_roster(pks) != commit_roster(list(reversed(pks)))

    def test_deterministic(self, roster):
        pks, _ = roster
        assert commit_roster(pks) == commit_roster(list(pks))

    def test_identity_keys_change_commitment(self, roster):
        pks, _ = roster
        assert commit_roster(pks) != commit_roster(pks + [IDENTITY, IDENTITY])
        assert commit_roster(pks) != commit_roster(pks + [IDENTITY])

    def test_padded_roster_cannot_reuse_commitment(self, roster):
        """항등원 키 두 개를 덧붙인 명단으로 원래 커밋먼트를 재사용할 수 없다."""
        pks, sigs = roster
        forged = (multiply(GENERATOR, 7), FS(7))
        padded = pks + [IDENTITY, IDENTITY]
        assert not prove(padded, sigs + [forged, forged], commit_roster(pks), MSG, 6)


class TestAtmsCircuit:

    def test_threshold_met(self, roster):
        pks, sigs = roster
        slots = [sigs[0], sigs[1], sigs[2], None]
        assert prove(pks, slots, commit_roster(pks), MSG, 3)

    def test_any_subset(self, roster):
        pks, sigs = roster
        slots = [None, sigs[1], None, sigs[3]]
        assert prove(pks, slots, commit_roster(pks), MSG, 2)

    def test_too_few_signatures(self, roster):
        pks, sigs = roster
        slots = [sigs[0], None, sigs[2], None]
        assert not prove(pks, slots, commit_roster(pks), MSG, 3)

    def test_threshold_is_exact(self, roster):
        pks, sigs = roster
        slots = [sigs[0], sigs[1], sigs[2], None]
        assert not prove(pks, slots, commit_roster(pks), MSG, 2)

    def test_invalid_signature_in_present_slot(self, roster):
        pks, sigs = roster
        # 1번 자리에 0번 키의 서명을 넣는다
        slots = [sigs[0], sigs[0], sigs[2], None]
        assert not prove(pks, slots, commit_roster(pks), MSG, 3)

    def test_wrong_message(self, roster):
        pks, sigs = roster
        slots = [sigs[0], sigs[1], sigs[2], None]
        assert not prove(pks, slots, commit_roster(pks), MSG + FR(1), 3)

    def test_wrong_commitment(self, roster):
        pks, sigs = roster
        slots = [sigs[0], sigs[1], sigs[2], None]
        failures = check(pks, slots, commit_roster(list(reversed(pks))), MSG, 3)
        assert failures
        assert any(isinstance(f, CopyConstraintViolated) for f in failures)

    def test_public_inputs(self, roster):
        pks, sigs = roster
        circuit = AtmsCircuit(pks, [None] * 4, commit_roster(pks), MSG, 0)
        assert circuit.public_inputs() == [commit_roster(pks), MSG, FR(0)]

    def test_no_signatures_zero_threshold(self, roster):
        pks, _ = roster
        assert prove(pks, [None] * 4, commit_roster(pks), MSG, 0)

    def test_threshold_above_roster_size(self, roster):
        pks, sigs = roster
        assert not prove(pks, sigs, commit_roster(pks), MSG, 5)

    @pytest.mark.parametrize("threshold", [-1, FR_MODULUS, FR_MODULUS + 3])
    def test_threshold_out_of_range(self, roster, threshold):
        pks, sigs = roster
        with pytest.raises(ValueError):
            prove(pks, sigs[:3] + [None], commit_roster(pks), MSG, threshold)

    def test_length_mismatch(self, roster):
        pks, sigs = roster
        with pytest.raises(ValueError):
            prove(pks, sigs[:3], commit_roster(pks), MSG, 3)

    def test_row_budget(self, roster):
        pks, sigs = roster
        with pytest.raises(SynthesisError):
            prove(pks, [sigs[0], None, None, None], commit_roster(pks), MSG, 1, k=8)


class TestDemo:

    def test_example_main(self, capsys):
        from atms import example

        example.main()
        out = capsys.readouterr().out
        assert "✓ 만족" in out
        assert "✗ 불만족" in out
