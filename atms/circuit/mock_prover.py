"""
MockProver: 회로 만족 여부 검사
=================================

실제 다항식 커밋먼트 없이, 합성된 테이블이 모든 제약을 만족하는지
행 단위로 직접 확인한다.

  1. 모든 사용된 행에서 모든 게이트의 제약 값을 계산 → 0이어야 한다.
  2. 모든 복사 제약 순환에서 셀 값이 같아야 한다 (공개 입력 포함).

불만족은 예외가 아니라 실패 목록으로 보고된다. 회로 구성 자체의 오류
(SynthesisError)만 예외로 전파된다.

사용 예시:
    >>> prover = MockProver.run(circuit, [FR(35)], k=8)
    >>> prover.verify()          # [] 이면 만족
    >>> prover.is_satisfied()
    True
"""

import logging

from atms.field import FR
from atms.circuit.constraint_system import ConstraintSystem
from atms.circuit.layouter import Assignment, Layouter


logger = logging.getLogger(__name__)


class VerifyFailure:
    """검증 실패의 공통 부모."""


class ConstraintNotSatisfied(VerifyFailure):
    """게이트 제약 값이 0이 아닌 행."""

    def __init__(self, gate, constraint, row, region=None):
        self.gate = gate
        self.constraint = constraint
        self.row = row
        self.region = region

    def __repr__(self):
        where = f" in region {self.region!r}" if self.region else ""
        return f"ConstraintNotSatisfied({self.gate}/{self.constraint} at row {self.row}{where})"


class CopyConstraintViolated(VerifyFailure):
    """같은 값이어야 하는 셀들이 서로 다른 값을 가진다."""

    def __init__(self, cells, values):
        self.cells = cells
        self.values = values

    def __repr__(self):
        pairs = ", ".join(f"{c}={int(v)}" for c, v in zip(self.cells, self.values))
        return f"CopyConstraintViolated({pairs})"


class RowView:
    """게이트 함수에 전달되는 한 행의 보기."""

    def __init__(self, assignment, row):
        self._assignment = assignment
        self.row = row

    def advice(self, column, rotation=0):
        return self._assignment.value(column, self.row + rotation)

    def fixed(self, column, rotation=0):
        return self._assignment.value(column, self.row + rotation)

    def instance(self, column, rotation=0):
        return self._assignment.value(column, self.row + rotation)

    def selector(self, selector):
        return self._assignment.is_enabled(selector, self.row)


class MockProver:
    """합성 결과를 들고 제약을 검사한다."""

    def __init__(self, assignment):
        self.assignment = assignment
        self.meta = assignment.meta

    @classmethod
    def run(cls, circuit, instance, k=None):
        """회로를 구성하고 합성한다.

        Args:
            circuit: Circuit 인스턴스
            instance: 공개 입력 열별 값 리스트. 열이 하나면 평평한 리스트도 허용.
            k: 테이블 크기 2^k (None이면 제한 없음)

        Returns:
            MockProver
        """
        meta = ConstraintSystem()
        config = type(circuit).configure(meta)
        assignment = Assignment(meta, k)
        circuit.synthesize(config, Layouter(assignment))

        if instance and not isinstance(instance[0], (list, tuple)):
            instance = [instance]
        for column, values in zip(meta.instance_columns, instance):
            assignment.set_instance(column, values)
        logger.debug("synthesized %d rows, %d copy constraints",
                     assignment.num_rows, assignment.copies.count)
        return cls(assignment)

    def _region_of(self, row):
        for name, start, end in self.assignment.regions:
            if start <= row < end:
                return name
        return None

    def verify(self):
        """모든 제약을 검사하고 실패 목록을 반환한다."""
        failures = []
        zero = FR(0)

        for row in range(self.assignment.num_rows):
            view = RowView(self.assignment, row)
            for gate in self.meta.gates:
                for name, value in gate.constraints(view):
                    if value != zero:
                        failures.append(
                            ConstraintNotSatisfied(gate.name, name, row, self._region_of(row))
                        )

        for cells in self.assignment.copies.cycles():
            values = [self.assignment.value(c.column, c.row) for c in cells]
            if any(v != values[0] for v in values[1:]):
                failures.append(CopyConstraintViolated(cells, values))

        if failures:
            logger.info("circuit not satisfied: %d failure(s), first: %r", len(failures), failures[0])
        return failures

    def is_satisfied(self):
        return not self.verify()

    def assert_satisfied(self):
        failures = self.verify()
        if failures:
            raise AssertionError(
                "회로 제약 불만족:\n" + "\n".join(repr(f) for f in failures[:20])
            )
