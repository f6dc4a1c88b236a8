"""
회로 배치 (Layouter / Region / Assignment)
============================================

synthesize 단계에서 위트니스와 상수를 테이블에 채운다.

**구조**:
  - Assignment: 전체 테이블 (advice/fixed 값, 셀렉터, 복사 제약, 공개 입력)
  - Region: 연속된 행 묶음. 행 번호는 영역 시작점 기준 offset으로 지정한다.
  - Layouter: 영역을 위에서 아래로 차례로 쌓는다 (단순 floor planner).

영역 사이에는 겹침이 없으므로 서로 다른 가젯이 같은 행을 쓰는 일이 없다.
k를 지정하면 테이블은 2^k 행으로 제한되고, 초과하면 SynthesisError가 발생한다.

사용 예시:
    >>> layouter = Layouter(Assignment(meta, k=10))
    >>> cell = layouter.assign_region("load x", lambda region:
    ...     region.assign_advice(a, 0, FR(3)))
    >>> layouter.constrain_instance(cell.cell, instance, 0)
"""

import logging

from atms.errors import SynthesisError
from atms.field import FR
from atms.circuit.constraint_system import Cell, INSTANCE
from atms.circuit.permutation import CopyConstraints


logger = logging.getLogger(__name__)


def to_fr(value):
    """정수/FR/FS 값을 FR로 변환한다 (필드 간 혼용 방지를 위해 int를 거친다)."""
    if isinstance(value, FR):
        return value
    return FR(int(value))


class AssignedCell:
    """값이 할당된 셀.

    속성:
        value: FR 원소
        cell: 테이블 위치 (Cell)
    """

    def __init__(self, value, cell):
        self.value = value
        self.cell = cell

    def __repr__(self):
        return f"AssignedCell({self.cell}={int(self.value)})"


class Assignment:
    """회로 테이블 전체의 할당 상태."""

    def __init__(self, meta, k=None):
        self.meta = meta
        self.k = k
        self.usable_rows = (1 << k) if k is not None else None
        self.num_rows = 0
        self.regions = []
        self.copies = CopyConstraints()
        self._values = {}
        self._enabled = set()
        self._instance = {}

    def _check_row(self, row):
        if self.usable_rows is not None and row >= self.usable_rows:
            raise SynthesisError(
                f"행 {row}이(가) 사용 가능한 행 수 2^{self.k} = {self.usable_rows}를 초과합니다"
            )
        if row + 1 > self.num_rows:
            self.num_rows = row + 1

    def assign(self, column, row, value):
        if not self.meta.owns(column):
            raise SynthesisError(f"{column.name}: 이 회로에 선언되지 않은 열입니다")
        if column.kind == INSTANCE:
            raise SynthesisError(f"{column.name}: instance 열에는 직접 할당할 수 없습니다")
        self._check_row(row)
        key = (id(column), row)
        if key in self._values:
            raise SynthesisError(f"{column.name}[{row}] 셀이 이미 할당되었습니다")
        value = to_fr(value)
        self._values[key] = value
        return AssignedCell(value, Cell(column, row))

    def enable_selector(self, selector, row):
        self._check_row(row)
        self._enabled.add((selector.index, row))

    def is_enabled(self, selector, row):
        return (selector.index, row) in self._enabled

    def value(self, column, row):
        """셀 값을 조회한다. 할당되지 않은 셀은 0이다."""
        if column.kind == INSTANCE:
            values = self._instance.get(id(column), [])
            return values[row] if row < len(values) else FR(0)
        return self._values.get((id(column), row), FR(0))

    def set_instance(self, column, values):
        self._instance[id(column)] = [to_fr(v) for v in values]

    def copy(self, left, right):
        """두 셀 사이에 복사 제약을 건다."""
        self.meta.check_equality(left.column)
        self.meta.check_equality(right.column)
        self.copies.union(left, right)


class Region:
    """Layouter가 배정한 연속 행 영역."""

    def __init__(self, assignment, name, start):
        self.assignment = assignment
        self.name = name
        self.start = start
        self.height = 0

    def _row(self, offset):
        if offset + 1 > self.height:
            self.height = offset + 1
        return self.start + offset

    def assign_advice(self, column, offset, value):
        return self.assignment.assign(column, self._row(offset), value)

    def assign_fixed(self, column, offset, value):
        return self.assignment.assign(column, self._row(offset), value)

    def enable_selector(self, selector, offset):
        self.assignment.enable_selector(selector, self._row(offset))

    def constrain_equal(self, left, right):
        self.assignment.copy(left, right)


class Layouter:
    """영역을 순서대로 쌓는 단순 floor planner."""

    def __init__(self, assignment):
        self.assignment = assignment
        self.next_row = 0

    def assign_region(self, name, assign):
        """새 영역을 열고 assign(region)을 실행한다.

        Args:
            name: 영역 이름 (실패 보고용)
            assign: Region을 받아 결과를 반환하는 함수

        Returns:
            assign의 반환값
        """
        region = Region(self.assignment, name, self.next_row)
        result = assign(region)
        end = region.start + region.height
        self.assignment.regions.append((name, region.start, end))
        logger.debug("region %r: rows %d..%d", name, region.start, end)
        self.next_row = end
        return result

    def constrain_instance(self, cell, column, row):
        """할당된 셀을 공개 입력 열의 row번째 값에 묶는다."""
        self.assignment.copy(cell, Cell(column, row))
