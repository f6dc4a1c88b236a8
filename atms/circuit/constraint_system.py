"""
제약 시스템 (Constraint System)
=================================

PLONK 스타일 회로의 "모양"을 기술한다: 열(column), 셀렉터, 커스텀 게이트.

**열의 종류**:
  | 종류     | 값을 정하는 주체     | 예                      |
  |----------|----------------------|-------------------------|
  | advice   | Prover (위트니스)    | 배선 a..e, beta         |
  | fixed    | 회로 설계 (상수)     | sa..se, q_h1..q_h4      |
  | instance | 공개 입력            | [commitment, msg, t]    |

**게이트**:
  create_gate(name, fn)로 등록한다. fn은 한 행의 보기(RowView)를 받아
  [(제약 이름, 값), ...]을 반환하며, 모든 값이 0이어야 만족된다.
  회전(rotation) 1을 사용하면 다음 행의 advice 값을 참조할 수 있다.

**복사 제약**:
  enable_equality(column)가 호출된 열의 셀끼리만 복사 제약을 걸 수 있다.

사용 예시:
    >>> meta = ConstraintSystem()
    >>> a = meta.advice_column("a")
    >>> q = meta.selector("q_double")
    >>> meta.create_gate("double", lambda row: [
    ...     ("a_next = 2a", row.selector(q) * (row.advice(a, 1) - FR(2) * row.advice(a)))
    ... ] if row.selector(q) else [])
"""

from atms.errors import SynthesisError


ADVICE = "advice"
FIXED = "fixed"
INSTANCE = "instance"


class Column:
    """회로 테이블의 한 열."""

    def __init__(self, kind, index, name=None):
        self.kind = kind
        self.index = index
        self.name = name or f"{kind}_{index}"

    def __repr__(self):
        return f"Column({self.kind}, {self.name})"


class Selector:
    """게이트 활성화 토글 (행 단위 0/1)."""

    def __init__(self, index, name=None):
        self.index = index
        self.name = name or f"selector_{index}"

    def __repr__(self):
        return f"Selector({self.name})"


class Cell:
    """테이블의 한 칸 (열, 행)."""

    def __init__(self, column, row):
        self.column = column
        self.row = row

    def __eq__(self, other):
        return (
            isinstance(other, Cell)
            and self.column is other.column
            and self.row == other.row
        )

    def __hash__(self):
        return hash((id(self.column), self.row))

    def __repr__(self):
        return f"{self.column.name}[{self.row}]"


class Gate:
    """이름이 붙은 커스텀 게이트."""

    def __init__(self, name, constraints):
        self.name = name
        self.constraints = constraints


class ConstraintSystem:
    """열, 셀렉터, 게이트, equality 설정을 모은다.

    속성:
        advice_columns, fixed_columns, instance_columns: Column 리스트
        selectors: Selector 리스트
        gates: Gate 리스트
    """

    def __init__(self):
        self.advice_columns = []
        self.fixed_columns = []
        self.instance_columns = []
        self.selectors = []
        self.gates = []
        self._equality = set()

    def advice_column(self, name=None):
        col = Column(ADVICE, len(self.advice_columns), name)
        self.advice_columns.append(col)
        return col

    def fixed_column(self, name=None):
        col = Column(FIXED, len(self.fixed_columns), name)
        self.fixed_columns.append(col)
        return col

    def instance_column(self, name=None):
        col = Column(INSTANCE, len(self.instance_columns), name)
        self.instance_columns.append(col)
        return col

    def selector(self, name=None):
        sel = Selector(len(self.selectors), name)
        self.selectors.append(sel)
        return sel

    def owns(self, column):
        columns = {
            ADVICE: self.advice_columns,
            FIXED: self.fixed_columns,
            INSTANCE: self.instance_columns,
        }.get(column.kind, [])
        return any(col is column for col in columns)

    def enable_equality(self, column):
        """열에 복사 제약(permutation)을 허용한다."""
        self._equality.add(id(column))

    def has_equality(self, column):
        return id(column) in self._equality

    def check_equality(self, column):
        if not self.has_equality(column):
            raise SynthesisError(f"{column.name} 열에는 equality가 활성화되어 있지 않습니다")

    def create_gate(self, name, constraints):
        """커스텀 게이트를 등록한다.

        Args:
            name: 게이트 이름 (실패 보고에 사용)
            constraints: RowView → [(제약 이름, FR 값), ...] 함수
        """
        gate = Gate(name, constraints)
        self.gates.append(gate)
        return gate


class Circuit:
    """회로 인터페이스.

    configure(meta)는 클래스 메서드로 열과 게이트를 선언하고 config 객체를 반환한다.
    synthesize(config, layouter)는 위트니스를 배치한다.
    """

    @classmethod
    def configure(cls, meta):
        raise NotImplementedError("서브클래스에서 구현하세요")

    def synthesize(self, config, layouter):
        raise NotImplementedError("서브클래스에서 구현하세요")
