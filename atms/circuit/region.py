"""
영역 커서 (RegionCtx)
=======================

가젯은 전역 상태 대신 커서 객체 하나를 주고받으며 행을 채운다.
커서는 (영역, 현재 offset)을 들고 있고, 한 행을 다 채운 가젯이
next()를 호출해 다음 행으로 넘어간다.

    ctx = RegionCtx(region)
    a = main_gate.assign_value(ctx, FR(3))     # offset 0
    b = main_gate.assign_value(ctx, FR(4))     # offset 1
    c = main_gate.add(ctx, a, b)               # offset 2
"""

from atms.circuit.layouter import to_fr


class RegionCtx:
    """영역 안의 행 커서."""

    def __init__(self, region, offset=0):
        self.region = region
        self.offset = offset

    def assign_advice(self, column, value):
        return self.region.assign_advice(column, self.offset, value)

    def assign_fixed(self, column, value):
        return self.region.assign_fixed(column, self.offset, to_fr(value))

    def enable(self, selector):
        self.region.enable_selector(selector, self.offset)

    def constrain_equal(self, left, right):
        """두 AssignedCell 사이에 복사 제약을 건다."""
        self.region.constrain_equal(left.cell, right.cell)

    def next(self):
        self.offset += 1
