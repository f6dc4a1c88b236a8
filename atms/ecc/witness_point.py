"""
점 위트니스 게이트
====================

위트니스로 들어온 (x, y)가 곡선 위에 있거나 (0, 0)임을 강제한다.

    curve_eqn = y² - x² - (1 + d·x²·y²)
    q_point · x · curve_eqn = 0
    q_point · y · curve_eqn = 0

(0, 0)에서는 curve_eqn = -1 이지만 x = y = 0 이므로 두 제약이 모두 성립한다.
"""

from atms.field import FR
from atms.jubjub import EDWARDS_D
from atms.ecc.point import AssignedEccPoint


class WitnessPointConfig:

    def __init__(self, q_point, x, y):
        self.q_point = q_point
        self.x = x
        self.y = y

    @classmethod
    def configure(cls, meta, x, y):
        config = cls(meta.selector("q_point"), x, y)
        meta.create_gate("witness point", config.constraints)
        return config

    def constraints(self, row):
        if not row.selector(self.q_point):
            return []
        x = row.advice(self.x)
        y = row.advice(self.y)
        xx = x * x
        yy = y * y
        curve_eqn = yy - xx - (FR(1) + EDWARDS_D * xx * yy)
        return [
            ("x·curve_eqn", x * curve_eqn),
            ("y·curve_eqn", y * curve_eqn),
        ]

    def assign_region(self, ctx, point):
        ctx.enable(self.q_point)
        x = ctx.assign_advice(self.x, point[0])
        y = ctx.assign_advice(self.y, point[1])
        ctx.next()
        return AssignedEccPoint(x, y)
