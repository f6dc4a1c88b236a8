"""
완전 덧셈 게이트 (Complete Addition)
======================================

뒤틀린 에드워즈 완전 덧셈 법칙을 두 행에 걸쳐 제약한다.

  | 행  | x_p | y_p | x_qr | y_qr | alpha | beta |
  |-----|-----|-----|------|------|-------|------|
  | 0   | x_p | y_p | x_q  | y_q  | α     | β    |   ← q_add
  | 1   |     |     | x_r  | y_r  |       |      |

    dλ = d·x_p·x_q·y_p·y_q
    α·(1 + dλ) = 1
    β·(1 - dλ) = 1
    x_r = α·(x_p·y_q + x_q·y_p)
    y_r = β·(x_p·x_q + y_p·y_q)

α, β는 분모의 역원 위트니스이다. 곡선 위의 점이면 분모가 0이 될 수 없다.
항등원 (0, 1)과 같은 점, 서로 역원인 점에서도 예외 없이 동작한다.

덧셈의 항등원 인코딩은 (0, 1) 하나뿐이다. witness_point가 허용하는 (0, 0)은
곡선 위의 점이 아니며, 어떤 점과 더해도 (0, 0)이 나오는 흡수원이다.
"""

from atms.field import FR, inv0
from atms.jubjub import EDWARDS_D
from atms.ecc.point import AssignedEccPoint


class AddConfig:
    """덧셈 게이트 열과 셀렉터."""

    def __init__(self, q_add, x_p, y_p, x_qr, y_qr, alpha, beta):
        self.q_add = q_add
        self.x_p = x_p
        self.y_p = y_p
        self.x_qr = x_qr
        self.y_qr = y_qr
        self.alpha = alpha
        self.beta = beta

    @classmethod
    def configure(cls, meta, x_p, y_p, x_qr, y_qr, alpha, beta):
        config = cls(meta.selector("q_add"), x_p, y_p, x_qr, y_qr, alpha, beta)
        meta.create_gate("complete addition", config.constraints)
        return config

    def constraints(self, row):
        if not row.selector(self.q_add):
            return []
        one = FR(1)
        x_p = row.advice(self.x_p)
        y_p = row.advice(self.y_p)
        x_q = row.advice(self.x_qr)
        y_q = row.advice(self.y_qr)
        x_r = row.advice(self.x_qr, 1)
        y_r = row.advice(self.y_qr, 1)
        alpha = row.advice(self.alpha)
        beta = row.advice(self.beta)

        d_lambda = EDWARDS_D * x_p * x_q * y_p * y_q
        return [
            ("alpha inverse", alpha * (one + d_lambda) - one),
            ("beta inverse", beta * (one - d_lambda) - one),
            ("x_r", x_r - alpha * (x_p * y_q + x_q * y_p)),
            ("y_r", y_r - beta * (x_p * x_q + y_p * y_q)),
        ]

    def assign_region(self, ctx, p, q):
        """p + q를 두 행에 배치한다.

        Args:
            ctx: RegionCtx
            p, q: AssignedEccPoint

        Returns:
            AssignedEccPoint: 결과 점 (두 번째 행의 x_qr, y_qr)
        """
        x_p, y_p = p.x.value, p.y.value
        x_q, y_q = q.x.value, q.y.value
        d_lambda = EDWARDS_D * x_p * x_q * y_p * y_q
        alpha = inv0(FR(1) + d_lambda)
        beta = inv0(FR(1) - d_lambda)
        x_r = alpha * (x_p * y_q + x_q * y_p)
        y_r = beta * (x_p * x_q + y_p * y_q)

        ctx.enable(self.q_add)
        for column, cell in ((self.x_p, p.x), (self.y_p, p.y),
                             (self.x_qr, q.x), (self.y_qr, q.y)):
            copied = ctx.assign_advice(column, cell.value)
            ctx.constrain_equal(copied, cell)
        ctx.assign_advice(self.alpha, alpha)
        ctx.assign_advice(self.beta, beta)
        ctx.next()

        result = AssignedEccPoint(
            ctx.assign_advice(self.x_qr, x_r),
            ctx.assign_advice(self.y_qr, y_r),
        )
        ctx.next()
        return result
