"""회로 안의 곡선 점 표현."""


class AssignedEccPoint:
    """좌표 두 개가 각각 할당된 셀인 점.

    속성:
        x, y: AssignedCell
    """

    def __init__(self, x, y):
        self.x = x
        self.y = y

    def point(self):
        """할당된 값을 (x, y) 튜플로 그대로 읽는다.

        witness_point가 허용하는 (0, 0)도 그대로 (0, 0)으로 돌려준다.
        덧셈의 항등원은 (0, 1)뿐이고, (0, 0)은 덧셈에서 흡수원처럼 동작한다.
        """
        return (self.x.value, self.y.value)

    def __repr__(self):
        return f"AssignedEccPoint({int(self.x.value)}, {int(self.y.value)})"
