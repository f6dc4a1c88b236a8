"""
복사 제약 (Copy Constraints)
==============================

서로 다른 셀이 같은 값을 가져야 한다는 제약을 순환(cycle)으로 모은다.

PLONK에서는 이 순환이 순열 σ로 인코딩되어 Grand Product 논증으로 증명된다.
여기서는 증명 백엔드가 없으므로, 같은 순환에 속한 셀들의 값이 모두 같은지
직접 비교한다 (union-find).

사용 예시:
    >>> copies = CopyConstraints()
    >>> copies.union(Cell(a, 0), Cell(c, 3))
    >>> copies.cycles()   # [[a[0], c[3]]]
"""


class CopyConstraints:
    """셀 사이의 복사 제약 집합 (union-find)."""

    def __init__(self):
        self._parent = {}
        self.count = 0

    def _find(self, cell):
        root = self._parent.setdefault(cell, cell)
        while self._parent[root] != root:
            root = self._parent[root]
        # 경로 압축
        while cell != root:
            parent = self._parent[cell]
            self._parent[cell] = root
            cell = parent
        return root

    def union(self, left, right):
        """left == right 제약을 추가한다."""
        self.count += 1
        root_l = self._find(left)
        root_r = self._find(right)
        if root_l != root_r:
            self._parent[root_l] = root_r

    def cycles(self):
        """같은 값을 가져야 하는 셀 그룹 리스트 (원소 2개 이상)."""
        groups = {}
        for cell in list(self._parent):
            groups.setdefault(self._find(cell), []).append(cell)
        return [cells for cells in groups.values() if len(cells) > 1]
