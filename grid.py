from typing import List

from models import Cell


class OccupancyGrid:
    """N×N board of free/occupied cells."""

    def __init__(self, size: int):
        self.size = size
        self._cells: List[List[bool]] = [[False] * size for _ in range(size)]

    def is_valid(self, cell: Cell) -> bool:
        r, c = cell
        return 0 <= r < self.size and 0 <= c < self.size

    def is_occupied(self, cell: Cell) -> bool:
        r, c = cell
        return self._cells[r][c]

    def mark_occupied(self, cell: Cell) -> None:
        r, c = cell
        self._cells[r][c] = True

    def mark_free(self, cell: Cell) -> None:
        r, c = cell
        self._cells[r][c] = False

    def free_cells(self) -> List[Cell]:
        # Row-major so a fixed index sequence always picks the same cells.
        return [
            (r, c)
            for r in range(self.size)
            for c in range(self.size)
            if not self._cells[r][c]
        ]

    def occupied_count(self) -> int:
        return sum(row.count(True) for row in self._cells)

    def copy(self) -> "OccupancyGrid":
        dup = OccupancyGrid.__new__(OccupancyGrid)
        dup.size = self.size
        dup._cells = [row[:] for row in self._cells]
        return dup

    def rows(self) -> List[List[int]]:
        return [[1 if v else 0 for v in row] for row in self._cells]


__all__ = ["OccupancyGrid"]
