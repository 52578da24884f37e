"""Named rectangular regions of the table."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Tuple


OUTSIDE: Tuple[int, int] = (-1, -1)


@dataclass(frozen=True)
class TableRegion:
    """A named rectangle mapping a logical area onto table coordinates.

    ``to_local`` returns :data:`OUTSIDE` instead of raising for coordinates
    that are not contained; callers must check before indexing with it.
    """

    name: str
    row_start: int
    col_start: int
    row_count: int
    col_count: int

    @property
    def row_end(self) -> int:
        return self.row_start + self.row_count

    @property
    def col_end(self) -> int:
        return self.col_start + self.col_count

    @property
    def cell_count(self) -> int:
        return self.row_count * self.col_count

    def contains(self, row: int, col: int) -> bool:
        return self.row_start <= row < self.row_end and self.col_start <= col < self.col_end

    def contains_local(self, local_row: int, local_col: int) -> bool:
        return 0 <= local_row < self.row_count and 0 <= local_col < self.col_count

    def to_local(self, row: int, col: int) -> Tuple[int, int]:
        if not self.contains(row, col):
            return OUTSIDE
        return row - self.row_start, col - self.col_start

    def to_table(self, local_row: int, local_col: int) -> Tuple[int, int]:
        return self.row_start + local_row, self.col_start + local_col

    def iter_cells(self) -> Iterator[Tuple[int, int]]:
        for row in range(self.row_start, self.row_end):
            for col in range(self.col_start, self.col_end):
                yield row, col
