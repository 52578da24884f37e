"""Table layout: how word rows, headers and the grid share one matrix.

Layout formula::

    total_rows = word_count + 1 (column header row) + grid_size
    total_cols = 1 (row header column) + grid_size

Word rows sit on top, the column header row follows, and the grid fills the
rest with the row headers in column 0. The cells left of the word rows and
the column header row are spacers.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from ..core.constants import Bounds
from ..core.exceptions import LayoutError
from .region import TableRegion


WORD_ROWS = "WordRows"
COL_HEADERS = "ColHeaders"
ROW_HEADERS = "RowHeaders"
GRID = "Grid"


@dataclass(frozen=True)
class TableLayout:
    """Immutable region map. Resizing means building a new layout."""

    grid_size: int
    word_count: int
    total_rows: int
    total_cols: int
    word_rows: TableRegion
    col_headers: TableRegion
    row_headers: TableRegion
    grid: TableRegion

    @classmethod
    def create_for_setup(cls, grid_size: int, word_count: int) -> "TableLayout":
        if isinstance(grid_size, bool) or not isinstance(grid_size, int) or grid_size < 1:
            raise LayoutError(f"Grid size must be a positive integer, got {grid_size!r}")
        if isinstance(word_count, bool) or not isinstance(word_count, int) or word_count < 0:
            raise LayoutError(f"Word count must be a non-negative integer, got {word_count!r}")

        return cls(
            grid_size=grid_size,
            word_count=word_count,
            total_rows=word_count + 1 + grid_size,
            total_cols=1 + grid_size,
            word_rows=TableRegion(WORD_ROWS, row_start=0, col_start=1, row_count=word_count, col_count=grid_size),
            col_headers=TableRegion(COL_HEADERS, row_start=word_count, col_start=1, row_count=1, col_count=grid_size),
            row_headers=TableRegion(ROW_HEADERS, row_start=word_count + 1, col_start=0, row_count=grid_size, col_count=1),
            grid=TableRegion(GRID, row_start=word_count + 1, col_start=1, row_count=grid_size, col_count=grid_size),
        )

    @classmethod
    def create_for_gameplay(cls, grid_size: int, word_count: int) -> "TableLayout":
        # Gameplay shares the setup structure.
        return cls.create_for_setup(grid_size, word_count)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    @property
    def regions(self) -> Tuple[TableRegion, ...]:
        return (self.word_rows, self.col_headers, self.row_headers, self.grid)

    def bounds(self) -> Bounds:
        return Bounds(rows=self.total_rows, cols=self.total_cols)

    def region_at(self, row: int, col: int) -> Optional[TableRegion]:
        for region in self.regions:
            if region.contains(row, col):
                return region
        return None

    def is_in_grid(self, row: int, col: int) -> bool:
        return self.grid.contains(row, col)

    def is_in_word_rows(self, row: int, col: int) -> bool:
        return self.word_rows.contains(row, col)

    # ------------------------------------------------------------------
    # Coordinate conversion
    # ------------------------------------------------------------------
    def grid_to_table(self, grid_row: int, grid_col: int) -> Tuple[int, int]:
        return self.grid.to_table(grid_row, grid_col)

    def table_to_grid(self, table_row: int, table_col: int) -> Tuple[int, int]:
        """Return grid-local ``(row, col)`` or ``(-1, -1)`` outside the grid."""

        return self.grid.to_local(table_row, table_col)

    def word_slot_to_table(self, word_index: int, letter_index: int) -> Tuple[int, int]:
        return self.word_rows.to_table(word_index, letter_index)

    def table_to_word_slot(self, table_row: int, table_col: int) -> Tuple[int, int]:
        """Return ``(word_index, letter_index)`` or ``(-1, -1)`` outside word rows."""

        return self.word_rows.to_local(table_row, table_col)

    # ------------------------------------------------------------------
    # Header labels
    # ------------------------------------------------------------------
    @staticmethod
    def column_header_char(grid_col: int) -> str:
        return chr(ord("A") + grid_col)

    @staticmethod
    def row_header_number(grid_row: int) -> int:
        return grid_row + 1
