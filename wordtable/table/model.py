"""Versioned cell model backing the whole table."""

from __future__ import annotations

from dataclasses import replace
from typing import List, Optional, Tuple

from ..core.constants import CellKind, CellOwner, CellState
from ..core.events import Signal
from ..core.exceptions import CellOutOfBoundsError, InvalidCellValueError, ModelNotInitializedError
from ..core.models import TableCell
from ..utils.logger import get_logger
from .layout import TableLayout
from .region import TableRegion


LOGGER = get_logger(__name__)


class TableModel:
    """Owns every table cell and reports each change as it happens.

    The matrix is allocated once by :meth:`initialize` and reused by
    :meth:`clear`. Readers only ever receive immutable :class:`TableCell`
    values. Every mutation bumps :attr:`version`, sets :attr:`dirty` and
    emits ``cell_changed(row, col, cell)`` before returning.
    """

    def __init__(self) -> None:
        self._cells: Optional[List[List[TableCell]]] = None
        self._layout: Optional[TableLayout] = None
        self._version = 0
        self._dirty = False
        self.cell_changed = Signal("cell_changed")
        self.cleared = Signal("cleared")

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------
    @property
    def rows(self) -> int:
        return self._layout.total_rows if self._layout else 0

    @property
    def cols(self) -> int:
        return self._layout.total_cols if self._layout else 0

    @property
    def version(self) -> int:
        return self._version

    @property
    def dirty(self) -> bool:
        return self._dirty

    @property
    def layout(self) -> Optional[TableLayout]:
        return self._layout

    @property
    def is_initialized(self) -> bool:
        return self._cells is not None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def initialize(self, layout: TableLayout) -> None:
        """Allocate the matrix for ``layout`` and classify every cell."""

        if layout is None:
            raise ValueError("A table layout is required")
        self._layout = layout
        self._cells = [
            [TableCell.spacer(row, col) for col in range(layout.total_cols)]
            for row in range(layout.total_rows)
        ]
        self._populate_cells()
        LOGGER.debug("Initialized %sx%s table", layout.total_rows, layout.total_cols)
        self._version += 1
        self._dirty = True
        self.cleared.emit()

    def clear(self) -> None:
        """Reset every cell to its layout default without reallocating."""

        if self._layout is None or self._cells is None:
            return
        self._populate_cells()
        self._version += 1
        self._dirty = True
        self.cleared.emit()

    def _populate_cells(self) -> None:
        layout = self._layout
        for row in range(layout.total_rows):
            cells_row = self._cells[row]
            for col in range(layout.total_cols):
                cells_row[col] = self._create_cell(row, col)

    def _create_cell(self, row: int, col: int) -> TableCell:
        layout = self._layout
        if layout.grid.contains(row, col):
            return TableCell.grid_cell(row, col)
        if layout.col_headers.contains(row, col):
            _, local_col = layout.col_headers.to_local(row, col)
            return TableCell.column_header(row, col, TableLayout.column_header_char(local_col))
        if layout.row_headers.contains(row, col):
            local_row, _ = layout.row_headers.to_local(row, col)
            return TableCell.row_header(row, col, TableLayout.row_header_number(local_row))
        if layout.word_rows.contains(row, col):
            return TableCell.word_slot(row, col)
        return TableCell.spacer(row, col)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    def get_cell(self, row: int, col: int) -> TableCell:
        self._validate_coordinates(row, col)
        return self._cells[row][col]

    def get_grid_cell(self, grid_row: int, grid_col: int) -> TableCell:
        return self.get_cell(*self._grid_to_table(grid_row, grid_col))

    def get_word_slot(self, word_index: int, letter_index: int) -> TableCell:
        return self.get_cell(*self._word_slot_to_table(word_index, letter_index))

    def snapshot(self) -> Tuple[Tuple[TableCell, ...], ...]:
        """Return the whole matrix as nested tuples."""

        if self._cells is None:
            raise ModelNotInitializedError("TableModel not initialized. Call initialize() first.")
        return tuple(tuple(row) for row in self._cells)

    # ------------------------------------------------------------------
    # Mutators
    # ------------------------------------------------------------------
    def set_cell(self, row: int, col: int, cell: TableCell) -> None:
        self._validate_coordinates(row, col)
        if not isinstance(cell, TableCell):
            raise InvalidCellValueError(f"Expected a TableCell, got {type(cell).__name__}")
        _check_char(cell.text_char)
        self._write(row, col, replace(cell, row=row, col=col))

    def set_cell_char(self, row: int, col: int, char: Optional[str]) -> None:
        self._validate_coordinates(row, col)
        _check_char(char)
        self._write(row, col, replace(self._cells[row][col], text_char=char))

    def set_cell_state(self, row: int, col: int, state: CellState) -> None:
        self._validate_coordinates(row, col)
        self._write(row, col, replace(self._cells[row][col], state=CellState(state)))

    def set_cell_kind(self, row: int, col: int, kind: CellKind) -> None:
        self._validate_coordinates(row, col)
        self._write(row, col, replace(self._cells[row][col], kind=CellKind(kind)))

    def set_cell_owner(self, row: int, col: int, owner: CellOwner) -> None:
        self._validate_coordinates(row, col)
        self._write(row, col, replace(self._cells[row][col], owner=CellOwner(owner)))

    def set_cell_char_and_state(self, row: int, col: int, char: Optional[str], state: CellState) -> None:
        """Set content and state together, as a single change."""

        self._validate_coordinates(row, col)
        _check_char(char)
        self._write(row, col, replace(self._cells[row][col], text_char=char, state=CellState(state)))

    def set_word_slot_letter(self, word_index: int, letter_index: int, letter: Optional[str]) -> None:
        self.set_cell_char(*self._word_slot_to_table(word_index, letter_index), letter)

    def set_word_slot_state(self, word_index: int, letter_index: int, state: CellState) -> None:
        self.set_cell_state(*self._word_slot_to_table(word_index, letter_index), state)

    def set_grid_cell_letter(self, grid_row: int, grid_col: int, letter: Optional[str]) -> None:
        self.set_cell_char(*self._grid_to_table(grid_row, grid_col), letter)

    def set_grid_cell_state(self, grid_row: int, grid_col: int, state: CellState) -> None:
        self.set_cell_state(*self._grid_to_table(grid_row, grid_col), state)

    def set_grid_cell_owner(self, grid_row: int, grid_col: int, owner: CellOwner) -> None:
        self.set_cell_owner(*self._grid_to_table(grid_row, grid_col), owner)

    # ------------------------------------------------------------------
    # Change tracking
    # ------------------------------------------------------------------
    def clear_dirty(self) -> None:
        """Reset the dirty flag once a renderer has synced. Version is untouched."""

        self._dirty = False

    def mark_dirty(self) -> None:
        self._version += 1
        self._dirty = True

    def _write(self, row: int, col: int, cell: TableCell) -> None:
        self._cells[row][col] = cell
        self._version += 1
        self._dirty = True
        self.cell_changed.emit(row, col, cell)

    # ------------------------------------------------------------------
    # Coordinate helpers
    # ------------------------------------------------------------------
    def _validate_coordinates(self, row: int, col: int) -> None:
        if self._cells is None:
            raise ModelNotInitializedError("TableModel not initialized. Call initialize() first.")
        if not (0 <= row < self.rows and 0 <= col < self.cols):
            raise CellOutOfBoundsError(
                f"Coordinates ({row}, {col}) out of bounds for table of size ({self.rows}, {self.cols})"
            )

    def _require_layout(self) -> TableLayout:
        if self._layout is None:
            raise ModelNotInitializedError("TableModel not initialized. Call initialize() first.")
        return self._layout

    def _grid_to_table(self, grid_row: int, grid_col: int) -> Tuple[int, int]:
        layout = self._require_layout()
        _check_local(layout.grid, grid_row, grid_col)
        return layout.grid_to_table(grid_row, grid_col)

    def _word_slot_to_table(self, word_index: int, letter_index: int) -> Tuple[int, int]:
        layout = self._require_layout()
        _check_local(layout.word_rows, word_index, letter_index)
        return layout.word_slot_to_table(word_index, letter_index)


def _check_local(region: TableRegion, local_row: int, local_col: int) -> None:
    if not region.contains_local(local_row, local_col):
        raise CellOutOfBoundsError(
            f"Local coordinates ({local_row}, {local_col}) outside {region.name} "
            f"({region.row_count}x{region.col_count})"
        )


def _check_char(char: Optional[str]) -> None:
    if char is None:
        return
    if not isinstance(char, str) or len(char) != 1:
        raise InvalidCellValueError(f"Cell text must be a single character, got {char!r}")
