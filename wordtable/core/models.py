"""Data models shared by the table model and the placement engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, NamedTuple, Optional, Tuple

from .constants import CellKind, CellOwner, CellState


class GridPosition(NamedTuple):
    """Grid-local position, column first."""

    col: int
    row: int


@dataclass(frozen=True)
class TableCell:
    """A single cell of the table.

    Cells are immutable values: the model swaps in a new record on every
    change, so a cell handed to a caller never changes underneath it.
    """

    row: int
    col: int
    kind: CellKind = CellKind.SPACER
    state: CellState = CellState.NONE
    owner: CellOwner = CellOwner.NONE
    text_char: Optional[str] = None
    int_value: Optional[int] = None

    @classmethod
    def spacer(cls, row: int, col: int) -> "TableCell":
        return cls(row=row, col=col)

    @classmethod
    def column_header(cls, row: int, col: int, letter: str) -> "TableCell":
        return cls(row=row, col=col, kind=CellKind.HEADER_COL, state=CellState.READ_ONLY, text_char=letter)

    @classmethod
    def row_header(cls, row: int, col: int, number: int) -> "TableCell":
        return cls(row=row, col=col, kind=CellKind.HEADER_ROW, state=CellState.READ_ONLY, int_value=number)

    @classmethod
    def word_slot(cls, row: int, col: int, letter: Optional[str] = None) -> "TableCell":
        return cls(row=row, col=col, kind=CellKind.WORD_SLOT, state=CellState.NORMAL, text_char=letter)

    @classmethod
    def grid_cell(cls, row: int, col: int, owner: CellOwner = CellOwner.NONE) -> "TableCell":
        return cls(row=row, col=col, kind=CellKind.GRID_CELL, state=CellState.FOG, owner=owner)

    def has_text(self) -> bool:
        return self.text_char is not None or self.int_value is not None

    def display_text(self) -> str:
        if self.text_char is not None:
            return self.text_char
        if self.int_value is not None:
            return str(self.int_value)
        return ""


@dataclass(frozen=True)
class WordPlacement:
    """A committed word: where it starts and which way it runs."""

    row_index: int
    word: str
    start_col: int
    start_row: int
    d_col: int
    d_row: int
    _positions: Tuple[GridPosition, ...] = field(default=(), repr=False, compare=False)

    def __post_init__(self) -> None:
        positions = tuple(
            GridPosition(self.start_col + i * self.d_col, self.start_row + i * self.d_row)
            for i in range(len(self.word))
        )
        object.__setattr__(self, "_positions", positions)

    @property
    def positions(self) -> List[GridPosition]:
        return list(self._positions)

    @property
    def direction(self) -> Tuple[int, int]:
        return self.d_col, self.d_row

    @property
    def is_placed(self) -> bool:
        return True

    def letter_at(self, position: GridPosition) -> Optional[str]:
        for index, pos in enumerate(self._positions):
            if pos == position:
                return self.word[index]
        return None
