"""8-direction word placement on the table grid.

The engine owns the authoritative letter-by-position map for committed
words and drives all grid cell writes through the table model. Coordinates
are grid-local and given column first, matching how players read the grid
(``B3`` is column 1, row 2).

Placement is a two-click flow::

    INACTIVE --enter--> SELECTING_FIRST_CELL --anchor--> SELECTING_DIRECTION
        ^                                                   |
        +----------------- commit / cancel -----------------+
"""

from __future__ import annotations

import random
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterator, List, Mapping, Optional, Tuple

from ..core.constants import Bounds, CellOwner, CellState, PLACEMENT_STEPS, PlacementState
from ..core.events import Signal
from ..core.exceptions import ModelNotInitializedError, PlacementError
from ..core.models import GridPosition, WordPlacement
from ..table.layout import TableLayout
from ..table.model import TableModel
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)

Candidate = Tuple[int, int, int, int]

_KEEP = object()


def placement_fits(
    grid_size: int,
    letters: Mapping[GridPosition, str],
    word: str,
    start_col: int,
    start_row: int,
    d_col: int,
    d_row: int,
) -> bool:
    """True if ``word`` stays on the grid and agrees with every placed letter."""

    if not word:
        return False
    if (d_col, d_row) not in PLACEMENT_STEPS:
        return False

    for index, letter in enumerate(word):
        col = start_col + index * d_col
        row = start_row + index * d_row
        if not (0 <= col < grid_size and 0 <= row < grid_size):
            return False
        existing = letters.get(GridPosition(col, row))
        if existing is not None and existing != letter:
            return False
    return True


def iter_candidates(grid_size: int, letters: Mapping[GridPosition, str], word: str) -> Iterator[Candidate]:
    """Yield every ``(start_col, start_row, d_col, d_row)`` where ``word`` fits."""

    for start_col in range(grid_size):
        for start_row in range(grid_size):
            for d_col, d_row in PLACEMENT_STEPS:
                if placement_fits(grid_size, letters, word, start_col, start_row, d_col, d_row):
                    yield start_col, start_row, d_col, d_row


class PlacementEngine:
    """Validates, previews and commits word placements on the grid."""

    def __init__(
        self,
        model: TableModel,
        layout: Optional[TableLayout] = None,
        *,
        owner: CellOwner = CellOwner.PLAYER1,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
    ) -> None:
        layout = layout or model.layout
        if layout is None:
            raise ModelNotInitializedError("Placement needs an initialized table model or an explicit layout")
        self.model = model
        self.layout = layout
        self.owner = CellOwner(owner)
        self.bounds = Bounds(rows=layout.grid_size, cols=layout.grid_size)
        self.rng = rng or random.Random(seed)

        self._state = PlacementState.INACTIVE
        self._row_index = -1
        self._word = ""
        self._anchor: Optional[GridPosition] = None

        self._placed_letters: Dict[GridPosition, str] = {}
        self._placements: Dict[int, WordPlacement] = {}

        self.word_placed = Signal("word_placed")
        self.placement_cancelled = Signal("placement_cancelled")

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------
    @property
    def grid_size(self) -> int:
        return self.layout.grid_size

    @property
    def state(self) -> PlacementState:
        return self._state

    @property
    def is_in_placement_mode(self) -> bool:
        return self._state != PlacementState.INACTIVE

    @property
    def placement_row_index(self) -> int:
        return self._row_index

    @property
    def placement_word(self) -> str:
        return self._word

    @property
    def anchor(self) -> Optional[GridPosition]:
        return self._anchor

    # ------------------------------------------------------------------
    # Placement mode
    # ------------------------------------------------------------------
    def enter_placement_mode(self, row_index: int, word: str) -> None:
        if not word or not word.strip():
            raise PlacementError("Cannot enter placement mode - no word provided")

        if self._state != PlacementState.INACTIVE:
            self.clear_placement_highlighting()
        if row_index in self._placements:
            LOGGER.info("Lifting previous placement of row %s before re-placing", row_index + 1)
            self.clear_word_from_grid(row_index)

        self._row_index = row_index
        self._word = word.strip().upper()
        self._anchor = None
        self._state = PlacementState.SELECTING_FIRST_CELL
        LOGGER.info("Entered placement mode for row %s: %s", row_index + 1, self._word)

    def cancel_placement_mode(self) -> None:
        if self._state == PlacementState.INACTIVE:
            return

        self.clear_placement_highlighting()
        self._reset_interaction()
        LOGGER.info("Placement mode cancelled")
        self.placement_cancelled.emit()

    def handle_cell_click(self, col: int, row: int) -> bool:
        """Advance the placement flow. Returns False when the click is not handled."""

        if self._state == PlacementState.INACTIVE:
            return False
        if not self.bounds.contains(row, col):
            return False

        if self._state == PlacementState.SELECTING_FIRST_CELL:
            if not self.valid_directions_from_cell(col, row):
                LOGGER.debug("Rejected start (%s,%s): no valid direction for %s", col, row, self._word)
                return True
            self._anchor = GridPosition(col, row)
            self._state = PlacementState.SELECTING_DIRECTION
            self.update_placement_preview(col, row)
            LOGGER.debug("Anchor set at (%s,%s)", col, row)
            return True

        anchor = self._anchor
        if anchor is not None and GridPosition(col, row) in self.valid_directions_from_cell(anchor.col, anchor.row):
            self.place_word_in_direction(anchor.col, anchor.row, col - anchor.col, row - anchor.row)
        else:
            self.cancel_placement_mode()
        return True

    def update_placement_preview(self, hover_col: int, hover_row: int) -> None:
        if self._state == PlacementState.INACTIVE:
            return
        if not self.bounds.contains(hover_row, hover_col):
            return

        self.clear_placement_highlighting()

        if self._state == PlacementState.SELECTING_FIRST_CELL:
            valid = self.valid_directions_from_cell(hover_col, hover_row)
            self._paint(GridPosition(hover_col, hover_row), CellState.PLACEMENT_ANCHOR)
            for position in valid:
                self._paint(position, CellState.PLACEMENT_VALID)
            for d_col, d_row in PLACEMENT_STEPS:
                neighbor = GridPosition(hover_col + d_col, hover_row + d_row)
                if self.bounds.contains(neighbor.row, neighbor.col) and neighbor not in valid:
                    self._paint(neighbor, CellState.PLACEMENT_INVALID)
            return

        anchor = self._anchor
        valid = self.valid_directions_from_cell(anchor.col, anchor.row)
        self._paint(anchor, CellState.PLACEMENT_ANCHOR, self._word[0])
        for position in valid:
            self._paint(position, CellState.PLACEMENT_VALID)
        if GridPosition(hover_col, hover_row) in valid:
            self._preview_word(hover_col - anchor.col, hover_row - anchor.row)

    # ------------------------------------------------------------------
    # Validity
    # ------------------------------------------------------------------
    def is_valid_placement(
        self, start_col: int, start_row: int, d_col: int, d_row: int, word: Optional[str] = None
    ) -> bool:
        """Check bounds and letter agreement for ``word`` laid out from a start cell.

        ``word`` defaults to the word being placed. Crossing a committed word
        is allowed only where both put the same letter.
        """

        word = self._word if word is None else word.upper()
        return placement_fits(self.grid_size, self._placed_letters, word, start_col, start_row, d_col, d_row)

    def valid_directions_from_cell(self, col: int, row: int) -> List[GridPosition]:
        """Second-cell positions of every direction the current word fits in.

        The second cell must lie on the grid even for a one-letter word,
        since it is what the player clicks to pick the direction.
        """

        if not self._word:
            return []
        return [
            GridPosition(col + d_col, row + d_row)
            for d_col, d_row in PLACEMENT_STEPS
            if self.bounds.contains(row + d_row, col + d_col)
            and self.is_valid_placement(col, row, d_col, d_row)
        ]

    def all_valid_placements(self, word: Optional[str] = None) -> List[Candidate]:
        """Every ``(start_col, start_row, d_col, d_row)`` passing the validity check."""

        word = self._word if word is None else word.upper()
        return list(iter_candidates(self.grid_size, self._placed_letters, word))

    # ------------------------------------------------------------------
    # Commit
    # ------------------------------------------------------------------
    def place_word_in_direction(self, start_col: int, start_row: int, d_col: int, d_row: int) -> bool:
        if self._state == PlacementState.INACTIVE or not self._word:
            LOGGER.warning("Ignoring placement request outside placement mode")
            return False
        if not self.is_valid_placement(start_col, start_row, d_col, d_row):
            LOGGER.debug(
                "Rejected %s at (%s,%s) dir (%s,%s)", self._word, start_col, start_row, d_col, d_row
            )
            return False

        self.clear_placement_highlighting()

        placement = WordPlacement(
            row_index=self._row_index,
            word=self._word,
            start_col=start_col,
            start_row=start_row,
            d_col=d_col,
            d_row=d_row,
        )
        positions = placement.positions
        for position, letter in zip(positions, placement.word):
            self._placed_letters[position] = letter
            self._set_grid_cell(position, CellState.NORMAL, letter)
        self._placements[placement.row_index] = placement

        self._reset_interaction()
        LOGGER.info(
            "Word '%s' placed at (%s,%s) dir (%s,%s)", placement.word, start_col, start_row, d_col, d_row
        )
        self.word_placed.emit(placement.row_index, placement.word, positions)
        return True

    def place_word_randomly(self) -> bool:
        """Commit the current word at a uniformly chosen valid placement."""

        if self._state == PlacementState.INACTIVE:
            LOGGER.error("Random placement requested outside placement mode")
            return False

        candidates = self.all_valid_placements()
        if not candidates:
            LOGGER.warning("No valid placement for '%s' on %sx%s grid", self._word, self.grid_size, self.grid_size)
            return False

        self.rng.shuffle(candidates)
        start_col, start_row, d_col, d_row = candidates[0]
        return self.place_word_in_direction(start_col, start_row, d_col, d_row)

    # ------------------------------------------------------------------
    # Clearing
    # ------------------------------------------------------------------
    def clear_word_from_grid(self, row_index: int) -> bool:
        """Remove one word. Cells still claimed by another word keep their letter."""

        placement = self._placements.pop(row_index, None)
        if placement is None:
            LOGGER.warning("No placement tracked for row %s", row_index + 1)
            return False

        still_claimed = {
            position for other in self._placements.values() for position in other.positions
        }
        for position in placement.positions:
            if position in still_claimed:
                continue
            self._placed_letters.pop(position, None)
            self._set_grid_cell(position, CellState.FOG, None)

        LOGGER.info("Cleared grid cells for row %s", row_index + 1)
        return True

    def clear_all_placed_words(self) -> None:
        if self._state != PlacementState.INACTIVE:
            self.cancel_placement_mode()

        for row in range(self.grid_size):
            for col in range(self.grid_size):
                self._set_grid_cell(GridPosition(col, row), CellState.FOG, None)

        self._placed_letters.clear()
        self._placements.clear()
        LOGGER.info("Cleared all placed words")

    def clear_placement_highlighting(self) -> None:
        """Reconcile every grid cell with the committed letters."""

        for row in range(self.grid_size):
            for col in range(self.grid_size):
                position = GridPosition(col, row)
                letter = self._placed_letters.get(position)
                if letter is not None:
                    self._set_grid_cell(position, CellState.NORMAL, letter)
                else:
                    self._set_grid_cell(position, CellState.FOG, None)

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------
    @property
    def placed_positions(self) -> FrozenSet[GridPosition]:
        return frozenset(self._placed_letters)

    @property
    def placed_letters(self) -> Mapping[GridPosition, str]:
        return MappingProxyType(self._placed_letters)

    def word_placements(self) -> List[WordPlacement]:
        return [self._placements[index] for index in sorted(self._placements)]

    def placement_for(self, row_index: int) -> Optional[WordPlacement]:
        return self._placements.get(row_index)

    def word_positions(self, row_index: int) -> Optional[List[GridPosition]]:
        placement = self._placements.get(row_index)
        return placement.positions if placement else None

    def is_word_placed(self, row_index: int) -> bool:
        return row_index in self._placements

    def has_placed_letter(self, col: int, row: int) -> bool:
        return GridPosition(col, row) in self._placed_letters

    def is_position_occupied(self, position: GridPosition) -> bool:
        return position in self._placed_letters

    def letter_at(self, col: int, row: int) -> Optional[str]:
        return self._placed_letters.get(GridPosition(col, row))

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _reset_interaction(self) -> None:
        self._state = PlacementState.INACTIVE
        self._row_index = -1
        self._word = ""
        self._anchor = None

    def _preview_word(self, d_col: int, d_row: int) -> None:
        anchor = self._anchor
        for index, letter in enumerate(self._word):
            if index == 0:
                state = CellState.PLACEMENT_ANCHOR
            elif index == 1:
                state = CellState.PLACEMENT_SECOND
            else:
                state = CellState.PLACEMENT_PATH
            self._paint(GridPosition(anchor.col + index * d_col, anchor.row + index * d_row), state, letter)

    def _paint(self, position: GridPosition, state: CellState, letter=_KEEP) -> None:
        if letter is _KEEP:
            letter = self._placed_letters.get(position)
        self._set_grid_cell(position, state, letter)

    def _set_grid_cell(self, position: GridPosition, state: CellState, letter: Optional[str]) -> None:
        table_row, table_col = self.layout.grid_to_table(position.row, position.col)
        current = self.model.get_cell(table_row, table_col)
        if current.state != state or current.text_char != letter:
            self.model.set_cell_char_and_state(table_row, table_col, letter, state)

        if state == CellState.NORMAL and letter is not None:
            owner = self.owner
        elif state == CellState.FOG:
            owner = CellOwner.NONE
        else:
            owner = current.owner
        if current.owner != owner:
            self.model.set_cell_owner(table_row, table_col, owner)
