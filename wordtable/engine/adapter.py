"""Bridge between table coordinates and the placement engine."""

from __future__ import annotations

from typing import Any, List, Mapping, Optional

from ..core.events import Signal
from ..core.models import GridPosition, WordPlacement
from ..table.layout import TableLayout
from ..table.model import TableModel
from ..table.region import OUTSIDE
from ..utils.logger import get_logger
from .placement import PlacementEngine


LOGGER = get_logger(__name__)


class PlacementAdapter:
    """Forwards placement calls and re-emits engine events unchanged.

    Table-coordinate entry points translate through the layout; anything
    outside the grid is reported as not handled. Placement state lives in
    the engine only.
    """

    def __init__(
        self,
        model: TableModel,
        layout: Optional[TableLayout] = None,
        engine: Optional[PlacementEngine] = None,
        **engine_options: Any,
    ) -> None:
        self.model = model
        self.layout = layout or model.layout
        self.engine = engine or PlacementEngine(model, self.layout, **engine_options)

        self.word_placed = Signal("word_placed")
        self.placement_cancelled = Signal("placement_cancelled")
        self._unsubscribers = [
            self.engine.word_placed.subscribe(self.word_placed.emit),
            self.engine.placement_cancelled.subscribe(self.placement_cancelled.emit),
        ]

    def dispose(self) -> None:
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []

    # ------------------------------------------------------------------
    # Engine state
    # ------------------------------------------------------------------
    @property
    def is_in_placement_mode(self) -> bool:
        return self.engine.is_in_placement_mode

    @property
    def current_placement_state(self):
        return self.engine.state

    @property
    def placement_row_index(self) -> int:
        return self.engine.placement_row_index

    @property
    def placed_positions(self):
        return self.engine.placed_positions

    @property
    def placed_letters(self) -> Mapping[GridPosition, str]:
        return self.engine.placed_letters

    # ------------------------------------------------------------------
    # Placement flow
    # ------------------------------------------------------------------
    def enter_placement_mode(self, row_index: int, word: str) -> None:
        self.engine.enter_placement_mode(row_index, word)

    def cancel_placement_mode(self) -> None:
        self.engine.cancel_placement_mode()

    def handle_cell_click(self, grid_col: int, grid_row: int) -> bool:
        return self.engine.handle_cell_click(grid_col, grid_row)

    def update_placement_preview(self, grid_col: int, grid_row: int) -> None:
        self.engine.update_placement_preview(grid_col, grid_row)

    def handle_table_click(self, table_row: int, table_col: int) -> bool:
        grid_row, grid_col = self.layout.table_to_grid(table_row, table_col)
        if (grid_row, grid_col) == OUTSIDE:
            return False
        return self.engine.handle_cell_click(grid_col, grid_row)

    def update_table_preview(self, table_row: int, table_col: int) -> None:
        grid_row, grid_col = self.layout.table_to_grid(table_row, table_col)
        if (grid_row, grid_col) == OUTSIDE:
            return
        self.engine.update_placement_preview(grid_col, grid_row)

    def place_word_in_direction(self, start_col: int, start_row: int, d_col: int, d_row: int) -> bool:
        return self.engine.place_word_in_direction(start_col, start_row, d_col, d_row)

    def place_word_randomly(self, row_index: Optional[int] = None, word: Optional[str] = None) -> bool:
        """Place the current word, or enter placement for ``word`` first.

        With explicit arguments a failed attempt leaves placement mode.
        """

        if row_index is None:
            return self.engine.place_word_randomly()

        if not word or not word.strip():
            LOGGER.warning("Cannot place word at row %s - word is empty", row_index + 1)
            return False

        self.engine.enter_placement_mode(row_index, word)
        placed = self.engine.place_word_randomly()
        if not placed:
            self.engine.cancel_placement_mode()
        return placed

    # ------------------------------------------------------------------
    # Clearing and queries
    # ------------------------------------------------------------------
    def clear_word_from_grid(self, row_index: int) -> bool:
        return self.engine.clear_word_from_grid(row_index)

    def clear_all_placed_words(self) -> None:
        self.engine.clear_all_placed_words()

    def word_positions(self, row_index: int) -> Optional[List[GridPosition]]:
        return self.engine.word_positions(row_index)

    def word_placements(self) -> List[WordPlacement]:
        return self.engine.word_placements()

    def has_placed_letter(self, grid_col: int, grid_row: int) -> bool:
        return self.engine.has_placed_letter(grid_col, grid_row)

    def letter_at(self, grid_col: int, grid_row: int) -> Optional[str]:
        return self.engine.letter_at(grid_col, grid_row)
