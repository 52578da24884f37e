"""Deterministic integrity checks over a finished placement."""

from __future__ import annotations

from dataclasses import dataclass
from itertools import combinations
from typing import List, Set

from ..core.constants import CellState, PLACEMENT_STEPS
from ..core.exceptions import ValidationError
from ..core.models import GridPosition
from ..table.model import TableModel
from ..utils.logger import get_logger
from .placement import PlacementEngine


LOGGER = get_logger(__name__)


@dataclass
class ValidationResult:
    ok: bool
    messages: List[str]


class PlacementValidator:
    """Checks that the engine's records and the table model agree."""

    def validate(self, engine: PlacementEngine, model: TableModel) -> ValidationResult:
        messages: List[str] = []
        try:
            self._check_regions_disjoint(model)
            self._check_placements_on_grid(engine)
            self._check_letters_agree(engine)
            self._check_no_orphan_letters(engine)
            self._check_model_shows_letters(engine, model)
        except ValidationError as exc:
            messages.append(str(exc))
            LOGGER.error("Validation failed: %s", exc)
            return ValidationResult(ok=False, messages=messages)
        return ValidationResult(ok=True, messages=[])

    def _check_regions_disjoint(self, model: TableModel) -> None:
        layout = model.layout
        for first, second in combinations(layout.regions, 2):
            overlap_rows = min(first.row_end, second.row_end) - max(first.row_start, second.row_start)
            overlap_cols = min(first.col_end, second.col_end) - max(first.col_start, second.col_start)
            if overlap_rows > 0 and overlap_cols > 0:
                raise ValidationError(f"Regions {first.name} and {second.name} overlap")

    def _check_placements_on_grid(self, engine: PlacementEngine) -> None:
        for placement in engine.word_placements():
            if placement.direction not in PLACEMENT_STEPS:
                raise ValidationError(
                    f"Word '{placement.word}' uses illegal direction {placement.direction}"
                )
            for position in placement.positions:
                if not engine.bounds.contains(position.row, position.col):
                    raise ValidationError(
                        f"Word '{placement.word}' leaves the grid at ({position.col},{position.row})"
                    )

    def _check_letters_agree(self, engine: PlacementEngine) -> None:
        letters = engine.placed_letters
        for placement in engine.word_placements():
            for position, letter in zip(placement.positions, placement.word):
                if letters.get(position) != letter:
                    raise ValidationError(
                        f"Word '{placement.word}' expects '{letter}' at ({position.col},{position.row}) "
                        f"but grid holds {letters.get(position)!r}"
                    )

    def _check_no_orphan_letters(self, engine: PlacementEngine) -> None:
        covered: Set[GridPosition] = {
            position for placement in engine.word_placements() for position in placement.positions
        }
        for position in engine.placed_letters:
            if position not in covered:
                raise ValidationError(f"Letter at ({position.col},{position.row}) belongs to no word")

    def _check_model_shows_letters(self, engine: PlacementEngine, model: TableModel) -> None:
        for position, letter in engine.placed_letters.items():
            cell = model.get_grid_cell(position.row, position.col)
            if cell.text_char != letter or cell.state != CellState.NORMAL:
                raise ValidationError(
                    f"Table cell ({position.col},{position.row}) shows {cell.text_char!r}/{cell.state.value}, "
                    f"expected '{letter}'"
                )
