"""Setup session: word entry, placement orchestration and the final hand-off.

A session is built from a :class:`SetupConfig`, owns the table model for the
setup phase and exposes the finished placement to the scoring side as a
read-only :class:`SetupResult`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, FrozenSet, List, Mapping, Optional, Tuple

from ..core.constants import CellOwner, CellState, WORD_ALPHABET
from ..core.exceptions import ValidationError, WordEntryError
from ..core.models import GridPosition, WordPlacement
from ..table.layout import TableLayout
from ..table.model import TableModel
from ..utils.logger import get_logger
from .adapter import PlacementAdapter
from .solver import solve_placements
from .validator import PlacementValidator


LOGGER = get_logger(__name__)


@dataclass
class SetupConfig:
    grid_size: int
    word_count: int
    words: List[str] = field(default_factory=list)
    owner: CellOwner = CellOwner.PLAYER1
    seed: Optional[int] = None
    solver_fallback: bool = True
    solver_timeout: float = 10.0

    def to_layout(self) -> TableLayout:
        return TableLayout.create_for_setup(self.grid_size, self.word_count)


@dataclass(frozen=True)
class SetupResult:
    """Read-only view of a finished placement for the guessing side."""

    grid_size: int
    placements: Tuple[WordPlacement, ...]
    letters: Mapping[GridPosition, str]

    @property
    def positions(self) -> FrozenSet[GridPosition]:
        return frozenset(self.letters)

    @property
    def words(self) -> List[str]:
        return [placement.word for placement in self.placements]

    def is_hit(self, col: int, row: int) -> bool:
        return GridPosition(col, row) in self.letters

    def letter_at(self, col: int, row: int) -> Optional[str]:
        return self.letters.get(GridPosition(col, row))

    def contains_letter(self, letter: str) -> bool:
        return letter.upper() in self.letters.values()


class SetupSession:
    """Drives one player's setup: enter words, place them, hand them off."""

    def __init__(self, config: SetupConfig, model: Optional[TableModel] = None) -> None:
        self.config = config
        self.layout = config.to_layout()
        self.model = model or TableModel()
        self.model.initialize(self.layout)
        self.adapter = PlacementAdapter(self.model, self.layout, owner=config.owner, seed=config.seed)
        self.engine = self.adapter.engine
        self.validator = PlacementValidator()
        self.words: List[str] = ["" for _ in range(self.layout.word_count)]
        self.selected_word_index = -1

        if len(config.words) > self.layout.word_count:
            LOGGER.warning(
                "Ignoring %d word(s) beyond the configured word count %d",
                len(config.words) - self.layout.word_count,
                self.layout.word_count,
            )
        for index, word in enumerate(config.words[: self.layout.word_count]):
            self.set_word(index, word)

    def dispose(self) -> None:
        self.adapter.dispose()

    # ------------------------------------------------------------------
    # Word entry
    # ------------------------------------------------------------------
    def set_word(self, index: int, word: Optional[str]) -> None:
        if not 0 <= index < self.layout.word_count:
            raise WordEntryError(f"Word index {index} outside 0..{self.layout.word_count - 1}")

        word = (word or "").strip().upper()
        if len(word) > self.layout.grid_size:
            raise WordEntryError(f"Word too long. Max length is {self.layout.grid_size}")
        if any(letter not in WORD_ALPHABET for letter in word):
            raise WordEntryError("Words can only contain letters A-Z")

        if self.words[index] != word:
            if self.engine.placement_row_index == index:
                self.adapter.cancel_placement_mode()
            if self.engine.is_word_placed(index):
                self.adapter.clear_word_from_grid(index)

        self.words[index] = word
        self._update_word_slot_display(index)
        LOGGER.debug("Set word %s: %s", index + 1, word)

    def select_word_slot(self, index: int) -> None:
        self.selected_word_index = index if 0 <= index < self.layout.word_count else -1
        for word_index in range(self.layout.word_count):
            state = CellState.SELECTED if word_index == self.selected_word_index else CellState.NORMAL
            for letter_index in range(self.layout.grid_size):
                if self.model.get_word_slot(word_index, letter_index).state != state:
                    self.model.set_word_slot_state(word_index, letter_index, state)

    def add_letter_to_selected_word(self, letter: str) -> bool:
        if self.selected_word_index < 0:
            return False
        self.set_word(self.selected_word_index, self.words[self.selected_word_index] + letter)
        return True

    def remove_letter_from_selected_word(self) -> bool:
        if self.selected_word_index < 0:
            return False
        current = self.words[self.selected_word_index]
        if not current:
            return False
        self.set_word(self.selected_word_index, current[:-1])
        return True

    def _update_word_slot_display(self, index: int) -> None:
        word = self.words[index]
        for letter_index in range(self.layout.grid_size):
            letter = word[letter_index] if letter_index < len(word) else None
            if self.model.get_word_slot(index, letter_index).text_char != letter:
                self.model.set_word_slot_letter(index, letter_index, letter)

    # ------------------------------------------------------------------
    # Placement
    # ------------------------------------------------------------------
    def begin_placement(self, index: int) -> bool:
        """Enter interactive placement for word ``index``."""

        if not 0 <= index < self.layout.word_count or not self.words[index]:
            LOGGER.error("Cannot enter placement mode for row %s - no word entered", index + 1)
            return False
        self.adapter.enter_placement_mode(index, self.words[index])
        return True

    def place_all_randomly(self) -> int:
        """Place every entered word, longest first. Returns how many were placed."""

        self.adapter.clear_all_placed_words()

        order = sorted(range(self.layout.word_count), key=lambda i: len(self.words[i]), reverse=True)
        placed = 0
        failed: List[int] = []
        for index in order:
            word = self.words[index]
            if not word:
                LOGGER.warning("Skipping random placement for word %s - word incomplete", index + 1)
                continue
            if self.adapter.place_word_randomly(index, word):
                placed += 1
            else:
                LOGGER.warning("Failed to place word %s: %s", index + 1, word)
                failed.append(index)

        if failed and self.config.solver_fallback:
            LOGGER.info("Greedy placement left %d word(s) unplaced; trying joint placement", len(failed))
            if self._place_jointly():
                placed = sum(1 for word in self.words if word)

        LOGGER.info("Random placement complete: %d/%d words placed", placed, self.layout.word_count)
        return placed

    def _place_jointly(self) -> bool:
        words: Dict[int, str] = {index: word for index, word in enumerate(self.words) if word}
        solution = solve_placements(
            self.layout.grid_size,
            words,
            seed=self.config.seed,
            timeout=self.config.solver_timeout,
        )
        if solution is None:
            return False

        self.adapter.clear_all_placed_words()
        for index in sorted(solution):
            start_col, start_row, d_col, d_row = solution[index]
            self.adapter.enter_placement_mode(index, words[index])
            if not self.adapter.place_word_in_direction(start_col, start_row, d_col, d_row):
                LOGGER.error("Joint placement for word %s no longer fits; aborting", index + 1)
                self.adapter.cancel_placement_mode()
                return False
        return True

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def are_all_words_entered(self) -> bool:
        return all(self.words)

    def are_all_words_placed(self) -> bool:
        return all(word and self.engine.is_word_placed(index) for index, word in enumerate(self.words))

    def finalize(self) -> SetupResult:
        """Validate the placement and return it for the guessing phase."""

        if self.engine.is_in_placement_mode:
            self.adapter.cancel_placement_mode()

        missing = [index + 1 for index, word in enumerate(self.words) if not word or not self.engine.is_word_placed(index)]
        if missing:
            raise ValidationError(f"Words not placed for rows {missing}")

        validation = self.validator.validate(self.engine, self.model)
        if not validation.ok:
            raise ValidationError(f"Placement validation failed: {validation.messages}")

        return SetupResult(
            grid_size=self.layout.grid_size,
            placements=tuple(self.engine.word_placements()),
            letters=MappingProxyType(dict(self.engine.placed_letters)),
        )
