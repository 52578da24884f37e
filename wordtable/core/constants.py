"""Shared constants and enumerations for the word table."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple


class CellKind(str, Enum):
    """What a table cell represents."""

    SPACER = "SPACER"
    WORD_SLOT = "WORD_SLOT"
    HEADER_COL = "HEADER_COL"
    HEADER_ROW = "HEADER_ROW"
    GRID_CELL = "GRID_CELL"


class CellState(str, Enum):
    """Visual/interaction state of a cell. A cell holds exactly one state."""

    # Base states
    NONE = "NONE"
    NORMAL = "NORMAL"
    DISABLED = "DISABLED"
    HIDDEN = "HIDDEN"
    SELECTED = "SELECTED"
    HOVERED = "HOVERED"
    LOCKED = "LOCKED"
    READ_ONLY = "READ_ONLY"

    # Setup phase placement
    PLACEMENT_VALID = "PLACEMENT_VALID"
    PLACEMENT_INVALID = "PLACEMENT_INVALID"
    PLACEMENT_PATH = "PLACEMENT_PATH"
    PLACEMENT_ANCHOR = "PLACEMENT_ANCHOR"
    PLACEMENT_SECOND = "PLACEMENT_SECOND"

    # Gameplay
    FOG = "FOG"
    REVEALED = "REVEALED"
    HIT = "HIT"
    MISS = "MISS"
    WRONG_WORD = "WRONG_WORD"
    WARNING = "WARNING"


PREVIEW_STATES = frozenset(
    {
        CellState.PLACEMENT_VALID,
        CellState.PLACEMENT_INVALID,
        CellState.PLACEMENT_PATH,
        CellState.PLACEMENT_ANCHOR,
        CellState.PLACEMENT_SECOND,
    }
)


class CellOwner(str, Enum):
    """Which player or AI owns a cell's content."""

    NONE = "NONE"
    PLAYER1 = "PLAYER1"
    PLAYER2 = "PLAYER2"
    EXECUTIONER_AI = "EXECUTIONER_AI"
    PHANTOM_AI = "PHANTOM_AI"


class PlacementState(str, Enum):
    """Interactive placement state machine."""

    INACTIVE = "INACTIVE"
    SELECTING_FIRST_CELL = "SELECTING_FIRST_CELL"
    SELECTING_DIRECTION = "SELECTING_DIRECTION"


# (d_col, d_row) steps, in the order directions are offered to the player.
COMPASS_STEPS: Dict[str, Tuple[int, int]] = {
    "E": (1, 0),
    "S": (0, 1),
    "SE": (1, 1),
    "NE": (1, -1),
    "W": (-1, 0),
    "N": (0, -1),
    "NW": (-1, -1),
    "SW": (-1, 1),
}
PLACEMENT_STEPS: Tuple[Tuple[int, int], ...] = tuple(COMPASS_STEPS.values())

WORD_ALPHABET = frozenset("ABCDEFGHIJKLMNOPQRSTUVWXYZ")


@dataclass(frozen=True)
class Bounds:
    """Simple rectangle bounds helper."""

    rows: int
    cols: int

    def contains(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols
