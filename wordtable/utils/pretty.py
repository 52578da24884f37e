"""Pretty-print helpers for word tables."""

from __future__ import annotations

import sys
from collections import Counter
from typing import TYPE_CHECKING

from ..core.constants import CellKind, CellState, COMPASS_STEPS
from ..core.models import TableCell

if TYPE_CHECKING:
    from ..engine.setup import SetupResult
    from ..table.model import TableModel


STATE_SYMBOLS = {
    CellState.FOG: ".",
    CellState.PLACEMENT_VALID: "+",
    CellState.PLACEMENT_INVALID: "x",
    CellState.PLACEMENT_ANCHOR: "*",
    CellState.PLACEMENT_PATH: "-",
    CellState.PLACEMENT_SECOND: "-",
}

DIRECTION_NAMES = {step: name for name, step in COMPASS_STEPS.items()}


def cell_symbol(cell: TableCell) -> str:
    if cell.kind == CellKind.SPACER:
        return ""
    if cell.has_text():
        return cell.display_text()
    if cell.kind == CellKind.WORD_SLOT:
        return "_"
    return STATE_SYMBOLS.get(cell.state, ".")


def format_table(model: TableModel) -> str:
    """Render every table cell, word rows and headers included."""

    lines = []
    for row in range(model.rows):
        symbols = [cell_symbol(model.get_cell(row, col)) for col in range(model.cols)]
        lines.append(" ".join(f"{symbol:>2}" for symbol in symbols).rstrip())
    return "\n".join(lines)


def pretty_print_table(model: TableModel, *, label: str | None = None, stream=None) -> None:
    """Print the table in a human-friendly format."""

    stream = stream or sys.stdout
    if label:
        print(label, file=stream)
    print(format_table(model), file=stream)


def print_setup_summary(result: SetupResult, *, stream=None) -> None:
    """Print placements and grid coverage for a finished setup."""

    stream = stream or sys.stdout
    total_cells = result.grid_size * result.grid_size

    print(file=stream)
    print("--- Placements ---", file=stream)
    for placement in result.placements:
        start = f"{chr(ord('A') + placement.start_col)}{placement.start_row + 1}"
        direction = DIRECTION_NAMES.get(placement.direction, "?")
        print(f"  {placement.row_index + 1}. {placement.word:<12} {start:>4} {direction}", file=stream)

    shared = Counter(
        position for placement in result.placements for position in placement.positions
    )
    crossings = sum(1 for count in shared.values() if count > 1)

    print(file=stream)
    print("--- Grid ---", file=stream)
    print(f"  Size:          {result.grid_size} x {result.grid_size} ({total_cells} cells)", file=stream)
    print(f"  Letters:       {len(result.positions)} ({len(result.positions) / total_cells * 100:.0f}%)", file=stream)
    print(f"  Crossings:     {crossings}", file=stream)
