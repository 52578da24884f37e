"""Word table: the shared cell matrix and word placement core of a word-hiding game.

This package exposes the public API surface via:

- ``wordtable.table.layout.TableLayout``: maps word rows, headers and grid onto one matrix.
- ``wordtable.table.model.TableModel``: versioned cell storage with change events.
- ``wordtable.engine.placement.PlacementEngine``: 8-direction word placement.
- ``wordtable.engine.setup.SetupSession``: word entry and placement for one player.
"""

from .engine.adapter import PlacementAdapter
from .engine.placement import PlacementEngine
from .engine.setup import SetupConfig, SetupResult, SetupSession
from .table.layout import TableLayout
from .table.model import TableModel

__all__ = [
    "PlacementAdapter",
    "PlacementEngine",
    "SetupConfig",
    "SetupResult",
    "SetupSession",
    "TableLayout",
    "TableModel",
]

__version__ = "0.1.0"
