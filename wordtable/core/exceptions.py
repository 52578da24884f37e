"""Custom exception hierarchy for the word table."""


class WordTableError(Exception):
    """Base exception for word table failures."""


class LayoutError(WordTableError, ValueError):
    """Raised when a table layout is requested with invalid dimensions."""


class ModelNotInitializedError(WordTableError, RuntimeError):
    """Raised when the table model is used before ``initialize``."""


class CellOutOfBoundsError(WordTableError, ValueError):
    """Raised when a coordinate falls outside the table or its region."""


class InvalidCellValueError(WordTableError, ValueError):
    """Raised when a cell is given content it cannot hold."""


class PlacementError(WordTableError, ValueError):
    """Raised when placement mode is entered without a usable word."""


class WordEntryError(WordTableError, ValueError):
    """Raised when a word cannot be entered into a word row."""


class ValidationError(WordTableError):
    """Raised when the placement integrity checks fail."""
