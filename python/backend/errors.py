"""Error taxonomy for the picture swap puzzle.

Every failure in the core is fatal to session start; nothing here is
retried or degraded around.
"""

from __future__ import annotations


class PuzzleError(Exception):
    """Base class for all puzzle errors."""


class OutOfRange(PuzzleError, IndexError):
    """Tile access outside the board's grid."""

    def __init__(self, row: int, col: int, rows: int, cols: int) -> None:
        super().__init__(
            f"Cell ({row}, {col}) is outside the {rows}×{cols} board."
        )
        self.row = row
        self.col = col


class ConfigurationError(PuzzleError, ValueError):
    """Session configuration that cannot produce a playable puzzle."""


class AssetLoadError(PuzzleError, OSError):
    """Source image or image directory could not be read."""
