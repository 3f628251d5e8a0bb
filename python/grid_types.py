"""
Shared type definitions for the grid editor.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

MAX_HISTORY_COUNT = 100
FILL_CHAR = "."
DEFAULT_PAINT_CHAR = "#"
DEFAULT_HEIGHT = 6
DEFAULT_WIDTH = 8


class Button(Enum):
    """Pointer button that started a stroke."""

    PRIMARY = "primary"  # Paint with the selected character
    SECONDARY = "secondary"  # Paint with the fill character


# =============================================================================
# Grid Definition Types
# =============================================================================


Row = tuple[str, ...]
Grid = tuple[Row, ...]


@dataclass(frozen=True)
class CellPosition:
    """A cell coordinate within a grid."""

    row: int
    col: int


@dataclass(frozen=True)
class Snapshot:
    """An immutable (grid, height, width) history entry."""

    grid: Grid
    height: int
    width: int


# =============================================================================
# Errors
# =============================================================================


class GridError(ValueError):
    """Base class for rejected user input."""


class InvalidDimension(GridError):
    """Height or width is not a positive integer."""


class ParseError(GridError):
    """Judge text could not be parsed."""


class DecodeError(GridError):
    """Compact encoding could not be decoded."""
