"""
Pure operations on rectangular character grids.

Every function returns a new grid and leaves its input untouched. Grids are
tuples of row tuples, so snapshots can be shared freely between the editor
state and the history log.
"""

from __future__ import annotations

from typing import Iterator

from grid_types import FILL_CHAR, Grid, GridError, InvalidDimension, Snapshot

__all__ = [
    "create_grid",
    "grid_from_rows",
    "grid_shape",
    "line_cells",
    "parse_dimension",
    "rasterize_line",
    "resize_preserving",
    "rotate_clockwise",
    "set_cell",
]


def parse_dimension(value: int | str, name: str = "dimension") -> int:
    """
    Convert a height/width value into a positive integer.

    Accepts ints and decimal strings (surrounding whitespace allowed), since
    dimensions usually arrive from a text field.

    Raises:
        InvalidDimension: If the value is not a positive integer
    """
    if isinstance(value, bool):
        raise InvalidDimension(f"{name} must be a positive integer, got {value!r}")
    if isinstance(value, str):
        text = value.strip()
        if not (text.isascii() and text.isdigit()):
            raise InvalidDimension(f"{name} must be a positive integer, got {value!r}")
        value = int(text)
    if not isinstance(value, int) or value <= 0:
        raise InvalidDimension(f"{name} must be a positive integer, got {value!r}")
    return value


def _check_dimensions(height: int, width: int) -> None:
    for name, value in (("height", height), ("width", width)):
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise InvalidDimension(f"{name} must be a positive integer, got {value!r}")


def grid_shape(grid: Grid) -> tuple[int, int]:
    """Return (height, width) of a grid."""
    return len(grid), len(grid[0]) if grid else 0


def create_grid(height: int, width: int, fill: str = FILL_CHAR) -> Grid:
    """Create a height x width grid with every cell set to fill."""
    _check_dimensions(height, width)
    if not isinstance(fill, str) or len(fill) != 1:
        raise GridError(f"fill must be a single character, got {fill!r}")
    row = (fill,) * width
    return (row,) * height


def grid_from_rows(rows: list[str] | tuple[str, ...]) -> Grid:
    """
    Build a grid from row strings, one character per cell.

    Example:
        grid_from_rows(["#.", ".#"]) -> (("#", "."), (".", "#"))

    Raises:
        InvalidDimension: If there are no rows, a row is empty, or rows differ in length
    """
    if not rows:
        raise InvalidDimension("grid must have at least one row")
    width = len(rows[0])
    if width == 0:
        raise InvalidDimension("grid rows must not be empty")
    mismatched = [(i, len(row)) for i, row in enumerate(rows) if len(row) != width]
    if mismatched:
        row_idx, actual = mismatched[0]
        raise InvalidDimension(
            f"Inconsistent row lengths: row {row_idx} has {actual} cells, expected {width}"
        )
    return tuple(tuple(row) for row in rows)


def resize_preserving(grid: Grid, new_height: int, new_width: int) -> Grid:
    """
    Resize a grid, keeping cells that fall inside both the old and new shape.

    Cells outside the old grid are filled with '.'.
    """
    _check_dimensions(new_height, new_width)
    old_height, old_width = grid_shape(grid)
    return tuple(
        tuple(
            grid[r][c] if r < old_height and c < old_width else FILL_CHAR
            for c in range(new_width)
        )
        for r in range(new_height)
    )


def rotate_clockwise(grid: Grid) -> Snapshot:
    """
    Rotate a grid 90° clockwise.

    An H×W grid becomes W×H.
    Position (row, col) → (col, H - 1 - row)

    Returns:
        Snapshot with the rotated grid and its swapped dimensions
    """
    original_rows, original_cols = grid_shape(grid)

    new_cells: list[list[str]] = [[FILL_CHAR] * original_rows for _ in range(original_cols)]

    for row in range(original_rows):
        for col in range(original_cols):
            new_cells[col][original_rows - 1 - row] = grid[row][col]

    return Snapshot(
        grid=tuple(tuple(row) for row in new_cells),
        height=original_cols,
        width=original_rows,
    )


def set_cell(grid: Grid, row: int, col: int, char: str) -> Grid:
    """Return a copy of grid with (row, col) set to char; out-of-bounds writes are ignored."""
    height, width = grid_shape(grid)
    if not (0 <= row < height and 0 <= col < width):
        return grid
    if grid[row][col] == char:
        return grid
    new_row = tuple(grid[row][:col]) + (char,) + tuple(grid[row][col + 1:])
    return tuple(tuple(r) for r in grid[:row]) + (new_row,) + tuple(tuple(r) for r in grid[row + 1:])


def line_cells(row0: int, col0: int, row1: int, col1: int) -> Iterator[tuple[int, int]]:
    """
    Yield the (row, col) cells of the Bresenham line between two cells.

    Both endpoints are included and consecutive cells are 8-connected. The
    walk always starts from the lexicographically smaller endpoint, so both
    directions produce the same cells.
    """
    if (row1, col1) < (row0, col0):
        row0, col0, row1, col1 = row1, col1, row0, col0

    dx = abs(col1 - col0)
    dy = abs(row1 - row0)
    sx = 1 if col0 < col1 else -1
    sy = 1 if row0 < row1 else -1
    err = dx - dy
    x, y = col0, row0

    while True:
        yield (y, x)
        if x == col1 and y == row1:
            return
        e2 = 2 * err
        if e2 > -dy:
            err -= dy
            x += sx
        if e2 < dx:
            err += dx
            y += sy


def rasterize_line(
    grid: Grid,
    row0: int,
    col0: int,
    row1: int,
    col1: int,
    char: str,
) -> Grid:
    """Paint every cell on the line from (row0, col0) to (row1, col1), skipping cells off the grid."""
    height, width = grid_shape(grid)
    cells = [list(row) for row in grid]
    for row, col in line_cells(row0, col0, row1, col1):
        if 0 <= row < height and 0 <= col < width:
            cells[row][col] = char
    return tuple(tuple(row) for row in cells)
