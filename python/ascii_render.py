"""
ASCII rendering for the grid editor.

Draws a single character grid inside a box border, with the cursor cell
highlighted and fill cells dimmed so painted cells stand out.
"""

from __future__ import annotations

import logging
from typing import Callable

import simple_chalk as chalk  # type: ignore[import-untyped]

from grid_model import grid_shape
from grid_types import FILL_CHAR, CellPosition, Grid

__all__ = ["render_grid", "render_grid_text"]

logger = logging.getLogger(__name__)


def render_grid(
    grid: Grid,
    cursor: CellPosition | None = None,
    title: str | None = None,
    cell_width: int = 1,
    color_fn: Callable[[str], Callable[[str], str]] | None = None,
) -> list[str]:
    """
    Render a grid as boxed character lines.

    Args:
        grid: The grid to render
        cursor: Optional cell to highlight
        title: Optional title centered in the top border
        cell_width: Characters per cell (default 1)
        color_fn: Optional function returning the colorizer for a cell character

    Returns:
        List of strings representing the rendered grid lines
    """
    if color_fn is None:
        color_fn = lambda char: chalk.blue if char == FILL_CHAR else chalk.yellow

    rows, cols = grid_shape(grid)
    grid_width = cols * cell_width + 2

    lines: list[str] = []

    # Top border with title
    title_line = "┌" + "─" * (grid_width - 2) + "┐"
    label = f" {title} " if title else ""
    if label and len(label) <= grid_width - 2:
        title_start = (grid_width - len(label)) // 2
        title_line = (
            "┌" +
            "─" * (title_start - 1) +
            label +
            "─" * (grid_width - title_start - len(label) - 1) +
            "┐"
        )
    lines.append(title_line)

    for r_idx, row in enumerate(grid):
        line_parts = ["│"]
        for c_idx, char in enumerate(row):
            content = char if cell_width == 1 else char.center(cell_width)
            if cursor is not None and cursor.row == r_idx and cursor.col == c_idx:
                content = chalk.bgWhite.black(content)
            else:
                content = color_fn(char)(content)
            line_parts.append(content)
        line_parts.append("│")
        lines.append("".join(line_parts))

    lines.append("└" + "─" * (grid_width - 2) + "┘")

    logger.debug("render_grid: %dx%d, cell_width=%d", rows, cols, cell_width)
    return lines


def render_grid_text(grid: Grid, cursor: CellPosition | None = None, title: str | None = None) -> str:
    """Render a grid as a single newline-joined string."""
    return "\n".join(render_grid(grid, cursor=cursor, title=title))
