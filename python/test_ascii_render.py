"""Tests for ascii_render module."""

import re

from ascii_render import render_grid, render_grid_text
from grid_model import grid_from_rows
from grid_types import CellPosition

ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")


def plain(lines: list[str]) -> list[str]:
    """Strip ANSI color codes."""
    return [ANSI_RE.sub("", line) for line in lines]


class TestRenderGrid:
    """Tests for boxed grid rendering."""

    def test_box_and_cells(self) -> None:
        lines = plain(render_grid(grid_from_rows(["#.", ".#"])))
        assert lines == [
            "┌──┐",
            "│#.│",
            "│.#│",
            "└──┘",
        ]

    def test_title(self) -> None:
        lines = plain(render_grid(grid_from_rows(["......"]), title="g"))
        assert lines[0] == "┌─ g ──┐"

    def test_title_too_long_is_dropped(self) -> None:
        lines = plain(render_grid(grid_from_rows(["#"]), title="long title"))
        assert lines[0] == "┌─┐"

    def test_cell_width(self) -> None:
        lines = plain(render_grid(grid_from_rows(["ab"]), cell_width=3))
        assert lines[1] == "│ a  b │"

    def test_cursor_highlight_keeps_text(self) -> None:
        grid = grid_from_rows(["ab", "cd"])
        highlighted = render_grid(grid, cursor=CellPosition(1, 0))

        assert plain(highlighted) == plain(render_grid(grid))

    def test_custom_colors(self) -> None:
        lines = render_grid(grid_from_rows(["ab"]), color_fn=lambda char: str.upper)
        assert lines[1] == "│AB│"

    def test_text(self) -> None:
        text = ANSI_RE.sub("", render_grid_text(grid_from_rows(["#"])))
        assert text == "┌─┐\n│#│\n└─┘"
