"""Tests for the interactive terminal editor's key handling."""

from pathlib import Path

from readchar import key as keys
from rich.panel import Panel

from grid_editor import EditorConfig, GridEditorController
from grid_model import create_grid
from grid_types import CellPosition
from interactive_editor import InteractiveEditor


def make_editor(answer: str = "") -> InteractiveEditor:
    controller = GridEditorController(config=EditorConfig(height=3, width=4))
    return InteractiveEditor(controller, prompt=lambda message: answer)


def press(editor: InteractiveEditor, *pressed: str) -> None:
    for key in pressed:
        assert editor.handle_key(key)


def rows_of(editor: InteractiveEditor) -> list[str]:
    return ["".join(row) for row in editor.controller.grid]


class TestCursorAndStrokes:
    """Tests for cursor movement and drawing."""

    def test_cursor_clamped(self) -> None:
        editor = make_editor()
        press(editor, keys.UP, keys.LEFT)
        assert editor.cursor == CellPosition(0, 0)

        press(editor, *[keys.RIGHT] * 10, *[keys.DOWN] * 10)
        assert editor.cursor == CellPosition(2, 3)

    def test_stroke_draws_along_cursor_path(self) -> None:
        editor = make_editor()
        press(editor, keys.SPACE, keys.RIGHT, keys.RIGHT, keys.DOWN, keys.SPACE)

        assert rows_of(editor) == ["###.", "..#.", "...."]
        assert len(editor.controller.history) == 2

    def test_erase_stroke(self) -> None:
        editor = make_editor()
        press(editor, keys.SPACE, keys.RIGHT, keys.RIGHT, keys.SPACE)
        press(editor, keys.TAB, keys.LEFT, keys.TAB)

        assert rows_of(editor)[0] == "#..."

    def test_enter_paints_single_cell(self) -> None:
        editor = make_editor()
        press(editor, keys.DOWN, keys.ENTER)
        assert rows_of(editor) == ["....", "#...", "...."]
        assert len(editor.controller.history) == 2

    def test_paint_character_key(self) -> None:
        editor = make_editor()
        press(editor, "o")
        assert "Paint character" in editor.status_message

        press(editor, keys.ENTER)
        assert editor.controller.grid[0][0] == "o"


class TestCommands:
    """Tests for control-key commands."""

    def test_undo_redo(self) -> None:
        editor = make_editor()
        press(editor, keys.ENTER, keys.CTRL_Z)
        assert editor.controller.grid == create_grid(3, 4)

        press(editor, keys.CTRL_Y)
        assert editor.controller.grid[0][0] == "#"

    def test_rotate_clamps_cursor(self) -> None:
        editor = make_editor()
        press(editor, *[keys.RIGHT] * 3, keys.CTRL_R)

        assert (editor.controller.height, editor.controller.width) == (4, 3)
        assert editor.cursor == CellPosition(0, 2)

    def test_clear(self) -> None:
        editor = make_editor()
        press(editor, keys.ENTER, keys.CTRL_L)
        assert editor.controller.grid == create_grid(3, 4)

    def test_resize(self) -> None:
        editor = make_editor("2 6")
        press(editor, keys.CTRL_T)

        assert (editor.controller.height, editor.controller.width) == (2, 6)
        assert editor.status_message.startswith("✓")

    def test_resize_rejected(self) -> None:
        editor = make_editor("0 6")
        press(editor, keys.CTRL_T)

        assert (editor.controller.height, editor.controller.width) == (3, 4)
        assert "resize failed" in editor.status_message

    def test_resize_needs_two_values(self) -> None:
        editor = make_editor("5")
        press(editor, keys.CTRL_T)
        assert "expected 'H W'" in editor.status_message

    def test_load_file(self, tmp_path: Path) -> None:
        path = tmp_path / "grid.txt"
        path.write_text("2 2\n#.\n.#\n", encoding="utf-8")
        editor = make_editor(str(path))
        press(editor, keys.CTRL_F)

        assert rows_of(editor) == ["#.", ".#"]

    def test_load_missing_file(self, tmp_path: Path) -> None:
        editor = make_editor(str(tmp_path / "missing.txt"))
        press(editor, keys.CTRL_F)

        assert "load failed" in editor.status_message
        assert editor.controller.grid == create_grid(3, 4)

    def test_load_invalid_text(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.txt"
        path.write_text("2 4\n###\n.#.#\n", encoding="utf-8")
        editor = make_editor(str(path))
        press(editor, keys.CTRL_F)

        assert "Row width mismatch" in editor.status_message
        assert editor.controller.grid == create_grid(3, 4)

    def test_export(self) -> None:
        editor = make_editor()
        press(editor, keys.CTRL_E)
        assert editor.output == "3 4\n....\n....\n....\n"

    def test_share(self) -> None:
        editor = make_editor()
        press(editor, keys.CTRL_U)
        assert editor.output.startswith("?h=3&w=4&data=")

    def test_escape_quits_and_commits(self) -> None:
        editor = make_editor()
        press(editor, keys.SPACE, keys.RIGHT)

        assert not editor.handle_key(keys.ESC)
        assert not editor.controller.draw.active
        assert len(editor.controller.history) == 2


class TestDisplay:
    """Tests for the rich display panel."""

    def test_generate_display(self) -> None:
        editor = make_editor()
        press(editor, keys.SPACE)
        panel = editor.generate_display()

        assert isinstance(panel, Panel)
        text = panel.renderable.plain  # type: ignore[union-attr]
        assert "Size: 3 x 4" in text
        assert "(drawing)" in text
        assert "History: 1/1" in text
