"""
Interactive terminal grid editor.
Display the grid and paint it with keyboard commands.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Callable

import readchar
from readchar import key as keys
from rich.console import Console
from rich.live import Live
from rich.panel import Panel
from rich.text import Text

from ascii_render import render_grid_text
from grid_editor import EditFailure, GridEditorController, KeyAction
from grid_types import Button, CellPosition

logger = logging.getLogger(__name__)

MOVES = {
    keys.UP: (-1, 0),
    keys.DOWN: (1, 0),
    keys.LEFT: (0, -1),
    keys.RIGHT: (0, 1),
}

# Control chords forwarded to the controller as (key, ctrl)
CHORDS = {
    keys.CTRL_Z: "z",
    keys.CTRL_Y: "y",
    keys.CTRL_E: "c",
}


class InteractiveEditor:
    """Keyboard-driven front end for GridEditorController."""

    def __init__(
        self,
        controller: GridEditorController,
        prompt: Callable[[str], str] | None = None,
    ) -> None:
        self.controller = controller
        self.console = Console()
        self.prompt = prompt
        self.live: Live | None = None
        self.cursor = CellPosition(0, 0)
        self.status_message = "Ready"
        self.output = ""

    def generate_display(self) -> Panel:
        """Generate the current display with grid and status."""
        ctl = self.controller
        status = Text()
        status.append("Size: ", style="bold")
        status.append(f"{ctl.height} x {ctl.width}    ")
        status.append("Paint: ", style="bold")
        status.append(f"{ctl.paint_char!r}    ")
        status.append("Cursor: ", style="bold")
        status.append(f"[{self.cursor.row}, {self.cursor.col}]")
        if ctl.draw.active:
            mode = "erasing" if ctl.draw.button is Button.SECONDARY else "drawing"
            status.append(f"    ({mode})", style="bold magenta")
        status.append("\n\n")

        status.append(Text.from_ansi(render_grid_text(ctl.grid, cursor=self.cursor)))
        status.append("\n\n")

        if self.output:
            status.append(self.output)
            status.append("\n")

        status.append("Keys:\n", style="bold cyan")
        status.append("  Arrows - Move cursor (draws while a stroke is active)\n")
        status.append("  Space  - Start/end stroke    Tab - Start/end erase stroke\n")
        status.append("  Enter  - Paint one cell      Other keys - Select paint character\n")
        status.append("  Ctrl+Z/Ctrl+Y - Undo/Redo    Ctrl+R - Rotate    Ctrl+L - Clear\n")
        status.append("  Ctrl+T - Resize    Ctrl+F - Load file    Ctrl+E - Export    Ctrl+U - Share\n")
        status.append("  Esc - Quit\n\n")

        history = f"{ctl.history.cursor + 1}/{len(ctl.history)}"
        status.append("─" * 40 + "\n", style="dim")
        status.append("History: ", style="bold")
        status.append(f"{history}  ")
        status.append("Status: ", style="bold")
        status.append(self.status_message)

        return Panel(status, title="Grid Editor", border_style="green", width=80)

    def _clamp_cursor(self) -> None:
        ctl = self.controller
        self.cursor = CellPosition(
            min(max(self.cursor.row, 0), ctl.height - 1),
            min(max(self.cursor.col, 0), ctl.width - 1),
        )

    def _report(self, action: str, result: object) -> None:
        if isinstance(result, EditFailure):
            self.status_message = f"✗ {action} failed: {result.reason}"
        else:
            self.status_message = f"✓ {action}: {self.controller.height} x {self.controller.width}"
        self._clamp_cursor()

    def move_cursor(self, d_row: int, d_col: int) -> None:
        self.cursor = CellPosition(self.cursor.row + d_row, self.cursor.col + d_col)
        self._clamp_cursor()
        self.controller.pointer_enter(self.cursor.row, self.cursor.col)

    def toggle_stroke(self, button: Button) -> None:
        ctl = self.controller
        if ctl.draw.active:
            ctl.end_stroke()
            self.status_message = "Stroke committed"
        else:
            ctl.pointer_down(self.cursor.row, self.cursor.col, button)
            self.status_message = "Erasing..." if button is Button.SECONDARY else "Drawing..."

    def resize(self) -> None:
        answer = self.ask("New size (H W): ")
        parts = answer.split()
        if len(parts) != 2:
            self.status_message = f"✗ resize failed: expected 'H W', got {answer!r}"
            return
        self._report("resize", self.controller.resize(parts[0], parts[1]))

    def load_file(self) -> None:
        path = Path(self.ask("Load judge text from file: ").strip())
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as err:
            logger.warning("Could not read %s: %s", path, err)
            self.status_message = f"✗ load failed: {err}"
            return
        self._report(f"load {path.name}", self.controller.load_text(text))

    def handle_key(self, key: str) -> bool:
        """
        Apply one key press.

        Returns:
            False when the editor should quit
        """
        ctl = self.controller
        self.output = ""

        if key == keys.ESC:
            ctl.end_stroke()
            self.status_message = "Quitting..."
            return False
        elif key in MOVES:
            self.move_cursor(*MOVES[key])
        elif key == keys.SPACE:
            self.toggle_stroke(Button.PRIMARY)
        elif key == keys.TAB:
            self.toggle_stroke(Button.SECONDARY)
        elif key in (keys.ENTER, keys.CR, keys.LF):
            ctl.pointer_down(self.cursor.row, self.cursor.col)
            ctl.pointer_up()
            self.status_message = f"Painted [{self.cursor.row}, {self.cursor.col}]"
        elif key in CHORDS:
            action = ctl.handle_key(CHORDS[key], ctrl=True)
            if action is KeyAction.COPY:
                self.output = ctl.export_text()
                self.status_message = "Exported judge text"
            elif action is not None:
                self.status_message = action.value.capitalize()
            self._clamp_cursor()
        elif key == keys.CTRL_R:
            self._report("rotate", ctl.rotate())
        elif key == keys.CTRL_L:
            self._report("clear", ctl.clear())
        elif key == keys.CTRL_T:
            self.resize()
        elif key == keys.CTRL_F:
            self.load_file()
        elif key == keys.CTRL_U:
            self.output = "?" + ctl.share_query()
            self.status_message = "Share query generated"
        elif ctl.handle_key(key) is KeyAction.PAINT_CHAR:
            self.status_message = f"Paint character set to {key!r}"
        else:
            self.status_message = f"Unknown key: {key!r}"
        return True

    def ask(self, message: str) -> str:
        """Read a line of input, pausing the live display while prompting."""
        if self.prompt is not None:
            return self.prompt(message)
        if self.live is None:
            return self.console.input(message)
        self.live.stop()
        try:
            return self.console.input(message)
        finally:
            self.live.start()

    def run(self) -> None:
        """Run the interactive editor until Esc or Ctrl+C."""
        with self.controller.session(), Live(
            self.generate_display(), console=self.console, refresh_per_second=4
        ) as live:
            self.live = live
            try:
                while True:
                    live.update(self.generate_display())
                    if not self.handle_key(readchar.readkey()):
                        live.update(self.generate_display())
                        break
            except KeyboardInterrupt:
                self.status_message = "Interrupted by user"
                live.update(self.generate_display())


def main(argv: list[str] | None = None) -> None:
    """Run the editor, optionally starting from a share link query or URL."""
    args = list(sys.argv[1:] if argv is None else argv)
    if args and args[0] == "--verbose":
        logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
        args = args[1:]
    query = args[0] if args else None
    controller = GridEditorController.from_share_query(query)
    InteractiveEditor(controller).run()


if __name__ == "__main__":
    main()
