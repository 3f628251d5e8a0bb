"""
Grid editor controller.

Owns the current (grid, height, width) state, turns pointer and keyboard
intents into grid operations, and records one history snapshot per
completed edit. A stroke (press, any number of moves, release) paints many
cells but commits exactly once, on release.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterator

from grid_codec import from_judge_text, from_share_query, to_judge_text, to_share_query
from grid_model import (
    create_grid,
    parse_dimension,
    rasterize_line,
    resize_preserving,
    rotate_clockwise,
    set_cell,
)
from grid_types import (
    DEFAULT_HEIGHT,
    DEFAULT_PAINT_CHAR,
    DEFAULT_WIDTH,
    FILL_CHAR,
    MAX_HISTORY_COUNT,
    Button,
    CellPosition,
    Grid,
    GridError,
    Snapshot,
)
from history import HistoryStore

__all__ = [
    "DrawState",
    "EditFailure",
    "EditResult",
    "EditorConfig",
    "GridEditorController",
    "KeyAction",
    "CellResolver",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EditorConfig:
    """Defaults for a new editor."""

    height: int = DEFAULT_HEIGHT
    width: int = DEFAULT_WIDTH
    paint_char: str = DEFAULT_PAINT_CHAR
    max_history: int = MAX_HISTORY_COUNT


@dataclass(frozen=True)
class EditFailure:
    """An edit that was rejected; state and history are unchanged."""

    action: str
    reason: str


EditResult = Snapshot | EditFailure


@dataclass
class DrawState:
    """Pointer state of the stroke in progress."""

    active: bool = False
    button: Button | None = None
    last_cell: CellPosition | None = None


class KeyAction(Enum):
    """What a key press did."""

    UNDO = "undo"
    REDO = "redo"
    COPY = "copy"
    PAINT_CHAR = "paint_char"


# Host capability: map a screen coordinate to the cell under it, if any
CellResolver = Callable[[float, float], CellPosition | None]


class GridEditorController:
    """Composition root for the grid editor."""

    def __init__(self, initial: Snapshot | None = None, config: EditorConfig = EditorConfig()) -> None:
        if initial is None:
            initial = Snapshot(
                grid=create_grid(config.height, config.width),
                height=config.height,
                width=config.width,
            )
        self.config = config
        self.grid: Grid = initial.grid
        self.height = initial.height
        self.width = initial.width
        self.paint_char = config.paint_char
        self.draw = DrawState()
        self.history = HistoryStore(initial, config.max_history)

    @classmethod
    def from_share_query(cls, query: str | None, config: EditorConfig = EditorConfig()) -> GridEditorController:
        """Start from a share link query, falling back to the default grid if it cannot be decoded."""
        if query:
            try:
                return cls(from_share_query(query), config)
            except GridError as err:
                logger.error("Failed to decode grid data from share query: %s", err)
        return cls(None, config)

    @property
    def snapshot(self) -> Snapshot:
        return Snapshot(grid=self.grid, height=self.height, width=self.width)

    @property
    def can_undo(self) -> bool:
        return self.history.can_undo

    @property
    def can_redo(self) -> bool:
        return self.history.can_redo

    # =========================================================================
    # Lifetime
    # =========================================================================

    @contextmanager
    def session(self) -> Iterator[GridEditorController]:
        """
        Scope the editor's active lifetime.

        Leaving the block always ends the current stroke, so a release event
        the host never delivered still produces its history commit.
        """
        logger.debug("Editor session started")
        try:
            yield self
        finally:
            self.end_stroke()
            logger.debug("Editor session ended")

    # =========================================================================
    # Strokes
    # =========================================================================

    def _stroke_char(self) -> str:
        return FILL_CHAR if self.draw.button is Button.SECONDARY else self.paint_char

    def pointer_down(self, row: int, col: int, button: Button = Button.PRIMARY) -> None:
        """Start a stroke and paint its first cell."""
        if self.draw.active:
            self.end_stroke()
        self.draw = DrawState(active=True, button=button, last_cell=CellPosition(row, col))
        self.grid = set_cell(self.grid, row, col, self._stroke_char())
        logger.debug("Stroke started at [%d, %d] with %s button", row, col, button.value)

    def pointer_enter(self, row: int, col: int) -> None:
        """Extend the active stroke to (row, col) along a rasterized line."""
        last = self.draw.last_cell
        if not self.draw.active or last is None:
            return
        self.grid = rasterize_line(self.grid, last.row, last.col, row, col, self._stroke_char())
        self.draw.last_cell = CellPosition(row, col)

    def touch_move(self, x: float, y: float, resolve_cell: CellResolver) -> None:
        """Extend the active stroke to whatever cell the host finds at (x, y)."""
        if not self.draw.active:
            return
        cell = resolve_cell(x, y)
        if cell is not None:
            self.pointer_enter(cell.row, cell.col)

    def end_stroke(self) -> bool:
        """
        Finish the active stroke, committing its result.

        Safe to call at any time; does nothing when no stroke is active.

        Returns:
            True if a new history entry was recorded
        """
        if not self.draw.active:
            return False
        self.draw = DrawState()
        recorded = self.history.push(self.snapshot)
        if recorded:
            logger.info("Stroke committed (history %d/%d)", self.history.cursor + 1, len(self.history))
        return recorded

    pointer_up = end_stroke

    # =========================================================================
    # Actions
    # =========================================================================

    def _commit(self, action: str, snapshot: Snapshot) -> Snapshot:
        self.grid = snapshot.grid
        self.height = snapshot.height
        self.width = snapshot.width
        if self.history.push(snapshot):
            logger.info("%s -> %dx%d", action, snapshot.height, snapshot.width)
        return snapshot

    def _fail(self, action: str, err: GridError) -> EditFailure:
        logger.warning("%s rejected: %s", action, err)
        return EditFailure(action=action, reason=str(err))

    def resize(self, height: int | str, width: int | str) -> EditResult:
        """Resize to height x width, keeping overlapping cells."""
        self.end_stroke()
        try:
            new_height = parse_dimension(height, "height")
            new_width = parse_dimension(width, "width")
        except GridError as err:
            return self._fail("resize", err)
        grid = resize_preserving(self.grid, new_height, new_width)
        return self._commit("resize", Snapshot(grid=grid, height=new_height, width=new_width))

    def clear(self) -> EditResult:
        """Reset every cell to the fill character."""
        self.end_stroke()
        grid = create_grid(self.height, self.width)
        return self._commit("clear", Snapshot(grid=grid, height=self.height, width=self.width))

    def rotate(self) -> EditResult:
        """Rotate the grid 90° clockwise, swapping height and width."""
        self.end_stroke()
        return self._commit("rotate", rotate_clockwise(self.grid))

    def load_text(self, text: str) -> EditResult:
        """Replace the grid with one parsed from judge text."""
        self.end_stroke()
        try:
            snapshot = from_judge_text(text)
        except GridError as err:
            return self._fail("load", err)
        return self._commit("load", snapshot)

    def _restore(self, snapshot: Snapshot) -> Snapshot:
        self.grid = snapshot.grid
        self.height = snapshot.height
        self.width = snapshot.width
        return snapshot

    def undo(self) -> Snapshot:
        """Step back in history; a no-op at the oldest entry."""
        self.end_stroke()
        return self._restore(self.history.undo())

    def redo(self) -> Snapshot:
        """Step forward in history; a no-op at the newest entry."""
        self.end_stroke()
        return self._restore(self.history.redo())

    def set_paint_char(self, char: str) -> bool:
        """Select the paint character; only single printable characters are accepted."""
        if len(char) != 1 or not char.isprintable():
            return False
        self.paint_char = char
        return True

    def export_text(self) -> str:
        """Current grid in judge text format."""
        return to_judge_text(self.height, self.width, self.grid)

    def share_query(self) -> str:
        """Current grid as an h/w/data share link query."""
        return to_share_query(self.height, self.width, self.grid)

    # =========================================================================
    # Keyboard
    # =========================================================================

    def handle_key(self, key: str, ctrl: bool = False, meta: bool = False) -> KeyAction | None:
        """
        Dispatch a key press.

        Ctrl (or Cmd) + Z undoes, + Y redoes, + C asks the host to copy
        export_text(). A single printable key without a modifier selects the
        paint character.

        Returns:
            The action taken, or None if the key was ignored
        """
        if ctrl or meta:
            chord = key.lower()
            if chord == "z":
                self.undo()
                return KeyAction.UNDO
            if chord == "y":
                self.redo()
                return KeyAction.REDO
            if chord == "c":
                return KeyAction.COPY
            return None
        if self.set_paint_char(key):
            return KeyAction.PAINT_CHAR
        return None
