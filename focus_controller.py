import curses
import logging
from dataclasses import dataclass
from typing import Callable, Optional

from cell_prompt import CellPrompt
from grid_errors import GridError, UnknownColumnError


logger = logging.getLogger(__name__)

UNFOCUSED = "unfocused"
FOCUSED = "focused"
EDITING = "editing"

MOVE_KEYS = {
    curses.KEY_DOWN: (1, 0),
    ord("j"): (1, 0),
    curses.KEY_UP: (-1, 0),
    ord("k"): (-1, 0),
    curses.KEY_RIGHT: (0, 1),
    ord("l"): (0, 1),
    curses.KEY_LEFT: (0, -1),
    ord("h"): (0, -1),
}
COMMIT_KEYS = (10, 13, curses.KEY_ENTER)
# keys that place focus on the first cell when nothing is focused yet
ENTRY_KEYS = (9, curses.KEY_HOME)


@dataclass
class EditSession:
    row: int
    col: int
    column_id: str
    prompt: CellPrompt

    @property
    def draft(self) -> str:
        return self.prompt.buffer


class FocusController:
    """Owns the focused cell and the modal edit of that cell.

    Modes are ``unfocused``, ``focused`` and ``editing``. Editing is entered on
    Enter and left through confirm or cancel; while it is open every key goes
    to the prompt. Moves clamp at the grid edges and never wrap.
    """

    def __init__(
        self,
        state,
        view,
        set_status_cb: Callable[[str, float], None],
        on_focus_change: Optional[Callable[[Optional[tuple]], None]] = None,
        prefill: bool = False,
        prompt: Optional[CellPrompt] = None,
    ):
        self.state = state
        self.view = view
        self._set_status = set_status_cb
        self.on_focus_change = on_focus_change
        self.prefill = prefill
        self.prompt = prompt if prompt is not None else CellPrompt()

        self.mode = UNFOCUSED
        self.row: Optional[int] = None
        self.col: Optional[int] = None
        self.edit: Optional[EditSession] = None

        self._unsubscribe = state.subscribe(self._on_store_event)

    # ---------- state ----------
    @property
    def focus(self):
        if self.mode == UNFOCUSED:
            return None
        return (self.row, self.col)

    @property
    def editing(self) -> bool:
        return self.mode == EDITING

    def focused_column_id(self):
        if self.mode == UNFOCUSED:
            return None
        try:
            return self.view.column_id_at(self.col)
        except GridError:
            return None

    def _commit_focus(self, row: int, col: int):
        changed = self.mode == UNFOCUSED or (row, col) != (self.row, self.col)
        self.row, self.col = row, col
        self.mode = FOCUSED
        # the coordinate is settled before the host moves its cursor
        if changed and self.on_focus_change is not None:
            self.on_focus_change((row, col))

    def _drop_focus(self):
        was_focused = self.mode != UNFOCUSED
        self.mode = UNFOCUSED
        self.row = None
        self.col = None
        if was_focused and self.on_focus_change is not None:
            self.on_focus_change(None)

    def _bounds(self):
        return self.view.row_count - 1, self.view.visible_count - 1

    def sync_bounds(self):
        """Clamp or drop the coordinate after rows or visible columns changed."""
        if self.mode != FOCUSED:
            return
        max_row, max_col = self._bounds()
        if max_row < 0 or max_col < 0:
            self._drop_focus()
            return
        row = min(max(self.row, 0), max_row)
        col = min(max(self.col, 0), max_col)
        if (row, col) != (self.row, self.col):
            self._commit_focus(row, col)

    def _on_store_event(self, event, payload):
        if event in ("visibility", "rows"):
            self.sync_bounds()

    # ---------- input ----------
    def click(self, row: int, col: int) -> bool:
        logger.info("Clicked cell: row %d, col %d", row, col)
        if self.mode == EDITING:
            return False
        max_row, max_col = self._bounds()
        if not (0 <= row <= max_row and 0 <= col <= max_col):
            return False
        self._commit_focus(row, col)
        return True

    def focus_first(self) -> bool:
        if self.mode != UNFOCUSED:
            return False
        max_row, max_col = self._bounds()
        if max_row < 0 or max_col < 0:
            return False
        self._commit_focus(0, 0)
        return True

    def move(self, d_row: int, d_col: int):
        if self.mode != FOCUSED:
            return
        max_row, max_col = self._bounds()
        if max_row < 0 or max_col < 0:
            self._drop_focus()
            return
        row = min(max(self.row + d_row, 0), max_row)
        col = min(max(self.col + d_col, 0), max_col)
        self._commit_focus(row, col)

    def handle_key(self, ch) -> bool:
        """Feed one key event. Returns True when the key was consumed."""
        if self.mode == EDITING:
            result = self.prompt.handle_key(ch)
            if result == "submit":
                self.confirm_edit()
            elif result == "cancel":
                self.cancel_edit()
            return True

        if self.mode == UNFOCUSED:
            if ch in ENTRY_KEYS:
                return self.focus_first()
            return False

        if ch in MOVE_KEYS:
            self.move(*MOVE_KEYS[ch])
            return True

        if ch in COMMIT_KEYS:
            self.begin_edit()
            return True

        return False

    # ---------- editing ----------
    def begin_edit(self) -> bool:
        if self.mode != FOCUSED:
            return False
        try:
            column_id, value = self.view.cell_at(self.row, self.col)
        except GridError:
            self.sync_bounds()
            return False
        self.edit = EditSession(self.row, self.col, column_id, self.prompt)
        self.mode = EDITING
        self.prompt.start(f"Edit {column_id} [row {self.row}]", value if self.prefill else "")
        return True

    def _close_edit(self):
        self.prompt.reset()
        self.edit = None
        self.mode = FOCUSED

    def confirm_edit(self, value: Optional[str] = None) -> bool:
        edit = self.edit
        if edit is None:
            return False
        draft = edit.draft if value is None else value
        self._close_edit()

        written = False
        try:
            if edit.column_id not in self.view.visible_column_ids():
                raise UnknownColumnError(edit.column_id)
            self.state.set_cell(edit.row, edit.column_id, draft)
            written = True
        except GridError as exc:
            logger.warning(
                "Discarded edit of row %s column %r: %s", edit.row, edit.column_id, exc
            )
            self._set_status(f"Edit discarded: {exc}", 4)
        else:
            logger.info("Cell row %d column %r set to %r", edit.row, edit.column_id, draft)
            self._set_status(f"Updated {edit.column_id} [row {edit.row}]", 2)

        self.sync_bounds()
        return written

    def cancel_edit(self):
        if self.edit is None:
            return
        self._close_edit()
        self._set_status("Edit canceled", 2)
        self.sync_bounds()

    def detach(self):
        self._unsubscribe()
