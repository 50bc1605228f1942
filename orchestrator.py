import curses
import logging
import sys
import time

from column_panel import ColumnPanel
from column_resizer import ColumnResizer
from focus_controller import FocusController
from grid_pane import GridPane
from screen_layout import ScreenLayout
from status_bar import render_status
from view_projection import ViewProjection


logger = logging.getLogger(__name__)

# xterm button-event mouse tracking, so drags report motion
_MOUSE_TRACKING_ON = "\033[?1002h"
_MOUSE_TRACKING_OFF = "\033[?1002l"


class Orchestrator:
    def __init__(self, stdscr, app_state, config):
        self.stdscr = stdscr
        curses.curs_set(0)
        curses.raw()
        self.stdscr.keypad(True)
        self.stdscr.nodelay(False)
        self.stdscr.timeout(100)
        try:
            curses.mousemask(curses.ALL_MOUSE_EVENTS | curses.REPORT_MOUSE_POSITION)
            curses.mouseinterval(0)
        except curses.error:
            pass

        self.state = app_state
        self.config = config
        self.layout = ScreenLayout(stdscr)

        self.view = ViewProjection(
            app_state,
            min_col_width=config["MIN_COL_WIDTH"],
            max_col_width=config["MAX_COL_WIDTH"],
        )
        self.grid = GridPane(self.view)
        self.resizer = ColumnResizer(self.view)

        # ---- status ----
        self.status_msg = None
        self.status_msg_until = 0

        # ---- focus & edit ----
        self.controller = FocusController(
            self.state,
            self.view,
            self._set_status,
            on_focus_change=self.grid.focus_cell,
            prefill=config.get("EDIT_PREFILL", False),
        )

        # ---- column panel ----
        self.panel = ColumnPanel(self.layout, self.state, self.resizer, self._set_status)

    # ---------------- helpers ----------------

    def _set_status(self, msg, seconds=3):
        self.status_msg = msg
        self.status_msg_until = time.time() + seconds

    def _status_context(self):
        mode = self.controller.mode
        if self.panel.visible:
            mode = "columns"
        return {
            "status_msg": self.status_msg,
            "status_until": self.status_msg_until,
            "mode": mode,
            "file_path": self.state.file_path,
            "row_count": self.state.row_count,
            "column_count": len(self.state.columns),
            "visible_count": self.view.visible_count,
            "focus": self.controller.focus,
            "focus_column": self.controller.focused_column_id(),
        }

    def _width_default(self, column_id):
        return self.config["COLUMN_WIDTHS"].get(column_id, self.config["DEFAULT_COL_WIDTH"])

    # ---------------- UI ----------------

    def redraw(self):
        editing = self.controller.editing

        sw = self.layout.status_win
        sw.erase()
        _, w = sw.getmaxyx()
        if not editing:
            sw.leaveok(True)
            try:
                sw.addnstr(0, 0, render_status(self._status_context(), w), w - 1)
            except curses.error:
                pass
            sw.refresh()

        # the last window refreshed keeps the terminal cursor
        self.grid.draw(self.layout.table_win)

        # the target is only known once this draw has scrolled and laid out
        try:
            curses.curs_set(1 if editing or self.grid.focus_target is not None else 0)
        except curses.error:
            pass

        if editing:
            sw.leaveok(False)
            self.controller.prompt.draw(sw)

        if self.panel.visible:
            self.panel.draw()

    def _rebuild_layout(self):
        curses.update_lines_cols()
        self.stdscr.clear()
        self.stdscr.refresh()
        self.layout = ScreenLayout(self.stdscr)
        self.panel.layout = self.layout
        self.panel.win = None
        self.grid.focus_cell(self.controller.focus)

    # ---------------- mouse ----------------

    def _handle_mouse(self):
        try:
            _, mx, my, _, bstate = curses.getmouse()
        except curses.error:
            return

        # the edit prompt and the column panel are modal
        if self.controller.editing or self.panel.visible:
            return

        if self.resizer.active:
            if bstate & curses.BUTTON1_RELEASED:
                self.resizer.end(mx)
            else:
                self.resizer.drag(mx)
            return

        if bstate & curses.BUTTON1_PRESSED:
            column_id = self.grid.header_border_at(my, mx)
            if column_id is not None:
                self.resizer.begin(column_id, mx)
                return

        if bstate & (curses.BUTTON1_PRESSED | curses.BUTTON1_CLICKED):
            coord = self.grid.hit_test(my, mx)
            if coord is not None:
                self.controller.click(*coord)

    # ---------------- keys ----------------

    def _resize_focused(self, delta=None):
        column_id = self.controller.focused_column_id()
        if column_id is None:
            self._set_status("No cell focused", 2)
            return
        if delta is None:
            applied = self.view.set_column_width(column_id, self._width_default(column_id))
        else:
            applied = self.resizer.nudge(column_id, delta)
        if not applied:
            self._set_status(f"{column_id} is not resizable", 2)

    def handle_key(self, ch):
        if self.controller.editing:
            self.controller.handle_key(ch)
            return

        if self.panel.visible:
            self.panel.handle_key(ch)
            return

        if ch == 27 and self.resizer.active:
            self.resizer.cancel()
            return

        if ch == 19:  # Ctrl+S
            self._save()
        elif ch == ord("c"):
            self.panel.open()
        elif ch == ord("<"):
            self._resize_focused(-1)
        elif ch == ord(">"):
            self._resize_focused(1)
        elif ch == ord("="):
            self._resize_focused()
        else:
            self.controller.handle_key(ch)

    # ---------------- saving ----------------

    def _save(self):
        handler = getattr(self.state, "file_handler", None)
        if handler is None:
            self._set_status("No file to save to (start with a .csv or .json path)", 4)
            return False
        try:
            handler.save(self.state.records(), self.state.schema.ids)
        except (OSError, ValueError) as e:
            logger.error("Save to %s failed: %s", self.state.file_path, e)
            self._set_status(f"Save failed: {e}"[: self.layout.W - 2], 4)
            return False
        logger.info("Saved %d rows to %s", self.state.row_count, self.state.file_path)
        self._set_status(f"Saved {self.state.file_path}", 3)
        return True

    # ---------------- main loop ----------------

    def run(self):
        self.stdscr.clear()
        self.stdscr.refresh()
        sys.stdout.write(_MOUSE_TRACKING_ON)
        sys.stdout.flush()
        try:
            self._loop()
        finally:
            sys.stdout.write(_MOUSE_TRACKING_OFF)
            sys.stdout.flush()

    def _read_key(self):
        """Next key: an int for ASCII and curses keys, a str for wider characters, -1 on timeout."""
        try:
            ch = self.stdscr.get_wch()
        except curses.error:
            return -1
        if isinstance(ch, str) and ord(ch) < 128:
            return ord(ch)
        return ch

    def _loop(self):
        self.redraw()
        while True:
            ch = self._read_key()

            if ch in (3, 24):  # Ctrl+C / Ctrl+X
                break

            if ch == -1:
                self.redraw()
                continue

            if ch == curses.KEY_RESIZE:
                self._rebuild_layout()
            elif ch == curses.KEY_MOUSE:
                self._handle_mouse()
            else:
                self.handle_key(ch)

            self.redraw()
