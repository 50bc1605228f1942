import curses
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class CellHandle:
    row: int
    col: int
    column_id: str
    y: int
    x: int
    width: int


@dataclass(frozen=True)
class HeaderHandle:
    col: int
    column_id: str
    x: int
    width: int

    @property
    def border_x(self) -> int:
        return self.x + self.width


class GridPane:
    PAIR_CELL_TEXT = 1
    PAIR_HEADER = 2
    PAIR_CELL_FOCUS = 3

    def __init__(self, view):
        self.view = view
        try:
            curses.start_color()
            curses.use_default_colors()
            curses.init_pair(self.PAIR_CELL_TEXT, curses.COLOR_WHITE, -1)
            curses.init_pair(self.PAIR_HEADER, curses.COLOR_CYAN, -1)
            curses.init_pair(self.PAIR_CELL_FOCUS, curses.COLOR_BLACK, curses.COLOR_BLUE)
        except curses.error:
            pass

        self.row_offset = 0
        self.col_offset = 0
        self.focus: Optional[tuple] = None
        self.focus_target: Optional[CellHandle] = None

        # rebuilt on every draw from the current projection
        self.cell_handles: dict[tuple, CellHandle] = {}
        self.header_handles: dict[str, HeaderHandle] = {}
        self._last_hw = (24, 120)

    @staticmethod
    def _attr(pair):
        try:
            return curses.color_pair(pair)
        except curses.error:
            return 0

    def _row_w(self, n_rows):
        return max(3, len(str(max(n_rows - 1, 0))) + 1)

    # ---------- hit testing ----------
    def hit_test(self, y, x):
        for coord, handle in self.cell_handles.items():
            if handle.y == y and handle.x <= x < handle.x + handle.width:
                return coord
        return None

    def header_border_at(self, y, x):
        """Column whose right border sits at (y, x) on the header line, if any."""
        if y != 0:
            return None
        for handle in self.header_handles.values():
            if x == handle.border_x or x == handle.border_x - 1:
                return handle.column_id
        return None

    # ---------- focus ----------
    def _fits(self, col_idx, width_avail):
        cols = self.view.visible_columns()
        used = 0
        for c in range(self.col_offset, col_idx + 1):
            used += cols[c].width + 1
        return used <= width_avail or col_idx == self.col_offset

    def focus_cell(self, coord):
        """Scroll so the cell is drawn next and target the cursor at its handle."""
        self.focus = coord
        if coord is None:
            self.focus_target = None
            return None

        r, c = coord
        h, w = self._last_hw
        body_h = max(1, h - 2)
        if r < self.row_offset:
            self.row_offset = r
        elif r >= self.row_offset + body_h:
            self.row_offset = r - body_h + 1

        avail_w = max(1, w - (self._row_w(self.view.row_count) + 1) - 1)
        if c < self.col_offset:
            self.col_offset = c
        else:
            while self.col_offset < c and not self._fits(c, avail_w):
                self.col_offset += 1

        self.focus_target = self.cell_handles.get(coord)
        return self.focus_target

    # ---------- rendering ----------
    def draw(self, win):
        win.erase()
        try:
            win.bkgd(" ", self._attr(self.PAIR_CELL_TEXT))
        except curses.error:
            pass
        h, w = win.getmaxyx()
        self._last_hw = (h, w)

        cols = self.view.visible_columns()
        n_rows = self.view.row_count

        self.row_offset = max(0, min(self.row_offset, max(0, n_rows - 1)))
        self.col_offset = max(0, min(self.col_offset, max(0, len(cols) - 1)))

        row_w = self._row_w(n_rows)
        self.cell_handles = {}
        self.header_handles = {}

        # header
        shown = []
        x = row_w + 1
        for c in range(self.col_offset, len(cols)):
            avail = w - x - 1
            if avail <= 0:
                break
            col = cols[c]
            eff_cw = min(col.width, avail)
            shown.append((c, col, x, eff_cw))
            label = str(col.label)[:eff_cw].ljust(eff_cw)
            try:
                win.addnstr(0, x, label, eff_cw, curses.A_BOLD | self._attr(self.PAIR_HEADER))
            except curses.error:
                pass
            self.header_handles[col.id] = HeaderHandle(c, col.id, x, eff_cw)
            x += eff_cw + 1
            if eff_cw < col.width:
                break

        # rows
        body_h = max(0, h - 2)
        y = 1
        for r in range(self.row_offset, min(n_rows, self.row_offset + body_h)):
            try:
                win.addnstr(y, 0, str(r).rjust(row_w), row_w)
            except curses.error:
                pass
            for c, col, cx, eff_cw in shown:
                text = self.view.state.get_cell(r, col.id).replace("\n", " ")
                attr = self._attr(self.PAIR_CELL_TEXT)
                if self.focus == (r, c):
                    attr = (self._attr(self.PAIR_CELL_FOCUS) or curses.A_REVERSE) | curses.A_BOLD
                try:
                    win.addnstr(y, cx, text[:eff_cw].ljust(eff_cw), eff_cw, attr)
                except curses.error:
                    pass
                self.cell_handles[(r, c)] = CellHandle(r, c, col.id, y, cx, eff_cw)
            y += 1

        # footer line
        try:
            win.hline(h - 1, 0, " ", w)
        except curses.error:
            pass

        self.focus_target = self.cell_handles.get(self.focus) if self.focus else None
        if self.focus_target is not None:
            try:
                win.move(self.focus_target.y, self.focus_target.x)
            except curses.error:
                pass

        win.refresh()
