import curses


class ColumnPanel:
    """Overlay listing every column with a visibility checkbox and its width."""

    def __init__(self, layout, state, resizer, set_status_cb):
        self.layout = layout
        self.state = state
        self.resizer = resizer
        self._set_status = set_status_cb
        self.visible = False
        self.cursor = 0
        self.scroll = 0
        self.win = None

    def open(self):
        self.visible = True
        self.cursor = min(self.cursor, max(0, len(self.state.columns) - 1))
        self.scroll = 0
        self.win = None

    def close(self):
        self.visible = False
        self.win = None

    def selected_column(self):
        cols = self.state.columns
        if not cols:
            return None
        return cols[min(self.cursor, len(cols) - 1)]

    def lines(self):
        out = []
        for col in self.state.columns:
            mark = "x" if col.visible else " "
            lock = "" if col.resizable else " (fixed)"
            out.append(f"[{mark}] {col.id}  w={col.width}{lock}")
        return out

    def handle_key(self, ch):
        if not self.visible or ch == -1:
            return

        if ch in (27, ord("q"), ord("c")):
            self.close()
            return

        n = len(self.state.columns)
        if n == 0:
            return

        if ch in (ord("j"), curses.KEY_DOWN):
            self.cursor = min(n - 1, self.cursor + 1)
            return
        if ch in (ord("k"), curses.KEY_UP):
            self.cursor = max(0, self.cursor - 1)
            return
        if ch == curses.KEY_HOME:
            self.cursor = 0
            return
        if ch == curses.KEY_END:
            self.cursor = n - 1
            return

        col = self.selected_column()
        if ch in (ord(" "), 10, 13, curses.KEY_ENTER):
            self.state.toggle_column_visible(col.id)
            self._set_status(f"{col.id} {'shown' if col.visible else 'hidden'}", 2)
            return
        if ch in (ord("<"), ord(">")):
            delta = -1 if ch == ord("<") else 1
            if not self.resizer.nudge(col.id, delta):
                self._set_status(f"{col.id} is not resizable", 2)
            return

    def draw(self):
        if not self.visible:
            return
        if self.win is None:
            overlay_h = max(3, min(len(self.state.columns) + 3, self.layout.table_h))
            overlay_w = max(20, min(60, self.layout.W))
            self.win = curses.newwin(overlay_h, overlay_w, 1, max(0, (self.layout.W - overlay_w) // 2))
            self.win.leaveok(True)

        win = self.win
        win.erase()
        h, w = win.getmaxyx()
        win.box()
        try:
            win.addnstr(0, 2, " Columns ", w - 4, curses.A_BOLD)
        except curses.error:
            pass

        max_visible = max(0, h - 2)
        if self.cursor < self.scroll:
            self.scroll = self.cursor
        elif self.cursor >= self.scroll + max_visible:
            self.scroll = self.cursor - max_visible + 1

        for i, line in enumerate(self.lines()[self.scroll : self.scroll + max_visible]):
            attr = curses.A_REVERSE if self.scroll + i == self.cursor else 0
            try:
                win.addnstr(1 + i, 1, line.ljust(w - 2), w - 2, attr)
            except curses.error:
                pass

        win.refresh()
