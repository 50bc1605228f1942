import curses
from typing import Optional


class CellPrompt:
    """Single-line text entry drawn on the status line while a cell is edited."""

    def __init__(self):
        self.active = False
        self.label = ""
        self.buffer = ""
        self.cursor = 0
        self.hscroll = 0

    def start(self, label: str, initial: Optional[str] = None):
        self.active = True
        self.label = label
        self.buffer = initial or ""
        self.cursor = len(self.buffer)
        self.hscroll = 0

    def reset(self):
        self.active = False
        self.label = ""
        self.buffer = ""
        self.cursor = 0
        self.hscroll = 0

    def handle_key(self, ch) -> Optional[str]:
        """Returns "submit" or "cancel" when the prompt is resolved, else None."""
        if not self.active:
            return None

        # wide characters arrive as str from get_wch
        if isinstance(ch, str):
            if ch.isprintable():
                self._insert(ch)
            return None

        if ch in (10, 13, curses.KEY_ENTER):
            return "submit"

        if ch == 27:  # Esc
            return "cancel"

        if ch in (curses.KEY_BACKSPACE, 127, 8):
            if self.cursor > 0:
                self.buffer = self.buffer[: self.cursor - 1] + self.buffer[self.cursor :]
                self.cursor -= 1
            return None

        if ch == curses.KEY_DC:
            self.buffer = self.buffer[: self.cursor] + self.buffer[self.cursor + 1 :]
            return None

        if ch == 21:  # Ctrl+U
            self.buffer = self.buffer[self.cursor :]
            self.cursor = 0
            return None

        if ch == curses.KEY_LEFT:
            self.cursor = max(0, self.cursor - 1)
            return None

        if ch == curses.KEY_RIGHT:
            self.cursor = min(len(self.buffer), self.cursor + 1)
            return None

        if ch in (curses.KEY_HOME, 1):  # Ctrl+A
            self.cursor = 0
            return None

        if ch in (curses.KEY_END, 5):  # Ctrl+E
            self.cursor = len(self.buffer)
            return None

        if 32 <= ch <= 126:
            self._insert(chr(ch))
        return None

    def _insert(self, text):
        self.buffer = self.buffer[: self.cursor] + text + self.buffer[self.cursor :]
        self.cursor += len(text)

    def draw(self, win):
        if not self.active:
            return

        prompt = f"{self.label}: "
        h, w = win.getmaxyx()
        text_w = max(1, w - len(prompt) - 1)

        if self.cursor < self.hscroll:
            self.hscroll = self.cursor
        elif self.cursor > self.hscroll + text_w:
            self.hscroll = self.cursor - text_w

        start = self.hscroll
        end = start + text_w
        visible = self.buffer[start:end]

        try:
            win.addnstr(0, 0, prompt, len(prompt))
            win.addnstr(0, len(prompt), visible, text_w)
            win.move(0, len(prompt) + (self.cursor - self.hscroll))
        except curses.error:
            pass
        win.refresh()
