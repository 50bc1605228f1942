from typing import Optional


class ColumnResizer:
    """Drag state for resizing a column from its header border.

    Widths are applied on every drag step, so a redraw mid-drag already shows
    the new size. Only width metadata changes; data and focus are untouched.
    """

    def __init__(self, view):
        self.view = view
        self.column_id: Optional[str] = None
        self.start_x = 0
        self.start_width = 0

    @property
    def active(self) -> bool:
        return self.column_id is not None

    def begin(self, column_id: str, x: int) -> bool:
        col = self.view.state.column(column_id)
        if col is None or not col.resizable:
            return False
        self.column_id = column_id
        self.start_x = x
        self.start_width = col.width
        return True

    def drag(self, x: int) -> bool:
        if not self.active:
            return False
        return self.view.set_column_width(self.column_id, self.start_width + (x - self.start_x))

    def end(self, x: int) -> bool:
        if not self.active:
            return False
        applied = self.drag(x)
        self.cancel()
        return applied

    def cancel(self):
        self.column_id = None
        self.start_x = 0
        self.start_width = 0

    def nudge(self, column_id: str, delta: int) -> bool:
        col = self.view.state.column(column_id)
        if col is None:
            return False
        return self.view.set_column_width(column_id, col.width + delta)
