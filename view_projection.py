import numpy as np

from grid_errors import GridIndexError


class ViewProjection:
    """Visible-column view over the store. Nothing here is cached."""

    def __init__(self, state, min_col_width: int = 4, max_col_width: int = 60):
        self.state = state
        self.min_col_width = min_col_width
        self.max_col_width = max_col_width

    # ---------- columns ----------
    def visible_columns(self):
        cols = self.state.schema.columns
        if not cols:
            return []
        idx = np.flatnonzero(self.state.schema.visible_mask())
        return [cols[i] for i in idx]

    def visible_column_ids(self) -> list[str]:
        return [c.id for c in self.visible_columns()]

    @property
    def visible_count(self) -> int:
        return int(self.state.schema.visible_mask().sum()) if len(self.state.schema) else 0

    @property
    def row_count(self) -> int:
        return self.state.row_count

    def column_id_at(self, visible_col: int) -> str:
        cols = self.visible_columns()
        if visible_col < 0 or visible_col >= len(cols):
            raise GridIndexError("visible column", visible_col, len(cols))
        return cols[visible_col].id

    def visible_index_of(self, column_id):
        ids = self.visible_column_ids()
        return ids.index(column_id) if column_id in ids else None

    # ---------- cells ----------
    def cell_at(self, row: int, visible_col: int):
        if row < 0 or row >= self.row_count:
            raise GridIndexError("row", row, self.row_count)
        column_id = self.column_id_at(visible_col)
        return column_id, self.state.get_cell(row, column_id)

    def rows(self, start: int = 0, end=None):
        """Rendered matrix of display values for rows[start:end] over visible columns."""
        ids = self.visible_column_ids()
        end = self.row_count if end is None else min(end, self.row_count)
        return [[self.state.get_cell(r, cid) for cid in ids] for r in range(max(0, start), end)]

    # ---------- widths ----------
    def clamp_width(self, width) -> int:
        return max(self.min_col_width, min(self.max_col_width, int(width)))

    def set_column_width(self, column_id, width) -> bool:
        col = self.state.column(column_id)
        if col is None or not col.resizable:
            return False
        new_width = self.clamp_width(width)
        if new_width == col.width:
            return True
        col.width = new_width
        self.state.notify("width", column_id=column_id, width=new_width)
        return True
