import logging
import operator
from typing import Callable

import pandas as pd

from column_schema import ColumnSchema
from grid_errors import GridIndexError, UnknownColumnError


logger = logging.getLogger(__name__)


class AppState:
    """Column schema plus the row store. Mutations notify subscribers."""

    def __init__(self, rows, columns, file_path=None, file_handler=None):
        self.file_path = file_path
        self.file_handler = file_handler

        self.schema = columns if isinstance(columns, ColumnSchema) else ColumnSchema(columns)
        self._observers: list[Callable[[str, dict], None]] = []
        self._df = self._build_frame(rows)

    def _build_frame(self, rows):
        if isinstance(rows, pd.DataFrame):
            df = rows.copy()
        else:
            records = [dict(r) for r in (rows or [])]
            df = pd.DataFrame.from_records(records) if records else pd.DataFrame()
        df = df.reset_index(drop=True).astype(object)
        # values are display strings; absent ones stay NA and read back as ""
        return df.map(lambda v: v if pd.isna(v) else str(v)) if len(df.columns) else df

    # ---------- observers ----------
    def subscribe(self, callback: Callable[[str, dict], None]):
        self._observers.append(callback)

        def unsubscribe():
            if callback in self._observers:
                self._observers.remove(callback)

        return unsubscribe

    def notify(self, event: str, **payload):
        for cb in list(self._observers):
            cb(event, payload)

    # ---------- schema ----------
    @property
    def columns(self):
        return self.schema.columns

    def column(self, column_id):
        return self.schema.get(column_id)

    def set_column_visible(self, column_id, visible: bool) -> bool:
        col = self.schema.get(column_id)
        if col is None:
            logger.debug("Visibility change for unknown column %r ignored", column_id)
            return False
        visible = bool(visible)
        if col.visible == visible:
            return True
        col.visible = visible
        self.notify("visibility", column_id=column_id, visible=visible)
        return True

    def toggle_column_visible(self, column_id) -> bool:
        col = self.schema.get(column_id)
        if col is None:
            return False
        return self.set_column_visible(column_id, not col.visible)

    # ---------- rows ----------
    @property
    def df(self):
        return self._df

    @property
    def row_count(self) -> int:
        return len(self._df)

    def _check_row(self, row) -> int:
        if isinstance(row, bool):
            raise GridIndexError("row", row, len(self._df))
        try:
            idx = operator.index(row)
        except TypeError:
            raise GridIndexError("row", row, len(self._df)) from None
        if idx < 0 or idx >= len(self._df):
            raise GridIndexError("row", row, len(self._df))
        return idx

    def get_cell(self, row: int, column_id) -> str:
        row = self._check_row(row)
        if column_id not in self._df.columns:
            return ""
        val = self._df.at[row, column_id]
        return "" if pd.isna(val) else str(val)

    def set_cell(self, row: int, column_id, value) -> None:
        row = self._check_row(row)
        if column_id not in self.schema:
            raise UnknownColumnError(column_id)
        old = self.get_cell(row, column_id)
        if column_id not in self._df.columns:
            self._df[column_id] = pd.Series([pd.NA] * len(self._df), dtype=object)
        new = "" if value is None else str(value)
        self._df.at[row, column_id] = new
        self.notify("cell", row=row, column_id=column_id, old=old, new=new)

    def load_rows(self, rows) -> None:
        self._df = self._build_frame(rows)
        self.notify("rows", row_count=len(self._df))

    def records(self) -> list[dict]:
        out = []
        for row in range(len(self._df)):
            out.append({cid: self.get_cell(row, cid) for cid in self.schema.ids})
        return out
