from dataclasses import dataclass
from typing import Iterable, Optional

import numpy as np


@dataclass
class Column:
    id: str
    label: str = ""
    visible: bool = True
    resizable: bool = True
    width: int = 20

    def __post_init__(self):
        if not self.label:
            self.label = self.id


class ColumnSchema:
    """Ordered column definitions. Order is fixed once built."""

    def __init__(self, columns: Iterable[Column]):
        self.columns: list[Column] = []
        self._by_id: dict[str, Column] = {}
        for col in columns:
            if col.id in self._by_id:
                raise ValueError(f"Duplicate column id '{col.id}'")
            self.columns.append(col)
            self._by_id[col.id] = col

    def __len__(self):
        return len(self.columns)

    def __iter__(self):
        return iter(self.columns)

    def __contains__(self, column_id):
        return column_id in self._by_id

    @property
    def ids(self) -> list[str]:
        return [c.id for c in self.columns]

    def get(self, column_id) -> Optional[Column]:
        return self._by_id.get(column_id)

    def visible_mask(self) -> np.ndarray:
        return np.fromiter((c.visible for c in self.columns), dtype=bool, count=len(self.columns))
