class GridError(Exception):
    """Base class for grid lookup and write failures."""


class GridIndexError(GridError, IndexError):
    def __init__(self, kind: str, index: int, size: int):
        self.kind = kind
        self.index = index
        self.size = size
        super().__init__(f"{kind} index {index} out of range (size {size})")


class UnknownColumnError(GridError, KeyError):
    def __init__(self, column_id):
        self.column_id = column_id
        super().__init__(column_id)

    def __str__(self):
        return f"Unknown column '{self.column_id}'"
