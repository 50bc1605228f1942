from column_schema import Column, ColumnSchema


DEFAULT_ROWS = [
    {
        "name": "Alice Johnson",
        "role": "Designer",
        "status": "Active",
        "email": "alice@gob.io",
    },
    {
        "name": "Bob Smith",
        "role": "Developer",
        "status": "Inactive",
        "email": "bob@gob.io",
    },
    {
        "name": "Charlie Brown",
        "role": "Product Manager",
        "status": "Active",
        "email": "charlie@gob.io",
    },
]

DEFAULT_COLUMNS = [("name", "Name"), ("role", "Role"), ("status", "Status"), ("email", "Email")]


class DefaultGridInitializer:
    def __init__(self, col_width: int = 20):
        self.col_width = col_width

    def create_columns(self, ids=None) -> ColumnSchema:
        if ids is None:
            pairs = DEFAULT_COLUMNS
        else:
            pairs = [(cid, cid.replace("_", " ").title()) for cid in ids]
        return ColumnSchema(
            Column(id=cid, label=label, width=self.col_width) for cid, label in pairs
        )

    def create_rows(self) -> list[dict]:
        return [dict(r) for r in DEFAULT_ROWS]
