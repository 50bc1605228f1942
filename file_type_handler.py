import json
import os
import sys

import pandas as pd


class FileTypeHandler:
    SUPPORTED = {".csv", ".json"}

    def __init__(self, path: str):
        self.path = path
        _, ext = os.path.splitext(path)
        self.ext = ext.lower()

        if self.ext not in self.SUPPORTED:
            print("Unsupported file type (use .csv or .json)")
            sys.exit(1)

    def load(self) -> pd.DataFrame | None:
        """Row data as a string-valued frame, or None when the file is missing or 0 bytes."""
        if not os.path.exists(self.path) or os.path.getsize(self.path) == 0:
            return None

        if self.ext == ".csv":
            try:
                df = pd.read_csv(self.path, dtype=str, keep_default_na=False)
            except pd.errors.EmptyDataError:
                # blank lines only: an empty table, not a missing one
                return pd.DataFrame()
        else:
            with open(self.path, "r", encoding="utf-8") as f:
                records = json.load(f)
            if not isinstance(records, list):
                raise ValueError("JSON data must be a list of records")
            if not all(isinstance(rec, dict) for rec in records):
                raise ValueError("JSON records must be objects")
            # records without keys still count as rows
            df = pd.DataFrame(
                [
                    {str(k): (None if v is None else str(v)) for k, v in rec.items()}
                    for rec in records
                ],
                index=range(len(records)),
            )

        df.columns = [str(c) for c in df.columns]
        return df

    def save(self, records: list[dict], column_ids: list[str]) -> None:
        df = pd.DataFrame.from_records(records, columns=column_ids)
        if self.ext == ".csv":
            df.to_csv(self.path, index=False)
        else:
            df.to_json(self.path, orient="records", indent=2)
