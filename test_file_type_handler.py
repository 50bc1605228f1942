import json

import pytest

from app_state import AppState
from default_grid_initializer import DefaultGridInitializer
from file_type_handler import FileTypeHandler


def test_unsupported_extension_exits(tmp_path):
    with pytest.raises(SystemExit):
        FileTypeHandler(str(tmp_path / "data.parquet"))


def test_missing_or_empty_file_loads_nothing(tmp_path):
    assert FileTypeHandler(str(tmp_path / "missing.csv")).load() is None
    empty = tmp_path / "empty.json"
    empty.write_text("")
    assert FileTypeHandler(str(empty)).load() is None


def test_csv_values_load_as_strings(tmp_path):
    path = tmp_path / "people.csv"
    path.write_text("name,role,age\nDana,,007\nEli,Ops,41\n")

    df = FileTypeHandler(str(path)).load()

    assert list(df.columns) == ["name", "role", "age"]
    assert df.loc[0, "role"] == ""
    assert df.loc[0, "age"] == "007"


def test_json_records_with_missing_keys(tmp_path):
    path = tmp_path / "people.json"
    path.write_text(json.dumps([{"name": "Dana", "role": "Dev"}, {"name": "Eli", "age": 41}]))

    df = FileTypeHandler(str(path)).load()
    init = DefaultGridInitializer()
    state = AppState(df, init.create_columns(list(df.columns)))

    assert state.get_cell(0, "role") == "Dev"
    assert state.get_cell(1, "role") == ""
    assert state.get_cell(1, "age") == "41"


@pytest.mark.parametrize("suffix", [".csv", ".json"])
def test_save_writes_edited_rows(tmp_path, suffix):
    path = tmp_path / f"out{suffix}"
    init = DefaultGridInitializer()
    state = AppState(init.create_rows(), init.create_columns())
    state.set_cell(1, "role", "Lead Developer")

    handler = FileTypeHandler(str(path))
    handler.save(state.records(), state.schema.ids)
    df = handler.load()

    assert list(df.columns) == ["name", "role", "status", "email"]
    assert df.loc[1, "role"] == "Lead Developer"
    assert df.loc[0, "name"] == "Alice Johnson"


def test_json_non_object_records_are_rejected(tmp_path):
    path = tmp_path / "people.json"
    path.write_text("[{}, {}, 7]")
    with pytest.raises(ValueError, match="JSON records must be objects"):
        FileTypeHandler(str(path)).load()


def test_json_keyless_records_load_as_rows_without_columns(tmp_path):
    path = tmp_path / "people.json"
    path.write_text("[{}, {}]")

    df = FileTypeHandler(str(path)).load()

    assert df is not None
    assert df.shape == (2, 0)


def test_blank_csv_loads_as_empty_table(tmp_path):
    path = tmp_path / "blank.csv"
    path.write_text("\n")

    df = FileTypeHandler(str(path)).load()

    assert df is not None
    assert df.empty
