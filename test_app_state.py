import unittest

import numpy as np

from app_state import AppState
from default_grid_initializer import DefaultGridInitializer
from grid_errors import GridIndexError, UnknownColumnError


def _state(rows=None):
    init = DefaultGridInitializer()
    return AppState(init.create_rows() if rows is None else rows, init.create_columns())


class CellAccessTests(unittest.TestCase):
    def test_get_cell_reads_default_rows(self):
        state = _state()
        self.assertEqual(state.row_count, 3)
        self.assertEqual(state.get_cell(1, "role"), "Developer")
        self.assertEqual(state.get_cell(2, "email"), "charlie@gob.io")

    def test_get_cell_missing_value_reads_empty(self):
        state = _state([{"name": "Dana", "role": "Ops"}, {"name": "Eli"}])
        self.assertEqual(state.get_cell(1, "role"), "")
        self.assertEqual(state.get_cell(0, "email"), "")
        self.assertEqual(state.get_cell(0, "not_a_column"), "")

    def test_get_cell_out_of_range_raises(self):
        state = _state()
        for row in (3, -1, 100):
            with self.assertRaises(GridIndexError):
                state.get_cell(row, "name")
        with self.assertRaises(IndexError):
            state.get_cell(3, "name")

    def test_set_cell_replaces_only_target(self):
        state = _state()
        before = state.records()
        state.set_cell(1, "role", "Lead Developer")
        after = state.records()

        self.assertEqual(state.get_cell(1, "role"), "Lead Developer")
        before[1]["role"] = "Lead Developer"
        self.assertEqual(after, before)

    def test_set_cell_accepts_empty_string(self):
        state = _state()
        state.set_cell(0, "name", "")
        self.assertEqual(state.get_cell(0, "name"), "")

    def test_set_cell_fills_schema_column_absent_from_rows(self):
        state = _state([{"name": "Dana"}])
        state.set_cell(0, "email", "dana@gob.io")
        self.assertEqual(state.get_cell(0, "email"), "dana@gob.io")
        self.assertEqual(state.get_cell(0, "name"), "Dana")

    def test_set_cell_unknown_column_raises(self):
        state = _state()
        with self.assertRaises(UnknownColumnError):
            state.set_cell(0, "salary", "1")
        with self.assertRaises(KeyError):
            state.set_cell(0, "salary", "1")
        self.assertNotIn("salary", state.df.columns)

    def test_set_cell_bad_row_raises(self):
        state = _state()
        with self.assertRaises(GridIndexError):
            state.set_cell(3, "name", "x")

    def test_numpy_row_index_is_accepted(self):
        state = _state()
        row = np.int64(1)
        self.assertEqual(state.get_cell(row, "name"), "Bob Smith")
        state.set_cell(row, "role", "Lead")
        self.assertEqual(state.get_cell(1, "role"), "Lead")

    def test_bool_and_text_rows_are_rejected(self):
        state = _state()
        for row in (True, False, "1", 1.0):
            with self.assertRaises(GridIndexError):
                state.get_cell(row, "name")
        with self.assertRaises(GridIndexError):
            state.set_cell(True, "name", "x")

    def test_set_cell_notifies_observers(self):
        state = _state()
        events = []
        state.subscribe(lambda event, payload: events.append((event, payload)))

        state.set_cell(0, "status", "Away")

        self.assertEqual(
            events,
            [("cell", {"row": 0, "column_id": "status", "old": "Active", "new": "Away"})],
        )

    def test_unsubscribe_stops_notifications(self):
        state = _state()
        events = []
        unsubscribe = state.subscribe(lambda event, payload: events.append(event))
        unsubscribe()
        state.set_cell(0, "status", "Away")
        self.assertEqual(events, [])


class ColumnVisibilityTests(unittest.TestCase):
    def test_set_column_visible_is_idempotent(self):
        state = _state()
        events = []
        state.subscribe(lambda event, payload: events.append(payload))

        self.assertTrue(state.set_column_visible("role", False))
        self.assertTrue(state.set_column_visible("role", False))

        self.assertFalse(state.column("role").visible)
        self.assertEqual(events, [{"column_id": "role", "visible": False}])

    def test_visibility_never_reorders(self):
        state = _state()
        state.set_column_visible("name", False)
        state.set_column_visible("name", True)
        self.assertEqual(state.schema.ids, ["name", "role", "status", "email"])

    def test_unknown_column_is_reported_not_raised(self):
        state = _state()
        events = []
        state.subscribe(lambda event, payload: events.append(event))

        self.assertFalse(state.set_column_visible("salary", False))
        self.assertFalse(state.toggle_column_visible("salary"))
        self.assertEqual(events, [])

    def test_toggle_flips_flag(self):
        state = _state()
        state.toggle_column_visible("email")
        self.assertFalse(state.column("email").visible)
        state.toggle_column_visible("email")
        self.assertTrue(state.column("email").visible)


class RowReplacementTests(unittest.TestCase):
    def test_load_rows_replaces_data_and_notifies(self):
        state = _state()
        events = []
        state.subscribe(lambda event, payload: events.append((event, payload)))

        state.load_rows([{"name": "Zed", "role": "QA"}])

        self.assertEqual(state.row_count, 1)
        self.assertEqual(state.get_cell(0, "role"), "QA")
        self.assertEqual(events, [("rows", {"row_count": 1})])

    def test_values_are_stored_as_strings(self):
        state = _state([{"name": "Num", "role": 42}])
        self.assertEqual(state.get_cell(0, "role"), "42")

    def test_records_cover_every_schema_column(self):
        state = _state([{"name": "Dana"}])
        self.assertEqual(
            state.records(), [{"name": "Dana", "role": "", "status": "", "email": ""}]
        )

    def test_empty_row_set(self):
        state = _state([])
        self.assertEqual(state.row_count, 0)
        self.assertEqual(state.records(), [])
        with self.assertRaises(GridIndexError):
            state.get_cell(0, "name")


if __name__ == "__main__":
    unittest.main()
