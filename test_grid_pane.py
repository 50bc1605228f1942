import unittest

from app_state import AppState
from default_grid_initializer import DefaultGridInitializer
from grid_pane import CellHandle, GridPane
from view_projection import ViewProjection


class DummyWin:
    def __init__(self, h=24, w=120):
        self._h = h
        self._w = w
        self.text = {}
        self.cursor = None

    def getmaxyx(self):
        return self._h, self._w

    def erase(self):
        self.text = {}

    def bkgd(self, *_):
        pass

    def addnstr(self, y, x, text, n, *attrs):
        self.text[(y, x)] = text[:n]

    def hline(self, *_):
        pass

    def move(self, y, x):
        self.cursor = (y, x)

    def refresh(self):
        pass


def _grid():
    init = DefaultGridInitializer(col_width=20)
    state = AppState(init.create_rows(), init.create_columns())
    view = ViewProjection(state)
    return GridPane(view), state


class GridPaneHandleMapTests(unittest.TestCase):
    def test_draw_builds_handle_per_visible_cell(self):
        grid, _ = _grid()
        win = DummyWin()
        grid.draw(win)

        self.assertEqual(len(grid.cell_handles), 12)
        self.assertEqual(grid.cell_handles[(1, 2)], CellHandle(1, 2, "status", 2, 46, 20))
        self.assertEqual(win.text[(2, 4)].rstrip(), "Bob Smith")
        self.assertEqual(win.text[(0, 25)].rstrip(), "Role")

    def test_handles_follow_visibility(self):
        grid, state = _grid()
        win = DummyWin()
        state.set_column_visible("role", False)
        grid.draw(win)

        self.assertEqual(len(grid.cell_handles), 9)
        self.assertEqual(grid.cell_handles[(0, 1)].column_id, "status")
        self.assertNotIn((0, 3), grid.cell_handles)
        self.assertNotIn("role", grid.header_handles)

    def test_hit_test_maps_screen_to_coordinate(self):
        grid, _ = _grid()
        grid.draw(DummyWin())
        self.assertEqual(grid.hit_test(2, 50), (1, 2))
        self.assertEqual(grid.hit_test(3, 4), (2, 0))
        self.assertIsNone(grid.hit_test(0, 5))
        self.assertIsNone(grid.hit_test(2, 24))
        self.assertIsNone(grid.hit_test(10, 5))

    def test_header_border_hit(self):
        grid, _ = _grid()
        grid.draw(DummyWin())
        self.assertEqual(grid.header_border_at(0, 24), "name")
        self.assertEqual(grid.header_border_at(0, 23), "name")
        self.assertEqual(grid.header_border_at(0, 45), "role")
        self.assertIsNone(grid.header_border_at(0, 10))
        self.assertIsNone(grid.header_border_at(1, 24))

    def test_resized_column_moves_later_handles(self):
        grid, _ = _grid()
        grid.view.set_column_width("name", 10)
        grid.draw(DummyWin())
        self.assertEqual(grid.cell_handles[(0, 1)].x, 15)
        self.assertEqual(grid.header_border_at(0, 14), "name")


class GridPaneFocusTests(unittest.TestCase):
    def test_cursor_targets_focused_cell(self):
        grid, _ = _grid()
        win = DummyWin()
        grid.draw(win)
        target = grid.focus_cell((2, 3))
        self.assertEqual(target, CellHandle(2, 3, "email", 3, 67, 20))

        grid.draw(win)
        self.assertEqual(win.cursor, (3, 67))

    def test_unfocus_clears_target(self):
        grid, _ = _grid()
        win = DummyWin()
        grid.draw(win)
        grid.focus_cell((0, 0))
        grid.focus_cell(None)
        grid.draw(win)
        self.assertIsNone(grid.focus_target)
        self.assertIsNone(win.cursor)

    def test_focus_scrolls_rows_into_view(self):
        grid, _ = _grid()
        win = DummyWin(h=4, w=120)
        grid.draw(win)
        self.assertNotIn((2, 0), grid.cell_handles)

        grid.focus_cell((2, 0))
        grid.draw(win)

        self.assertEqual(grid.row_offset, 1)
        self.assertIn((2, 0), grid.cell_handles)
        self.assertNotIn((0, 0), grid.cell_handles)
        self.assertEqual(win.cursor, (2, 4))

    def test_focus_scrolls_columns_into_view(self):
        grid, _ = _grid()
        win = DummyWin(h=24, w=50)
        grid.draw(win)
        self.assertNotIn((0, 3), grid.cell_handles)

        grid.focus_cell((0, 3))
        grid.draw(win)

        self.assertEqual(grid.col_offset, 2)
        self.assertEqual(grid.cell_handles[(0, 3)].x, 25)

        grid.focus_cell((0, 0))
        self.assertEqual(grid.col_offset, 0)

    def test_draw_does_not_change_data(self):
        grid, state = _grid()
        before = state.records()
        grid.focus_cell((1, 1))
        grid.draw(DummyWin(h=5, w=40))
        self.assertEqual(state.records(), before)


if __name__ == "__main__":
    unittest.main()
