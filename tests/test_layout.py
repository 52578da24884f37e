import unittest

from wordtable.core.exceptions import LayoutError
from wordtable.table.layout import COL_HEADERS, GRID, ROW_HEADERS, WORD_ROWS, TableLayout
from wordtable.table.region import OUTSIDE, TableRegion


class TableRegionTests(unittest.TestCase):
    def setUp(self) -> None:
        self.region = TableRegion("Box", row_start=2, col_start=1, row_count=3, col_count=4)

    def test_bounds_are_half_open(self) -> None:
        self.assertTrue(self.region.contains(2, 1))
        self.assertTrue(self.region.contains(4, 4))
        self.assertFalse(self.region.contains(5, 1))
        self.assertFalse(self.region.contains(2, 5))
        self.assertFalse(self.region.contains(1, 1))

    def test_to_local_outside_returns_sentinel(self) -> None:
        self.assertEqual(self.region.to_local(0, 0), OUTSIDE)
        self.assertEqual(self.region.to_local(2, 1), (0, 0))

    def test_local_round_trip(self) -> None:
        for row, col in self.region.iter_cells():
            local = self.region.to_local(row, col)
            self.assertTrue(self.region.contains_local(*local))
            self.assertEqual(self.region.to_table(*local), (row, col))

    def test_cell_count(self) -> None:
        self.assertEqual(self.region.cell_count, 12)
        self.assertEqual(len(list(self.region.iter_cells())), 12)


class TableLayoutTests(unittest.TestCase):
    def test_dimensions(self) -> None:
        layout = TableLayout.create_for_setup(grid_size=6, word_count=3)
        self.assertEqual(layout.total_rows, 3 + 1 + 6)
        self.assertEqual(layout.total_cols, 1 + 6)

    def test_region_placement(self) -> None:
        layout = TableLayout.create_for_setup(grid_size=5, word_count=2)
        self.assertEqual(
            (layout.word_rows.name, layout.word_rows.row_start, layout.word_rows.col_start),
            (WORD_ROWS, 0, 1),
        )
        self.assertEqual((layout.word_rows.row_count, layout.word_rows.col_count), (2, 5))
        self.assertEqual((layout.col_headers.name, layout.col_headers.row_start), (COL_HEADERS, 2))
        self.assertEqual((layout.row_headers.name, layout.row_headers.col_start), (ROW_HEADERS, 0))
        self.assertEqual((layout.grid.name, layout.grid.row_start, layout.grid.col_start), (GRID, 3, 1))

    def test_regions_are_disjoint(self) -> None:
        for grid_size, word_count in [(1, 0), (3, 1), (5, 3), (8, 6)]:
            layout = TableLayout.create_for_setup(grid_size, word_count)
            for row in range(layout.total_rows):
                for col in range(layout.total_cols):
                    owners = [region.name for region in layout.regions if region.contains(row, col)]
                    self.assertLessEqual(len(owners), 1, (grid_size, word_count, row, col, owners))

    def test_spacers_are_exactly_the_unclaimed_cells(self) -> None:
        layout = TableLayout.create_for_setup(grid_size=4, word_count=2)
        unclaimed = [
            (row, col)
            for row in range(layout.total_rows)
            for col in range(layout.total_cols)
            if layout.region_at(row, col) is None
        ]
        # Column 0 of the word rows and of the column header row.
        self.assertEqual(unclaimed, [(0, 0), (1, 0), (2, 0)])

    def test_grid_round_trip(self) -> None:
        layout = TableLayout.create_for_setup(grid_size=4, word_count=3)
        for grid_row in range(4):
            for grid_col in range(4):
                table = layout.grid_to_table(grid_row, grid_col)
                self.assertTrue(layout.is_in_grid(*table))
                self.assertEqual(layout.table_to_grid(*table), (grid_row, grid_col))

    def test_table_to_grid_outside(self) -> None:
        layout = TableLayout.create_for_setup(grid_size=4, word_count=3)
        self.assertEqual(layout.table_to_grid(0, 1), OUTSIDE)
        self.assertEqual(layout.table_to_grid(3, 1), OUTSIDE)
        self.assertEqual(layout.table_to_grid(4, 0), OUTSIDE)
        self.assertEqual(layout.table_to_grid(layout.total_rows, 1), OUTSIDE)

    def test_word_slot_conversion(self) -> None:
        layout = TableLayout.create_for_setup(grid_size=4, word_count=3)
        self.assertEqual(layout.word_slot_to_table(2, 3), (2, 4))
        self.assertEqual(layout.table_to_word_slot(2, 4), (2, 3))
        self.assertEqual(layout.table_to_word_slot(2, 0), OUTSIDE)
        self.assertTrue(layout.is_in_word_rows(0, 1))
        self.assertFalse(layout.is_in_word_rows(3, 1))

    def test_zero_words(self) -> None:
        layout = TableLayout.create_for_gameplay(grid_size=3, word_count=0)
        self.assertEqual(layout.total_rows, 4)
        self.assertEqual(layout.word_rows.cell_count, 0)
        self.assertEqual(layout.grid_to_table(0, 0), (1, 1))

    def test_invalid_dimensions(self) -> None:
        for grid_size, word_count in [(0, 1), (-2, 1), (3, -1), (2.5, 1), (True, 1), ("4", 1)]:
            with self.assertRaises(LayoutError):
                TableLayout.create_for_setup(grid_size, word_count)

    def test_header_labels(self) -> None:
        self.assertEqual(TableLayout.column_header_char(0), "A")
        self.assertEqual(TableLayout.column_header_char(25), "Z")
        self.assertEqual(TableLayout.row_header_number(0), 1)
        self.assertEqual(TableLayout.row_header_number(9), 10)

    def test_layout_is_immutable(self) -> None:
        layout = TableLayout.create_for_setup(grid_size=3, word_count=1)
        with self.assertRaises(AttributeError):
            layout.grid_size = 5


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
