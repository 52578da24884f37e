import unittest

from wordtable.core.constants import CellKind, CellOwner, CellState
from wordtable.core.events import Signal
from wordtable.core.exceptions import CellOutOfBoundsError, InvalidCellValueError, ModelNotInitializedError
from wordtable.core.models import TableCell
from wordtable.table.layout import TableLayout
from wordtable.table.model import TableModel


def build_model(grid_size: int = 4, word_count: int = 2) -> TableModel:
    model = TableModel()
    model.initialize(TableLayout.create_for_setup(grid_size, word_count))
    return model


class TableModelInitializeTests(unittest.TestCase):
    def test_cells_are_classified_by_region(self) -> None:
        model = build_model(grid_size=4, word_count=2)
        self.assertEqual((model.rows, model.cols), (7, 5))

        corner = model.get_cell(0, 0)
        self.assertEqual(corner.kind, CellKind.SPACER)
        self.assertEqual(corner.state, CellState.NONE)
        self.assertEqual(model.get_cell(2, 0).kind, CellKind.SPACER)

        slot = model.get_cell(1, 3)
        self.assertEqual((slot.kind, slot.state, slot.text_char), (CellKind.WORD_SLOT, CellState.NORMAL, None))

        col_header = model.get_cell(2, 1)
        self.assertEqual((col_header.kind, col_header.state), (CellKind.HEADER_COL, CellState.READ_ONLY))
        self.assertEqual(col_header.text_char, "A")
        self.assertEqual(model.get_cell(2, 4).text_char, "D")

        row_header = model.get_cell(3, 0)
        self.assertEqual((row_header.kind, row_header.int_value), (CellKind.HEADER_ROW, 1))
        self.assertEqual(model.get_cell(6, 0).display_text(), "4")

        grid = model.get_grid_cell(0, 0)
        self.assertEqual((grid.kind, grid.state, grid.owner), (CellKind.GRID_CELL, CellState.FOG, CellOwner.NONE))
        self.assertEqual((grid.row, grid.col), (3, 1))

    def test_initialize_requires_layout(self) -> None:
        with self.assertRaises(ValueError):
            TableModel().initialize(None)

    def test_uninitialized_access_fails(self) -> None:
        model = TableModel()
        self.assertFalse(model.is_initialized)
        with self.assertRaises(ModelNotInitializedError):
            model.get_cell(0, 0)
        with self.assertRaises(ModelNotInitializedError):
            model.set_cell_state(0, 0, CellState.NORMAL)
        with self.assertRaises(ModelNotInitializedError):
            model.get_grid_cell(0, 0)
        with self.assertRaises(ModelNotInitializedError):
            model.snapshot()

    def test_initialize_emits_cleared(self) -> None:
        model = TableModel()
        calls = []
        model.cleared.subscribe(lambda: calls.append("cleared"))
        model.initialize(TableLayout.create_for_setup(3, 1))
        self.assertEqual(calls, ["cleared"])
        self.assertTrue(model.dirty)


class TableModelMutationTests(unittest.TestCase):
    def setUp(self) -> None:
        self.model = build_model()

    def test_version_increases_on_every_mutation(self) -> None:
        versions = [self.model.version]
        self.model.set_cell_state(3, 1, CellState.HOVERED)
        versions.append(self.model.version)
        self.model.set_cell_char(3, 1, "Q")
        versions.append(self.model.version)
        self.model.set_cell_owner(3, 1, CellOwner.PLAYER2)
        versions.append(self.model.version)
        self.model.set_cell_kind(0, 0, CellKind.SPACER)
        versions.append(self.model.version)
        self.assertEqual(versions, sorted(set(versions)))

    def test_clear_dirty_keeps_version(self) -> None:
        self.model.set_cell_state(3, 1, CellState.HOVERED)
        version = self.model.version
        self.model.clear_dirty()
        self.assertFalse(self.model.dirty)
        self.assertEqual(self.model.version, version)
        self.model.set_cell_state(3, 1, CellState.FOG)
        self.assertTrue(self.model.dirty)

    def test_change_events_arrive_in_mutation_order(self) -> None:
        events = []
        self.model.cell_changed.subscribe(lambda row, col, cell: events.append((row, col, cell)))

        self.model.set_cell_char_and_state(3, 1, "A", CellState.NORMAL)
        self.model.set_grid_cell_state(1, 2, CellState.PLACEMENT_VALID)
        self.model.set_word_slot_letter(1, 0, "Z")

        self.assertEqual([(row, col) for row, col, _ in events], [(3, 1), (4, 3), (1, 1)])
        first = events[0][2]
        self.assertEqual((first.text_char, first.state), ("A", CellState.NORMAL))
        self.assertEqual(events[2][2].text_char, "Z")

    def test_event_sees_current_state(self) -> None:
        seen = []

        def listener(row, col, cell) -> None:
            seen.append(self.model.get_cell(row, col) == cell)

        self.model.cell_changed.subscribe(listener)
        self.model.set_grid_cell_letter(0, 0, "K")
        self.assertEqual(seen, [True])

    def test_set_cell_pins_coordinates(self) -> None:
        self.model.set_cell(3, 2, TableCell(row=0, col=0, kind=CellKind.GRID_CELL, state=CellState.HIT, text_char="X"))
        cell = self.model.get_cell(3, 2)
        self.assertEqual((cell.row, cell.col, cell.state, cell.text_char), (3, 2, CellState.HIT, "X"))

    def test_set_cell_rejects_non_cells(self) -> None:
        with self.assertRaises(InvalidCellValueError):
            self.model.set_cell(3, 1, "X")

    def test_out_of_bounds_is_rejected(self) -> None:
        version = self.model.version
        for row, col in [(-1, 0), (0, -1), (self.model.rows, 0), (0, self.model.cols)]:
            with self.assertRaises(CellOutOfBoundsError):
                self.model.set_cell_state(row, col, CellState.NORMAL)
            with self.assertRaises(CellOutOfBoundsError):
                self.model.get_cell(row, col)
        self.assertEqual(self.model.version, version)

    def test_local_helpers_stay_inside_their_region(self) -> None:
        with self.assertRaises(CellOutOfBoundsError):
            self.model.set_grid_cell_letter(4, 0, "A")
        with self.assertRaises(CellOutOfBoundsError):
            self.model.get_grid_cell(0, -1)
        with self.assertRaises(CellOutOfBoundsError):
            self.model.set_word_slot_letter(2, 0, "A")
        with self.assertRaises(CellOutOfBoundsError):
            self.model.get_word_slot(0, 4)

    def test_text_must_be_single_character(self) -> None:
        for bad in ["", "AB", 7]:
            with self.assertRaises(InvalidCellValueError):
                self.model.set_cell_char(3, 1, bad)
        self.model.set_cell_char(3, 1, None)
        self.assertIsNone(self.model.get_cell(3, 1).text_char)

    def test_snapshot_is_detached(self) -> None:
        before = self.model.snapshot()
        self.model.set_grid_cell_letter(0, 0, "M")
        self.assertIsNone(before[3][1].text_char)
        self.assertEqual(self.model.snapshot()[3][1].text_char, "M")
        with self.assertRaises(TypeError):
            before[3][1] = None

    def test_clear_restores_defaults(self) -> None:
        fresh = self.model.snapshot()
        self.model.set_grid_cell_letter(2, 2, "W")
        self.model.set_word_slot_state(0, 1, CellState.SELECTED)
        version = self.model.version

        self.model.clear()

        self.assertEqual(self.model.snapshot(), fresh)
        self.assertGreater(self.model.version, version)

    def test_clear_before_initialize_is_noop(self) -> None:
        model = TableModel()
        model.clear()
        self.assertEqual(model.version, 0)


class SignalTests(unittest.TestCase):
    def test_unsubscribe_callable(self) -> None:
        signal = Signal("changed")
        calls = []
        unsubscribe = signal.subscribe(calls.append)
        signal.emit(1)
        unsubscribe()
        signal.emit(2)
        self.assertEqual(calls, [1])
        self.assertEqual(len(signal), 0)

    def test_listener_can_unsubscribe_during_emit(self) -> None:
        signal = Signal()
        calls = []

        def once(value) -> None:
            calls.append(("once", value))
            signal.unsubscribe(once)

        signal.subscribe(once)
        signal.subscribe(lambda value: calls.append(("always", value)))
        signal.emit("a")
        signal.emit("b")
        self.assertEqual(calls, [("once", "a"), ("always", "a"), ("always", "b")])


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
