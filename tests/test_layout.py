import unittest

from seatbook.layout import ROW_LENGTH, build_grid, group_by_row, seat_css_classes
from seatbook.models import Seat


def make_seat(seat_id, row, number, seat_type="regular", status="available"):
    return Seat(id=seat_id, row=row, number=number, type=seat_type, status=status)


class GridLayoutTests(unittest.TestCase):
    def setUp(self):
        self.seats = [
            make_seat(10, "C", 30),
            make_seat(1, "A", 2),
            make_seat(2, "A", 1),
            make_seat(3, "A", 16, status="booked"),
            make_seat(4, "B", 15, "vip"),
            make_seat(5, "L", 8, "sponsored", "sponsored"),
        ]

    def test_rows_are_sorted_and_seats_ordered_by_number(self):
        rows = group_by_row(self.seats)
        self.assertEqual(list(rows), ["A", "B", "C", "L"])
        self.assertEqual([s.number for s in rows["A"]], [1, 2, 16])

    def test_every_row_has_thirty_cells(self):
        grid = build_grid(self.seats)
        self.assertEqual([row.label for row in grid], ["A", "B", "C", "L"])
        for row in grid:
            self.assertEqual(len(row.cells), ROW_LENGTH)
            self.assertEqual([c.number for c in row.left], list(range(1, 16)))
            self.assertEqual([c.number for c in row.right], list(range(16, 31)))

    def test_missing_positions_are_placeholders(self):
        row_c = build_grid(self.seats)[2]
        placeholders = [c for c in row_c.cells if c.is_placeholder]
        self.assertEqual(len(placeholders), 29)
        self.assertEqual(row_c.right[-1].seat.id, 10)
        self.assertEqual(placeholders[0].css_classes, "seat-placeholder")

    def test_only_available_seats_are_interactive(self):
        row_a = build_grid(self.seats)[0]
        self.assertTrue(row_a.left[0].is_interactive)
        self.assertFalse(row_a.right[0].is_interactive)
        row_l = build_grid(self.seats)[3]
        self.assertFalse(row_l.left[7].is_interactive)
        self.assertFalse(row_l.left[0].is_interactive)

    def test_selected_cells_are_marked(self):
        row_a = build_grid(self.seats, selected_ids=[2])[0]
        self.assertTrue(row_a.left[0].selected)
        self.assertIn("selected", row_a.left[0].css_classes.split())
        self.assertFalse(row_a.left[1].selected)

    def test_css_classes_include_type_and_status(self):
        self.assertEqual(seat_css_classes(make_seat(1, "B", 15, "vip")), "seat vip available")
        self.assertEqual(seat_css_classes(make_seat(5, "L", 8, "sponsored", "sponsored")), "seat sponsored sponsored")
        self.assertEqual(seat_css_classes(make_seat(6, "A", 3, status="not available")), "seat regular not-available")

    def test_empty_snapshot_renders_no_rows(self):
        self.assertEqual(build_grid([]), [])


if __name__ == "__main__":
    unittest.main()
