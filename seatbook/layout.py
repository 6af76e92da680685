from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from seatbook.models import Seat

ROW_LENGTH = 30
LEFT_BLOCK = range(1, 16)
RIGHT_BLOCK = range(16, ROW_LENGTH + 1)


@dataclass
class SeatCell:
    number: int
    seat: Optional[Seat] = None
    selected: bool = False

    @property
    def is_placeholder(self) -> bool:
        return self.seat is None

    @property
    def is_interactive(self) -> bool:
        return self.seat is not None and self.seat.is_available

    @property
    def css_classes(self) -> str:
        if self.seat is None:
            return "seat-placeholder"
        return seat_css_classes(self.seat, self.selected)


@dataclass
class SeatRowLayout:
    label: str
    left: List[SeatCell]
    right: List[SeatCell]

    @property
    def cells(self) -> List[SeatCell]:
        return self.left + self.right


def seat_css_classes(seat: Seat, selected: bool = False) -> str:
    status = seat.status.strip().replace(" ", "-")
    classes = ["seat", seat.type, status]
    if selected:
        classes.append("selected")
    return " ".join(c for c in classes if c)


def group_by_row(seats: Iterable[Seat]) -> Dict[str, List[Seat]]:
    rows: Dict[str, List[Seat]] = defaultdict(list)
    for seat in seats:
        rows[seat.row].append(seat)
    return {row: sorted(rows[row], key=lambda s: s.number) for row in sorted(rows)}


def _block(by_number: Dict[int, Seat], numbers: range, selected_ids) -> List[SeatCell]:
    cells = []
    for number in numbers:
        seat = by_number.get(number)
        cells.append(SeatCell(number=number, seat=seat, selected=seat is not None and seat.id in selected_ids))
    return cells


def build_grid(seats: Iterable[Seat], selected_ids: Iterable[int] = ()) -> List[SeatRowLayout]:
    """Lay the snapshot out as fixed 1-15 | label | 16-30 rows.

    Positions without a seat become placeholders so every row has the same
    number of cells. Seats numbered outside 1..30 are not placed.
    """
    selected = set(selected_ids)
    layout = []
    for row, row_seats in group_by_row(seats).items():
        by_number = {seat.number: seat for seat in row_seats}
        layout.append(
            SeatRowLayout(
                label=row,
                left=_block(by_number, LEFT_BLOCK, selected),
                right=_block(by_number, RIGHT_BLOCK, selected),
            )
        )
    return layout
