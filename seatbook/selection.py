import re
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from seatbook.formatting import format_rupiah, seat_type_label
from seatbook.models import PAYMENT_METHODS, PRICES, BookingRequest, CustomerDetails, Seat

SEAT_TOKEN_PATTERN = re.compile(r"^([A-L])(\d+)$", re.IGNORECASE)


class BookingValidationError(ValueError):
    pass


@dataclass
class ManualEntryResult:
    selection: List[Seat]
    added: List[Seat] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)


def find_seat(seats: Iterable[Seat], seat_id: int) -> Optional[Seat]:
    for seat in seats:
        if seat.id == seat_id:
            return seat
    return None


def is_selected(selection: Iterable[Seat], seat_id: int) -> bool:
    return any(seat.id == seat_id for seat in selection)


def toggle_seat(selection: List[Seat], seat: Seat) -> List[Seat]:
    """Return a new selection with the seat added when absent and removed when present."""
    if is_selected(selection, seat.id):
        return [s for s in selection if s.id != seat.id]
    return [*selection, seat]


def unit_price(seat: Seat) -> int:
    return PRICES.get(seat.type, 0)


def total_amount(selection: Iterable[Seat]) -> int:
    return sum(unit_price(seat) for seat in selection)


def seat_summary(seat: Seat) -> str:
    return f"{seat.label} ({seat_type_label(seat.type)})"


def selection_lines(selection: Iterable[Seat]) -> List[str]:
    return [f"{seat_summary(seat)} - {format_rupiah(unit_price(seat))}" for seat in selection]


def selection_summary(selection: Iterable[Seat]) -> str:
    return ", ".join(seat_summary(seat) for seat in selection)


def split_seat_tokens(text: str) -> List[str]:
    return [part.strip() for part in (text or "").split(",") if part.strip()]


def find_available_seat(seats: Iterable[Seat], row: str, number: int) -> Optional[Seat]:
    row = row.upper()
    for seat in seats:
        if seat.row.upper() == row and seat.number == number and seat.is_available:
            return seat
    return None


def apply_manual_entry(seats: List[Seat], selection: List[Seat], text: str) -> ManualEntryResult:
    """Resolve "A1, B5" style input against the snapshot.

    Every token is handled on its own: a bad token adds an error and the rest
    are still processed. Seats already in the selection stay selected.
    """
    result = ManualEntryResult(selection=list(selection))
    for token in split_seat_tokens(text):
        match = SEAT_TOKEN_PATTERN.match(token)
        if not match:
            result.errors.append(f"Invalid seat format: {token}. Please use format like A1, B5, etc.")
            continue
        row = match.group(1).upper()
        number = int(match.group(2))
        seat = find_available_seat(seats, row, number)
        if not seat:
            result.errors.append(f"Seat {row}{number} is not available or does not exist.")
            continue
        if not is_selected(result.selection, seat.id):
            result.selection = toggle_seat(result.selection, seat)
            result.added.append(seat)
    return result


def validate_booking(selection: List[Seat], customer: CustomerDetails) -> None:
    if not selection:
        raise BookingValidationError("Please select at least one seat.")
    if not (customer.name.strip() and customer.email.strip() and customer.phone.strip()):
        raise BookingValidationError("Please fill in all customer information.")
    if customer.payment_method not in PAYMENT_METHODS:
        raise BookingValidationError("Please choose a payment method.")


def build_booking_request(selection: List[Seat], customer: CustomerDetails) -> BookingRequest:
    validate_booking(selection, customer)
    return BookingRequest(
        customer_name=customer.name.strip(),
        customer_email=customer.email.strip(),
        customer_phone=customer.phone.strip(),
        payment_method=customer.payment_method,
        seat_ids=[seat.id for seat in selection],
        total_amount=total_amount(selection),
    )
