from dataclasses import dataclass, field, replace
from typing import List, Optional

from seatbook.backend import BackendClient, BackendError, BackendRejected
from seatbook.config import PaymentDetails
from seatbook.formatting import booking_reference
from seatbook.layout import SeatRowLayout, build_grid
from seatbook.logger_config import logger
from seatbook.models import (
    PAYMENT_BANK_TRANSFER,
    PAYMENT_METHODS,
    ActionResult,
    Confirmation,
    CustomerDetails,
    PaymentInstructions,
    Seat,
)
from seatbook.notifier import Notifier
from seatbook.selection import (
    BookingValidationError,
    ManualEntryResult,
    apply_manual_entry,
    build_booking_request,
    find_seat,
    selection_lines,
    selection_summary,
    toggle_seat,
    total_amount,
)

PHASE_ENTRY = "entry"
PHASE_SUBMITTING = "submitting"
PHASE_CONFIRMED = "confirmed"


@dataclass
class WidgetState:
    seats: List[Seat] = field(default_factory=list)
    selection: List[Seat] = field(default_factory=list)
    customer: CustomerDetails = field(default_factory=CustomerDetails)
    phase: str = PHASE_ENTRY
    confirmation: Optional[Confirmation] = None

    @property
    def total_amount(self) -> int:
        return total_amount(self.selection)

    @property
    def selected_ids(self) -> List[int]:
        return [seat.id for seat in self.selection]


def payment_instructions(method: str, reference: str, details: PaymentDetails) -> PaymentInstructions:
    if method == PAYMENT_BANK_TRANSFER:
        fields = (
            ("Bank", details.bank_name),
            ("Account Number", details.bank_account_number),
            ("Account Name", details.bank_account_name),
        )
        lines = [f"{label}: {value}" for label, value in fields if value]
        lines.append(f"Please include your booking reference ({reference}) in the transfer description.")
        return PaymentInstructions(title="Bank Transfer Details:", lines=lines)
    lines = ["Visit our booth after school hours to complete your payment."]
    lines.extend(f"Contact: {contact}" for contact in details.cash_contacts)
    lines.append(f"Please mention your booking reference ({reference}) when making the payment.")
    return PaymentInstructions(title="Cash Payment Details:", lines=lines)


class BookingWidget:
    def __init__(
        self,
        client: BackendClient,
        notifier: Notifier,
        payment_details: Optional[PaymentDetails] = None,
        state: Optional[WidgetState] = None,
    ) -> None:
        self.client = client
        self.notifier = notifier
        self.payment_details = payment_details or PaymentDetails()
        self.state = state or WidgetState()

    def load_seats(self) -> bool:
        try:
            seats = self.client.list_seats()
        except BackendError as exc:
            logger.error(f"Failed to fetch seats: {exc.message}")
            return False
        self.state.seats = seats
        logger.debug(f"Loaded {len(seats)} seats")
        return True

    def grid(self) -> List[SeatRowLayout]:
        return build_grid(self.state.seats, self.state.selected_ids)

    def selection_lines(self) -> List[str]:
        return selection_lines(self.state.selection)

    def toggle(self, seat_id: int) -> bool:
        """Toggle an available seat; unknown or unavailable ids are ignored."""
        seat = find_seat(self.state.seats, seat_id)
        if not seat or not seat.is_available:
            return False
        self.state.selection = toggle_seat(self.state.selection, seat)
        return True

    def enter_seats(self, text: str) -> ManualEntryResult:
        result = apply_manual_entry(self.state.seats, self.state.selection, text)
        self.state.selection = result.selection
        for message in result.errors:
            self.notifier.alert(message)
        return result

    def choose_payment_method(self, method: str) -> None:
        if method in PAYMENT_METHODS:
            self.state.customer.payment_method = method

    def submit(self, customer: CustomerDetails) -> ActionResult:
        if self.state.phase == PHASE_SUBMITTING:
            return ActionResult(False, "Booking is already being submitted.")
        if customer.payment_method in PAYMENT_METHODS:
            self.state.customer = customer
        else:
            # The form keeps showing the last valid method.
            self.state.customer = replace(customer, payment_method=self.state.customer.payment_method)
        try:
            request = build_booking_request(self.state.selection, customer)
        except BookingValidationError as exc:
            self.notifier.alert(str(exc))
            return ActionResult(False, str(exc))

        self.state.phase = PHASE_SUBMITTING
        try:
            booking_id = self.client.create_booking(request)
        except BackendRejected as exc:
            self.state.phase = PHASE_ENTRY
            message = f"Booking failed: {exc.message}"
            self.notifier.alert(message)
            return ActionResult(False, message)
        except BackendError as exc:
            self.state.phase = PHASE_ENTRY
            logger.error(f"Booking request failed: {exc.message}")
            message = "Booking failed. Please try again."
            self.notifier.alert(message)
            return ActionResult(False, message)

        reference = booking_reference(booking_id)
        self.state.confirmation = Confirmation(
            booking_id=booking_id,
            reference=reference,
            seats_text=selection_summary(self.state.selection),
            total_amount=request.total_amount,
            payment_method=request.payment_method,
            instructions=payment_instructions(request.payment_method, reference, self.payment_details),
        )
        self.state.phase = PHASE_CONFIRMED
        self.state.selection = []
        logger.info(f"Booking {reference} created for {len(request.seat_ids)} seat(s)")
        self.load_seats()
        return ActionResult(True, reference, booking_id)

    def reset(self) -> None:
        self.state.customer = CustomerDetails()
        self.state.selection = []
        self.state.confirmation = None
        self.state.phase = PHASE_ENTRY
