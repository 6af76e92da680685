from dataclasses import dataclass, field
from typing import Callable, List, Optional, Protocol

from seatbook.backend import BackendClient, BackendError, BackendRejected
from seatbook.formatting import format_rupiah, format_timestamp, payment_method_label
from seatbook.logger_config import logger
from seatbook.models import BOOKING_CANCELLED, BOOKING_CONFIRMED, ActionResult, PendingBooking
from seatbook.notifier import Notifier

VIEW_LOGIN = "login"
VIEW_DASHBOARD = "dashboard"

ConfirmPrompt = Callable[[str], bool]


class SessionStore(Protocol):
    def is_authenticated(self) -> bool:
        ...

    def set_authenticated(self) -> None:
        ...

    def clear(self) -> None:
        ...


class MemorySessionStore:
    def __init__(self, authenticated: bool = False) -> None:
        self.authenticated = authenticated

    def is_authenticated(self) -> bool:
        return self.authenticated

    def set_authenticated(self) -> None:
        self.authenticated = True

    def clear(self) -> None:
        self.authenticated = False


@dataclass
class BookingRow:
    id: int
    customer_name: str
    customer_email: str
    customer_phone: str
    seats_text: str
    payment_label: str
    total_text: str
    created_text: str


@dataclass
class AdminState:
    view: str = VIEW_LOGIN
    bookings: List[PendingBooking] = field(default_factory=list)


@dataclass(frozen=True)
class _StatusAction:
    status: str
    question: str
    done: str
    failed: str


_ACTIONS = {
    BOOKING_CONFIRMED: _StatusAction(
        status=BOOKING_CONFIRMED,
        question="Are you sure you want to confirm this payment?",
        done="Payment for booking #{booking_id} confirmed!",
        failed="Failed to confirm payment. Please try again.",
    ),
    BOOKING_CANCELLED: _StatusAction(
        status=BOOKING_CANCELLED,
        question="Are you sure you want to cancel this booking?",
        done="Booking #{booking_id} cancelled!",
        failed="Failed to cancel booking. Please try again.",
    ),
}


def confirmation_question(status: str) -> str:
    return _ACTIONS[status].question


def booking_row(booking: PendingBooking) -> BookingRow:
    return BookingRow(
        id=booking.id,
        customer_name=booking.customer_name,
        customer_email=booking.customer_email,
        customer_phone=booking.customer_phone,
        seats_text=", ".join(booking.seats),
        payment_label=payment_method_label(booking.payment_method),
        total_text=format_rupiah(booking.total_amount),
        created_text=format_timestamp(booking.created_at),
    )


class AdminPanel:
    """Login gate plus the pending-bookings table.

    The session store only remembers that a login succeeded; the backend is
    expected to authorize the admin endpoints on its own.
    """

    def __init__(
        self,
        client: BackendClient,
        session: SessionStore,
        notifier: Notifier,
        confirm: ConfirmPrompt,
        state: Optional[AdminState] = None,
        refetch: bool = True,
    ) -> None:
        self.client = client
        self.session = session
        self.notifier = notifier
        self.confirm = confirm
        self.state = state or AdminState()
        # Off when the caller redirects to a page that fetches the list itself.
        self.refetch = refetch

    def check_auth(self) -> bool:
        if not self.session.is_authenticated():
            self.state.view = VIEW_LOGIN
            return False
        self.state.view = VIEW_DASHBOARD
        self.fetch_bookings()
        return True

    def login(self, username: str, password: str) -> ActionResult:
        if not username or not password:
            message = "Please enter username and password."
            self.notifier.alert(message)
            return ActionResult(False, message)
        try:
            self.client.admin_login(username, password)
        except BackendRejected:
            message = "Invalid credentials."
            self.notifier.alert(message)
            return ActionResult(False, message)
        except BackendError as exc:
            logger.error(f"Admin login failed: {exc.message}")
            message = "Login failed. Please try again."
            self.notifier.alert(message)
            return ActionResult(False, message)
        self.session.set_authenticated()
        self.state.view = VIEW_DASHBOARD
        logger.info("Admin logged in")
        if self.refetch:
            self.fetch_bookings()
        return ActionResult(True, "Login successful")

    def fetch_bookings(self) -> List[PendingBooking]:
        try:
            bookings = self.client.list_pending_bookings()
        except BackendError as exc:
            logger.error(f"Error fetching bookings: {exc.message}")
            bookings = []
        self.state.bookings = bookings
        return bookings

    def rows(self) -> List[BookingRow]:
        return [booking_row(b) for b in self.state.bookings]

    def confirm_booking(self, booking_id: int) -> ActionResult:
        return self._set_status(booking_id, _ACTIONS[BOOKING_CONFIRMED])

    def cancel_booking(self, booking_id: int) -> ActionResult:
        return self._set_status(booking_id, _ACTIONS[BOOKING_CANCELLED])

    def _set_status(self, booking_id: int, action: _StatusAction) -> ActionResult:
        if not self.confirm(action.question):
            return ActionResult(False, "Declined", booking_id)
        try:
            self.client.set_booking_status(booking_id, action.status)
        except BackendRejected as exc:
            message = f"Error: {exc.message}"
            self.notifier.alert(message)
            return ActionResult(False, message, booking_id)
        except BackendError as exc:
            logger.error(f"Status update for booking #{booking_id} failed: {exc.message}")
            self.notifier.alert(action.failed)
            return ActionResult(False, action.failed, booking_id)
        message = action.done.format(booking_id=booking_id)
        logger.info(message)
        self.notifier.alert(message)
        if self.refetch:
            self.fetch_bookings()
        return ActionResult(True, message, booking_id)

    def logout(self) -> None:
        self.session.clear()
        self.state = AdminState()
