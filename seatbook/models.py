from dataclasses import dataclass
from typing import List, Optional

SEAT_REGULAR = "regular"
SEAT_VIP = "vip"

STATUS_AVAILABLE = "available"
STATUS_SPONSORED = "sponsored"

PAYMENT_BANK_TRANSFER = "bank_transfer"
PAYMENT_CASH = "cash"
PAYMENT_METHODS = (PAYMENT_BANK_TRANSFER, PAYMENT_CASH)

BOOKING_CONFIRMED = "confirmed"
BOOKING_CANCELLED = "cancelled"

PRICES = {
    SEAT_REGULAR: 25000,
    SEAT_VIP: 30000,
}


@dataclass(frozen=True)
class Seat:
    id: int
    row: str
    number: int
    type: str
    status: str

    @property
    def label(self) -> str:
        return f"{self.row}{self.number}"

    @property
    def is_available(self) -> bool:
        return self.status == STATUS_AVAILABLE


@dataclass
class CustomerDetails:
    name: str = ""
    email: str = ""
    phone: str = ""
    payment_method: str = PAYMENT_BANK_TRANSFER


@dataclass
class BookingRequest:
    customer_name: str
    customer_email: str
    customer_phone: str
    payment_method: str
    seat_ids: List[int]
    total_amount: int


@dataclass
class PendingBooking:
    id: int
    customer_name: str
    customer_email: str
    customer_phone: str
    seats: List[str]
    payment_method: str
    total_amount: float
    created_at: str
    status: str = "pending"


@dataclass
class PaymentInstructions:
    title: str
    lines: List[str]


@dataclass
class Confirmation:
    booking_id: int
    reference: str
    seats_text: str
    total_amount: int
    payment_method: str
    instructions: PaymentInstructions


@dataclass
class ActionResult:
    success: bool
    message: str
    booking_id: Optional[int] = None
