from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from seatbook.models import BookingRequest, PendingBooking, Seat


class ApiResponse(BaseModel):
    success: bool
    message: Optional[str] = ""
    data: Any = None


class SeatPayload(BaseModel):
    id: int
    row: str = Field(min_length=1)
    number: int
    type: str
    status: str

    def to_seat(self) -> Seat:
        return Seat(id=self.id, row=self.row, number=self.number, type=self.type, status=self.status)


class SeatListResponse(ApiResponse):
    data: List[SeatPayload] = Field(default_factory=list)


class BookingCreatePayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    customer_name: str = Field(alias="customerName")
    customer_email: str = Field(alias="customerEmail")
    customer_phone: str = Field(alias="customerPhone")
    payment_method: str = Field(alias="paymentMethod")
    seat_ids: List[int] = Field(alias="seatIds", min_length=1)
    total_amount: float = Field(alias="totalAmount", ge=0)

    @classmethod
    def from_request(cls, request: BookingRequest) -> "BookingCreatePayload":
        return cls(
            customer_name=request.customer_name,
            customer_email=request.customer_email,
            customer_phone=request.customer_phone,
            payment_method=request.payment_method,
            seat_ids=request.seat_ids,
            total_amount=request.total_amount,
        )


class BookingCreatedData(BaseModel):
    booking_id: int = Field(alias="bookingId")


class BookingCreatedResponse(ApiResponse):
    data: BookingCreatedData


class AdminLoginPayload(BaseModel):
    username: str
    password: str


class PendingBookingPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    customer_name: str = Field(alias="customerName")
    customer_email: str = Field(alias="customerEmail")
    customer_phone: str = Field(alias="customerPhone")
    payment_method: str = Field(alias="paymentMethod")
    total_amount: float = Field(alias="totalAmount")
    status: str = "pending"
    created_at: str = Field(default="", alias="createdAt")
    # Go encodes an empty seat slice as null.
    seats: Optional[List[str]] = None

    def to_booking(self) -> PendingBooking:
        return PendingBooking(
            id=self.id,
            customer_name=self.customer_name,
            customer_email=self.customer_email,
            customer_phone=self.customer_phone,
            seats=list(self.seats or []),
            payment_method=self.payment_method,
            total_amount=self.total_amount,
            created_at=self.created_at,
            status=self.status,
        )


class PendingBookingListResponse(ApiResponse):
    data: Optional[List[PendingBookingPayload]] = None


class VerifyPaymentPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    booking_id: int = Field(alias="bookingId")
    status: str
