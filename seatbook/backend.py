import json
import urllib.error
import urllib.request
from typing import Any, Callable, Dict, List, Optional, Type, TypeVar

from pydantic import ValidationError

from seatbook.logger_config import logger
from seatbook.models import BookingRequest, PendingBooking, Seat
from seatbook.schemas import (
    AdminLoginPayload,
    ApiResponse,
    BookingCreatedResponse,
    BookingCreatePayload,
    PendingBookingListResponse,
    SeatListResponse,
    VerifyPaymentPayload,
)

Transport = Callable[[str, str, Optional[Dict[str, Any]]], Any]
ResponseT = TypeVar("ResponseT", bound=ApiResponse)


class BackendError(Exception):
    """The backend could not be reached or answered with something unusable."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class BackendRejected(BackendError):
    """The backend answered with success: false."""


class BackendClient:
    def __init__(self, base_url: str, timeout: float = 12, transport: Optional[Transport] = None) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport or self._urllib_transport

    def _urllib_transport(self, method: str, path: str, payload: Optional[Dict[str, Any]]) -> Any:
        url = f"{self.base_url}{path}"
        data = json.dumps(payload).encode("utf-8") if payload is not None else None
        headers = {"Accept": "application/json"}
        if data is not None:
            headers["Content-Type"] = "application/json"
        req = urllib.request.Request(url, data=data, headers=headers, method=method)
        try:
            with urllib.request.urlopen(req, timeout=self.timeout) as resp:
                body = resp.read().decode("utf-8")
        except urllib.error.HTTPError as exc:
            # Error statuses still carry the {success, message} envelope.
            body = exc.read().decode("utf-8", errors="replace")
            exc.close()
        except (urllib.error.URLError, TimeoutError, OSError) as exc:
            raise BackendError(f"{method} {path} failed: {exc}") from exc
        try:
            return json.loads(body)
        except json.JSONDecodeError as exc:
            raise BackendError(f"{method} {path} returned a non-JSON body") from exc

    def _call(
        self,
        method: str,
        path: str,
        model: Type[ResponseT],
        payload: Optional[Dict[str, Any]] = None,
    ) -> ResponseT:
        logger.debug(f"{method} {path}")
        try:
            raw = self.transport(method, path, payload)
        except BackendError as exc:
            logger.warning(exc.message)
            raise
        try:
            envelope = ApiResponse.model_validate(raw)
        except ValidationError as exc:
            logger.warning(f"{method} {path} returned an invalid envelope: {exc}")
            raise BackendError(f"{method} {path} returned an invalid response") from exc
        if not envelope.success:
            raise BackendRejected(envelope.message or "Request failed")
        try:
            return model.model_validate(raw)
        except ValidationError as exc:
            logger.warning(f"{method} {path} returned an unexpected payload: {exc}")
            raise BackendError(f"{method} {path} returned an unexpected payload") from exc

    def list_seats(self) -> List[Seat]:
        response = self._call("GET", "/api/seats", SeatListResponse)
        return [item.to_seat() for item in response.data]

    def create_booking(self, request: BookingRequest) -> int:
        payload = BookingCreatePayload.from_request(request).model_dump(by_alias=True)
        response = self._call("POST", "/api/book", BookingCreatedResponse, payload)
        return response.data.booking_id

    def admin_login(self, username: str, password: str) -> None:
        payload = AdminLoginPayload(username=username, password=password).model_dump()
        self._call("POST", "/api/admin/login", ApiResponse, payload)

    def list_pending_bookings(self) -> List[PendingBooking]:
        response = self._call("GET", "/api/admin/bookings", PendingBookingListResponse)
        return [item.to_booking() for item in response.data or []]

    def set_booking_status(self, booking_id: int, status: str) -> str:
        payload = VerifyPaymentPayload(booking_id=booking_id, status=status).model_dump(by_alias=True)
        response = self._call("POST", "/api/admin/verify", ApiResponse, payload)
        return response.message or ""
