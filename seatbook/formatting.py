from datetime import datetime
from typing import Union

from seatbook.models import PAYMENT_BANK_TRANSFER, SEAT_VIP

BOOKING_REFERENCE_PREFIX = "BK"


def format_rupiah(amount: Union[int, float]) -> str:
    """Format an IDR amount the way the id-ID locale does, without decimals: 80000 -> Rp80.000."""
    value = int(round(amount))
    sign = "-" if value < 0 else ""
    grouped = f"{abs(value):,}".replace(",", ".")
    return f"{sign}Rp{grouped}"


def format_timestamp(value: str) -> str:
    """Render an RFC 3339 timestamp as local date and time; unparseable input is returned as-is."""
    raw = (value or "").strip()
    if not raw:
        return ""
    if raw.endswith("Z"):
        raw = raw[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(raw)
    except ValueError:
        return value
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone()
    return f"{parsed.strftime('%x')} {parsed.strftime('%X')}"


def booking_reference(booking_id: int) -> str:
    return f"{BOOKING_REFERENCE_PREFIX}{booking_id:04d}"


def seat_type_label(seat_type: str) -> str:
    return "VIP" if seat_type == SEAT_VIP else "Regular"


def payment_method_label(method: str) -> str:
    return "Bank Transfer" if method == PAYMENT_BANK_TRANSFER else "Cash"
