from html import escape
from typing import List

from seatbook.admin import VIEW_DASHBOARD, AdminPanel
from seatbook.formatting import format_rupiah
from seatbook.layout import SeatCell, SeatRowLayout
from seatbook.models import PAYMENT_BANK_TRANSFER, PAYMENT_CASH, Confirmation
from seatbook.widget import PHASE_CONFIRMED, BookingWidget, payment_instructions

STYLE = """
body { font-family: system-ui, sans-serif; margin: 24px; color: #222; }
.alert { background: #fff3cd; border: 1px solid #e0c060; padding: 8px 12px; margin-bottom: 8px; border-radius: 6px; }
.seat-row { display: flex; gap: 4px; margin-bottom: 4px; align-items: center; }
.seat, .seat-placeholder { width: 28px; height: 28px; font-size: 11px; }
.seat { border: 1px solid #999; border-radius: 4px; background: #e8f5e9; cursor: pointer; }
.seat.vip { background: #fff8e1; }
.seat.sponsored { background: #ede7f6; cursor: default; }
.seat:disabled { background: #ccc; cursor: default; }
.seat.selected { background: #1976d2; color: #fff; }
.row-label { width: 28px; text-align: center; font-weight: 600; }
.seat-spacer { width: 10px; }
table { border-collapse: collapse; }
td, th { border: 1px solid #ddd; padding: 6px 8px; vertical-align: top; }
"""


def _page(title: str, body: str, messages: List[str]) -> str:
    alerts = "".join(f'<div class="alert" role="alert">{escape(m)}</div>' for m in messages)
    return (
        "<!DOCTYPE html>\n"
        '<html lang="en">\n<head>\n<meta charset="utf-8">\n'
        '<meta name="viewport" content="width=device-width,initial-scale=1">\n'
        f"<title>{escape(title)}</title>\n<style>{STYLE}</style>\n</head>\n"
        f"<body>\n{alerts}\n{body}\n</body>\n</html>\n"
    )


def render_seat_cell(cell: SeatCell) -> str:
    if cell.seat is None:
        return '<div class="seat-placeholder"></div>'
    seat = cell.seat
    attrs = (
        f'class="{escape(cell.css_classes)}" data-id="{seat.id}" data-row="{escape(seat.row)}" '
        f'data-number="{seat.number}" data-type="{escape(seat.type)}" data-status="{escape(seat.status)}"'
    )
    if not cell.is_interactive:
        return f"<button {attrs} disabled>{seat.number}</button>"
    return (
        f'<form method="post" action="/seats/{seat.id}/toggle" style="display:inline">'
        f"<button {attrs} type=\"submit\">{seat.number}</button></form>"
    )


def render_seat_row(row: SeatRowLayout) -> str:
    left = "".join(render_seat_cell(c) for c in row.left)
    right = "".join(render_seat_cell(c) for c in row.right)
    return (
        '<div class="seat-row"><div class="seat-spacer"></div>'
        f'{left}<div class="row-label">{escape(row.label)}</div>{right}'
        '<div class="seat-spacer"></div></div>'
    )


def _selected_seats(widget: BookingWidget) -> str:
    items = []
    for seat, line in zip(widget.state.selection, widget.selection_lines()):
        items.append(
            f"<li>{escape(line)} "
            f'<form method="post" action="/seats/{seat.id}/toggle" style="display:inline">'
            '<button class="remove-seat" type="submit">&times;</button></form></li>'
        )
    return (
        '<h3>Selected seats</h3>'
        f'<ul id="selected-seats-list">{"".join(items)}</ul>'
        f'<p>Total: <strong id="total-amount">{format_rupiah(widget.state.total_amount)}</strong></p>'
    )


def _payment_block(widget: BookingWidget) -> str:
    method = widget.state.customer.payment_method
    info = payment_instructions(method, "your booking reference", widget.payment_details)
    options = []
    for value, label in ((PAYMENT_BANK_TRANSFER, "Bank Transfer"), (PAYMENT_CASH, "Cash")):
        checked = " checked" if value == method else ""
        options.append(
            f'<label><input type="radio" name="payment_method" value="{value}"{checked}> {label}</label>'
        )
    switch = (
        '<form method="post" action="/payment-method" style="display:inline">'
        f'<input type="hidden" name="payment_method" value="{PAYMENT_CASH if method == PAYMENT_BANK_TRANSFER else PAYMENT_BANK_TRANSFER}">'
        '<button type="submit">Show other payment info</button></form>'
    )
    details = "".join(f"<p>{escape(line)}</p>" for line in info.lines[:-1])
    css = "bank-transfer-info" if method == PAYMENT_BANK_TRANSFER else "cash-info"
    return "".join(options), f'<div class="{css}"><h4>{escape(info.title)}</h4>{details}</div>{switch}'


def _booking_form(widget: BookingWidget) -> str:
    customer = widget.state.customer
    options, info = _payment_block(widget)
    return (
        '<form method="post" action="/seats/enter">'
        '<input id="seat-input" name="seat_input" placeholder="e.g. A1, B5">'
        '<button id="enter-seats" type="submit">Add seats</button></form>'
        f"{_selected_seats(widget)}"
        '<form id="customer-form" method="post" action="/book">'
        f'<p><input id="customer-name" name="customer_name" placeholder="Name" value="{escape(customer.name)}"></p>'
        f'<p><input id="customer-email" name="customer_email" placeholder="Email" value="{escape(customer.email)}"></p>'
        f'<p><input id="customer-phone" name="customer_phone" placeholder="Phone" value="{escape(customer.phone)}"></p>'
        f"<p>{options}</p>"
        '<button type="submit">Book now</button></form>'
        f"{info}"
    )


def _confirmation(confirmation: Confirmation) -> str:
    lines = "".join(f"<p>{escape(line)}</p>" for line in confirmation.instructions.lines)
    return (
        '<div id="booking-confirmation"><h2>Booking received</h2>'
        f'<p>Reference: <strong id="booking-reference">{escape(confirmation.reference)}</strong></p>'
        f'<p>Seats: <span id="confirmation-seats">{escape(confirmation.seats_text)}</span></p>'
        f'<p>Total: <span id="confirmation-amount">{format_rupiah(confirmation.total_amount)}</span></p>'
        f'<div id="confirmation-payment-details"><h4>{escape(confirmation.instructions.title)}</h4>{lines}</div>'
        '<form method="post" action="/new-booking"><button id="new-booking" type="submit">New booking</button></form>'
        "</div>"
    )


def render_booking_page(widget: BookingWidget, messages: List[str]) -> str:
    grid = "".join(render_seat_row(row) for row in widget.grid())
    if widget.state.phase == PHASE_CONFIRMED and widget.state.confirmation:
        panel = _confirmation(widget.state.confirmation)
    else:
        panel = f'<div id="booking-form">{_booking_form(widget)}</div>'
    body = (
        "<h1>Seat booking</h1>"
        '<div class="screen">STAGE</div>'
        f'<div class="seating-map" id="seating-map">{grid}</div>'
        f"{panel}"
    )
    return _page("Seat booking", body, messages)


def _login_form() -> str:
    return (
        '<div id="login-section"><h2>Admin login</h2>'
        '<form id="login-form" method="post" action="/admin/login">'
        '<p><input id="username" name="username" placeholder="Username"></p>'
        '<p><input id="password" name="password" type="password" placeholder="Password"></p>'
        '<button type="submit">Log in</button></form></div>'
    )


def _dashboard(panel: AdminPanel) -> str:
    rows = panel.rows()
    toolbar = (
        '<form method="post" action="/admin/refresh" style="display:inline">'
        '<button id="refresh-bookings" type="submit">Refresh</button></form> '
        '<form method="post" action="/admin/logout" style="display:inline">'
        '<button id="logout" type="submit">Logout</button></form>'
    )
    if not rows:
        return f'<div id="admin-dashboard"><h2>Pending bookings</h2>{toolbar}<p id="no-bookings">No pending bookings.</p></div>'
    body = []
    for row in rows:
        body.append(
            "<tr>"
            f"<td>{row.id}</td>"
            f"<td>{escape(row.customer_name)}</td>"
            f"<td>{escape(row.customer_email)}<br>{escape(row.customer_phone)}</td>"
            f"<td>{escape(row.seats_text)}</td>"
            f"<td>{escape(row.payment_label)}</td>"
            f"<td>{escape(row.total_text)}</td>"
            f"<td>{escape(row.created_text)}</td>"
            '<td class="action-buttons">'
            f'<a class="confirm-btn" href="/admin/bookings/{row.id}/confirm">Confirm</a> '
            f'<a class="cancel-btn" href="/admin/bookings/{row.id}/cancel">Cancel</a>'
            "</td></tr>"
        )
    head = (
        "<tr><th>ID</th><th>Name</th><th>Contact</th><th>Seats</th>"
        "<th>Payment</th><th>Amount</th><th>Date</th><th>Actions</th></tr>"
    )
    return (
        f'<div id="admin-dashboard"><h2>Pending bookings</h2>{toolbar}'
        f'<table><thead>{head}</thead><tbody id="bookings-table-body">{"".join(body)}</tbody></table></div>'
    )


def render_admin_page(panel: AdminPanel, messages: List[str]) -> str:
    body = _dashboard(panel) if panel.state.view == VIEW_DASHBOARD else _login_form()
    return _page("Admin", f"<h1>Admin panel</h1>{body}", messages)


def render_prompt_page(question: str, action_url: str) -> str:
    body = (
        f'<p id="prompt">{escape(question)}</p>'
        f'<form method="post" action="{escape(action_url)}">'
        '<button name="answer" value="yes" type="submit">Yes</button> '
        '<button name="answer" value="no" type="submit">No</button></form>'
    )
    return _page("Please confirm", body, [])
