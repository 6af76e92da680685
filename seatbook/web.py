import threading
import uuid
from collections import OrderedDict
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from fastapi import FastAPI, Form, HTTPException, Request
from fastapi.responses import HTMLResponse, RedirectResponse, Response

from seatbook.admin import AdminPanel, confirmation_question
from seatbook.backend import BackendClient
from seatbook.config import Config
from seatbook.logger_config import configure, logger
from seatbook.models import BOOKING_CANCELLED, BOOKING_CONFIRMED, CustomerDetails
from seatbook.notifier import MessageQueue
from seatbook.pages import render_admin_page, render_booking_page, render_prompt_page
from seatbook.widget import BookingWidget

VISITOR_COOKIE = "seatbook-visitor"
ADMIN_COOKIE = "admin-authenticated"
MAX_VISITORS = 1000

ADMIN_ACTIONS = {
    "confirm": BOOKING_CONFIRMED,
    "cancel": BOOKING_CANCELLED,
}

config = Config.load()
configure(config.log_level)
client = BackendClient(config.backend_url, config.backend_timeout)

app = FastAPI(title="Seatbook Front End")


@dataclass
class Visitor:
    widget: BookingWidget
    messages: MessageQueue


class VisitorRegistry:
    """Per-browser widget state, keyed by the visitor cookie."""

    def __init__(self, max_visitors: int = MAX_VISITORS) -> None:
        self.max_visitors = max_visitors
        self._visitors: "OrderedDict[str, Visitor]" = OrderedDict()
        self._lock = threading.Lock()

    def get_or_create(self, visitor_id: Optional[str]) -> Tuple[str, Visitor, bool]:
        with self._lock:
            if visitor_id and visitor_id in self._visitors:
                self._visitors.move_to_end(visitor_id)
                return visitor_id, self._visitors[visitor_id], False
            visitor_id = uuid.uuid4().hex
            messages = MessageQueue()
            visitor = Visitor(widget=BookingWidget(client, messages, config.payment), messages=messages)
            self._visitors[visitor_id] = visitor
            while len(self._visitors) > self.max_visitors:
                self._visitors.popitem(last=False)
            return visitor_id, visitor, True

    def clear(self) -> None:
        with self._lock:
            self._visitors.clear()


visitors = VisitorRegistry()


class CookieSessionStore:
    """Admin flag kept in the browser, the way a localStorage flag would be."""

    def __init__(self, cookies: Dict[str, str]) -> None:
        self.authenticated = cookies.get(ADMIN_COOKIE) == "true"
        self.changed = False

    def is_authenticated(self) -> bool:
        return self.authenticated

    def set_authenticated(self) -> None:
        self.authenticated = True
        self.changed = True

    def clear(self) -> None:
        self.authenticated = False
        self.changed = True

    def apply(self, response: Response) -> None:
        if not self.changed:
            return
        if self.authenticated:
            response.set_cookie(ADMIN_COOKIE, "true", httponly=True, samesite="lax")
        else:
            response.delete_cookie(ADMIN_COOKIE)


def _visitor(request: Request) -> Tuple[str, Visitor, bool]:
    return visitors.get_or_create(request.cookies.get(VISITOR_COOKIE))


def _finish(response: Response, visitor_id: str, created: bool) -> Response:
    if created:
        response.set_cookie(VISITOR_COOKIE, visitor_id, httponly=True, samesite="lax")
    return response


def _redirect(path: str, visitor_id: str, created: bool) -> Response:
    return _finish(RedirectResponse(path, status_code=303), visitor_id, created)


def _admin_panel(
    request: Request, visitor: Visitor, answer: str = "no", refetch: bool = True
) -> Tuple[AdminPanel, CookieSessionStore]:
    session = CookieSessionStore(request.cookies)
    panel = AdminPanel(
        client,
        session,
        visitor.messages,
        confirm=lambda _question: answer == "yes",
        refetch=refetch,
    )
    return panel, session


@app.get("/health")
def health() -> Dict[str, str]:
    return {"status": "ok"}


@app.get("/", response_class=HTMLResponse)
def booking_page(request: Request) -> Response:
    visitor_id, visitor, created = _visitor(request)
    # Every page load re-reads the inventory; a failed fetch keeps the last snapshot.
    visitor.widget.load_seats()
    html = render_booking_page(visitor.widget, visitor.messages.drain())
    return _finish(HTMLResponse(html), visitor_id, created)


@app.post("/seats/{seat_id}/toggle")
def toggle_seat(seat_id: int, request: Request) -> Response:
    visitor_id, visitor, created = _visitor(request)
    visitor.widget.toggle(seat_id)
    return _redirect("/", visitor_id, created)


@app.post("/seats/enter")
def enter_seats(request: Request, seat_input: str = Form("")) -> Response:
    visitor_id, visitor, created = _visitor(request)
    if seat_input.strip():
        visitor.widget.enter_seats(seat_input)
    return _redirect("/", visitor_id, created)


@app.post("/payment-method")
def payment_method(request: Request, payment_method: str = Form("")) -> Response:
    visitor_id, visitor, created = _visitor(request)
    visitor.widget.choose_payment_method(payment_method)
    return _redirect("/", visitor_id, created)


@app.post("/book")
def book(
    request: Request,
    customer_name: str = Form(""),
    customer_email: str = Form(""),
    customer_phone: str = Form(""),
    payment_method: str = Form(""),
) -> Response:
    visitor_id, visitor, created = _visitor(request)
    visitor.widget.submit(
        CustomerDetails(
            name=customer_name,
            email=customer_email,
            phone=customer_phone,
            payment_method=payment_method,
        )
    )
    return _redirect("/", visitor_id, created)


@app.post("/new-booking")
def new_booking(request: Request) -> Response:
    visitor_id, visitor, created = _visitor(request)
    visitor.widget.reset()
    return _redirect("/", visitor_id, created)


@app.get("/admin", response_class=HTMLResponse)
@app.get("/poggi", response_class=HTMLResponse)
def admin_page(request: Request) -> Response:
    visitor_id, visitor, created = _visitor(request)
    panel, _session = _admin_panel(request, visitor)
    panel.check_auth()
    html = render_admin_page(panel, visitor.messages.drain())
    return _finish(HTMLResponse(html), visitor_id, created)


@app.post("/admin/login")
def admin_login(request: Request, username: str = Form(""), password: str = Form("")) -> Response:
    visitor_id, visitor, created = _visitor(request)
    panel, session = _admin_panel(request, visitor, refetch=False)
    panel.login(username, password)
    response = _redirect("/admin", visitor_id, created)
    session.apply(response)
    return response


@app.post("/admin/logout")
def admin_logout(request: Request) -> Response:
    visitor_id, visitor, created = _visitor(request)
    panel, session = _admin_panel(request, visitor)
    panel.logout()
    response = _redirect("/admin", visitor_id, created)
    session.apply(response)
    return response


@app.post("/admin/refresh")
def admin_refresh(request: Request) -> Response:
    visitor_id, _visitor_state, created = _visitor(request)
    return _redirect("/admin", visitor_id, created)


def _admin_action(action: str) -> str:
    status = ADMIN_ACTIONS.get(action)
    if status is None:
        raise HTTPException(status_code=404, detail="Unknown action.")
    return status


@app.get("/admin/bookings/{booking_id}/{action}", response_class=HTMLResponse)
def admin_action_prompt(booking_id: int, action: str, request: Request) -> Response:
    status = _admin_action(action)
    if not CookieSessionStore(request.cookies).is_authenticated():
        return RedirectResponse("/admin", status_code=303)
    html = render_prompt_page(confirmation_question(status), f"/admin/bookings/{booking_id}/{action}")
    return HTMLResponse(html)


@app.post("/admin/bookings/{booking_id}/{action}")
def admin_action(booking_id: int, action: str, request: Request, answer: str = Form("no")) -> Response:
    status = _admin_action(action)
    visitor_id, visitor, created = _visitor(request)
    panel, session = _admin_panel(request, visitor, answer, refetch=False)
    if not session.is_authenticated():
        return _redirect("/admin", visitor_id, created)
    if status == BOOKING_CONFIRMED:
        panel.confirm_booking(booking_id)
    else:
        panel.cancel_booking(booking_id)
    return _redirect("/admin", visitor_id, created)


if __name__ == "__main__":
    import uvicorn

    logger.info(f"Front end for {config.backend_url} on {config.host}:{config.port}")
    uvicorn.run("seatbook.web:app", host=config.host, port=config.port, reload=config.reload)
