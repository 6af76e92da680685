import unittest

from fake_backend import FakeBackend

from seatbook.backend import BackendClient
from seatbook.config import PaymentDetails
from seatbook.models import CustomerDetails
from seatbook.notifier import MessageQueue
from seatbook.widget import (
    PHASE_CONFIRMED,
    PHASE_ENTRY,
    PHASE_SUBMITTING,
    BookingWidget,
    payment_instructions,
)


class BookingWidgetTests(unittest.TestCase):
    def setUp(self):
        self.backend = FakeBackend()
        self.messages = MessageQueue()
        self.widget = BookingWidget(
            BackendClient("http://backend.invalid", transport=self.backend),
            self.messages,
            PaymentDetails(bank_name="BCA", bank_account_number="123", bank_account_name="Panitia", cash_contacts=("Rina (+62 811)",)),
        )
        self.assertTrue(self.widget.load_seats())
        self.customer = CustomerDetails(
            name="Budi",
            email="budi@example.com",
            phone="0812",
            payment_method="bank_transfer",
        )

    def test_load_failure_keeps_grid_empty_without_alert(self):
        backend = FakeBackend()
        backend.down = True
        widget = BookingWidget(BackendClient("http://backend.invalid", transport=backend), self.messages)
        self.assertFalse(widget.load_seats())
        self.assertEqual(widget.grid(), [])
        self.assertEqual(self.messages.drain(), [])

    def test_toggle_ignores_unavailable_and_unknown_seats(self):
        self.assertFalse(self.widget.toggle(4))
        self.assertFalse(self.widget.toggle(8))
        self.assertFalse(self.widget.toggle(999))
        self.assertEqual(self.widget.state.selection, [])

    def test_toggle_updates_total_and_grid(self):
        self.widget.toggle(1)
        self.widget.toggle(2)
        self.widget.toggle(6)
        self.assertEqual(self.widget.state.total_amount, 80000)
        row_a = self.widget.grid()[0]
        self.assertTrue(row_a.left[0].selected)
        self.widget.toggle(2)
        self.assertEqual(self.widget.state.selected_ids, [1, 6])
        self.assertEqual(self.widget.selection_lines(), ["A1 (Regular) - Rp25.000", "E14 (VIP) - Rp30.000"])

    def test_manual_entry_alerts_each_bad_token(self):
        result = self.widget.enter_seats("A1, Z9, A16")
        self.assertEqual([s.id for s in result.added], [1])
        self.assertEqual(
            self.messages.drain(),
            [
                "Invalid seat format: Z9. Please use format like A1, B5, etc.",
                "Seat A16 is not available or does not exist.",
            ],
        )

    def test_submit_without_seats_makes_no_request(self):
        calls_before = len(self.backend.calls)
        result = self.widget.submit(self.customer)
        self.assertFalse(result.success)
        self.assertEqual(len(self.backend.calls), calls_before)
        self.assertEqual(self.messages.drain(), ["Please select at least one seat."])
        self.assertEqual(self.widget.state.phase, PHASE_ENTRY)

    def test_submit_with_missing_customer_fields(self):
        self.widget.toggle(1)
        calls_before = len(self.backend.calls)
        self.widget.submit(CustomerDetails(name="Budi", email="", phone="0812", payment_method="cash"))
        self.assertEqual(len(self.backend.calls), calls_before)
        self.assertEqual(self.messages.drain(), ["Please fill in all customer information."])

    def test_successful_booking_confirms_and_refetches(self):
        self.widget.toggle(1)
        self.widget.toggle(6)
        result = self.widget.submit(self.customer)
        self.assertTrue(result.success)
        self.assertEqual(result.booking_id, 7)
        state = self.widget.state
        self.assertEqual(state.phase, PHASE_CONFIRMED)
        self.assertEqual(state.selection, [])
        self.assertEqual(state.confirmation.reference, "BK0007")
        self.assertEqual(state.confirmation.seats_text, "A1 (Regular), E14 (VIP)")
        self.assertEqual(state.confirmation.total_amount, 55000)
        self.assertEqual(state.confirmation.instructions.title, "Bank Transfer Details:")
        self.assertIn("Account Number: 123", state.confirmation.instructions.lines)
        self.assertIn("BK0007", state.confirmation.instructions.lines[-1])
        self.assertEqual(self.backend.paths()[-2:], ["POST /api/book", "GET /api/seats"])
        booked = {s.id: s.status for s in state.seats}
        self.assertEqual(booked[1], "booked")

    def test_cash_instructions_list_contacts(self):
        self.widget.toggle(1)
        self.customer.payment_method = "cash"
        self.widget.submit(self.customer)
        instructions = self.widget.state.confirmation.instructions
        self.assertEqual(instructions.title, "Cash Payment Details:")
        self.assertIn("Contact: Rina (+62 811)", instructions.lines)

    def test_rejected_booking_keeps_form_for_retry(self):
        self.backend.reject_booking = "Error booking seats"
        self.widget.toggle(1)
        result = self.widget.submit(self.customer)
        self.assertFalse(result.success)
        self.assertEqual(self.messages.drain(), ["Booking failed: Error booking seats"])
        self.assertEqual(self.widget.state.phase, PHASE_ENTRY)
        self.assertEqual(self.widget.state.selected_ids, [1])
        self.assertEqual(self.widget.state.customer.name, "Budi")

    def test_network_failure_keeps_form_for_retry(self):
        self.widget.toggle(1)
        self.backend.down = True
        self.widget.submit(self.customer)
        self.assertEqual(self.messages.drain(), ["Booking failed. Please try again."])
        self.assertEqual(self.widget.state.phase, PHASE_ENTRY)
        self.assertEqual(self.widget.state.selected_ids, [1])

    def test_reset_returns_to_entry(self):
        self.widget.toggle(1)
        self.widget.submit(self.customer)
        self.widget.reset()
        state = self.widget.state
        self.assertEqual(state.phase, PHASE_ENTRY)
        self.assertIsNone(state.confirmation)
        self.assertEqual(state.selection, [])
        self.assertEqual(state.customer, CustomerDetails())

    def test_submit_while_submitting_is_refused(self):
        self.widget.toggle(1)
        self.widget.state.phase = PHASE_SUBMITTING
        result = self.widget.submit(self.customer)
        self.assertFalse(result.success)
        self.assertEqual(result.message, "Booking is already being submitted.")
        self.assertNotIn("POST /api/book", self.backend.paths())
        self.assertEqual(self.widget.state.phase, PHASE_SUBMITTING)
        self.assertEqual(self.widget.state.selected_ids, [1])

    def test_invalid_payment_method_keeps_previous_choice(self):
        self.widget.choose_payment_method("cash")
        self.widget.toggle(1)
        self.widget.submit(CustomerDetails(name="Budi", email="budi@example.com", phone="0812", payment_method=""))
        self.assertEqual(self.messages.drain(), ["Please choose a payment method."])
        self.assertEqual(self.widget.state.customer.payment_method, "cash")
        self.assertEqual(self.widget.state.customer.name, "Budi")
        self.assertNotIn("POST /api/book", self.backend.paths())

    def test_bank_instructions_skip_unset_account_fields(self):
        instructions = payment_instructions("bank_transfer", "BK0007", PaymentDetails())
        self.assertEqual(
            instructions.lines,
            [
                "Bank: BCA",
                "Please include your booking reference (BK0007) in the transfer description.",
            ],
        )

    def test_choose_payment_method_ignores_unknown_values(self):
        self.widget.choose_payment_method("cash")
        self.assertEqual(self.widget.state.customer.payment_method, "cash")
        self.widget.choose_payment_method("crypto")
        self.assertEqual(self.widget.state.customer.payment_method, "cash")


if __name__ == "__main__":
    unittest.main()
