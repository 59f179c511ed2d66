"""Tests for the derived payment status label."""

from datetime import date, timedelta
from decimal import Decimal

from seatdesk.services import assignments, payments, students
from seatdesk.services.payment_status import (
    DerivedPaymentStatus,
    derive,
    derive_payment_status,
    derive_student_payment_status,
)

TODAY = date(2024, 3, 15)


class TestDerive:
    """Precedence is paid, then overdue, then pending, then partial."""

    def test_fully_collected_is_paid(self):
        summary = derive(Decimal("500"), Decimal("500"), TODAY - timedelta(days=10), TODAY)

        assert summary.status == DerivedPaymentStatus.paid
        assert summary.amount == Decimal("0")
        assert summary.is_overdue is False

    def test_past_due_with_balance_is_overdue(self):
        summary = derive(Decimal("500"), Decimal("0"), TODAY - timedelta(days=1), TODAY)

        assert summary.status == DerivedPaymentStatus.overdue
        assert summary.amount == Decimal("500")
        assert summary.is_overdue is True

    def test_overdue_wins_over_partial(self):
        summary = derive(Decimal("500"), Decimal("200"), TODAY - timedelta(days=1), TODAY)

        assert summary.status == DerivedPaymentStatus.overdue
        assert summary.amount == Decimal("300")

    def test_due_today_is_not_overdue(self):
        summary = derive(Decimal("500"), Decimal("0"), TODAY, TODAY)

        assert summary.status == DerivedPaymentStatus.pending
        assert summary.is_overdue is False

    def test_nothing_collected_is_pending(self):
        summary = derive(Decimal("500"), Decimal("0"), TODAY + timedelta(days=20), TODAY)

        assert summary.status == DerivedPaymentStatus.pending
        assert summary.amount == Decimal("500")

    def test_some_collected_is_partial(self):
        summary = derive(Decimal("500"), Decimal("150"), TODAY + timedelta(days=20), TODAY)

        assert summary.status == DerivedPaymentStatus.partial
        assert summary.amount == Decimal("350")

    def test_no_payment_is_pending_zero(self):
        summary = derive_payment_status(None, TODAY)

        assert summary.status == DerivedPaymentStatus.pending
        assert summary.amount == Decimal("0")
        assert summary.due_date is None


class TestStudentPaymentStatus:
    """Tests for the status shown on student pages."""

    def test_student_without_assignment(self, db_session, make_student):
        student = make_student()
        summary = derive_student_payment_status(students.get_student(db_session, student.id))

        assert summary.status == DerivedPaymentStatus.pending
        assert summary.amount == Decimal("0")

    def test_follows_current_assignment_payment(
        self, db_session, seated_property, seat_by_number, make_shift, make_student
    ):
        shift = make_shift(seated_property, fee="500")
        student = make_student(seated_property)
        seat = seat_by_number(seated_property, "seat-1")
        assignment = assignments.assign(db_session, student.id, seat.id, shift.id)

        summary = derive_student_payment_status(students.get_student(db_session, student.id))
        assert summary.status == DerivedPaymentStatus.pending
        assert summary.amount == Decimal("500")

        payments.record_collection(db_session, assignment.payment.id, Decimal("200"))
        summary = derive_student_payment_status(students.get_student(db_session, student.id))
        assert summary.status == DerivedPaymentStatus.partial
        assert summary.amount == Decimal("300")

        payments.complete_payment(db_session, assignment.payment.id)
        summary = derive_student_payment_status(students.get_student(db_session, student.id))
        assert summary.status == DerivedPaymentStatus.paid
        assert summary.amount == Decimal("0")

    def test_old_unpaid_assignment_is_overdue(
        self, db_session, seated_property, seat_by_number, make_shift, make_student
    ):
        shift = make_shift(seated_property, fee="500")
        student = make_student(seated_property)
        seat = seat_by_number(seated_property, "seat-2")
        assignments.assign(
            db_session, student.id, seat.id, shift.id, start_date=date.today() - timedelta(days=45)
        )

        summary = derive_student_payment_status(students.get_student(db_session, student.id))
        assert summary.status == DerivedPaymentStatus.overdue
        assert summary.is_overdue is True


class TestStoredPaymentStatus:
    """Refunded and failed payments."""

    def test_refunded_owes_nothing(
        self, db_session, seated_property, seat_by_number, make_shift, make_student
    ):
        shift = make_shift(seated_property, fee="500")
        seat = seat_by_number(seated_property, "seat-1")
        assignment = assignments.assign(
            db_session, make_student(seated_property).id, seat.id, shift.id,
            start_date=date.today() - timedelta(days=45),
        )
        payments.complete_payment(db_session, assignment.payment.id)
        refunded = payments.refund_payment(db_session, assignment.payment.id, Decimal("100"))

        summary = derive_payment_status(refunded)
        assert summary.status == DerivedPaymentStatus.paid
        assert summary.amount == Decimal("0")
        assert summary.is_overdue is False

    def test_failed_still_owes_the_fee(
        self, db_session, seated_property, seat_by_number, make_shift, make_student
    ):
        shift = make_shift(seated_property, fee="500")
        seat = seat_by_number(seated_property, "seat-1")
        assignment = assignments.assign(db_session, make_student(seated_property).id, seat.id, shift.id)
        failed = payments.mark_failed(db_session, assignment.payment.id)

        summary = derive_payment_status(failed)
        assert summary.status == DerivedPaymentStatus.pending
        assert summary.amount == Decimal("500")

        late = derive_payment_status(failed, date.today() + timedelta(days=31))
        assert late.status == DerivedPaymentStatus.overdue
