"""
Derived payment status shown wherever a student's payment is displayed.

This is the single place the paid / overdue / pending / partial label is
computed; list views and detail views both call `derive_payment_status`.
"""

import enum
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from seatdesk.models.payment import Payment, PaymentStatus
from seatdesk.models.student import Student


class DerivedPaymentStatus(str, enum.Enum):
    paid = "paid"
    partial = "partial"
    pending = "pending"
    overdue = "overdue"


@dataclass(frozen=True)
class PaymentSummary:
    status: DerivedPaymentStatus
    amount: Decimal
    due_date: Optional[date]
    is_overdue: bool


def derive(
    amount: Decimal,
    collected_amount: Decimal,
    due_date: Optional[date],
    today: Optional[date] = None,
) -> PaymentSummary:
    """
    Label a payment from its amounts and due date.

    1. Nothing left to collect             -> paid
    2. Past the due date                   -> overdue
    3. Nothing collected yet               -> pending
    4. Otherwise                           -> partial

    `amount` in the result is the outstanding balance.
    """
    today = today or date.today()
    amount = Decimal(amount)
    collected = Decimal(collected_amount)
    balance = amount - collected

    if balance == 0:
        return PaymentSummary(DerivedPaymentStatus.paid, Decimal("0"), due_date, False)

    is_overdue = due_date is not None and today > due_date
    if is_overdue:
        status = DerivedPaymentStatus.overdue
    elif collected == 0:
        status = DerivedPaymentStatus.pending
    else:
        status = DerivedPaymentStatus.partial
    return PaymentSummary(status, balance, due_date, is_overdue)


def derive_payment_status(payment: Optional[Payment], today: Optional[date] = None) -> PaymentSummary:
    """
    Label a stored payment. A refunded fee is settled and owes nothing. A
    failed attempt leaves the fee owed, so it is labelled from its amounts
    like any other.
    """
    if payment is None:
        return PaymentSummary(DerivedPaymentStatus.pending, Decimal("0"), None, False)
    if payment.status == PaymentStatus.refunded.value:
        return PaymentSummary(DerivedPaymentStatus.paid, Decimal("0"), payment.due_date, False)
    return derive(payment.amount, payment.collected_amount, payment.due_date, today)


def derive_student_payment_status(student: Student, today: Optional[date] = None) -> PaymentSummary:
    """
    Status for a student's current assignment. With several active
    assignments the earliest-starting one is reported; with none the student
    owes nothing.
    """
    current = student.current_assignments
    if not current:
        return PaymentSummary(DerivedPaymentStatus.pending, Decimal("0"), None, False)
    return derive_payment_status(current[0].payment, today)
