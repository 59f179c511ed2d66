"""
Payment ledger: collections, completion, refunds and overdue queries.

Every mutation keeps `balance_amount == amount - collected_amount` and
rejects anything that would push the balance below zero.
"""

import logging
from datetime import date
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.orm import Session

from seatdesk.core.exceptions import ConflictError, NotFoundError, ValidationError
from seatdesk.models.payment import Payment, PaymentStatus

logger = logging.getLogger(__name__)

TERMINAL_STATUSES = (PaymentStatus.refunded.value,)
COLLECTABLE_STATUSES = (PaymentStatus.pending.value, PaymentStatus.partial.value)


def get_payment(db: Session, payment_id: UUID) -> Payment:
    payment = db.query(Payment).filter(Payment.id == payment_id).first()
    if not payment:
        raise NotFoundError("Payment not found")
    return payment


def _set_collected(payment: Payment, collected: Decimal) -> None:
    balance = payment.amount - collected
    if collected < 0 or balance < 0:
        raise ValidationError(
            f"Collected amount {collected} would leave a negative balance on {payment.amount}"
        )
    payment.collected_amount = collected
    payment.balance_amount = balance
    if balance == 0:
        payment.status = PaymentStatus.completed.value
    elif collected > 0:
        payment.status = PaymentStatus.partial.value
    else:
        payment.status = PaymentStatus.pending.value


def list_payments(
    db: Session,
    property_id: Optional[UUID] = None,
    student_id: Optional[UUID] = None,
    status: Optional[str] = None,
) -> List[Payment]:
    query = db.query(Payment)
    if property_id:
        query = query.filter(Payment.property_id == property_id)
    if student_id:
        query = query.filter(Payment.student_id == student_id)
    if status:
        query = query.filter(Payment.status == status)
    return query.order_by(Payment.created_at.desc()).all()


def record_collection(
    db: Session,
    payment_id: UUID,
    amount: Decimal,
    payment_method: Optional[str] = None,
    transaction_id: Optional[str] = None,
    payment_date: Optional[date] = None,
) -> Payment:
    """Add a collected amount; the payment becomes partial or completed."""
    payment = get_payment(db, payment_id)
    if payment.status not in COLLECTABLE_STATUSES:
        raise ConflictError(
            f"Cannot collect on a payment with status '{payment.status}'"
        )
    amount = Decimal(str(amount))
    if amount <= 0:
        raise ValidationError("Collected amount must be positive")

    _set_collected(payment, payment.collected_amount + amount)
    if payment_method:
        payment.payment_method = payment_method
    if transaction_id:
        payment.transaction_id = transaction_id
    payment.payment_date = payment_date or date.today()

    db.commit()
    db.refresh(payment)
    logger.info(
        "Collected %s on payment %s (balance %s, %s)",
        amount, payment.id, payment.balance_amount, payment.status,
    )
    return payment


def complete_payment(
    db: Session,
    payment_id: UUID,
    transaction_id: Optional[str] = None,
    payment_date: Optional[date] = None,
) -> Payment:
    """Settle the remaining balance in full."""
    payment = get_payment(db, payment_id)
    if payment.status not in COLLECTABLE_STATUSES:
        raise ConflictError("Only pending or partial payments can be completed")

    _set_collected(payment, payment.amount)
    payment.transaction_id = transaction_id or payment.transaction_id
    payment.payment_date = payment_date or date.today()

    db.commit()
    db.refresh(payment)
    logger.info("Completed payment %s", payment.id)
    return payment


def refund_payment(
    db: Session,
    payment_id: UUID,
    amount: Optional[Decimal] = None,
    reason: Optional[str] = None,
) -> Payment:
    payment = get_payment(db, payment_id)
    if payment.status != PaymentStatus.completed.value:
        raise ConflictError("Only completed payments can be refunded")

    refund = Decimal(str(amount)) if amount is not None else payment.amount
    if refund <= 0 or refund > payment.amount:
        raise ValidationError("Refund amount must be positive and cannot exceed the payment amount")

    payment.status = PaymentStatus.refunded.value
    payment.refund_amount = refund
    payment.refund_reason = reason or "Payment refund"

    db.commit()
    db.refresh(payment)
    logger.info("Refunded %s on payment %s", refund, payment.id)
    return payment


def mark_failed(db: Session, payment_id: UUID) -> Payment:
    payment = get_payment(db, payment_id)
    if payment.status != PaymentStatus.pending.value:
        raise ConflictError("Only pending payments can be marked as failed")
    payment.status = PaymentStatus.failed.value
    db.commit()
    db.refresh(payment)
    logger.info("Payment %s marked as failed", payment.id)
    return payment


def list_overdue(
    db: Session,
    property_id: Optional[UUID] = None,
    today: Optional[date] = None,
) -> List[Payment]:
    """Payments past their due date that still carry a balance."""
    today = today or date.today()
    query = db.query(Payment).filter(
        Payment.due_date < today,
        Payment.balance_amount > 0,
        Payment.status.notin_(TERMINAL_STATUSES + (PaymentStatus.failed.value,)),
    )
    if property_id:
        query = query.filter(Payment.property_id == property_id)
    return query.order_by(Payment.due_date).all()


def payment_stats(db: Session, property_id: Optional[UUID] = None) -> dict:
    """Count and totals per payment status."""
    query = db.query(
        Payment.status,
        func.count(Payment.id),
        func.coalesce(func.sum(Payment.amount), 0),
        func.coalesce(func.sum(Payment.collected_amount), 0),
        func.coalesce(func.sum(Payment.balance_amount), 0),
    )
    if property_id:
        query = query.filter(Payment.property_id == property_id)

    by_status = {}
    for status, count, amount, collected, balance in query.group_by(Payment.status).all():
        by_status[status] = {
            "count": count,
            "total_amount": Decimal(str(amount)),
            "total_collected": Decimal(str(collected)),
            "total_balance": Decimal(str(balance)),
        }
    return by_status
