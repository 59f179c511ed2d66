from uuid import UUID
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from seatdesk.db.session import get_db
from seatdesk.api.deps import SessionContext, get_session_context
from seatdesk.models.payment import PaymentStatus
from seatdesk.schemas.payment import (
    Payment as PaymentSchema,
    PaymentCollect,
    PaymentComplete,
    PaymentRefund,
    PaymentStats,
)
from seatdesk.services import payments

router = APIRouter(prefix="/payments", tags=["Payments"])


# ---------------------------------------------------------------------------
# Queries (fixed paths before /{payment_id})
# ---------------------------------------------------------------------------


@router.get("/", response_model=List[PaymentSchema])
def list_payments(
    property_id: Optional[UUID] = Query(None, alias="propertyId"),
    student_id: Optional[UUID] = Query(None, alias="studentId"),
    payment_status: Optional[PaymentStatus] = Query(None, alias="status"),
    ctx: SessionContext = Depends(get_session_context),
    db: Session = Depends(get_db),
):
    return payments.list_payments(
        db,
        property_id=ctx.resolve(property_id),
        student_id=student_id,
        status=payment_status.value if payment_status else None,
    )


@router.get("/overdue", response_model=List[PaymentSchema])
def list_overdue(
    property_id: Optional[UUID] = Query(None, alias="propertyId"),
    ctx: SessionContext = Depends(get_session_context),
    db: Session = Depends(get_db),
):
    """Payments past their due date that still carry a balance."""
    return payments.list_overdue(db, property_id=ctx.resolve(property_id))


@router.get("/stats", response_model=PaymentStats)
def payment_stats(
    property_id: Optional[UUID] = Query(None, alias="propertyId"),
    ctx: SessionContext = Depends(get_session_context),
    db: Session = Depends(get_db),
):
    return PaymentStats(by_status=payments.payment_stats(db, property_id=ctx.resolve(property_id)))


@router.get("/{payment_id}", response_model=PaymentSchema)
def get_payment(payment_id: UUID, db: Session = Depends(get_db)):
    return payments.get_payment(db, payment_id)


# ---------------------------------------------------------------------------
# Mutations
# ---------------------------------------------------------------------------


@router.post("/{payment_id}/collect", response_model=PaymentSchema)
def collect_payment(payment_id: UUID, data: PaymentCollect, db: Session = Depends(get_db)):
    """Record a (possibly partial) collection against the balance."""
    return payments.record_collection(
        db,
        payment_id,
        amount=data.amount,
        payment_method=data.payment_method.value if data.payment_method else None,
        transaction_id=data.transaction_id,
        payment_date=data.payment_date,
    )


@router.put("/{payment_id}/complete", response_model=PaymentSchema)
def complete_payment(payment_id: UUID, data: Optional[PaymentComplete] = None, db: Session = Depends(get_db)):
    data = data or PaymentComplete()
    return payments.complete_payment(
        db, payment_id, transaction_id=data.transaction_id, payment_date=data.payment_date
    )


@router.put("/{payment_id}/refund", response_model=PaymentSchema)
def refund_payment(payment_id: UUID, data: Optional[PaymentRefund] = None, db: Session = Depends(get_db)):
    data = data or PaymentRefund()
    return payments.refund_payment(db, payment_id, amount=data.amount, reason=data.reason)


@router.put("/{payment_id}/fail", response_model=PaymentSchema)
def fail_payment(payment_id: UUID, db: Session = Depends(get_db)):
    return payments.mark_failed(db, payment_id)
