from typing import Annotated, Dict, Optional
from pydantic import BaseModel, Field, UUID4
from decimal import Decimal
from datetime import date, datetime

from seatdesk.models.payment import PaymentMethod, PaymentStatus
from seatdesk.services.payment_status import DerivedPaymentStatus


class Payment(BaseModel):
    id: UUID4
    assignment_id: UUID4
    student_id: UUID4
    property_id: UUID4
    amount: Decimal
    collected_amount: Decimal
    balance_amount: Decimal
    status: PaymentStatus
    payment_method: Optional[str] = None
    transaction_id: Optional[str] = None
    payment_date: Optional[date] = None
    due_date: Optional[date] = None
    period_start: date
    period_end: date
    refund_amount: Optional[Decimal] = None
    refund_reason: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


# POST /payments/{id}/collect
class PaymentCollect(BaseModel):
    amount: Annotated[Decimal, Field(gt=0)]
    payment_method: Optional[PaymentMethod] = None
    transaction_id: Optional[str] = None
    payment_date: Optional[date] = None


# PUT /payments/{id}/complete
class PaymentComplete(BaseModel):
    transaction_id: Optional[str] = None
    payment_date: Optional[date] = None


# PUT /payments/{id}/refund
class PaymentRefund(BaseModel):
    amount: Optional[Annotated[Decimal, Field(gt=0)]] = None
    reason: Optional[str] = None


# Derived status shown on student lists and detail pages
class PaymentStatusSummary(BaseModel):
    status: DerivedPaymentStatus
    amount: Decimal
    due_date: Optional[date] = None
    is_overdue: bool

    class Config:
        from_attributes = True


class PaymentStatusBucket(BaseModel):
    count: int
    total_amount: Decimal
    total_collected: Decimal
    total_balance: Decimal


class PaymentStats(BaseModel):
    by_status: Dict[str, PaymentStatusBucket]
