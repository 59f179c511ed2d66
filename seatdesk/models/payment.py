import uuid
import enum
from sqlalchemy import Column, String, Date, DateTime, DECIMAL, ForeignKey, Text, CheckConstraint, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from seatdesk.db.session import Base

class PaymentStatus(str, enum.Enum):
    pending = "pending"
    partial = "partial"
    completed = "completed"
    failed = "failed"
    refunded = "refunded"

class PaymentMethod(str, enum.Enum):
    cash = "cash"
    card = "card"
    online = "online"
    bank_transfer = "bank_transfer"

class Payment(Base):
    __tablename__ = "payments"
    __table_args__ = (
        CheckConstraint("balance_amount >= 0", name="ck_payment_balance_non_negative"),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    assignment_id = Column(UUID(as_uuid=True), ForeignKey("assignments.id"), nullable=False, unique=True, index=True)
    student_id = Column(UUID(as_uuid=True), ForeignKey("students.id"), nullable=False, index=True)
    property_id = Column(UUID(as_uuid=True), ForeignKey("properties.id"), nullable=False, index=True)
    amount = Column(DECIMAL(10, 2), nullable=False)
    collected_amount = Column(DECIMAL(10, 2), nullable=False, default=0)
    balance_amount = Column(DECIMAL(10, 2), nullable=False)
    status = Column(String(20), nullable=False, default=PaymentStatus.pending.value, index=True)
    payment_method = Column(String(20), nullable=True)
    transaction_id = Column(String(64), nullable=True)
    payment_date = Column(Date, nullable=True)
    due_date = Column(Date, nullable=True, index=True)
    period_start = Column(Date, nullable=False)
    period_end = Column(Date, nullable=False)
    refund_amount = Column(DECIMAL(10, 2), nullable=True)
    refund_reason = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now(), nullable=True)

    assignment = relationship("Assignment", back_populates="payment")
    student = relationship("Student", back_populates="payment_history")
