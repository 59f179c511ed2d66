import uuid
import enum
from sqlalchemy import Column, String, Date, DateTime, DECIMAL, ForeignKey, Index, func, text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from seatdesk.db.session import Base

class AssignmentStatus(str, enum.Enum):
    active = "active"
    completed = "completed"

class Assignment(Base):
    __tablename__ = "assignments"
    __table_args__ = (
        # At most one active assignment per (seat, shift)
        Index(
            "uq_assignment_active_seat_shift",
            "seat_id",
            "shift_id",
            unique=True,
            postgresql_where=text("status = 'active'"),
            sqlite_where=text("status = 'active'"),
        ),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    student_id = Column(UUID(as_uuid=True), ForeignKey("students.id"), nullable=False, index=True)
    seat_id = Column(UUID(as_uuid=True), ForeignKey("seats.id"), nullable=False, index=True)
    shift_id = Column(UUID(as_uuid=True), ForeignKey("shifts.id"), nullable=False, index=True)
    property_id = Column(UUID(as_uuid=True), ForeignKey("properties.id"), nullable=False, index=True)
    start_date = Column(Date, nullable=False, index=True)
    end_date = Column(Date, nullable=True)
    fee = Column(DECIMAL(10, 2), nullable=False)
    status = Column(String(20), nullable=False, default=AssignmentStatus.active.value, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now(), nullable=True)

    student = relationship("Student", back_populates="assignments")
    seat = relationship("Seat", back_populates="assignments")
    shift = relationship("Shift", back_populates="assignments")
    payment = relationship("Payment", back_populates="assignment", uselist=False)

    @property
    def payment_id(self):
        return self.payment.id if self.payment else None
