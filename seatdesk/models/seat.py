import uuid
import enum
from sqlalchemy import Column, String, Integer, ForeignKey, Text, DateTime, UniqueConstraint, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from seatdesk.db.session import Base

class SeatStatus(str, enum.Enum):
    available = "available"
    occupied = "occupied"
    prebooked = "prebooked"
    maintenance = "maintenance"

class Seat(Base):
    __tablename__ = "seats"
    __table_args__ = (
        UniqueConstraint("property_id", "seat_number", name="uq_seat_property_number"),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    property_id = Column(UUID(as_uuid=True), ForeignKey("properties.id"), nullable=False, index=True)
    seat_number = Column(String(20), nullable=False) # seat-1, seat-2, ...
    row = Column(Integer, nullable=False)
    column = Column(Integer, nullable=False)
    section = Column(String(50), nullable=True, index=True) # zone label, e.g. "A"
    status = Column(String(20), nullable=False, default=SeatStatus.available.value, index=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    property = relationship("Property", back_populates="seats")
    assignments = relationship("Assignment", back_populates="seat")
