import uuid
from sqlalchemy import Column, String, DateTime, DECIMAL, ForeignKey, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from seatdesk.db.session import Base

class Shift(Base):
    __tablename__ = "shifts"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    property_id = Column(UUID(as_uuid=True), ForeignKey("properties.id"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    start_time = Column(String(5), nullable=False) # "08:00"
    end_time = Column(String(5), nullable=False)
    fee = Column(DECIMAL(10, 2), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    property = relationship("Property", back_populates="shifts")
    assignments = relationship("Assignment", back_populates="shift")
