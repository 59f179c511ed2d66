import uuid
from sqlalchemy import Column, String, Integer, DateTime, ForeignKey, Text, JSON, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from seatdesk.db.session import Base

class Property(Base):
    __tablename__ = "properties"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False)
    type = Column(String(50), nullable=True) # library, study_space, coworking
    address = Column(Text, nullable=False)
    phone = Column(String(20), nullable=True)
    email = Column(String(255), nullable=True)
    description = Column(Text, nullable=True)
    opening_hours = Column(String(100), nullable=True)
    total_seats = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now(), nullable=True)

    # Relationships
    layout = relationship("Layout", back_populates="property", uselist=False, cascade="all, delete-orphan")
    seats = relationship("Seat", back_populates="property")
    shifts = relationship("Shift", back_populates="property")

class Layout(Base):
    __tablename__ = "layouts"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    property_id = Column(UUID(as_uuid=True), ForeignKey("properties.id"), nullable=False, unique=True, index=True)
    rows = Column(Integer, nullable=False)
    columns = Column(Integer, nullable=False)
    aisle_width = Column(Integer, nullable=False, default=2)
    seat_width = Column(Integer, nullable=False, default=1)
    seat_height = Column(Integer, nullable=False, default=1)
    gap = Column(Integer, nullable=False, default=1)
    layout = Column(JSON, nullable=False) # rows x columns grid of occupiable flags
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now(), nullable=True)

    property = relationship("Property", back_populates="layout")
