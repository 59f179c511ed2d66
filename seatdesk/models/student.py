import uuid
import enum
from sqlalchemy import Column, String, DateTime, ForeignKey, Text, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from seatdesk.db.session import Base

class StudentStatus(str, enum.Enum):
    active = "active"
    inactive = "inactive"

class DocumentType(str, enum.Enum):
    profile_photo = "profile_photo"
    identity_proof = "identity_proof"
    aadhar_card = "aadhar_card"
    other = "other"

class Student(Base):
    __tablename__ = "students"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    property_id = Column(UUID(as_uuid=True), ForeignKey("properties.id"), nullable=True, index=True)
    first_name = Column(String(50), nullable=False)
    last_name = Column(String(50), nullable=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    phone = Column(String(15), nullable=False)
    institution = Column(String(255), nullable=True)
    course = Column(String(255), nullable=True)
    status = Column(String(20), nullable=False, default=StudentStatus.active.value, index=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now(), nullable=True)

    # Relationships
    assignments = relationship("Assignment", back_populates="student", order_by="Assignment.start_date")
    current_assignments = relationship(
        "Assignment",
        primaryjoin="and_(Student.id == Assignment.student_id, Assignment.status == 'active')",
        order_by="Assignment.start_date",
        viewonly=True,
    )
    assignment_history = relationship(
        "Assignment",
        primaryjoin="and_(Student.id == Assignment.student_id, Assignment.status == 'completed')",
        order_by="Assignment.end_date.desc()",
        viewonly=True,
    )
    payment_history = relationship("Payment", back_populates="student", order_by="Payment.created_at.desc()")
    documents = relationship("StudentDocument", back_populates="student", cascade="all, delete-orphan")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name or ''}".strip()

class StudentDocument(Base):
    __tablename__ = "student_documents"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    student_id = Column(UUID(as_uuid=True), ForeignKey("students.id"), nullable=False, index=True)
    type = Column(String(20), nullable=False, default=DocumentType.other.value)
    url = Column(Text, nullable=False)
    original_name = Column(String(255), nullable=True)
    uploaded_at = Column(DateTime(timezone=True), server_default=func.now())

    student = relationship("Student", back_populates="documents")
