from typing import List, Optional
from pydantic import BaseModel, EmailStr, UUID4
from datetime import datetime
from decimal import Decimal

from seatdesk.models.student import StudentStatus
from seatdesk.schemas.assignment import AssignmentDetail
from seatdesk.schemas.payment import Payment, PaymentStatusSummary


class StudentDocument(BaseModel):
    id: UUID4
    type: str
    url: str
    original_name: Optional[str] = None
    uploaded_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class StudentBase(BaseModel):
    first_name: str
    last_name: Optional[str] = None
    email: EmailStr
    phone: str
    institution: Optional[str] = None
    course: Optional[str] = None
    notes: Optional[str] = None


class StudentUpdate(BaseModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    institution: Optional[str] = None
    course: Optional[str] = None
    notes: Optional[str] = None
    status: Optional[StudentStatus] = None


# Student list item (GET /students)
class StudentListItem(StudentBase):
    id: UUID4
    property_id: Optional[UUID4] = None
    status: StudentStatus
    payment_status: Optional[PaymentStatusSummary] = None

    class Config:
        from_attributes = True


# Student detail (GET /students/{id})
class Student(StudentListItem):
    current_assignments: List[AssignmentDetail] = []
    assignment_history: List[AssignmentDetail] = []
    payment_history: List[Payment] = []
    documents: List[StudentDocument] = []

    class Config:
        from_attributes = True


# GET /students/stats
class StudentPaymentTotals(BaseModel):
    total_due: Decimal
    total_collected: Decimal
    outstanding_balance: Decimal


class StudentStats(BaseModel):
    total_students: int
    active_students: int
    students_with_assignments: int
    students_with_pending_payments: int
    students_overdue: int
    payment_summary: StudentPaymentTotals
