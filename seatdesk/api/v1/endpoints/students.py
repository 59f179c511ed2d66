from uuid import UUID
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from seatdesk.db.session import get_db
from seatdesk.api.deps import SessionContext, get_session_context
from seatdesk.models.student import Student, StudentStatus
from seatdesk.schemas.payment import PaymentStatusSummary
from seatdesk.schemas.student import (
    Student as StudentSchema,
    StudentListItem,
    StudentStats,
    StudentUpdate,
)
from seatdesk.services import students
from seatdesk.services.payment_status import derive_student_payment_status

router = APIRouter(prefix="/students", tags=["Students"])


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _payment_status(student: Student) -> PaymentStatusSummary:
    return PaymentStatusSummary.model_validate(derive_student_payment_status(student))


def _student_detail(student: Student) -> StudentSchema:
    detail = StudentSchema.model_validate(student)
    detail.payment_status = _payment_status(student)
    return detail


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


@router.get("/", response_model=List[StudentListItem])
def list_students(
    property_id: Optional[UUID] = Query(None, alias="propertyId"),
    student_status: Optional[StudentStatus] = Query(None, alias="status", description="active | inactive"),
    ctx: SessionContext = Depends(get_session_context),
    db: Session = Depends(get_db),
):
    """Students with the derived payment status of their current assignment."""
    rows = students.list_students(
        db,
        property_id=ctx.resolve(property_id),
        status=student_status.value if student_status else None,
    )
    items = []
    for student in rows:
        item = StudentListItem.model_validate(student)
        item.payment_status = _payment_status(student)
        items.append(item)
    return items


@router.get("/stats", response_model=StudentStats)
def student_stats(
    property_id: Optional[UUID] = Query(None, alias="propertyId"),
    ctx: SessionContext = Depends(get_session_context),
    db: Session = Depends(get_db),
):
    """Headcounts, students owing fees and due/collected/outstanding totals."""
    return students.student_stats(db, ctx.require_property(property_id))


@router.get("/{student_id}", response_model=StudentSchema)
def get_student(student_id: UUID, db: Session = Depends(get_db)):
    return _student_detail(students.get_student(db, student_id))


@router.patch("/{student_id}", response_model=StudentSchema)
def update_student(student_id: UUID, data: StudentUpdate, db: Session = Depends(get_db)):
    payload = data.model_dump(exclude_unset=True)
    if payload.get("email"):
        payload["email"] = payload["email"].lower()
    if payload.get("status"):
        payload["status"] = payload["status"].value
    return _student_detail(students.update_student(db, student_id, payload))


@router.get("/{student_id}/payment-status", response_model=PaymentStatusSummary)
def get_payment_status(student_id: UUID, db: Session = Depends(get_db)):
    """paid, overdue, pending or partial, with the outstanding balance as `amount`."""
    return _payment_status(students.get_student(db, student_id))
