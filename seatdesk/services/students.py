"""Student records and booking intake."""

import logging
import os
import uuid
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import List, Optional, Sequence
from uuid import UUID

from sqlalchemy.orm import Session, selectinload

from seatdesk.core.config import settings
from seatdesk.core.exceptions import NotFoundError, SeatDeskError, ValidationError
from seatdesk.models.assignment import Assignment
from seatdesk.models.payment import PaymentStatus
from seatdesk.models.seat import Seat
from seatdesk.models.student import DocumentType, Student, StudentDocument, StudentStatus
from seatdesk.services import assignments
from seatdesk.services.payment_status import derive_payment_status
from seatdesk.services.properties import get_property

logger = logging.getLogger(__name__)

STUDENT_FIELDS = ("first_name", "last_name", "email", "phone", "institution", "course", "notes")


@dataclass
class UploadedDocument:
    type: str
    filename: str
    content: bytes


def get_student(db: Session, student_id: UUID) -> Student:
    """Load a student with assignments, their seat/shift/payment, and payments."""
    student = (
        db.query(Student)
        .options(
            selectinload(Student.current_assignments).selectinload(Assignment.seat),
            selectinload(Student.current_assignments).selectinload(Assignment.shift),
            selectinload(Student.current_assignments).selectinload(Assignment.payment),
            selectinload(Student.assignment_history).selectinload(Assignment.seat),
            selectinload(Student.assignment_history).selectinload(Assignment.shift),
            selectinload(Student.payment_history),
            selectinload(Student.documents),
        )
        .filter(Student.id == student_id)
        .first()
    )
    if not student:
        raise NotFoundError("Student not found")
    return student


def list_students(
    db: Session,
    property_id: Optional[UUID] = None,
    status: Optional[str] = None,
) -> List[Student]:
    query = db.query(Student).options(
        selectinload(Student.current_assignments).selectinload(Assignment.payment),
    )
    if property_id:
        query = query.filter(Student.property_id == property_id)
    if status:
        query = query.filter(Student.status == status)
    return query.order_by(Student.first_name, Student.last_name).all()


def update_student(db: Session, student_id: UUID, data: dict) -> Student:
    student = db.query(Student).filter(Student.id == student_id).first()
    if not student:
        raise NotFoundError("Student not found")
    if "email" in data and data["email"] != student.email:
        clash = db.query(Student.id).filter(Student.email == data["email"]).first()
        if clash:
            raise ValidationError("Email already registered to another student")
    for field, value in data.items():
        setattr(student, field, value)
    db.commit()
    return get_student(db, student_id)


def _resolve_seat(db: Session, property_id: UUID, seat_no: str) -> Seat:
    seat_no = seat_no.strip()
    # "7" and "seat-7" name the same seat
    seat_number = f"seat-{seat_no}" if seat_no.isdigit() else seat_no
    seat = db.query(Seat).filter(
        Seat.property_id == property_id,
        Seat.seat_number == seat_number,
    ).first()
    if not seat:
        raise NotFoundError(f"Seat {seat_no} not found")
    return seat


def _find_or_create_student(db: Session, property_id: UUID, fields: dict) -> Student:
    email = (fields.get("email") or "").strip().lower()
    if not email or not fields.get("first_name") or not fields.get("phone"):
        raise ValidationError("first_name, email and phone are required")

    student = db.query(Student).filter(Student.email == email).first()
    if student:
        return student

    student = Student(
        property_id=property_id,
        **{k: v for k, v in fields.items() if k in STUDENT_FIELDS and k != "email"},
        email=email,
    )
    db.add(student)
    db.flush()
    logger.info("Registered new student %s", email)
    return student


def _store_document(student_id: UUID, doc: UploadedDocument) -> StudentDocument:
    folder = os.path.join(settings.UPLOAD_DIR, str(student_id))
    os.makedirs(folder, exist_ok=True)
    safe_name = os.path.basename(doc.filename or "document")
    path = os.path.join(folder, f"{uuid.uuid4().hex[:8]}_{safe_name}")
    with open(path, "wb") as fh:
        fh.write(doc.content)

    return StudentDocument(
        student_id=student_id,
        type=doc.type,
        url=path,
        original_name=doc.filename,
    )


def _discard_documents(stored: Sequence[StudentDocument]) -> None:
    for document in stored:
        try:
            os.remove(document.url)
        except OSError:
            logger.warning("Could not remove orphaned upload %s", document.url)


def create_booking(
    db: Session,
    property_id: UUID,
    student_fields: dict,
    seat_no: Optional[str],
    shift_id: Optional[UUID],
    move_in_date: Optional[date],
    fee: Optional[Decimal] = None,
    documents: Sequence[UploadedDocument] = (),
) -> Assignment:
    """
    Book a (possibly new) student onto a seat.

    The student row, assignment and payment are committed together; if the
    seat cannot be claimed nothing is persisted.
    """
    if not seat_no:
        raise ValidationError("seatNo is required")
    if not shift_id:
        raise ValidationError("shift is required")
    if not move_in_date:
        raise ValidationError("moveInDate is required")

    known_types = {t.value for t in DocumentType}
    for doc in documents:
        if doc.type not in known_types:
            raise ValidationError(f"Unknown document type '{doc.type}'")

    get_property(db, property_id)
    seat = _resolve_seat(db, property_id, seat_no)
    student = _find_or_create_student(db, property_id, student_fields)

    # Files are written before the booking commits; on failure they are removed
    stored = []
    try:
        for doc in documents:
            stored.append(_store_document(student.id, doc))
        assignment = assignments.assign(
            db,
            student_id=student.id,
            seat_id=seat.id,
            shift_id=shift_id,
            start_date=move_in_date,
            fee=fee,
        )
    except (OSError, SeatDeskError):
        db.rollback()
        _discard_documents(stored)
        raise

    if stored:
        db.add_all(stored)
        db.commit()
        db.refresh(assignment)

    return assignment


def student_stats(db: Session, property_id: UUID, today: Optional[date] = None) -> dict:
    """
    Headcounts and fee totals over the current assignments of a property's
    students. Refunded payments are left out of the totals.
    """
    get_property(db, property_id)
    today = today or date.today()

    total_due = total_collected = outstanding = Decimal("0")
    owing = overdue = with_assignments = active = 0
    rows = list_students(db, property_id=property_id)
    for student in rows:
        if student.status == StudentStatus.active.value:
            active += 1
        if student.current_assignments:
            with_assignments += 1

        summaries = []
        for assignment in student.current_assignments:
            payment = assignment.payment
            if payment is None or payment.status == PaymentStatus.refunded.value:
                continue
            summary = derive_payment_status(payment, today)
            summaries.append(summary)
            total_due += payment.amount
            total_collected += payment.collected_amount
            outstanding += summary.amount

        if any(s.amount > 0 for s in summaries):
            owing += 1
        if any(s.is_overdue for s in summaries):
            overdue += 1

    return {
        "total_students": len(rows),
        "active_students": active,
        "students_with_assignments": with_assignments,
        "students_with_pending_payments": owing,
        "students_overdue": overdue,
        "payment_summary": {
            "total_due": total_due,
            "total_collected": total_collected,
            "outstanding_balance": outstanding,
        },
    }
