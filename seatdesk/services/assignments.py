"""
Seat assignment lifecycle: assign, release and transfer.

An assignment binds a student to a seat for one shift. At most one active
assignment may exist per (seat, shift). Claiming a seat is a single
conditional UPDATE on its status so two concurrent requests can never both
win; the partial unique index on assignments backs this up at commit time.
"""

import logging
from datetime import date, timedelta
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from seatdesk.core.config import settings
from seatdesk.core.exceptions import (
    ConflictError,
    NotFoundError,
    SeatUnavailableError,
    ValidationError,
)
from seatdesk.models.assignment import Assignment, AssignmentStatus
from seatdesk.models.payment import Payment, PaymentStatus
from seatdesk.models.seat import Seat, SeatStatus
from seatdesk.models.student import Student, StudentStatus
from seatdesk.services.seats import get_seat, refresh_seat_status
from seatdesk.services.shifts import get_shift

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def get_assignment(db: Session, assignment_id: UUID) -> Assignment:
    assignment = db.query(Assignment).filter(Assignment.id == assignment_id).first()
    if not assignment:
        raise NotFoundError("Assignment not found")
    return assignment


def _get_active_assignment(db: Session, assignment_id: UUID) -> Assignment:
    assignment = get_assignment(db, assignment_id)
    if assignment.status != AssignmentStatus.active.value:
        raise ConflictError(
            f"Only active assignments can be changed (current status: '{assignment.status}')"
        )
    return assignment


def _claim_seat(db: Session, seat: Seat, start_date: date, today: date, allow_prebooked: bool) -> str:
    """
    Atomically move a seat into occupied/prebooked.

    The status check and the write happen in one UPDATE ... WHERE status IN
    (...); if another request changed the seat first, no row matches and the
    claim fails.
    """
    future = start_date > today
    target = SeatStatus.prebooked.value if future else SeatStatus.occupied.value
    allowed = [SeatStatus.available.value]
    if future and allow_prebooked:
        allowed.append(SeatStatus.prebooked.value)

    claimed = (
        db.query(Seat)
        .filter(Seat.id == seat.id, Seat.status.in_(allowed))
        .update({"status": target}, synchronize_session=False)
    )
    if claimed != 1:
        db.rollback()
        logger.warning("Seat %s could not be claimed (wanted %s)", seat.id, "/".join(allowed))
        raise SeatUnavailableError(f"Seat {seat.seat_number} is not available", seat_id=seat.id)
    return target


def _ensure_free_for_shift(db: Session, seat: Seat, shift_id: UUID) -> None:
    """Reject a seat that already has an active assignment on this shift."""
    taken = db.query(Assignment.id).filter(
        Assignment.seat_id == seat.id,
        Assignment.shift_id == shift_id,
        Assignment.status == AssignmentStatus.active.value,
    ).first()
    if taken:
        db.rollback()
        raise SeatUnavailableError(
            f"Seat {seat.seat_number} is already assigned for this shift", seat_id=seat.id
        )


def _flush_claim(db: Session, seat: Seat) -> None:
    try:
        db.flush()
    except IntegrityError:
        db.rollback()
        logger.warning("Seat %s already has an active assignment for this shift", seat.id)
        raise SeatUnavailableError(
            f"Seat {seat.seat_number} is already assigned for this shift", seat_id=seat.id
        )


def _commit_claim(db: Session, seat: Seat) -> None:
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.warning("Seat %s already has an active assignment for this shift", seat.id)
        raise SeatUnavailableError(
            f"Seat {seat.seat_number} is already assigned for this shift", seat_id=seat.id
        )


def _new_payment(assignment: Assignment) -> Payment:
    period = timedelta(days=settings.PAYMENT_DUE_DAYS)
    return Payment(
        assignment_id=assignment.id,
        student_id=assignment.student_id,
        property_id=assignment.property_id,
        amount=assignment.fee,
        collected_amount=Decimal("0"),
        balance_amount=assignment.fee,
        status=PaymentStatus.pending.value,
        due_date=assignment.start_date + period,
        period_start=assignment.start_date,
        period_end=assignment.start_date + period,
    )


# ---------------------------------------------------------------------------
# Operations
# ---------------------------------------------------------------------------


def assign(
    db: Session,
    student_id: UUID,
    seat_id: UUID,
    shift_id: UUID,
    start_date: Optional[date] = None,
    fee: Optional[Decimal] = None,
    today: Optional[date] = None,
) -> Assignment:
    """
    Book a student onto a seat for a shift.

    - The seat must be available, or available/prebooked when the assignment
      starts in the future.
    - No other active assignment may hold the same seat and shift, and the
      student may hold only one active assignment per shift.
    - The seat becomes occupied (prebooked for future start dates), and a
      pending payment for `fee` (defaulting to the shift fee) is created in
      the same transaction.
    """
    today = today or date.today()
    start_date = start_date or today

    student = db.query(Student).filter(Student.id == student_id).first()
    if not student:
        raise NotFoundError("Student not found")
    seat = get_seat(db, seat_id)
    shift = get_shift(db, shift_id)

    if shift.property_id != seat.property_id:
        raise ValidationError("Shift does not belong to the seat's property")

    fee = Decimal(str(fee)) if fee is not None else shift.fee
    if fee < 0:
        raise ValidationError("fee cannot be negative")

    _ensure_free_for_shift(db, seat, shift.id)

    holding = db.query(Assignment.id).filter(
        Assignment.student_id == student.id,
        Assignment.shift_id == shift.id,
        Assignment.status == AssignmentStatus.active.value,
    ).first()
    if holding:
        db.rollback()
        raise ConflictError(f"Student already has an active assignment for shift {shift.name}")

    seat_status = _claim_seat(db, seat, start_date, today, allow_prebooked=True)

    assignment = Assignment(
        student_id=student.id,
        seat_id=seat.id,
        shift_id=shift.id,
        property_id=seat.property_id,
        start_date=start_date,
        fee=fee,
        status=AssignmentStatus.active.value,
    )
    db.add(assignment)
    if student.status != StudentStatus.active.value:
        student.status = StudentStatus.active.value

    _flush_claim(db, seat)
    db.add(_new_payment(assignment))
    _commit_claim(db, seat)

    db.refresh(assignment)
    logger.info(
        "Assigned student %s to seat %s (%s, shift %s) from %s, fee %s",
        student.id, seat.seat_number, seat_status, shift.name, start_date, fee,
    )
    return assignment


def release(
    db: Session,
    assignment_id: UUID,
    end_date: Optional[date] = None,
) -> Assignment:
    """
    Complete an active assignment. The seat returns to available unless it is
    still held by another active assignment on a different shift.
    """
    assignment = _get_active_assignment(db, assignment_id)
    end_date = end_date or date.today()
    if end_date < assignment.start_date:
        raise ValidationError("end_date cannot be before the assignment start date")

    assignment.status = AssignmentStatus.completed.value
    assignment.end_date = end_date
    db.flush()

    refresh_seat_status(db, assignment.seat)
    db.commit()
    db.refresh(assignment)
    logger.info("Released assignment %s from seat %s", assignment.id, assignment.seat_id)
    return assignment


def transfer_seat(
    db: Session,
    assignment_id: UUID,
    new_seat_id: UUID,
    today: Optional[date] = None,
) -> Assignment:
    """
    Move an active assignment to another seat, keeping its fee, shift and
    dates. The new seat must be available and free on this shift; the old
    seat is freed.
    """
    today = today or date.today()
    assignment = _get_active_assignment(db, assignment_id)
    if assignment.seat_id == new_seat_id:
        raise ValidationError("Assignment is already on this seat")

    new_seat = get_seat(db, new_seat_id)
    if new_seat.property_id != assignment.property_id:
        raise ValidationError("Seats can only be transferred within the same property")

    old_seat = assignment.seat
    _ensure_free_for_shift(db, new_seat, assignment.shift_id)
    _claim_seat(db, new_seat, assignment.start_date, today, allow_prebooked=False)

    assignment.seat_id = new_seat.id
    _flush_claim(db, new_seat)
    db.expire(assignment, ["seat"])
    refresh_seat_status(db, old_seat, today)
    _commit_claim(db, new_seat)

    db.refresh(assignment)
    logger.info(
        "Transferred assignment %s from seat %s to seat %s",
        assignment.id, old_seat.seat_number, new_seat.seat_number,
    )
    return assignment


def list_assignments(
    db: Session,
    student_id: Optional[UUID] = None,
    seat_id: Optional[UUID] = None,
    property_id: Optional[UUID] = None,
    status: Optional[str] = None,
) -> List[Assignment]:
    query = db.query(Assignment)
    if student_id:
        query = query.filter(Assignment.student_id == student_id)
    if seat_id:
        query = query.filter(Assignment.seat_id == seat_id)
    if property_id:
        query = query.filter(Assignment.property_id == property_id)
    if status:
        query = query.filter(Assignment.status == status)
    return query.order_by(Assignment.start_date.desc()).all()
