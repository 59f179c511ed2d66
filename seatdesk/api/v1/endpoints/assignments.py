from uuid import UUID
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from seatdesk.db.session import get_db
from seatdesk.api.deps import SessionContext, get_session_context
from seatdesk.models.assignment import AssignmentStatus
from seatdesk.schemas.assignment import (
    AssignmentCreate,
    AssignmentDetail,
    AssignmentRelease,
    AssignmentTransfer,
)
from seatdesk.services import assignments

router = APIRouter(prefix="/assignments", tags=["Assignments"])


@router.post("/", response_model=AssignmentDetail, status_code=status.HTTP_201_CREATED)
def create_assignment(data: AssignmentCreate, db: Session = Depends(get_db)):
    """
    Assign a student to a seat for a shift. A pending payment for the fee
    (the shift fee unless given) is created with the assignment.
    """
    return assignments.assign(
        db,
        student_id=data.student_id,
        seat_id=data.seat_id,
        shift_id=data.shift_id,
        start_date=data.start_date,
        fee=data.fee,
    )


@router.get("/", response_model=List[AssignmentDetail])
def list_assignments(
    student_id: Optional[UUID] = Query(None, alias="studentId"),
    seat_id: Optional[UUID] = Query(None, alias="seatId"),
    property_id: Optional[UUID] = Query(None, alias="propertyId"),
    assignment_status: Optional[AssignmentStatus] = Query(None, alias="status", description="active | completed"),
    ctx: SessionContext = Depends(get_session_context),
    db: Session = Depends(get_db),
):
    return assignments.list_assignments(
        db,
        student_id=student_id,
        seat_id=seat_id,
        property_id=ctx.resolve(property_id),
        status=assignment_status.value if assignment_status else None,
    )


@router.post("/{assignment_id}/release", response_model=AssignmentDetail)
def release_assignment(
    assignment_id: UUID,
    data: Optional[AssignmentRelease] = None,
    db: Session = Depends(get_db),
):
    """Move the assignment to history and free the seat (end date defaults to today)."""
    end_date = data.end_date if data else None
    return assignments.release(db, assignment_id, end_date=end_date)


@router.post("/{assignment_id}/transfer", response_model=AssignmentDetail)
def transfer_assignment(assignment_id: UUID, data: AssignmentTransfer, db: Session = Depends(get_db)):
    return assignments.transfer_seat(db, assignment_id, data.new_seat_id)
