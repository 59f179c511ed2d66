import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy import exists
from sqlalchemy.orm import Session

from seatdesk.core.exceptions import ConflictError, NotFoundError
from seatdesk.models.assignment import Assignment, AssignmentStatus
from seatdesk.models.property import Property
from seatdesk.models.shift import Shift

logger = logging.getLogger(__name__)


def get_shift(db: Session, shift_id: UUID) -> Shift:
    shift = db.query(Shift).filter(Shift.id == shift_id).first()
    if not shift:
        raise NotFoundError("Shift not found")
    return shift


def list_shifts(db: Session, property_id: Optional[UUID] = None) -> List[Shift]:
    query = db.query(Shift)
    if property_id:
        query = query.filter(Shift.property_id == property_id)
    return query.order_by(Shift.start_time, Shift.name).all()


def create_shift(db: Session, data: dict) -> Shift:
    if not db.query(Property.id).filter(Property.id == data["property_id"]).first():
        raise NotFoundError("Property not found")
    shift = Shift(**data)
    db.add(shift)
    db.commit()
    db.refresh(shift)
    logger.info("Created shift %s (%s-%s)", shift.name, shift.start_time, shift.end_time)
    return shift


def update_shift(db: Session, shift_id: UUID, data: dict) -> Shift:
    """Fee changes apply to new assignments only; existing ones keep their fee."""
    shift = get_shift(db, shift_id)
    for field, value in data.items():
        setattr(shift, field, value)
    db.commit()
    db.refresh(shift)
    return shift


def delete_shift(db: Session, shift_id: UUID) -> None:
    shift = get_shift(db, shift_id)
    referenced = db.query(
        exists().where(Assignment.shift_id == shift_id)
    ).scalar()
    if referenced:
        active = db.query(
            exists().where(
                Assignment.shift_id == shift_id,
                Assignment.status == AssignmentStatus.active.value,
            )
        ).scalar()
        if active:
            raise ConflictError("Cannot delete a shift with active assignments")
        raise ConflictError("Cannot delete a shift referenced by assignment history")
    db.delete(shift)
    db.commit()
    logger.info("Deleted shift %s", shift_id)
