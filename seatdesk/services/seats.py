"""Seat registry: bulk creation from a layout, status changes and queries."""

import logging
from datetime import date
from typing import List, Optional
from uuid import UUID

from sqlalchemy import exists
from sqlalchemy.orm import Session

from seatdesk.core.exceptions import ConflictError, NotFoundError, ValidationError
from seatdesk.models.assignment import Assignment, AssignmentStatus
from seatdesk.models.property import Layout, Property
from seatdesk.models.seat import Seat, SeatStatus

logger = logging.getLogger(__name__)

SEAT_STATUSES = {s.value for s in SeatStatus}


def get_seat(db: Session, seat_id: UUID) -> Seat:
    seat = db.query(Seat).filter(Seat.id == seat_id).first()
    if not seat:
        raise NotFoundError("Seat not found")
    return seat


def _has_active_assignment(db: Session, *criteria) -> bool:
    return db.query(
        exists().where(Assignment.status == AssignmentStatus.active.value, *criteria)
    ).scalar()


def bulk_create(
    db: Session,
    property_id: UUID,
    grid: Optional[List[List[bool]]] = None,
    section: Optional[str] = None,
) -> List[Seat]:
    """
    Create one seat per occupiable cell of the grid (the saved layout by
    default), in row-major order.

    Seats are numbered seat-1, seat-2, ... and placed at the 1-based row and
    column of their cell. When the property declares fewer seats than the grid
    holds, numbering stops at the declared capacity. Fails if the property
    already has seats; they must be cleared explicitly first.
    """
    prop = db.query(Property).filter(Property.id == property_id).first()
    if not prop:
        raise NotFoundError("Property not found")

    if grid is None:
        layout = db.query(Layout).filter(Layout.property_id == property_id).first()
        if not layout:
            raise NotFoundError("Layout not found")
        grid = layout.layout

    if db.query(exists().where(Seat.property_id == property_id)).scalar():
        raise ConflictError("Seats already exist for this property; clear them first")

    limit = prop.total_seats or None
    seats = []
    for row_index, cells in enumerate(grid):
        for col_index, occupiable in enumerate(cells):
            if not occupiable:
                continue
            if limit is not None and len(seats) >= limit:
                break
            seats.append(Seat(
                property_id=property_id,
                seat_number=f"seat-{len(seats) + 1}",
                row=row_index + 1,
                column=col_index + 1,
                section=section,
                status=SeatStatus.available.value,
            ))

    if not seats:
        raise ValidationError("Layout has no occupiable cells")

    db.add_all(seats)
    db.commit()
    logger.info("Created %d seats for property %s", len(seats), property_id)
    return list_by_property(db, property_id)


def list_by_property(
    db: Session,
    property_id: UUID,
    status: Optional[str] = None,
    section: Optional[str] = None,
) -> List[Seat]:
    query = db.query(Seat).filter(Seat.property_id == property_id)
    if status:
        if status not in SEAT_STATUSES:
            raise ValidationError(f"Invalid status. Must be one of: {', '.join(sorted(SEAT_STATUSES))}")
        query = query.filter(Seat.status == status)
    if section:
        query = query.filter(Seat.section == section)
    return query.order_by(Seat.row, Seat.column).all()


def update_status(db: Session, seat_id: UUID, new_status: str) -> Seat:
    """
    Set a seat's status. Only the value is validated; assignment-driven
    transitions are owned by the assignment service.
    """
    if new_status not in SEAT_STATUSES:
        raise ValidationError(f"Invalid status. Must be one of: {', '.join(sorted(SEAT_STATUSES))}")

    seat = get_seat(db, seat_id)
    seat.status = new_status
    db.commit()
    db.refresh(seat)
    logger.info("Seat %s status set to %s", seat.seat_number, new_status)
    return seat


def update_seat(db: Session, seat_id: UUID, data: dict) -> Seat:
    seat = get_seat(db, seat_id)
    for field, value in data.items():
        setattr(seat, field, value)
    db.commit()
    db.refresh(seat)
    return seat


def bulk_update(db: Session, updates: List[dict]) -> List[Seat]:
    """
    Apply section, status and notes edits to several seats at once.

    Each update is a dict with the seat `id` plus the fields to change. Every
    seat must exist; otherwise nothing is written.
    """
    if not updates:
        raise ValidationError("Expected at least one seat update")

    ids = [u["id"] for u in updates]
    found = {s.id: s for s in db.query(Seat).filter(Seat.id.in_(ids)).all()}
    missing = [str(seat_id) for seat_id in ids if seat_id not in found]
    if missing:
        raise NotFoundError(f"Seat not found: {', '.join(missing)}")

    for update in updates:
        if "status" in update and update["status"] not in SEAT_STATUSES:
            raise ValidationError(f"Invalid status. Must be one of: {', '.join(sorted(SEAT_STATUSES))}")

    for update in updates:
        seat = found[update["id"]]
        for field, value in update.items():
            if field != "id":
                setattr(seat, field, value)

    db.commit()
    logger.info("Bulk updated %d seat(s)", len(found))
    return [found[seat_id] for seat_id in dict.fromkeys(ids)]


def delete_seat(db: Session, seat_id: UUID) -> None:
    seat = get_seat(db, seat_id)
    if _has_active_assignment(db, Assignment.seat_id == seat_id):
        raise ConflictError("Cannot delete seat with active assignments")
    if db.query(exists().where(Assignment.seat_id == seat_id)).scalar():
        # Completed assignments form the audit history and keep the seat row
        raise ConflictError("Cannot delete seat with assignment history")
    db.delete(seat)
    db.commit()
    logger.info("Deleted seat %s", seat_id)


def clear_seats(db: Session, property_id: UUID) -> int:
    """Delete every seat of a property that has never been assigned."""
    if _has_active_assignment(db, Assignment.property_id == property_id):
        raise ConflictError("Cannot clear seats while assignments are active")
    if db.query(exists().where(Assignment.property_id == property_id)).scalar():
        raise ConflictError("Cannot clear seats with assignment history")

    count = (
        db.query(Seat)
        .filter(Seat.property_id == property_id)
        .delete(synchronize_session="fetch")
    )
    db.commit()
    logger.info("Cleared %d seats for property %s", count, property_id)
    return count


def seat_status_for(db: Session, seat_id: UUID, today: Optional[date] = None) -> str:
    """
    Status a seat should have given its active assignments: occupied if any
    has started, prebooked if all start in the future, otherwise available.
    """
    today = today or date.today()
    starts = [
        start for (start,) in db.query(Assignment.start_date).filter(
            Assignment.seat_id == seat_id,
            Assignment.status == AssignmentStatus.active.value,
        )
    ]
    if not starts:
        return SeatStatus.available.value
    if min(starts) <= today:
        return SeatStatus.occupied.value
    return SeatStatus.prebooked.value


def refresh_seat_status(db: Session, seat: Seat, today: Optional[date] = None) -> None:
    """Recompute a seat's status from its assignments, leaving maintenance alone."""
    if seat.status == SeatStatus.maintenance.value:
        return
    seat.status = seat_status_for(db, seat.id, today)


def promote_due_prebookings(db: Session, property_id: Optional[UUID] = None) -> int:
    """
    Mark prebooked seats as occupied once one of their active assignments
    has reached its start date. Returns the number of seats promoted.
    """
    today = date.today()
    due = exists().where(
        Assignment.seat_id == Seat.id,
        Assignment.status == AssignmentStatus.active.value,
        Assignment.start_date <= today,
    )
    query = db.query(Seat).filter(Seat.status == SeatStatus.prebooked.value, due)
    if property_id:
        query = query.filter(Seat.property_id == property_id)

    count = query.update({"status": SeatStatus.occupied.value}, synchronize_session="fetch")
    db.commit()
    if count:
        logger.info("Promoted %d prebooked seat(s) to occupied.", count)
    return count


def seat_history(db: Session, seat_id: UUID) -> List[Assignment]:
    get_seat(db, seat_id)
    return (
        db.query(Assignment)
        .filter(Assignment.seat_id == seat_id)
        .order_by(Assignment.start_date.desc())
        .all()
    )
