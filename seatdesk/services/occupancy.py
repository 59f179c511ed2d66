from typing import Optional
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.orm import Session

from seatdesk.core.exceptions import NotFoundError
from seatdesk.models.property import Property
from seatdesk.models.seat import Seat, SeatStatus
from seatdesk.services.seats import promote_due_prebookings


def summarize(db: Session, property_id: UUID, section: Optional[str] = None) -> dict:
    """
    Seat counts by status for a property (or one of its sections).

    Computed from the seat table on every call. Maintenance seats are counted
    separately and left out of `total`.
    """
    if not db.query(Property.id).filter(Property.id == property_id).first():
        raise NotFoundError("Property not found")

    promote_due_prebookings(db, property_id)

    query = (
        db.query(Seat.status, func.count(Seat.id))
        .filter(Seat.property_id == property_id)
    )
    if section:
        query = query.filter(Seat.section == section)
    counts = dict(query.group_by(Seat.status).all())

    summary = {s.value: counts.get(s.value, 0) for s in SeatStatus}
    summary["total"] = (
        summary[SeatStatus.available.value]
        + summary[SeatStatus.occupied.value]
        + summary[SeatStatus.prebooked.value]
    )
    return summary
