from uuid import UUID
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from seatdesk.db.session import get_db
from seatdesk.api.deps import SessionContext, get_session_context
from seatdesk.schemas.common import DeleteResponse
from seatdesk.schemas.seat import (
    Seat as SeatSchema,
    SeatBulkCreate,
    SeatBulkUpdateItem,
    SeatHistoryEntry,
    SeatStatusUpdate,
    SeatUpdate,
)
from seatdesk.services import seats

router = APIRouter(prefix="/seats", tags=["Seats"])


# ---------------------------------------------------------------------------
# Listing
# ---------------------------------------------------------------------------


@router.get("/", response_model=List[SeatSchema])
def list_seats(
    property_id: Optional[UUID] = Query(None, alias="propertyId"),
    section: Optional[str] = Query(None, description="Filter by section"),
    seat_status: Optional[str] = Query(
        None, alias="status", description="available | occupied | prebooked | maintenance"
    ),
    ctx: SessionContext = Depends(get_session_context),
    db: Session = Depends(get_db),
):
    """Seats of a property ordered by row, then column."""
    property_id = ctx.require_property(property_id)
    seats.promote_due_prebookings(db, property_id)
    return seats.list_by_property(db, property_id, status=seat_status, section=section)


# ---------------------------------------------------------------------------
# Bulk creation from the layout grid
# ---------------------------------------------------------------------------


@router.post("/bulk", response_model=List[SeatSchema], status_code=status.HTTP_201_CREATED)
def bulk_create_seats(
    data: SeatBulkCreate,
    ctx: SessionContext = Depends(get_session_context),
    db: Session = Depends(get_db),
):
    """
    One seat per occupiable cell, numbered seat-1, seat-2, ... in row-major
    order. Uses the saved layout unless `layout` is supplied.
    """
    property_id = ctx.require_property(data.property_id)
    return seats.bulk_create(db, property_id, grid=data.layout, section=data.section)


@router.patch("/bulk", response_model=List[SeatSchema])
def bulk_update_seats(updates: List[SeatBulkUpdateItem], db: Session = Depends(get_db)):
    """Batch section, status and notes edits; all seats must exist."""
    payload = []
    for item in updates:
        fields = item.model_dump(exclude_unset=True)
        if fields.get("status"):
            fields["status"] = fields["status"].value
        payload.append(fields)
    return seats.bulk_update(db, payload)


# ---------------------------------------------------------------------------
# Single seat
# ---------------------------------------------------------------------------


@router.put("/{seat_id}/status", response_model=SeatSchema)
def update_seat_status(seat_id: UUID, data: SeatStatusUpdate, db: Session = Depends(get_db)):
    return seats.update_status(db, seat_id, data.status.value)


@router.patch("/{seat_id}", response_model=SeatSchema)
def update_seat(seat_id: UUID, data: SeatUpdate, db: Session = Depends(get_db)):
    return seats.update_seat(db, seat_id, data.model_dump(exclude_unset=True))


@router.delete("/{seat_id}", response_model=DeleteResponse)
def delete_seat(seat_id: UUID, db: Session = Depends(get_db)):
    seats.delete_seat(db, seat_id)
    return DeleteResponse(id=seat_id)


@router.get("/{seat_id}/history", response_model=List[SeatHistoryEntry])
def seat_history(seat_id: UUID, db: Session = Depends(get_db)):
    """Every assignment the seat has had, most recent first."""
    return seats.seat_history(db, seat_id)
