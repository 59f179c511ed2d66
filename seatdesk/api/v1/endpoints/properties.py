from uuid import UUID
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from seatdesk.db.session import get_db
from seatdesk.schemas.property import (
    PropertyCreate,
    PropertyUpdate,
    Property as PropertySchema,
    OccupancySummary,
)
from seatdesk.schemas.seat import SeatsClearedResponse
from seatdesk.services import occupancy, properties, seats

router = APIRouter(prefix="/properties", tags=["Properties"])


# ---------------------------------------------------------------------------
# Property CRUD
# ---------------------------------------------------------------------------


@router.post("/", response_model=PropertySchema, status_code=status.HTTP_201_CREATED)
def create_property(data: PropertyCreate, db: Session = Depends(get_db)):
    return properties.create_property(db, data.model_dump())


@router.get("/", response_model=List[PropertySchema])
def list_properties(db: Session = Depends(get_db)):
    return properties.list_properties(db)


@router.get("/{property_id}", response_model=PropertySchema)
def get_property(property_id: UUID, db: Session = Depends(get_db)):
    return properties.get_property(db, property_id)


@router.patch("/{property_id}", response_model=PropertySchema)
def update_property(property_id: UUID, data: PropertyUpdate, db: Session = Depends(get_db)):
    return properties.update_property(db, property_id, data.model_dump(exclude_unset=True))


# ---------------------------------------------------------------------------
# Occupancy summary (dashboard cards)
# ---------------------------------------------------------------------------


@router.get("/{property_id}/occupancy", response_model=OccupancySummary)
def get_occupancy(
    property_id: UUID,
    section: Optional[str] = Query(None, description="Restrict counts to one section"),
    db: Session = Depends(get_db),
):
    """
    Seat counts by status. `total` excludes seats under maintenance, which
    are reported separately.
    """
    return occupancy.summarize(db, property_id, section)


# ---------------------------------------------------------------------------
# Clear all seats of a property
# ---------------------------------------------------------------------------


@router.delete("/{property_id}/seats", response_model=SeatsClearedResponse)
def clear_seats(property_id: UUID, db: Session = Depends(get_db)):
    properties.get_property(db, property_id)
    count = seats.clear_seats(db, property_id)
    return SeatsClearedResponse(property_id=property_id, deleted_count=count)
