from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from seatdesk.db.session import get_db
from seatdesk.schemas.property import Layout as LayoutSchema, LayoutSave
from seatdesk.services import layout as layout_service

router = APIRouter(prefix="/layouts", tags=["Layouts"])


@router.get("/{property_id}", response_model=LayoutSchema)
def get_layout(property_id: UUID, db: Session = Depends(get_db)):
    return layout_service.get_layout(db, property_id)


@router.post("/{property_id}", response_model=LayoutSchema)
def save_layout(
    property_id: UUID,
    data: LayoutSave,
    response: Response,
    db: Session = Depends(get_db),
):
    """Create or replace the layout. Returns 201 on first save, 200 afterwards."""
    layout, created = layout_service.save_layout(db, property_id, data.model_dump())
    response.status_code = status.HTTP_201_CREATED if created else status.HTTP_200_OK
    return layout


@router.post("/{property_id}/generate", response_model=LayoutSchema)
def generate_layout(property_id: UUID, response: Response, db: Session = Depends(get_db)):
    """
    Derive a near-square grid from the property's `total_seats` and save it.
    Re-running with the same capacity reproduces the same grid.
    """
    layout, created = layout_service.generate_and_save(db, property_id)
    response.status_code = status.HTTP_201_CREATED if created else status.HTTP_200_OK
    return layout
