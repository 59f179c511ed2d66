from uuid import UUID
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from seatdesk.db.session import get_db
from seatdesk.api.deps import SessionContext, get_session_context
from seatdesk.schemas.common import DeleteResponse
from seatdesk.schemas.shift import ShiftCreate, ShiftUpdate, Shift as ShiftSchema
from seatdesk.services import shifts

router = APIRouter(prefix="/shifts", tags=["Shifts"])


@router.get("/", response_model=List[ShiftSchema])
def list_shifts(
    property_id: Optional[UUID] = Query(None, alias="propertyId"),
    ctx: SessionContext = Depends(get_session_context),
    db: Session = Depends(get_db),
):
    return shifts.list_shifts(db, ctx.resolve(property_id))


@router.post("/", response_model=ShiftSchema, status_code=status.HTTP_201_CREATED)
def create_shift(
    data: ShiftCreate,
    ctx: SessionContext = Depends(get_session_context),
    db: Session = Depends(get_db),
):
    payload = data.model_dump()
    payload["property_id"] = ctx.require_property(data.property_id)
    return shifts.create_shift(db, payload)


@router.put("/{shift_id}", response_model=ShiftSchema)
def update_shift(shift_id: UUID, data: ShiftUpdate, db: Session = Depends(get_db)):
    return shifts.update_shift(db, shift_id, data.model_dump(exclude_unset=True))


@router.delete("/{shift_id}", response_model=DeleteResponse)
def delete_shift(shift_id: UUID, db: Session = Depends(get_db)):
    shifts.delete_shift(db, shift_id)
    return DeleteResponse(id=shift_id)
