from typing import Optional, List
from pydantic import BaseModel, UUID4
from datetime import date

from seatdesk.models.seat import SeatStatus


class Seat(BaseModel):
    id: UUID4
    property_id: UUID4
    seat_number: str
    row: int
    column: int
    section: Optional[str] = None
    status: SeatStatus
    notes: Optional[str] = None

    class Config:
        from_attributes = True


class SeatSummary(BaseModel):
    id: UUID4
    seat_number: str
    section: Optional[str] = None

    class Config:
        from_attributes = True


# Bulk seat creation (POST /seats/bulk), from the saved layout unless one is given
class SeatBulkCreate(BaseModel):
    property_id: Optional[UUID4] = None
    section: Optional[str] = None
    layout: Optional[List[List[bool]]] = None


class SeatStatusUpdate(BaseModel):
    status: SeatStatus


class SeatUpdate(BaseModel):
    section: Optional[str] = None
    notes: Optional[str] = None


# One entry of PATCH /seats/bulk
class SeatBulkUpdateItem(BaseModel):
    id: UUID4
    section: Optional[str] = None
    status: Optional[SeatStatus] = None
    notes: Optional[str] = None


class SeatsClearedResponse(BaseModel):
    property_id: UUID4
    deleted_count: int


# Seat assignment history (GET /seats/{id}/history)
class SeatHistoryEntry(BaseModel):
    id: UUID4
    student_id: UUID4
    shift_id: UUID4
    start_date: date
    end_date: Optional[date] = None
    status: str

    class Config:
        from_attributes = True
