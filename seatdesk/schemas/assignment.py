from typing import Annotated, Optional
from pydantic import BaseModel, Field, UUID4
from decimal import Decimal
from datetime import date

from seatdesk.models.assignment import AssignmentStatus
from seatdesk.schemas.seat import SeatSummary
from seatdesk.schemas.shift import ShiftSummary


# POST /assignments
class AssignmentCreate(BaseModel):
    student_id: UUID4
    seat_id: UUID4
    shift_id: UUID4
    start_date: Optional[date] = None
    fee: Optional[Annotated[Decimal, Field(ge=0)]] = None


class AssignmentRelease(BaseModel):
    end_date: Optional[date] = None


class AssignmentTransfer(BaseModel):
    new_seat_id: UUID4


class Assignment(BaseModel):
    id: UUID4
    student_id: UUID4
    seat_id: UUID4
    shift_id: UUID4
    property_id: UUID4
    start_date: date
    end_date: Optional[date] = None
    fee: Decimal
    status: AssignmentStatus

    class Config:
        from_attributes = True


# Assignment with populated seat / shift, nested in student detail
class AssignmentDetail(Assignment):
    seat: Optional[SeatSummary] = None
    shift: Optional[ShiftSummary] = None
    payment_id: Optional[UUID4] = None


# POST /bookings response
class BookingResponse(BaseModel):
    student_id: UUID4
    assignment: Assignment
    payment_id: UUID4
    balance_amount: Decimal
