from typing import Annotated, Optional
from pydantic import BaseModel, Field, UUID4
from decimal import Decimal

# "HH:MM", 24-hour clock
TimeOfDay = Annotated[str, Field(pattern=r"^([01]\d|2[0-3]):[0-5]\d$")]


class ShiftBase(BaseModel):
    name: str
    start_time: TimeOfDay
    end_time: TimeOfDay
    fee: Annotated[Decimal, Field(ge=0)]


class ShiftCreate(ShiftBase):
    property_id: Optional[UUID4] = None  # falls back to the active property


class ShiftUpdate(BaseModel):
    name: Optional[str] = None
    start_time: Optional[TimeOfDay] = None
    end_time: Optional[TimeOfDay] = None
    fee: Optional[Annotated[Decimal, Field(ge=0)]] = None


class Shift(ShiftBase):
    id: UUID4
    property_id: UUID4

    class Config:
        from_attributes = True


class ShiftSummary(BaseModel):
    id: UUID4
    name: str
    start_time: str
    end_time: str

    class Config:
        from_attributes = True
