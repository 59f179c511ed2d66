from typing import Annotated, List, Optional
from pydantic import BaseModel, Field, UUID4, model_validator
from datetime import datetime


# Property
class PropertyBase(BaseModel):
    name: str
    address: str
    type: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    description: Optional[str] = None
    opening_hours: Optional[str] = None
    total_seats: Annotated[int, Field(ge=0)] = 0


class PropertyCreate(PropertyBase):
    pass


class PropertyUpdate(BaseModel):
    name: Optional[str] = None
    address: Optional[str] = None
    type: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    description: Optional[str] = None
    opening_hours: Optional[str] = None
    total_seats: Optional[Annotated[int, Field(ge=0)]] = None


class Property(PropertyBase):
    id: UUID4
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


# Layout (GET/POST /layouts/{property_id})
class LayoutBase(BaseModel):
    rows: Annotated[int, Field(ge=1)]
    columns: Annotated[int, Field(ge=1)]
    aisle_width: int = 2
    seat_width: int = 1
    seat_height: int = 1
    gap: int = 1
    layout: List[List[bool]]


class LayoutSave(LayoutBase):
    @model_validator(mode="after")
    def check_grid_shape(self):
        if len(self.layout) != self.rows or any(len(r) != self.columns for r in self.layout):
            raise ValueError(f"layout must be a {self.rows}x{self.columns} grid")
        return self


class Layout(LayoutBase):
    property_id: UUID4

    class Config:
        from_attributes = True


# Occupancy summary for dashboard cards
class OccupancySummary(BaseModel):
    total: int
    available: int
    occupied: int
    prebooked: int
    maintenance: int
