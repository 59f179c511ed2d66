"""Seat grid generation and persistence of a property's layout."""

import logging
import math
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy.orm import Session

from seatdesk.core.config import settings
from seatdesk.core.exceptions import NotFoundError, ValidationError
from seatdesk.models.property import Layout, Property

logger = logging.getLogger(__name__)


def generate_layout(total_seats: int, max_columns: Optional[int] = None) -> Tuple[int, int]:
    """
    Return the (rows, columns) of the smallest near-square grid holding
    `total_seats` seats.

    columns = min(max_columns, ceil(sqrt(total_seats)))
    rows    = ceil(total_seats / columns)
    """
    if isinstance(total_seats, bool) or not isinstance(total_seats, int) or total_seats < 1:
        raise ValidationError("total_seats must be a positive integer")

    cap = max_columns if max_columns is not None else settings.MAX_LAYOUT_COLUMNS
    columns = min(cap, math.isqrt(total_seats - 1) + 1)
    rows = -(-total_seats // columns)
    return rows, columns


def occupiable_grid(rows: int, columns: int) -> List[List[bool]]:
    return [[True] * columns for _ in range(rows)]


def _get_property(db: Session, property_id: UUID) -> Property:
    prop = db.query(Property).filter(Property.id == property_id).first()
    if not prop:
        raise NotFoundError("Property not found")
    return prop


def _validate_grid(rows: int, columns: int, grid: List[List[bool]]) -> None:
    if rows < 1 or columns < 1:
        raise ValidationError("rows and columns must be positive")
    if len(grid) != rows or any(len(r) != columns for r in grid):
        raise ValidationError(f"layout must be a {rows}x{columns} grid")


def get_layout(db: Session, property_id: UUID) -> Layout:
    _get_property(db, property_id)
    layout = db.query(Layout).filter(Layout.property_id == property_id).first()
    if not layout:
        raise NotFoundError("Layout not found")
    return layout


def save_layout(db: Session, property_id: UUID, data: dict) -> Tuple[Layout, bool]:
    """
    Create or replace the layout of a property.

    Returns the layout and whether it was newly created. Existing seats are
    left untouched; they are only ever removed by explicit deletion.
    """
    _get_property(db, property_id)
    _validate_grid(data["rows"], data["columns"], data["layout"])

    layout = db.query(Layout).filter(Layout.property_id == property_id).first()
    created = layout is None
    if created:
        layout = Layout(property_id=property_id)
        db.add(layout)

    for field, value in data.items():
        setattr(layout, field, value)

    db.commit()
    db.refresh(layout)
    logger.info(
        "%s layout %dx%d for property %s",
        "Created" if created else "Updated", layout.rows, layout.columns, property_id,
    )
    return layout, created


def generate_and_save(db: Session, property_id: UUID) -> Tuple[Layout, bool]:
    """Derive the grid from the property's declared capacity and save it."""
    prop = _get_property(db, property_id)
    rows, columns = generate_layout(prop.total_seats)
    return save_layout(
        db,
        property_id,
        {"rows": rows, "columns": columns, "layout": occupiable_grid(rows, columns)},
    )
