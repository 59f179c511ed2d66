import logging
from typing import List
from uuid import UUID

from sqlalchemy.orm import Session

from seatdesk.core.exceptions import NotFoundError
from seatdesk.models.property import Property

logger = logging.getLogger(__name__)


def get_property(db: Session, property_id: UUID) -> Property:
    prop = db.query(Property).filter(Property.id == property_id).first()
    if not prop:
        raise NotFoundError("Property not found")
    return prop


def list_properties(db: Session) -> List[Property]:
    return db.query(Property).order_by(Property.name).all()


def create_property(db: Session, data: dict) -> Property:
    prop = Property(**data)
    db.add(prop)
    db.commit()
    db.refresh(prop)
    logger.info("Created property %s with %d declared seats", prop.name, prop.total_seats)
    return prop


def update_property(db: Session, property_id: UUID, data: dict) -> Property:
    """A changed `total_seats` does not touch the saved layout or existing seats."""
    prop = get_property(db, property_id)
    for field, value in data.items():
        setattr(prop, field, value)
    db.commit()
    db.refresh(prop)
    return prop
