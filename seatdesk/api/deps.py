from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from fastapi import Header

from seatdesk.core.exceptions import ValidationError


@dataclass(frozen=True)
class SessionContext:
    """The property a staff client is currently working in."""

    property_id: Optional[UUID] = None

    def resolve(self, explicit: Optional[UUID] = None) -> Optional[UUID]:
        return explicit or self.property_id

    def require_property(self, explicit: Optional[UUID] = None) -> UUID:
        property_id = self.resolve(explicit)
        if property_id is None:
            raise ValidationError("propertyId is required (query parameter or X-Property-Id header)")
        return property_id


def get_session_context(
    x_property_id: Optional[str] = Header(None, alias="X-Property-Id"),
) -> SessionContext:
    if not x_property_id:
        return SessionContext()
    try:
        return SessionContext(property_id=UUID(x_property_id))
    except ValueError:
        raise ValidationError("X-Property-Id is not a valid UUID")
