from typing import Any, List, Optional
from pydantic import BaseModel, UUID4


# Error envelope, the body of every non-2xx response
class ErrorResponse(BaseModel):
    error: str
    message: str
    details: Optional[List[Any]] = None


class DeleteResponse(BaseModel):
    id: UUID4
    deleted: bool = True
