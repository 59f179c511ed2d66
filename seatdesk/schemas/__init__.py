
from seatdesk.schemas.common import ErrorResponse, DeleteResponse
from seatdesk.schemas.property import (
    Property, PropertyCreate, PropertyUpdate,
    Layout, LayoutSave, OccupancySummary,
)
from seatdesk.schemas.seat import (
    Seat, SeatSummary, SeatBulkCreate, SeatBulkUpdateItem, SeatStatusUpdate, SeatUpdate,
    SeatsClearedResponse, SeatHistoryEntry,
)
from seatdesk.schemas.shift import Shift, ShiftCreate, ShiftUpdate, ShiftSummary
from seatdesk.schemas.payment import (
    Payment, PaymentCollect, PaymentComplete, PaymentRefund,
    PaymentStatusSummary, PaymentStats,
)
from seatdesk.schemas.assignment import (
    Assignment, AssignmentCreate, AssignmentRelease, AssignmentTransfer,
    AssignmentDetail, BookingResponse,
)
from seatdesk.schemas.student import (
    Student, StudentListItem, StudentUpdate, StudentDocument, StudentStats,
)
