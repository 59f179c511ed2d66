
from seatdesk.models.property import Property, Layout
from seatdesk.models.seat import Seat, SeatStatus
from seatdesk.models.shift import Shift
from seatdesk.models.student import Student, StudentDocument, StudentStatus, DocumentType
from seatdesk.models.assignment import Assignment, AssignmentStatus
from seatdesk.models.payment import Payment, PaymentStatus, PaymentMethod
