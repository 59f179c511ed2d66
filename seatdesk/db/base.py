
from seatdesk.db.session import Base
from seatdesk.models.property import Property, Layout
from seatdesk.models.seat import Seat
from seatdesk.models.shift import Shift
from seatdesk.models.student import Student, StudentDocument
from seatdesk.models.assignment import Assignment
from seatdesk.models.payment import Payment
