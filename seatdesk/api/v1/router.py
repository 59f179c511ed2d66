
from fastapi import APIRouter

# Properties, layouts & seat registry
from seatdesk.api.v1.endpoints.properties import router as properties_router
from seatdesk.api.v1.endpoints.layouts import router as layouts_router
from seatdesk.api.v1.endpoints.seats import router as seats_router
from seatdesk.api.v1.endpoints.shifts import router as shifts_router

# Students, bookings & assignments
from seatdesk.api.v1.endpoints.students import router as students_router
from seatdesk.api.v1.endpoints.bookings import router as bookings_router
from seatdesk.api.v1.endpoints.assignments import router as assignments_router

# Payments
from seatdesk.api.v1.endpoints.payments import router as payments_router

api_router = APIRouter()

# --- Properties & layout ---
api_router.include_router(properties_router)
api_router.include_router(layouts_router)
api_router.include_router(seats_router)
api_router.include_router(shifts_router)

# --- Students ---
api_router.include_router(students_router)
api_router.include_router(bookings_router)
api_router.include_router(assignments_router)

# --- Payments ---
api_router.include_router(payments_router)
