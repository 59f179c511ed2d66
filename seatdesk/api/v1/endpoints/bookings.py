from uuid import UUID
from datetime import date
from decimal import Decimal
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from sqlalchemy.orm import Session

from seatdesk.db.session import get_db
from seatdesk.api.deps import SessionContext, get_session_context
from seatdesk.models.student import DocumentType
from seatdesk.schemas.assignment import Assignment as AssignmentSchema, BookingResponse
from seatdesk.services.students import UploadedDocument, create_booking

router = APIRouter(prefix="/bookings", tags=["Bookings"])


def _collect_uploads(
    profile_photo: Optional[UploadFile],
    id_photo_front: Optional[UploadFile],
    id_photo_back: Optional[UploadFile],
    documents: Optional[List[UploadFile]],
) -> List[UploadedDocument]:
    labelled = [
        (DocumentType.profile_photo, profile_photo),
        (DocumentType.identity_proof, id_photo_front),
        (DocumentType.identity_proof, id_photo_back),
    ]
    labelled += [(DocumentType.other, upload) for upload in documents or []]

    uploads = []
    for doc_type, upload in labelled:
        if upload is None or not upload.filename:
            continue
        uploads.append(UploadedDocument(
            type=doc_type.value,
            filename=upload.filename,
            content=upload.file.read(),
        ))
    return uploads


@router.post("/", response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
def book_seat(
    first_name: Optional[str] = Form(None, alias="firstName"),
    last_name: Optional[str] = Form(None, alias="lastName"),
    email: Optional[str] = Form(None),
    phone: Optional[str] = Form(None),
    institution: Optional[str] = Form(None),
    course: Optional[str] = Form(None),
    notes: Optional[str] = Form(None),
    property_id: Optional[UUID] = Form(None, alias="propertyId"),
    seat_no: Optional[str] = Form(None, alias="seatNo"),
    shift: Optional[UUID] = Form(None),
    move_in_date: Optional[date] = Form(None, alias="moveInDate"),
    fee: Optional[Decimal] = Form(None),
    profile_photo: Optional[UploadFile] = File(None, alias="profilePhoto"),
    id_photo_front: Optional[UploadFile] = File(None, alias="idPhotoFront"),
    id_photo_back: Optional[UploadFile] = File(None, alias="idPhotoBack"),
    documents: Optional[List[UploadFile]] = File(None),
    ctx: SessionContext = Depends(get_session_context),
    db: Session = Depends(get_db),
):
    """
    Register (or reuse, matched by email) a student and book them onto a seat.

    `seatNo` is the seat number within the property ("seat-7" or just "7");
    `shift` is the shift id. The student, assignment and pending payment are
    created together.
    """
    student_fields = {
        "first_name": first_name,
        "last_name": last_name,
        "email": email,
        "phone": phone,
        "institution": institution,
        "course": course,
        "notes": notes,
    }
    assignment = create_booking(
        db,
        property_id=ctx.require_property(property_id),
        student_fields=student_fields,
        seat_no=seat_no,
        shift_id=shift,
        move_in_date=move_in_date,
        fee=fee,
        documents=_collect_uploads(profile_photo, id_photo_front, id_photo_back, documents),
    )
    return BookingResponse(
        student_id=assignment.student_id,
        assignment=AssignmentSchema.model_validate(assignment),
        payment_id=assignment.payment.id,
        balance_amount=assignment.payment.balance_amount,
    )
