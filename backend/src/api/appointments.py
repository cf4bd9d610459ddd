# pyright: reportMissingTypeStubs=false
"""
Appointment API endpoints.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from api.responses import AppointmentResponse, CamelModel, SuccessResponse
from auth.dependencies import require_doctor_or_assistant
from auth.identity import UserContext
from core.database import get_db
from services import AppointmentService

logger = logging.getLogger(__name__)

router = APIRouter()


class AppointmentCreateRequest(CamelModel):
    """
    Request model for booking an appointment.

    Either ``iso_date_time`` (a fully composed instant) or ``date`` with an
    optional ``time`` (clinic-local, defaults to 09:00) must be given.
    """
    patient_id: int
    reason: str
    date: Optional[str] = None
    time: Optional[str] = None
    iso_date_time: Optional[str] = None
    notes: Optional[str] = None


class AppointmentUpdateRequest(CamelModel):
    """Request model for editing an appointment. Omitted fields are left as they are."""
    patient_id: Optional[int] = None
    reason: Optional[str] = None
    status: Optional[str] = None
    notes: Optional[str] = None
    date: Optional[str] = None
    time: Optional[str] = None
    iso_date_time: Optional[str] = None


@router.get("", summary="List appointments", response_model=List[AppointmentResponse])
def list_appointments(
    date: Optional[str] = Query(None, description="Clinic-local day (YYYY-MM-DD)"),
    current_user: UserContext = Depends(require_doctor_or_assistant),
    db: Session = Depends(get_db)
) -> List[AppointmentResponse]:
    """List appointments ordered by time, optionally only those on one local day."""
    appointments = AppointmentService.list_appointments(db, date)
    return [AppointmentResponse.from_appointment(a) for a in appointments]


@router.post(
    "",
    summary="Create appointment",
    response_model=AppointmentResponse,
    status_code=status.HTTP_201_CREATED
)
def create_appointment(
    request: AppointmentCreateRequest,
    current_user: UserContext = Depends(require_doctor_or_assistant),
    db: Session = Depends(get_db)
) -> AppointmentResponse:
    """
    Book an appointment.

    Doctors book for themselves; assistants book for the first active doctor.
    """
    appointment = AppointmentService.create_appointment(
        db,
        current_user,
        patient_id=request.patient_id,
        reason=request.reason,
        date_str=request.date,
        time_str=request.time,
        iso_datetime=request.iso_date_time,
        notes=request.notes,
    )
    return AppointmentResponse.from_appointment(appointment)


@router.get("/{appointment_id}", summary="Get appointment", response_model=AppointmentResponse)
def get_appointment(
    appointment_id: int,
    current_user: UserContext = Depends(require_doctor_or_assistant),
    db: Session = Depends(get_db)
) -> AppointmentResponse:
    appointment = AppointmentService.get_appointment(db, appointment_id)
    return AppointmentResponse.from_appointment(appointment)


@router.put("/{appointment_id}", summary="Edit appointment", response_model=AppointmentResponse)
def update_appointment(
    appointment_id: int,
    request: AppointmentUpdateRequest,
    current_user: UserContext = Depends(require_doctor_or_assistant),
    db: Session = Depends(get_db)
) -> AppointmentResponse:
    appointment = AppointmentService.update_appointment(
        db,
        appointment_id,
        patient_id=request.patient_id,
        reason=request.reason,
        status=request.status,
        notes=request.notes,
        date_str=request.date,
        time_str=request.time,
        iso_datetime=request.iso_date_time,
    )
    logger.info(f"User {current_user.user_id} edited appointment {appointment_id}")
    return AppointmentResponse.from_appointment(appointment)


@router.delete("/{appointment_id}", summary="Delete appointment", response_model=SuccessResponse)
def delete_appointment(
    appointment_id: int,
    current_user: UserContext = Depends(require_doctor_or_assistant),
    db: Session = Depends(get_db)
) -> SuccessResponse:
    AppointmentService.delete_appointment(db, appointment_id)
    logger.info(f"User {current_user.user_id} deleted appointment {appointment_id}")
    return SuccessResponse(message="Cita eliminada")
