# pyright: reportMissingTypeStubs=false
"""
Medical record API endpoints.

Doctors and assistants can read records. Only doctors write them.
"""

import logging
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from api.responses import CamelModel, MedicalRecordResponse, SuccessResponse
from auth.dependencies import require_doctor, require_doctor_or_assistant
from auth.identity import UserContext
from core.database import get_db
from services import MedicalRecordService

logger = logging.getLogger(__name__)

router = APIRouter()


class MedicalRecordCreateRequest(CamelModel):
    """Request model for writing a medical record."""
    patient_id: int
    chief_complaint: str
    symptoms: Optional[str] = None
    diagnosis: Optional[str] = None
    treatment: Optional[str] = None
    prescription: Optional[str] = None
    notes: Optional[str] = None
    follow_up_date: Optional[date] = None
    blood_pressure: Optional[str] = None
    heart_rate: Optional[int] = None
    temperature: Optional[float] = None
    weight: Optional[float] = None
    height: Optional[float] = None


class MedicalRecordUpdateRequest(CamelModel):
    """Request model for editing a medical record. Only the fields sent are changed."""
    patient_id: Optional[int] = None
    chief_complaint: Optional[str] = None
    symptoms: Optional[str] = None
    diagnosis: Optional[str] = None
    treatment: Optional[str] = None
    prescription: Optional[str] = None
    notes: Optional[str] = None
    follow_up_date: Optional[date] = None
    blood_pressure: Optional[str] = None
    heart_rate: Optional[int] = None
    temperature: Optional[float] = None
    weight: Optional[float] = None
    height: Optional[float] = None


@router.get("", summary="List medical records", response_model=List[MedicalRecordResponse])
def list_medical_records(
    patient_id: Optional[int] = Query(None, alias="patientId", description="Only this patient's records"),
    current_user: UserContext = Depends(require_doctor_or_assistant),
    db: Session = Depends(get_db)
) -> List[MedicalRecordResponse]:
    """List medical records, newest first."""
    records = MedicalRecordService.list_records(db, patient_id)
    return [MedicalRecordResponse.from_record(r) for r in records]


@router.post(
    "",
    summary="Create medical record",
    response_model=MedicalRecordResponse,
    status_code=status.HTTP_201_CREATED
)
def create_medical_record(
    request: MedicalRecordCreateRequest,
    current_user: UserContext = Depends(require_doctor),
    db: Session = Depends(get_db)
) -> MedicalRecordResponse:
    record = MedicalRecordService.create_record(
        db,
        current_user,
        **request.model_dump(),
    )
    return MedicalRecordResponse.from_record(record)


@router.get("/{record_id}", summary="Get medical record", response_model=MedicalRecordResponse)
def get_medical_record(
    record_id: int,
    current_user: UserContext = Depends(require_doctor_or_assistant),
    db: Session = Depends(get_db)
) -> MedicalRecordResponse:
    return MedicalRecordResponse.from_record(MedicalRecordService.get_record(db, record_id))


@router.put("/{record_id}", summary="Edit medical record", response_model=MedicalRecordResponse)
def update_medical_record(
    record_id: int,
    request: MedicalRecordUpdateRequest,
    current_user: UserContext = Depends(require_doctor),
    db: Session = Depends(get_db)
) -> MedicalRecordResponse:
    record = MedicalRecordService.update_record(db, record_id, request.model_dump(exclude_unset=True))
    logger.info(f"User {current_user.user_id} edited medical record {record_id}")
    return MedicalRecordResponse.from_record(record)


@router.delete("/{record_id}", summary="Delete medical record", response_model=SuccessResponse)
def delete_medical_record(
    record_id: int,
    current_user: UserContext = Depends(require_doctor),
    db: Session = Depends(get_db)
) -> SuccessResponse:
    MedicalRecordService.delete_record(db, record_id)
    logger.info(f"User {current_user.user_id} deleted medical record {record_id}")
    return SuccessResponse(message="Historial médico eliminado")
