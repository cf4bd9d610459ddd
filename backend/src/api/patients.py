# pyright: reportMissingTypeStubs=false
"""
Patient API endpoints.
"""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from api.responses import CamelModel, PatientResponse, SuccessResponse
from auth.dependencies import require_doctor, require_doctor_or_assistant
from auth.identity import UserContext
from core.database import get_db
from services import PatientService

router = APIRouter()


class PatientCreateRequest(CamelModel):
    """Request model for registering a patient."""
    first_name: str
    last_name: str
    phone: str
    email: Optional[str] = None
    date_of_birth: Optional[date] = None


class PatientUpdateRequest(CamelModel):
    """Request model for editing a patient. Omitted fields are left as they are."""
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    date_of_birth: Optional[date] = None


@router.get("", summary="List patients", response_model=List[PatientResponse])
def list_patients(
    current_user: UserContext = Depends(require_doctor_or_assistant),
    db: Session = Depends(get_db)
) -> List[PatientResponse]:
    return [PatientResponse.from_patient(p) for p in PatientService.list_patients(db)]


@router.post(
    "",
    summary="Create patient",
    response_model=PatientResponse,
    status_code=status.HTTP_201_CREATED
)
def create_patient(
    request: PatientCreateRequest,
    current_user: UserContext = Depends(require_doctor_or_assistant),
    db: Session = Depends(get_db)
) -> PatientResponse:
    patient = PatientService.create_patient(
        db,
        current_user,
        first_name=request.first_name,
        last_name=request.last_name,
        phone=request.phone,
        email=request.email,
        date_of_birth=request.date_of_birth,
    )
    return PatientResponse.from_patient(patient)


@router.get("/{patient_id}", summary="Get patient", response_model=PatientResponse)
def get_patient(
    patient_id: int,
    current_user: UserContext = Depends(require_doctor_or_assistant),
    db: Session = Depends(get_db)
) -> PatientResponse:
    return PatientResponse.from_patient(PatientService.get_patient(db, patient_id))


@router.put("/{patient_id}", summary="Edit patient", response_model=PatientResponse)
def update_patient(
    patient_id: int,
    request: PatientUpdateRequest,
    current_user: UserContext = Depends(require_doctor_or_assistant),
    db: Session = Depends(get_db)
) -> PatientResponse:
    patient = PatientService.update_patient(
        db,
        patient_id,
        first_name=request.first_name,
        last_name=request.last_name,
        phone=request.phone,
        email=request.email,
        date_of_birth=request.date_of_birth,
    )
    return PatientResponse.from_patient(patient)


@router.delete("/{patient_id}", summary="Delete patient", response_model=SuccessResponse)
def delete_patient(
    patient_id: int,
    current_user: UserContext = Depends(require_doctor),
    db: Session = Depends(get_db)
) -> SuccessResponse:
    """Delete a patient with their appointments and medical records. Doctors only."""
    PatientService.delete_patient(db, patient_id)
    return SuccessResponse(message="Paciente eliminado")
