"""
Shared request/response models for API endpoints.

JSON bodies use camelCase keys. Models accept both the camelCase alias and
the Python field name on input, and FastAPI serializes them by alias.
"""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from auth.identity import UserContext
from models import Appointment, MedicalRecord, Patient, SystemConfig
from utils.datetime_utils import ensure_mexico, format_datetime, local_date_string, local_time_string


class CamelModel(BaseModel):
    """Base model with camelCase aliases."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class UserSummary(CamelModel):
    """Public view of an authenticated user."""
    id: int
    email: str
    name: str
    role: str
    specialty: Optional[str] = None

    @classmethod
    def from_context(cls, user: UserContext) -> "UserSummary":
        return cls(
            id=user.user_id,
            email=user.email,
            name=user.name,
            role=user.role,
            specialty=user.specialty,
        )


class LoginResponse(CamelModel):
    """Response model for a successful login."""
    success: bool = True
    user: UserSummary


class CurrentUserResponse(CamelModel):
    """Response model for the current user."""
    user: UserSummary


class SuccessResponse(CamelModel):
    """Generic acknowledgement."""
    success: bool = True
    message: Optional[str] = None


class PatientSummary(CamelModel):
    """Patient fields embedded in appointment responses."""
    id: int
    first_name: str
    last_name: str
    phone: str


class PatientResponse(CamelModel):
    """Response model for patient information."""
    id: int
    first_name: str
    last_name: str
    email: Optional[str] = None
    phone: str
    date_of_birth: Optional[date] = None  # Serialized as YYYY-MM-DD
    doctor_id: Optional[int] = None
    created_at: datetime

    @classmethod
    def from_patient(cls, patient: Patient) -> "PatientResponse":
        return cls(
            id=patient.id,
            first_name=patient.first_name,
            last_name=patient.last_name,
            email=patient.email,
            phone=patient.phone,
            date_of_birth=patient.date_of_birth,
            doctor_id=patient.doctor_id,
            created_at=patient.created_at,
        )


class AppointmentResponse(CamelModel):
    """
    Response model for an appointment.

    ``date`` is the absolute instant (ISO 8601 with the clinic offset);
    ``local_date``/``local_time`` are the clinic-local calendar fields the
    booking form edits.
    """
    id: int
    date: datetime
    local_date: str
    local_time: str
    display: str
    reason: str
    notes: Optional[str] = None
    status: str
    patient_id: int
    doctor_id: int
    created_by: int
    patient: Optional[PatientSummary] = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_appointment(cls, appointment: Appointment) -> "AppointmentResponse":
        patient = appointment.patient
        return cls(
            id=appointment.id,
            date=ensure_mexico(appointment.scheduled_at),
            local_date=local_date_string(appointment.scheduled_at),
            local_time=local_time_string(appointment.scheduled_at),
            display=format_datetime(appointment.scheduled_at),
            reason=appointment.reason,
            notes=appointment.notes,
            status=appointment.status,
            patient_id=appointment.patient_id,
            doctor_id=appointment.doctor_id,
            created_by=appointment.created_by,
            patient=PatientSummary(
                id=patient.id,
                first_name=patient.first_name,
                last_name=patient.last_name,
                phone=patient.phone,
            ) if patient is not None else None,
            created_at=appointment.created_at,
            updated_at=appointment.updated_at,
        )


class RecordPatientSummary(PatientSummary):
    """Patient fields embedded in medical record responses."""
    date_of_birth: Optional[date] = None


class MedicalRecordResponse(CamelModel):
    """Response model for a medical record."""
    id: int
    patient_id: int
    doctor_id: int
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
    patient: Optional[RecordPatientSummary] = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_record(cls, record: MedicalRecord) -> "MedicalRecordResponse":
        patient = record.patient
        return cls(
            id=record.id,
            patient_id=record.patient_id,
            doctor_id=record.doctor_id,
            chief_complaint=record.chief_complaint,
            symptoms=record.symptoms,
            diagnosis=record.diagnosis,
            treatment=record.treatment,
            prescription=record.prescription,
            notes=record.notes,
            follow_up_date=record.follow_up_date,
            blood_pressure=record.blood_pressure,
            heart_rate=record.heart_rate,
            temperature=record.temperature,
            weight=record.weight,
            height=record.height,
            patient=RecordPatientSummary(
                id=patient.id,
                first_name=patient.first_name,
                last_name=patient.last_name,
                phone=patient.phone,
                date_of_birth=patient.date_of_birth,
            ) if patient is not None else None,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )


class SystemConfigResponse(CamelModel):
    """
    Response model for clinic settings.

    ``configured`` is False, with every other field empty, until the
    settings are saved for the first time.
    """
    configured: bool
    clinic_name: Optional[str] = None
    clinic_address: Optional[str] = None
    doctor_name: Optional[str] = None
    doctor_specialty: Optional[str] = None
    doctor_phone: Optional[str] = None
    doctor_email: Optional[str] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_config(cls, config: Optional[SystemConfig]) -> "SystemConfigResponse":
        if config is None:
            return cls(configured=False)
        return cls(
            configured=True,
            clinic_name=config.clinic_name,
            clinic_address=config.clinic_address,
            doctor_name=config.doctor_name,
            doctor_specialty=config.doctor_specialty,
            doctor_phone=config.doctor_phone,
            doctor_email=config.doctor_email,
            updated_at=config.updated_at,
        )
