"""
Medical record service for clinical history entries.

Records are written by doctors. Text fields are stored trimmed, with blank
values kept as NULL, and vital signs must be positive numbers.
"""

import logging
from datetime import date
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from auth.identity import UserContext
from core.exceptions import ForbiddenError, InvalidInputError, NotFoundError
from models import MedicalRecord
from utils.medical_record_queries import (
    find_all_medical_records,
    find_medical_record_by_id,
    insert_medical_record,
)
from utils.patient_queries import find_patient_by_id

logger = logging.getLogger(__name__)

TEXT_FIELDS = ("symptoms", "diagnosis", "treatment", "prescription", "notes", "blood_pressure")
VITAL_SIGN_FIELDS = ("heart_rate", "temperature", "weight", "height")
EDITABLE_FIELDS = ("patient_id", "chief_complaint", "follow_up_date") + TEXT_FIELDS + VITAL_SIGN_FIELDS


def _clean_text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return value.strip() or None


def _check_chief_complaint(value: Optional[str]) -> str:
    if not value or not value.strip():
        raise InvalidInputError("El motivo de consulta es requerido")
    return value.strip()


def _check_vital_sign(field_name: str, value: Optional[float]) -> Optional[float]:
    if value is not None and value <= 0:
        raise InvalidInputError(
            "Los signos vitales deben ser valores positivos",
            field=field_name,
        )
    return value


class MedicalRecordService:
    """Service class for medical record operations."""

    @staticmethod
    def list_records(db: Session, patient_id: Optional[int] = None) -> List[MedicalRecord]:
        """List medical records newest first, optionally for one patient."""
        return find_all_medical_records(db, patient_id)

    @staticmethod
    def get_record(db: Session, record_id: int) -> MedicalRecord:
        """
        Get one medical record.

        Raises:
            NotFoundError: If the record does not exist
        """
        record = find_medical_record_by_id(db, record_id)
        if record is None:
            raise NotFoundError("Historial médico no encontrado")
        return record

    @staticmethod
    def create_record(
        db: Session,
        caller: UserContext,
        patient_id: int,
        chief_complaint: str,
        symptoms: Optional[str] = None,
        diagnosis: Optional[str] = None,
        treatment: Optional[str] = None,
        prescription: Optional[str] = None,
        notes: Optional[str] = None,
        follow_up_date: Optional[date] = None,
        blood_pressure: Optional[str] = None,
        heart_rate: Optional[int] = None,
        temperature: Optional[float] = None,
        weight: Optional[float] = None,
        height: Optional[float] = None
    ) -> MedicalRecord:
        """
        Write a medical record. The caller becomes the record's doctor.

        Raises:
            ForbiddenError: If the caller is not a doctor
            InvalidInputError: If the chief complaint is blank or a vital sign is not positive
            NotFoundError: If the patient does not exist
        """
        if not caller.is_doctor():
            raise ForbiddenError("Solo los doctores pueden registrar historiales médicos")

        vital_signs = {
            "heart_rate": heart_rate,
            "temperature": temperature,
            "weight": weight,
            "height": height,
        }
        for field_name, value in vital_signs.items():
            _check_vital_sign(field_name, value)

        complaint = _check_chief_complaint(chief_complaint)

        if find_patient_by_id(db, patient_id) is None:
            raise NotFoundError("Paciente no encontrado")

        record = insert_medical_record(
            db,
            patient_id=patient_id,
            doctor_id=caller.user_id,
            chief_complaint=complaint,
            symptoms=_clean_text(symptoms),
            diagnosis=_clean_text(diagnosis),
            treatment=_clean_text(treatment),
            prescription=_clean_text(prescription),
            notes=_clean_text(notes),
            follow_up_date=follow_up_date,
            blood_pressure=_clean_text(blood_pressure),
            **vital_signs,
        )

        logger.info(f"Created medical record {record.id} for patient {patient_id} by doctor {caller.user_id}")
        return record

    @staticmethod
    def update_record(db: Session, record_id: int, changes: Dict[str, Any]) -> MedicalRecord:
        """
        Update a medical record.

        ``changes`` holds only the fields the client sent. A field sent as
        None is cleared, except ``chief_complaint`` and ``patient_id``, which
        are required.

        Raises:
            NotFoundError: If the record or the new patient does not exist
            InvalidInputError: If a field has an invalid value
        """
        record = MedicalRecordService.get_record(db, record_id)

        unknown = set(changes) - set(EDITABLE_FIELDS)
        if unknown:
            raise InvalidInputError(f"Campos no editables: {', '.join(sorted(unknown))}")

        if "chief_complaint" in changes:
            record.chief_complaint = _check_chief_complaint(changes["chief_complaint"])

        if "patient_id" in changes:
            patient_id = changes["patient_id"]
            if patient_id is None or find_patient_by_id(db, patient_id) is None:
                raise NotFoundError("Paciente no encontrado")
            record.patient_id = patient_id

        for field_name in TEXT_FIELDS:
            if field_name in changes:
                setattr(record, field_name, _clean_text(changes[field_name]))

        for field_name in VITAL_SIGN_FIELDS:
            if field_name in changes:
                setattr(record, field_name, _check_vital_sign(field_name, changes[field_name]))

        if "follow_up_date" in changes:
            record.follow_up_date = changes["follow_up_date"]

        db.commit()
        db.refresh(record)

        logger.info(f"Updated medical record {record.id}")
        return record

    @staticmethod
    def delete_record(db: Session, record_id: int) -> None:
        """
        Delete a medical record.

        Raises:
            NotFoundError: If the record does not exist
        """
        record = MedicalRecordService.get_record(db, record_id)
        db.delete(record)
        db.commit()
        logger.info(f"Deleted medical record {record_id}")
