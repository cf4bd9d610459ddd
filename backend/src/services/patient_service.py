"""
Patient service for shared patient business logic.
"""

import logging
from datetime import date
from typing import List, Optional

from sqlalchemy.orm import Session

from auth.identity import UserContext
from core.exceptions import InvalidInputError, NotFoundError
from models import Patient
from utils.patient_queries import find_all_patients, find_patient_by_id

logger = logging.getLogger(__name__)


class PatientService:
    """
    Service class for patient operations.

    Patients never trigger creation of any other record: registering a
    patient without a known doctor simply leaves ``doctor_id`` empty.
    """

    @staticmethod
    def list_patients(db: Session) -> List[Patient]:
        """List all patients, newest first."""
        return find_all_patients(db)

    @staticmethod
    def get_patient(db: Session, patient_id: int) -> Patient:
        """
        Get one patient.

        Raises:
            NotFoundError: If the patient does not exist
        """
        patient = find_patient_by_id(db, patient_id)
        if patient is None:
            raise NotFoundError("Paciente no encontrado")
        return patient

    @staticmethod
    def create_patient(
        db: Session,
        caller: UserContext,
        first_name: str,
        last_name: str,
        phone: str,
        email: Optional[str] = None,
        date_of_birth: Optional[date] = None
    ) -> Patient:
        """
        Register a new patient.

        Args:
            db: Database session
            caller: Authenticated user registering the patient
            first_name: Patient's first name
            last_name: Patient's last name
            phone: Contact phone number
            email: Optional email
            date_of_birth: Optional birth date

        Returns:
            Created Patient

        Raises:
            InvalidInputError: If a required field is blank
        """
        if not first_name.strip() or not last_name.strip() or not phone.strip():
            raise InvalidInputError("Nombre, apellido y teléfono son requeridos")

        patient = Patient(
            first_name=first_name.strip(),
            last_name=last_name.strip(),
            phone=phone.strip(),
            email=(email or "").strip().lower() or None,
            date_of_birth=date_of_birth,
            doctor_id=caller.user_id if caller.is_doctor() else None,
        )
        db.add(patient)
        db.commit()
        db.refresh(patient)

        logger.info(f"Created patient {patient.id} by user {caller.user_id}")
        return patient

    @staticmethod
    def update_patient(
        db: Session,
        patient_id: int,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
        phone: Optional[str] = None,
        email: Optional[str] = None,
        date_of_birth: Optional[date] = None
    ) -> Patient:
        """
        Update a patient. Only the fields that are given change.

        An empty ``email`` clears the stored email.

        Raises:
            NotFoundError: If the patient does not exist
            InvalidInputError: If a required field is set to blank
        """
        patient = PatientService.get_patient(db, patient_id)

        for field_name, value in (("first_name", first_name), ("last_name", last_name), ("phone", phone)):
            if value is None:
                continue
            if not value.strip():
                raise InvalidInputError("Nombre, apellido y teléfono son requeridos")
            setattr(patient, field_name, value.strip())

        if email is not None:
            patient.email = email.strip().lower() or None

        if date_of_birth is not None:
            patient.date_of_birth = date_of_birth

        db.commit()
        db.refresh(patient)

        logger.info(f"Updated patient {patient.id}")
        return patient

    @staticmethod
    def delete_patient(db: Session, patient_id: int) -> None:
        """
        Delete a patient together with their appointments and medical records.

        Raises:
            NotFoundError: If the patient does not exist
        """
        patient = PatientService.get_patient(db, patient_id)
        db.delete(patient)
        db.commit()
        logger.info(f"Deleted patient {patient_id}")
