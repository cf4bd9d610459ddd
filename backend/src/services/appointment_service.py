"""
Appointment service for scheduling business logic.

Translates the human-facing "which day" filter and the booking form's
date/time fields into absolute instants in clinic time, and decides which
doctor attends an appointment booked by someone who is not a doctor.
"""

import logging
from datetime import datetime
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from auth.identity import UserContext
from core.constants import DEFAULT_APPOINTMENT_TIME, VALID_APPOINTMENT_STATUSES
from core.exceptions import InvalidInputError, NoAttendingAvailableError, NotFoundError
from models import Appointment
from utils.appointment_queries import (
    find_all_appointments,
    find_appointment_by_id,
    find_appointments_in_range,
    insert_appointment,
)
from utils.datetime_utils import (
    compose_local_instant,
    end_of_local_day,
    format_datetime,
    parse_datetime_string_to_mexico,
    start_of_local_day,
)
from utils.patient_queries import find_patient_by_id
from utils.user_queries import find_first_active_doctor

logger = logging.getLogger(__name__)


class AppointmentService:
    """
    Service class for appointment operations.

    Contains the scheduling rules shared by the appointment endpoints.
    """

    @staticmethod
    def day_range(date_str: str) -> Tuple[datetime, datetime]:
        """
        Inclusive instant range covering one clinic-local calendar day.

        Raises:
            InvalidDateError: If date_str is not a calendar date
        """
        return start_of_local_day(date_str), end_of_local_day(date_str)

    @staticmethod
    def resolve_attending_user(db: Session, caller: UserContext) -> int:
        """
        Decide which doctor attends an appointment booked by ``caller``.

        Doctors attend their own bookings. Anyone else books for the first
        active doctor.

        Returns:
            User ID of the attending doctor

        Raises:
            NoAttendingAvailableError: If no active doctor exists
        """
        if caller.is_doctor():
            return caller.user_id

        doctor = find_first_active_doctor(db)
        if doctor is None:
            logger.warning(f"No active doctor available for booking by user {caller.user_id}")
            raise NoAttendingAvailableError()
        return doctor.id

    @staticmethod
    def compose_appointment_instant(
        date_str: Optional[str],
        time_str: Optional[str] = None,
        iso_datetime: Optional[str] = None
    ) -> datetime:
        """
        Normalize the booking form's date fields to one absolute instant.

        A pre-composed ISO instant is used as given. Otherwise the local date
        is combined with the local time, or 09:00 when no time was sent.

        Raises:
            InvalidInputError: If neither a date nor an ISO instant is given
            InvalidDateError / InvalidTimeError: If a field is malformed
        """
        if iso_datetime:
            return parse_datetime_string_to_mexico(iso_datetime)
        if not date_str:
            raise InvalidInputError("La fecha es requerida")
        return compose_local_instant(date_str, time_str or DEFAULT_APPOINTMENT_TIME)

    @staticmethod
    def list_appointments(db: Session, date_str: Optional[str] = None) -> List[Appointment]:
        """
        List appointments, optionally only those on one clinic-local day.

        Args:
            db: Database session
            date_str: Optional day filter (YYYY-MM-DD)

        Returns:
            Appointments ordered by scheduled instant
        """
        if not date_str:
            return find_all_appointments(db)

        start, end = AppointmentService.day_range(date_str)
        return find_appointments_in_range(db, start, end)

    @staticmethod
    def get_appointment(db: Session, appointment_id: int) -> Appointment:
        """
        Get one appointment.

        Raises:
            NotFoundError: If the appointment does not exist
        """
        appointment = find_appointment_by_id(db, appointment_id)
        if appointment is None:
            raise NotFoundError("Cita no encontrada")
        return appointment

    @staticmethod
    def create_appointment(
        db: Session,
        caller: UserContext,
        patient_id: int,
        reason: str,
        date_str: Optional[str] = None,
        time_str: Optional[str] = None,
        iso_datetime: Optional[str] = None,
        notes: Optional[str] = None
    ) -> Appointment:
        """
        Book an appointment.

        Args:
            db: Database session
            caller: Authenticated user making the booking
            patient_id: Patient being booked
            reason: Reason for the visit
            date_str: Local date (YYYY-MM-DD), used when iso_datetime is absent
            time_str: Local time (HH:MM), defaults to 09:00
            iso_datetime: Pre-composed ISO instant, takes precedence
            notes: Optional notes

        Returns:
            Created Appointment

        Raises:
            InvalidInputError: If the reason or date fields are invalid
            NotFoundError: If the patient does not exist
            NoAttendingAvailableError: If no doctor can attend
        """
        if not reason or not reason.strip():
            raise InvalidInputError("El motivo de la cita es requerido")

        scheduled_at = AppointmentService.compose_appointment_instant(date_str, time_str, iso_datetime)

        if find_patient_by_id(db, patient_id) is None:
            raise NotFoundError("Paciente no encontrado")

        doctor_id = AppointmentService.resolve_attending_user(db, caller)

        appointment = insert_appointment(
            db,
            scheduled_at=scheduled_at,
            patient_id=patient_id,
            doctor_id=doctor_id,
            reason=reason.strip(),
            notes=(notes or "").strip() or None,
            created_by=caller.user_id,
        )

        logger.info(
            f"Created appointment {appointment.id} for patient {patient_id} "
            f"with doctor {doctor_id} at {format_datetime(scheduled_at)}"
        )
        return appointment

    @staticmethod
    def update_appointment(
        db: Session,
        appointment_id: int,
        patient_id: Optional[int] = None,
        reason: Optional[str] = None,
        status: Optional[str] = None,
        notes: Optional[str] = None,
        date_str: Optional[str] = None,
        time_str: Optional[str] = None,
        iso_datetime: Optional[str] = None
    ) -> Appointment:
        """
        Update an appointment. Only the fields that are given change.

        Rescheduling follows the same date rules as booking.

        Raises:
            NotFoundError: If the appointment or new patient does not exist
            InvalidInputError: If status or date fields are invalid
        """
        appointment = AppointmentService.get_appointment(db, appointment_id)

        if status is not None and status not in VALID_APPOINTMENT_STATUSES:
            raise InvalidInputError(
                f"Estado inválido: {status}",
                allowed=list(VALID_APPOINTMENT_STATUSES),
            )

        if date_str or iso_datetime:
            appointment.scheduled_at = AppointmentService.compose_appointment_instant(
                date_str, time_str, iso_datetime
            )

        if patient_id is not None and patient_id != appointment.patient_id:
            if find_patient_by_id(db, patient_id) is None:
                raise NotFoundError("Paciente no encontrado")
            appointment.patient_id = patient_id

        if reason is not None:
            if not reason.strip():
                raise InvalidInputError("El motivo de la cita es requerido")
            appointment.reason = reason.strip()

        if status is not None:
            appointment.status = status

        if notes is not None:
            appointment.notes = notes.strip() or None

        db.commit()
        db.refresh(appointment)

        logger.info(f"Updated appointment {appointment.id}")
        return appointment

    @staticmethod
    def delete_appointment(db: Session, appointment_id: int) -> None:
        """
        Delete an appointment.

        Raises:
            NotFoundError: If the appointment does not exist
        """
        appointment = AppointmentService.get_appointment(db, appointment_id)
        db.delete(appointment)
        db.commit()
        logger.info(f"Deleted appointment {appointment_id}")
