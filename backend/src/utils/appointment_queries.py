"""
Utility functions for consistent appointment queries.

Range queries take absolute instants; day boundaries are computed by the
caller in clinic local time (see utils.datetime_utils).
"""

from datetime import datetime
from typing import Any, List, Optional

from sqlalchemy.orm import Session, joinedload

from models import Appointment


def _with_patient(db: Session):
    return db.query(Appointment).options(joinedload(Appointment.patient))


def find_appointments_in_range(db: Session, start: datetime, end: datetime) -> List[Appointment]:
    """
    Appointments whose instant lies in the inclusive range ``[start, end]``.

    Args:
        db: Database session
        start: First instant included (timezone-aware)
        end: Last instant included (timezone-aware)

    Returns:
        Appointments ordered by scheduled instant
    """
    return _with_patient(db).filter(
        Appointment.scheduled_at >= start,
        Appointment.scheduled_at <= end,
    ).order_by(Appointment.scheduled_at, Appointment.id).all()


def find_all_appointments(db: Session) -> List[Appointment]:
    """All appointments ordered by scheduled instant."""
    return _with_patient(db).order_by(Appointment.scheduled_at, Appointment.id).all()


def find_appointment_by_id(db: Session, appointment_id: int) -> Optional[Appointment]:
    """Find an appointment (with its patient) by primary key."""
    return _with_patient(db).filter(Appointment.id == appointment_id).first()


def insert_appointment(db: Session, **fields: Any) -> Appointment:
    """Persist a new appointment and return it with its patient loaded."""
    appointment = Appointment(**fields)
    db.add(appointment)
    db.commit()
    db.refresh(appointment)
    return appointment
