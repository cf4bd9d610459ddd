"""
Utility functions for patient lookups.
"""

from typing import List, Optional

from sqlalchemy.orm import Session

from models import Patient


def find_patient_by_id(db: Session, patient_id: int) -> Optional[Patient]:
    """Find a patient by primary key."""
    return db.query(Patient).filter(Patient.id == patient_id).first()


def find_all_patients(db: Session) -> List[Patient]:
    """All patients, newest first."""
    return db.query(Patient).order_by(Patient.created_at.desc(), Patient.id.desc()).all()
