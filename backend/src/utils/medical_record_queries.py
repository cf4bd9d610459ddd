"""
Utility functions for medical record queries.
"""

from typing import Any, List, Optional

from sqlalchemy.orm import Session, joinedload

from models import MedicalRecord


def _with_patient(db: Session):
    return db.query(MedicalRecord).options(joinedload(MedicalRecord.patient))


def find_all_medical_records(db: Session, patient_id: Optional[int] = None) -> List[MedicalRecord]:
    """
    Medical records, newest first.

    Args:
        db: Database session
        patient_id: Only records of this patient, when given

    Returns:
        Records with their patient loaded
    """
    query = _with_patient(db)
    if patient_id is not None:
        query = query.filter(MedicalRecord.patient_id == patient_id)
    return query.order_by(MedicalRecord.created_at.desc(), MedicalRecord.id.desc()).all()


def find_medical_record_by_id(db: Session, record_id: int) -> Optional[MedicalRecord]:
    """Find a medical record (with its patient) by primary key."""
    return _with_patient(db).filter(MedicalRecord.id == record_id).first()


def insert_medical_record(db: Session, **fields: Any) -> MedicalRecord:
    """Persist a new medical record and return it with its patient loaded."""
    record = MedicalRecord(**fields)
    db.add(record)
    db.commit()
    db.refresh(record)
    return record
