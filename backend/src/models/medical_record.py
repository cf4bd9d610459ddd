"""
Medical record model.

One row per consultation note written by a doctor: the chief complaint,
the clinical findings and the vital signs taken during the visit.
"""

from datetime import date, datetime
from typing import Optional
from sqlalchemy import String, Text, Integer, Float, Date, ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship

from core.constants import MAX_STRING_LENGTH
from core.database import Base, UTCDateTime


class MedicalRecord(Base):
    """Clinical history entry of a patient."""

    __tablename__ = "medical_records"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    patient_id: Mapped[int] = mapped_column(ForeignKey("patients.id", ondelete="CASCADE"))
    doctor_id: Mapped[int] = mapped_column(ForeignKey("users.id"))
    """Doctor who wrote the record."""

    chief_complaint: Mapped[str] = mapped_column(String(MAX_STRING_LENGTH))
    symptoms: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    diagnosis: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    treatment: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    prescription: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    follow_up_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)

    # Vital signs
    blood_pressure: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)  # e.g. "120/80"
    heart_rate: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)  # bpm
    temperature: Mapped[Optional[float]] = mapped_column(Float, nullable=True)  # °C
    weight: Mapped[Optional[float]] = mapped_column(Float, nullable=True)  # kg
    height: Mapped[Optional[float]] = mapped_column(Float, nullable=True)  # cm

    created_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)

    # Relationships
    patient = relationship("Patient", back_populates="medical_records")
    doctor = relationship("User")

    __table_args__ = (
        Index("idx_medical_records_patient", "patient_id"),
        Index("idx_medical_records_created", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<MedicalRecord(id={self.id}, patient_id={self.patient_id}, doctor_id={self.doctor_id})>"
