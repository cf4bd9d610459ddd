"""
Patient model representing individuals who receive care at the clinic.
"""

from sqlalchemy import String, ForeignKey, Date
from sqlalchemy.orm import Mapped, mapped_column, relationship
from datetime import datetime, date
from typing import Optional

from core.constants import MAX_STRING_LENGTH
from core.database import Base, UTCDateTime


class Patient(Base):
    """Patient of the clinic. Appointments reference patients by id."""

    __tablename__ = "patients"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)

    first_name: Mapped[str] = mapped_column(String(MAX_STRING_LENGTH))
    last_name: Mapped[str] = mapped_column(String(MAX_STRING_LENGTH))
    email: Mapped[Optional[str]] = mapped_column(String(MAX_STRING_LENGTH), nullable=True)
    phone: Mapped[str] = mapped_column(String(50))
    date_of_birth: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    """Date only, no time or timezone."""

    doctor_id: Mapped[Optional[int]] = mapped_column(ForeignKey("users.id"), nullable=True)
    """Treating doctor, when one was known at registration."""

    created_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)

    # Deleting a patient removes their appointments and clinical history
    appointments = relationship("Appointment", back_populates="patient", cascade="all, delete-orphan")
    medical_records = relationship("MedicalRecord", back_populates="patient", cascade="all, delete-orphan")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def __repr__(self) -> str:
        return f"<Patient(id={self.id}, name='{self.full_name}')>"
