"""
Appointment model representing a scheduled visit of a patient with a doctor.

The appointment time is an absolute instant stored in UTC. It is presented
and filtered in clinic local time through utils.datetime_utils, so an
appointment selected by a day filter always belongs to that local day.
"""

from datetime import datetime
from typing import Optional
from sqlalchemy import String, Text, ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship

from core.constants import APPOINTMENT_STATUS_SCHEDULED
from core.database import Base, UTCDateTime


class Appointment(Base):
    """Scheduled visit between a patient and an attending doctor."""

    __tablename__ = "appointments"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)

    scheduled_at: Mapped[datetime] = mapped_column(UTCDateTime)
    """Absolute start instant of the appointment."""

    patient_id: Mapped[int] = mapped_column(ForeignKey("patients.id", ondelete="CASCADE"))
    doctor_id: Mapped[int] = mapped_column(ForeignKey("users.id"))
    """Attending doctor."""

    reason: Mapped[str] = mapped_column(String(500))
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    status: Mapped[str] = mapped_column(String(20), default=APPOINTMENT_STATUS_SCHEDULED)
    """Valid values: 'scheduled', 'completed', 'cancelled'."""

    created_by: Mapped[int] = mapped_column(ForeignKey("users.id"))
    """User who booked the appointment (doctor or assistant)."""

    created_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)

    # Relationships
    patient = relationship("Patient", back_populates="appointments")
    doctor = relationship("User", foreign_keys=[doctor_id])
    creator = relationship("User", foreign_keys=[created_by])

    __table_args__ = (
        Index('idx_appointments_scheduled_at', 'scheduled_at'),
        Index('idx_appointments_doctor_schedule', 'doctor_id', 'scheduled_at'),
    )

    def __repr__(self) -> str:
        return f"<Appointment(id={self.id}, patient_id={self.patient_id}, scheduled_at={self.scheduled_at})>"
