"""
Clinic configuration model.

Holds the clinic's own details (name, address, doctor shown on printed
material). There is at most one row, keyed by SYSTEM_CONFIG_ID. Nothing
creates it implicitly: it only exists once someone saves the settings.
"""

from datetime import datetime
from typing import Optional
from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from core.constants import MAX_STRING_LENGTH, SYSTEM_CONFIG_ID
from core.database import Base, UTCDateTime


class SystemConfig(Base):
    """Clinic-wide settings."""

    __tablename__ = "system_config"

    id: Mapped[str] = mapped_column(String(20), primary_key=True, default=SYSTEM_CONFIG_ID)

    clinic_name: Mapped[str] = mapped_column(String(MAX_STRING_LENGTH))
    clinic_address: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    doctor_name: Mapped[str] = mapped_column(String(MAX_STRING_LENGTH))
    doctor_specialty: Mapped[Optional[str]] = mapped_column(String(MAX_STRING_LENGTH), nullable=True)
    doctor_phone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    doctor_email: Mapped[Optional[str]] = mapped_column(String(MAX_STRING_LENGTH), nullable=True)

    created_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)

    def __repr__(self) -> str:
        return f"<SystemConfig(id='{self.id}', clinic_name='{self.clinic_name}')>"
