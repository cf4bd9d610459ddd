"""
System config service for the clinic-wide settings row.
"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from core.constants import SYSTEM_CONFIG_ID
from core.exceptions import InvalidInputError
from models import SystemConfig
from utils.system_config_queries import find_system_config

logger = logging.getLogger(__name__)


class SystemConfigService:
    """
    Service class for clinic settings.

    Reading never writes: until the settings are saved for the first time
    there is simply no configuration.
    """

    @staticmethod
    def get_config(db: Session) -> Optional[SystemConfig]:
        """Return the saved settings, or None when they were never saved."""
        return find_system_config(db)

    @staticmethod
    def save_config(
        db: Session,
        clinic_name: str,
        doctor_name: str,
        doctor_specialty: Optional[str] = None,
        doctor_phone: Optional[str] = None,
        doctor_email: Optional[str] = None,
        clinic_address: Optional[str] = None
    ) -> SystemConfig:
        """
        Create or replace the clinic settings.

        Every field is overwritten; optional fields left out are cleared.

        Raises:
            InvalidInputError: If the clinic or doctor name is blank
        """
        if not clinic_name or not clinic_name.strip() or not doctor_name or not doctor_name.strip():
            raise InvalidInputError("El nombre de la clínica y del doctor son requeridos")

        config = find_system_config(db)
        created = config is None
        if config is None:
            config = SystemConfig(id=SYSTEM_CONFIG_ID)
            db.add(config)

        config.clinic_name = clinic_name.strip()
        config.doctor_name = doctor_name.strip()
        config.doctor_specialty = (doctor_specialty or "").strip() or None
        config.doctor_phone = (doctor_phone or "").strip() or None
        config.doctor_email = (doctor_email or "").strip().lower() or None
        config.clinic_address = (clinic_address or "").strip() or None

        db.commit()
        db.refresh(config)

        logger.info("Created clinic settings" if created else "Updated clinic settings")
        return config
