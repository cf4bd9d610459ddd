"""
Utility functions for the clinic settings row.
"""

from typing import Optional

from sqlalchemy.orm import Session

from core.constants import SYSTEM_CONFIG_ID
from models import SystemConfig


def find_system_config(db: Session) -> Optional[SystemConfig]:
    """The saved clinic settings, or None if they were never saved."""
    return db.get(SystemConfig, SYSTEM_CONFIG_ID)
