# Package initialization
# Import all models to ensure relationships are properly established
from .user import User
from .user_session import UserSession
from .patient import Patient
from .appointment import Appointment
from .medical_record import MedicalRecord
from .system_config import SystemConfig

__all__ = [
    "User",
    "UserSession",
    "Patient",
    "Appointment",
    "MedicalRecord",
    "SystemConfig",
]
