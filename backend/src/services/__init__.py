"""
Services package for shared business logic.

This package contains service classes that encapsulate business logic
shared across multiple API endpoints.
"""

from .credential_service import CredentialService, credential_service
from .session_service import SessionService
from .patient_service import PatientService
from .appointment_service import AppointmentService
from .medical_record_service import MedicalRecordService
from .system_config_service import SystemConfigService

__all__ = [
    "CredentialService",
    "credential_service",
    "SessionService",
    "PatientService",
    "AppointmentService",
    "MedicalRecordService",
    "SystemConfigService",
]
