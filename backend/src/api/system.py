# pyright: reportMissingTypeStubs=false
"""
Clinic settings API endpoints.
"""

from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from api.responses import CamelModel, SystemConfigResponse
from auth.dependencies import require_doctor, require_doctor_or_assistant
from auth.identity import UserContext
from core.database import get_db
from services import SystemConfigService

router = APIRouter()


class SystemConfigRequest(CamelModel):
    """Request model for saving the clinic settings."""
    clinic_name: str
    doctor_name: str
    doctor_specialty: Optional[str] = None
    doctor_phone: Optional[str] = None
    doctor_email: Optional[str] = None
    clinic_address: Optional[str] = None


@router.get("/config", summary="Get clinic settings", response_model=SystemConfigResponse)
def get_config(
    current_user: UserContext = Depends(require_doctor_or_assistant),
    db: Session = Depends(get_db)
) -> SystemConfigResponse:
    """Return the clinic settings. Nothing is created when they were never saved."""
    return SystemConfigResponse.from_config(SystemConfigService.get_config(db))


@router.put("/config", summary="Save clinic settings", response_model=SystemConfigResponse)
def save_config(
    request: SystemConfigRequest,
    current_user: UserContext = Depends(require_doctor),
    db: Session = Depends(get_db)
) -> SystemConfigResponse:
    config = SystemConfigService.save_config(db, **request.model_dump())
    return SystemConfigResponse.from_config(config)
