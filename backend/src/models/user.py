"""
User model for clinic staff.

Every person who logs in is a User: doctors and assistants share one table,
distinguished by ``role``. Accounts are created by provisioning outside this
application and are deactivated (``is_active``) rather than deleted.
"""

from typing import Optional
from datetime import datetime
from sqlalchemy import String, Boolean, event
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from core.constants import MAX_STRING_LENGTH, ROLE_DOCTOR, VALID_ROLES
from core.database import Base, UTCDateTime


class User(Base):
    """Clinic staff account (doctor or assistant)."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)

    # Authentication
    email: Mapped[str] = mapped_column(String(MAX_STRING_LENGTH), unique=True, index=True)  # Stored lowercase
    password_hash: Mapped[str] = mapped_column(String(MAX_STRING_LENGTH))  # bcrypt

    # Profile
    name: Mapped[str] = mapped_column(String(MAX_STRING_LENGTH))
    role: Mapped[str] = mapped_column(String(20))  # 'doctor' | 'assistant'
    specialty: Mapped[Optional[str]] = mapped_column(String(MAX_STRING_LENGTH), nullable=True)
    """Medical specialty. Only kept for doctors; cleared for any other role."""
    phone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)

    # Metadata
    created_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)

    # Relationships
    sessions = relationship("UserSession", back_populates="user", cascade="all, delete-orphan")

    @validates("email")
    def _normalize_email(self, key: str, value: str) -> str:
        return value.strip().lower()

    @validates("role")
    def _check_role(self, key: str, value: str) -> str:
        if value not in VALID_ROLES:
            raise ValueError(f"Unknown role: {value}")
        return value

    @property
    def is_doctor(self) -> bool:
        return self.role == ROLE_DOCTOR

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}', role='{self.role}')>"


@event.listens_for(User, "before_insert")
@event.listens_for(User, "before_update")
def _clear_specialty_for_non_doctors(mapper, connection, target: User) -> None:  # type: ignore
    if target.role != ROLE_DOCTOR:
        target.specialty = None
