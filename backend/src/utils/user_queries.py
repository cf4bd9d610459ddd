"""
Utility functions for user lookups.

Shared by authentication (login, sessions, password change) and by the
appointment scheduling fallback that picks an attending doctor.
"""

from typing import Optional

from sqlalchemy.orm import Session

from core.constants import ROLE_DOCTOR
from models import User


def find_user_by_email(db: Session, email: str, active_only: bool = True) -> Optional[User]:
    """
    Find a user by email, case-insensitively.

    Args:
        db: Database session
        email: Email as typed by the user
        active_only: Ignore deactivated accounts (default: True)

    Returns:
        User or None
    """
    query = db.query(User).filter(User.email == email.strip().lower())
    if active_only:
        query = query.filter(User.is_active.is_(True))
    return query.first()


def find_user_by_id(db: Session, user_id: int) -> Optional[User]:
    """Find a user by primary key."""
    return db.query(User).filter(User.id == user_id).first()


def update_user_password(db: Session, user_id: int, password_hash: str) -> None:
    """Store a new password hash for a user (single write)."""
    user = find_user_by_id(db, user_id)
    if user is None:
        return
    user.password_hash = password_hash
    db.commit()


def find_first_active_doctor(db: Session) -> Optional[User]:
    """
    Find the first active doctor, ordered by id for a stable choice.

    Returns:
        User or None when the clinic has no active doctor
    """
    return db.query(User).filter(
        User.role == ROLE_DOCTOR,
        User.is_active.is_(True),
    ).order_by(User.id).first()
