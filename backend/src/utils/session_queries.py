"""
Utility functions for session rows.

Each function is a single read or a single committed write; callers never
hold a transaction open across several of them.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session, joinedload

from models import UserSession


def insert_session(db: Session, user_id: int, token_hash: str, expires_at: datetime) -> UserSession:
    """Persist a new session row."""
    user_session = UserSession(user_id=user_id, token_hash=token_hash, expires_at=expires_at)
    db.add(user_session)
    db.commit()
    db.refresh(user_session)
    return user_session


def find_session_by_token_hash(db: Session, token_hash: str) -> Optional[UserSession]:
    """Find a session and its owner by token digest."""
    return db.query(UserSession).options(
        joinedload(UserSession.user)
    ).filter(UserSession.token_hash == token_hash).first()


def delete_session(db: Session, token_hash: str) -> int:
    """
    Delete the session with this token digest.

    Returns:
        Number of rows deleted (0 when nothing matched)
    """
    deleted = db.query(UserSession).filter(
        UserSession.token_hash == token_hash
    ).delete(synchronize_session=False)
    db.commit()
    return deleted


def delete_session_by_id(db: Session, session_id: int) -> int:
    """Delete a session by primary key."""
    deleted = db.query(UserSession).filter(
        UserSession.id == session_id
    ).delete(synchronize_session=False)
    db.commit()
    return deleted


def delete_expired_sessions(db: Session, now: datetime) -> int:
    """Delete every session whose expiry is at or before ``now``."""
    deleted = db.query(UserSession).filter(
        UserSession.expires_at <= now
    ).delete(synchronize_session=False)
    db.commit()
    return deleted
