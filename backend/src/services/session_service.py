"""
Session service for the login session lifecycle.

Creates, validates and destroys opaque session tokens backed by the
``sessions`` table. Database failures are logged and re-raised as
StorageFailureError so the caller decides how to surface them.
"""

import logging
from datetime import timedelta
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from auth.identity import UserContext
from core import config
from core.exceptions import StorageFailureError
from services.credential_service import credential_service
from utils.datetime_utils import mexico_now
from utils.session_queries import (
    delete_expired_sessions,
    delete_session,
    delete_session_by_id,
    find_session_by_token_hash,
    insert_session,
)

logger = logging.getLogger(__name__)


class SessionService:
    """
    Service class for session operations.

    Every method performs a single read or a single committed write.
    """

    @staticmethod
    def create_session(db: Session, user_id: int) -> str:
        """
        Start a session for a user.

        Args:
            db: Database session
            user_id: Owner of the new session

        Returns:
            The raw session token (to be sent to the client as a cookie)

        Raises:
            StorageFailureError: If the session row cannot be written
        """
        token = credential_service.generate_session_token()
        expires_at = mexico_now() + timedelta(days=config.SESSION_EXPIRE_DAYS)

        try:
            insert_session(db, user_id, credential_service.hash_session_token(token), expires_at)
        except SQLAlchemyError as e:
            db.rollback()
            logger.exception(f"Failed to create session for user {user_id}: {e}")
            raise StorageFailureError() from e

        logger.info(f"Created session for user {user_id}, expires at {expires_at.isoformat()}")
        return token

    @staticmethod
    def validate_session(db: Session, token: Optional[str]) -> Optional[UserContext]:
        """
        Resolve a session token to the user who owns it.

        Expired sessions are deleted on the spot. Sessions of deactivated
        users resolve to nobody.

        Returns:
            UserContext for a valid session, otherwise None

        Raises:
            StorageFailureError: If the lookup or cleanup fails
        """
        if not token:
            return None

        token_hash = credential_service.hash_session_token(token)
        try:
            user_session = find_session_by_token_hash(db, token_hash)
            if user_session is None:
                return None

            if user_session.is_expired(mexico_now()):
                logger.info(f"Session {user_session.id} expired, removing it")
                delete_session_by_id(db, user_session.id)
                return None

            user = user_session.user
        except SQLAlchemyError as e:
            db.rollback()
            logger.exception(f"Failed to validate session: {e}")
            raise StorageFailureError() from e

        if user is None or not user.is_active:
            return None

        return UserContext.from_user(user)

    @staticmethod
    def destroy_session(db: Session, token: Optional[str]) -> None:
        """
        End a session. Unknown or already-removed tokens are ignored.

        Raises:
            StorageFailureError: If the delete fails
        """
        if not token:
            return

        try:
            deleted = delete_session(db, credential_service.hash_session_token(token))
        except SQLAlchemyError as e:
            db.rollback()
            logger.exception(f"Failed to delete session: {e}")
            raise StorageFailureError() from e

        if deleted:
            logger.info("Session destroyed")
        else:
            logger.debug("No session matched token on destroy")

    @staticmethod
    def purge_expired_sessions(db: Session) -> int:
        """
        Delete all expired sessions.

        Returns:
            Number of sessions removed
        """
        try:
            deleted = delete_expired_sessions(db, mexico_now())
        except SQLAlchemyError as e:
            db.rollback()
            logger.exception(f"Failed to purge expired sessions: {e}")
            raise StorageFailureError() from e

        logger.info(f"Purged {deleted} expired sessions")
        return deleted
