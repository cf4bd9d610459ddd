# pyright: reportMissingTypeStubs=false
"""
Authentication and authorization dependencies for FastAPI.

Identity resolution (who is calling) and the perimeter check (may they
come in) are separate: ``identify_caller`` and ``require_role`` are plain
functions with structured results, and the FastAPI dependencies below are
thin wrappers that turn those results into 401/403 errors.
"""

import logging
from enum import Enum
from typing import Callable, Iterable, Optional

from fastapi import Cookie, Depends
from sqlalchemy.orm import Session

from auth.identity import UserContext
from core.constants import ROLE_ASSISTANT, ROLE_DOCTOR, SESSION_COOKIE_NAME
from core.database import get_db
from core.exceptions import ForbiddenError, UnauthenticatedError
from services.session_service import SessionService

logger = logging.getLogger(__name__)


class AuthDecision(str, Enum):
    """Outcome of a role check."""

    AUTHORIZED = "authorized"
    FORBIDDEN = "forbidden"


def identify_caller(db: Session, session_token: Optional[str]) -> Optional[UserContext]:
    """
    Resolve the caller from a session token.

    Returns:
        UserContext when the token belongs to a live session, None when the
        token is missing, unknown or expired
    """
    if not session_token:
        return None
    return SessionService.validate_session(db, session_token)


def require_role(identity: UserContext, allowed_roles: Iterable[str]) -> AuthDecision:
    """Check whether an identity holds one of the allowed roles."""
    if identity.has_any_role(allowed_roles):
        return AuthDecision.AUTHORIZED
    return AuthDecision.FORBIDDEN


def get_session_token(
    session_token: Optional[str] = Cookie(None, alias=SESSION_COOKIE_NAME)
) -> Optional[str]:
    """Read the session token from the request cookie."""
    return session_token


def get_optional_user(
    session_token: Optional[str] = Depends(get_session_token),
    db: Session = Depends(get_db)
) -> Optional[UserContext]:
    """Get the caller if authenticated, None otherwise."""
    return identify_caller(db, session_token)


def get_current_user(
    user: Optional[UserContext] = Depends(get_optional_user)
) -> UserContext:
    """Get authenticated user context from the session cookie."""
    if user is None:
        raise UnauthenticatedError()
    return user


def require_roles(*allowed_roles: str) -> Callable[[UserContext], UserContext]:
    """
    Build a dependency that admits only callers holding one of ``allowed_roles``.

    Example:
        ```python
        @router.delete("/{id}")
        def remove(user: UserContext = Depends(require_roles("doctor"))):
            ...
        ```
    """
    roles = tuple(allowed_roles)

    def dependency(user: UserContext = Depends(get_current_user)) -> UserContext:
        if require_role(user, roles) is AuthDecision.FORBIDDEN:
            logger.info(f"Role check failed for user {user.user_id}: has '{user.role}', needs one of {list(roles)}")
            raise ForbiddenError(required=list(roles), current=user.role)
        return user

    return dependency


# Role-based authorization dependencies
require_doctor = require_roles(ROLE_DOCTOR)
require_doctor_or_assistant = require_roles(ROLE_DOCTOR, ROLE_ASSISTANT)
