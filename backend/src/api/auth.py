# pyright: reportMissingTypeStubs=false
"""
Authentication API endpoints.

Email/password login backed by opaque session cookies, plus logout,
current-user lookup and password change.

Handlers are plain ``def`` so bcrypt work runs in FastAPI's threadpool.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from api.responses import CamelModel, CurrentUserResponse, LoginResponse, SuccessResponse, UserSummary
from auth.dependencies import get_current_user, get_session_token
from auth.identity import UserContext
from core import config
from core.constants import MIN_PASSWORD_LENGTH, SESSION_COOKIE_MAX_AGE_SECONDS, SESSION_COOKIE_NAME
from core.database import get_db
from core.exceptions import InvalidCredentialsError, InvalidInputError, NotFoundError, WeakPasswordError
from services.credential_service import credential_service
from services.session_service import SessionService
from utils.user_queries import find_user_by_email, find_user_by_id, update_user_password

logger = logging.getLogger(__name__)

router = APIRouter()


class LoginRequest(CamelModel):
    """Request model for login. Fields are checked in the handler."""
    email: Optional[str] = None
    password: Optional[str] = None


class ChangePasswordRequest(CamelModel):
    """Request model for password change."""
    current_password: Optional[str] = None
    new_password: Optional[str] = None
    confirm_password: Optional[str] = None


def _set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=SESSION_COOKIE_NAME,
        value=token,
        max_age=SESSION_COOKIE_MAX_AGE_SECONDS,
        path="/",
        httponly=True,
        secure=config.IS_PRODUCTION,
        samesite="lax",
    )


def _clear_session_cookie(response: Response) -> None:
    response.delete_cookie(
        key=SESSION_COOKIE_NAME,
        path="/",
        httponly=True,
        secure=config.IS_PRODUCTION,
        samesite="lax",
    )


@router.post("/login", summary="Log in with email and password", response_model=LoginResponse)
def login(
    request: LoginRequest,
    response: Response,
    db: Session = Depends(get_db)
) -> LoginResponse:
    """
    Verify credentials and start a session.

    The session token is returned only as an HttpOnly cookie. Unknown email,
    inactive account and wrong password all produce the same 401.
    """
    email = (request.email or "").strip().lower()
    if not email or not request.password:
        raise InvalidInputError("Email y contraseña son requeridos")

    user = find_user_by_email(db, email, active_only=True)
    if user is None:
        verified = credential_service.verify_unknown_user(request.password)
    else:
        verified = credential_service.verify_password(request.password, user.password_hash)

    if user is None or not verified:
        logger.warning("Failed login attempt")
        raise InvalidCredentialsError()

    token = SessionService.create_session(db, user.id)
    _set_session_cookie(response, token)

    logger.info(f"User {user.id} logged in")
    return LoginResponse(user=UserSummary.from_context(UserContext.from_user(user)))


@router.post("/logout", summary="Log out", response_model=SuccessResponse)
def logout(
    response: Response,
    session_token: Optional[str] = Depends(get_session_token),
    db: Session = Depends(get_db)
) -> SuccessResponse:
    """End the current session, if any, and clear the cookie."""
    SessionService.destroy_session(db, session_token)
    _clear_session_cookie(response)
    return SuccessResponse()


@router.get("/me", summary="Get current user", response_model=CurrentUserResponse)
def get_me(current_user: UserContext = Depends(get_current_user)) -> CurrentUserResponse:
    """Return the user behind the session cookie."""
    return CurrentUserResponse(user=UserSummary.from_context(current_user))


@router.put("/change-password", summary="Change own password", response_model=SuccessResponse)
def change_password(
    request: ChangePasswordRequest,
    current_user: UserContext = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> SuccessResponse:
    """
    Change the caller's password.

    Existing sessions stay valid.
    """
    if not request.current_password or not request.new_password or not request.confirm_password:
        raise InvalidInputError("Todos los campos son requeridos")

    if request.new_password != request.confirm_password:
        raise InvalidInputError("Las contraseñas nuevas no coinciden")

    if len(request.new_password) < MIN_PASSWORD_LENGTH:
        raise WeakPasswordError("La nueva contraseña debe tener al menos 6 caracteres")

    user = find_user_by_id(db, current_user.user_id)
    if user is None:
        raise NotFoundError("Usuario no encontrado")

    if not credential_service.verify_password(request.current_password, user.password_hash):
        raise InvalidInputError("La contraseña actual es incorrecta")

    update_user_password(db, user.id, credential_service.hash_password(request.new_password))

    logger.info(f"User {user.id} changed password")
    return SuccessResponse(message="Contraseña actualizada exitosamente")
