"""
Tests for authentication dependencies.
"""

import pytest

from auth.dependencies import (
    AuthDecision,
    get_current_user,
    identify_caller,
    require_doctor,
    require_doctor_or_assistant,
    require_role,
    require_roles,
)
from auth.identity import UserContext
from core.exceptions import ForbiddenError, UnauthenticatedError
from services.session_service import SessionService


def _context(role: str) -> UserContext:
    return UserContext(user_id=1, email="user@clinica.mx", name="Usuario", role=role)


class TestUserContext:
    """Test UserContext helpers."""

    def test_from_user(self, doctor):
        context = UserContext.from_user(doctor)

        assert context.user_id == doctor.id
        assert context.email == "doctor@clinica.mx"
        assert context.specialty == "Medicina General"
        assert context.is_doctor() is True

    def test_assistant_is_not_doctor(self, assistant):
        context = UserContext.from_user(assistant)

        assert context.is_doctor() is False
        assert context.specialty is None


class TestIdentifyCaller:
    """Test identify_caller."""

    def test_valid_token(self, db_session, doctor):
        token = SessionService.create_session(db_session, doctor.id)

        identity = identify_caller(db_session, token)

        assert identity is not None
        assert identity.user_id == doctor.id

    @pytest.mark.parametrize("token", [None, "", "forged"])
    def test_no_identity(self, db_session, doctor, token):
        assert identify_caller(db_session, token) is None


class TestRequireRole:
    """Test require_role decisions."""

    @pytest.mark.parametrize("role,allowed,expected", [
        ("doctor", ["doctor"], AuthDecision.AUTHORIZED),
        ("doctor", ["doctor", "assistant"], AuthDecision.AUTHORIZED),
        ("assistant", ["doctor", "assistant"], AuthDecision.AUTHORIZED),
        ("assistant", ["doctor"], AuthDecision.FORBIDDEN),
        ("doctor", [], AuthDecision.FORBIDDEN),
        ("admin", ["doctor", "assistant"], AuthDecision.FORBIDDEN),
    ])
    def test_authorized_iff_role_allowed(self, role, allowed, expected):
        assert require_role(_context(role), allowed) is expected


class TestGetCurrentUser:
    """Test get_current_user dependency."""

    def test_missing_identity_raises(self):
        with pytest.raises(UnauthenticatedError):
            get_current_user(None)

    def test_identity_passes_through(self):
        context = _context("doctor")

        assert get_current_user(context) is context


class TestRequireRoles:
    """Test role-gated dependencies."""

    def test_doctor_passes_doctor_gate(self):
        context = _context("doctor")

        assert require_doctor(context) is context

    def test_assistant_fails_doctor_gate(self):
        with pytest.raises(ForbiddenError) as exc_info:
            require_doctor(_context("assistant"))

        payload = exc_info.value.to_dict()
        assert exc_info.value.status_code == 403
        assert payload["required"] == ["doctor"]
        assert payload["current"] == "assistant"

    def test_both_roles_pass_shared_gate(self):
        assert require_doctor_or_assistant(_context("doctor")).role == "doctor"
        assert require_doctor_or_assistant(_context("assistant")).role == "assistant"

    def test_custom_gate(self):
        gate = require_roles("assistant")

        with pytest.raises(ForbiddenError):
            gate(_context("doctor"))
