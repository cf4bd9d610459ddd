"""
Integration tests for authentication system.

Tests the complete login, session and logout flow through the API.
"""

from datetime import timedelta

import pytest

from core.constants import SESSION_COOKIE_NAME
from models import UserSession
from services.credential_service import credential_service
from utils.datetime_utils import mexico_now


class TestLogin:
    """Test POST /api/auth/login."""

    def test_login_sets_session_cookie(self, client, doctor):
        response = client.post("/api/auth/login", json={"email": "doctor@clinica.mx", "password": "secreto123"})

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["user"] == {
            "id": doctor.id,
            "email": "doctor@clinica.mx",
            "name": "Dra. Ana López",
            "role": "doctor",
            "specialty": "Medicina General",
        }

        set_cookie = response.headers["set-cookie"]
        assert set_cookie.startswith(f"{SESSION_COOKIE_NAME}=")
        assert "HttpOnly" in set_cookie
        assert "Max-Age=604800" in set_cookie
        assert "samesite=lax" in set_cookie.lower()
        assert "Secure" not in set_cookie

    def test_token_only_in_cookie(self, client, doctor, db_session):
        response = client.post("/api/auth/login", json={"email": doctor.email, "password": "secreto123"})

        token = response.cookies.get(SESSION_COOKIE_NAME)
        assert token
        assert token not in response.text
        row = db_session.query(UserSession).one()
        assert row.token_hash == credential_service.hash_session_token(token)

    def test_email_is_case_insensitive(self, client, doctor):
        response = client.post("/api/auth/login", json={"email": "  DOCTOR@Clinica.MX", "password": "secreto123"})

        assert response.status_code == 200

    def test_wrong_password(self, client, doctor, db_session):
        response = client.post("/api/auth/login", json={"email": doctor.email, "password": "equivocada"})

        assert response.status_code == 401
        assert response.json()["error"] == "Credenciales inválidas"
        assert "set-cookie" not in response.headers
        assert db_session.query(UserSession).count() == 0

    def test_unknown_email_reads_the_same(self, client, doctor):
        wrong_password = client.post("/api/auth/login", json={"email": doctor.email, "password": "equivocada"})
        unknown_email = client.post("/api/auth/login", json={"email": "nadie@clinica.mx", "password": "secreto123"})

        assert unknown_email.status_code == 401
        assert unknown_email.json() == wrong_password.json()

    def test_unknown_email_still_checks_a_password(self, client, monkeypatch):
        checked = []
        monkeypatch.setattr(credential_service, "verify_unknown_user", lambda password: checked.append(password) or False)

        response = client.post("/api/auth/login", json={"email": "nadie@clinica.mx", "password": "secreto123"})

        assert response.status_code == 401
        assert checked == ["secreto123"]

    def test_inactive_user_cannot_log_in(self, client, create_user):
        create_user(email="baja@clinica.mx", is_active=False)

        response = client.post("/api/auth/login", json={"email": "baja@clinica.mx", "password": "secreto123"})

        assert response.status_code == 401

    @pytest.mark.parametrize("payload", [
        {},
        {"email": "doctor@clinica.mx"},
        {"password": "secreto123"},
        {"email": "", "password": "secreto123"},
    ])
    def test_missing_fields(self, client, doctor, payload):
        response = client.post("/api/auth/login", json=payload)

        assert response.status_code == 400
        assert response.json()["error"] == "Email y contraseña son requeridos"


class TestSessionAccess:
    """Test GET /api/auth/me and session handling."""

    def test_me_returns_logged_in_user(self, client, assistant, login):
        login(assistant.email)

        response = client.get("/api/auth/me")

        assert response.status_code == 200
        assert response.json()["user"]["email"] == assistant.email
        assert response.json()["user"]["role"] == "assistant"
        assert response.json()["user"]["specialty"] is None

    def test_me_without_cookie(self, client):
        response = client.get("/api/auth/me")

        assert response.status_code == 401
        assert response.json() == {"error": "No autenticado", "type": "unauthenticated"}

    def test_me_with_forged_cookie(self, client, doctor):
        client.cookies.set(SESSION_COOKIE_NAME, "forged-token")

        assert client.get("/api/auth/me").status_code == 401

    def test_expired_session_forces_relogin(self, client, doctor, login, db_session):
        login(doctor.email)
        row = db_session.query(UserSession).one()
        row.expires_at = mexico_now() - timedelta(minutes=1)
        db_session.commit()

        response = client.get("/api/auth/me")

        assert response.status_code == 401
        assert db_session.query(UserSession).count() == 0


class TestLogout:
    """Test POST /api/auth/logout."""

    def test_logout_ends_session(self, client, doctor, login, db_session):
        login(doctor.email)
        token = client.cookies.get(SESSION_COOKIE_NAME)

        response = client.post("/api/auth/logout")

        assert response.status_code == 200
        assert response.json()["success"] is True
        assert db_session.query(UserSession).count() == 0

        # Replaying the old token no longer works
        client.cookies.set(SESSION_COOKIE_NAME, token)
        assert client.get("/api/auth/me").status_code == 401

    def test_logout_without_session_is_ok(self, client):
        response = client.post("/api/auth/logout")

        assert response.status_code == 200
        assert "Max-Age=0" in response.headers["set-cookie"]


class TestChangePassword:
    """Test PUT /api/auth/change-password."""

    def test_change_password(self, client, doctor, login):
        login(doctor.email)

        response = client.put("/api/auth/change-password", json={
            "currentPassword": "secreto123",
            "newPassword": "nuevo456",
            "confirmPassword": "nuevo456",
        })

        assert response.status_code == 200
        assert response.json()["message"] == "Contraseña actualizada exitosamente"

        client.post("/api/auth/logout")
        old = client.post("/api/auth/login", json={"email": doctor.email, "password": "secreto123"})
        new = client.post("/api/auth/login", json={"email": doctor.email, "password": "nuevo456"})
        assert old.status_code == 401
        assert new.status_code == 200

    @pytest.mark.parametrize("payload,message", [
        ({"currentPassword": "secreto123", "newPassword": "nuevo456"}, "Todos los campos son requeridos"),
        (
            {"currentPassword": "secreto123", "newPassword": "nuevo456", "confirmPassword": "otro789"},
            "Las contraseñas nuevas no coinciden",
        ),
        (
            {"currentPassword": "secreto123", "newPassword": "corta", "confirmPassword": "corta"},
            "La nueva contraseña debe tener al menos 6 caracteres",
        ),
        (
            {"currentPassword": "equivocada", "newPassword": "nuevo456", "confirmPassword": "nuevo456"},
            "La contraseña actual es incorrecta",
        ),
    ])
    def test_rejected_changes(self, client, doctor, login, payload, message):
        login(doctor.email)

        response = client.put("/api/auth/change-password", json=payload)

        assert response.status_code == 400
        assert response.json()["error"] == message

    def test_requires_session(self, client):
        response = client.put("/api/auth/change-password", json={
            "currentPassword": "secreto123",
            "newPassword": "nuevo456",
            "confirmPassword": "nuevo456",
        })

        assert response.status_code == 401
