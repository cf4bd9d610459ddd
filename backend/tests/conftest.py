"""
Test configuration and shared fixtures for the clinic backend test suite.

Uses an in-memory SQLite database. Each test gets its own freshly created
schema, so tests can commit freely without leaking state.
"""

import os

# Must be set before any application module reads the configuration
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["APP_ENV"] = "test"
os.environ["SESSION_CLEANUP_ENABLED"] = "false"

from datetime import date  # noqa: E402
from typing import Callable, Generator, Optional  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from core import config  # noqa: E402
from core.constants import ROLE_ASSISTANT, ROLE_DOCTOR, SESSION_COOKIE_NAME  # noqa: E402
from core.database import Base, get_db  # noqa: E402
from models import Patient, User  # noqa: E402
from services.credential_service import credential_service  # noqa: E402

# Lowest cost bcrypt accepts; tests that assert the work factor restore it
FAST_BCRYPT_ROUNDS = 4

DEFAULT_PASSWORD = "secreto123"


@pytest.fixture(autouse=True)
def fast_bcrypt(monkeypatch):
    """Keep password hashing cheap in tests."""
    monkeypatch.setattr(config, "BCRYPT_ROUNDS", FAST_BCRYPT_ROUNDS)


@pytest.fixture(scope="function")
def db_engine():
    """
    Create an in-memory database engine for one test.

    StaticPool keeps a single connection so the schema survives across the
    threads TestClient runs sync endpoints on.
    """
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )
    Base.metadata.create_all(bind=engine)

    yield engine

    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db_session(db_engine) -> Generator[Session, None, None]:
    """Provide a database session bound to the test engine."""
    TestingSession = sessionmaker(bind=db_engine, autoflush=False, expire_on_commit=False)
    session = TestingSession()

    yield session

    session.close()


@pytest.fixture
def client(db_session) -> Generator[TestClient, None, None]:
    """TestClient whose requests share the test database session."""
    from main import app

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    client = TestClient(app)
    yield client
    app.dependency_overrides.pop(get_db, None)


@pytest.fixture
def create_user(db_session) -> Callable[..., User]:
    """Factory for users with a real bcrypt password hash."""

    def _create_user(
        email: str = "doctor@clinica.mx",
        password: str = DEFAULT_PASSWORD,
        name: str = "Dra. Ana López",
        role: str = ROLE_DOCTOR,
        specialty: Optional[str] = "Medicina General",
        is_active: bool = True
    ) -> User:
        user = User(
            email=email,
            password_hash=credential_service.hash_password(password),
            name=name,
            role=role,
            specialty=specialty,
            is_active=is_active,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _create_user


@pytest.fixture
def doctor(create_user) -> User:
    return create_user()


@pytest.fixture
def assistant(create_user) -> User:
    return create_user(
        email="asistente@clinica.mx",
        name="Luis Martínez",
        role=ROLE_ASSISTANT,
        specialty=None,
    )


@pytest.fixture
def create_patient(db_session) -> Callable[..., Patient]:
    """Factory for patients."""

    def _create_patient(
        first_name: str = "María",
        last_name: str = "García",
        phone: str = "+52 81 1234 5678",
        email: Optional[str] = None,
        date_of_birth: Optional[date] = date(1985, 6, 15),
        doctor_id: Optional[int] = None
    ) -> Patient:
        patient = Patient(
            first_name=first_name,
            last_name=last_name,
            phone=phone,
            email=email,
            date_of_birth=date_of_birth,
            doctor_id=doctor_id,
        )
        db_session.add(patient)
        db_session.commit()
        db_session.refresh(patient)
        return patient

    return _create_patient


@pytest.fixture
def patient(create_patient) -> Patient:
    return create_patient()


@pytest.fixture
def login(client) -> Callable[..., TestClient]:
    """Log a user in through the API; the client keeps the session cookie."""

    def _login(email: str, password: str = DEFAULT_PASSWORD) -> TestClient:
        response = client.post("/api/auth/login", json={"email": email, "password": password})
        assert response.status_code == 200, response.text
        assert client.cookies.get(SESSION_COOKIE_NAME)
        return client

    return _login
