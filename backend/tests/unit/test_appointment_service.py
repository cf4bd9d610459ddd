"""
Unit tests for AppointmentService scheduling rules.
"""

from datetime import datetime, timezone

import pytest

from auth.identity import UserContext
from core.exceptions import (
    InvalidDateError,
    InvalidInputError,
    InvalidTimeError,
    NoAttendingAvailableError,
    NotFoundError,
)
from models import Appointment, User
from services.appointment_service import AppointmentService
from utils.datetime_utils import MEXICO_TZ, compose_local_instant


def _book(db_session, caller, patient, date_str, time_str, reason="Consulta"):
    return AppointmentService.create_appointment(
        db_session, caller, patient_id=patient.id, reason=reason, date_str=date_str, time_str=time_str
    )


class TestDayRange:
    """Test day_range."""

    def test_range_covers_whole_local_day(self):
        start, end = AppointmentService.day_range("2024-03-10")

        assert start == datetime(2024, 3, 10, 0, 0, tzinfo=MEXICO_TZ)
        assert end == datetime(2024, 3, 10, 23, 59, 59, 999000, tzinfo=MEXICO_TZ)

    def test_includes_2359_of_day_and_excludes_0001_of_next(self):
        start, end = AppointmentService.day_range("2024-03-10")

        late = compose_local_instant("2024-03-10", "23:59")
        next_day = compose_local_instant("2024-03-11", "00:01")

        assert start <= late <= end
        assert not (start <= next_day <= end)

    def test_invalid_date(self):
        with pytest.raises(InvalidDateError):
            AppointmentService.day_range("10/03/2024x")


class TestResolveAttendingUser:
    """Test resolve_attending_user."""

    def test_doctor_attends_own_booking(self, db_session, doctor, create_user):
        create_user(email="otro@clinica.mx", name="Dr. Otro")

        assert AppointmentService.resolve_attending_user(db_session, UserContext.from_user(doctor)) == doctor.id

    def test_assistant_books_first_active_doctor(self, db_session, create_user, assistant):
        inactive = create_user(email="inactivo@clinica.mx", is_active=False)
        first = create_user(email="primero@clinica.mx")
        create_user(email="segundo@clinica.mx")

        attending = AppointmentService.resolve_attending_user(db_session, UserContext.from_user(assistant))

        assert attending == first.id
        assert attending != inactive.id

    def test_no_doctor_available(self, db_session, assistant):
        with pytest.raises(NoAttendingAvailableError) as exc_info:
            AppointmentService.resolve_attending_user(db_session, UserContext.from_user(assistant))

        assert exc_info.value.status_code == 400

    def test_no_placeholder_doctor_is_created(self, db_session, assistant):
        with pytest.raises(NoAttendingAvailableError):
            AppointmentService.resolve_attending_user(db_session, UserContext.from_user(assistant))

        assert db_session.query(User).filter(User.role == "doctor").count() == 0


class TestComposeAppointmentInstant:
    """Test compose_appointment_instant."""

    def test_iso_instant_wins(self):
        result = AppointmentService.compose_appointment_instant(
            "2024-03-12", "10:00", "2024-03-10T15:30:00.000Z"
        )

        assert result == datetime(2024, 3, 10, 15, 30, tzinfo=timezone.utc)

    def test_date_and_time(self):
        result = AppointmentService.compose_appointment_instant("2024-03-10", "16:45")

        assert result == datetime(2024, 3, 10, 16, 45, tzinfo=MEXICO_TZ)

    def test_missing_time_defaults_to_nine(self):
        result = AppointmentService.compose_appointment_instant("2024-03-10")

        assert result == datetime(2024, 3, 10, 9, 0, tzinfo=MEXICO_TZ)

    def test_missing_date_and_iso(self):
        with pytest.raises(InvalidInputError):
            AppointmentService.compose_appointment_instant(None, "10:00")

    def test_invalid_time(self):
        with pytest.raises(InvalidTimeError):
            AppointmentService.compose_appointment_instant("2024-03-10", "25:00")


class TestCreateAppointment:
    """Test create_appointment."""

    def test_assistant_booking_goes_to_doctor(self, db_session, doctor, assistant, patient):
        appointment = _book(db_session, UserContext.from_user(assistant), patient, "2024-03-10", "10:30")

        assert appointment.doctor_id == doctor.id
        assert appointment.created_by == assistant.id
        assert appointment.status == "scheduled"
        assert appointment.scheduled_at == datetime(2024, 3, 10, 16, 30, tzinfo=timezone.utc)

    def test_assistant_with_zero_doctors(self, db_session, assistant, patient):
        with pytest.raises(NoAttendingAvailableError):
            _book(db_session, UserContext.from_user(assistant), patient, "2024-03-10", "10:30")

        assert db_session.query(Appointment).count() == 0

    def test_unknown_patient(self, db_session, doctor):
        with pytest.raises(NotFoundError):
            AppointmentService.create_appointment(
                db_session, UserContext.from_user(doctor), patient_id=999, reason="Consulta", date_str="2024-03-10"
            )

    def test_blank_reason(self, db_session, doctor, patient):
        with pytest.raises(InvalidInputError):
            _book(db_session, UserContext.from_user(doctor), patient, "2024-03-10", "10:00", reason="  ")

    def test_blank_notes_stored_as_none(self, db_session, doctor, patient):
        appointment = AppointmentService.create_appointment(
            db_session, UserContext.from_user(doctor), patient_id=patient.id,
            reason="Consulta", date_str="2024-03-10", notes="   "
        )

        assert appointment.notes is None


class TestListAppointments:
    """Test list_appointments day filtering."""

    def test_day_filter_uses_clinic_day(self, db_session, doctor, patient):
        caller = UserContext.from_user(doctor)
        early = _book(db_session, caller, patient, "2024-03-10", "00:00")
        late = _book(db_session, caller, patient, "2024-03-10", "23:59")
        _book(db_session, caller, patient, "2024-03-09", "23:59")
        _book(db_session, caller, patient, "2024-03-11", "00:01")

        result = AppointmentService.list_appointments(db_session, "2024-03-10")

        assert [a.id for a in result] == [early.id, late.id]

    def test_ordered_by_instant(self, db_session, doctor, patient):
        caller = UserContext.from_user(doctor)
        second = _book(db_session, caller, patient, "2024-03-10", "15:00")
        first = _book(db_session, caller, patient, "2024-03-10", "08:00")

        result = AppointmentService.list_appointments(db_session)

        assert [a.id for a in result] == [first.id, second.id]

    def test_selected_instants_map_back_to_same_day(self, db_session, doctor, patient):
        caller = UserContext.from_user(doctor)
        for time_str in ("00:00", "06:00", "17:59", "18:00", "23:59"):
            _book(db_session, caller, patient, "2024-03-10", time_str)

        result = AppointmentService.list_appointments(db_session, "2024-03-10")

        assert len(result) == 5
        assert all(a.scheduled_at.astimezone(MEXICO_TZ).date().isoformat() == "2024-03-10" for a in result)


class TestUpdateAndDelete:
    """Test update_appointment and delete_appointment."""

    def test_partial_update(self, db_session, doctor, patient):
        appointment = _book(db_session, UserContext.from_user(doctor), patient, "2024-03-10", "10:00")

        updated = AppointmentService.update_appointment(db_session, appointment.id, status="completed", notes="Alta")

        assert updated.status == "completed"
        assert updated.notes == "Alta"
        assert updated.reason == "Consulta"
        assert updated.scheduled_at == datetime(2024, 3, 10, 16, 0, tzinfo=timezone.utc)

    def test_reschedule(self, db_session, doctor, patient):
        appointment = _book(db_session, UserContext.from_user(doctor), patient, "2024-03-10", "10:00")

        updated = AppointmentService.update_appointment(
            db_session, appointment.id, date_str="2024-03-12", time_str="11:15"
        )

        assert updated.scheduled_at == datetime(2024, 3, 12, 11, 15, tzinfo=MEXICO_TZ)

    def test_invalid_status(self, db_session, doctor, patient):
        appointment = _book(db_session, UserContext.from_user(doctor), patient, "2024-03-10", "10:00")

        with pytest.raises(InvalidInputError):
            AppointmentService.update_appointment(db_session, appointment.id, status="lost")

    def test_update_missing(self, db_session):
        with pytest.raises(NotFoundError):
            AppointmentService.update_appointment(db_session, 404, reason="Nada")

    def test_delete(self, db_session, doctor, patient):
        appointment = _book(db_session, UserContext.from_user(doctor), patient, "2024-03-10", "10:00")

        AppointmentService.delete_appointment(db_session, appointment.id)

        assert db_session.query(Appointment).count() == 0
        with pytest.raises(NotFoundError):
            AppointmentService.delete_appointment(db_session, appointment.id)
