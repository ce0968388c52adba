"""
Tests unitaires pour le service des rendez-vous.
"""

from datetime import date, timedelta
from unittest.mock import MagicMock

import pytest

from app.schemas.appointment import AppointmentCreate, AppointmentUpdate
from app.services.appointment_service import (
    cancel_appointment,
    create_appointment,
    update_appointment,
)

STUDENT_ID = "65a1b2c3d4e5f6a7b8c9d0e1"
COUNSELOR_ID = "65f0e1d2c3b4a59687766554"
APPOINTMENT_ID = "6600aa11bb22cc33dd44ee55"


# --- Helpers ---

def make_appointment_mock(status="pending", start="10:00", end="10:30"):
    appointment = MagicMock()
    appointment.id = APPOINTMENT_ID
    appointment.student_id = STUDENT_ID
    appointment.status = status
    appointment.slot_start_time = start
    appointment.slot_end_time = end
    return appointment


def make_db_mock(counselor=None, appointment=None):
    db = MagicMock()
    db.get.return_value = counselor
    db.execute.return_value.scalar.return_value = appointment
    return db


def make_create_data(**kwargs) -> AppointmentCreate:
    return AppointmentCreate(
        counselor_id=kwargs.get("counselor_id", COUNSELOR_ID),
        slot_date=kwargs.get("slot_date", date.today() + timedelta(days=2)),
        slot_start_time=kwargs.get("slot_start_time", "09:00"),
        slot_end_time=kwargs.get("slot_end_time", "09:45"),
    )


# --- create_appointment ---

def test_create_appointment_succes():
    db = make_db_mock(counselor=MagicMock(id=COUNSELOR_ID))

    appointment = create_appointment(db, STUDENT_ID, make_create_data())

    db.add.assert_called_once()
    db.commit.assert_called_once()
    assert appointment.status == "pending"
    assert appointment.student_id == STUDENT_ID
    assert appointment.slot_end_time == "09:45"
    assert len(appointment.id) == 24


def test_create_appointment_conseiller_introuvable():
    db = make_db_mock(counselor=None)

    with pytest.raises(ValueError, match="introuvable"):
        create_appointment(db, STUDENT_ID, make_create_data())

    db.add.assert_not_called()


# --- update_appointment ---

def test_update_appointment_succes():
    appointment = make_appointment_mock()
    db = make_db_mock(appointment=appointment)

    update_appointment(db, STUDENT_ID, APPOINTMENT_ID, AppointmentUpdate(slot_end_time="10:45"))

    assert appointment.slot_end_time == "10:45"
    db.commit.assert_called_once()


def test_update_appointment_creneau_fusionne_trop_long():
    """Seule la fin change, mais le créneau résultant 10:00 → 11:30 dépasse 1 heure."""
    appointment = make_appointment_mock()
    db = make_db_mock(appointment=appointment)

    with pytest.raises(ValueError, match="1 heure"):
        update_appointment(db, STUDENT_ID, APPOINTMENT_ID, AppointmentUpdate(slot_end_time="11:30"))

    db.commit.assert_not_called()


def test_update_appointment_non_en_attente():
    db = make_db_mock(appointment=make_appointment_mock(status="confirmed"))

    with pytest.raises(ValueError, match="en attente"):
        update_appointment(db, STUDENT_ID, APPOINTMENT_ID, AppointmentUpdate(slot_end_time="10:15"))


def test_update_appointment_introuvable():
    db = make_db_mock(appointment=None)

    with pytest.raises(ValueError, match="introuvable"):
        update_appointment(db, STUDENT_ID, APPOINTMENT_ID, AppointmentUpdate())


# --- cancel_appointment ---

def test_cancel_appointment_succes():
    appointment = make_appointment_mock()
    db = make_db_mock(appointment=appointment)

    cancel_appointment(db, STUDENT_ID, APPOINTMENT_ID)

    db.delete.assert_called_once_with(appointment)
    db.commit.assert_called_once()


def test_cancel_appointment_termine_refuse():
    db = make_db_mock(appointment=make_appointment_mock(status="completed"))

    with pytest.raises(ValueError):
        cancel_appointment(db, STUDENT_ID, APPOINTMENT_ID)

    db.delete.assert_not_called()
