"""
Tests unitaires des règles de créneau et des filtres de rendez-vous.
"""

from datetime import date, timedelta

import pytest
from pydantic import ValidationError

from app.schemas.appointment import AppointmentCreate
from app.schemas.common import check_slot, slot_duration_minutes
from app.services.appointment_service import filter_date_range

COUNSELOR_ID = "65f0e1d2c3b4a59687766554"


def tomorrow() -> date:
    return date.today() + timedelta(days=1)


# --- Durée des créneaux ---

def test_creneau_45_minutes_accepte():
    check_slot("09:00", "09:45")


def test_creneau_une_heure_exacte_accepte():
    check_slot("09:00", "10:00")


def test_creneau_plus_d_une_heure_rejete():
    with pytest.raises(ValueError, match="1 heure"):
        check_slot("09:00", "10:01")


def test_fin_avant_debut_compte_comme_lendemain():
    """09:00 → 08:30 dure 23h30 : rejeté."""
    assert slot_duration_minutes("09:00", "08:30") == 23 * 60 + 30
    with pytest.raises(ValueError, match="1 heure"):
        check_slot("09:00", "08:30")


def test_creneau_a_cheval_sur_minuit_accepte():
    assert slot_duration_minutes("23:30", "00:15") == 45
    check_slot("23:30", "00:15")


def test_heure_mal_formee_rejetee():
    with pytest.raises(ValueError, match="HH:MM"):
        check_slot("9h", "10:00")


# --- Schéma de création ---

def test_appointment_create_valide():
    data = AppointmentCreate(
        counselor_id=COUNSELOR_ID.upper(),
        slot_date=tomorrow(),
        slot_start_time="14:00",
        slot_end_time="14:30",
    )
    assert data.counselor_id == COUNSELOR_ID


def test_appointment_create_date_passee_rejetee():
    with pytest.raises(ValidationError) as exc:
        AppointmentCreate(
            counselor_id=COUNSELOR_ID,
            slot_date=date.today() - timedelta(days=1),
            slot_start_time="09:00",
            slot_end_time="09:30",
        )
    assert "passé" in str(exc.value)


def test_appointment_create_identifiant_conseiller_invalide():
    with pytest.raises(ValidationError):
        AppointmentCreate(
            counselor_id="not-an-id",
            slot_date=tomorrow(),
            slot_start_time="09:00",
            slot_end_time="09:30",
        )


def test_appointment_create_creneau_trop_long():
    with pytest.raises(ValidationError) as exc:
        AppointmentCreate(
            counselor_id=COUNSELOR_ID,
            slot_date=tomorrow(),
            slot_start_time="09:00",
            slot_end_time="08:30",
        )
    assert "1 heure" in str(exc.value)


# --- Filtres de période ---

def test_filtre_today():
    today = date(2026, 10, 21)
    assert filter_date_range("today", today) == (today, today)


def test_filtre_week_commence_le_dimanche():
    """Mercredi 21/10/2026 → semaine du dimanche 18 au samedi 24."""
    assert filter_date_range("week", date(2026, 10, 21)) == (date(2026, 10, 18), date(2026, 10, 24))


def test_filtre_week_un_dimanche():
    assert filter_date_range("week", date(2026, 10, 18)) == (date(2026, 10, 18), date(2026, 10, 24))


def test_filtre_month():
    assert filter_date_range("month", date(2026, 2, 10)) == (date(2026, 2, 1), date(2026, 2, 28))


def test_filtre_sans_periode():
    assert filter_date_range("all", date(2026, 10, 21)) is None
    assert filter_date_range("pending", date(2026, 10, 21)) is None
