"""
Tests unitaires pour le suivi de l'humeur et des habitudes.
"""

from datetime import date
from unittest.mock import MagicMock

import pytest
from pydantic import ValidationError

from app.models.wellness import HabitLog
from app.schemas.wellness import HabitLogCreate, HabitLogUpdate, MoodEntryCreate, MoodEntryUpdate
from app.services.wellness_service import (
    add_habit_log,
    add_mood_entry,
    delete_mood_entry,
    update_habit_log,
    update_mood_entry,
)

STUDENT_ID = "65a1b2c3d4e5f6a7b8c9d0e1"
ENTRY_ID = "6611aa22bb33cc44dd55ee66"


def make_db_mock(found=None):
    db = MagicMock()
    db.execute.return_value.scalar.return_value = found
    return db


# --- Validation des schémas ---

def test_mood_invalide_rejetee():
    with pytest.raises(ValidationError):
        MoodEntryCreate(mood="angry", tags=["tired"])


def test_mood_sans_tag_rejetee():
    with pytest.raises(ValidationError) as exc:
        MoodEntryCreate(mood="happy", tags=[])
    assert "tag" in str(exc.value)


def test_mood_tag_inconnu_rejete():
    with pytest.raises(ValidationError):
        MoodEntryCreate(mood="happy", tags=["sleepy"])


def test_habit_valeurs_hors_bornes():
    with pytest.raises(ValidationError):
        HabitLogCreate(date=date(2026, 10, 1), hydration=-1)
    with pytest.raises(ValidationError):
        HabitLogCreate(date=date(2026, 10, 1), sleep_hours=25)


# --- Humeur ---

def test_add_mood_entry_date_par_defaut():
    db = make_db_mock()

    entry = add_mood_entry(db, STUDENT_ID, MoodEntryCreate(mood="happy", tags=["productive", "social"]))

    assert entry.date == date.today()
    assert entry.student_id == STUDENT_ID
    assert entry.tags == ["productive", "social"]
    assert len(entry.id) == 24
    db.commit.assert_called_once()


def test_update_mood_entry_succes():
    entry = MagicMock()
    db = make_db_mock(found=entry)

    update_mood_entry(db, STUDENT_ID, ENTRY_ID, MoodEntryUpdate(mood="motivated"))

    assert entry.mood == "motivated"
    db.commit.assert_called_once()


def test_update_mood_entry_d_un_autre_etudiant():
    """Filtrée par étudiant : l'entrée d'un autre est introuvable."""
    db = make_db_mock(found=None)

    with pytest.raises(ValueError, match="introuvable"):
        update_mood_entry(db, STUDENT_ID, ENTRY_ID, MoodEntryUpdate(mood="sad"))


def test_delete_mood_entry_succes():
    entry = MagicMock()
    db = make_db_mock(found=entry)

    delete_mood_entry(db, STUDENT_ID, ENTRY_ID)

    db.delete.assert_called_once_with(entry)


# --- Habitudes ---

def test_add_habit_log_succes():
    db = make_db_mock()

    log = add_habit_log(db, STUDENT_ID, HabitLogCreate(
        date=date(2026, 10, 18), exercise=True, hydration=1500, screen_time=4.5, sleep_hours=7,
    ))

    assert log.hydration == 1500
    assert log.exercise is True
    db.add.assert_called_once()


def test_update_habit_log_exercise_false_applique():
    log = HabitLog(id=ENTRY_ID, student_id=STUDENT_ID, date=date(2026, 10, 18), exercise=True)
    db = make_db_mock(found=log)

    update_habit_log(db, STUDENT_ID, ENTRY_ID, HabitLogUpdate(exercise=False))

    assert log.exercise is False
