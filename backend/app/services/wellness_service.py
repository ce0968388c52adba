"""
Service métier pour le suivi bien-être (humeur et habitudes).

Chaque entrée est adressée par son identifiant stable, toujours combiné à
l'identifiant de l'étudiant : l'entrée d'un autre étudiant est « introuvable ».
"""

from datetime import date
from typing import List

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.database import new_object_id
from app.models.wellness import HabitLog, MoodEntry
from app.schemas.wellness import HabitLogCreate, HabitLogUpdate, MoodEntryCreate, MoodEntryUpdate


# --- Humeur ---

def add_mood_entry(db: Session, student_id: str, data: MoodEntryCreate) -> MoodEntry:
    entry = MoodEntry(
        id=new_object_id(),
        student_id=student_id,
        date=data.date or date.today(),
        mood=data.mood,
        note=data.note,
        tags=data.tags,
    )
    db.add(entry)
    db.commit()
    db.refresh(entry)
    return entry


def get_mood_entries(db: Session, student_id: str) -> List[MoodEntry]:
    return db.execute(
        select(MoodEntry)
        .where(MoodEntry.student_id == student_id)
        .order_by(MoodEntry.date.desc(), MoodEntry.created_at.desc())
    ).scalars().all()


def _get_mood_entry(db: Session, student_id: str, entry_id: str) -> MoodEntry:
    entry = db.execute(
        select(MoodEntry).where(MoodEntry.id == entry_id, MoodEntry.student_id == student_id)
    ).scalar()
    if entry is None:
        raise ValueError("Entrée d'humeur introuvable.")
    return entry


def update_mood_entry(db: Session, student_id: str, entry_id: str, data: MoodEntryUpdate) -> MoodEntry:
    entry = _get_mood_entry(db, student_id, entry_id)
    for field, value in data.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(entry, field, value)
    db.commit()
    db.refresh(entry)
    return entry


def delete_mood_entry(db: Session, student_id: str, entry_id: str) -> None:
    entry = _get_mood_entry(db, student_id, entry_id)
    db.delete(entry)
    db.commit()


# --- Habitudes ---

def add_habit_log(db: Session, student_id: str, data: HabitLogCreate) -> HabitLog:
    log = HabitLog(id=new_object_id(), student_id=student_id, **data.model_dump())
    db.add(log)
    db.commit()
    db.refresh(log)
    return log


def get_habit_logs(db: Session, student_id: str) -> List[HabitLog]:
    return db.execute(
        select(HabitLog)
        .where(HabitLog.student_id == student_id)
        .order_by(HabitLog.date.desc(), HabitLog.created_at.desc())
    ).scalars().all()


def _get_habit_log(db: Session, student_id: str, log_id: str) -> HabitLog:
    log = db.execute(
        select(HabitLog).where(HabitLog.id == log_id, HabitLog.student_id == student_id)
    ).scalar()
    if log is None:
        raise ValueError("Journal d'habitudes introuvable.")
    return log


def update_habit_log(db: Session, student_id: str, log_id: str, data: HabitLogUpdate) -> HabitLog:
    """Met à jour les champs fournis ; `exercise=False` est bien pris en compte."""
    log = _get_habit_log(db, student_id, log_id)
    for field, value in data.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(log, field, value)
    db.commit()
    db.refresh(log)
    return log


def delete_habit_log(db: Session, student_id: str, log_id: str) -> None:
    log = _get_habit_log(db, student_id, log_id)
    db.delete(log)
    db.commit()
