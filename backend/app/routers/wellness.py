"""
Router pour le suivi bien-être.
/api/students/mood    — entrées d'humeur
/api/students/habits  — journaux d'habitudes
Chaque entrée est adressée par son identifiant.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.student import Student
from app.schemas.wellness import (
    HabitLogCreate,
    HabitLogResponse,
    HabitLogUpdate,
    MoodEntryCreate,
    MoodEntryResponse,
    MoodEntryUpdate,
)
from app.security import get_current_student
from app.services import wellness_service

router = APIRouter(prefix="/api/students", tags=["Bien-être"])


@router.get("/mood", response_model=List[MoodEntryResponse], summary="Lister ses humeurs")
def list_mood_entries(student: Student = Depends(get_current_student), db: Session = Depends(get_db)):
    return wellness_service.get_mood_entries(db, student.id)


@router.post("/mood", response_model=MoodEntryResponse, status_code=201, summary="Noter son humeur")
def add_mood_entry(
    data: MoodEntryCreate,
    student: Student = Depends(get_current_student),
    db: Session = Depends(get_db),
):
    return wellness_service.add_mood_entry(db, student.id, data)


@router.put("/mood/{entry_id}", response_model=MoodEntryResponse, summary="Modifier une humeur")
def update_mood_entry(
    entry_id: str,
    data: MoodEntryUpdate,
    student: Student = Depends(get_current_student),
    db: Session = Depends(get_db),
):
    try:
        return wellness_service.update_mood_entry(db, student.id, entry_id, data)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/mood/{entry_id}", status_code=204, summary="Supprimer une humeur")
def delete_mood_entry(
    entry_id: str,
    student: Student = Depends(get_current_student),
    db: Session = Depends(get_db),
):
    try:
        wellness_service.delete_mood_entry(db, student.id, entry_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/habits", response_model=List[HabitLogResponse], summary="Lister ses habitudes")
def list_habit_logs(student: Student = Depends(get_current_student), db: Session = Depends(get_db)):
    return wellness_service.get_habit_logs(db, student.id)


@router.post("/habits", response_model=HabitLogResponse, status_code=201, summary="Journaliser ses habitudes")
def add_habit_log(
    data: HabitLogCreate,
    student: Student = Depends(get_current_student),
    db: Session = Depends(get_db),
):
    return wellness_service.add_habit_log(db, student.id, data)


@router.put("/habits/{log_id}", response_model=HabitLogResponse, summary="Modifier un journal d'habitudes")
def update_habit_log(
    log_id: str,
    data: HabitLogUpdate,
    student: Student = Depends(get_current_student),
    db: Session = Depends(get_db),
):
    try:
        return wellness_service.update_habit_log(db, student.id, log_id, data)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/habits/{log_id}", status_code=204, summary="Supprimer un journal d'habitudes")
def delete_habit_log(
    log_id: str,
    student: Student = Depends(get_current_student),
    db: Session = Depends(get_db),
):
    try:
        wellness_service.delete_habit_log(db, student.id, log_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
