"""
Router pour les rendez-vous.
CRUD : réservation, liste filtrée, modification et annulation (en attente uniquement).
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.student import Student
from app.schemas.appointment import (
    VALID_APPOINTMENT_FILTERS,
    AppointmentCreate,
    AppointmentResponse,
    AppointmentUpdate,
)
from app.security import get_current_student
from app.services import appointment_service

router = APIRouter(prefix="/api/students/appointments", tags=["Rendez-vous"])


def _raise_for(e: ValueError):
    msg = str(e)
    if "introuvable" in msg:
        raise HTTPException(status_code=404, detail=msg)
    raise HTTPException(status_code=400, detail=msg)


@router.get("", response_model=List[AppointmentResponse], summary="Lister ses rendez-vous")
def list_appointments(
    filter: str = Query("all", description="all, today, week, month, pending, completed"),
    student: Student = Depends(get_current_student),
    db: Session = Depends(get_db),
):
    """Retourne les rendez-vous de l'étudiant, éventuellement filtrés par période ou statut."""
    if filter not in VALID_APPOINTMENT_FILTERS:
        raise HTTPException(status_code=400, detail=f"Filtre invalide. Valeurs acceptées : {VALID_APPOINTMENT_FILTERS}")
    return appointment_service.get_appointments(db, student.id, filter)


@router.post("", response_model=AppointmentResponse, status_code=201, summary="Réserver un rendez-vous")
def create_appointment(
    data: AppointmentCreate,
    student: Student = Depends(get_current_student),
    db: Session = Depends(get_db),
):
    """
    Réserve un créneau avec un conseiller.
    Le créneau ne peut pas dépasser 1 heure ; une heure de fin inférieure ou égale
    à l'heure de début est comprise comme le lendemain.
    """
    try:
        return appointment_service.create_appointment(db, student.id, data)
    except ValueError as e:
        _raise_for(e)


@router.put("/{appointment_id}", response_model=AppointmentResponse, summary="Modifier un rendez-vous")
def update_appointment(
    appointment_id: str,
    data: AppointmentUpdate,
    student: Student = Depends(get_current_student),
    db: Session = Depends(get_db),
):
    try:
        return appointment_service.update_appointment(db, student.id, appointment_id, data)
    except ValueError as e:
        _raise_for(e)


@router.delete("/{appointment_id}", status_code=204, summary="Annuler un rendez-vous")
def cancel_appointment(
    appointment_id: str,
    student: Student = Depends(get_current_student),
    db: Session = Depends(get_db),
):
    """Annule un rendez-vous encore en attente (suppression définitive)."""
    try:
        appointment_service.cancel_appointment(db, student.id, appointment_id)
    except ValueError as e:
        _raise_for(e)
