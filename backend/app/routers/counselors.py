"""
Router de consultation des conseillers/psychologues (réservation, SOS).
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.appointment import Appointment
from app.models.counselor import CounselorPsychologist
from app.models.student import Student
from app.schemas.counselor import CounselorResponse
from app.security import get_current_student

router = APIRouter(prefix="/api/students", tags=["Conseillers"])


@router.get("/counselorPsychologist", response_model=List[CounselorResponse],
            summary="Lister les conseillers disponibles")
def list_counselors(
    _: Student = Depends(get_current_student),
    db: Session = Depends(get_db),
):
    """Conseillers actifs et approuvés par l'administration, triés par nom."""
    return db.execute(
        select(CounselorPsychologist)
        .where(
            CounselorPsychologist.status == "active",
            CounselorPsychologist.approved_by_admin.is_(True),
        )
        .order_by(CounselorPsychologist.full_name)
    ).scalars().all()


@router.get("/counselorPsychologist/{counselor_id}", response_model=CounselorResponse,
            summary="Détail d'un conseiller")
def get_counselor(
    counselor_id: str,
    _: Student = Depends(get_current_student),
    db: Session = Depends(get_db),
):
    counselor = db.get(CounselorPsychologist, counselor_id)
    if counselor is None:
        raise HTTPException(status_code=404, detail="Conseiller introuvable.")
    return counselor


@router.get("/my-counselors", response_model=List[CounselorResponse],
            summary="Conseillers déjà rencontrés")
def list_my_counselors(
    student: Student = Depends(get_current_student),
    db: Session = Depends(get_db),
):
    """Conseillers avec lesquels l'étudiant a au moins un rendez-vous (dédupliqué)."""
    return db.execute(
        select(CounselorPsychologist)
        .join(Appointment, Appointment.counselor_id == CounselorPsychologist.id)
        .where(Appointment.student_id == student.id)
        .distinct()
    ).scalars().all()
