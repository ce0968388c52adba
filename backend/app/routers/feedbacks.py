"""
Router pour les avis étudiants.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.student import Student
from app.schemas.feedback import CounselorRating, FeedbackCreate, FeedbackResponse, FeedbackUpdate
from app.security import get_current_student
from app.services import feedback_service

router = APIRouter(prefix="/api/students/feedbacks", tags=["Avis"])


@router.get("", response_model=List[FeedbackResponse], summary="Lister ses avis")
def list_feedbacks(student: Student = Depends(get_current_student), db: Session = Depends(get_db)):
    return feedback_service.get_feedbacks(db, student.id)


@router.get("/ratings", response_model=List[CounselorRating], summary="Notes moyennes des conseillers")
def counselor_ratings(_: Student = Depends(get_current_student), db: Session = Depends(get_db)):
    return feedback_service.get_counselor_ratings(db)


@router.post("", response_model=FeedbackResponse, status_code=201, summary="Laisser un avis")
def create_feedback(
    data: FeedbackCreate,
    student: Student = Depends(get_current_student),
    db: Session = Depends(get_db),
):
    """Note de 1 à 5, type (session, platform, content, SOS) et commentaire libre."""
    try:
        return feedback_service.create_feedback(db, student.id, data)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.put("/{feedback_id}", response_model=FeedbackResponse, summary="Modifier un avis")
def update_feedback(
    feedback_id: str,
    data: FeedbackUpdate,
    student: Student = Depends(get_current_student),
    db: Session = Depends(get_db),
):
    try:
        return feedback_service.update_feedback(db, student.id, feedback_id, data)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/{feedback_id}", status_code=204, summary="Supprimer un avis")
def delete_feedback(
    feedback_id: str,
    student: Student = Depends(get_current_student),
    db: Session = Depends(get_db),
):
    try:
        feedback_service.delete_feedback(db, student.id, feedback_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
