"""
Service métier pour les avis étudiants.
"""

import logging
from typing import List

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.database import new_object_id
from app.models.appointment import Appointment
from app.models.counselor import CounselorPsychologist
from app.models.feedback import Feedback
from app.schemas.feedback import CounselorRating, FeedbackCreate, FeedbackUpdate

logger = logging.getLogger(__name__)


def create_feedback(db: Session, student_id: str, data: FeedbackCreate) -> Feedback:
    """
    Enregistre un avis. Lève ValueError si le conseiller référencé est introuvable,
    ou si le rendez-vous référencé est introuvable ou appartient à un autre étudiant.
    """
    if data.counselor_id and db.get(CounselorPsychologist, data.counselor_id) is None:
        raise ValueError("Conseiller introuvable.")

    if data.appointment_id:
        appointment = db.execute(
            select(Appointment).where(
                Appointment.id == data.appointment_id,
                Appointment.student_id == student_id,
            )
        ).scalar()
        if appointment is None:
            raise ValueError("Rendez-vous introuvable.")

    feedback = Feedback(
        id=new_object_id(),
        student_id=student_id,
        rating=data.rating,
        type=data.type,
        comment=data.comment,
        counselor_id=data.counselor_id,
        appointment_id=data.appointment_id,
    )
    db.add(feedback)
    db.commit()
    db.refresh(feedback)
    return feedback


def get_feedbacks(db: Session, student_id: str) -> List[Feedback]:
    """Avis de l'étudiant, du plus récent au plus ancien."""
    return db.execute(
        select(Feedback)
        .where(Feedback.student_id == student_id)
        .order_by(Feedback.created_at.desc())
    ).scalars().all()


def _get_own(db: Session, student_id: str, feedback_id: str) -> Feedback:
    feedback = db.execute(
        select(Feedback).where(Feedback.id == feedback_id, Feedback.student_id == student_id)
    ).scalar()
    if feedback is None:
        raise ValueError("Avis introuvable.")
    return feedback


def update_feedback(db: Session, student_id: str, feedback_id: str, data: FeedbackUpdate) -> Feedback:
    feedback = _get_own(db, student_id, feedback_id)
    for field, value in data.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(feedback, field, value)
    db.commit()
    db.refresh(feedback)
    return feedback


def delete_feedback(db: Session, student_id: str, feedback_id: str) -> None:
    feedback = _get_own(db, student_id, feedback_id)
    db.delete(feedback)
    db.commit()


def get_counselor_ratings(db: Session) -> List[CounselorRating]:
    """Note moyenne (arrondie à 0,1) et nombre d'avis par conseiller noté."""
    rows = db.execute(
        select(
            CounselorPsychologist.id,
            CounselorPsychologist.full_name,
            func.avg(Feedback.rating),
            func.count(Feedback.id),
        )
        .join(Feedback, Feedback.counselor_id == CounselorPsychologist.id)
        .group_by(CounselorPsychologist.id, CounselorPsychologist.full_name)
        .order_by(func.avg(Feedback.rating).desc())
    ).all()

    return [
        CounselorRating(
            counselor_id=counselor_id,
            full_name=full_name,
            average_rating=round(float(average), 1),
            feedback_count=count,
        )
        for counselor_id, full_name, average, count in rows
    ]
