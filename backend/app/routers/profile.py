"""
Router pour le profil étudiant.
GET /api/students/profile                  — profil + rendez-vous
PUT /api/students/profile                  — mise à jour (téléphone, langue)
PUT /api/students/change-profile-password  — changement de mot de passe
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.appointment import Appointment
from app.models.student import Student
from app.schemas.appointment import AppointmentResponse
from app.schemas.auth import ChangePasswordRequest, MessageResponse
from app.schemas.student import ProfileResponse, ProfileUpdate, StudentResponse
from app.security import get_current_student
from app.services import auth_service
from app.services.auth_service import AuthenticationError

router = APIRouter(prefix="/api/students", tags=["Profil"])


@router.get("/profile", response_model=ProfileResponse, summary="Consulter son profil")
def get_profile(student: Student = Depends(get_current_student), db: Session = Depends(get_db)):
    """Retourne le profil (sans mot de passe) et la liste des rendez-vous de l'étudiant."""
    appointments = db.execute(
        select(Appointment)
        .where(Appointment.student_id == student.id)
        .order_by(Appointment.slot_date.desc())
    ).scalars().all()

    profile = StudentResponse.model_validate(student)
    return ProfileResponse(
        **profile.model_dump(),
        appointments=[AppointmentResponse.model_validate(a) for a in appointments],
    )


@router.put("/profile", response_model=StudentResponse, summary="Modifier son profil")
def update_profile(
    data: ProfileUpdate,
    student: Student = Depends(get_current_student),
    db: Session = Depends(get_db),
):
    """Met à jour les champs fournis. Les champs absents ne sont pas modifiés."""
    update_data = data.model_dump(exclude_unset=True, exclude_none=True)
    for field, value in update_data.items():
        setattr(student, field, value)

    db.commit()
    db.refresh(student)
    return student


@router.put("/change-profile-password", response_model=MessageResponse, summary="Changer son mot de passe")
def change_password(
    data: ChangePasswordRequest,
    student: Student = Depends(get_current_student),
    db: Session = Depends(get_db),
):
    try:
        auth_service.change_password(db, student, data.current_password, data.new_password)
    except AuthenticationError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return MessageResponse(message="Mot de passe mis à jour.")
