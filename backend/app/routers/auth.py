"""
Router d'authentification étudiant.
POST /api/students/signup            — inscription
POST /api/students/login             — connexion
POST /api/students/forgot-aliasid    — alias oublié (SMS)
POST /api/students/forgot-password   — mot de passe temporaire (SMS)
PUT  /api/students/set-new-password  — nouveau mot de passe après connexion temporaire
GET  /api/students/whoami            — identité du porteur du jeton
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.student import Student
from app.schemas.auth import (
    AuthResponse,
    LoginRequest,
    MessageResponse,
    PhoneRequest,
    SetNewPasswordRequest,
    SignupRequest,
    WhoAmIResponse,
)
from app.security import get_current_student
from app.services import auth_service
from app.services.auth_service import AuthenticationError
from app.services.telephony_service import TelephonyError

router = APIRouter(prefix="/api/students", tags=["Authentification"])


@router.post("/signup", response_model=AuthResponse, status_code=201, summary="Créer un compte étudiant")
def signup(data: SignupRequest, db: Session = Depends(get_db)):
    """Crée un compte à partir d'un alias (pseudonyme) et retourne un jeton d'accès."""
    try:
        return auth_service.signup(db, data)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/login", response_model=AuthResponse, summary="Se connecter")
def login(data: LoginRequest, db: Session = Depends(get_db)):
    """
    Connexion par alias et mot de passe.
    Si un mot de passe temporaire a été utilisé, `must_change_password` vaut true :
    le client doit rediriger vers le changement de mot de passe forcé.
    """
    try:
        return auth_service.login(db, data)
    except AuthenticationError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.post("/forgot-aliasid", response_model=MessageResponse, summary="Alias oublié")
def forgot_alias(data: PhoneRequest, db: Session = Depends(get_db)):
    """Envoie l'alias par SMS au numéro enregistré."""
    try:
        auth_service.send_alias_reminder(db, data.phone)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except TelephonyError:
        raise HTTPException(status_code=503, detail="Service SMS indisponible, réessayez plus tard.")
    return MessageResponse(message="Votre alias a été envoyé par SMS.")


@router.post("/forgot-password", response_model=MessageResponse, summary="Mot de passe oublié")
def forgot_password(data: PhoneRequest, db: Session = Depends(get_db)):
    """Envoie par SMS un mot de passe temporaire à usage unique."""
    try:
        auth_service.send_temp_password(db, data.phone)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except TelephonyError:
        raise HTTPException(status_code=503, detail="Service SMS indisponible, réessayez plus tard.")
    return MessageResponse(message="Un mot de passe temporaire vous a été envoyé par SMS.")


@router.put("/set-new-password", response_model=MessageResponse, summary="Définir un nouveau mot de passe")
def set_new_password(
    data: SetNewPasswordRequest,
    student: Student = Depends(get_current_student),
    db: Session = Depends(get_db),
):
    """L'étudiant est identifié par son jeton, jamais par un identifiant fourni dans le corps."""
    try:
        auth_service.set_new_password(db, student, data.new_password)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return MessageResponse(message="Mot de passe mis à jour. Veuillez vous reconnecter.")


@router.get("/whoami", response_model=WhoAmIResponse, summary="Identité de l'utilisateur connecté")
def whoami(student: Student = Depends(get_current_student)):
    return WhoAmIResponse(id=student.id, role="student")
