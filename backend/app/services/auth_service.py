"""
Service d'authentification étudiant : inscription, connexion, récupération
de compte par téléphone et changement de mot de passe.

Mot de passe oublié : un mot de passe temporaire (10 caractères, lettres et chiffres)
est envoyé par SMS. Il expire après TEMP_PASSWORD_EXPIRE_MINUTES et n'est utilisable
qu'une fois ; la connexion avec ce mot de passe force ensuite un changement.
"""

import logging
import secrets
import string
from datetime import datetime, timedelta, timezone

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.config import settings
from app.database import new_object_id
from app.models.student import Student
from app.schemas.auth import AuthResponse, LoginRequest, SignupRequest
from app.schemas.student import StudentResponse
from app.security import create_access_token, hash_password, verify_password
from app.services import telephony_service
from app.services.telephony_service import TelephonyError

logger = logging.getLogger(__name__)

TEMP_PASSWORD_LENGTH = 10


class AuthenticationError(Exception):
    """Refus d'authentification, porteur du code HTTP à renvoyer."""

    def __init__(self, message: str, status_code: int = 401):
        super().__init__(message)
        self.status_code = status_code


def _utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def generate_temp_password() -> str:
    """Génère un mot de passe temporaire contenant au moins une lettre et un chiffre."""
    alphabet = string.ascii_letters + string.digits
    chars = [secrets.choice(string.ascii_letters), secrets.choice(string.digits)]
    chars += [secrets.choice(alphabet) for _ in range(TEMP_PASSWORD_LENGTH - 2)]
    secrets.SystemRandom().shuffle(chars)
    return "".join(chars)


def _auth_response(student: Student, must_change_password: bool = False,
                   message: str = None) -> AuthResponse:
    return AuthResponse(
        token=create_access_token(student.id, role="student"),
        student=StudentResponse.model_validate(student),
        must_change_password=must_change_password,
        message=message,
    )


def signup(db: Session, data: SignupRequest) -> AuthResponse:
    """Crée un compte étudiant (statut pending) et retourne directement un jeton."""
    existing = db.execute(select(Student).where(Student.alias_id == data.alias_id)).scalar()
    if existing:
        raise ValueError("Cet alias est déjà utilisé.")

    student = Student(
        id=new_object_id(),
        alias_id=data.alias_id,
        phone=data.phone,
        password_hash=hash_password(data.password),
        language="en",
        status="pending",
        is_temp_password=False,
    )
    db.add(student)
    db.commit()
    db.refresh(student)

    logger.info("Étudiant inscrit : %s (%s)", student.alias_id, student.id)
    return _auth_response(student)


def login(db: Session, data: LoginRequest) -> AuthResponse:
    """
    Connecte un étudiant par alias et mot de passe.

    - alias inconnu → 404
    - compte banni → 403
    - mot de passe temporaire actif : accepté une seule fois avant expiration (403 si expiré),
      la réponse porte must_change_password=True
    - sinon le mot de passe permanent est vérifié (401 si invalide)
    """
    student = db.execute(select(Student).where(Student.alias_id == data.alias_id)).scalar()
    if student is None:
        raise AuthenticationError("Étudiant introuvable.", status_code=404)

    if student.status == "banned":
        raise AuthenticationError("Compte suspendu. Contactez l'administration.", status_code=403)

    if student.is_temp_password:
        if not student.temp_password_expires or student.temp_password_expires < _utcnow():
            raise AuthenticationError(
                "Mot de passe temporaire expiré. Veuillez en demander un nouveau.",
                status_code=403,
            )
        if verify_password(data.password, student.temp_password_hash):
            # Usage unique
            student.is_temp_password = False
            student.temp_password_hash = None
            student.temp_password_expires = None
            db.commit()
            logger.info("Connexion par mot de passe temporaire : %s", student.id)
            return _auth_response(
                student,
                must_change_password=True,
                message="Connecté avec un mot de passe temporaire. Changez-le immédiatement.",
            )

    if not verify_password(data.password, student.password_hash):
        raise AuthenticationError("Identifiants invalides.", status_code=401)

    return _auth_response(student)


def _find_by_phone(db: Session, phone: str) -> Student:
    student = db.execute(select(Student).where(Student.phone == phone)).scalar()
    if student is None:
        raise ValueError("Aucun compte associé à ce numéro.")
    return student


def send_alias_reminder(db: Session, phone: str) -> None:
    """Envoie l'alias du compte par SMS. Lève TelephonyError si le SMS échoue."""
    student = _find_by_phone(db, phone)
    telephony_service.send_sms(student.phone, f"MindMate: your Alias ID is {student.alias_id}.")


def send_temp_password(db: Session, phone: str) -> None:
    """
    Génère un mot de passe temporaire et l'envoie par SMS.
    Le mot de passe n'est enregistré que si le SMS est parti.
    """
    student = _find_by_phone(db, phone)
    temp_password = generate_temp_password()

    student.temp_password_hash = hash_password(temp_password)
    student.is_temp_password = True
    student.temp_password_expires = _utcnow() + timedelta(
        minutes=settings.TEMP_PASSWORD_EXPIRE_MINUTES
    )

    try:
        telephony_service.send_sms(
            student.phone,
            f"MindMate: your temporary password is {temp_password}. "
            f"It expires in {settings.TEMP_PASSWORD_EXPIRE_MINUTES} minutes and can be used once.",
        )
    except TelephonyError:
        db.rollback()
        raise

    db.commit()
    logger.info("Mot de passe temporaire émis pour l'étudiant %s", student.id)


def set_new_password(db: Session, student: Student, new_password: str) -> None:
    """Remplace le mot de passe (après connexion temporaire). Doit différer de l'ancien."""
    if verify_password(new_password, student.password_hash):
        raise ValueError("Le nouveau mot de passe doit être différent de l'ancien.")

    student.password_hash = hash_password(new_password)
    student.is_temp_password = False
    student.temp_password_hash = None
    student.temp_password_expires = None
    db.commit()


def change_password(db: Session, student: Student, current_password: str, new_password: str) -> None:
    """Changement de mot de passe depuis le profil, après vérification de l'actuel."""
    if not verify_password(current_password, student.password_hash):
        raise AuthenticationError("Mot de passe actuel incorrect.", status_code=401)
    set_new_password(db, student, new_password)
