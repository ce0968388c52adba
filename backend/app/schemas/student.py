"""
Schémas Pydantic pour le profil étudiant.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, field_validator

from app.schemas.appointment import AppointmentResponse
from app.schemas.common import PHONE_PATTERN


def check_phone(v: str) -> str:
    v = v.strip().replace(" ", "")
    if not PHONE_PATTERN.fullmatch(v):
        raise ValueError("Numéro de téléphone invalide.")
    return v


class StudentResponse(BaseModel):
    """Profil étudiant sans aucune donnée de mot de passe."""
    id: str
    alias_id: str
    phone: Optional[str] = None
    language: Optional[str] = "en"
    status: str
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class ProfileResponse(StudentResponse):
    """Profil complet (GET /profile) : l'étudiant et ses rendez-vous."""
    appointments: List[AppointmentResponse] = []


class ProfileUpdate(BaseModel):
    """Mise à jour du profil (PUT /profile). Les champs absents ne sont pas modifiés."""
    phone: Optional[str] = None
    language: Optional[str] = None

    @field_validator("phone")
    @classmethod
    def valid_phone(cls, v: Optional[str]) -> Optional[str]:
        return check_phone(v) if v is not None else v

    @field_validator("language")
    @classmethod
    def language_not_empty(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            raise ValueError("La langue ne peut pas être vide.")
        return v.strip() if v else v
