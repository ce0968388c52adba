"""
Schémas Pydantic pour l'authentification étudiant.
"""

from typing import Optional

from pydantic import BaseModel, field_validator

from app.schemas.common import check_password
from app.schemas.student import StudentResponse, check_phone


class SignupRequest(BaseModel):
    alias_id: str
    password: str
    phone: Optional[str] = None

    @field_validator("alias_id")
    @classmethod
    def alias_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("L'alias ne peut pas être vide.")
        return v.strip()

    @field_validator("password")
    @classmethod
    def strong_password(cls, v: str) -> str:
        return check_password(v)

    @field_validator("phone")
    @classmethod
    def valid_phone(cls, v: Optional[str]) -> Optional[str]:
        return check_phone(v) if v is not None else v


class LoginRequest(BaseModel):
    alias_id: str
    password: str


class PhoneRequest(BaseModel):
    """Récupération de compte (alias ou mot de passe oublié) par numéro de téléphone."""
    phone: str

    @field_validator("phone")
    @classmethod
    def valid_phone(cls, v: str) -> str:
        return check_phone(v)


class SetNewPasswordRequest(BaseModel):
    new_password: str

    @field_validator("new_password")
    @classmethod
    def strong_password(cls, v: str) -> str:
        return check_password(v)


class ChangePasswordRequest(BaseModel):
    current_password: str
    new_password: str

    @field_validator("new_password")
    @classmethod
    def strong_password(cls, v: str) -> str:
        return check_password(v)


class AuthResponse(BaseModel):
    token: str
    student: StudentResponse
    must_change_password: bool = False
    message: Optional[str] = None


class MessageResponse(BaseModel):
    message: str


class WhoAmIResponse(BaseModel):
    id: str
    role: str
