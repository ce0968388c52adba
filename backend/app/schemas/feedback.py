"""
Schémas Pydantic pour les avis étudiants.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, StrictInt, field_validator

from app.schemas.common import check_object_id

VALID_FEEDBACK_TYPES = {"session", "platform", "content", "SOS"}


def _check_rating(v: int) -> int:
    if not 1 <= v <= 5:
        raise ValueError("La note doit être comprise entre 1 et 5.")
    return v


def _check_type(v: str) -> str:
    if v not in VALID_FEEDBACK_TYPES:
        raise ValueError(f"Type d'avis invalide. Valeurs acceptées : {VALID_FEEDBACK_TYPES}")
    return v


class FeedbackCreate(BaseModel):
    rating: StrictInt
    type: str
    comment: Optional[str] = None
    counselor_id: Optional[str] = None
    appointment_id: Optional[str] = None

    @field_validator("rating")
    @classmethod
    def rating_in_range(cls, v: int) -> int:
        return _check_rating(v)

    @field_validator("type")
    @classmethod
    def valid_type(cls, v: str) -> str:
        return _check_type(v)

    @field_validator("counselor_id", "appointment_id")
    @classmethod
    def valid_reference(cls, v: Optional[str]) -> Optional[str]:
        return check_object_id(v) if v is not None else v


class FeedbackUpdate(BaseModel):
    rating: Optional[StrictInt] = None
    type: Optional[str] = None
    comment: Optional[str] = None

    @field_validator("rating")
    @classmethod
    def rating_in_range(cls, v: Optional[int]) -> Optional[int]:
        return _check_rating(v) if v is not None else v

    @field_validator("type")
    @classmethod
    def valid_type(cls, v: Optional[str]) -> Optional[str]:
        return _check_type(v) if v is not None else v


class FeedbackResponse(BaseModel):
    id: str
    student_id: str
    rating: StrictInt
    type: str
    comment: Optional[str]
    counselor_id: Optional[str] = None
    appointment_id: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class CounselorRating(BaseModel):
    """Note moyenne d'un conseiller, tous avis confondus."""
    counselor_id: str
    full_name: Optional[str]
    average_rating: float
    feedback_count: int
