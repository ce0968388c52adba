"""
Schémas Pydantic pour le suivi de l'humeur et des habitudes.
"""

import datetime as dt
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

VALID_MOODS = {"happy", "sad", "stressed", "anxious", "motivated"}
VALID_MOOD_TAGS = {
    "productive", "positive", "tired", "focussed",
    "lonely", "social", "bored", "energetic",
}


def _check_mood(v: str) -> str:
    if v not in VALID_MOODS:
        raise ValueError(f"Humeur invalide. Valeurs acceptées : {VALID_MOODS}")
    return v


def _check_tags(v: List[str]) -> List[str]:
    if not v:
        raise ValueError("Au moins un tag est requis.")
    invalid = [tag for tag in v if tag not in VALID_MOOD_TAGS]
    if invalid:
        raise ValueError(f"Tags invalides : {invalid}")
    return v


class MoodEntryCreate(BaseModel):
    date: Optional[dt.date] = None  # aujourd'hui si absent
    mood: str
    note: Optional[str] = None
    tags: List[str]

    @field_validator("mood")
    @classmethod
    def valid_mood(cls, v: str) -> str:
        return _check_mood(v)

    @field_validator("tags")
    @classmethod
    def valid_tags(cls, v: List[str]) -> List[str]:
        return _check_tags(v)


class MoodEntryUpdate(BaseModel):
    date: Optional[dt.date] = None
    mood: Optional[str] = None
    note: Optional[str] = None
    tags: Optional[List[str]] = None

    @field_validator("mood")
    @classmethod
    def valid_mood(cls, v: Optional[str]) -> Optional[str]:
        return _check_mood(v) if v is not None else v

    @field_validator("tags")
    @classmethod
    def valid_tags(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        return _check_tags(v) if v is not None else v


class MoodEntryResponse(BaseModel):
    id: str
    date: dt.date
    mood: str
    note: Optional[str]
    tags: List[str] = []

    model_config = {"from_attributes": True}


class HabitLogCreate(BaseModel):
    date: dt.date
    exercise: bool = False
    hydration: int = Field(default=0, ge=0, le=10000)  # ml
    screen_time: float = Field(default=0, ge=0, le=24)  # heures
    sleep_hours: float = Field(default=0, ge=0, le=24)


class HabitLogUpdate(BaseModel):
    date: Optional[dt.date] = None
    exercise: Optional[bool] = None
    hydration: Optional[int] = Field(default=None, ge=0, le=10000)
    screen_time: Optional[float] = Field(default=None, ge=0, le=24)
    sleep_hours: Optional[float] = Field(default=None, ge=0, le=24)


class HabitLogResponse(BaseModel):
    id: str
    date: dt.date
    exercise: bool
    hydration: int
    screen_time: float
    sleep_hours: float

    model_config = {"from_attributes": True}
