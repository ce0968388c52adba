"""
Schémas Pydantic pour les rendez-vous.

Note : on importe datetime en tant que module (dt) pour éviter le conflit de nommage
entre les champs de type date et le type `datetime.date` dans Pydantic v2.
"""

import datetime as dt
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator, model_validator

from app.schemas.common import check_object_id, check_slot, check_time

VALID_APPOINTMENT_STATUSES = {"pending", "confirmed", "rejected", "completed"}
VALID_APPOINTMENT_FILTERS = {"all", "today", "week", "month", "pending", "completed"}


def _not_in_past(v: dt.date) -> dt.date:
    if v < dt.date.today():
        raise ValueError("La date du rendez-vous ne peut pas être dans le passé.")
    return v


class AppointmentCreate(BaseModel):
    counselor_id: str
    slot_date: dt.date
    slot_start_time: str
    slot_end_time: str

    @field_validator("counselor_id")
    @classmethod
    def valid_counselor_id(cls, v: str) -> str:
        return check_object_id(v)

    @field_validator("slot_date")
    @classmethod
    def date_not_in_past(cls, v: dt.date) -> dt.date:
        return _not_in_past(v)

    @field_validator("slot_start_time", "slot_end_time")
    @classmethod
    def valid_time(cls, v: str) -> str:
        return check_time(v)

    @model_validator(mode="after")
    def slot_within_one_hour(self) -> "AppointmentCreate":
        check_slot(self.slot_start_time, self.slot_end_time)
        return self


class AppointmentUpdate(BaseModel):
    """Les bornes du créneau sont revalidées par le service avec les valeurs existantes."""
    slot_date: Optional[dt.date] = None
    slot_start_time: Optional[str] = None
    slot_end_time: Optional[str] = None

    @field_validator("slot_date")
    @classmethod
    def date_not_in_past(cls, v: Optional[dt.date]) -> Optional[dt.date]:
        return _not_in_past(v) if v is not None else v

    @field_validator("slot_start_time", "slot_end_time")
    @classmethod
    def valid_time(cls, v: Optional[str]) -> Optional[str]:
        return check_time(v) if v is not None else v


class AppointmentResponse(BaseModel):
    id: str
    counselor_id: str
    student_id: str
    slot_date: dt.date
    slot_start_time: str
    slot_end_time: str
    status: str
    reminder_sent: bool = False
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
