"""
Schémas Pydantic pour les alertes SOS.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, field_validator

from app.schemas.common import check_object_id

VALID_SOS_METHODS = ("call", "sms", "app")


class SOSCreate(BaseModel):
    alerted_to: List[str]  # identifiants de conseillers
    method: str

    @field_validator("alerted_to")
    @classmethod
    def at_least_one_contact(cls, v: List[str]) -> List[str]:
        if not v:
            raise ValueError("Au moins un conseiller doit être alerté.")
        return [check_object_id(contact) for contact in v]

    @field_validator("method")
    @classmethod
    def valid_method(cls, v: str) -> str:
        if v not in VALID_SOS_METHODS:
            raise ValueError(f"Méthode invalide. Valeurs acceptées : {VALID_SOS_METHODS}")
        return v


class SOSAlertResponse(BaseModel):
    """Résultat de livraison pour un conseiller alerté."""
    counselor_id: str
    delivery_status: str  # initiated, failed, not_required
    delivery_error: Optional[str] = None
    attempts: int = 0

    model_config = {"from_attributes": True}


class SOSLogResponse(BaseModel):
    id: str
    method: str
    triggered_at: Optional[datetime] = None
    alerted_to: List[str]
    alerts: List[SOSAlertResponse] = []
