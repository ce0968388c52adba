"""
Schémas Pydantic pour les conseillers/psychologues vus par un étudiant.
Le téléphone et l'email ne sont jamais exposés.
"""

from typing import Optional

from pydantic import BaseModel


class CounselorResponse(BaseModel):
    id: str
    alias_id: str
    full_name: Optional[str]
    role: str
    specialization: str
    credentials: str
    status: str

    model_config = {"from_attributes": True}
