"""
Schémas Pydantic pour les ressources (lecture seule).
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

VALID_RESOURCE_TYPES = {"video", "article", "podcast", "guide"}
VALID_RESOURCE_LANGUAGES = {"English", "Hindi", "Tamil", "Malayalam"}
VALID_RESOURCE_TAGS = {"anxiety", "study", "sleep"}


class ResourceResponse(BaseModel):
    id: str
    title: str
    type: str
    language: str
    tags: List[str] = []
    link: str
    created_by: str
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
