"""
Service de consultation des ressources (lecture seule pour les étudiants).
"""

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models.resource import Resource


def get_resources(db: Session, type: Optional[str] = None, language: Optional[str] = None,
                  tag: Optional[str] = None) -> List[Resource]:
    """Liste les ressources, filtrées par type, langue et/ou tag, plus récentes d'abord."""
    query = select(Resource)
    if type:
        query = query.where(Resource.type == type)
    if language:
        query = query.where(Resource.language == language)

    resources = db.execute(query.order_by(Resource.created_at.desc())).scalars().all()

    # Les tags sont stockés en JSON : filtrage en Python pour rester portable
    if tag:
        resources = [r for r in resources if tag in (r.tags or [])]
    return resources


def get_resource(db: Session, resource_id: str) -> Optional[Resource]:
    return db.get(Resource, resource_id)
