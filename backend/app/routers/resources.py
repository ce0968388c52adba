"""
Router de consultation des ressources (lecture seule).
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.student import Student
from app.schemas.resource import ResourceResponse
from app.security import get_current_student
from app.services import resource_service

router = APIRouter(prefix="/api/students/resources", tags=["Ressources"])


@router.get("", response_model=List[ResourceResponse], summary="Lister les ressources")
def list_resources(
    type: Optional[str] = None,
    language: Optional[str] = None,
    tag: Optional[str] = None,
    _: Student = Depends(get_current_student),
    db: Session = Depends(get_db),
):
    """Filtres optionnels : type (video, article...), langue et tag."""
    return resource_service.get_resources(db, type=type, language=language, tag=tag)


@router.get("/{resource_id}", response_model=ResourceResponse, summary="Détail d'une ressource")
def get_resource(
    resource_id: str,
    _: Student = Depends(get_current_student),
    db: Session = Depends(get_db),
):
    resource = resource_service.get_resource(db, resource_id)
    if resource is None:
        raise HTTPException(status_code=404, detail="Ressource introuvable.")
    return resource
