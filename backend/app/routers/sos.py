"""
Router pour les alertes SOS.
POST   /api/students/sos       — déclencher une alerte
GET    /api/students/sos       — historique des alertes
DELETE /api/students/sos/{id}  — supprimer une alerte de l'historique
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.student import Student
from app.schemas.sos import SOSCreate, SOSLogResponse
from app.security import get_current_student
from app.services import sos_service

router = APIRouter(prefix="/api/students/sos", tags=["SOS"])


@router.post("", response_model=SOSLogResponse, status_code=201, summary="Déclencher une alerte SOS")
def trigger_sos(
    data: SOSCreate,
    student: Student = Depends(get_current_student),
    db: Session = Depends(get_db),
):
    """
    Enregistre l'alerte puis la livre à chaque conseiller (appel, SMS ou in-app).

    La réponse 201 signifie que l'alerte est enregistrée. Le résultat de la livraison
    est donné par conseiller dans `alerts[].delivery_status` :
    - initiated    : appel/SMS accepté par le fournisseur
    - failed       : échec après toutes les tentatives (voir delivery_error)
    - not_required : méthode in-app, pas de téléphonie
    """
    try:
        return sos_service.trigger_sos(db, student.id, data)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("", response_model=List[SOSLogResponse], summary="Historique des alertes")
def list_sos_logs(student: Student = Depends(get_current_student), db: Session = Depends(get_db)):
    return sos_service.get_sos_logs(db, student.id)


@router.delete("/{sos_id}", status_code=204, summary="Supprimer une alerte de l'historique")
def delete_sos_log(
    sos_id: str,
    student: Student = Depends(get_current_student),
    db: Session = Depends(get_db),
):
    success = sos_service.delete_sos_log(db, student.id, sos_id)
    if not success:
        raise HTTPException(status_code=404, detail="Alerte SOS introuvable.")
