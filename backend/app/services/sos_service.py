"""
Service métier pour les alertes SOS.

Flux :
  1. Vérifier que chaque conseiller alerté existe
  2. Enregistrer le SOSLog et une ligne SOSAlert par conseiller (commit immédiat :
     l'alerte est conservée même si la livraison échoue ensuite)
  3. Livrer l'alerte selon la méthode :
     - call : appel vocal Twilio avec le message d'urgence
     - sms  : SMS Twilio
     - app  : notification in-app uniquement, pas de téléphonie
  4. Enregistrer le statut de livraison par conseiller et le retourner à l'appelant
"""

import logging
from datetime import datetime, timezone
from typing import List

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.database import new_object_id
from app.models.counselor import CounselorPsychologist
from app.models.sos import SOSAlert, SOSLog
from app.schemas.sos import SOSAlertResponse, SOSCreate, SOSLogResponse
from app.services import telephony_service
from app.services.telephony_service import TelephonyError

logger = logging.getLogger(__name__)

SOS_SMS_BODY = (
    "MindMate SOS: a student has triggered an emergency alert. Please check immediately."
)


def trigger_sos(db: Session, student_id: str, data: SOSCreate) -> SOSLogResponse:
    """
    Déclenche une alerte SOS.
    Lève ValueError si un des conseillers est introuvable (rien n'est enregistré).
    """
    counselors = []
    for counselor_id in dict.fromkeys(data.alerted_to):
        counselor = db.get(CounselorPsychologist, counselor_id)
        if counselor is None:
            raise ValueError(f"Conseiller {counselor_id} introuvable.")
        counselors.append(counselor)

    sos_log = SOSLog(
        id=new_object_id(),
        student_id=student_id,
        method=data.method,
        triggered_at=datetime.now(timezone.utc),
    )
    db.add(sos_log)
    alerts = [
        SOSAlert(
            sos_log_id=sos_log.id,
            counselor_id=counselor.id,
            delivery_status="pending",
            attempts=0,
        )
        for counselor in counselors
    ]
    for alert in alerts:
        db.add(alert)
    db.commit()

    logger.info(
        "SOS %s déclenché par l'étudiant %s (%s), %d conseiller(s) alerté(s)",
        sos_log.id, student_id, data.method, len(alerts),
    )

    for alert, counselor in zip(alerts, counselors):
        _deliver(alert, counselor, data.method)
    db.commit()

    return _to_response(sos_log, alerts)


def _deliver(alert: SOSAlert, counselor: CounselorPsychologist, method: str) -> None:
    """Livre l'alerte à un conseiller et renseigne le statut sur la ligne SOSAlert."""
    if method == "app":
        alert.delivery_status = "not_required"
        return

    if not counselor.phone:
        alert.delivery_status = "failed"
        alert.delivery_error = "Aucun numéro de téléphone enregistré pour ce conseiller."
        logger.error("SOS : conseiller %s sans numéro de téléphone", counselor.id)
        return

    try:
        if method == "call":
            receipt = telephony_service.place_emergency_call(counselor.phone)
        else:
            receipt = telephony_service.send_sms(counselor.phone, SOS_SMS_BODY)
    except TelephonyError as exc:
        alert.delivery_status = "failed"
        alert.delivery_error = str(exc)
        alert.attempts = exc.attempts
        logger.error("SOS : livraison impossible au conseiller %s : %s", counselor.id, exc)
        return

    alert.delivery_status = "initiated"
    alert.provider_sid = receipt.sid
    alert.attempts = receipt.attempts


def get_sos_logs(db: Session, student_id: str) -> List[SOSLogResponse]:
    """Retourne les alertes de l'étudiant, de la plus récente à la plus ancienne."""
    logs = db.execute(
        select(SOSLog)
        .where(SOSLog.student_id == student_id)
        .order_by(SOSLog.triggered_at.desc())
    ).scalars().all()
    if not logs:
        return []

    alerts = db.execute(
        select(SOSAlert)
        .where(SOSAlert.sos_log_id.in_([log.id for log in logs]))
        .order_by(SOSAlert.id)
    ).scalars().all()

    alerts_by_log = {}
    for alert in alerts:
        alerts_by_log.setdefault(alert.sos_log_id, []).append(alert)

    return [_to_response(log, alerts_by_log.get(log.id, [])) for log in logs]


def delete_sos_log(db: Session, student_id: str, sos_id: str) -> bool:
    """
    Supprime une alerte de l'historique de l'étudiant.
    Retourne True si supprimée, False si introuvable (ou appartenant à un autre étudiant).
    """
    sos_log = db.execute(
        select(SOSLog).where(SOSLog.id == sos_id, SOSLog.student_id == student_id)
    ).scalar()
    if sos_log is None:
        return False

    db.delete(sos_log)
    db.commit()
    return True


def _to_response(sos_log: SOSLog, alerts: List[SOSAlert]) -> SOSLogResponse:
    return SOSLogResponse(
        id=sos_log.id,
        method=sos_log.method,
        triggered_at=sos_log.triggered_at,
        alerted_to=[alert.counselor_id for alert in alerts],
        alerts=[
            SOSAlertResponse(
                counselor_id=alert.counselor_id,
                delivery_status=alert.delivery_status,
                delivery_error=alert.delivery_error,
                attempts=alert.attempts or 0,
            )
            for alert in alerts
        ],
    )
