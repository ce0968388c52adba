"""
Service métier pour les rendez-vous étudiant ↔ conseiller.
Un rendez-vous n'est modifiable ou annulable que tant qu'il est en attente (pending).
Aucun contrôle de double réservation d'un même créneau.
"""

import calendar
import logging
from datetime import date, timedelta
from typing import List, Optional, Tuple

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.database import new_object_id
from app.models.appointment import Appointment
from app.models.counselor import CounselorPsychologist
from app.schemas.appointment import AppointmentCreate, AppointmentUpdate
from app.schemas.common import check_slot

logger = logging.getLogger(__name__)


def filter_date_range(filter_option: str, today: date) -> Optional[Tuple[date, date]]:
    """
    Bornes de dates (incluses) d'un filtre de liste, ou None si le filtre ne porte pas
    sur la date. La semaine commence le dimanche.
    """
    if filter_option == "today":
        return today, today
    if filter_option == "week":
        start = today - timedelta(days=(today.weekday() + 1) % 7)
        return start, start + timedelta(days=6)
    if filter_option == "month":
        last_day = calendar.monthrange(today.year, today.month)[1]
        return today.replace(day=1), today.replace(day=last_day)
    return None


def create_appointment(db: Session, student_id: str, data: AppointmentCreate) -> Appointment:
    """Crée un rendez-vous en attente. Lève ValueError si le conseiller est introuvable."""
    counselor = db.get(CounselorPsychologist, data.counselor_id)
    if counselor is None:
        raise ValueError("Conseiller introuvable.")

    appointment = Appointment(
        id=new_object_id(),
        counselor_id=data.counselor_id,
        student_id=student_id,
        slot_date=data.slot_date,
        slot_start_time=data.slot_start_time,
        slot_end_time=data.slot_end_time,
        status="pending",
        reminder_sent=False,
    )
    db.add(appointment)
    db.commit()
    db.refresh(appointment)

    logger.info(
        "Rendez-vous %s créé : étudiant %s avec %s le %s %s-%s",
        appointment.id, student_id, data.counselor_id,
        data.slot_date, data.slot_start_time, data.slot_end_time,
    )
    return appointment


def get_appointments(db: Session, student_id: str, filter_option: str = "all",
                     today: Optional[date] = None) -> List[Appointment]:
    """Rendez-vous de l'étudiant, filtrés par période ou par statut, triés par date."""
    query = select(Appointment).where(Appointment.student_id == student_id)

    date_range = filter_date_range(filter_option, today or date.today())
    if date_range is not None:
        query = query.where(Appointment.slot_date.between(*date_range))
    elif filter_option in ("pending", "completed"):
        query = query.where(Appointment.status == filter_option)

    return db.execute(
        query.order_by(Appointment.slot_date, Appointment.slot_start_time)
    ).scalars().all()


def _get_own(db: Session, student_id: str, appointment_id: str) -> Appointment:
    appointment = db.execute(
        select(Appointment).where(
            Appointment.id == appointment_id,
            Appointment.student_id == student_id,
        )
    ).scalar()
    if appointment is None:
        raise ValueError("Rendez-vous introuvable.")
    return appointment


def update_appointment(db: Session, student_id: str, appointment_id: str,
                       data: AppointmentUpdate) -> Appointment:
    """
    Modifie le créneau d'un rendez-vous en attente.
    Le créneau résultant (valeurs fournies + valeurs existantes) est revalidé.
    """
    appointment = _get_own(db, student_id, appointment_id)
    if appointment.status != "pending":
        raise ValueError("Seul un rendez-vous en attente peut être modifié.")

    update_data = data.model_dump(exclude_unset=True, exclude_none=True)
    check_slot(
        update_data.get("slot_start_time", appointment.slot_start_time),
        update_data.get("slot_end_time", appointment.slot_end_time),
    )
    for field, value in update_data.items():
        setattr(appointment, field, value)

    db.commit()
    db.refresh(appointment)
    return appointment


def cancel_appointment(db: Session, student_id: str, appointment_id: str) -> None:
    """Annule (supprime) un rendez-vous encore en attente."""
    appointment = _get_own(db, student_id, appointment_id)
    if appointment.status != "pending":
        raise ValueError("Seul un rendez-vous en attente peut être annulé.")

    db.delete(appointment)
    db.commit()
    logger.info("Rendez-vous %s annulé par l'étudiant %s", appointment_id, student_id)
