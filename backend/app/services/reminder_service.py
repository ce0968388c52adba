"""
Rappels SMS de rendez-vous, envoyés la veille du créneau.
Appelé par le scheduler ; un rappel n'est envoyé qu'une fois (reminder_sent).
"""

import logging
from datetime import date

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models.appointment import Appointment
from app.models.student import Student
from app.services import telephony_service
from app.services.telephony_service import TelephonyError

logger = logging.getLogger(__name__)


def send_appointment_reminders(db: Session, target_date: date) -> int:
    """
    Envoie un SMS à chaque étudiant ayant un rendez-vous (pending ou confirmed)
    à la date cible et pas encore rappelé. Retourne le nombre de rappels envoyés.

    Étudiant sans téléphone → ignoré. Échec SMS → log, réessayé au prochain passage.
    """
    rows = db.execute(
        select(Appointment, Student)
        .join(Student, Student.id == Appointment.student_id)
        .where(
            Appointment.slot_date == target_date,
            Appointment.status.in_(["pending", "confirmed"]),
            Appointment.reminder_sent.is_(False),
        )
    ).all()

    sent = 0
    for appointment, student in rows:
        if not student.phone:
            continue
        try:
            telephony_service.send_sms(
                student.phone,
                f"MindMate reminder: you have an appointment on "
                f"{appointment.slot_date.strftime('%d/%m/%Y')} at {appointment.slot_start_time}.",
            )
        except TelephonyError as exc:
            logger.error("Rappel non envoyé pour le rendez-vous %s : %s", appointment.id, exc)
            continue
        appointment.reminder_sent = True
        sent += 1

    db.commit()
    return sent
