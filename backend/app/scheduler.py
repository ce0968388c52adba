"""
Planificateur APScheduler pour les rappels SMS de rendez-vous.

Le job s'exécute toutes les REMINDER_INTERVAL_MINUTES et envoie un rappel aux
étudiants dont le rendez-vous est prévu le lendemain (J+1), si ce n'est pas déjà fait.
"""

import logging
from datetime import date, timedelta

from apscheduler.schedulers.background import BackgroundScheduler

from app.config import settings
from app.database import SessionLocal

logger = logging.getLogger(__name__)

scheduler = BackgroundScheduler()


def _send_reminders_scheduled() -> None:
    """
    Tâche planifiée : rappels des rendez-vous de J+1.
    Import local pour éviter les imports circulaires.
    """
    from app.services.reminder_service import send_appointment_reminders

    target_date = date.today() + timedelta(days=1)
    db = SessionLocal()
    try:
        sent = send_appointment_reminders(db, target_date)
        logger.info("Rappels de rendez-vous pour le %s : %d envoyé(s)", target_date, sent)
    except Exception as exc:
        logger.error("Erreur lors de l'envoi des rappels de rendez-vous : %s", exc)
    finally:
        db.close()


def start_scheduler() -> None:
    """Démarre le planificateur en arrière-plan (appelé au démarrage de l'API)."""
    scheduler.add_job(
        _send_reminders_scheduled,
        trigger="interval",
        minutes=settings.REMINDER_INTERVAL_MINUTES,
        id="appointment_reminder_check",
        replace_existing=True,
    )
    scheduler.start()
    logger.info(
        "Scheduler démarré, rappels de rendez-vous toutes les %d minutes.",
        settings.REMINDER_INTERVAL_MINUTES,
    )


def stop_scheduler() -> None:
    """Arrête le planificateur proprement (appelé à l'arrêt de l'API)."""
    if scheduler.running:
        scheduler.shutdown(wait=False)
        logger.info("Scheduler arrêté.")
