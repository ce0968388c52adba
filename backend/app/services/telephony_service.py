"""
Service de téléphonie Twilio : appels d'urgence SOS et SMS.

Chaque appel au fournisseur est retenté avec un backoff exponentiel
(SOS_CALL_MAX_ATTEMPTS tentatives, délai initial SOS_CALL_BACKOFF_SECONDS).
Après la dernière tentative, TelephonyError est levée : l'appelant décide
de la suite (enregistrer l'échec, répondre 503...).
"""

import logging
import time
from typing import Callable

from pydantic import BaseModel
from twilio.base.exceptions import TwilioException
from twilio.rest import Client

from app.config import settings

logger = logging.getLogger(__name__)

EMERGENCY_MESSAGE = (
    "This is an emergency. A student has triggered an SOS on MindMate. "
    "Please check immediately."
)
EMERGENCY_TWIML = f"<Response><Say>{EMERGENCY_MESSAGE}</Say></Response>"


class TelephonyError(Exception):
    """Échec définitif de livraison (fournisseur injoignable, numéro refusé, config absente)."""

    def __init__(self, message: str, attempts: int = 0):
        super().__init__(message)
        self.attempts = attempts


class DeliveryReceipt(BaseModel):
    """Accusé du fournisseur : identifiant Twilio et nombre de tentatives utilisées."""
    sid: str
    attempts: int


def _get_client() -> Client:
    if not (settings.TWILIO_ACCOUNT_SID and settings.TWILIO_AUTH_TOKEN and settings.TWILIO_PHONE_NUMBER):
        raise TelephonyError("Téléphonie non configurée (variables TWILIO_* manquantes).")
    return Client(settings.TWILIO_ACCOUNT_SID, settings.TWILIO_AUTH_TOKEN)


def _with_retry(action: Callable[[Client], object], description: str) -> DeliveryReceipt:
    client = _get_client()
    max_attempts = max(1, settings.SOS_CALL_MAX_ATTEMPTS)
    last_error = None

    for attempt in range(1, max_attempts + 1):
        try:
            resource = action(client)
            return DeliveryReceipt(sid=resource.sid, attempts=attempt)
        except (TwilioException, OSError) as exc:
            # OSError couvre les erreurs réseau de requests (RequestException)
            last_error = exc
            logger.warning(
                "Échec %s (tentative %d/%d) : %s", description, attempt, max_attempts, exc
            )
            # Erreur 4xx du fournisseur (numéro invalide...) : définitive
            if (getattr(exc, "status", None) or 500) < 500:
                raise TelephonyError(f"Échec {description} : {exc}", attempts=attempt)
            if attempt < max_attempts:
                time.sleep(settings.SOS_CALL_BACKOFF_SECONDS * 2 ** (attempt - 1))

    logger.error("Abandon %s après %d tentatives : %s", description, max_attempts, last_error)
    raise TelephonyError(f"Échec {description} : {last_error}", attempts=max_attempts)


def place_emergency_call(to: str) -> DeliveryReceipt:
    """Passe un appel vocal sortant diffusant le message d'urgence fixe."""
    receipt = _with_retry(
        lambda client: client.calls.create(
            twiml=EMERGENCY_TWIML,
            to=to,
            from_=settings.TWILIO_PHONE_NUMBER,
        ),
        f"de l'appel vers {to}",
    )
    logger.info("Appel d'urgence initié vers %s (sid=%s)", to, receipt.sid)
    return receipt


def send_sms(to: str, body: str) -> DeliveryReceipt:
    """Envoie un SMS depuis le numéro configuré."""
    receipt = _with_retry(
        lambda client: client.messages.create(
            body=body,
            to=to,
            from_=settings.TWILIO_PHONE_NUMBER,
        ),
        f"du SMS vers {to}",
    )
    logger.info("SMS envoyé à %s (sid=%s)", to, receipt.sid)
    return receipt
