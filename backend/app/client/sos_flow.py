"""
Parcours d'alerte SOS côté client.

    idle → counselor-selected → method-selected → confirming → submitted

La confirmation est obligatoire : seul `confirm()` envoie une requête, et une seule.
`cancel()` pendant la confirmation revient au choix de la méthode sans rien envoyer.
En cas d'échec, le message d'erreur est conservé dans `error` ; pas de nouvelle
tentative ni de conseiller de repli.
"""

import logging
from enum import Enum
from typing import List, Optional

from app.client.api import ApiError, MindMateClient
from app.schemas.common import is_valid_object_id
from app.schemas.sos import VALID_SOS_METHODS

logger = logging.getLogger(__name__)


class SOSState(str, Enum):
    IDLE = "idle"
    COUNSELOR_SELECTED = "counselor-selected"
    METHOD_SELECTED = "method-selected"
    CONFIRMING = "confirming"
    SUBMITTED = "submitted"


class FlowStateError(RuntimeError):
    """Action impossible dans l'état courant du parcours."""


class SOSAlertFlow:
    def __init__(self, client: MindMateClient):
        self.client = client
        self._clear()

    def _clear(self) -> None:
        self.state = SOSState.IDLE
        self.counselor_id: Optional[str] = None
        self.counselor_name: Optional[str] = None
        self.method: Optional[str] = None
        self.error: Optional[str] = None
        self.result: Optional[dict] = None
        self.logs: List[dict] = []

    def _require(self, *states: SOSState) -> None:
        if self.state not in states:
            raise FlowStateError(f"Action impossible dans l'état {self.state.value}.")

    def select_counselor(self, counselor_id: str, counselor_name: Optional[str] = None) -> None:
        self._require(SOSState.IDLE, SOSState.COUNSELOR_SELECTED, SOSState.METHOD_SELECTED)
        if not is_valid_object_id(counselor_id):
            raise ValueError("Format d'identifiant invalide (24 caractères hexadécimaux attendus).")
        self.counselor_id = counselor_id
        self.counselor_name = counselor_name
        self.method = None
        self.state = SOSState.COUNSELOR_SELECTED

    def select_method(self, method: str) -> None:
        self._require(SOSState.COUNSELOR_SELECTED, SOSState.METHOD_SELECTED)
        if method not in VALID_SOS_METHODS:
            raise ValueError(f"Méthode invalide. Valeurs acceptées : {VALID_SOS_METHODS}")
        self.method = method
        self.state = SOSState.METHOD_SELECTED

    def request_confirmation(self) -> dict:
        """Passe en confirmation et retourne le récapitulatif à présenter à l'utilisateur."""
        self._require(SOSState.METHOD_SELECTED)
        self.error = None
        self.state = SOSState.CONFIRMING
        return {
            "counselor_id": self.counselor_id,
            "counselor_name": self.counselor_name or "Inconnu",
            "method": self.method,
        }

    def cancel(self) -> None:
        self._require(SOSState.CONFIRMING)
        self.state = SOSState.METHOD_SELECTED

    def confirm(self) -> Optional[dict]:
        """
        Envoie l'unique requête d'alerte. Retourne l'alerte enregistrée,
        ou None en cas d'échec (message dans `error`).
        """
        self._require(SOSState.CONFIRMING)
        try:
            self.result = self.client.trigger_sos([self.counselor_id], self.method)
        except ApiError as exc:
            self.error = exc.message
            self.state = SOSState.METHOD_SELECTED
            return None

        self.state = SOSState.SUBMITTED
        self.refresh_logs()
        return self.result

    def refresh_logs(self) -> List[dict]:
        try:
            self.logs = self.client.list_sos_logs()
        except ApiError as exc:
            # Déjà notifié par le client ; l'historique affiché reste l'ancien
            logger.warning("Historique SOS non rafraîchi : %s", exc)
        return self.logs

    def reset(self) -> None:
        """Retour à l'état initial (nouvelle alerte)."""
        self._clear()
