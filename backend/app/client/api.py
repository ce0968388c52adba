"""
Client HTTP authentifié pour l'API étudiante MindMate.

- le jeton de la session est ajouté à chaque requête authentifiée (Bearer) ;
- un jeton absent ou expiré est détecté avant l'envoi ;
- toute erreur est d'abord signalée via `notify` (notification utilisateur),
  puis levée en ApiError ; une réponse 401 supprime la session.

Aucune requête n'est retentée automatiquement.
"""

import datetime as dt
import logging
from typing import Any, Callable, List, Optional

import httpx

from app.client.session import FORCE_RESET_ROUTE, PROFILE_ROUTE, TokenStore
from app.schemas.appointment import AppointmentCreate, AppointmentUpdate
from app.schemas.feedback import FeedbackCreate, FeedbackUpdate
from app.schemas.sos import SOSCreate
from app.schemas.wellness import HabitLogCreate, HabitLogUpdate, MoodEntryCreate, MoodEntryUpdate

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:8000/api/students"


class ApiError(Exception):
    """Échec d'une requête : code HTTP (0 si le serveur est injoignable) et message affichable."""

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


def _default_notify(message: str) -> None:
    logger.warning("MindMate : %s", message)


def _error_message(response: httpx.Response) -> str:
    try:
        detail = response.json().get("detail")
    except (ValueError, AttributeError):
        detail = None

    if isinstance(detail, list):
        # Erreurs de validation FastAPI (422)
        return "; ".join(str(item.get("msg", item)) for item in detail if isinstance(item, dict)) \
            or f"Erreur HTTP {response.status_code}"
    return detail or f"Erreur HTTP {response.status_code}"


class MindMateClient:
    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        store: Optional[TokenStore] = None,
        notify: Optional[Callable[[str], None]] = None,
        transport: Optional[httpx.BaseTransport] = None,
        timeout: float = 10.0,
    ):
        self.store = store or TokenStore()
        self.notify = notify or _default_notify
        self._http = httpx.Client(base_url=base_url, timeout=timeout, transport=transport)

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "MindMateClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # --- Mécanique commune ---

    def _fail(self, status_code: int, message: str):
        self.notify(message)
        raise ApiError(status_code, message)

    def _request(self, method: str, path: str, auth: bool = True, **kwargs) -> Any:
        headers = {}
        if auth:
            token = self.store.get_token()
            if token is None:
                self._fail(401, "Session expirée, veuillez vous reconnecter.")
            headers["Authorization"] = f"Bearer {token}"

        try:
            response = self._http.request(method, path, headers=headers, **kwargs)
        except httpx.HTTPError as exc:
            self._fail(0, f"Serveur injoignable : {exc}")

        if response.status_code >= 400:
            if response.status_code == 401:
                self.store.clear()
            self._fail(response.status_code, _error_message(response))

        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    # --- Compte ---

    def login(self, alias_id: str, password: str) -> str:
        """
        Connecte l'étudiant et enregistre le jeton.
        Retourne la route suivante : /profile, ou /force-reset-password après
        une connexion par mot de passe temporaire.
        """
        data = self._request("POST", "/login", auth=False,
                             json={"alias_id": alias_id, "password": password})
        self.store.save(data["token"], role="student")
        return FORCE_RESET_ROUTE if data.get("must_change_password") else PROFILE_ROUTE

    def signup(self, alias_id: str, password: str, phone: Optional[str] = None) -> dict:
        data = self._request("POST", "/signup", auth=False,
                             json={"alias_id": alias_id, "password": password, "phone": phone})
        self.store.save(data["token"], role="student")
        return data["student"]

    def logout(self) -> None:
        self.store.clear()

    def forgot_alias(self, phone: str) -> str:
        return self._request("POST", "/forgot-aliasid", auth=False, json={"phone": phone})["message"]

    def forgot_password(self, phone: str) -> str:
        return self._request("POST", "/forgot-password", auth=False, json={"phone": phone})["message"]

    def set_new_password(self, new_password: str) -> str:
        return self._request("PUT", "/set-new-password", json={"new_password": new_password})["message"]

    # --- Profil ---

    def get_profile(self) -> dict:
        return self._request("GET", "/profile")

    def update_profile(self, **fields) -> dict:
        return self._request("PUT", "/profile", json=fields)

    def change_password(self, current_password: str, new_password: str) -> str:
        return self._request("PUT", "/change-profile-password", json={
            "current_password": current_password,
            "new_password": new_password,
        })["message"]

    # --- Conseillers et rendez-vous ---

    def list_counselors(self) -> List[dict]:
        return self._request("GET", "/counselorPsychologist")

    def list_appointments(self, filter: str = "all") -> List[dict]:
        return self._request("GET", "/appointments", params={"filter": filter})

    def book_appointment(self, counselor_id: str, slot_date: dt.date,
                         slot_start_time: str, slot_end_time: str) -> dict:
        """Valide le créneau localement (ValidationError) avant tout envoi."""
        payload = AppointmentCreate(
            counselor_id=counselor_id,
            slot_date=slot_date,
            slot_start_time=slot_start_time,
            slot_end_time=slot_end_time,
        )
        return self._request("POST", "/appointments", json=payload.model_dump(mode="json"))

    def update_appointment(self, appointment_id: str, **fields) -> dict:
        payload = AppointmentUpdate(**fields)
        return self._request("PUT", f"/appointments/{appointment_id}",
                             json=payload.model_dump(mode="json", exclude_unset=True))

    def cancel_appointment(self, appointment_id: str) -> None:
        self._request("DELETE", f"/appointments/{appointment_id}")

    # --- Avis ---

    def list_feedbacks(self) -> List[dict]:
        return self._request("GET", "/feedbacks")

    def submit_feedback(self, rating: int, type: str, comment: Optional[str] = None,
                        counselor_id: Optional[str] = None) -> dict:
        payload = FeedbackCreate(rating=rating, type=type, comment=comment, counselor_id=counselor_id)
        return self._request("POST", "/feedbacks", json=payload.model_dump(exclude_none=True))

    def update_feedback(self, feedback_id: str, **fields) -> dict:
        payload = FeedbackUpdate(**fields)
        return self._request("PUT", f"/feedbacks/{feedback_id}",
                             json=payload.model_dump(exclude_unset=True))

    def delete_feedback(self, feedback_id: str) -> None:
        self._request("DELETE", f"/feedbacks/{feedback_id}")

    # --- Bien-être ---

    def list_mood_entries(self) -> List[dict]:
        return self._request("GET", "/mood")

    def add_mood_entry(self, mood: str, tags: List[str], note: Optional[str] = None,
                       date: Optional[dt.date] = None) -> dict:
        payload = MoodEntryCreate(mood=mood, tags=tags, note=note, date=date)
        return self._request("POST", "/mood", json=payload.model_dump(mode="json", exclude_none=True))

    def update_mood_entry(self, entry_id: str, **fields) -> dict:
        payload = MoodEntryUpdate(**fields)
        return self._request("PUT", f"/mood/{entry_id}",
                             json=payload.model_dump(mode="json", exclude_unset=True))

    def delete_mood_entry(self, entry_id: str) -> None:
        self._request("DELETE", f"/mood/{entry_id}")

    def list_habit_logs(self) -> List[dict]:
        return self._request("GET", "/habits")

    def add_habit_log(self, date: dt.date, **fields) -> dict:
        payload = HabitLogCreate(date=date, **fields)
        return self._request("POST", "/habits", json=payload.model_dump(mode="json"))

    def update_habit_log(self, log_id: str, **fields) -> dict:
        payload = HabitLogUpdate(**fields)
        return self._request("PUT", f"/habits/{log_id}",
                             json=payload.model_dump(mode="json", exclude_unset=True))

    def delete_habit_log(self, log_id: str) -> None:
        self._request("DELETE", f"/habits/{log_id}")

    # --- Ressources ---

    def list_resources(self, type: Optional[str] = None, language: Optional[str] = None,
                       tag: Optional[str] = None) -> List[dict]:
        params = {k: v for k, v in {"type": type, "language": language, "tag": tag}.items() if v}
        return self._request("GET", "/resources", params=params)

    def get_resource(self, resource_id: str) -> dict:
        return self._request("GET", f"/resources/{resource_id}")

    # --- SOS ---

    def trigger_sos(self, alerted_to: List[str], method: str) -> dict:
        payload = SOSCreate(alerted_to=alerted_to, method=method)
        return self._request("POST", "/sos", json=payload.model_dump())

    def list_sos_logs(self) -> List[dict]:
        return self._request("GET", "/sos")

    def delete_sos_log(self, sos_id: str) -> None:
        self._request("DELETE", f"/sos/{sos_id}")
