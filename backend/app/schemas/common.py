"""
Règles de validation partagées entre les schémas et le client Python.
"""

import re
from typing import Any

OBJECT_ID_PATTERN = re.compile(r"^[0-9a-fA-F]{24}$")
TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")
PHONE_PATTERN = re.compile(r"^\+?\d{7,15}$")

# Au moins une lettre et un chiffre, 8 caractères minimum
PASSWORD_PATTERN = re.compile(r"^(?=.*[A-Za-z])(?=.*\d).{8,}$")

MAX_SLOT_MINUTES = 60
MINUTES_PER_DAY = 24 * 60


def is_valid_object_id(value: Any) -> bool:
    """Vrai si la valeur est un identifiant de 24 caractères hexadécimaux."""
    return isinstance(value, str) and OBJECT_ID_PATTERN.fullmatch(value) is not None


def check_object_id(value: str) -> str:
    if not is_valid_object_id(value):
        raise ValueError("Format d'identifiant invalide (24 caractères hexadécimaux attendus).")
    return value.lower()


def check_time(value: str) -> str:
    if not TIME_PATTERN.fullmatch(value or ""):
        raise ValueError("Heure invalide, format attendu HH:MM.")
    return value


def check_password(value: str) -> str:
    if not PASSWORD_PATTERN.fullmatch(value):
        raise ValueError(
            "Le mot de passe doit contenir au moins 8 caractères dont une lettre et un chiffre."
        )
    return value


def to_minutes(hhmm: str) -> int:
    hours, minutes = (int(part) for part in hhmm.split(":"))
    return hours * 60 + minutes


def slot_duration_minutes(start: str, end: str) -> int:
    """
    Durée d'un créneau en minutes.
    Une heure de fin inférieure ou égale à l'heure de début désigne le lendemain
    (09:00 → 08:30 dure donc 23h30).
    """
    start_minutes = to_minutes(start)
    end_minutes = to_minutes(end)
    if end_minutes <= start_minutes:
        end_minutes += MINUTES_PER_DAY
    return end_minutes - start_minutes


def check_slot(start: str, end: str) -> None:
    """Lève ValueError si le créneau dépasse la durée maximale autorisée."""
    duration = slot_duration_minutes(check_time(start), check_time(end))
    if duration <= 0:
        raise ValueError("L'heure de fin doit être postérieure à l'heure de début.")
    if duration > MAX_SLOT_MINUTES:
        raise ValueError("La durée du rendez-vous ne doit pas dépasser 1 heure.")
