"""
Session côté client : jeton d'accès et rôle persistés dans un fichier JSON local,
l'équivalent du localStorage du navigateur.

Le jeton est contrôlé à chaque lecture : un JWT expiré (claim `exp`) ou illisible
est considéré comme absent et supprimé. La signature n'est pas vérifiée ici,
c'est le rôle du serveur.
"""

import json
import logging
import time
from pathlib import Path
from typing import Optional, Union

from jose import JWTError, jwt

logger = logging.getLogger(__name__)

DEFAULT_SESSION_PATH = Path.home() / ".mindmate" / "session.json"

LOGIN_ROUTE = "/login"
PROFILE_ROUTE = "/profile"
FORCE_RESET_ROUTE = "/force-reset-password"


def is_token_expired(token: str) -> bool:
    try:
        claims = jwt.get_unverified_claims(token)
    except JWTError:
        return True
    exp = claims.get("exp")
    return exp is not None and exp <= time.time()


class TokenStore:
    """Stockage persistant du jeton de session."""

    def __init__(self, path: Optional[Union[str, Path]] = None):
        self.path = Path(path) if path else DEFAULT_SESSION_PATH

    def _read(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            return json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("Fichier de session illisible (%s) : %s", self.path, exc)
            return {}

    def save(self, token: str, role: str = "student") -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps({"token": token, "role": role}), encoding="utf-8")

    def clear(self) -> None:
        if self.path.exists():
            self.path.unlink()

    def get_token(self) -> Optional[str]:
        """Retourne le jeton stocké s'il est encore valide, sinon None (et purge la session)."""
        token = self._read().get("token")
        if token and is_token_expired(token):
            logger.info("Jeton de session expiré, session supprimée.")
            self.clear()
            return None
        return token

    @property
    def role(self) -> Optional[str]:
        return self._read().get("role") if self.get_token() else None

    def has_session(self) -> bool:
        return self.get_token() is not None


def protected_route(store: TokenStore, route: str) -> str:
    """Porte d'accès des vues protégées : la route demandée, ou /login sans session valide."""
    return route if store.has_session() else LOGIN_ROUTE
