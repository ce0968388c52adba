"""
Tests de la configuration par défaut.
"""

from app.config import Settings


def test_url_bdd_par_defaut_pilote_psycopg2():
    """Le pilote est explicite : psycopg2 est celui déclaré dans les dépendances."""
    default_url = Settings.model_fields["DATABASE_URL"].default
    assert default_url.startswith("postgresql+psycopg2://")
