"""
Configuration partagée pour tous les tests.
Override la dépendance get_db pour éviter toute connexion réelle à PostgreSQL,
et get_current_student pour les routes protégées (fixture auth_client).
"""

from datetime import datetime
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from app.database import get_db
from app.main import app
from app.models.student import Student
from app.security import get_current_student, hash_password

STUDENT_ID = "65a1b2c3d4e5f6a7b8c9d0e1"
COUNSELOR_ID = "65f0e1d2c3b4a59687766554"


@pytest.fixture
def mock_db():
    return MagicMock()


@pytest.fixture
def client(mock_db):
    """Client HTTP de test avec la BDD mockée."""
    app.dependency_overrides[get_db] = lambda: mock_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def student():
    """Étudiant actif, mot de passe « secret123 »."""
    return Student(
        id=STUDENT_ID,
        alias_id="calm_owl",
        phone="+32470123456",
        password_hash=hash_password("secret123"),
        language="en",
        status="active",
        is_temp_password=False,
        created_at=datetime(2026, 9, 1, 10, 0),
    )


@pytest.fixture
def auth_client(client, student):
    """Client HTTP authentifié en tant que `student`."""
    app.dependency_overrides[get_current_student] = lambda: student
    yield client
