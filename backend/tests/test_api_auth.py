"""
Tests d'intégration API pour l'authentification et l'accès aux routes protégées.
"""

from datetime import datetime
from unittest.mock import patch

from app.schemas.auth import AuthResponse
from app.schemas.student import StudentResponse
from app.security import create_access_token
from app.services.auth_service import AuthenticationError
from app.services.telephony_service import TelephonyError

STUDENT_ID = "65a1b2c3d4e5f6a7b8c9d0e1"


def make_auth_response(must_change_password=False) -> AuthResponse:
    return AuthResponse(
        token=create_access_token(STUDENT_ID),
        student=StudentResponse(
            id=STUDENT_ID, alias_id="calm_owl", status="active", created_at=datetime.now()
        ),
        must_change_password=must_change_password,
    )


# ============================================================
# POST /api/students/signup
# ============================================================

def test_signup_succes(client):
    with patch("app.routers.auth.auth_service.signup") as mock:
        mock.return_value = make_auth_response()

        response = client.post("/api/students/signup", json={
            "alias_id": "calm_owl",
            "password": "secret123",
        })

    assert response.status_code == 201
    assert response.json()["student"]["alias_id"] == "calm_owl"
    assert "password_hash" not in response.json()["student"]


def test_signup_mot_de_passe_faible(client):
    response = client.post("/api/students/signup", json={"alias_id": "calm_owl", "password": "short"})
    assert response.status_code == 422


def test_signup_alias_deja_utilise(client):
    with patch("app.routers.auth.auth_service.signup") as mock:
        mock.side_effect = ValueError("Cet alias est déjà utilisé.")
        response = client.post("/api/students/signup", json={
            "alias_id": "calm_owl",
            "password": "secret123",
        })

    assert response.status_code == 400


# ============================================================
# POST /api/students/login
# ============================================================

def test_login_succes(client):
    with patch("app.routers.auth.auth_service.login") as mock:
        mock.return_value = make_auth_response()
        response = client.post("/api/students/login", json={"alias_id": "calm_owl", "password": "secret123"})

    assert response.status_code == 200
    assert response.json()["token"]
    assert response.json()["must_change_password"] is False


def test_login_mot_de_passe_temporaire(client):
    with patch("app.routers.auth.auth_service.login") as mock:
        mock.return_value = make_auth_response(must_change_password=True)
        response = client.post("/api/students/login", json={"alias_id": "calm_owl", "password": "Tmp4pass99"})

    assert response.json()["must_change_password"] is True


def test_login_alias_inconnu(client):
    with patch("app.routers.auth.auth_service.login") as mock:
        mock.side_effect = AuthenticationError("Étudiant introuvable.", status_code=404)
        response = client.post("/api/students/login", json={"alias_id": "ghost", "password": "secret123"})

    assert response.status_code == 404
    assert response.json()["detail"] == "Étudiant introuvable."


# ============================================================
# Récupération de compte
# ============================================================

def test_forgot_password_succes(client):
    with patch("app.routers.auth.auth_service.send_temp_password") as mock:
        response = client.post("/api/students/forgot-password", json={"phone": "+32 470 12 34 56"})

    assert response.status_code == 200
    assert mock.call_args[0][1] == "+32470123456"


def test_forgot_password_sms_indisponible(client):
    with patch("app.routers.auth.auth_service.send_temp_password") as mock:
        mock.side_effect = TelephonyError("Twilio indisponible", attempts=3)
        response = client.post("/api/students/forgot-password", json={"phone": "+32470123456"})

    assert response.status_code == 503


def test_forgot_alias_numero_inconnu(client):
    with patch("app.routers.auth.auth_service.send_alias_reminder") as mock:
        mock.side_effect = ValueError("Aucun compte associé à ce numéro.")
        response = client.post("/api/students/forgot-aliasid", json={"phone": "+32470000000"})

    assert response.status_code == 404


def test_forgot_alias_numero_invalide(client):
    response = client.post("/api/students/forgot-aliasid", json={"phone": "abc"})
    assert response.status_code == 422


# ============================================================
# Accès aux routes protégées (jeton réel)
# ============================================================

def test_whoami_avec_jeton_valide(client, mock_db, student):
    mock_db.get.return_value = student
    token = create_access_token(student.id)

    response = client.get("/api/students/whoami", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 200
    assert response.json() == {"id": STUDENT_ID, "role": "student"}


def test_whoami_sans_jeton(client):
    response = client.get("/api/students/whoami")
    assert response.status_code == 401


def test_whoami_jeton_invalide(client):
    response = client.get("/api/students/whoami", headers={"Authorization": "Bearer abc.def.ghi"})
    assert response.status_code == 401


def test_whoami_role_non_etudiant(client):
    token = create_access_token(STUDENT_ID, role="counselor")
    response = client.get("/api/students/whoami", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 403


def test_whoami_compte_banni(client, mock_db, student):
    student.status = "banned"
    mock_db.get.return_value = student
    token = create_access_token(student.id)

    response = client.get("/api/students/whoami", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 403


def test_set_new_password_identifie_par_le_jeton(auth_client, student):
    with patch("app.routers.auth.auth_service.set_new_password") as mock:
        response = auth_client.put("/api/students/set-new-password", json={"new_password": "NewSecret42"})

    assert response.status_code == 200
    assert mock.call_args[0][1] is student
