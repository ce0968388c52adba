"""
Tests du parcours d'alerte SOS côté client (client API mocké).
"""

from unittest.mock import MagicMock

import pytest

from app.client.api import ApiError
from app.client.sos_flow import FlowStateError, SOSAlertFlow, SOSState

COUNSELOR_ID = "65f0e1d2c3b4a59687766554"


def make_flow(trigger_result=None):
    client = MagicMock()
    client.trigger_sos.return_value = trigger_result or {"id": "6600aa11bb22cc33dd44ee55"}
    client.list_sos_logs.return_value = [{"id": "6600aa11bb22cc33dd44ee55"}]
    return SOSAlertFlow(client), client


def ready_to_confirm(flow):
    flow.select_counselor(COUNSELOR_ID, "Dr. Martin")
    flow.select_method("call")
    return flow.request_confirmation()


def test_parcours_complet_une_seule_requete():
    flow, client = make_flow()

    summary = ready_to_confirm(flow)
    assert summary == {"counselor_id": COUNSELOR_ID, "counselor_name": "Dr. Martin", "method": "call"}
    assert flow.state == SOSState.CONFIRMING
    client.trigger_sos.assert_not_called()

    result = flow.confirm()

    client.trigger_sos.assert_called_once_with([COUNSELOR_ID], "call")
    assert result["id"] == "6600aa11bb22cc33dd44ee55"
    assert flow.state == SOSState.SUBMITTED
    assert flow.logs == [{"id": "6600aa11bb22cc33dd44ee55"}]


def test_annulation_n_envoie_rien():
    flow, client = make_flow()
    ready_to_confirm(flow)

    flow.cancel()

    assert flow.state == SOSState.METHOD_SELECTED
    client.trigger_sos.assert_not_called()


def test_echec_conserve_l_erreur():
    flow, client = make_flow()
    client.trigger_sos.side_effect = ApiError(503, "Service indisponible")
    ready_to_confirm(flow)

    assert flow.confirm() is None

    assert flow.error == "Service indisponible"
    assert flow.state == SOSState.METHOD_SELECTED
    assert client.trigger_sos.call_count == 1


def test_nouvel_essai_explicite_apres_echec():
    flow, client = make_flow()
    client.trigger_sos.side_effect = [ApiError(0, "Serveur injoignable"), {"id": "6600aa11bb22cc33dd44ee55"}]
    ready_to_confirm(flow)
    flow.confirm()

    flow.request_confirmation()
    assert flow.error is None
    flow.confirm()

    assert flow.state == SOSState.SUBMITTED
    assert client.trigger_sos.call_count == 2


def test_identifiant_conseiller_invalide():
    flow, _ = make_flow()

    with pytest.raises(ValueError):
        flow.select_counselor("12345")

    assert flow.state == SOSState.IDLE


def test_methode_invalide():
    flow, _ = make_flow()
    flow.select_counselor(COUNSELOR_ID)

    with pytest.raises(ValueError):
        flow.select_method("pigeon")

    assert flow.state == SOSState.COUNSELOR_SELECTED


def test_confirmation_impossible_sans_methode():
    flow, _ = make_flow()
    flow.select_counselor(COUNSELOR_ID)

    with pytest.raises(FlowStateError):
        flow.request_confirmation()


def test_confirm_hors_confirmation():
    flow, client = make_flow()

    with pytest.raises(FlowStateError):
        flow.confirm()

    client.trigger_sos.assert_not_called()


def test_changer_de_conseiller_reinitialise_la_methode():
    flow, _ = make_flow()
    flow.select_counselor(COUNSELOR_ID)
    flow.select_method("sms")

    flow.select_counselor("65f0e1d2c3b4a59687766555")

    assert flow.method is None
    assert flow.state == SOSState.COUNSELOR_SELECTED


def test_reset():
    flow, _ = make_flow()
    ready_to_confirm(flow)
    flow.reset()
    assert flow.state == SOSState.IDLE
    assert flow.counselor_id is None


def test_reset_apres_envoi_permet_une_nouvelle_alerte():
    flow, client = make_flow()
    ready_to_confirm(flow)
    flow.confirm()

    flow.reset()

    assert flow.state == SOSState.IDLE
    assert flow.result is None
    assert flow.logs == []
    assert flow.error is None
    assert flow.client is client
    ready_to_confirm(flow)
    assert flow.state == SOSState.CONFIRMING
