from unittest.mock import Mock

import pytest
import requests

from icd11_diagnoses import HttpResponse, RemoteError, RequestsTransport, TransportError


def test_send_uses_session():
    session = Mock()
    session.request.return_value = Mock(status_code=200, text='{"code": "1A00"}')
    transport = RequestsTransport(session)

    response = transport.send("GET", "https://id.who.int/icd/x", {"Accept": "application/json"}, timeout=10)

    session.request.assert_called_once_with(
        "GET", "https://id.who.int/icd/x", headers={"Accept": "application/json"}, data=None, timeout=10,
    )
    assert response == HttpResponse(200, '{"code": "1A00"}')
    assert response.json() == {"code": "1A00"}


@pytest.mark.parametrize("error", [requests.ConnectionError("down"), requests.Timeout("slow")])
def test_network_errors_become_transport_errors(error):
    session = Mock()
    session.request.side_effect = error

    with pytest.raises(TransportError) as excinfo:
        RequestsTransport(session).send("GET", "https://id.who.int/icd/x", {})
    assert excinfo.value.__cause__ is error


def test_non_object_json():
    with pytest.raises(RemoteError):
        HttpResponse(200, "[1, 2]").json()


def test_invalid_json():
    with pytest.raises(RemoteError):
        HttpResponse(200, "not json").json()
