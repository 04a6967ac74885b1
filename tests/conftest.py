"""
Fixtures compartilhadas.

Nenhum teste acessa a COVID-API de verdade: `requests.get` de utils.covid é
substituído por funções que devolvem FakeResponse.

Uso:
    def test_algo(mock_get, fake_response, linha_api):
        mock_get.return_value = fake_response(payload={"data": [linha_api("Bahia", confirmed=1)]})
"""
from unittest.mock import patch

import pytest
import requests


class FakeResponse:
    def __init__(self, status_code: int = 200, payload=None, json_error: Exception | None = None):
        self.status_code = status_code
        self._payload = payload
        self._json_error = json_error

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")

    def json(self):
        if self._json_error is not None:
            raise self._json_error
        return self._payload


def _linha(provincia, confirmed=0, deaths=0, recovered=0, active=0):
    return {
        "region": {"iso": "BRA", "province": provincia},
        "confirmed": confirmed,
        "deaths": deaths,
        "recovered": recovered,
        "active": active,
    }


@pytest.fixture
def fake_response():
    """Classe de resposta falsa: fake_response(status_code=..., payload=..., json_error=...)."""
    return FakeResponse


@pytest.fixture
def linha_api():
    """Fábrica de linhas no formato de /reports: linha_api("Bahia", confirmed=10)."""
    return _linha


@pytest.fixture
def linhas_duas_provincias():
    return [
        _linha("Bahia", confirmed=1000, deaths=10, recovered=900, active=90),
        _linha("Bahia", confirmed=500, deaths=5, recovered=400, active=95),
        _linha("Ceará", confirmed=2000, deaths=20, recovered=1800, active=180),
    ]


@pytest.fixture
def mock_get():
    with patch("utils.covid.requests.get") as get:
        yield get
