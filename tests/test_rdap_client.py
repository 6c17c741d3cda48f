from datetime import datetime, timezone

import pytest
import requests

from riskscan import rdap_client
from riskscan.errors import CollaboratorTimeout
from riskscan.rdap_client import RdapClient, registration_age_days

NOW = datetime(2024, 6, 1, tzinfo=timezone.utc)


class FakeResponse:
    def __init__(self, status_code, payload=None):
        self.status_code = status_code
        self._payload = payload or {}

    def json(self):
        return self._payload

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")


def test_registration_age_from_events():
    payload = {
        "events": [
            {"eventAction": "last changed", "eventDate": "2024-05-01T00:00:00Z"},
            {"eventAction": "registration", "eventDate": "2024-05-22T00:00:00Z"},
        ]
    }
    assert registration_age_days(payload, now=NOW) == 10


def test_registration_date_without_timezone():
    payload = {"events": [{"eventAction": "Registration", "eventDate": "2020-06-01T00:00:00"}]}
    assert registration_age_days(payload, now=NOW) == 1461


@pytest.mark.parametrize(
    "payload",
    [
        {},
        {"events": []},
        {"events": [{"eventAction": "expiration", "eventDate": "2030-01-01T00:00:00Z"}]},
        {"events": [{"eventAction": "registration", "eventDate": "not a date"}]},
        {"events": [{"eventAction": "registration", "eventDate": "2025-01-01T00:00:00Z"}]},
    ],
)
def test_registration_age_unknown(payload):
    assert registration_age_days(payload, now=NOW) is None


def test_domain_age_lookup(monkeypatch):
    calls = []

    def fake_get(url, **kwargs):
        calls.append((url, kwargs))
        return FakeResponse(
            200, {"events": [{"eventAction": "registration", "eventDate": "2000-01-01T00:00:00Z"}]}
        )

    monkeypatch.setattr(rdap_client.requests, "get", fake_get)
    client = RdapClient(base_url="https://rdap.test/domain/", timeout_seconds=2.5)

    age = client.domain_age_days("example.com")

    assert age is not None and age > 365
    url, kwargs = calls[0]
    assert url == "https://rdap.test/domain/example.com"
    assert kwargs["timeout"] == 2.5


def test_domain_not_found(monkeypatch):
    monkeypatch.setattr(rdap_client.requests, "get", lambda url, **kwargs: FakeResponse(404))
    assert RdapClient().domain_age_days("unregistered.test") is None


def test_server_error_raises(monkeypatch):
    monkeypatch.setattr(rdap_client.requests, "get", lambda url, **kwargs: FakeResponse(500))
    with pytest.raises(requests.HTTPError):
        RdapClient().domain_age_days("example.com")


def test_timeout(monkeypatch):
    def fake_get(url, **kwargs):
        raise requests.Timeout("slow registry")

    monkeypatch.setattr(rdap_client.requests, "get", fake_get)
    with pytest.raises(CollaboratorTimeout):
        RdapClient().domain_age_days("example.com")


def test_empty_domain_skips_request(monkeypatch):
    def fake_get(url, **kwargs):
        raise AssertionError("no request expected")

    monkeypatch.setattr(rdap_client.requests, "get", fake_get)
    assert RdapClient().domain_age_days("") is None
