from datetime import date

import pytest
from fastapi.testclient import TestClient

from currency_converter.core.config import Settings
from currency_converter.main import create_app
from currency_converter.services.rates.base import UnexpectedBaseError


def _settings(**overrides):
    settings = Settings(exchange_rate_provider="static", **overrides)
    settings.init_post_load()
    return settings


@pytest.fixture
def client(fetcher, today, march_first):
    fetcher.outcomes["latest"] = march_first
    app = create_app(settings_override=_settings(), fetcher=fetcher, today=today)
    with TestClient(app) as c:
        yield c


def test_health_and_root(client):
    assert client.get("/health").json() == {"status": "ok"}
    assert client.get("/").json()["message"] == "Currency Converter API"


def test_startup_loads_latest_rates(client, fetcher):
    assert fetcher.calls == [(date(2024, 3, 2), True)]
    body = client.get("/screen").json()
    assert body["date_text"] == "3/1/2024 (latest)"
    assert body["latest"] is True
    assert body["options"] == ["EUR (Euro)", "USD (US Dollar)", "GBP (Pound Sterling)"]
    assert body["output_visible"] is False


def test_convert_through_commands(client):
    client.post("/screen/commands", json={"kind": "select_output", "value": 1})
    body = client.post("/screen/commands", json={"kind": "set_amount", "value": "100"}).json()
    assert body["output_visible"] is True
    assert body["output_text"] == "110"
    share = client.get("/screen/share").json()
    assert share["text"] == "3/1/2024: 100 EUR = 110 USD"


def test_cached_date_request_issues_no_fetch(client, fetcher):
    resp = client.post("/screen/commands", json={"kind": "request_date", "value": "2024-03-01"})
    assert resp.status_code == 200
    assert len(fetcher.calls) == 1
    assert resp.json()["date_text"] == "3/1/2024"


def test_wrong_base_leaves_cache_untouched(client, fetcher):
    fetcher.outcomes[date(2023, 6, 1)] = UnexpectedBaseError("USD")
    body = client.post(
        "/screen/commands", json={"kind": "request_date", "value": "2023-06-01"}
    ).json()
    assert body["popup"]["visible"] is True
    assert body["popup"]["cancelable"] is True
    assert body["reference_date"] == "2024-03-01"
    assert body["pending_date"] == "2023-06-01"
    assert client.get("/rates").json() == {"base_currency": "EUR", "dates": ["2024-03-01"]}


def test_rates_endpoints(client):
    table = client.get("/rates/2024-03-01").json()
    assert table == {"base_currency": "EUR", "date": "2024-03-01", "rates": {"USD": 1.1, "GBP": 0.86}}
    missing = client.get("/rates/2020-01-01")
    assert missing.status_code == 404
    assert missing.json()["error"] == "not_found"


def test_currencies(client):
    symbols = [c["symbol"] for c in client.get("/currencies").json()]
    assert symbols[0] == "EUR"
    assert "USD" in symbols and "GBP" in symbols


def test_error_envelopes(client):
    bad_kind = client.post("/screen/commands", json={"kind": "explode"})
    assert bad_kind.status_code == 422
    assert bad_kind.json()["error"] == "validation_error"

    bad_index = client.post("/screen/commands", json={"kind": "select_input", "value": 7})
    assert bad_index.status_code == 400
    assert bad_index.json()["error"] == "invalid_command"

    unknown = client.get("/nowhere")
    assert unknown.status_code == 404
    assert unknown.json()["detail"] == "No route for GET /nowhere"


def test_request_id_header(client):
    resp = client.get("/health", headers={"X-Request-ID": "abc-123"})
    assert resp.headers["X-Request-ID"] == "abc-123"


def test_first_failure_is_not_dismissable(fetcher, today):
    app = create_app(settings_override=_settings(), fetcher=fetcher, today=today)
    with TestClient(app) as c:
        popup = c.get("/screen").json()["popup"]
        assert popup["visible"] is True and popup["cancelable"] is False
        resp = c.post("/screen/commands", json={"kind": "dismiss_error"})
        assert resp.status_code == 400


def test_static_provider_without_injection(today):
    app = create_app(settings_override=_settings(), today=today)
    with TestClient(app) as c:
        body = c.get("/screen").json()
        assert body["reference_date"] is not None
        assert body["latest"] is True
        assert len(body["options"]) > 1
