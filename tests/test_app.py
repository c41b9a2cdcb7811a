from __future__ import annotations

import json
from datetime import date

from fastapi.testclient import TestClient

from weatherservice.config import Settings
from weatherservice.main import create_app
from weatherservice.store import InMemoryWeatherStore


def test_healthz(client):
    client.put("/api/weather/cities", params={"name": "Lisbon"})
    body = client.get("/healthz").json()
    assert body["status"] == "ok"
    assert body["cities"] == 1


def test_api_key_enforced(monkeypatch, client):
    monkeypatch.setattr(Settings, "API_KEY", "s3cret")

    resp = client.get("/api/weather/cities")
    assert resp.status_code == 401
    assert resp.json() == {
        "success": False,
        "status": 401,
        "error": "Invalid or missing API key",
    }

    ok = client.get("/api/weather/cities", headers={"X-API-KEY": "s3cret"})
    assert ok.status_code == 200
    # healthz stays open
    assert client.get("/healthz").status_code == 200


def test_unknown_route_uses_error_envelope(client):
    resp = client.get("/api/weather/nope")
    assert resp.status_code == 404
    assert resp.json()["success"] is False
    assert resp.json()["status"] == 404


def test_seed_loaded_on_startup(monkeypatch, tmp_path):
    path = tmp_path / "seed.json"
    path.write_text(json.dumps({"Lisbon": {"2018-04-30": 21.5}}))
    monkeypatch.setattr(Settings, "SEED_PATH", str(path))

    store = InMemoryWeatherStore()
    with TestClient(create_app(store)) as client:
        body = client.get("/api/weather/cities/Lisbon/temperatures").json()

    assert body == {"success": True, "data": [["2018-04-30", 21.5]]}
    assert store.get_temperatures("Lisbon") == {date(2018, 4, 30): 21.5}


def test_missing_seed_file_starts_empty(monkeypatch, tmp_path):
    monkeypatch.setattr(Settings, "SEED_PATH", str(tmp_path / "absent.json"))

    with TestClient(create_app(InMemoryWeatherStore())) as client:
        assert client.get("/api/weather/cities").json() == {
            "success": True,
            "data": [],
        }


def test_log_level_fallback(monkeypatch):
    monkeypatch.setattr(Settings, "LOG_LEVEL", "LOUD")
    assert Settings.log_level() == 20
    monkeypatch.setattr(Settings, "LOG_LEVEL", "DEBUG")
    assert Settings.log_level() == 10
