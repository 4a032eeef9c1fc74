from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from app.api import get_store
from app.main import create_app
from services.telemetry_store import TelemetryStore, build_default_store


@pytest.fixture
def store() -> TelemetryStore:
    return TelemetryStore(capacity=50)


@pytest.fixture
def api_client(store: TelemetryStore) -> Iterator[TestClient]:
    app = create_app()
    app.dependency_overrides[get_store] = lambda: store
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()


def test_lifespan_discards_store_on_shutdown() -> None:
    app = create_app()

    with TestClient(app) as client:
        store_during = build_default_store()
        client.post("/api/sensor", json={"distance": 5})
        assert len(store_during) == 1

    assert len(store_during) == 0
    store_after = build_default_store()
    try:
        assert store_after is not store_during
    finally:
        build_default_store.cache_clear()


def test_latest_before_any_ingestion_is_placeholder(api_client: TestClient) -> None:
    response = api_client.get("/api/data")

    assert response.status_code == 200
    assert response.json() == {
        "lastUpdate": None,
        "distance": 0,
        "temperature": 0,
        "rfid": "none",
        "status": "waiting",
    }


def test_history_before_any_ingestion_is_empty(api_client: TestClient) -> None:
    response = api_client.get("/api/history")

    assert response.status_code == 200
    assert response.json() == []


def test_post_then_query_end_to_end(api_client: TestClient) -> None:
    response = api_client.post(
        "/api/sensor", json={"distance": 45, "temperature": 28, "rfid": "ABC123"}
    )

    assert response.status_code == 200
    ack = response.json()
    assert ack["success"] is True
    assert ack["message"] == "Data received!"
    assert isinstance(ack["timestamp"], int)

    latest = api_client.get("/api/data").json()
    assert latest["distance"] == 45
    assert latest["temperature"] == 28
    assert latest["rfid"] == "ABC123"
    assert latest["status"] == "connected"
    assert latest["lastUpdate"] is not None

    history = api_client.get("/api/history").json()
    assert len(history) == 1
    last = history[-1]
    assert last["timestamp"] == ack["timestamp"]
    assert {key: last[key] for key in latest} == latest


def test_missing_fields_are_defaulted(api_client: TestClient) -> None:
    response = api_client.post("/api/sensor", json={})

    assert response.status_code == 200
    latest = api_client.get("/api/data").json()
    assert latest["distance"] == 0
    assert latest["temperature"] == 0
    assert latest["rfid"] == "none"
    assert latest["status"] == "connected"


def test_wrongly_typed_fields_are_normalized(api_client: TestClient) -> None:
    response = api_client.post(
        "/api/sensor",
        json={"distance": "far", "temperature": [1], "rfid": {"id": 1}},
    )

    assert response.status_code == 200
    latest = api_client.get("/api/data").json()
    assert (latest["distance"], latest["temperature"], latest["rfid"]) == (0, 0, "none")


def test_integer_too_large_for_float_is_normalized(api_client: TestClient) -> None:
    body = b'{"distance": 1' + b"0" * 400 + b', "temperature": 21, "rfid": "BIG"}'

    response = api_client.post(
        "/api/sensor", content=body, headers={"Content-Type": "application/json"}
    )

    assert response.status_code == 200
    latest = api_client.get("/api/data").json()
    assert (latest["distance"], latest["temperature"], latest["rfid"]) == (0, 21, "BIG")


def test_non_object_json_body_is_accepted(api_client: TestClient) -> None:
    response = api_client.post("/api/sensor", json=[1, 2, 3])

    assert response.status_code == 200
    assert api_client.get("/api/data").json()["rfid"] == "none"


def test_empty_body_is_treated_as_empty_object(api_client: TestClient) -> None:
    response = api_client.post("/api/sensor")

    assert response.status_code == 200
    assert len(api_client.get("/api/history").json()) == 1


@pytest.mark.parametrize(
    "body",
    [
        b"{not json",
        b"\x80abc",
        b'{"distance": 4',
        b'{"distance": ' + b"9" * 5000 + b"}",
        b"[" * 100000,
    ],
)
def test_malformed_body_is_rejected_without_mutation(
    api_client: TestClient, store: TelemetryStore, body: bytes
) -> None:
    api_client.post("/api/sensor", json={"distance": 12, "rfid": "KEEP"})
    before_latest = api_client.get("/api/data").json()
    before_history = api_client.get("/api/history").json()

    response = api_client.post(
        "/api/sensor", content=body, headers={"Content-Type": "application/json"}
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "Request body is not valid JSON."
    assert api_client.get("/api/data").json() == before_latest
    assert api_client.get("/api/history").json() == before_history
    assert len(store) == 1


def test_history_is_capped_and_oldest_first(api_client: TestClient) -> None:
    for index in range(51):
        api_client.post("/api/sensor", json={"distance": index, "rfid": f"tag-{index}"})

    history = api_client.get("/api/history").json()
    assert len(history) == 50
    assert history[0]["rfid"] == "tag-1"
    assert history[-1]["rfid"] == "tag-50"
    timestamps = [entry["timestamp"] for entry in history]
    assert timestamps == sorted(timestamps)

    latest = api_client.get("/api/data").json()
    assert latest["rfid"] == history[-1]["rfid"]
    assert latest["lastUpdate"] == history[-1]["lastUpdate"]


def test_healthcheck_reports_buffered_readings(api_client: TestClient) -> None:
    api_client.post("/api/sensor", json={"distance": 1})

    response = api_client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "readings": 1}


def test_dashboard_renders_waiting_state(api_client: TestClient) -> None:
    response = api_client.get("/")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    assert "Waiting for device..." in response.text
    assert "No data yet..." in response.text


def test_dashboard_renders_recent_readings_newest_first(api_client: TestClient) -> None:
    for index in range(12):
        api_client.post("/api/sensor", json={"distance": index, "rfid": f"tag-{index:02d}"})

    response = api_client.get("/")

    assert response.status_code == 200
    body = response.text
    assert "RFID: tag-11" in body
    assert "RFID: tag-02" in body
    assert "RFID: tag-01" not in body
    assert body.index("RFID: tag-11") < body.index("RFID: tag-02")
