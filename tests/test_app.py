from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from app.main import create_app
from datastore.odometer_db import OdometerDbHelper, build_default_helper
from services.catalog import CatalogService, build_default_catalog
from settings import get_settings


@pytest.fixture
def catalog(tmp_path) -> Iterator[CatalogService]:
    service = CatalogService(helper=OdometerDbHelper(tmp_path / "odometer.db"))
    yield service
    service.helper.close()


@pytest.fixture
def api_client(catalog: CatalogService, monkeypatch) -> Iterator[TestClient]:
    def build_test_catalog(path: str | None = None) -> CatalogService:
        return catalog

    build_test_catalog.cache_clear = lambda: None  # type: ignore[attr-defined]

    monkeypatch.setattr("app.main.build_default_catalog", build_test_catalog)
    monkeypatch.setattr("app.api.build_default_catalog", build_test_catalog)
    monkeypatch.setattr("app.web.build_default_catalog", build_test_catalog)

    app = create_app()
    with TestClient(app) as client:
        yield client


def test_lifespan_closes_database_and_clears_cache(tmp_path, monkeypatch) -> None:
    monkeypatch.setenv("ODOMETER_DATABASE_PATH", str(tmp_path / "lifespan.db"))
    get_settings.cache_clear()
    build_default_helper.cache_clear()
    build_default_catalog.cache_clear()
    app = create_app()

    try:
        with TestClient(app):
            during = build_default_catalog()
            assert during.helper._connection is not None

        assert during.helper._connection is None
        after = build_default_catalog()
        assert after is not during
    finally:
        build_default_catalog().helper.close()
        build_default_catalog.cache_clear()
        build_default_helper.cache_clear()
        get_settings.cache_clear()


def test_empty_catalog(api_client: TestClient) -> None:
    response = api_client.get("/readings")

    assert response.status_code == 200
    body = response.json()
    assert body["count"] == 0
    assert body["readings"] == []
    assert body["text"].startswith("The mileage table contains 0 entries.")


def test_create_reading_and_list(api_client: TestClient) -> None:
    response = api_client.post(
        "/readings",
        json={"vehicle_id": 3, "date": "5/6/2018", "odometer": 12345},
    )

    assert response.status_code == 201
    created = response.json()
    assert created["vehicle_id"] == 3
    assert created["date"] == "5/6/2018"
    assert created["odometer"] == 12345
    assert isinstance(created["id"], int)

    listing = api_client.get("/readings").json()
    assert listing["count"] == 1
    assert listing["readings"] == [created]
    assert f"\n{created['id']} - 3 - 5/6/2018 - 12345" in listing["text"]


def test_create_reading_rejects_non_integer_odometer(api_client: TestClient) -> None:
    response = api_client.post(
        "/readings",
        json={"vehicle_id": 1, "date": "1/1/2017", "odometer": "lots"},
    )

    assert response.status_code == 422


@pytest.mark.parametrize("field", ["vehicle_id", "odometer"])
def test_create_reading_rejects_integers_sqlite_cannot_store(api_client: TestClient, field: str) -> None:
    payload = {"vehicle_id": 1, "date": "1/1/2017", "odometer": 100}
    payload[field] = 2**63

    response = api_client.post("/readings", json=payload)

    assert response.status_code == 422
    assert api_client.get("/readings").json()["count"] == 0


def test_create_reading_accepts_sqlite_integer_limits(api_client: TestClient) -> None:
    response = api_client.post(
        "/readings",
        json={"vehicle_id": -(2**63), "date": "1/1/2017", "odometer": 2**63 - 1},
    )

    assert response.status_code == 201
    assert response.json()["odometer"] == 2**63 - 1


def test_catalog_text_endpoint(api_client: TestClient) -> None:
    api_client.post("/actions/insert_dummy_data")

    response = api_client.get("/readings/text")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    assert response.text.startswith("The mileage table contains 1 entries.")


def test_insert_dummy_data_action(api_client: TestClient) -> None:
    first = api_client.post("/actions/insert_dummy_data").json()
    second = api_client.post("/actions/insert_dummy_data").json()

    assert first["handled"] is True
    assert first["inserted_id"] != second["inserted_id"]
    assert "contains 2 entries." in second["text"]


def test_delete_all_entries_action_keeps_rows(api_client: TestClient) -> None:
    api_client.post("/actions/insert_dummy_data")

    response = api_client.post("/actions/delete_all_entries")

    assert response.status_code == 200
    assert response.json() == {
        "action": "delete_all_entries",
        "handled": True,
        "inserted_id": None,
        "text": None,
    }
    assert api_client.get("/readings").json()["count"] == 1


def test_unknown_action_returns_not_found(api_client: TestClient) -> None:
    response = api_client.post("/actions/export_csv")

    assert response.status_code == 404
    assert "export_csv" in response.json()["detail"]


def test_health(api_client: TestClient) -> None:
    assert api_client.get("/health").json() == {"status": "ok"}


def test_ui_index_shows_catalog(api_client: TestClient) -> None:
    response = api_client.get("/ui")

    assert response.status_code == 200
    assert "The mileage table contains 0 entries." in response.text
    assert "/ui/actions/insert_dummy_data" in response.text


def test_ui_action_redirects_back_to_index(api_client: TestClient) -> None:
    response = api_client.post("/ui/actions/insert_dummy_data", follow_redirects=False)

    assert response.status_code == 303
    assert response.headers["location"].endswith("/ui")

    page = api_client.get("/ui")
    assert "contains 1 entries." in page.text


def test_ui_unknown_action_returns_not_found(api_client: TestClient) -> None:
    response = api_client.post("/ui/actions/nope", follow_redirects=False)

    assert response.status_code == 404
