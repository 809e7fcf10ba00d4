from fastapi import status
from fastapi.testclient import TestClient

from catalog_api.main import create_app
from catalog_db import RecordStore, StoreUnavailable


def test_health__ok(client: TestClient):
    response = client.get("/health")

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {
        "status": "ok",
        "storage_backend": "json-file",
        "components": {"api": "ready", "database": "ready", "object_storage": "configured"},
        "ready": True,
    }


class DownStore(RecordStore):
    backend_name = "postgres"

    def _fail(self, *args, **kwargs):
        raise StoreUnavailable("Database is unreachable")

    list_records = create_record = update_record = delete_record = ping = _fail


def test_health__degraded_when_store_unreachable(mocked_aws, settings):
    with TestClient(create_app(settings=settings, store=DownStore())) as client:
        response = client.get("/health")

    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["status"] == "degraded"
    assert body["ready"] is False
    assert body["components"]["database"] == "error: Database is unreachable"
