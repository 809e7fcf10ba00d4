from fastapi import status
from fastapi.testclient import TestClient

from catalog_api.main import create_app
from catalog_db import PRODUCTS
from catalog_db.json_file_adapter import JsonFileRecordStore
from tests.fixtures.catalog_client import make_settings

RATE_LIMIT_MESSAGE = "Too many requests from this IP, please try again later."


def test_101st_request_is_rejected(client: TestClient):
    for _ in range(100):
        assert client.get("/products").status_code == status.HTTP_200_OK

    response = client.get("/products")

    assert response.status_code == status.HTTP_429_TOO_MANY_REQUESTS
    assert response.json() == {"message": RATE_LIMIT_MESSAGE}


def test_limit_is_shared_across_routes(mocked_aws, tmp_path):
    settings = make_settings(tmp_path, rate_limit_max=3)
    app = create_app(settings=settings, store=JsonFileRecordStore(settings.data_file))

    with TestClient(app) as client:
        assert client.get("/products").status_code == status.HTTP_200_OK
        assert client.post("/categories", json={"name": "Tools"}).status_code == status.HTTP_201_CREATED
        assert client.post("/upload").status_code == status.HTTP_400_BAD_REQUEST

        response = client.get("/categories")

    assert response.status_code == status.HTTP_429_TOO_MANY_REQUESTS
    assert response.json() == {"message": RATE_LIMIT_MESSAGE}


def test_rejected_request_does_not_reach_store(mocked_aws, tmp_path):
    settings = make_settings(tmp_path, rate_limit_max=1)
    store = JsonFileRecordStore(settings.data_file)
    app = create_app(settings=settings, store=store)

    with TestClient(app) as client:
        client.get("/products")
        response = client.post("/products", json={"name": "Widget"})

    assert response.status_code == status.HTTP_429_TOO_MANY_REQUESTS
    assert store.list_records(PRODUCTS) == []


def test_custom_rate_limit_message(mocked_aws, tmp_path):
    settings = make_settings(tmp_path, rate_limit_max=1, rate_limit_message="Slow down")
    app = create_app(settings=settings, store=JsonFileRecordStore(settings.data_file))

    with TestClient(app) as client:
        client.get("/products")
        response = client.get("/products")

    assert response.status_code == status.HTTP_429_TOO_MANY_REQUESTS
    assert response.json() == {"message": "Slow down"}


def test_rejection_carries_cors_header(mocked_aws, tmp_path):
    settings = make_settings(tmp_path, rate_limit_max=1)
    app = create_app(settings=settings, store=JsonFileRecordStore(settings.data_file))
    origin = {"Origin": "https://shop.example.com"}

    with TestClient(app) as client:
        client.get("/products", headers=origin)
        response = client.get("/products", headers=origin)

    assert response.status_code == status.HTTP_429_TOO_MANY_REQUESTS
    assert response.headers["access-control-allow-origin"] == "*"
