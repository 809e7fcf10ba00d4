"""App, settings and record store fixtures."""
import pytest
from fastapi.testclient import TestClient

from catalog_api.config.settings import Settings
from catalog_api.main import create_app
from catalog_db.json_file_adapter import JsonFileRecordStore
from tests.consts import TEST_BUCKET_NAME, TEST_REGION


def make_settings(tmp_path, **overrides) -> Settings:
    values = {
        "storage_backend": "json-file",
        "data_file": str(tmp_path / "catalog.json"),
        "s3_bucket_name": TEST_BUCKET_NAME,
        "aws_region": TEST_REGION,
        "aws_endpoint_url": None,
        "aws_access_key_id": None,
        "aws_secret_access_key": None,
        "database_url": None,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings(tmp_path) -> Settings:
    return make_settings(tmp_path)


@pytest.fixture
def json_store(settings) -> JsonFileRecordStore:
    return JsonFileRecordStore(settings.data_file)


@pytest.fixture
def client(mocked_aws, settings, json_store):
    """Test client over a fresh JSON file store and a mocked S3 bucket."""
    app = create_app(settings=settings, store=json_store)
    with TestClient(app) as test_client:
        yield test_client
