"""Construction of the record store and request-scoped accessors for routes."""

import logging

from fastapi import Request

from catalog_api.config.settings import Settings
from catalog_db import RecordStore
from catalog_db.json_file_adapter import JsonFileRecordStore

logger = logging.getLogger(__name__)


def create_record_store(settings: Settings) -> RecordStore:
    """Build the record store selected by ``settings.storage_backend``."""
    if settings.storage_backend == "postgres":
        from catalog_db.postgres_adapter import PostgresRecordStore

        return PostgresRecordStore(
            settings.database_url,
            ssl=settings.database_ssl,
            ssl_reject_unauthorized=settings.database_ssl_reject_unauthorized,
        )
    return JsonFileRecordStore(settings.data_file)


def init_record_store(settings: Settings) -> RecordStore:
    """Build the configured store and make sure its schema or data file exists."""
    store = create_record_store(settings)
    init_schema = getattr(store, "init_schema", None)
    if init_schema is not None:
        init_schema()
    logger.info(f"Record store ready: {store.backend_name}")
    return store


def get_record_store(request: Request) -> RecordStore:
    """Database dependency."""
    return request.app.state.store


def get_s3_client(request: Request):
    """S3 client dependency."""
    return request.app.state.s3_client
