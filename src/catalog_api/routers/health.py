from fastapi import APIRouter, Depends, Request

from catalog_api.dependencies import get_record_store
from catalog_api.schemas import HealthResponse
from catalog_db import RecordStore, StoreError

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
def health_check(request: Request, store: RecordStore = Depends(get_record_store)) -> HealthResponse:
    """
    Health check endpoint for monitoring API status and component readiness.

    Returns status of the API and the record store along with the storage backend.
    """
    components = {
        "api": "ready",
        "database": "ready",
        "object_storage": "configured" if request.app.state.settings.s3_bucket_name else "missing bucket",
    }
    status = "ok"

    try:
        store.ping()
    except StoreError as e:
        components["database"] = f"error: {e}"
        status = "degraded"

    return HealthResponse(
        status=status,
        storage_backend=store.backend_name,
        components=components,
        ready=status == "ok",
    )
