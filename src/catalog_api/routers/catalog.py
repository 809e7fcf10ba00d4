import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Path, Response, status

from catalog_api.dependencies import get_record_store
from catalog_api.schemas import CatalogRecord, MessageResponse
from catalog_db import CATEGORIES, PRODUCTS, Collection, InvalidRecord, RecordNotFound, RecordStore

logger = logging.getLogger(__name__)


def create_collection_router(collection: Collection) -> APIRouter:
    """
    Build the CRUD routes for one record collection.

    Each route makes exactly one store call. ``RecordNotFound`` becomes a 404,
    ``InvalidRecord`` a 400; any other failure is logged and answered with a generic 500 message.
    """
    router = APIRouter(prefix=f"/{collection.name}", tags=[collection.name])
    label = collection.label.lower()
    not_found_message = f"{collection.label} not found"
    invalid_message = f"Invalid {label} data"
    error_responses = {
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": MessageResponse},
    }
    lookup_responses = {
        status.HTTP_404_NOT_FOUND: {"model": MessageResponse, "description": not_found_message},
        **error_responses,
    }
    invalid_response = {
        status.HTTP_400_BAD_REQUEST: {"model": MessageResponse, "description": "Body holds NaN or Infinity."},
    }

    @router.get("", responses=error_responses)
    def list_records(store: RecordStore = Depends(get_record_store)) -> List[CatalogRecord]:
        """List every record in the collection."""
        try:
            return store.list_records(collection)
        except Exception:
            logger.exception(f"Error fetching {collection.name}")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Error fetching {collection.name}",
            )

    @router.post(
        "", status_code=status.HTTP_201_CREATED, responses={**invalid_response, **error_responses}
    )
    def create_record(
        payload: Optional[Dict[str, Any]] = Body(None),
        store: RecordStore = Depends(get_record_store),
    ) -> CatalogRecord:
        """Create a record; the identifier is assigned by the server."""
        try:
            record = store.create_record(collection, payload or {})
        except InvalidRecord:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=invalid_message)
        except Exception:
            logger.exception(f"Error creating {label}")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Error creating {label}",
            )
        logger.info(f"Created {label} {record[collection.id_field]}")
        return record

    @router.put("/{record_id}", responses={**invalid_response, **lookup_responses})
    def update_record(
        record_id: str = Path(..., description=f"The {collection.id_field} of the record"),
        payload: Optional[Dict[str, Any]] = Body(None),
        store: RecordStore = Depends(get_record_store),
    ) -> CatalogRecord:
        """
        Shallow-merge the body into an existing record.

        The identifier always comes from the path; an identifier in the body is ignored.
        """
        try:
            return store.update_record(collection, record_id, payload or {})
        except RecordNotFound:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=not_found_message)
        except InvalidRecord:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=invalid_message)
        except Exception:
            logger.exception(f"Error updating {label} {record_id}")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Error updating {label}",
            )

    @router.delete(
        "/{record_id}",
        status_code=status.HTTP_204_NO_CONTENT,
        response_class=Response,
        responses=lookup_responses,
    )
    def delete_record(
        record_id: str = Path(..., description=f"The {collection.id_field} of the record"),
        store: RecordStore = Depends(get_record_store),
    ) -> Response:
        """
        Delete a record.

        NOTE: DELETE requests MUST NOT return a body in the response.
        """
        try:
            store.delete_record(collection, record_id)
        except RecordNotFound:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=not_found_message)
        except Exception:
            logger.exception(f"Error deleting {label} {record_id}")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Error deleting {label}",
            )
        logger.info(f"Deleted {label} {record_id}")
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return router


products_router = create_collection_router(PRODUCTS)
categories_router = create_collection_router(CATEGORIES)
