from contextlib import asynccontextmanager
from textwrap import dedent
from typing import Optional
import logging

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.routing import APIRoute
from starlette.exceptions import HTTPException as StarletteHTTPException

from catalog_api.config.settings import Settings
from catalog_api.dependencies import init_record_store
from catalog_api.errors import (
    handle_broad_exceptions,
    handle_http_exceptions,
    handle_request_validation_errors,
)
from catalog_api.rate_limit import RequestRateLimiter
from catalog_api.routers.catalog import categories_router, products_router
from catalog_api.routers.health import router as health_router
from catalog_api.routers.uploads import router as uploads_router
from catalog_api.s3.client import create_s3_client
from catalog_db import RecordStore

# Set up logging
logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str) -> None:
    """Configure root logging once; later calls only adjust the level."""
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=level, format=LOG_FORMAT)
    root.setLevel(level)


def create_app(
    settings: Optional[Settings] = None,
    store: Optional[RecordStore] = None,
    s3_client=None,
) -> FastAPI:
    """
    Create a FastAPI application.

    ``store`` and ``s3_client`` default to the ones described by ``settings``;
    passing them in lets callers share or substitute them.
    """
    settings = settings or Settings()
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        logger.info("Shutting down, closing record store")
        app.state.store.close()

    app = FastAPI(
        title="Catalog API",
        summary="Products, categories and product images",
        version="v1",
        description=dedent(
            """\
        CRUD for catalog products and categories, plus image upload to S3.

        | Resource | Identifier field |
        | --- | --- |
        | `/products` | `ProductID` |
        | `/categories` | `CategoryID` |
        """
        ),
        docs_url="/docs",
        generate_unique_id_function=custom_generate_unique_id,
        lifespan=lifespan,
    )

    app.state.settings = settings
    logger.info(f"Starting with configuration: {settings.public_summary()}")
    app.state.store = store if store is not None else init_record_store(settings)
    app.state.s3_client = s3_client if s3_client is not None else create_s3_client(settings)

    app.state.limiter = RequestRateLimiter(settings.rate_limit, settings.rate_limit_message)

    # Added innermost first: error handler, then rate limit, then CORS outermost
    app.middleware("http")(handle_broad_exceptions)
    app.middleware("http")(app.state.limiter)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(products_router)
    app.include_router(categories_router)
    app.include_router(uploads_router)
    app.include_router(health_router, tags=["health"])

    app.add_exception_handler(StarletteHTTPException, handle_http_exceptions)
    app.add_exception_handler(RequestValidationError, handle_request_validation_errors)

    return app


def custom_generate_unique_id(route: APIRoute):
    """
    Generate prettier `operationId`s in the OpenAPI schema.

    These become the function names in generated client SDKs.
    """
    return f"{route.tags[0]}-{route.name}"


if __name__ == "__main__":
    import uvicorn

    settings = Settings()
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)
