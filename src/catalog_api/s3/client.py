"""S3 client construction."""

import logging
from typing import TYPE_CHECKING

import boto3

from catalog_api.config.settings import Settings

if TYPE_CHECKING:
    from mypy_boto3_s3 import S3Client

logger = logging.getLogger(__name__)


def create_s3_client(settings: Settings) -> "S3Client":
    """Create a boto3 S3 client from application settings.

    Credentials left unset fall through to boto3's default chain
    (environment, shared config, instance role).
    """
    client_kwargs = {"region_name": settings.aws_region}
    if settings.aws_endpoint_url:
        client_kwargs["endpoint_url"] = settings.aws_endpoint_url
    if settings.aws_access_key_id and settings.aws_secret_access_key:
        client_kwargs["aws_access_key_id"] = settings.aws_access_key_id
        client_kwargs["aws_secret_access_key"] = settings.aws_secret_access_key

    logger.info(
        f"Creating S3 client for region {settings.aws_region}"
        + (f" at {settings.aws_endpoint_url}" if settings.aws_endpoint_url else "")
    )
    return boto3.client("s3", **client_kwargs)
