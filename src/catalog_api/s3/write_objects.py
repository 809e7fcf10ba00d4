"""Functions for writing objects to an S3 bucket--the "C" in CRUD."""

import time
from typing import TYPE_CHECKING, BinaryIO, Dict, Optional
from urllib.parse import quote

from catalog_api.utils.decorators import log_execution_time

if TYPE_CHECKING:
    from mypy_boto3_s3 import S3Client

UPLOAD_PREFIX = "uploads"


def build_upload_key(original_filename: str, now_ms: Optional[int] = None) -> str:
    """
    Object key for an uploaded file: ``uploads/<epochMillis>_<originalFilename>``.

    :param original_filename: The filename the client sent with the upload.
    :param now_ms: Epoch milliseconds to use instead of the current time.
    """
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    return f"{UPLOAD_PREFIX}/{now_ms}_{original_filename}"


@log_execution_time
def upload_public_s3_object(
    s3_client: "S3Client",
    bucket_name: str,
    object_key: str,
    file_obj: BinaryIO,
    content_type: Optional[str] = None,
    metadata: Optional[Dict[str, str]] = None,
) -> None:
    """
    Stream a file object to an S3 bucket with public-read visibility.

    :param s3_client: The boto3 S3 client to upload with.
    :param bucket_name: The name of the S3 bucket.
    :param object_key: path to the object in the S3 bucket.
    :param file_obj: A readable binary file object, streamed in parts.
    :param content_type: The MIME type of the file, e.g. "image/png".
    :param metadata: User metadata stored alongside the object.
    """
    extra_args = {
        "ACL": "public-read",
        "ContentType": content_type or "application/octet-stream",
    }
    if metadata:
        extra_args["Metadata"] = metadata
    s3_client.upload_fileobj(file_obj, bucket_name, object_key, ExtraArgs=extra_args)


def public_object_url(
    bucket_name: str,
    object_key: str,
    region: str,
    endpoint_url: Optional[str] = None,
) -> str:
    """Public URL of an object uploaded with a public-read ACL."""
    quoted_key = quote(object_key, safe="/")
    if endpoint_url:
        return f"{endpoint_url.rstrip('/')}/{bucket_name}/{quoted_key}"
    return f"https://{bucket_name}.s3.{region}.amazonaws.com/{quoted_key}"
