import logging
from typing import AsyncIterator, Optional

from fastapi import APIRouter, Depends, HTTPException, Request, status
from starlette.datastructures import UploadFile

from catalog_api.config.settings import Settings
from catalog_api.dependencies import get_s3_client
from catalog_api.s3.write_objects import (
    build_upload_key,
    public_object_url,
    upload_public_s3_object,
)
from catalog_api.schemas import MessageResponse, UploadImageResponse

logger = logging.getLogger(__name__)

IMAGE_FIELD = "image"

router = APIRouter(tags=["uploads"])

UPLOAD_REQUEST_BODY = {
    "required": True,
    "content": {
        "multipart/form-data": {
            "schema": {
                "type": "object",
                "properties": {IMAGE_FIELD: {"type": "string", "format": "binary", "description": "The image to store"}},
            }
        }
    },
}


async def get_uploaded_image(request: Request) -> AsyncIterator[Optional[UploadFile]]:
    """
    The file sent in the `image` form field, or None.

    A missing field, a non-form body and a plain text `image` value all count as no file.
    """
    content_type = request.headers.get("content-type", "").lower()
    if not content_type.startswith(("multipart/form-data", "application/x-www-form-urlencoded")):
        yield None
        return

    form = await request.form()
    try:
        value = form.get(IMAGE_FIELD)
        yield value if isinstance(value, UploadFile) else None
    finally:
        await form.close()


@router.post(
    "/upload",
    response_model=UploadImageResponse,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": MessageResponse, "description": "No file in the `image` field."},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": MessageResponse},
    },
    openapi_extra={"requestBody": UPLOAD_REQUEST_BODY},
)
def upload_image(
    request: Request,
    image: Optional[UploadFile] = Depends(get_uploaded_image),
    s3_client=Depends(get_s3_client),
) -> UploadImageResponse:
    """
    Upload one image to S3 under ``uploads/<epochMillis>_<filename>``.

    The object is stored with a public-read ACL and its public URL is returned.
    """
    if image is None or not image.filename:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No file uploaded")

    settings: Settings = request.app.state.settings
    object_key = build_upload_key(image.filename)
    try:
        upload_public_s3_object(
            s3_client,
            bucket_name=settings.s3_bucket_name,
            object_key=object_key,
            file_obj=image.file,
            content_type=image.content_type,
            metadata={"fieldName": IMAGE_FIELD},
        )
    except Exception:
        logger.exception(f"Upload error for {object_key}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error uploading image",
        )

    file_url = public_object_url(
        settings.s3_bucket_name,
        object_key,
        region=settings.aws_region,
        endpoint_url=settings.aws_endpoint_url,
    )
    logger.info(f"fileUrl: {file_url}")
    return UploadImageResponse(imageUrl=file_url)
