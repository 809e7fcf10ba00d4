####################################
# --- Request/response schemas --- #
####################################

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field

# Records have no fixed schema: any JSON object plus the identifier field.
CatalogRecord = Dict[str, Any]


class MessageResponse(BaseModel):
    """Body of every error response."""
    message: str = Field(
        description="Human readable description of the outcome.",
        json_schema_extra={"example": "Product not found"},
    )


class UploadImageResponse(BaseModel):
    """Response model for `POST /upload`."""
    imageUrl: str = Field(
        description="Public URL of the uploaded image.",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "imageUrl": "https://catalog-images.s3.us-east-1.amazonaws.com/uploads/1700000000000_widget.png",
            }
        }
    )


class HealthResponse(BaseModel):
    """Response model for `GET /health`."""
    status: str
    storage_backend: str
    components: Dict[str, str]
    ready: bool
