"""Pydantic schemas for API requests and responses."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class CreateSlugURLPairRequest(BaseModel):
    """Request to shorten a URL."""

    url: str = Field(..., description="The URL to shorten", min_length=1)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"url": "https://example.com/very/long/path/to/resource"},
                {"url": "example.com"},
            ]
        }
    }


class InsertResultSchema(BaseModel):
    """Storage acknowledgment for a created mapping."""

    inserted_id: str = Field(..., alias="insertedId", description="Identifier assigned by the store")
    acknowledged: bool = Field(..., description="Whether the write was acknowledged")

    model_config = {"populate_by_name": True}


class SlugURLPairSchema(BaseModel):
    """A stored slug mapping."""

    slug: str = Field(..., description="The generated slug")
    url: str = Field(..., description="The normalized target URL")
    expire_at: datetime = Field(..., alias="expireAt", description="When the slug stops resolving")

    model_config = {"populate_by_name": True}


class CreateSlugURLPairResponse(BaseModel):
    """Response after shortening a URL."""

    result: InsertResultSchema
    slug_url_pair: SlugURLPairSchema = Field(..., alias="slugURLPair")

    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "examples": [
                {
                    "result": {"insertedId": "65f1c0ffee0000000000abcd", "acknowledged": True},
                    "slugURLPair": {
                        "slug": "aZ3_-",
                        "url": "https://example.com/very/long/path",
                        "expireAt": "2024-01-06T12:00:00Z",
                    },
                }
            ]
        },
    }


class MessageResponse(BaseModel):
    """Plain message response."""

    message: str


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Overall status")
    database: str = Field(..., description="Database status")
    timestamp: datetime = Field(..., description="Check timestamp")


class ErrorResponse(BaseModel):
    """Error response."""

    message: str = Field(..., description="Error message")
    err: Optional[str] = Field(None, description="Detailed error information")
