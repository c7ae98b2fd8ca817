"""Pydantic schemas for API requests and responses."""

from pydantic import BaseModel, ConfigDict, Field, field_validator


def strip_str(v: str | None) -> str | None:
    """Strip whitespace from string."""
    if v is None:
        return None
    return v.strip()


class LaunchRequest(BaseModel):
    """Product launch request body."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1, max_length=255)
    script: str = Field(default="", description="Product description HTML")
    shop_url: str = Field(..., alias="shopUrl", min_length=1)
    user_token: str = Field(..., alias="userToken", min_length=1)
    image_url: str | None = Field(default=None, alias="imageUrl")

    @field_validator("name", "shop_url", "user_token", mode="before")
    @classmethod
    def strip_required(cls, v):
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator("image_url", mode="before")
    @classmethod
    def blank_image_is_none(cls, v):
        v = strip_str(v) if isinstance(v, str) else v
        return v or None


class LaunchResponse(BaseModel):
    """Product launch result."""

    success: bool
    url: str


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    store_connected: bool
    profile_path: str
    db_revision: str | None = None
