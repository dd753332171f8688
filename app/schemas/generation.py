import math
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator

MAX_PREVIEW_COUNT = 3
DEFAULT_PREVIEW_COUNT = 3


class GenerateRequest(BaseModel):
    """Request body for POST /generate"""
    name: str = Field(default="", description="Name shown with the design; not used in the prompt")
    country: Optional[str] = Field(None, description="Country key, e.g. 'morocco'")
    theme: Optional[str] = Field(None, description="Theme key, e.g. 'peaceful'")
    time_of_day: str = Field(default="daytime", alias="timeOfDay")
    preview_count: int = Field(default=DEFAULT_PREVIEW_COUNT, alias="previewCount")

    @field_validator("name", mode="before")
    @classmethod
    def coerce_name(cls, v):
        return "" if v is None else str(v)

    @field_validator("time_of_day", mode="before")
    @classmethod
    def coerce_time_of_day(cls, v):
        return str(v) if v else "daytime"

    @field_validator("preview_count", mode="before")
    @classmethod
    def coerce_preview_count(cls, v):
        # Anything non-numeric, NaN or zero falls back to the default; the
        # float is bounded before int() so huge or infinite values still clamp
        try:
            count = float(v)
        except (TypeError, ValueError, OverflowError):
            return DEFAULT_PREVIEW_COUNT
        if math.isnan(count):
            return DEFAULT_PREVIEW_COUNT
        count = max(-MAX_PREVIEW_COUNT, min(count, MAX_PREVIEW_COUNT))
        return int(count) or DEFAULT_PREVIEW_COUNT

    class Config:
        populate_by_name = True


class GenerateResponse(BaseModel):
    images: List[str]
    job_id: str = Field(..., alias="jobId")

    class Config:
        populate_by_name = True


class RenderMetadata(BaseModel):
    """
    Everything recorded about a chosen render. Bag colour/type do not affect
    the artwork; they are kept for staff reference.
    """
    name: str = ""
    country: str = ""
    theme: str = ""
    time_of_day: str = Field(default="", alias="timeOfDay")
    bag_color: str = Field(default="", alias="bagColor")
    bag_type: str = Field(default="", alias="bagType")
    lang: str = ""
    email: str = ""
    job_id: str = Field(default="", alias="jobId")
    chosen_index: int = Field(default=0, alias="chosenIndex")
    order_id: str = Field(default="", alias="orderId")

    @field_validator(
        "name", "country", "theme", "time_of_day", "bag_color", "bag_type",
        "lang", "email", "job_id", "order_id",
        mode="before",
    )
    @classmethod
    def coerce_text(cls, v):
        if v is None:
            return ""
        return str(v).strip()

    @field_validator("chosen_index", mode="before")
    @classmethod
    def coerce_index(cls, v):
        try:
            return int(v)
        except (TypeError, ValueError, OverflowError):
            return 0

    @property
    def color(self) -> str:
        return self.bag_color

    class Config:
        populate_by_name = True
        extra = "ignore"


class ChooseRequest(BaseModel):
    """Request body for POST /generate/choose"""
    image_data_url: Optional[str] = Field(None, alias="imageDataUrl")
    meta: RenderMetadata = Field(default_factory=RenderMetadata)

    @field_validator("meta", mode="before")
    @classmethod
    def none_meta(cls, v):
        return {} if v is None else v

    class Config:
        populate_by_name = True


class ChooseResponse(BaseModel):
    s3_url: str = Field(..., alias="s3Url")
    filename: str
    order_id: str = Field(..., alias="orderId")

    class Config:
        populate_by_name = True
