"""Pydantic V2 request models for the Videos API."""

from typing import List, Optional

from pagination_utils import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from pydantic import BaseModel, Field, field_validator


class ListVideosQueryParams(BaseModel):
    """Query parameters for GET /videos."""

    videoId: Optional[str] = None
    channelId: Optional[str] = None
    pageSize: int = Field(default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE)
    pageToken: Optional[str] = None

    @field_validator("videoId", "channelId", "pageToken")
    @classmethod
    def blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None or v.strip() == "":
            return None
        return v


class TagRequest(BaseModel):
    """One tag to attach to a video."""

    videoId: str = Field(min_length=1)
    tag: str = Field(min_length=1)


class PostVideoTagsRequest(BaseModel):
    """Body of POST /videos/tags."""

    tags: List[TagRequest] = Field(min_length=1, max_length=MAX_PAGE_SIZE)
