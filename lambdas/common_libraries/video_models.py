"""
Domain models for the video tags Lambda functions.

Video is a read-only projection rebuilt from storage on every read; Tag is
the write-time entity that becomes one Tag:<body> row.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from video_records import tag_record_type


class Video(BaseModel):
    """Flat video entity assembled from the rows sharing one partition key."""

    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )

    id: str
    title: Optional[str] = None
    channel_id: Optional[str] = None
    published_at: Optional[str] = None
    scheduled_start_time: Optional[str] = None
    actual_start_time: Optional[str] = None
    actual_end_time: Optional[str] = None
    tags: List[str] = Field(default_factory=list)


class VideoPage(BaseModel):
    """One page of videos from the channel index."""

    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )

    videos: List[Video] = Field(default_factory=list)
    count: int = 0
    next_page_token: Optional[str] = None


class Tag(BaseModel):
    """A free-form annotation attached to one video."""

    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )

    video_id: str = Field(min_length=1)
    tag_body: str = Field(min_length=1)

    @property
    def record_type(self) -> str:
        return tag_record_type(self.tag_body)
