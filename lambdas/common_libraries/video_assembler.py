"""
Read model for videos.

A video is stored as a sparse set of rows (one per attribute, one per tag)
under the same partition key. assemble_video folds those rows into a Video
in a single pass; fields whose row is missing stay None rather than failing.
"""

import os
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, Iterable, List, Optional

import video_store
from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.metrics import MetricUnit
from video_models import Video, VideoPage
from video_records import (
    ACTUAL_END_TIME,
    ACTUAL_START_TIME,
    CHANNEL_ID,
    PUBLISHED_AT,
    SCHEDULED_START_TIME,
    VIDEO_COLLECTION_METADATA,
    VIDEO_TITLE,
    VideoRecordModel,
    is_tag_record_type,
    strip_tag_prefix,
)

logger = Logger(service="video-assembler", level=os.environ.get("LOG_LEVEL", "INFO"))
tracer = Tracer(service="video-assembler")
metrics = Metrics(namespace="videotags", service="video-assembler")

# Discriminator -> Video field
FIELD_BY_RECORD_TYPE: Dict[str, str] = {
    VIDEO_TITLE: "title",
    CHANNEL_ID: "channel_id",
    PUBLISHED_AT: "published_at",
    SCHEDULED_START_TIME: "scheduled_start_time",
    ACTUAL_START_TIME: "actual_start_time",
    ACTUAL_END_TIME: "actual_end_time",
}

# Row whose presence marks a video as existing
EXISTENCE_RECORD_TYPE = VIDEO_COLLECTION_METADATA


def assemble_video(records: Iterable[VideoRecordModel]) -> Optional[Video]:
    """
    Build a Video from every raw record of one partition.

    Args:
        records: Records sharing the same id, in storage order

    Returns:
        The assembled Video, or None if there are no records
    """
    video_id: Optional[str] = None
    fields: Dict[str, Optional[str]] = {}
    tags: List[str] = []

    for record in records:
        if video_id is None:
            video_id = record.id

        record_type = record.recordType
        if is_tag_record_type(record_type):
            tags.append(strip_tag_prefix(record_type))
            continue

        field_name = FIELD_BY_RECORD_TYPE.get(record_type)
        # first row wins if a fixed discriminator is duplicated
        if field_name and field_name not in fields:
            fields[field_name] = record.value

    if video_id is None:
        return None

    return Video(id=video_id, tags=tags, **fields)


@tracer.capture_method
def resolve_video_by_id(video_id: str) -> Optional[Video]:
    """
    Load and assemble a single video.

    Returns:
        The Video, or None if no record exists for video_id

    Raises:
        StoreBackendError: If the store cannot be read
    """
    video = assemble_video(video_store.get_records_by_id(video_id))
    if video is None:
        logger.info(f"Video {video_id} not found")
    return video


@tracer.capture_method
def resolve_videos_by_channel(
    channel_id: str, page_size: int, page_token: Optional[str] = None
) -> VideoPage:
    """
    Fetch one newest-first page of a channel's videos.

    Each index row identifies one video; every video is then hydrated with
    its full record set concurrently. count and next_page_token come from
    the index page unchanged.

    Args:
        channel_id: Channel whose videos are listed
        page_size: Maximum number of videos on the page
        page_token: Token from a previous page, or None for the first page

    Returns:
        VideoPage with the hydrated videos in index order

    Raises:
        InvalidPageTokenError: If page_token cannot be decoded
        StoreBackendError: If the index query or any hydration fails
    """
    page = video_store.query_by_secondary_key(channel_id, page_size, page_token)
    video_ids = [record.id for record in page.records]

    videos: List[Video] = []
    if video_ids:
        with ThreadPoolExecutor(max_workers=len(video_ids)) as executor:
            for video in executor.map(resolve_video_by_id, video_ids):
                if video is not None:
                    videos.append(video)

    logger.info(
        {
            "message": "Channel videos resolved",
            "channel_id": channel_id,
            "index_count": page.count,
            "video_count": len(videos),
            "operation": "resolve_videos_by_channel",
        }
    )
    metrics.add_metric(name="VideosResolved", unit=MetricUnit.Count, value=len(videos))

    return VideoPage(
        videos=videos, count=page.count, next_page_token=page.next_page_token
    )


@tracer.capture_method
def video_exists(video_id: str) -> bool:
    """Return True if the video's collection metadata row exists."""
    return video_store.get_record(video_id, EXISTENCE_RECORD_TYPE) is not None
