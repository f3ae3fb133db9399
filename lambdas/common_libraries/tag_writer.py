"""
Write path for video tags.

A batch of tags is applied only if every referenced video exists. Each tag
then becomes its own Tag:<body> row; rewriting an identical tag overwrites
the same key, a different body adds a row. Rows are written independently,
so a failed batch may be partially applied - the failures are reported in
TagWriteError rather than dropped.
"""

import os
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from typing import List, Optional, Sequence

import video_store
from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.metrics import MetricUnit
from video_assembler import video_exists
from video_errors import StoreBackendError, TagWriteError, VideoNotFoundError
from video_models import Tag
from video_records import AuditAttribute, VideoRecordModel

logger = Logger(service="tag-writer", level=os.environ.get("LOG_LEVEL", "INFO"))
tracer = Tracer(service="tag-writer")
metrics = Metrics(namespace="videotags", service="tag-writer")

AUDIT_OPERATION_PUT = "PUT"
AUDIT_ACTOR = os.environ.get("AUDIT_ACTOR", "videos-api")


def build_tag_record(tag: Tag, at: Optional[str] = None) -> VideoRecordModel:
    """
    Convert a Tag into its canonical storage row.

    Args:
        tag: Tag to store
        at: Audit timestamp; defaults to now (UTC, ISO 8601)

    Returns:
        Record with id=videoId and recordType=value=Tag:<body>
    """
    return VideoRecordModel(
        id=tag.video_id,
        recordType=tag.record_type,
        value=tag.record_type,
        audit=AuditAttribute(
            operationType=AUDIT_OPERATION_PUT,
            at=at or datetime.now(timezone.utc).isoformat(),
            by=AUDIT_ACTOR,
        ),
    )


def _distinct_video_ids(tags: Sequence[Tag]) -> List[str]:
    return list(dict.fromkeys(tag.video_id for tag in tags))


@tracer.capture_method
def find_missing_videos(video_ids: Sequence[str]) -> List[str]:
    """Check every id concurrently and return the ones with no video."""
    if not video_ids:
        return []

    with ThreadPoolExecutor(max_workers=len(video_ids)) as executor:
        exists = list(executor.map(video_exists, video_ids))

    return [video_id for video_id, found in zip(video_ids, exists) if not found]


def _write_tag(tag: Tag) -> Optional[Tag]:
    """Write one tag row; returns the tag if the write failed."""
    try:
        video_store.put_record(build_tag_record(tag))
    except StoreBackendError:
        return tag
    return None


@tracer.capture_method
def submit_tags(tags: Sequence[Tag]) -> List[Tag]:
    """
    Validate and write a batch of tags.

    Args:
        tags: Tags to attach; any non-empty tag body is accepted

    Returns:
        The tags that were written

    Raises:
        VideoNotFoundError: If any referenced video does not exist; nothing
            is written in that case
        TagWriteError: If one or more rows could not be written
        StoreBackendError: If existence could not be determined
    """
    tags = list(tags)
    if not tags:
        return []

    missing = find_missing_videos(_distinct_video_ids(tags))
    if missing:
        logger.warning(
            {
                "message": "Tag batch references unknown videos",
                "missing_video_ids": missing,
                "operation": "submit_tags",
            }
        )
        metrics.add_metric(
            name="VideoNotFoundRejections", unit=MetricUnit.Count, value=1
        )
        raise VideoNotFoundError(missing)

    with ThreadPoolExecutor(max_workers=len(tags)) as executor:
        failed = [tag for tag in executor.map(_write_tag, tags) if tag is not None]

    written = len(tags) - len(failed)
    metrics.add_metric(name="TagsWritten", unit=MetricUnit.Count, value=written)

    if failed:
        logger.error(
            {
                "message": "Some tag rows were not written",
                "failed_count": len(failed),
                "written_count": written,
                "operation": "submit_tags",
            }
        )
        raise TagWriteError(failed)

    logger.info(
        {
            "message": "Tags written",
            "tag_count": written,
            "video_count": len(_distinct_video_ids(tags)),
            "operation": "submit_tags",
        }
    )
    return tags
