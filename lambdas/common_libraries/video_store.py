"""
Store client for the video data table.

Wraps the four access patterns the video functions need:
- point write of one row (upsert on id + recordType)
- point read of one row
- primary-key query for every row of one video
- newest-first paginated query on SecondaryKeyIndex

Absent data is reported as None / empty results. Backend failures are never
masked: they are logged and re-raised as StoreBackendError so callers can
tell "not found" apart from "could not determine".
"""

import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.metrics import MetricUnit
from pagination_utils import decode_page_token, encode_page_token
from pynamodb.exceptions import DoesNotExist, PynamoDBException
from video_errors import InvalidPageTokenError, StoreBackendError
from video_records import VideoRecordModel

logger = Logger(service="video-store", level=os.environ.get("LOG_LEVEL", "INFO"))
tracer = Tracer(service="video-store")
metrics = Metrics(namespace="videotags", service="video-store")


@dataclass
class RecordPage:
    """One page of raw records from the secondary index."""

    records: List[VideoRecordModel] = field(default_factory=list)
    count: int = 0
    next_page_token: Optional[str] = None


def _backend_failure(operation: str, error: Exception, **context) -> StoreBackendError:
    logger.error(
        {
            "message": "DynamoDB call failed",
            "error": str(error),
            "operation": operation,
            **context,
        }
    )
    metrics.add_metric(name="StoreBackendFailures", unit=MetricUnit.Count, value=1)
    return StoreBackendError(operation, str(error))


def _check_start_key(
    start_key: Dict[str, Any], secondary_key: str, page_token: str
) -> None:
    """
    Reject a decoded cursor that is not a SecondaryKeyIndex key for this query.

    Raises:
        InvalidPageTokenError: If the cursor has the wrong attributes, a
            non-string attribute value, or belongs to another secondary key
    """
    expected = {
        VideoRecordModel.id.attr_name,
        VideoRecordModel.recordType.attr_name,
        VideoRecordModel.secondaryKey.attr_name,
        VideoRecordModel.value.attr_name,
    }
    if set(start_key) != expected:
        reason = "cursor attributes do not match the index key"
    elif not all(
        isinstance(v, dict) and set(v) == {"S"} and isinstance(v["S"], str)
        for v in start_key.values()
    ):
        reason = "cursor values must be string attributes"
    elif start_key[VideoRecordModel.secondaryKey.attr_name]["S"] != secondary_key:
        reason = "cursor belongs to another secondary key"
    else:
        return

    logger.warning(
        {
            "message": "Page token is not a cursor for this query",
            "secondary_key": secondary_key,
            "reason": reason,
            "operation": "query_by_secondary_key",
        }
    )
    raise InvalidPageTokenError(page_token, reason)


@tracer.capture_method
def put_record(record: VideoRecordModel) -> None:
    """
    Upsert a record by its composite key (id, recordType).

    Args:
        record: Record to write; an existing row with the same key is replaced

    Raises:
        StoreBackendError: If the write fails
    """
    try:
        record.save()
    except PynamoDBException as e:
        raise _backend_failure(
            "put_record", e, id=record.id, record_type=record.recordType
        ) from e

    logger.debug(
        {
            "message": "Record written",
            "id": record.id,
            "record_type": record.recordType,
            "operation": "put_record",
        }
    )


@tracer.capture_method
def get_record(record_id: str, record_type: str) -> Optional[VideoRecordModel]:
    """
    Point lookup of a single record.

    Args:
        record_id: Partition key
        record_type: Discriminator (sort key)

    Returns:
        The record, or None if it does not exist

    Raises:
        StoreBackendError: If the read fails
    """
    try:
        return VideoRecordModel.get(record_id, record_type)
    except DoesNotExist:
        logger.debug(
            {
                "message": "Record not found",
                "id": record_id,
                "record_type": record_type,
                "operation": "get_record",
            }
        )
        return None
    except PynamoDBException as e:
        raise _backend_failure(
            "get_record", e, id=record_id, record_type=record_type
        ) from e


@tracer.capture_method
def get_records_by_id(record_id: str) -> List[VideoRecordModel]:
    """
    Query every record sharing a partition key.

    Args:
        record_id: Partition key

    Returns:
        Records in storage order; empty if none exist

    Raises:
        StoreBackendError: If the query fails
    """
    try:
        records = list(VideoRecordModel.query(record_id))
    except PynamoDBException as e:
        raise _backend_failure("get_records_by_id", e, id=record_id) from e

    logger.debug(
        {
            "message": "Records queried by id",
            "id": record_id,
            "record_count": len(records),
            "operation": "get_records_by_id",
        }
    )
    return records


@tracer.capture_method
def query_by_secondary_key(
    secondary_key: str, page_size: int, page_token: Optional[str] = None
) -> RecordPage:
    """
    Query SecondaryKeyIndex newest-first, one page at a time.

    The index range key is time-ordered ascending, so the query runs
    backwards. page_size is not clamped here; callers validate it.

    Args:
        secondary_key: Indexed value to match (channel id)
        page_size: Maximum number of records to return
        page_token: Token from a previous page, or None for the first page

    Returns:
        RecordPage with the records, their count and the next page token

    Raises:
        InvalidPageTokenError: If page_token cannot be decoded or is not a
            cursor of this index for secondary_key
        StoreBackendError: If the query fails
    """
    start_key = decode_page_token(page_token)
    if start_key is not None:
        _check_start_key(start_key, secondary_key, page_token)

    try:
        results = VideoRecordModel.secondary_key_index.query(
            secondary_key,
            scan_index_forward=False,
            limit=page_size,
            last_evaluated_key=start_key,
        )
        records = list(results)
        next_page_token = encode_page_token(results.last_evaluated_key)
    except PynamoDBException as e:
        raise _backend_failure(
            "query_by_secondary_key", e, secondary_key=secondary_key
        ) from e

    logger.info(
        {
            "message": "Secondary index queried",
            "secondary_key": secondary_key,
            "page_size": page_size,
            "record_count": len(records),
            "has_next_page": next_page_token is not None,
            "operation": "query_by_secondary_key",
        }
    )
    return RecordPage(
        records=records, count=len(records), next_page_token=next_page_token
    )
