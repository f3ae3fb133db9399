"""
Shared fixtures for the video tags tests.

The DynamoDB table is replaced by an in-memory FakeVideoTable patched onto
the PynamoDB model, so no AWS access is needed.
"""

import json
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple
from unittest.mock import patch

os.environ.setdefault("AWS_REGION", "ap-northeast-1")
os.environ.setdefault("AWS_DEFAULT_REGION", "ap-northeast-1")
os.environ.setdefault("VIDEOS_TABLE_NAME", "videos_table_test")
os.environ.setdefault("POWERTOOLS_TRACE_DISABLED", "true")
os.environ.setdefault("POWERTOOLS_METRICS_NAMESPACE", "videotags")

import pytest
from pynamodb.exceptions import GetError, PutError, QueryError
from video_records import (
    CHANNEL_ID,
    PUBLISHED_AT,
    VIDEO_COLLECTION_METADATA,
    VIDEO_TITLE,
    VideoRecordModel,
    tag_record_type,
)


def raw_key(record: VideoRecordModel) -> Dict[str, Dict[str, str]]:
    """LastEvaluatedKey of a SecondaryKeyIndex row, in DynamoDB wire format."""
    return {
        "id": {"S": record.id},
        "dataType": {"S": record.recordType},
        "secondaryKey": {"S": record.secondaryKey},
        "dataValue": {"S": record.value},
    }


class FakeResultIterator:
    def __init__(self, items, last_evaluated_key):
        self._items = items
        self.last_evaluated_key = last_evaluated_key

    def __iter__(self):
        return iter(self._items)


class FakeVideoTable:
    """In-memory stand-in for the video table and its secondary index."""

    def __init__(self):
        self.rows: Dict[Tuple[str, str], VideoRecordModel] = {}
        self.failing_operations = set()
        self.failing_puts = set()
        self.put_calls = 0

    def add(
        self,
        record_id: str,
        record_type: str,
        value: Optional[str] = None,
        secondary_key: Optional[str] = None,
    ) -> VideoRecordModel:
        record = VideoRecordModel(
            id=record_id,
            recordType=record_type,
            value=value,
            secondaryKey=secondary_key,
        )
        self.rows[(record_id, record_type)] = record
        return record

    def add_video(
        self,
        video_id: str,
        title: str,
        channel_id: str,
        published_at: str,
        tags=(),
        **extra_fields: str,
    ) -> None:
        self.add(video_id, VIDEO_COLLECTION_METADATA, "collected")
        self.add(video_id, VIDEO_TITLE, title)
        self.add(video_id, CHANNEL_ID, channel_id)
        self.add(video_id, PUBLISHED_AT, published_at, secondary_key=channel_id)
        for record_type, value in extra_fields.items():
            self.add(video_id, record_type, value)
        for tag in tags:
            self.add(video_id, tag_record_type(tag), tag_record_type(tag))

    def tag_rows(self, video_id: str):
        return sorted(
            record_type
            for (record_id, record_type) in self.rows
            if record_id == video_id and record_type.startswith("Tag:")
        )

    # PynamoDB surface

    def save(self, record: VideoRecordModel) -> None:
        self.put_calls += 1
        if "save" in self.failing_operations or record.id in self.failing_puts:
            raise PutError("Failed to put item")
        self.rows[(record.id, record.recordType)] = record

    def get(self, hash_key: str, range_key: str = None, **kwargs) -> VideoRecordModel:
        if "get" in self.failing_operations:
            raise GetError("Failed to get item")
        try:
            return self.rows[(hash_key, range_key)]
        except KeyError:
            raise VideoRecordModel.DoesNotExist()

    def query(self, hash_key: str, *args, **kwargs):
        if "query" in self.failing_operations:
            raise QueryError("Failed to query items")
        return iter(
            record
            for key, record in sorted(self.rows.items())
            if key[0] == hash_key
        )

    def index_query(
        self,
        hash_key: str,
        scan_index_forward: bool = True,
        limit: Optional[int] = None,
        last_evaluated_key: Optional[Dict[str, Any]] = None,
        **kwargs,
    ) -> FakeResultIterator:
        if "index_query" in self.failing_operations:
            raise QueryError("Failed to query index")

        items = sorted(
            (r for r in self.rows.values() if r.secondaryKey == hash_key),
            key=lambda r: (r.value or "", r.id),
            reverse=not scan_index_forward,
        )
        if last_evaluated_key:
            start = (last_evaluated_key["id"]["S"], last_evaluated_key["dataType"]["S"])
            position = [(r.id, r.recordType) for r in items].index(start)
            items = items[position + 1 :]

        # Mirrors PynamoDB's ResultIterator: when limit cuts the page,
        # last_evaluated_key is the key of the last returned row, even if
        # no rows remain after it.
        if limit is not None and len(items) >= limit:
            page = items[:limit]
            return FakeResultIterator(page, raw_key(page[-1]))
        return FakeResultIterator(items, None)


@pytest.fixture
def video_table():
    table = FakeVideoTable()
    with patch.object(
        VideoRecordModel, "save", autospec=True, side_effect=table.save
    ), patch.object(VideoRecordModel, "get", side_effect=table.get), patch.object(
        VideoRecordModel, "query", side_effect=table.query
    ), patch.object(
        VideoRecordModel.secondary_key_index, "query", side_effect=table.index_query
    ):
        yield table


@pytest.fixture
def channel_table(video_table):
    """Eight videos on channel C1, one on C2."""
    for day in range(1, 9):
        video_table.add_video(
            f"v{day}",
            title=f"Stream {day}",
            channel_id="C1",
            published_at=f"2024-01-0{day}T12:00:00Z",
        )
    video_table.add_video(
        "other", title="Elsewhere", channel_id="C2", published_at="2024-01-05T00:00:00Z"
    )
    return video_table


@pytest.fixture
def lambda_context():
    @dataclass
    class LambdaContext:
        function_name: str = "videos-api"
        memory_limit_in_mb: int = 128
        invoked_function_arn: str = (
            "arn:aws:lambda:ap-northeast-1:123456789012:function:videos-api"
        )
        aws_request_id: str = "da658bd3-2d6f-4e7b-8ec2-937234644fdc"

    return LambdaContext()


def api_event(
    method: str,
    path: str,
    query: Optional[Dict[str, str]] = None,
    body: Any = None,
    path_parameters: Optional[Dict[str, str]] = None,
) -> Dict[str, Any]:
    """Build an API Gateway REST proxy event."""
    if body is not None and not isinstance(body, str):
        body = json.dumps(body)
    return {
        "resource": path,
        "path": path,
        "httpMethod": method,
        "headers": {"Content-Type": "application/json"},
        "multiValueHeaders": {},
        "queryStringParameters": query,
        "multiValueQueryStringParameters": None,
        "pathParameters": path_parameters,
        "stageVariables": None,
        "requestContext": {
            "requestId": "c6af9ac6-7b61-11e6-9a41-93e8deadbeef",
            "stage": "test",
            "resourcePath": path,
            "httpMethod": method,
            "path": path,
            "identity": {"sourceIp": "127.0.0.1"},
        },
        "body": body,
        "isBase64Encoded": False,
    }
