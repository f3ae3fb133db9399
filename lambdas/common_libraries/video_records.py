"""
PynamoDB model for the video data table - Single Table Design.

Every attribute of a video is stored as its own row sharing the video's
partition key:
- Scalar attributes: PK=id, SK=<discriminator> (VideoTitle, ChannelID, ...)
- Tags: PK=id, SK=Tag:<tag body>, one row per tag
- Channel grouping: the PublishedAt row carries secondaryKey=<channel id>
  and is indexed by SecondaryKeyIndex (hash=secondaryKey, range=dataValue)

Storage attribute names (dataType, dataValue, collection) are kept from the
legacy table and mapped onto clearer Python names with attr_name.
"""

import os
from typing import Optional

from pynamodb.attributes import MapAttribute, UnicodeAttribute
from pynamodb.indexes import AllProjection, GlobalSecondaryIndex
from pynamodb.models import Model

# Fixed discriminators
VIDEO_TITLE = "VideoTitle"
CHANNEL_ID = "ChannelID"
PUBLISHED_AT = "PublishedAt"
ACTUAL_START_TIME = "ActualStartTime"
ACTUAL_END_TIME = "ActualEndTime"
SCHEDULED_START_TIME = "ScheduledStartTime"
VIDEO_COLLECTION_METADATA = "VideoCollectionMetaData"

FIXED_RECORD_TYPES = (
    VIDEO_TITLE,
    CHANNEL_ID,
    PUBLISHED_AT,
    ACTUAL_START_TIME,
    ACTUAL_END_TIME,
    SCHEDULED_START_TIME,
    VIDEO_COLLECTION_METADATA,
)

# Multi-valued tag discriminator prefix
TAG_PREFIX = "Tag:"

SECONDARY_KEY_INDEX_NAME = "SecondaryKeyIndex"


def tag_record_type(tag_body: str) -> str:
    """Build the composite discriminator for a tag body."""
    return f"{TAG_PREFIX}{tag_body}"


def is_tag_record_type(record_type: Optional[str]) -> bool:
    return bool(record_type) and record_type.startswith(TAG_PREFIX)


def strip_tag_prefix(record_type: str) -> str:
    return record_type[len(TAG_PREFIX) :]


class AuditAttribute(MapAttribute):
    """Audit block written alongside a row. Carried, never interpreted."""

    operationType = UnicodeAttribute(null=True)
    at = UnicodeAttribute(null=True)
    by = UnicodeAttribute(null=True)


class SecondaryKeyIndex(GlobalSecondaryIndex):
    """
    Channel grouping index.
    PK=secondaryKey (channel id), SK=dataValue (ISO-8601 publish time)
    """

    class Meta:
        index_name = SECONDARY_KEY_INDEX_NAME
        projection = AllProjection()

    secondaryKey = UnicodeAttribute(hash_key=True)
    value = UnicodeAttribute(range_key=True, attr_name="dataValue")


class VideoRecordModel(Model):
    """
    Raw video record.
    PK=id, SK=dataType
    """

    class Meta:
        table_name = os.environ.get("VIDEOS_TABLE_NAME", "videos_table_dev")
        region = os.environ.get("AWS_REGION", "ap-northeast-1")
        host = os.environ.get("DYNAMODB_HOST")

    # Primary keys
    id = UnicodeAttribute(hash_key=True)
    recordType = UnicodeAttribute(range_key=True, attr_name="dataType")

    # Payload
    value = UnicodeAttribute(null=True, attr_name="dataValue")
    secondaryKey = UnicodeAttribute(null=True)
    audit = AuditAttribute(null=True, attr_name="collection")

    secondary_key_index = SecondaryKeyIndex()
