"""
Unit tests for the video record model and tag record helpers.
"""

from tag_writer import build_tag_record
from video_models import Tag
from video_records import (
    SECONDARY_KEY_INDEX_NAME,
    VideoRecordModel,
    is_tag_record_type,
    strip_tag_prefix,
    tag_record_type,
)


class TestTagRecordTypes:
    """Tests for the Tag: discriminator helpers"""

    def test_tag_record_type_adds_prefix(self):
        assert tag_record_type("startTime:171") == "Tag:startTime:171"

    def test_strip_tag_prefix_keeps_body_colons(self):
        assert strip_tag_prefix("Tag:startTime:171") == "startTime:171"

    def test_is_tag_record_type(self):
        assert is_tag_record_type("Tag:anything")
        assert not is_tag_record_type("VideoTitle")
        assert not is_tag_record_type(None)


class TestVideoRecordModel:
    """Tests for the storage mapping of VideoRecordModel"""

    def test_legacy_attribute_names(self):
        """Python names map onto the legacy table attributes"""
        assert VideoRecordModel.recordType.attr_name == "dataType"
        assert VideoRecordModel.value.attr_name == "dataValue"
        assert VideoRecordModel.audit.attr_name == "collection"

    def test_secondary_key_index(self):
        assert (
            VideoRecordModel.secondary_key_index.Meta.index_name
            == SECONDARY_KEY_INDEX_NAME
        )


class TestBuildTagRecord:
    """Tests for the canonical tag row"""

    def test_canonical_row(self):
        """Tag row uses Tag:<body> as both discriminator and value"""
        record = build_tag_record(
            Tag(video_id="V", tag_body="startTime:171"), at="2024-01-01T00:00:00+00:00"
        )

        assert record.id == "V"
        assert record.recordType == "Tag:startTime:171"
        assert record.value == "Tag:startTime:171"
        assert record.secondaryKey is None
        assert record.audit.operationType == "PUT"
        assert record.audit.at == "2024-01-01T00:00:00+00:00"
        assert record.audit.by == "videos-api"

    def test_audit_timestamp_defaults_to_now(self):
        record = build_tag_record(Tag(video_id="V", tag_body="a"))
        assert record.audit.at
