"""Formatting of domain objects into API response shapes."""

from typing import Any, Dict

from video_models import Tag, Video


def format_video(video: Video) -> Dict[str, Any]:
    """Video as a camelCase dict; unset optional fields are omitted."""
    return video.model_dump(by_alias=True, exclude_none=True)


def format_tag(tag: Tag) -> Dict[str, Any]:
    return {"videoId": tag.video_id, "tag": tag.tag_body}
