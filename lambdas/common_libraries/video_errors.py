"""Custom exceptions for the video tags Lambda functions."""

from typing import Any, List, Optional


class VideoTagsError(Exception):
    """Base exception for video tags errors."""

    def __init__(self, message: str, details: Optional[str] = None):
        self.message = message
        self.details = details
        super().__init__(self.message)

    def __str__(self):
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class StoreBackendError(VideoTagsError):
    """Raised when a DynamoDB call fails, as opposed to a record being absent."""

    def __init__(self, operation: str, details: Optional[str] = None):
        self.operation = operation
        super().__init__(f"Store operation '{operation}' failed", details)


class InvalidPageTokenError(VideoTagsError):
    """Raised when a page token cannot be decoded into a cursor."""

    def __init__(self, token: str, details: Optional[str] = None):
        self.token = token
        super().__init__("Page token is invalid", details)


class VideoNotFoundError(VideoTagsError):
    """Raised when a tag batch references videos that do not exist."""

    def __init__(self, video_ids: List[str]):
        self.video_ids = list(video_ids)
        super().__init__(
            f"Provided videoId: {','.join(self.video_ids)} is not found."
        )


class TagWriteError(VideoTagsError):
    """Raised when one or more tag rows could not be written."""

    def __init__(self, failed_tags: List[Any]):
        self.failed_tags = list(failed_tags)
        super().__init__(
            "Failed to write tags",
            ",".join(f"{t.video_id}/{t.tag_body}" for t in self.failed_tags),
        )
