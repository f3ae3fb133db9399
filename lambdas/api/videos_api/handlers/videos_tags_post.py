"""POST /videos/tags - Attach tags to videos."""

import json
import os

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.parser import ValidationError, parse
from models import PostVideoTagsRequest
from tag_writer import submit_tags
from utils.formatting_utils import format_tag
from utils.response_utils import create_error_response, create_success_response
from video_errors import VideoNotFoundError
from video_models import Tag

logger = Logger(
    service="videos-tags-post", level=os.environ.get("LOG_LEVEL", "INFO")
)
tracer = Tracer(service="videos-tags-post")
metrics = Metrics(namespace="videotags", service="video-tags")

TAG_SEPARATOR = ":"


def _require_tag_separator() -> bool:
    return os.environ.get("REQUIRE_TAG_SEPARATOR", "true").lower() == "true"


def _describe_validation_error(error: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
        for err in error.errors()
    )


def register_route(app):
    """Register POST /videos/tags route"""

    @app.post("/videos/tags")
    @tracer.capture_method
    def videos_tags_post():
        """Validate a batch of tags and write them"""
        if not app.current_event.body:
            return create_error_response("RequiredBodyIsNotProvidedAtAll", 400)

        try:
            request_body = app.current_event.json_body
        except json.JSONDecodeError as e:
            logger.warning(f"Request body is not valid JSON: {e}")
            return create_error_response(
                "InvalidTagRequest", 400, area="body is not valid JSON"
            )

        if not isinstance(request_body, dict) or not request_body.get("tags"):
            return create_error_response(
                "RequiredBodyParamIsNotProvided", 400, area="tags"
            )

        try:
            request_data = parse(event=request_body, model=PostVideoTagsRequest)
        except ValidationError as e:
            logger.warning(f"Validation error posting tags: {e}")
            return create_error_response(
                "InvalidTagRequest", 400, area=_describe_validation_error(e)
            )

        if _require_tag_separator():
            invalid_tags = [
                t.tag for t in request_data.tags if TAG_SEPARATOR not in t.tag
            ]
            if invalid_tags:
                return create_error_response(
                    "ProvidedTagsAreInvalid", 400, area=",".join(invalid_tags)
                )

        tags = [Tag(video_id=t.videoId, tag_body=t.tag) for t in request_data.tags]

        try:
            written = submit_tags(tags)
        except VideoNotFoundError as e:
            return create_error_response(
                "ProvidedVideoIdIsNotFound",
                404,
                area=",".join(e.video_ids),
                videoIds=e.video_ids,
            )

        metrics.add_metric(
            name="SuccessfulTagSubmissions", unit=MetricUnit.Count, value=1
        )
        return create_success_response(tags=[format_tag(tag) for tag in written])
