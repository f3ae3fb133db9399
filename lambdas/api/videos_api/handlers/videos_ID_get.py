"""GET /videos/<video_id> - Get a single video."""

import os

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.metrics import MetricUnit
from utils.formatting_utils import format_video
from utils.response_utils import create_error_response, create_success_response
from video_assembler import resolve_video_by_id

logger = Logger(service="videos-ID-get", level=os.environ.get("LOG_LEVEL", "INFO"))
tracer = Tracer(service="videos-ID-get")
metrics = Metrics(namespace="videotags", service="videos")


def register_route(app):
    """Register GET /videos/<video_id> route"""

    @app.get("/videos/<video_id>")
    @tracer.capture_method
    def videos_ID_get(video_id: str):
        """Get one video by id"""
        logger.info("Getting video", extra={"video_id": video_id})

        video = resolve_video_by_id(video_id)
        if video is None:
            metrics.add_metric(name="VideoNotFound", unit=MetricUnit.Count, value=1)
            return create_error_response(
                "ProvidedVideoIdIsNotFound", 404, area=video_id
            )

        metrics.add_metric(
            name="SuccessfulVideoRetrievals", unit=MetricUnit.Count, value=1
        )
        return create_success_response(video=format_video(video))
