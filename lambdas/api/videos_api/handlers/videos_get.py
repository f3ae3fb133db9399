"""GET /videos - List videos by video id or by channel with pagination."""

import os

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.parser import ValidationError, parse
from models import ListVideosQueryParams
from utils.formatting_utils import format_video
from utils.response_utils import create_error_response, create_success_response
from video_assembler import resolve_video_by_id, resolve_videos_by_channel
from video_errors import InvalidPageTokenError

logger = Logger(service="videos-get", level=os.environ.get("LOG_LEVEL", "INFO"))
tracer = Tracer(service="videos-get")
metrics = Metrics(namespace="videotags", service="videos")

QUERY_PARAM_NAMES = ("videoId", "channelId", "pageSize", "pageToken")


def register_route(app):
    """Register GET /videos route"""

    @app.get("/videos")
    @tracer.capture_method
    def videos_get():
        """List videos for a videoId or a channelId"""
        if not app.current_event.query_string_parameters:
            return create_error_response("RequiredParamIsNotProvidedAtAll", 400)

        query_params_dict = {
            name: value
            for name in QUERY_PARAM_NAMES
            if (value := app.current_event.get_query_string_value(name)) is not None
        }
        if query_params_dict.get("videoId", "").strip():
            # Paging only applies to channel listings
            query_params_dict.pop("pageSize", None)
            query_params_dict.pop("pageToken", None)

        try:
            query_params = parse(event=query_params_dict, model=ListVideosQueryParams)
        except ValidationError as e:
            logger.warning(f"Query parameter validation error: {e}")
            return create_error_response(
                "InvalidPageSize", 400, area=query_params_dict.get("pageSize", "")
            )

        if query_params.videoId is None and query_params.channelId is None:
            return create_error_response(
                "RequiredParamIsNotProvided", 400, area="videoId or channelId"
            )

        logger.info(
            "Listing videos",
            extra={
                "video_id": query_params.videoId,
                "channel_id": query_params.channelId,
                "page_size": query_params.pageSize,
            },
        )

        if query_params.videoId is not None:
            video = resolve_video_by_id(query_params.videoId)
            videos = [] if video is None else [format_video(video)]
            metrics.add_metric(
                name="VideosReturned", unit=MetricUnit.Count, value=len(videos)
            )
            return create_success_response(videos=videos)

        try:
            page = resolve_videos_by_channel(
                query_params.channelId, query_params.pageSize, query_params.pageToken
            )
        except InvalidPageTokenError:
            return create_error_response("InvalidPageToken", 400)

        result_set = {
            "videos": [format_video(video) for video in page.videos],
            "count": page.count,
        }
        if page.next_page_token is not None:
            result_set["nextPageToken"] = page.next_page_token

        metrics.add_metric(
            name="VideosReturned", unit=MetricUnit.Count, value=len(page.videos)
        )
        return create_success_response(**result_set)
