"""
Videos API Lambda.

Serves every /videos route from one function through the Powertools
API Gateway REST resolver.
"""

import json
import os
from typing import Any, Dict

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.event_handler import (
    APIGatewayRestResolver,
    Response,
    content_types,
)
from aws_lambda_powertools.event_handler.api_gateway import CORSConfig
from aws_lambda_powertools.logging import correlation_paths
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext
from handlers import register_all_routes
from utils.response_utils import create_error_response
from video_errors import StoreBackendError, TagWriteError

logger = Logger(service="videos-api", level=os.environ.get("LOG_LEVEL", "INFO"))
tracer = Tracer(service="videos-api")
metrics = Metrics(namespace="videotags", service="videos-api")

# Configure CORS
cors_config = CORSConfig(
    allow_origin="*",
    allow_headers=[
        "Content-Type",
        "X-Amz-Date",
        "Authorization",
        "X-Api-Key",
        "X-Amz-Security-Token",
    ],
)

app = APIGatewayRestResolver(
    serializer=lambda x: json.dumps(x, default=str),
    strip_prefixes=["/api"],
    cors=cors_config,
)

register_all_routes(app)


def _json_response(body: Dict[str, Any], status_code: int) -> Response:
    return Response(
        status_code=status_code,
        content_type=content_types.APPLICATION_JSON,
        body=json.dumps(body),
    )


@app.exception_handler(StoreBackendError)
def handle_store_backend_error(e: StoreBackendError) -> Response:
    logger.error(
        "Video store unavailable",
        extra={"operation": e.operation, "error": str(e)},
    )
    return _json_response(*create_error_response("BackendUnavailable", 503))


@app.exception_handler(TagWriteError)
def handle_tag_write_error(e: TagWriteError) -> Response:
    logger.error(
        "Tag batch partially written",
        extra={"failed_count": len(e.failed_tags), "error": str(e)},
    )
    metrics.add_metric(name="PartialTagWrites", unit=MetricUnit.Count, value=1)
    return _json_response(
        *create_error_response(
            "BackendUnavailable",
            503,
            failedTags=[
                {"videoId": t.video_id, "tag": t.tag_body} for t in e.failed_tags
            ],
        )
    )


@app.exception_handler(Exception)
def handle_unexpected_error(e: Exception) -> Response:
    logger.exception("Unexpected error in videos API", exc_info=e)
    metrics.add_metric(name="UnexpectedErrors", unit=MetricUnit.Count, value=1)
    return _json_response(*create_error_response("unhandledError", 500))


@logger.inject_lambda_context(correlation_id_path=correlation_paths.API_GATEWAY_REST)
@tracer.capture_lambda_handler
@metrics.log_metrics(capture_cold_start_metric=True)
def lambda_handler(event: Dict[str, Any], context: LambdaContext) -> Dict[str, Any]:
    """
    Main Lambda handler

    Args:
        event: API Gateway event
        context: Lambda context

    Returns:
        API Gateway response
    """
    return app.resolve(event, context)
