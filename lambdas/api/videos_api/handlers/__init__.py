"""
Videos API Handlers.

All route handlers using AWS Powertools and Pydantic V2.
Each file handles exactly one API endpoint (method + resource).
"""

from . import env_get, videos_get, videos_ID_get, videos_tags_post

__all__ = [
    "env_get",
    "videos_get",
    "videos_ID_get",
    "videos_tags_post",
]


def register_all_routes(app):
    """
    Register all handler routes with the API Gateway resolver.

    Args:
        app: APIGatewayRestResolver instance
    """
    # Videos endpoints
    videos_get.register_route(app)
    videos_ID_get.register_route(app)

    # Tag endpoints
    videos_tags_post.register_route(app)

    # Deployment smoke check
    env_get.register_route(app)
