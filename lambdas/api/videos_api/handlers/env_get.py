"""GET /env - Report which environment the function runs in."""

import os

from aws_lambda_powertools import Logger

logger = Logger(service="env-get", level=os.environ.get("LOG_LEVEL", "INFO"))


def register_route(app):
    """Register GET /env route"""

    @app.get("/env")
    def env_get():
        environment = os.environ.get("RUN_ENV")
        logger.debug(f"Reporting environment {environment}")
        return {"message": f"hello from {environment}"}
