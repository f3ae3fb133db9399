"""
Pagination utilities for the video tags Lambda functions.

Page tokens wrap DynamoDB's LastEvaluatedKey: the key is JSON-encoded and
then URL-safe base64 encoded, so it can travel in a query string as-is.
The codec does not look inside the cursor.
"""

import base64
import binascii
import json
import os
from typing import Any, Dict, Optional

from aws_lambda_powertools import Logger
from video_errors import InvalidPageTokenError

logger = Logger(service="pagination-utils", level=os.environ.get("LOG_LEVEL", "INFO"))

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 40


def encode_page_token(cursor: Optional[Dict[str, Any]]) -> Optional[str]:
    """
    Encode a native store cursor into an opaque page token.

    Args:
        cursor: LastEvaluatedKey returned by the store, or None

    Returns:
        URL-safe base64 token, or None when there is no cursor
    """
    if cursor is None:
        return None

    cursor_json = json.dumps(cursor, sort_keys=True, separators=(",", ":"))
    token = base64.urlsafe_b64encode(cursor_json.encode("utf-8")).decode("ascii")

    logger.debug(
        {
            "message": "Page token created",
            "cursor": cursor,
            "operation": "encode_page_token",
        }
    )
    return token


def decode_page_token(token: Optional[str]) -> Optional[Dict[str, Any]]:
    """
    Decode a page token back into the native store cursor.

    Args:
        token: Token previously produced by encode_page_token, or None

    Returns:
        Cursor dictionary, or None when no token was given

    Raises:
        InvalidPageTokenError: If the token is not a valid encoded cursor
    """
    if token is None:
        return None

    try:
        decoded_bytes = base64.urlsafe_b64decode(token.encode("ascii"))
        cursor = json.loads(decoded_bytes.decode("utf-8"))
    except (binascii.Error, UnicodeError, ValueError) as e:
        logger.warning(
            {
                "message": "Failed to parse page token",
                "token": token,
                "error": str(e),
                "operation": "decode_page_token",
            }
        )
        raise InvalidPageTokenError(token, str(e)) from e

    if not isinstance(cursor, dict):
        raise InvalidPageTokenError(token, "token does not encode an object")

    return cursor
