"""Standard response bodies for the Videos API."""

from typing import Any, Dict, Tuple

API_VERSION = "0.0.1"

ERROR_MESSAGES = {
    "RequiredParamIsNotProvidedAtAll": "Required Parameter is not provided.",
    "RequiredParamIsNotProvided": "Required Parameter: {area} are not provided.",
    "InvalidPageSize": "Provided pageSize: {area} is invalid.",
    "InvalidPageToken": "Provided pageToken is invalid.",
    "RequiredBodyIsNotProvidedAtAll": "This is POST function. Body is required.",
    "RequiredBodyParamIsNotProvided": "Required parameter in body: {area} is not provided.",
    "InvalidTagRequest": "Provided tags are invalid: {area}",
    "ProvidedTagsAreInvalid": "Provided tags: [{area}] are invalid.",
    "ProvidedVideoIdIsNotFound": "Provided videoId: {area} is not found.",
    "BackendUnavailable": "Video store is unavailable. Please retry later.",
    "unhandledError": "Something wrong...",
}


def create_error_response(
    error_code: str, status_code: int, area: str = "", **extra: Any
) -> Tuple[Dict[str, Any], int]:
    """
    Create an error body and status code.

    Args:
        error_code: Error code identifier
        status_code: HTTP status code
        area: Offending parameter or values, interpolated into the message
        extra: Additional fields added to the body

    Returns:
        (body, status_code) tuple understood by the API Gateway resolver
    """
    template = ERROR_MESSAGES.get(error_code, ERROR_MESSAGES["unhandledError"])
    body = {"code": error_code, "message": template.format(area=area)}
    body.update(extra)
    return body, status_code


def create_success_response(**result_set: Any) -> Dict[str, Any]:
    """Wrap result fields in the versioned ResultSet envelope."""
    return {"ResultSet": {"apiVersion": API_VERSION, **result_set}}
