"""
Lambda proxy response helpers.

CORS headers follow the same CORS_ALLOW_ORIGINS setting as the HTTP API.
"""

import json
from typing import Any

from pydantic import BaseModel

from ragqa.configs import get_settings

BASE_HEADERS = {
    "content-type": "application/json",
    "access-control-allow-headers": "content-type,authorization,x-api-key",
    "access-control-allow-methods": "OPTIONS,POST",
}


def allowed_origin(origin: str | None, allowed: list[str]) -> str:
    """
    Pick the access-control-allow-origin value for a request.

    Args:
        origin: Origin header of the request, if any
        allowed: Configured allowed origins

    Returns:
        str: "*" when any origin is allowed, the request origin when it is
            listed, otherwise the first configured origin
    """
    if not allowed or "*" in allowed:
        return "*"
    if origin in allowed:
        return origin
    return allowed[0]


def cors_headers(origin: str | None = None) -> dict[str, str]:
    """Build response headers for the given request origin."""
    headers = dict(BASE_HEADERS)
    value = allowed_origin(origin, get_settings().cors_allow_origins)
    headers["access-control-allow-origin"] = value
    if value != "*":
        headers["vary"] = "Origin"
    return headers


def json_response(status_code: int, body: BaseModel | dict[str, Any]) -> dict[str, Any]:
    """
    Build an API Gateway proxy response with CORS headers.

    Args:
        status_code: HTTP status
        body: Pydantic model (dumped by alias, None fields dropped except
            citation fields) or plain dict

    Returns:
        dict: statusCode, headers, body
    """
    if isinstance(body, BaseModel):
        body = body.model_dump(mode="json", by_alias=True, exclude_none=True)
    return {
        "statusCode": status_code,
        "headers": cors_headers(),
        "body": json.dumps(body),
    }


def empty_response(status_code: int = 204) -> dict[str, Any]:
    """Build a body-less proxy response (CORS preflight)."""
    return {"statusCode": status_code, "headers": cors_headers(), "body": ""}
