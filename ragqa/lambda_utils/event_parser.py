"""
API Gateway and S3 event parsing utilities for Lambda.

Normalises the request ID, method and path across API Gateway payload
versions, decodes storage notifications and parses request bodies into an
explicit absent / parsed / malformed result.

Dependencies: json, base64, urllib
System role: Lambda request envelope parsing
"""

import base64
import binascii
import json
import logging
import re
import uuid
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import unquote_plus

logger = logging.getLogger(__name__)

_STAGE_PREFIX = re.compile(r"^/(prod|\$default)(?=/)")


@dataclass(frozen=True)
class S3Notification:
    """Bucket and decoded key of the first S3 event record."""

    bucket: str
    key: str


@dataclass(frozen=True)
class BodyParseResult:
    """
    Outcome of parsing a request body.

    An absent body yields an empty payload; a malformed body carries the
    parse error and must be rejected.
    """

    payload: dict[str, Any] = field(default_factory=dict)
    present: bool = False
    error: str | None = None

    @property
    def is_malformed(self) -> bool:
        return self.error is not None


def request_id_of(event: dict[str, Any]) -> str:
    """Return the API Gateway request ID or a fresh UUID."""
    request_context = event.get("requestContext") or {}
    return request_context.get("requestId") or str(uuid.uuid4())


def method_of(event: dict[str, Any]) -> str:
    """Return the HTTP method for payload v2 or v1 events."""
    http = (event.get("requestContext") or {}).get("http") or {}
    return (http.get("method") or event.get("httpMethod") or "UNKNOWN").upper()


def strip_stage(path: str) -> str:
    """Remove a leading /prod or /$default stage segment."""
    return _STAGE_PREFIX.sub("", path or "/")


def path_of(event: dict[str, Any]) -> str:
    """Return the request path without its stage prefix."""
    http = (event.get("requestContext") or {}).get("http") or {}
    raw = event.get("rawPath") or http.get("path") or event.get("path") or "/"
    return strip_stage(raw)


def origin_of(event: dict[str, Any]) -> str | None:
    """Return the Origin request header, matched case-insensitively."""
    headers = event.get("headers") or {}
    for name, value in headers.items():
        if name.lower() == "origin":
            return value
    return None


def is_s3_event(event: dict[str, Any]) -> bool:
    """Return True when the event is an S3 notification."""
    records = event.get("Records")
    return bool(records) and isinstance(records, list) and records[0].get("eventSource") == "aws:s3"


def parse_s3_notification(event: dict[str, Any]) -> S3Notification:
    """
    Extract bucket and key from the first S3 record.

    Keys arrive URL-encoded with '+' for spaces.

    Args:
        event: S3 notification event

    Returns:
        S3Notification: Bucket name and decoded key
    """
    s3_info = event["Records"][0].get("s3") or {}
    bucket = (s3_info.get("bucket") or {}).get("name") or ""
    key = unquote_plus((s3_info.get("object") or {}).get("key") or "")
    logger.info(
        "%s:parse_s3_notification - Parsed S3 event",
        __name__,
        extra={"bucket": bucket, "s3_key": key},
    )
    return S3Notification(bucket=bucket, key=key)


def parse_body(event: dict[str, Any]) -> BodyParseResult:
    """
    Parse the JSON request body.

    Args:
        event: API Gateway event

    Returns:
        BodyParseResult: Empty payload when no body was sent, the decoded
            object when it parsed, or an error when it did not
    """
    raw = event.get("body")
    if raw is None or raw == "":
        return BodyParseResult()

    try:
        if event.get("isBase64Encoded"):
            raw = base64.b64decode(raw).decode("utf-8")
        payload = json.loads(raw)
    except (binascii.Error, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.warning("%s:parse_body - Malformed body: %s", __name__, e)
        return BodyParseResult(present=True, error=f"Invalid JSON body: {e}")

    if payload is None:
        return BodyParseResult(present=True)
    if not isinstance(payload, dict):
        return BodyParseResult(present=True, error="Request body must be a JSON object")
    return BodyParseResult(payload=payload, present=True)
