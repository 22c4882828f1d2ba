"""
S3 object store for ingestion sources.

Lists objects under a prefix (all pages) and downloads object bytes.

Dependencies: boto3
System role: Source document access for the ingestion pipeline
"""

import logging
from dataclasses import dataclass
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ragqa.core.exceptions import ObjectFetchError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ObjectSummary:
    """Listed object key and size in bytes."""

    key: str
    size: int


class S3ObjectStore:
    """S3 client for listing and reading source documents."""

    def __init__(self, client: Any = None, region: str | None = None) -> None:
        """
        Initialize S3 object store.

        Args:
            client: Optional pre-built boto3 S3 client
            region: AWS region used when a client is created here
        """
        self._s3_client = client or boto3.client("s3", region_name=region)

    def list_objects(self, bucket: str, prefix: str = "") -> list[ObjectSummary]:
        """
        List every object under a prefix.

        Args:
            bucket: Bucket name
            prefix: Key prefix ("" lists the whole bucket)

        Returns:
            list[ObjectSummary]: Objects in listing order

        Raises:
            ClientError: Listing failed (not a per-object error)
        """
        paginator = self._s3_client.get_paginator("list_objects_v2")
        summaries: list[ObjectSummary] = []
        for page in paginator.paginate(Bucket=bucket, Prefix=prefix):
            for obj in page.get("Contents", []):
                key = obj.get("Key")
                if key:
                    summaries.append(ObjectSummary(key=key, size=int(obj.get("Size") or 0)))
        return summaries

    def get_object(self, bucket: str, key: str) -> bytes:
        """
        Download object bytes.

        Args:
            bucket: Bucket name
            key: Object key

        Returns:
            bytes: Object body

        Raises:
            ObjectFetchError: Download failed
        """
        try:
            response = self._s3_client.get_object(Bucket=bucket, Key=key)
            return response["Body"].read()
        except (ClientError, BotoCoreError) as e:
            logger.warning(
                "%s:get_object - Download failed",
                __name__,
                extra={"bucket": bucket, "key": key, "error": str(e)},
            )
            raise ObjectFetchError(f"Failed to fetch object: {e}", key=key) from e
