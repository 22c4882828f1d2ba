"""
Bedrock runtime client factory.

Dependencies: boto3, botocore
System role: Shared bedrock-runtime client for embedding, generation and guardrails
"""

import boto3
from botocore.config import Config

from ragqa.configs.bedrock import BedrockSettings


def create_bedrock_runtime_client(settings: BedrockSettings):
    """
    Create a bedrock-runtime client with fixed timeouts and retries disabled.

    Args:
        settings: Bedrock settings (region, timeouts)

    Returns:
        botocore.client.BaseClient: bedrock-runtime client
    """
    config = Config(
        connect_timeout=settings.connect_timeout,
        read_timeout=settings.read_timeout,
        retries={"max_attempts": 1, "mode": "standard"},
    )
    return boto3.client("bedrock-runtime", region_name=settings.region, config=config)
