"""
Amazon Bedrock configuration settings.

Model identifiers, embedding dimensionality and client timeouts for the
embedding, generation and guardrail calls.

Dependencies: pydantic, pydantic_settings
System role: Bedrock runtime configuration
"""

from pydantic import AliasChoices, Field

from ragqa.configs.base import BaseSettings, settings_config


class BedrockSettings(BaseSettings):
    """Bedrock model and client configuration."""

    model_config = settings_config("BEDROCK_", populate_by_name=True)

    region: str | None = Field(
        default=None,
        validation_alias=AliasChoices("BEDROCK_REGION", "AWS_REGION"),
        description="AWS region for bedrock-runtime (falls back to the boto3 default chain)",
    )
    model_id: str = Field(default="", description="Generative model identifier")
    embed_model_id: str = Field(
        default="amazon.titan-embed-text-v1",
        description="Embedding model identifier",
    )
    embed_dim: int = Field(
        default=1536,
        validation_alias=AliasChoices("BEDROCK_EMBED_DIM", "EMBED_DIM"),
        description="Requested embedding dimensionality",
    )
    embed_normalize: bool = Field(
        default=True,
        validation_alias=AliasChoices("BEDROCK_EMBED_NORMALIZE", "EMBED_NORMALIZE"),
        description="Ask the embedding model for unit-length vectors (where supported)",
    )

    max_tokens: int = Field(default=600, description="Maximum tokens in a generated answer")
    temperature: float = Field(default=0.2, description="Generation temperature")

    connect_timeout: int = Field(default=10, description="Socket connect timeout in seconds")
    read_timeout: int = Field(default=90, description="Socket read timeout in seconds")


class GuardrailSettings(BaseSettings):
    """Bedrock Guardrails configuration."""

    model_config = settings_config("GUARDRAIL_")

    id: str = Field(default="", description="Guardrail identifier (GUARDRAIL_ID)")
    version: str = Field(default="1", description="Guardrail version (GUARDRAIL_VERSION)")
