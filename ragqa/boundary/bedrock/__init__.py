"""Amazon Bedrock adapters: embeddings, guardrails and answer generation."""

from ragqa.boundary.bedrock.client import create_bedrock_runtime_client
from ragqa.boundary.bedrock.embeddings import BedrockEmbeddingClient
from ragqa.boundary.bedrock.generator import BedrockAnswerGenerator
from ragqa.boundary.bedrock.guardrail import BedrockGuardrailFilter, GuardrailSource, GuardrailVerdict

__all__ = [
    "BedrockAnswerGenerator",
    "BedrockEmbeddingClient",
    "BedrockGuardrailFilter",
    "GuardrailSource",
    "GuardrailVerdict",
    "create_bedrock_runtime_client",
]
