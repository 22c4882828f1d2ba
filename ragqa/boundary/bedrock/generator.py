"""
Bedrock answer generator.

Renders the grounded prompt, shapes the invoke_model payload for the
configured generation family and extracts the answer text from whichever
response shape the model returns.

Dependencies: boto3 (bedrock-runtime client), botocore, langchain_core
System role: Generative model adapter for the chat pipeline
"""

import json
import logging
from collections.abc import Callable
from typing import Any

from botocore.exceptions import BotoCoreError, ClientError

from ragqa.configs.runtime import GenerationConfig
from ragqa.core.chat.prompt import render_prompt
from ragqa.core.exceptions import EmptyAnswerError, GenerationError
from ragqa.core.model_family import GenerationFamily

logger = logging.getLogger(__name__)

ANTHROPIC_VERSION = "bedrock-2023-05-31"


def _messages_payload(prompt: str, config: GenerationConfig) -> dict[str, Any]:
    return {
        "max_tokens": config.max_tokens,
        "temperature": config.temperature,
        "messages": [{"role": "user", "content": prompt}],
    }


def _anthropic_payload(prompt: str, config: GenerationConfig) -> dict[str, Any]:
    return {"anthropic_version": ANTHROPIC_VERSION, **_messages_payload(prompt, config)}


def _llama_payload(prompt: str, config: GenerationConfig) -> dict[str, Any]:
    return {
        "prompt": prompt,
        "max_gen_len": config.max_tokens,
        "temperature": config.temperature,
    }


def _mistral_payload(prompt: str, config: GenerationConfig) -> dict[str, Any]:
    return {
        "prompt": f"<s>[INST] {prompt} [/INST]",
        "max_tokens": config.max_tokens,
        "temperature": config.temperature,
    }


def _titan_payload(prompt: str, config: GenerationConfig) -> dict[str, Any]:
    return {
        "inputText": prompt,
        "textGenerationConfig": {
            "maxTokenCount": config.max_tokens,
            "temperature": config.temperature,
        },
    }


PAYLOAD_BUILDERS: dict[GenerationFamily, Callable[[str, GenerationConfig], dict[str, Any]]] = {
    GenerationFamily.ANTHROPIC: _anthropic_payload,
    GenerationFamily.CHAT: _messages_payload,
    GenerationFamily.META_LLAMA: _llama_payload,
    GenerationFamily.MISTRAL: _mistral_payload,
    GenerationFamily.TITAN_TEXT: _titan_payload,
}


def _join_parts(parts: Any) -> str:
    if not isinstance(parts, list):
        return ""
    return "".join(
        p["text"] for p in parts if isinstance(p, dict) and isinstance(p.get("text"), str)
    )


def _first(items: Any) -> dict[str, Any]:
    if isinstance(items, list) and items and isinstance(items[0], dict):
        return items[0]
    return {}


def extract_answer_text(parsed: dict[str, Any]) -> str:
    """
    Pull the answer text out of a model response.

    Shapes are tried in order: Anthropic/Converse content parts, flat text
    fields (Llama, TGI, Titan), Titan results, Mistral outputs and finally
    OpenAI-style choices.

    Args:
        parsed: Decoded JSON response body

    Returns:
        str: Trimmed answer, "" when no shape matched
    """
    candidates = (
        lambda: _join_parts(parsed.get("content")),
        lambda: _join_parts(((parsed.get("output") or {}).get("message") or {}).get("content")),
        lambda: parsed.get("generation"),
        lambda: parsed.get("generated_text"),
        lambda: parsed.get("text"),
        lambda: parsed.get("outputText"),
        lambda: _first(parsed.get("results")).get("outputText"),
        lambda: _first(parsed.get("outputs")).get("text"),
        lambda: (_first(parsed.get("choices")).get("message") or {}).get("content"),
    )
    for candidate in candidates:
        value = candidate()
        if isinstance(value, str) and value.strip():
            return value.strip()
    return ""


class BedrockAnswerGenerator:
    """Generates grounded answers through bedrock-runtime invoke_model."""

    def __init__(self, runtime_client: Any, config: GenerationConfig) -> None:
        """
        Initialize generator.

        Args:
            runtime_client: boto3 bedrock-runtime client
            config: Resolved generation configuration
        """
        self._client = runtime_client
        self._config = config
        self._build_payload = PAYLOAD_BUILDERS[config.family]

    def generate(self, question: str, context: str) -> str:
        """
        Answer a question from the supplied context.

        Args:
            question: Sanitized question
            context: Assembled context block

        Returns:
            str: Non-empty answer text

        Raises:
            GenerationError: Bedrock call failed
            EmptyAnswerError: No response shape yielded text
        """
        payload = self._build_payload(render_prompt(question, context), self._config)
        try:
            response = self._client.invoke_model(
                modelId=self._config.model_id,
                contentType="application/json",
                accept="application/json",
                body=json.dumps(payload),
            )
            parsed = json.loads(response["body"].read())
        except (ClientError, BotoCoreError) as e:
            logger.error(
                "%s:generate - Bedrock invoke_model failed",
                __name__,
                extra={"model_id": self._config.model_id, "error": str(e)},
            )
            raise GenerationError(
                f"Generation request failed: {e}",
                {"model_id": self._config.model_id},
            ) from e

        answer = extract_answer_text(parsed if isinstance(parsed, dict) else {})
        if not answer:
            raise EmptyAnswerError(
                "Model returned empty response",
                {"model_id": self._config.model_id, "family": self._config.family.value},
            )
        return answer
