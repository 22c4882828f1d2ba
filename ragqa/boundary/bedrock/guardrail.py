"""
Bedrock guardrail filter.

Applies a configured guardrail to user input or model output and reports
whether the content was blocked along with the text to show.

Dependencies: boto3 (bedrock-runtime client), botocore
System role: Content-safety adapter for the chat pipeline
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

from botocore.exceptions import BotoCoreError, ClientError

from ragqa.configs.runtime import GuardrailConfig
from ragqa.core.exceptions import GuardrailError

logger = logging.getLogger(__name__)


class GuardrailSource(str, Enum):
    """Direction of the guarded content."""

    INPUT = "INPUT"
    OUTPUT = "OUTPUT"


@dataclass(frozen=True)
class GuardrailVerdict:
    """Guardrail decision with the text to use downstream."""

    blocked: bool
    text: str
    action: str | None = None


def _first_output_text(outputs: list[dict[str, Any]]) -> str | None:
    if not outputs:
        return None
    text = outputs[0].get("text")
    if isinstance(text, dict):
        text = text.get("text")
    return text if isinstance(text, str) and text else None


def _has_blocking_assessment(node: Any) -> bool:
    """Search assessment structures for any policy action of BLOCKED."""
    if isinstance(node, dict):
        action = node.get("action")
        if isinstance(action, str) and action.upper() == "BLOCKED":
            return True
        return any(_has_blocking_assessment(v) for v in node.values())
    if isinstance(node, list):
        return any(_has_blocking_assessment(v) for v in node)
    return False


class BedrockGuardrailFilter:
    """Runs bedrock-runtime apply_guardrail."""

    def __init__(self, runtime_client: Any, config: GuardrailConfig) -> None:
        self._client = runtime_client
        self._config = config

    def apply(self, source: GuardrailSource, text: str) -> GuardrailVerdict:
        """
        Apply the guardrail to one piece of text.

        Args:
            source: INPUT for the question, OUTPUT for the answer
            text: Content to check

        Returns:
            GuardrailVerdict: blocked flag, sanitized (or original) text, action

        Raises:
            GuardrailError: Bedrock call failed
        """
        try:
            response = self._client.apply_guardrail(
                guardrailIdentifier=self._config.identifier,
                guardrailVersion=self._config.version,
                source=GuardrailSource(source).value,
                content=[{"text": {"text": text}}],
            )
        except (ClientError, BotoCoreError) as e:
            logger.error(
                "%s:apply - Bedrock apply_guardrail failed",
                __name__,
                extra={"source": str(source), "error": str(e)},
            )
            raise GuardrailError(
                f"Guardrail request failed: {e}",
                {"guardrail_id": self._config.identifier, "source": GuardrailSource(source).value},
            ) from e

        action = response.get("action")
        normalized = str(action).upper() if action else ""
        blocked = normalized == "BLOCKED" or (
            normalized == "GUARDRAIL_INTERVENED"
            and _has_blocking_assessment(response.get("assessments") or [])
        )
        output_text = _first_output_text(response.get("outputs") or [])

        if blocked:
            logger.info(
                "%s:apply - Guardrail blocked content",
                __name__,
                extra={"source": GuardrailSource(source).value, "action": action},
            )
        return GuardrailVerdict(blocked=blocked, text=output_text or text, action=action)
