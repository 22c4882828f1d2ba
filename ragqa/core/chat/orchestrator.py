"""
Chat pipeline orchestrator.

Guards the question, retrieves similar chunks, assembles a bounded context,
generates a grounded answer and guards the answer.

A blocked question returns before any embedding, retrieval or generation
call. A blocked answer is still returned (sanitized) but without citations.

Dependencies: ragqa.boundary (Bedrock, vector store), ragqa.core
System role: Chat orchestration (coordinates only)
"""

import logging

from ragqa.boundary.bedrock.embeddings import BedrockEmbeddingClient
from ragqa.boundary.bedrock.generator import BedrockAnswerGenerator
from ragqa.boundary.bedrock.guardrail import BedrockGuardrailFilter, GuardrailSource
from ragqa.boundary.db.vector_store import VectorStoreGateway
from ragqa.configs.runtime import RuntimeConfig
from ragqa.core.bounds import MAX_CONTEXT_CHARS_RANGE, TOP_K_RANGE, clamp
from ragqa.core.exceptions import ValidationError
from ragqa.models.chat import ChatRequest, ChatResult
from ragqa.models.citation import Citation, SearchHit
from ragqa.observability.log_utils import vector_preview

logger = logging.getLogger(__name__)

CONTEXT_SEPARATOR = "\n\n---\n\n"


def assemble_context(hits: list[SearchHit], max_chars: int) -> tuple[str, list[Citation]]:
    """
    Concatenate hit contents in order until the next one would overflow.

    Hits without content are skipped. Assembly stops at the first hit whose
    content (plus separator) would push the context past max_chars.

    Args:
        hits: Search hits in retrieval order
        max_chars: Character budget

    Returns:
        tuple[str, list[Citation]]: Context and one citation per included hit
    """
    context = ""
    citations: list[Citation] = []
    for hit in hits:
        if not hit.content:
            continue
        separator = CONTEXT_SEPARATOR if context else ""
        if len(context) + len(separator) + len(hit.content) > max_chars:
            break
        context += separator + hit.content
        citations.append(
            Citation(doc_id=hit.doc_id, chunk_id=hit.chunk_id, title=hit.title, score=hit.score)
        )
    return context, citations


class ChatOrchestrator:
    """Orchestrate chat: guard -> embed -> retrieve -> generate -> guard."""

    def __init__(
        self,
        config: RuntimeConfig,
        guardrail: BedrockGuardrailFilter,
        embedder: BedrockEmbeddingClient,
        gateway: VectorStoreGateway,
        generator: BedrockAnswerGenerator,
    ) -> None:
        self._config = config
        self._guardrail = guardrail
        self._embedder = embedder
        self._gateway = gateway
        self._generator = generator

    def answer(self, request: ChatRequest) -> ChatResult:
        """
        Answer one question from the stored documents.

        Args:
            request: Question with optional top_k and context budget

        Returns:
            ChatResult: Answer, citations and guardrail flags

        Raises:
            ValidationError: Question missing or blank
            EmbeddingError: Question could not be embedded
            GuardrailError: Guardrail call failed
            GenerationError: Model call failed or returned nothing
        """
        question = request.question.strip()
        if not question:
            raise ValidationError("Missing question", field="question")
        top_k = clamp(request.top_k or self._config.default_top_k, *TOP_K_RANGE)
        max_chars = clamp(
            request.max_context_chars or self._config.max_context_chars,
            *MAX_CONTEXT_CHARS_RANGE,
        )

        verdict_in = self._guardrail.apply(GuardrailSource.INPUT, question)
        if verdict_in.blocked:
            logger.info(
                "%s:answer - Question blocked by guardrail",
                __name__,
                extra={"action": verdict_in.action},
            )
            return ChatResult(answer=verdict_in.text, citations=[], blocked_input=True)

        sanitized = verdict_in.text
        query_vector = self._embedder.embed(sanitized)
        logger.debug(
            "%s:answer - query vector %s",
            __name__,
            vector_preview(query_vector),
        )

        with self._gateway.reader() as store:
            hits = store.similarity_search(query_vector, top_k)

        context, citations = assemble_context(hits, max_chars)
        logger.info(
            "%s:answer - chat_retrieve",
            __name__,
            extra={
                "top_k": top_k,
                "hits": len(hits),
                "cited": len(citations),
                "context_chars": len(context),
            },
        )

        raw_answer = self._generator.generate(sanitized, context)
        verdict_out = self._guardrail.apply(GuardrailSource.OUTPUT, raw_answer)
        return ChatResult(
            answer=verdict_out.text,
            citations=[] if verdict_out.blocked else citations,
            blocked_output=verdict_out.blocked,
        )
