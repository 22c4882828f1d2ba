"""
Chat domain models and schemas.

Request/response schemas for chat operations.

Dependencies: pydantic
System role: Chat API contracts
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ragqa.models.citation import Citation


class ChatRequest(BaseModel):
    """Request schema for a grounded question."""

    model_config = ConfigDict(populate_by_name=True)

    question: str = Field(default="", description="User question")
    top_k: int | None = Field(
        default=None,
        alias="topK",
        description="Chunks to retrieve (clamped to 1..20)",
    )
    max_context_chars: int | None = Field(
        default=None,
        alias="maxContextChars",
        description="Context budget in characters (clamped to 1000..50000)",
    )

    @field_validator("question", mode="before")
    @classmethod
    def _question_default(cls, value):
        return value or ""


class ChatResult(BaseModel):
    """Answer with its citations and guardrail flags."""

    answer: str
    citations: list[Citation] = Field(default_factory=list)
    blocked_input: bool = False
    blocked_output: bool = False
