"""Chat pipeline: guardrails, retrieval, context assembly and generation."""
