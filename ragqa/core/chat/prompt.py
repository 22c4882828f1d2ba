"""
Grounded answer prompt.

Defines the prompt template that restricts the model to the retrieved
context and fixes the refusal wording.

Dependencies: langchain_core.prompts
System role: Prompt template for answer generation
"""

from langchain_core.prompts import PromptTemplate

REFUSAL_TEXT = "I don't know based on the provided documents."

GROUNDED_ANSWER_TEMPLATE = """You are a document question-answering assistant.
You MUST answer ONLY using the Context.
If Context does not contain the answer, reply exactly: "{refusal}"

Context:
{context}

Question:
{question}

Answer (cite document titles when relevant):"""

GROUNDED_ANSWER_PROMPT = PromptTemplate.from_template(GROUNDED_ANSWER_TEMPLATE).partial(
    refusal=REFUSAL_TEXT
)


def render_prompt(question: str, context: str) -> str:
    """
    Render the grounded prompt for one question.

    Args:
        question: Sanitized user question
        context: Assembled context block (may be empty)

    Returns:
        str: Prompt text
    """
    return GROUNDED_ANSWER_PROMPT.format(question=question, context=context)
