"""System prompt templates and message composition for the relay."""

from collections.abc import Sequence

from pdfchat.models.schemas import ChatMessage, Role

GENERAL_SYSTEM_PROMPT = """\
You are a helpful, knowledgeable, and friendly AI assistant. Provide comprehensive, \
detailed, and well-structured responses that fully address the user's questions.

Formatting Guidelines:
- Provide thorough and detailed answers - don't be overly brief
- Use **bold** for section headings, important topics, key concepts, and terms that need emphasis
- Use simple bullet points with hyphens (-) for lists
- Use numbered lists (1., 2., 3.) when order matters
- Use *italics* occasionally for subtle emphasis or foreign terms
- Make your responses comprehensive and informative while using proper Markdown formatting
"""

DOCUMENT_SYSTEM_PROMPT = """\
You are a helpful AI assistant specialized in document analysis. You have access to \
the content of a PDF document that the user has uploaded.

PDF Document Content:
{document_text}

Instructions:
- Provide detailed, comprehensive answers based on the PDF content when relevant
- Reference specific sections, pages, or quotes from the PDF when applicable
- If a question cannot be fully answered from the PDF, clearly state this and provide \
additional helpful context from your general knowledge
- Be thorough in your analysis and explanations - users want detailed insights

Formatting Guidelines:
- Use **bold** for section headings, key topics from the PDF, important concepts, and terms \
that need emphasis
- Use simple bullet points with hyphens (-) for lists
- Use numbered lists (1., 2., 3.) when showing steps or ordered information
- Use *italics* occasionally for document titles, subtle emphasis, or technical terms
"""


def build_system_prompt(document_text: str | None = None) -> str:
    """Pick exactly one system template.

    Args:
        document_text: Extracted document text, if any.

    Returns:
        The document-grounded prompt when ``document_text`` is non-empty,
        otherwise the general-assistant prompt.
    """
    if document_text:
        return DOCUMENT_SYSTEM_PROMPT.format(document_text=document_text)
    return GENERAL_SYSTEM_PROMPT


def compose_messages(
    messages: Sequence[ChatMessage],
    document_text: str | None = None,
    history_limit: int | None = None,
) -> list[ChatMessage]:
    """Prepend a freshly built system message to the conversation.

    The caller's sequence is copied, never mutated or reordered.

    Args:
        messages: Conversation so far, oldest first.
        document_text: Extracted document text, if any.
        history_limit: Keep only the most recent N messages when set.

    Returns:
        New list starting with exactly one system message.
    """
    history = list(messages)
    if history_limit is not None:
        history = history[-history_limit:]
    system = ChatMessage(role=Role.SYSTEM, content=build_system_prompt(document_text))
    return [system, *history]
