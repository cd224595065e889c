"""PDF Chat - streaming LLM chat, optionally grounded in an uploaded PDF.

Combines FastAPI for the streaming relay, Agno for provider calls,
NiceGUI for the chat view, pypdf for text extraction and Pydantic for
data validation.

Components:
    - api: ``/api/chat`` relay endpoint and data stream encoding
    - agent: Provider configuration, system prompts, streaming completions
    - chat: Client-side conversation state machine and relay client
    - parsing: PDF text extraction
    - ui: Web interface for chat interactions
    - models: Schemas and error types
"""

__version__ = "0.1.0"
