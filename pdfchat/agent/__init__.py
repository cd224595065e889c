"""Prompt composition and completion relay.

Responsibilities:
    - Provider configuration loaded from the environment
    - System prompt selection (general or document-grounded)
    - Streaming completion calls through Agno with a time budget

Maintains clean separation from the HTTP layer.
"""

from pdfchat.agent.config import RelayConfig, get_relay_config
from pdfchat.agent.prompts import build_system_prompt, compose_messages
from pdfchat.agent.relay import RelayService, get_relay_service

__all__ = [
    "RelayConfig",
    "RelayService",
    "build_system_prompt",
    "compose_messages",
    "get_relay_config",
    "get_relay_service",
]
