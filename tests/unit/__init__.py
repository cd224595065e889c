"""Unit tests for individual components in isolation.

Coverage:
    - agent/: Relay configuration, prompt composition and the streaming relay
    - parsing/: PDF text extraction
    - chat/: Conversation state machine

Provider models are patched; no network access.
"""
