"""Integration tests for components working together.

Coverage:
    - /api/chat streaming, error mapping and input validation
    - RelayClient and Conversation against the running app
    - Live provider call (when GOOGLE_GENERATIVE_AI_API_KEY is set)
"""
