"""Test package for PDF Chat.

Structure:
    - unit/: Individual function and class tests
    - integration/: Relay endpoint and client flow over ASGI transport

PDF fixtures are built in memory by ``conftest.build_pdf``.
Leverages pytest with pytest-check for soft assertions.
"""
