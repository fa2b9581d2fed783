"""Test package for the group chat relay.

Unit tests cover isolated logic; integration tests drive the real app over
HTTP and WebSocket.

Structure:
    - unit/: Individual function and class tests
    - integration/: End-to-end workflow tests

Leverages pytest with pytest-check for soft assertions.
"""
