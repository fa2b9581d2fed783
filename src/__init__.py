"""Group Chat - real-time relay with bounded history replay.

Combines FastAPI for the WebSocket relay and HTTP surface, websockets for
the client session, NiceGUI for the chat page, and Pydantic for the wire
protocol and configuration.

Components:
    - api: /ws relay endpoint, health check, static asset root
    - relay: connection registry, history buffer, message relay
    - client: reconnecting chat session
    - ui: web interface for chat interactions
    - models: wire events and response schemas
"""

__version__ = "0.1.0"
