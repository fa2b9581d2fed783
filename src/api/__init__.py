"""FastAPI endpoints for the chat relay.

Endpoints:
    - WS /ws: Bidirectional JSON event channel
    - GET /health: Service health status
    - GET /history: Messages replayed to new connections
    - GET /*: Static assets, unknown paths fall back to index.html
"""

from src.api.app import create_app

app = create_app()

__all__ = ["app", "create_app"]
