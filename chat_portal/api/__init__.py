"""FastAPI endpoints for the chat portal.

Stateless relay between the browser and the upstream LLM API.

Endpoints:
    - GET /health: Service health status
    - POST /api/chat: Chat relay with file and artifact tag extraction
    - POST /api/chat-advanced: Chat relay with structured document generation
"""

from chat_portal.api.app import app, create_app

__all__ = ["app", "create_app"]
