"""Chat Portal - browser chat client and serverless-style relay to an LLM API.

Combines FastAPI for the relay endpoints, httpx for the upstream call,
NiceGUI for the chat interface, and Pydantic for data validation.

Components:
    - api: HTTP relay endpoints
    - llm: Upstream Messages API configuration and call
    - parsing: File/artifact tags and structured document replies
    - ui: Web interface for chat interactions
    - models: Request/response schemas
"""

__version__ = "0.1.0"
