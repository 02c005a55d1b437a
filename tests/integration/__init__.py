"""Integration tests for the relay API working as a system.

Coverage:
    - Relay endpoints through the real FastAPI app and ASGI transport
    - Request validation, configuration and upstream error mapping
    - Tag and structured document post-processing end to end

The upstream Messages API is replaced by an httpx MockTransport stub; no
network access or API key is required.
"""
