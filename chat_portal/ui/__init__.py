"""NiceGUI interface - thin visualization layer for chat interactions.

Responsibilities:
    - Chat message display with markdown, downloads and code artifacts
    - Multi-file attachment upload, encoded to base64 before sending
    - Explicit session state, one writer per page
    - Clearing the conversation

Contains minimal business logic. Delegates all model calls to the relay API.
"""
