"""Test package for Chat Portal.

Structure:
    - unit/: Individual function and class tests
    - integration/: Relay endpoint tests through the ASGI app

Leverages pytest with pytest-check for soft assertions.
"""
