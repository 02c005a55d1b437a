"""Unit tests for individual components in isolation.

Coverage:
    - llm/: Configuration, message formatting and the upstream call
    - parsing/: Tag extraction, document instructions and encoders
    - ui/: Session state transitions, attachment encoding, relay client

Uses stub transports for HTTP. Leverages pytest-check for multiple
assertions per test.
"""
