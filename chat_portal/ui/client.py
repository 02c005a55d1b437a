"""HTTP client the chat page uses to reach the relay."""

import os

import httpx

from chat_portal.models.schemas import ChatRequest, ChatResponse

API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:8000")
CHAT_ENDPOINT = "/api/chat"
DOCUMENT_ENDPOINT = "/api/chat-advanced"


class RelayClientError(Exception):
    """Raised when the relay cannot be reached or answers unusably."""

    pass


async def send_chat(
    request: ChatRequest,
    endpoint: str = CHAT_ENDPOINT,
    base_url: str = API_BASE_URL,
    transport: httpx.AsyncBaseTransport | None = None,
) -> ChatResponse:
    """Post the conversation to the relay and parse its reply.

    Raises:
        RelayClientError: On network failure, error status or a malformed body.
    """
    async with httpx.AsyncClient(
        base_url=base_url, timeout=None, transport=transport
    ) as client:
        try:
            response = await client.post(
                endpoint,
                json=request.model_dump(mode="json", by_alias=True, exclude_none=True),
            )
            response.raise_for_status()
            return ChatResponse.model_validate(response.json())
        except httpx.HTTPStatusError as e:
            raise RelayClientError(f"HTTP {e.response.status_code}") from e
        except httpx.RequestError as e:
            raise RelayClientError(f"Connection failed: {e}") from e
        except ValueError as e:
            # JSONDecodeError and pydantic.ValidationError
            raise RelayClientError(f"Invalid relay response: {e}") from e
