"""Chat relay endpoints.

Forwards the browser conversation upstream and post-processes the reply.

Two protocols are served:
    - POST /api/chat: replies may carry <file> and <artifact> tags
    - POST /api/chat-advanced: replies may be a structured JSON document
"""

import logging
from collections.abc import Callable

from fastapi import APIRouter, HTTPException, Response, status
from pydantic import ValidationError

from chat_portal.llm.prompts import DOCUMENT_PROMPT, FILE_TAG_PROMPT
from chat_portal.llm.relay_service import RelayService, UpstreamError, get_relay_service
from chat_portal.models.schemas import ChatRequest, ChatResponse
from chat_portal.parsing.documents import build_document_response
from chat_portal.parsing.tags import extract_tagged_content

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["chat"])

MISSING_KEY_DETAIL = (
    "API key not configured. Please add ANTHROPIC_API_KEY to your environment variables."
)
FALLBACK_ERROR_DETAIL = "Failed to get response from Claude"


def _require_relay_service() -> RelayService:
    """Return the relay service, or fail with 500 if the key is missing.

    Raises:
        HTTPException: 500 if ANTHROPIC_API_KEY is not configured.
    """
    try:
        return get_relay_service()
    except ValidationError as e:
        logger.error("ANTHROPIC_API_KEY is not configured")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=MISSING_KEY_DETAIL,
        ) from e


async def _relay(
    request: ChatRequest,
    system: str,
    max_tokens: Callable[[RelayService], int],
    postprocess: Callable[[str], ChatResponse],
) -> ChatResponse:
    """Run one upstream call and post-process the reply.

    Raises:
        HTTPException: upstream status on upstream failure, 500 otherwise.
    """
    service = _require_relay_service()

    try:
        reply = await service.complete(
            request.messages, system=system, max_tokens=max_tokens(service)
        )
        return postprocess(reply)
    except UpstreamError as e:
        raise HTTPException(
            status_code=e.status_code,
            detail=f"API request failed: {e.reason}",
        ) from e
    except Exception as e:
        logger.exception(f"Relay error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e) or FALLBACK_ERROR_DETAIL,
        ) from e


@router.post("/chat", response_model=ChatResponse, response_model_exclude_none=True)
async def chat(request: ChatRequest) -> ChatResponse:
    """Relay a conversation and extract tagged files and artifacts.

    Args:
        request: Full conversation history, newest message last.

    Returns:
        ChatResponse with tag-free content plus any files and artifacts.

    Raises:
        400: Invalid request body.
        500: Missing API key or internal error.
        Upstream status: The upstream API rejected the call.
    """
    return await _relay(
        request,
        system=FILE_TAG_PROMPT,
        max_tokens=lambda service: service.config.max_tokens,
        postprocess=extract_tagged_content,
    )


@router.post(
    "/chat-advanced", response_model=ChatResponse, response_model_exclude_none=True
)
async def chat_advanced(request: ChatRequest) -> ChatResponse:
    """Relay a conversation and generate a document when the reply asks for one.

    Args:
        request: Full conversation history, newest message last.

    Returns:
        ChatResponse with the explanation and at most one generated file.

    Raises:
        400: Invalid request body.
        500: Missing API key or internal error.
        Upstream status: The upstream API rejected the call.
    """
    return await _relay(
        request,
        system=DOCUMENT_PROMPT,
        max_tokens=lambda service: service.config.document_max_tokens,
        postprocess=build_document_response,
    )


@router.options("/chat")
@router.options("/chat-advanced")
async def chat_options() -> Response:
    """Answer OPTIONS, preflights included, with an empty 200."""
    return Response(status_code=status.HTTP_200_OK)
