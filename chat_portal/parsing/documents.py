"""Structured document instructions embedded in model replies.

The document endpoint asks the model to answer document requests with a JSON
object keyed by ``type``. This module finds that object and turns it into a
downloadable file.
"""

import base64
import json
import logging
import re
from typing import Any

from chat_portal.models.schemas import ChatResponse, GeneratedFile
from chat_portal.parsing.encoders import ENCODERS, get_encoder

logger = logging.getLogger(__name__)

JSON_FENCE_PATTERN = re.compile(r"```json\s*([\s\S]*?)\s*```")
ANY_FENCE_PATTERN = re.compile(r"```\s*([\s\S]*?)\s*```")

DEFAULT_EXPLANATION = "I've created your document. Click the download button below."


def parse_document_instruction(text: str) -> dict[str, Any] | None:
    """Find a structured document instruction in a reply.

    A fenced code block is unwrapped first (``json`` fences take priority).
    Without a fence, the whole reply is parsed when it starts with ``{``.

    Args:
        text: Raw reply text.

    Returns:
        The instruction, or None if the reply is not valid JSON or its
        ``type`` has no registered encoder.
    """
    match = JSON_FENCE_PATTERN.search(text) or ANY_FENCE_PATTERN.search(text)
    if match:
        candidate = match.group(1)
    elif text.strip().startswith("{"):
        candidate = text
    else:
        return None

    try:
        document = json.loads(candidate)
    except json.JSONDecodeError:
        return None

    if not isinstance(document, dict):
        return None
    document_type = document.get("type")
    if not isinstance(document_type, str) or document_type not in ENCODERS:
        return None
    return document


def generate_file(document: dict[str, Any]) -> GeneratedFile:
    """Encode a document instruction into a GeneratedFile.

    Raises:
        DocumentGenerationError: If the encoder rejects the description.
    """
    encoder = get_encoder(document["type"])
    payload = encoder.encode(document)
    return GeneratedFile(
        name=encoder.filename(document),
        mime_type=encoder.mime_type,
        data=base64.b64encode(payload).decode("ascii"),
    )


def build_document_response(text: str) -> ChatResponse:
    """Turn a reply into a ChatResponse, generating a file when instructed.

    If generation fails, no file is returned and the content explains the
    failure followed by the raw instruction.

    Args:
        text: Raw reply text from the upstream model.

    Returns:
        ChatResponse carrying at most one generated file.
    """
    document = parse_document_instruction(text)
    if document is None:
        return ChatResponse(content=text)

    try:
        generated = generate_file(document)
    except Exception as e:
        logger.error(f"Document generation error for {document['type']}: {e}")
        return ChatResponse(
            content=(
                "I created the document structure, but there was an error "
                f"generating the file: {e}. Here's the data structure:\n\n"
                f"{json.dumps(document, indent=2)}"
            )
        )

    logger.info(f"Generated {document['type']} file: {generated.name}")
    explanation = document.get("explanation")
    if not isinstance(explanation, str) or not explanation:
        explanation = DEFAULT_EXPLANATION
    return ChatResponse(
        content=explanation,
        files=[generated],
    )
