"""Post-processing of upstream model replies.

Turns raw reply text into what the chat client shows and offers for download.

Responsibilities:
    - <file> and <artifact> tag extraction for the chat endpoint
    - Structured JSON document instructions for the document endpoint
    - Document encoders keyed by document type

The two protocols are independent; each endpoint applies exactly one.
"""

from chat_portal.parsing.documents import (
    build_document_response,
    parse_document_instruction,
)
from chat_portal.parsing.encoders import (
    DocumentEncoder,
    DocumentGenerationError,
    get_encoder,
)
from chat_portal.parsing.tags import extract_tagged_content

__all__ = [
    "DocumentEncoder",
    "DocumentGenerationError",
    "build_document_response",
    "extract_tagged_content",
    "get_encoder",
    "parse_document_instruction",
]
