"""Document encoders keyed by document type.

The office formats are placeholders: they serialise the requested outline
as JSON until a real encoder is registered for the type.
"""

import json
import re
from abc import ABC, abstractmethod
from typing import Any

PPTX_MIME_TYPE = "application/vnd.openxmlformats-officedocument.presentationml.presentation"
DOCX_MIME_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
XLSX_MIME_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
TEXT_MIME_TYPE = "text/plain"

_UNSAFE_FILENAME_CHARS = re.compile(r"[^a-z0-9]", re.IGNORECASE)


class DocumentGenerationError(Exception):
    """Raised when a document description cannot be encoded."""

    pass


class DocumentEncoder(ABC):
    """Turns a structured document description into file bytes."""

    mime_type: str

    @abstractmethod
    def filename(self, document: dict[str, Any]) -> str:
        """Return the download name for the document."""

    @abstractmethod
    def encode(self, document: dict[str, Any]) -> bytes:
        """Return the file bytes for the document.

        Raises:
            DocumentGenerationError: If the description is unusable.
        """


class JsonOutlineEncoder(DocumentEncoder):
    """Placeholder encoder that writes the document outline as JSON.

    Args:
        extension: File extension without the dot.
        mime_type: MIME type announced for the file.
        body_key: Field holding the body (``slides``, ``sections``, ``sheets``).
        fallback_stem: Filename used when the document has no usable title.
    """

    def __init__(
        self, extension: str, mime_type: str, body_key: str, fallback_stem: str
    ) -> None:
        self.extension = extension
        self.mime_type = mime_type
        self.body_key = body_key
        self.fallback_stem = fallback_stem

    def filename(self, document: dict[str, Any]) -> str:
        title = document.get("title")
        stem = _UNSAFE_FILENAME_CHARS.sub("_", title) if isinstance(title, str) else ""
        return f"{stem or self.fallback_stem}.{self.extension}"

    def encode(self, document: dict[str, Any]) -> bytes:
        outline = {
            "title": document.get("title"),
            self.body_key: document.get(self.body_key),
            "note": (
                f"To enable {self.extension.upper()} generation, register a real "
                f"encoder for '{self.extension}' documents"
            ),
        }
        return json.dumps(outline, indent=2).encode("utf-8")


class TextFileEncoder(DocumentEncoder):
    """Writes the ``content`` field verbatim as UTF-8 text."""

    mime_type = TEXT_MIME_TYPE

    def filename(self, document: dict[str, Any]) -> str:
        return document.get("filename") or "file.txt"

    def encode(self, document: dict[str, Any]) -> bytes:
        content = document.get("content")
        if not isinstance(content, str):
            raise DocumentGenerationError("Text document has no string 'content' field")
        return content.encode("utf-8")


ENCODERS: dict[str, DocumentEncoder] = {
    "pptx": JsonOutlineEncoder("pptx", PPTX_MIME_TYPE, "slides", "presentation"),
    "docx": JsonOutlineEncoder("docx", DOCX_MIME_TYPE, "sections", "document"),
    "xlsx": JsonOutlineEncoder("xlsx", XLSX_MIME_TYPE, "sheets", "spreadsheet"),
    "text": TextFileEncoder(),
}


def get_encoder(document_type: str) -> DocumentEncoder | None:
    """Look up the encoder registered for a document type."""
    return ENCODERS.get(document_type)
