"""Extraction of ``<file>`` and ``<artifact>`` tags from model replies.

Matching is regex based, non-greedy and non-recursive. Nested or unclosed
tags give undefined split boundaries.
"""

import logging
import re

from chat_portal.models.schemas import Artifact, ChatResponse, GeneratedFile

logger = logging.getLogger(__name__)

FILE_TAG_PATTERN = re.compile(
    r'<file\s+name="([^"]*)"\s+type="([^"]*)"\s*>([\s\S]*?)</file>'
)
ARTIFACT_TAG_PATTERN = re.compile(
    r'<artifact\s+title="([^"]*)"(?:\s+language="([^"]*)")?\s*>([\s\S]*?)</artifact>'
)


def extract_files(text: str) -> list[GeneratedFile]:
    """Collect every file tag in order of appearance."""
    return [
        GeneratedFile(name=name, mime_type=mime_type, data=data.strip())
        for name, mime_type, data in FILE_TAG_PATTERN.findall(text)
    ]


def extract_artifacts(text: str) -> list[Artifact]:
    """Collect every artifact tag in order of appearance."""
    return [
        Artifact(title=title, language=language or "text", content=content.strip("\n"))
        for title, language, content in ARTIFACT_TAG_PATTERN.findall(text)
    ]


def extract_tagged_content(text: str) -> ChatResponse:
    """Split a model reply into conversational text, files and artifacts.

    Args:
        text: Raw reply text from the upstream model.

    Returns:
        ChatResponse whose content has all matched tags removed. A reply
        without tags is returned unchanged with no files or artifacts.
    """
    files = extract_files(text)
    artifacts = extract_artifacts(text)

    if not files and not artifacts:
        return ChatResponse(content=text)

    cleaned = FILE_TAG_PATTERN.sub("", text)
    cleaned = ARTIFACT_TAG_PATTERN.sub("", cleaned).strip()

    logger.info(f"Extracted {len(files)} files and {len(artifacts)} artifacts")

    return ChatResponse(
        content=cleaned,
        files=files or None,
        artifacts=artifacts or None,
    )
