"""Decoding of multimodal generation responses.

A response from the generation service is reduced to an ordered tuple of
segments, each either :class:`InlineData` (image bytes plus media type) or
:class:`Text`. :func:`select_image` then applies a fixed precedence:

1. the first inline-data segment with non-empty bytes is the result;
2. otherwise any text (segment text, or the response's top-level summary)
   becomes a :class:`~retouch.core.errors.TextOnlyResponseError`;
3. otherwise the request produced nothing usable and
   :class:`~retouch.core.errors.NoImageError` is raised.
"""

from __future__ import annotations

import base64
import binascii
import logging
from dataclasses import dataclass, field
from typing import Any

from .encoding import ImagePayload
from .errors import EDIT_FAILED_PREFIX, GenerationError, NoImageError, TextOnlyResponseError

logger = logging.getLogger(__name__)

DEFAULT_RESULT_MEDIA_TYPE = "image/png"


@dataclass(frozen=True)
class InlineData:
    data: bytes = field(repr=False)
    media_type: str


@dataclass(frozen=True)
class Text:
    text: str


Segment = InlineData | Text


def _inline_bytes(raw: Any) -> bytes:
    # The SDK hands back bytes; REST-shaped payloads carry base64 text.
    if isinstance(raw, str):
        try:
            return base64.b64decode(raw, validate=True)
        except (binascii.Error, ValueError) as e:
            raise GenerationError(f"{EDIT_FAILED_PREFIX}Malformed image data in response") from e
    return bytes(raw)


def segments_from_response(response: Any) -> tuple[Segment, ...]:
    """Convert the first candidate's content parts into segments.

    Parts that carry neither inline data nor text (function calls, thoughts
    without text, etc.) are skipped.

    Args:
        response: ``GenerateContentResponse`` or any object of the same shape

    Returns:
        Segments in response order (empty if there is no candidate content)
    """
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return ()

    content = getattr(candidates[0], "content", None)
    parts = getattr(content, "parts", None) or []

    segments: list[Segment] = []
    for part in parts:
        inline = getattr(part, "inline_data", None)
        if inline is not None and getattr(inline, "data", None):
            segments.append(
                InlineData(
                    data=_inline_bytes(inline.data),
                    media_type=getattr(inline, "mime_type", None) or DEFAULT_RESULT_MEDIA_TYPE,
                )
            )
            continue
        text = getattr(part, "text", None)
        if text:
            segments.append(Text(text=text))
    return tuple(segments)


def block_reason(response: Any) -> str | None:
    """Return the prompt-feedback block reason of a response, if any."""
    feedback = getattr(response, "prompt_feedback", None)
    reason = getattr(feedback, "block_reason", None)
    if reason is None:
        return None
    # Enum members render as their value
    return str(getattr(reason, "value", reason))


def select_image(segments: tuple[Segment, ...], summary: str | None = None) -> ImagePayload:
    """Pick the edited image out of decoded response segments.

    Args:
        segments: Decoded segments in response order
        summary: Top-level text of the response, used when no text segment exists

    Returns:
        Payload of the first inline-data segment

    Raises:
        TextOnlyResponseError: If the response only contains text
        NoImageError: If the response contains neither image nor text
    """
    for segment in segments:
        if isinstance(segment, InlineData) and segment.data:
            return ImagePayload(data=segment.data, media_type=segment.media_type)

    text = " ".join(s.text.strip() for s in segments if isinstance(s, Text) and s.text.strip())
    if not text and summary and summary.strip():
        text = summary.strip()
    if text:
        raise TextOnlyResponseError(text)

    raise NoImageError()
