"""Validation utilities for Retouch editor inputs."""

import logging

from retouch.core.encoding import ImagePayload
from retouch.core.errors import ValidationError

from .models import MAX_INSTRUCTION_LENGTH, MISSING_INPUT_MESSAGE

logger = logging.getLogger(__name__)

__all__ = [
    "ValidationError",
    "validate_edit_inputs",
    "validate_instruction_content",
    "validate_media_type",
]


def validate_edit_inputs(original: ImagePayload | None, instruction: str | None) -> str:
    """Check that a submission has both an image and an instruction.

    Args:
        original: Currently loaded original image
        instruction: Instruction text as typed

    Returns:
        The instruction with surrounding whitespace removed

    Raises:
        ValidationError: If the image is missing or the instruction is blank
    """
    if original is None or not original.data:
        raise ValidationError(MISSING_INPUT_MESSAGE)
    if not instruction or not instruction.strip():
        raise ValidationError(MISSING_INPUT_MESSAGE)

    instruction = instruction.strip()
    validate_instruction_content(instruction)
    return instruction


def validate_instruction_content(instruction: str, max_length: int = MAX_INSTRUCTION_LENGTH) -> None:
    """Validate instruction text content.

    Args:
        instruction: Instruction text to validate
        max_length: Maximum allowed instruction length

    Raises:
        ValidationError: If the instruction is too long
    """
    if len(instruction) > max_length:
        raise ValidationError(
            f"Instruction is too long ({len(instruction)} characters). "
            f"Maximum is {max_length} characters."
        )


def validate_media_type(media_type: str | None, allowed: list[str]) -> None:
    """Check an upload's media type against the accepted list.

    Args:
        media_type: Media type of the encoded upload
        allowed: Accepted media types (e.g. ``["image/png", "image/jpeg"]``)

    Raises:
        ValidationError: If the media type is missing or not accepted
    """
    if not media_type or media_type.lower() not in {m.lower() for m in allowed}:
        readable = ", ".join(m.split("/")[-1].upper() for m in allowed)
        logger.warning(f"Rejected upload with media type {media_type!r}")
        raise ValidationError(
            f"Unsupported image type '{media_type or 'unknown'}'. Please upload one of: {readable}."
        )
