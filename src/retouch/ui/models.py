"""Data models for Retouch editor state."""

import logging
from dataclasses import dataclass

from retouch.core.encoding import ImagePayload

logger = logging.getLogger(__name__)


@dataclass
class EditorState:
    """Session state for the Gradio editor.

    Each browser session gets its own EditorState instance. The state is only
    ever mutated by the functions in :mod:`retouch.ui.state`.

    Attributes
    ----------
    original : ImagePayload | None
        Image being edited (seeded with the built-in default)
    instruction : str
        Current editing instruction text
    result : ImagePayload | None
        Edited image from the last successful submission
    busy : bool
        True while an edit request is in flight
    error : str | None
        Message of the last failure, shown instead of the result
    generation : int
        Counter bumped on every upload and submission. A response is only
        applied if the counter has not moved since its submission started.
    """

    original: ImagePayload | None = None
    instruction: str = ""
    result: ImagePayload | None = None
    busy: bool = False
    error: str | None = None
    generation: int = 0

    @property
    def media_type(self) -> str | None:
        return self.original.media_type if self.original is not None else None

    def is_idle(self) -> bool:
        """Check if nothing is in flight and nothing has been produced yet."""
        return not self.busy and self.result is None and self.error is None

    def __repr__(self) -> str:
        """String representation for debugging."""
        return (
            f"EditorState(original={self.media_type}, busy={self.busy}, "
            f"result={self.result is not None}, error={self.error!r}, "
            f"generation={self.generation})"
        )


@dataclass(frozen=True)
class SubmissionTicket:
    """Snapshot of one submission, used to match its response to the state."""

    generation: int
    payload: ImagePayload
    instruction: str


# UI Constants
UPLOAD_FILE_TYPES = [".png", ".jpg", ".jpeg", ".webp"]
MAX_INSTRUCTION_LENGTH = 10000

SUBMIT_LABEL = "Enhance Image"
BUSY_LABEL = "Generating..."

MISSING_INPUT_MESSAGE = "Please provide an image and a prompt."
LOAD_FAILED_MESSAGE = "Failed to load image. Please try another file."
UNKNOWN_ERROR_MESSAGE = "An unknown error occurred while editing the image."
