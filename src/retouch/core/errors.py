"""Error types shared by the encoding, editing and UI layers.

Every message carried by these exceptions is safe to show to the user as-is.
"""

EDIT_FAILED_PREFIX = "Failed to edit image: "


class ValidationError(Exception):
    """User-friendly validation error.

    This exception is raised when user input fails validation.
    The message is intended to be displayed directly to the user.
    """

    pass


class ImageReadError(Exception):
    """A selected file could not be read or decoded as an image."""

    pass


class GenerationError(Exception):
    """Any failure of an edit request, normalized to a readable message."""

    pass


class NotConfiguredError(GenerationError):
    """The edit adapter has no credential to call the remote service with."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"{EDIT_FAILED_PREFIX}{reason}")


class NoImageError(GenerationError):
    """The service answered without any image or text (e.g. safety-filtered)."""

    def __init__(self, detail: str | None = None) -> None:
        message = "No image data found in the API response. The request may have been filtered."
        if detail:
            message = f"{message} ({detail})"
        super().__init__(f"{EDIT_FAILED_PREFIX}{message}")


class TextOnlyResponseError(GenerationError):
    """The service explained itself in text instead of returning an image."""

    def __init__(self, text: str) -> None:
        self.text = text
        super().__init__(
            f"{EDIT_FAILED_PREFIX}API returned a text response instead of an image: {text}"
        )
