"""Edit adapters: the bridge between the editor and a remote generation service.

Each adapter takes an :class:`~retouch.core.encoding.ImagePayload` and an
instruction, issues exactly one request, and returns the edited image as a
new payload. Everything that can go wrong on the way (missing credential,
transport failure, filtered or text-only answers) is raised as a
:class:`~retouch.core.errors.GenerationError` subclass carrying a message
that can be shown to the user directly.

Adapters never retry and impose no timeout of their own.

Usage Example
-------------
    >>> from retouch.core.config import config
    >>> from retouch.core.edit_adapters import GeminiEditAdapter
    >>> adapter = GeminiEditAdapter(config)
    >>> edited = await adapter.edit(payload, "make the background an office")
    >>> edited.to_data_url()
    'data:image/png;base64,...'
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

from google import genai
from google.genai import types

from .config import ApiKey, RetouchConfig
from .encoding import ImagePayload
from .errors import (
    EDIT_FAILED_PREFIX,
    GenerationError,
    NoImageError,
    NotConfiguredError,
    TextOnlyResponseError,
    ValidationError,
)
from .segments import block_reason, segments_from_response, select_image

logger = logging.getLogger(__name__)

RESPONSE_MODALITIES = ["IMAGE", "TEXT"]


class EditAdapterBase(ABC):
    """Abstract base class for image edit adapters.

    Attributes
    ----------
    name : str
        Human-readable name of the backend
    description : str
        Brief description of the backend
    config : RetouchConfig
        Configuration the adapter was constructed with
    """

    name: str = "Base Edit Adapter"
    description: str = "Base class for image edit adapters"

    def __init__(self, config: RetouchConfig) -> None:
        self.config = config
        logger.info(f"Initialized {self.name} adapter")

    @abstractmethod
    def is_configured(self) -> bool:
        """Return True if the adapter can reach its service."""
        pass

    @abstractmethod
    async def edit(self, payload: ImagePayload, instruction: str) -> ImagePayload:
        """Edit an image according to a natural-language instruction.

        Args:
            payload: Original image
            instruction: Non-empty editing instruction

        Returns:
            The edited image

        Raises:
            ValidationError: If the payload or instruction is missing
            GenerationError: If the service could not produce an image
        """
        pass

    @staticmethod
    def check_inputs(payload: ImagePayload | None, instruction: str | None) -> str:
        """Validate edit preconditions and return the stripped instruction."""
        if payload is None or not payload.data:
            raise ValidationError("Please provide an image and a prompt.")
        if not instruction or not instruction.strip():
            raise ValidationError("Please provide an image and a prompt.")
        return instruction.strip()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(configured={self.is_configured()})"


class GeminiEditAdapter(EditAdapterBase):
    """Edit adapter backed by the Gemini image model via ``google-genai``.

    The credential comes from the injected configuration. Without one the
    adapter is still created, but every :meth:`edit` call raises
    :class:`~retouch.core.errors.NotConfiguredError`.

    Args:
        config: Configuration holding the credential and model identifier
        client: Pre-built ``genai.Client`` (mainly for tests)
    """

    name = "Gemini"
    description = "Gemini multimodal image editing"

    def __init__(self, config: RetouchConfig, client: Any | None = None) -> None:
        super().__init__(config)
        self.model_id = config.model_id
        self._credential = config.credential()

        if client is not None:
            self._client = client
        elif isinstance(self._credential, ApiKey):
            self._client = genai.Client(api_key=self._credential.value)
        else:
            self._client = None
            logger.warning(f"{self.name} adapter unconfigured: {self._credential.reason}")

    def is_configured(self) -> bool:
        return self._client is not None

    def build_contents(self, payload: ImagePayload, instruction: str) -> list[types.Part]:
        return [
            types.Part.from_bytes(data=payload.data, mime_type=payload.media_type),
            types.Part(text=instruction),
        ]

    async def edit(self, payload: ImagePayload, instruction: str) -> ImagePayload:
        instruction = self.check_inputs(payload, instruction)

        if self._client is None:
            raise NotConfiguredError(getattr(self._credential, "reason", "No API key configured."))

        logger.info(
            f"Requesting edit from {self.model_id} "
            f"({payload.media_type}, {payload.size} bytes): {instruction[:60]!r}"
        )

        try:
            response = await self._client.aio.models.generate_content(
                model=self.model_id,
                contents=self.build_contents(payload, instruction),
                config=types.GenerateContentConfig(response_modalities=RESPONSE_MODALITIES),
            )
        except Exception as e:
            logger.error(f"Error editing image with {self.name} API: {e}", exc_info=True)
            raise GenerationError(f"{EDIT_FAILED_PREFIX}{e}") from e

        try:
            segments = segments_from_response(response)
        except (AttributeError, TypeError) as e:
            logger.error(f"Malformed {self.name} response: {e}", exc_info=True)
            raise GenerationError(f"{EDIT_FAILED_PREFIX}Malformed response from the API") from e

        try:
            result = select_image(segments, summary=_summary_text(response))
        except NoImageError as e:
            reason = block_reason(response)
            logger.warning(f"No image in {self.name} response (block_reason={reason})")
            if reason:
                raise NoImageError(f"block reason: {reason}") from e
            raise
        except TextOnlyResponseError as e:
            logger.warning(f"Text-only {self.name} response: {e.text[:200]!r}")
            raise

        logger.info(f"Received edited image ({result.media_type}, {result.size} bytes)")
        return result


def _summary_text(response: Any) -> str | None:
    # The SDK's ``text`` accessor joins text parts and may raise on odd shapes.
    try:
        text = getattr(response, "text", None)
    except (AttributeError, ValueError):
        return None
    return text if isinstance(text, str) else None
