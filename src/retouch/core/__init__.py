"""Core editing components: configuration, encoding and edit adapters."""

from .config import ApiKey, RetouchConfig, Unconfigured, config
from .edit_adapters import EditAdapterBase, GeminiEditAdapter
from .encoding import ImagePayload, default_image, encode_file
from .errors import (
    GenerationError,
    ImageReadError,
    NoImageError,
    NotConfiguredError,
    TextOnlyResponseError,
    ValidationError,
)
from .segments import InlineData, Text, segments_from_response, select_image

__all__ = [
    "ApiKey",
    "EditAdapterBase",
    "GeminiEditAdapter",
    "GenerationError",
    "ImagePayload",
    "ImageReadError",
    "InlineData",
    "NoImageError",
    "NotConfiguredError",
    "RetouchConfig",
    "Text",
    "TextOnlyResponseError",
    "Unconfigured",
    "ValidationError",
    "config",
    "default_image",
    "encode_file",
    "segments_from_response",
    "select_image",
]
