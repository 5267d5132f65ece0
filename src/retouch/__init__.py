"""Retouch - AI profile picture enhancer driven by natural-language edits."""

__version__ = "0.1.0"

from retouch.core.config import RetouchConfig, config
from retouch.core.edit_adapters import EditAdapterBase, GeminiEditAdapter
from retouch.core.encoding import ImagePayload, encode_file

__all__ = [
    "EditAdapterBase",
    "GeminiEditAdapter",
    "ImagePayload",
    "RetouchConfig",
    "config",
    "encode_file",
]
