"""Configuration management for Retouch.

This module provides centralized configuration management using Pydantic Settings.
All configuration is loaded from environment variables with the RETOUCH_ prefix,
allowing easy customization without code changes.

Environment Variable Loading
-----------------------------
Configuration values are loaded in the following priority order:
1. Environment variables (RETOUCH_* prefix)
2. .env file in the project root
3. Default values defined in RetouchConfig

The Gemini credential is the one exception to the prefix rule: it is read from
``API_KEY``, ``RETOUCH_API_KEY`` or ``GEMINI_API_KEY`` (first match wins).

Example .env file:
    GEMINI_API_KEY=your-key-here
    RETOUCH_MODEL_ID=gemini-2.5-flash-image-preview
    RETOUCH_SERVER_PORT=7860

Credentials
-----------
The credential is read exactly once, when the configuration is created. A
missing key is not an error at startup: :meth:`RetouchConfig.credential`
returns the explicit :class:`Unconfigured` variant, and the edit adapter turns
that into a user-facing error on every edit attempt.

Usage Example
-------------
    from retouch.core.config import config

    print(config.model_id)
    if config.is_configured():
        ...
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


@dataclass(frozen=True)
class ApiKey:
    """A configured API credential."""

    value: str

    def __repr__(self) -> str:
        return "ApiKey(value='***')"


@dataclass(frozen=True)
class Unconfigured:
    """Marker for a missing credential.

    Attributes:
        reason: Human-readable explanation shown when an edit is attempted
    """

    reason: str = (
        "No API key configured. Set GEMINI_API_KEY (or RETOUCH_API_KEY) and restart."
    )


Credential = ApiKey | Unconfigured


class RetouchConfig(BaseSettings):
    """Main configuration for Retouch.

    Attributes
    ----------
    Generation Settings:
        api_key : str | None
            Gemini API key. Optional; absence is reported per edit attempt.
        model_id : str
            Identifier of the multimodal model used for editing
        allowed_media_types : list[str]
            Media types accepted for uploads
        strict_media_types : bool
            Reject uploads whose media type is not in allowed_media_types

    Editor Defaults:
        default_instruction : str
            Instruction pre-filled in the editor on first load
        default_image_path : Path | None
            Image shown as the original on first load (placeholder if unset)

    Server Settings:
        server_name : str
            Server bind address (0.0.0.0 for local network)
        server_port : int
            Server port (1024-65535)
        share : bool
            Create public gradio.live link (standalone UI only)
        ui_path : str
            Path the Gradio UI is mounted under in the API server
        edit_concurrency_limit : int | None
            Edits processed at once across sessions; None leaves them unlimited

    Logging:
        log_level : Literal["DEBUG", "INFO", "WARNING", "ERROR"]
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="RETOUCH_",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
        protected_namespaces=("settings_",),
    )

    api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("api_key", "RETOUCH_API_KEY", "GEMINI_API_KEY"),
        description="Gemini API key",
    )
    model_id: str = Field(
        default="gemini-2.5-flash-image-preview",
        description="Multimodal model used for image editing",
    )

    allowed_media_types: list[str] = Field(
        default_factory=lambda: ["image/png", "image/jpeg", "image/webp"],
        description="Media types accepted for uploads",
    )
    strict_media_types: bool = Field(
        default=True,
        description="Reject uploads with a media type outside allowed_media_types",
    )

    default_instruction: str = Field(
        default="Adjust this image and put a black blazer on for a professional profile photo",
        description="Instruction pre-filled in the editor",
    )
    default_image_path: Path | None = Field(
        default=None,
        description="Image shown as the original on first load",
    )

    server_name: str = Field(
        default="0.0.0.0",
        description="Server bind address (0.0.0.0 for local network)",
    )
    server_port: int = Field(
        default=7860,
        description="Server port",
        ge=1024,
        le=65535,
    )
    share: bool = Field(
        default=False,
        description="Create public gradio.live link (keep False for local-only)",
    )
    ui_path: str = Field(
        default="/ui",
        description="Mount path of the Gradio UI inside the API server",
    )
    edit_concurrency_limit: int | None = Field(
        default=None,
        ge=1,
        description="Edits allowed in flight at once across all sessions (None = unlimited)",
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(default="INFO")

    def credential(self) -> Credential:
        """Return the configured credential or the explicit unconfigured variant."""
        if self.api_key and self.api_key.strip():
            return ApiKey(self.api_key.strip())
        return Unconfigured()

    def is_configured(self) -> bool:
        return isinstance(self.credential(), ApiKey)


# Global configuration instance, loaded once from the environment and .env file.
config = RetouchConfig()
