"""Pydantic request and response models for the Retouch API.

Models
------
EditRequest
    Payload for ``POST /api/edit``: the original image as a data URL plus the
    editing instruction.
EditResponse
    The edited image as a data URL and its media type.
HealthResponse
    Service status for ``GET /api/health``.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class EditRequest(BaseModel):
    """Request body for the ``POST /api/edit`` endpoint.

    Attributes:
        image: Original image as ``data:<media type>;base64,<data>``.
        prompt: Natural-language editing instruction.
    """

    image: str = Field(..., description="Original image as a base64 data URL")
    prompt: str = Field(..., description="Editing instruction")


class EditResponse(BaseModel):
    """Response body for a successful ``POST /api/edit`` call.

    Attributes:
        image: Edited image as a base64 data URL.
        media_type: Media type of the edited image.
    """

    image: str
    media_type: str


class HealthResponse(BaseModel):
    status: str = "ok"
    configured: bool
    model: str
    version: str
