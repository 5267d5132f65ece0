"""Retouch - FastAPI Application.

This module builds the web application: a small JSON API for image edits and
the Gradio editor mounted alongside it. The edit adapter is created once per
application and shared by the API routes and the editor.

Endpoints
---------
========  ==================  =============================================
Method    Path                Purpose
========  ==================  =============================================
GET       ``/``               Redirect to the editor UI
GET       ``/api/health``     Service status and credential presence
POST      ``/api/edit``       Edit an image (data URL in, data URL out)
*         ``/ui``             Gradio editor (path from ``RETOUCH_UI_PATH``)
========  ==================  =============================================

Usage
-----
CLI (installed entry point)::

    retouch

Direct invocation::

    python -m retouch.api.main
"""

from __future__ import annotations

import logging

import gradio as gr
from fastapi import APIRouter, FastAPI, HTTPException, Request
from fastapi.responses import RedirectResponse

from retouch import __version__
from retouch.api.models import EditRequest, EditResponse, HealthResponse
from retouch.core.config import RetouchConfig, config
from retouch.core.edit_adapters import EditAdapterBase, GeminiEditAdapter
from retouch.core.encoding import ImagePayload
from retouch.core.errors import GenerationError, ImageReadError, ValidationError
from retouch.ui.app import configure_logging, create_ui
from retouch.ui.validation import validate_edit_inputs, validate_media_type

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["edit"])


def get_adapter(request: Request) -> EditAdapterBase:
    return request.app.state.edit_adapter


def get_settings(request: Request) -> RetouchConfig:
    return request.app.state.settings


@router.get("/health", response_model=HealthResponse)
async def health(request: Request) -> HealthResponse:
    """Report whether the edit adapter has a credential to work with."""
    adapter = get_adapter(request)
    return HealthResponse(
        configured=adapter.is_configured(),
        model=get_settings(request).model_id,
        version=__version__,
    )


@router.post("/edit", response_model=EditResponse)
async def edit_image(body: EditRequest, request: Request) -> EditResponse:
    """Edit an image according to a natural-language instruction.

    Args:
        body: Original image as a data URL plus the instruction.
        request: Incoming request (gives access to the shared adapter).

    Returns:
        The edited image as a data URL.

    Raises:
        HTTPException: 422 for unreadable images, disallowed media types or a
            blank prompt (no request is sent); 502 when the edit fails.
    """
    settings = get_settings(request)

    try:
        payload = ImagePayload.from_data_url(body.image).verified()
        if settings.strict_media_types:
            validate_media_type(payload.media_type, settings.allowed_media_types)
        instruction = validate_edit_inputs(payload, body.prompt)
    except (ImageReadError, ValidationError) as e:
        logger.warning(f"Rejected edit request: {e}")
        raise HTTPException(status_code=422, detail=str(e)) from e

    try:
        result = await get_adapter(request).edit(payload, instruction)
    except GenerationError as e:
        raise HTTPException(status_code=502, detail=str(e)) from e

    return EditResponse(image=result.to_data_url(), media_type=result.media_type)


def create_app(
    settings: RetouchConfig | None = None,
    adapter: EditAdapterBase | None = None,
    mount_ui: bool = True,
) -> FastAPI:
    """Build the FastAPI application.

    Args:
        settings: Configuration (default: global config)
        adapter: Edit adapter (default: GeminiEditAdapter built from settings)
        mount_ui: Mount the Gradio editor under ``settings.ui_path``

    Returns:
        Configured FastAPI application
    """
    settings = settings or config
    adapter = adapter or GeminiEditAdapter(settings)

    app = FastAPI(
        title="Retouch",
        description="AI profile picture enhancer: natural-language image edits.",
        version=__version__,
    )
    app.state.settings = settings
    app.state.edit_adapter = adapter
    app.include_router(router)

    if mount_ui:
        ui_path = settings.ui_path

        @app.get("/", include_in_schema=False)
        async def index() -> RedirectResponse:
            return RedirectResponse(url=ui_path)

        app = gr.mount_gradio_app(app, create_ui(settings, adapter).queue(), path=ui_path)

    logger.info(f"Retouch app created (model={settings.model_id}, configured={adapter.is_configured()})")
    return app


def main() -> None:
    """Launch the uvicorn ASGI server.

    Reads host and port from :data:`~retouch.core.config.config`
    (``RETOUCH_SERVER_NAME`` and ``RETOUCH_SERVER_PORT``).

    This function is registered as the ``retouch`` console script in
    ``pyproject.toml``.
    """
    import uvicorn

    configure_logging(config)
    uvicorn.run(
        "retouch.api.main:create_app",
        factory=True,
        host=config.server_name,
        port=config.server_port,
        reload=False,
    )


if __name__ == "__main__":
    main()
