"""Upload, instruction and submit handlers for the editor."""

import hashlib
import logging
import mimetypes
import tempfile
from collections.abc import AsyncIterator
from pathlib import Path

import gradio as gr

from retouch.core.edit_adapters import EditAdapterBase
from retouch.core.encoding import ImagePayload
from retouch.core.errors import ImageReadError

from ..models import BUSY_LABEL, SUBMIT_LABEL, EditorState
from ..state import begin_submission, execute_submission, load_original, set_instruction

logger = logging.getLogger(__name__)

BUSY_STATUS = "⏳ *AI is working its magic...*"
EMPTY_STATUS = "*Your enhanced image will appear here.*"
READY_STATUS = "✅ **Enhanced image ready**"

DISPLAY_DIR = Path(tempfile.gettempdir()) / "retouch"

ViewUpdate = tuple[str | None, str | None, str, dict]


def display_path(payload: ImagePayload, directory: Path | None = None) -> Path:
    """Write the payload bytes unchanged to a file named after their content.

    The image components are given this path, so the browser shows exactly the
    bytes held in the editor state rather than a re-encoded copy.

    Args:
        payload: Image to display
        directory: Where display files are kept (default: DISPLAY_DIR)

    Returns:
        Path of the file holding the payload bytes
    """
    directory = directory or DISPLAY_DIR
    subtype = payload.media_type.split("/")[-1]
    extension = mimetypes.guess_extension(payload.media_type) or f".{subtype}"
    path = directory / f"{hashlib.sha256(payload.data).hexdigest()[:32]}{extension}"
    if not path.exists():
        directory.mkdir(parents=True, exist_ok=True)
        path.write_bytes(payload.data)
    return path


def _to_display(payload: ImagePayload | None) -> str | None:
    if payload is None:
        return None
    try:
        payload.verify()
        return str(display_path(payload))
    except ImageReadError as e:
        logger.error(f"Cannot display {payload.media_type} image: {e}")
    except OSError as e:
        logger.error(f"Cannot write display file for {payload.media_type} image: {e}")
    return None


def render_status(state: EditorState) -> str:
    """Format the status area for the current state.

    Args:
        state: Editor state

    Returns:
        Markdown for the status area
    """
    if state.busy:
        return BUSY_STATUS
    if state.error:
        return f"❌ **Error**\n\n{state.error}"
    if state.result is not None:
        return READY_STATUS
    return EMPTY_STATUS


def render_view(state: EditorState) -> ViewUpdate:
    """Build the component values that mirror the current state.

    Args:
        state: Editor state

    Returns:
        Tuple of (original_image, result_image, status_markdown, submit_button_update)
    """
    result = _to_display(state.result)
    status = render_status(state)
    if state.result is not None and result is None and not state.busy:
        status = "❌ **Error**\n\nThe edited image could not be displayed."

    return (
        _to_display(state.original),
        result,
        status,
        gr.update(value=BUSY_LABEL if state.busy else SUBMIT_LABEL, interactive=not state.busy),
    )


def handle_upload(file_path: str | None, state: EditorState) -> tuple:
    """Handle a file chosen with the upload button.

    Args:
        file_path: Temporary path of the uploaded file (None if cleared)
        state: Editor state

    Returns:
        Tuple of (original_image, result_image, status, submit_button, updated_state)
    """
    if not file_path:
        return (*render_view(state), state)

    logger.info(f"Upload received: {file_path}")
    state = load_original(state, file_path)
    return (*render_view(state), state)


def handle_instruction_change(text: str, state: EditorState) -> EditorState:
    return set_instruction(state, text)


async def submit_edit(
    instruction: str, state: EditorState, adapter: EditAdapterBase
) -> AsyncIterator[tuple]:
    """Run one edit from the UI, rendering the busy view first.

    Yields the busy view as soon as the submission starts, then the resolved
    view once the adapter returns. A submission made while another is in
    flight, or with missing inputs, yields a single view and sends nothing.

    Args:
        instruction: Instruction text from the textbox
        state: Editor state
        adapter: Edit adapter to call

    Yields:
        Tuples of (original_image, result_image, status, submit_button, updated_state)
    """
    if not state.busy:
        set_instruction(state, instruction)

    ticket = begin_submission(state)
    yield (*render_view(state), state)
    if ticket is None:
        return

    applied = await execute_submission(state, ticket, adapter)
    if not applied:
        logger.debug("Edit response was superseded by newer input")
    yield (*render_view(state), state)
