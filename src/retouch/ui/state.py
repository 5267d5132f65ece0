"""State management for the Retouch editor.

These functions are the only code that mutates an :class:`EditorState`. They
implement the editor's transitions:

- **Idle**: original image seeded, nothing in flight, no result or error.
- **Editing inputs**: an upload replaces the original and clears result and
  error; a failed upload only sets the error.
- **Busy**: a valid submission clears result and error and marks the state
  busy until its response is resolved.
- **Resolved**: the response stores either a result or an error and clears
  the busy flag.

Every upload and submission bumps ``state.generation``. A response whose
ticket carries an older generation is stale and is discarded.
"""

import logging

from retouch.core.config import RetouchConfig, config
from retouch.core.edit_adapters import EditAdapterBase
from retouch.core.encoding import ImagePayload, default_image, encode_file
from retouch.core.errors import GenerationError, ImageReadError

from .models import LOAD_FAILED_MESSAGE, UNKNOWN_ERROR_MESSAGE, EditorState, SubmissionTicket
from .validation import ValidationError, validate_edit_inputs, validate_media_type

logger = logging.getLogger(__name__)


def initialize_editor_state(
    state: EditorState | None = None, settings: RetouchConfig | None = None
) -> EditorState:
    """Initialize or ensure editor state is ready.

    Args:
        state: Existing EditorState or None
        settings: Configuration to seed defaults from (default: global config)

    Returns:
        EditorState with an original image and instruction in place
    """
    settings = settings or config

    if state is None:
        logger.info("Creating new EditorState")
        state = EditorState()

    if state.original is None:
        state.original = default_image(settings.default_image_path)
        logger.debug(f"Seeded default original image ({state.original.media_type})")

    if not state.instruction:
        state.instruction = settings.default_instruction

    return state


def load_original(
    state: EditorState,
    source,
    media_type: str | None = None,
    settings: RetouchConfig | None = None,
) -> EditorState:
    """Replace the original image with an uploaded file.

    On success the previous result and error are cleared and any in-flight
    request is orphaned (its response will be discarded). On failure only the
    error message changes; the previous original stays in place.

    Args:
        state: Editor state
        source: Path or binary file object of the upload
        media_type: Media type reported by the browser, if known
        settings: Configuration with the media type policy (default: global config)

    Returns:
        Updated state
    """
    settings = settings or config

    try:
        payload = encode_file(source, media_type)
        if settings.strict_media_types:
            validate_media_type(payload.media_type, settings.allowed_media_types)
    except (ImageReadError, ValidationError) as e:
        logger.error(f"Failed to load image: {e}")
        state.error = f"{LOAD_FAILED_MESSAGE} ({e})"
        return state

    if state.busy:
        logger.info("New upload while an edit is in flight; its response will be discarded")

    state.original = payload
    state.result = None
    state.error = None
    state.busy = False
    state.generation += 1
    logger.info(f"Loaded original image ({payload.media_type}, {payload.size} bytes)")
    return state


def set_instruction(state: EditorState, text: str | None) -> EditorState:
    state.instruction = text or ""
    return state


def begin_submission(state: EditorState) -> SubmissionTicket | None:
    """Move the state to Busy if a submission is allowed.

    Args:
        state: Editor state

    Returns:
        Ticket for the new submission, or None if nothing should be sent
        (already busy, or the inputs failed validation)
    """
    if state.busy:
        logger.info("Submission ignored: an edit is already in flight")
        return None

    try:
        instruction = validate_edit_inputs(state.original, state.instruction)
    except ValidationError as e:
        logger.warning(f"Validation error: {e}")
        state.error = str(e)
        return None

    state.result = None
    state.error = None
    state.busy = True
    state.generation += 1
    return SubmissionTicket(
        generation=state.generation, payload=state.original, instruction=instruction
    )


def resolve_submission(
    state: EditorState,
    ticket: SubmissionTicket,
    result: ImagePayload | None = None,
    error: str | None = None,
) -> bool:
    """Apply the outcome of a submission.

    Args:
        state: Editor state
        ticket: Ticket returned by :func:`begin_submission`
        result: Edited image on success
        error: Error message on failure

    Returns:
        True if applied, False if the response was stale and discarded
    """
    if ticket.generation != state.generation:
        logger.info(
            f"Discarding stale response (generation {ticket.generation}, "
            f"current {state.generation})"
        )
        return False

    if result is not None:
        state.result = result
        state.error = None
    else:
        state.result = None
        state.error = error or UNKNOWN_ERROR_MESSAGE
    state.busy = False
    return True


async def execute_submission(
    state: EditorState, ticket: SubmissionTicket, adapter: EditAdapterBase
) -> bool:
    """Send a ticket's request through the adapter and resolve it.

    Returns:
        True if the response was applied to the state
    """
    try:
        result = await adapter.edit(ticket.payload, ticket.instruction)
    except (GenerationError, ValidationError) as e:
        return resolve_submission(state, ticket, error=str(e))
    except Exception as e:
        logger.error(f"Error editing image: {e}", exc_info=True)
        return resolve_submission(state, ticket, error=UNKNOWN_ERROR_MESSAGE)
    return resolve_submission(state, ticket, result=result)


async def run_edit(state: EditorState, adapter: EditAdapterBase) -> EditorState:
    """Submit the current image and instruction and wait for the outcome.

    Args:
        state: Editor state
        adapter: Edit adapter to call

    Returns:
        Updated state
    """
    ticket = begin_submission(state)
    if ticket is None:
        return state
    await execute_submission(state, ticket, adapter)
    return state
