"""UI event handlers for the Gradio editor.

- editing: upload, instruction and submit handlers plus view rendering
"""

from .editing import (
    handle_instruction_change,
    handle_upload,
    render_status,
    render_view,
    submit_edit,
)

__all__ = [
    "handle_instruction_change",
    "handle_upload",
    "render_status",
    "render_view",
    "submit_edit",
]
