"""Gradio UI for Retouch."""

import logging

import gradio as gr

from retouch.core.config import RetouchConfig, config
from retouch.core.edit_adapters import EditAdapterBase, GeminiEditAdapter

from .handlers import handle_instruction_change, handle_upload, render_view, submit_edit
from .models import SUBMIT_LABEL, UPLOAD_FILE_TYPES, EditorState
from .state import initialize_editor_state

logger = logging.getLogger(__name__)


def configure_logging(settings: RetouchConfig | None = None) -> None:
    settings = settings or config
    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def create_ui(
    settings: RetouchConfig | None = None, adapter: EditAdapterBase | None = None
) -> gr.Blocks:
    """Create the Gradio editor.

    Args:
        settings: Configuration (default: global config)
        adapter: Edit adapter to use (default: GeminiEditAdapter built from settings)

    Returns:
        Gradio Blocks app
    """
    settings = settings or config
    adapter = adapter or GeminiEditAdapter(settings)

    initial_state = initialize_editor_state(EditorState(), settings)
    initial_original, _, initial_status, _ = render_view(initial_state)

    app = gr.Blocks(title="AI Profile Picture Enhancer")

    with app:
        # Session state - one copy per browser session
        editor_state = gr.State(initial_state)

        gr.Markdown(
            """
            # AI Profile Picture Enhancer
            ### Transform your photos with a simple text prompt.
            """
        )

        if not adapter.is_configured():
            gr.Markdown(
                "⚠️ **No API key configured.** Edits will fail until "
                "`GEMINI_API_KEY` is set and the app is restarted."
            )

        with gr.Row():
            # Left panel: original image and controls
            with gr.Column(scale=1):
                original_image = gr.Image(
                    label="Original Image",
                    value=initial_original,
                    type="filepath",
                    interactive=False,
                    height=420,
                )
                upload_btn = gr.UploadButton(
                    "Upload New Image",
                    file_types=UPLOAD_FILE_TYPES,
                    file_count="single",
                    type="filepath",
                    variant="secondary",
                )
                instruction_input = gr.Textbox(
                    label="Editing Prompt",
                    value=initial_state.instruction,
                    placeholder="e.g., Make the background a professional office setting",
                    lines=4,
                )
                submit_btn = gr.Button(SUBMIT_LABEL, variant="primary", size="lg")

            # Right panel: edited image and status
            with gr.Column(scale=1):
                result_image = gr.Image(
                    label="Enhanced Image",
                    type="filepath",
                    interactive=False,
                    height=420,
                )
                status_output = gr.Markdown(value=initial_status)

        gr.Markdown(f"---\n**Model:** {adapter.name} `{settings.model_id}`")

        # Event handlers
        view_outputs = [original_image, result_image, status_output, submit_btn, editor_state]

        upload_btn.upload(
            fn=handle_upload,
            inputs=[upload_btn, editor_state],
            outputs=view_outputs,
        )

        instruction_input.change(
            fn=handle_instruction_change,
            inputs=[instruction_input, editor_state],
            outputs=[editor_state],
        )

        async def submit_wrapper(instruction, state):
            """Bind the adapter so Gradio only sees component inputs."""
            async for update in submit_edit(instruction, state, adapter):
                yield update

        submit_btn.click(
            fn=submit_wrapper,
            inputs=[instruction_input, editor_state],
            outputs=view_outputs,
            trigger_mode="once",
            concurrency_limit=settings.edit_concurrency_limit,
        )

    return app


def main():
    """Launch the editor as a standalone Gradio app."""
    configure_logging(config)
    logger.info("Starting Retouch editor...")
    logger.info(f"Model: {config.model_id} (configured={config.is_configured()})")

    app = create_ui(config)

    logger.info(f"Launching Gradio UI on {config.server_name}:{config.server_port}")

    app.queue().launch(
        server_name=config.server_name,
        server_port=config.server_port,
        share=config.share,
        show_error=True,
        inbrowser=False,
    )


if __name__ == "__main__":
    main()
