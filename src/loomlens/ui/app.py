"""Gradio UI for Loom Lens virtual photoshoots."""

import logging

import gradio as gr

from loomlens.core.config import config
from loomlens.core.model_adapters import adapter_registry

from .components import render_all, render_steps
from .handlers import (
    back_to_studio_handler,
    cancel_edit,
    download_result,
    run_generation,
    select_model,
    select_result,
    select_setting,
    select_style,
    start_generation,
    start_over_handler,
    submit_edit,
    toggle_pose,
    upload_clothing,
    upload_custom_model,
)
from .models import UIState, WorkflowView

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def create_ui() -> gr.Blocks:
    """Create the Gradio UI.

    Every view is a column whose visibility follows UIState.view. All handlers
    return render_all(state), so they share one output list.

    Returns:
        Gradio Blocks app
    """
    app = gr.Blocks(title="Loom Lens")

    with app:
        # Session state - one instance per user
        ui_state = gr.State(UIState())

        gr.Markdown(
            """
            # Loom Lens
            ### Virtual photoshoots for your clothing
            """
        )
        steps_md = gr.Markdown(value=render_steps(WorkflowView.IDLE))

        # Upload view
        with gr.Column(visible=True) as upload_group:
            clothing_input = gr.Image(
                label="Clothing Image",
                type="filepath",
                sources=["upload", "clipboard"],
                height=360,
            )
            gr.Markdown("*Supported formats: PNG, JPEG, WEBP*")

        # Studio view
        with gr.Column(visible=False) as studio_group:
            with gr.Row():
                with gr.Column(scale=1):
                    source_preview = gr.Image(label="Your Item", interactive=False, height=280)
                    summary_md = gr.Markdown()
                    generate_btn = gr.Button(
                        "Generate Mockups",
                        variant="primary",
                        size="lg",
                        interactive=False,
                    )
                    studio_start_over_btn = gr.Button("Start Over", size="sm")

                with gr.Column(scale=3):
                    gr.Markdown("### 1. Model")
                    with gr.Accordion("Use your own model", open=False):
                        custom_model_input = gr.Image(
                            label="Reference Photo",
                            type="filepath",
                            sources=["upload"],
                            height=200,
                        )
                    model_gallery = gr.Gallery(
                        label="Models",
                        columns=6,
                        height=260,
                        object_fit="cover",
                        allow_preview=False,
                    )

                    gr.Markdown("### 2. Poses")
                    pose_gallery = gr.Gallery(
                        label="Poses (select a model first)",
                        columns=6,
                        height=260,
                        object_fit="cover",
                        allow_preview=False,
                    )

                    gr.Markdown("### 3. Setting")
                    setting_gallery = gr.Gallery(
                        label="Settings",
                        columns=4,
                        height=260,
                        object_fit="cover",
                        allow_preview=False,
                    )

                    gr.Markdown("### 4. Style")
                    style_gallery = gr.Gallery(
                        label="Styles",
                        columns=3,
                        height=260,
                        object_fit="cover",
                        allow_preview=False,
                    )

        # Generating view
        with gr.Column(visible=False) as generating_group:
            loading_md = gr.Markdown()

        # Results view
        with gr.Column(visible=False) as results_group:
            results_info = gr.Markdown()
            results_gallery = gr.Gallery(
                label="Mockups",
                columns=3,
                height=520,
                object_fit="contain",
                allow_preview=False,
            )
            with gr.Row():
                back_btn = gr.Button("Back to Studio")
                results_start_over_btn = gr.Button("Start Over", variant="stop")

            # Edit panel
            with gr.Column(visible=False) as editor_group:
                gr.Markdown("### Edit Mockup")
                with gr.Row():
                    editor_preview = gr.Image(
                        label="Selected Mockup", interactive=False, height=360
                    )
                    with gr.Column():
                        edit_prompt = gr.Textbox(
                            label="Edit Instruction",
                            placeholder="e.g. 'make the background darker', 'add a retro filter'",
                            lines=2,
                        )
                        with gr.Row():
                            submit_edit_btn = gr.Button("Apply Edit", variant="primary")
                            cancel_edit_btn = gr.Button("Close")
                        download_btn = gr.Button("Download PNG", size="sm")
                        download_file = gr.File(label="Download", visible=False)

        all_outputs = [
            ui_state,
            upload_group,
            studio_group,
            generating_group,
            results_group,
            editor_group,
            steps_md,
            loading_md,
            model_gallery,
            pose_gallery,
            setting_gallery,
            style_gallery,
            summary_md,
            generate_btn,
            source_preview,
            results_gallery,
            editor_preview,
            edit_prompt,
            results_info,
        ]

        # Populate galleries for each new session
        app.load(fn=render_all, inputs=[ui_state], outputs=all_outputs)

        # Uploads
        clothing_input.upload(
            fn=upload_clothing,
            inputs=[clothing_input, ui_state],
            outputs=all_outputs,
        )
        custom_model_input.upload(
            fn=upload_custom_model,
            inputs=[custom_model_input, ui_state],
            outputs=all_outputs,
        )

        # Studio selections (gr.SelectData is injected from the type hint)
        model_gallery.select(fn=select_model, inputs=[ui_state], outputs=all_outputs)
        pose_gallery.select(fn=toggle_pose, inputs=[ui_state], outputs=all_outputs)
        setting_gallery.select(fn=select_setting, inputs=[ui_state], outputs=all_outputs)
        style_gallery.select(fn=select_style, inputs=[ui_state], outputs=all_outputs)

        # Generation: switch view first, then run the blocking batch
        generate_btn.click(
            fn=start_generation,
            inputs=[ui_state],
            outputs=all_outputs,
        ).then(
            fn=run_generation,
            inputs=[ui_state],
            outputs=all_outputs,
        )

        # Navigation
        back_btn.click(fn=back_to_studio_handler, inputs=[ui_state], outputs=all_outputs)
        for start_over_btn in (studio_start_over_btn, results_start_over_btn):
            start_over_btn.click(
                fn=start_over_handler,
                inputs=[ui_state],
                outputs=all_outputs,
            ).then(
                fn=lambda: (None, None),
                outputs=[clothing_input, custom_model_input],
            )

        # Editing
        results_gallery.select(
            fn=select_result,
            inputs=[ui_state],
            outputs=all_outputs,
        ).then(
            fn=lambda: gr.update(value=None, visible=False),
            outputs=[download_file],
        )
        submit_edit_btn.click(fn=submit_edit, inputs=[edit_prompt, ui_state], outputs=all_outputs)
        edit_prompt.submit(fn=submit_edit, inputs=[edit_prompt, ui_state], outputs=all_outputs)
        cancel_edit_btn.click(fn=cancel_edit, inputs=[ui_state], outputs=all_outputs)
        download_btn.click(fn=download_result, inputs=[ui_state], outputs=[download_file])

    return app


def main():
    """Main entry point for the application."""
    logger.info("Starting Loom Lens...")
    logger.info(f"Configuration: {config.model_dump(exclude={'api_key'})}")
    logger.info(f"Available image adapters: {adapter_registry.list_available()}")

    if not config.has_api_key:
        logger.warning("No API key configured (GEMINI_API_KEY); generation will fail")

    app = create_ui()

    logger.info(f"Launching Gradio UI on {config.gradio_server_name}:{config.gradio_server_port}")

    app.launch(
        server_name=config.gradio_server_name,
        server_port=config.gradio_server_port,
        share=config.gradio_share,
        show_error=True,
        inbrowser=False,
    )


if __name__ == "__main__":
    main()
