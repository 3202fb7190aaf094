"""Result editing and download handlers."""

import logging

import gradio as gr

from loomlens.core.config import config
from loomlens.core.generation import edit_mockup
from loomlens.core.images import save_generated_image

from ..components import render_all
from ..models import EDIT_FAILED_MESSAGE, UIState, WorkflowView
from ..state import (
    apply_edit_result,
    begin_edit,
    close_editor,
    fail_edit,
    initialize_ui_state,
    open_editor,
)
from ..validation import ValidationError, validate_edit_instruction

logger = logging.getLogger(__name__)


def select_result(state: UIState, evt: gr.SelectData) -> tuple:
    """Open the edit panel on the clicked result."""
    index = evt.index
    if state.busy or state.view not in (WorkflowView.REVIEWING, WorkflowView.EDITING):
        return render_all(state)
    if not isinstance(index, int) or not 0 <= index < len(state.results):
        return render_all(state)
    state = open_editor(state, state.results[index].id)
    return render_all(state)


def submit_edit(instruction: str, state: UIState) -> tuple:
    """Apply a text instruction to the image in the edit panel.

    On success the new image is prepended to the results and the panel closes.
    On failure an alert is shown and the panel stays open for another try.

    Args:
        instruction: Edit instruction text
        state: UI state

    Returns:
        render_all() outputs
    """
    try:
        text = validate_edit_instruction(instruction)
    except ValidationError as e:
        gr.Warning(str(e))
        return render_all(state)

    source = state.editing_image
    if state.view is not WorkflowView.EDITING or source is None or state.busy:
        return render_all(state)

    state = begin_edit(state, text)
    try:
        state = initialize_ui_state(state)
        edited = edit_mockup(source, text, state.image_adapter)
        state = apply_edit_result(state, edited)
    except Exception as e:
        logger.error(f"Edit failed: {e}", exc_info=True)
        gr.Warning(EDIT_FAILED_MESSAGE)
        state = fail_edit(state)

    return render_all(state)


def cancel_edit(state: UIState) -> tuple:
    if state.view is WorkflowView.EDITING and not state.busy:
        state = close_editor(state)
    return render_all(state)


def download_result(state: UIState) -> dict:
    """Save the image open in the edit panel as PNG and offer it for download.

    Each image is written under its own id so sessions never share a file.

    Returns:
        Update for the download file component
    """
    editing = state.editing_image
    if editing is None:
        return gr.update(value=None, visible=False)

    index = state.results.index(editing)
    try:
        path = save_generated_image(editing.image, config.outputs_dir / editing.id, index)
    except OSError as e:
        logger.error(f"Failed to save mockup: {e}", exc_info=True)
        gr.Warning("Could not save the image")
        return gr.update(value=None, visible=False)

    return gr.update(value=str(path), visible=True)
