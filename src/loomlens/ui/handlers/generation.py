"""Mockup generation and workflow navigation handlers.

Generation runs in two chained events: ``start_generation`` switches to the
generating view immediately, then ``run_generation`` performs the blocking
batch and moves on to the results (or back to the studio on failure).
"""

import logging

import gradio as gr

from loomlens.core.generation import generate_mockups
from loomlens.core.prompt_builder import MockupTask

from ..components import render_all
from ..models import GENERATION_FAILED_MESSAGE, UIState, WorkflowView
from ..state import (
    back_to_studio,
    begin_dispatch,
    complete_dispatch,
    fail_dispatch,
    initialize_ui_state,
    loading_message,
    start_over,
)
from ..validation import ValidationError

logger = logging.getLogger(__name__)


def start_generation(state: UIState) -> tuple:
    """Enter the generating view if the selection is complete.

    Args:
        state: UI state

    Returns:
        render_all() outputs
    """
    try:
        state = begin_dispatch(state)
        logger.info("Generation started")
    except ValidationError as e:
        # Button should have been disabled
        logger.warning(f"Validation error: {e}")
        gr.Warning(str(e))
    except ValueError as e:
        logger.warning(f"Generation not started: {e}")
    return render_all(state)


def run_generation(state: UIState, progress=gr.Progress()) -> tuple:
    """Run the batch for a session in the generating view.

    Per-pose failures are absorbed by the batch; anything that stops the batch
    itself (missing API key, unresolvable selection) shows one alert and
    returns to the studio with the selection intact.

    Args:
        state: UI state
        progress: Gradio progress tracker

    Returns:
        render_all() outputs
    """
    if state.view is not WorkflowView.DISPATCHING:
        return render_all(state)

    def on_task_start(index: int, total: int, task: MockupTask) -> None:
        state.loading_message = loading_message(index + 1)
        progress(index / total, desc=f"{state.loading_message} ({task.pose.name})")

    try:
        state = initialize_ui_state(state)
        result = generate_mockups(state.selection, state.image_adapter, on_task_start)
        state = complete_dispatch(state, result)

        if result.failed:
            failed = ", ".join(outcome.task.pose.name for outcome in result.failed)
            gr.Info(f"Some poses could not be generated: {failed}")

    except Exception as e:
        logger.error(f"Error generating mockups: {e}", exc_info=True)
        gr.Warning(GENERATION_FAILED_MESSAGE)
        state = fail_dispatch(state)

    return render_all(state)


def back_to_studio_handler(state: UIState) -> tuple:
    """Return to the studio, keeping generated results."""
    if state.view is WorkflowView.REVIEWING:
        state = back_to_studio(state)
    return render_all(state)


def start_over_handler(state: UIState) -> tuple:
    """Discard everything and go back to the upload view."""
    if state.busy:
        gr.Warning("Please wait for the current request to finish")
        return render_all(state)
    state = start_over(state)
    return render_all(state)
