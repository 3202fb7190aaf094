"""State management for the Loom Lens UI.

This module owns the view-level workflow:

    idle -> configuring -> dispatching -> reviewing
                 ^              |            |   ^
                 +--- failure --+            v   |
                 ^                         editing
                 +------ back to studio -----+

Start-over returns any view to idle. Every function takes the session's
UIState, updates it in place and returns it, so handlers can chain them.
"""

import logging

from loomlens.core.config import config
from loomlens.core.generation import BatchResult, GeneratedImage
from loomlens.core.images import ImageAttachment
from loomlens.core.model_adapters import adapter_registry
from loomlens.core.selection import SelectionAction, reduce, reset, set_source_image

from .models import ALLOWED_TRANSITIONS, LOADING_MESSAGES, UIState, WorkflowView
from .validation import validate_selection

logger = logging.getLogger(__name__)


class InvalidTransitionError(ValueError):
    """Raised when a workflow step is not allowed from the current view."""


def initialize_ui_state(state: UIState | None = None, adapter_name: str | None = None) -> UIState:
    """Initialize or ensure UI state is ready.

    Creates the state if needed and instantiates the image adapter on first
    use. The adapter does not contact the service until a call is made.

    Args:
        state: Existing UIState or None
        adapter_name: Name of image adapter to use (default: from config)

    Returns:
        Initialized UIState instance
    """
    if state is None:
        logger.info("Creating new UIState")
        state = UIState()

    if state.image_adapter is None:
        name = adapter_name or config.default_image_adapter
        logger.info(f"Initializing image adapter: {name}")
        state.image_adapter = adapter_registry.instantiate(name, config)

    return state


def _transition(state: UIState, target: WorkflowView) -> None:
    if target is not WorkflowView.IDLE and target not in ALLOWED_TRANSITIONS[state.view]:
        raise InvalidTransitionError(
            f"Cannot move from {state.view.value} to {target.value}"
        )
    logger.debug(f"Workflow: {state.view.value} -> {target.value}")
    state.view = target


def loading_message(step: int) -> str:
    """Progress text for the given step, holding on the last message."""
    return LOADING_MESSAGES[min(max(step, 0), len(LOADING_MESSAGES) - 1)]


def apply_selection(state: UIState, action: SelectionAction) -> UIState:
    """Apply a selection action to the session's selection."""
    state.selection = reduce(state.selection, action)
    return state


def upload_source_image(state: UIState, image: ImageAttachment) -> UIState:
    """Store the clothing image and open the studio.

    Re-uploading from the studio replaces the image without changing view.
    """
    state.selection = set_source_image(state.selection, image)
    if state.view is WorkflowView.IDLE:
        _transition(state, WorkflowView.CONFIGURING)
    return state


def begin_dispatch(state: UIState) -> UIState:
    """Enter the dispatching view.

    Raises:
        ValidationError: If the selection is incomplete
        InvalidTransitionError: If not in the studio or a call is in flight
    """
    if state.busy:
        raise InvalidTransitionError("A request is already in progress")
    validate_selection(state.selection)
    _transition(state, WorkflowView.DISPATCHING)
    state.busy = True
    state.loading_message = loading_message(0)
    return state


def complete_dispatch(state: UIState, result: BatchResult) -> UIState:
    """Show the batch's images in the results view."""
    _transition(state, WorkflowView.REVIEWING)
    state.results = result.images
    state.busy = False
    state.loading_message = ""
    return state


def fail_dispatch(state: UIState) -> UIState:
    """Return to the studio with the selection intact."""
    _transition(state, WorkflowView.CONFIGURING)
    state.busy = False
    state.loading_message = ""
    return state


def back_to_studio(state: UIState) -> UIState:
    """Go back to the studio, keeping the results."""
    _transition(state, WorkflowView.CONFIGURING)
    return state


def open_editor(state: UIState, image_id: str) -> UIState:
    """Open the edit panel on a result. Unknown ids are ignored."""
    if not any(result.id == image_id for result in state.results):
        logger.warning(f"Cannot edit unknown image: {image_id}")
        return state
    if state.view is WorkflowView.EDITING:
        state.editing_image_id = image_id
        return state
    _transition(state, WorkflowView.EDITING)
    state.editing_image_id = image_id
    state.edit_prompt = ""
    return state


def close_editor(state: UIState) -> UIState:
    _transition(state, WorkflowView.REVIEWING)
    state.editing_image_id = None
    state.edit_prompt = ""
    return state


def begin_edit(state: UIState, instruction: str) -> UIState:
    """Mark an edit call as in flight.

    Raises:
        InvalidTransitionError: If the edit panel is closed or a call is in flight
    """
    if state.view is not WorkflowView.EDITING or state.editing_image is None:
        raise InvalidTransitionError("No image is open for editing")
    if state.busy:
        raise InvalidTransitionError("A request is already in progress")
    state.edit_prompt = instruction
    state.busy = True
    return state


def apply_edit_result(state: UIState, image: GeneratedImage) -> UIState:
    """Prepend the edited image, clear the instruction and close the editor."""
    state.results.insert(0, image)
    state.busy = False
    return close_editor(state)


def fail_edit(state: UIState) -> UIState:
    """Leave the editor open and the results untouched."""
    state.busy = False
    return state


def start_over(state: UIState, keep_custom_models: bool | None = None) -> UIState:
    """Discard results, upload and selections and return to the upload view.

    Args:
        state: UI state
        keep_custom_models: Keep uploaded custom models
            (default: config.keep_custom_models_on_reset)
    """
    if keep_custom_models is None:
        keep_custom_models = config.keep_custom_models_on_reset

    _transition(state, WorkflowView.IDLE)
    state.selection = reset(state.selection, keep_custom_models=keep_custom_models)
    state.results = []
    state.editing_image_id = None
    state.edit_prompt = ""
    state.busy = False
    state.loading_message = ""
    logger.info(f"Started over (kept {len(state.selection.custom_models)} custom models)")
    return state
