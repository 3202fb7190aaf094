"""Data models for Loom Lens UI state."""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from loomlens.core.generation import GeneratedImage
from loomlens.core.selection import SelectionState

logger = logging.getLogger(__name__)


class WorkflowView(str, Enum):
    """Coarse view the session is in."""

    IDLE = "idle"  # Waiting for a clothing upload
    CONFIGURING = "configuring"  # Studio: picking model, poses, setting, style
    DISPATCHING = "dispatching"  # Generation batch in flight
    REVIEWING = "reviewing"  # Showing results
    EDITING = "editing"  # Edit panel open over the results


# Allowed view changes. Start-over to IDLE is allowed from every view.
ALLOWED_TRANSITIONS: dict[WorkflowView, frozenset[WorkflowView]] = {
    WorkflowView.IDLE: frozenset({WorkflowView.CONFIGURING}),
    WorkflowView.CONFIGURING: frozenset({WorkflowView.DISPATCHING}),
    WorkflowView.DISPATCHING: frozenset({WorkflowView.REVIEWING, WorkflowView.CONFIGURING}),
    WorkflowView.REVIEWING: frozenset({WorkflowView.EDITING, WorkflowView.CONFIGURING}),
    WorkflowView.EDITING: frozenset({WorkflowView.REVIEWING}),
}


@dataclass
class UIState:
    """Session state for the Gradio UI.

    Each user gets their own UIState instance through gr.State, so a session's
    selections and results are never shared.

    Attributes
    ----------
    view : WorkflowView
        Current coarse view
    selection : SelectionState
        Immutable selection, replaced on every transition
    results : list[GeneratedImage]
        Generated and edited images, newest edits first
    editing_image_id : str | None
        Result currently open in the edit panel
    edit_prompt : str
        Text in the edit instruction box
    busy : bool
        A generation batch or edit call is in flight
    loading_message : str
        Cosmetic progress text shown while dispatching
    image_adapter : Any | None
        ImageAdapterBase instance, created lazily
    """

    view: WorkflowView = WorkflowView.IDLE
    selection: SelectionState = field(default_factory=SelectionState)
    results: list[GeneratedImage] = field(default_factory=list)
    editing_image_id: str | None = None
    edit_prompt: str = ""
    busy: bool = False
    loading_message: str = ""
    image_adapter: Any | None = None  # ImageAdapterBase instance

    @property
    def editing_image(self) -> GeneratedImage | None:
        if self.editing_image_id is None:
            return None
        return next((r for r in self.results if r.id == self.editing_image_id), None)

    def __repr__(self) -> str:
        return (
            f"UIState(view={self.view.value}, "
            f"results={len(self.results)}, "
            f"busy={self.busy})"
        )


# Progress text cycled while a batch runs
LOADING_MESSAGES = [
    "Analyzing cloth texture...",
    "Retrieving model geometry...",
    "Merging cloth physics with pose...",
    "Rendering lighting environment...",
    "Applying final style grading...",
]

# Labels of the step indicator, with the views each step covers
STEP_LABELS = ["Upload", "Configure", "Generate", "Result"]

VIEW_STEPS = {
    WorkflowView.IDLE: 1,
    WorkflowView.CONFIGURING: 2,
    WorkflowView.DISPATCHING: 3,
    WorkflowView.REVIEWING: 4,
    WorkflowView.EDITING: 4,
}

GENERATION_FAILED_MESSAGE = "Failed to generate mockups. Please try again."
EDIT_FAILED_MESSAGE = "Failed to edit image. Please try a different prompt."
