"""Studio selection handlers.

Each catalog is rendered as a gallery; a click arrives as a gr.SelectData whose
index points into the list that was rendered. The lists are pure functions of
the selection, so recomputing them here yields the same order the user saw.
"""

import logging

import gradio as gr

from loomlens.core.catalog import SETTINGS, STYLES
from loomlens.core.selection import (
    SelectModel,
    SelectSetting,
    SelectStyle,
    TogglePose,
    all_models,
    available_poses,
)

from ..components import render_all
from ..models import UIState, WorkflowView
from ..state import apply_selection

logger = logging.getLogger(__name__)


def _picked(options, evt: gr.SelectData):
    """Option at the clicked gallery index, or None if out of range."""
    index = evt.index
    if isinstance(index, (list, tuple)):
        index = index[0]
    if not isinstance(index, int) or not 0 <= index < len(options):
        logger.warning(f"Ignoring gallery selection at index {evt.index}")
        return None
    return options[index]


def _in_studio(state: UIState) -> bool:
    return state.view is WorkflowView.CONFIGURING and not state.busy


def select_model(state: UIState, evt: gr.SelectData) -> tuple:
    """Select the clicked model."""
    option = _picked(all_models(state.selection), evt)
    if option is not None and _in_studio(state):
        state = apply_selection(state, SelectModel(option.id))
        logger.info(f"Model selected: {option.id}")
    return render_all(state)


def toggle_pose(state: UIState, evt: gr.SelectData) -> tuple:
    """Toggle the clicked pose (at most three)."""
    option = _picked(available_poses(state.selection), evt)
    if option is not None and _in_studio(state):
        state = apply_selection(state, TogglePose(option.id))
        logger.info(f"Poses now: {list(state.selection.pose_ids)}")
    return render_all(state)


def select_setting(state: UIState, evt: gr.SelectData) -> tuple:
    option = _picked(SETTINGS, evt)
    if option is not None and _in_studio(state):
        state = apply_selection(state, SelectSetting(option.id))
    return render_all(state)


def select_style(state: UIState, evt: gr.SelectData) -> tuple:
    option = _picked(STYLES, evt)
    if option is not None and _in_studio(state):
        state = apply_selection(state, SelectStyle(option.id))
    return render_all(state)
