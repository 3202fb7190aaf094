"""UI event handlers organized by feature area.

This package provides handlers for all Gradio UI events, organized into logical modules:
- upload: Clothing image and custom model uploads
- studio: Model, pose, setting and style selection
- generation: Mockup generation and workflow navigation
- editing: Result editing and download

Every handler except download_result returns render_all(state), matching the
ALL_OUTPUTS component list wired up in app.py.
"""

from .editing import (
    cancel_edit,
    download_result,
    select_result,
    submit_edit,
)
from .generation import (
    back_to_studio_handler,
    run_generation,
    start_generation,
    start_over_handler,
)
from .studio import (
    select_model,
    select_setting,
    select_style,
    toggle_pose,
)
from .upload import (
    upload_clothing,
    upload_custom_model,
)

__all__ = [
    # Upload handlers
    "upload_clothing",
    "upload_custom_model",
    # Studio handlers
    "select_model",
    "select_setting",
    "select_style",
    "toggle_pose",
    # Generation handlers
    "back_to_studio_handler",
    "run_generation",
    "start_generation",
    "start_over_handler",
    # Editing handlers
    "cancel_edit",
    "download_result",
    "select_result",
    "submit_edit",
]
