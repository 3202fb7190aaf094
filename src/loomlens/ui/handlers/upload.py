"""Clothing and custom model upload handlers."""

import logging

import gradio as gr

from loomlens.core.selection import UploadCustomModel

from ..components import render_all
from ..models import UIState
from ..state import apply_selection, upload_source_image
from ..validation import ValidationError, validate_upload

logger = logging.getLogger(__name__)


def upload_clothing(image_path: str | None, state: UIState) -> tuple:
    """Handle the clothing image upload and open the studio.

    Args:
        image_path: File path from the upload component
        state: UI state

    Returns:
        render_all() outputs
    """
    if not image_path:
        # Fired when the component is cleared
        return render_all(state)

    try:
        image = validate_upload(image_path)
        state = upload_source_image(state, image)
        logger.info(f"Clothing image uploaded ({image.mime_type})")
    except ValidationError as e:
        logger.warning(f"Upload rejected: {e}")
        gr.Warning(str(e))

    return render_all(state)


def upload_custom_model(image_path: str | None, state: UIState) -> tuple:
    """Add an uploaded reference photo as a custom model and select it.

    Args:
        image_path: File path from the upload component
        state: UI state

    Returns:
        render_all() outputs
    """
    if not image_path:
        return render_all(state)

    try:
        image = validate_upload(image_path)
        state = apply_selection(state, UploadCustomModel(image))
    except ValidationError as e:
        logger.warning(f"Custom model upload rejected: {e}")
        gr.Warning(str(e))

    return render_all(state)
