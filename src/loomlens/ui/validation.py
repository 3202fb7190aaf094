"""Validation utilities for Loom Lens UI inputs."""

import logging
from pathlib import Path

from loomlens.core.images import ImageAttachment, ImageDecodeError, load_image_file
from loomlens.core.selection import SelectionState, missing_requirements

logger = logging.getLogger(__name__)


class ValidationError(Exception):
    """User-friendly validation error.

    This exception is raised when user input fails validation.
    The message is intended to be displayed directly to the user.
    """

    pass


def validate_selection(selection: SelectionState) -> None:
    """Ensure every field required for generation is set.

    The generate button is disabled until this passes, so reaching the error
    means the UI and the state disagree.

    Args:
        selection: Selection to check

    Raises:
        ValidationError: Naming the missing fields
    """
    missing = missing_requirements(selection)
    if missing:
        raise ValidationError(f"Please select a {', '.join(missing)} before generating")


def validate_edit_instruction(instruction: str | None, max_length: int = 2000) -> str:
    """Validate an edit instruction.

    Args:
        instruction: Instruction text from the edit box
        max_length: Maximum allowed length

    Returns:
        The stripped instruction

    Raises:
        ValidationError: If the instruction is empty or too long
    """
    text = (instruction or "").strip()
    if not text:
        raise ValidationError("Please describe the edit you want to make")
    if len(text) > max_length:
        raise ValidationError(
            f"Instruction is too long ({len(text)} characters). Maximum is {max_length} characters."
        )
    return text


def validate_upload(path: str | Path | None) -> ImageAttachment:
    """Load an uploaded image, translating decode failures.

    Args:
        path: File path from the upload component

    Returns:
        ImageAttachment for the upload

    Raises:
        ValidationError: If nothing was uploaded or it is not an image
    """
    if not path:
        raise ValidationError("No image uploaded")
    try:
        return load_image_file(path)
    except ImageDecodeError as e:
        logger.warning(f"Rejected upload {path}: {e}")
        raise ValidationError(
            "Unsupported or corrupted image. Please upload a PNG, JPEG or WEBP."
        ) from e
