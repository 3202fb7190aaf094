"""Prompt assembly for mockup generation and editing.

Every mockup prompt has the same fixed structure, assembled in this order:

1. Task header (preset model or custom reference phrasing)
2. Model fragment (the preset's description or the custom reference)
3. Pose fragment
4. Setting fragment
5. Style fragment
6. Quality and lighting suffix

The image model is sensitive to prompt structure, so the section order and
the wording of each header are part of the contract. Tests pin them.

Attachment order is fixed as well. A custom model sends the reference photo
first and the clothing second; a preset sends only the clothing.
"""

import logging
from dataclasses import dataclass

from .catalog import CustomModel, ModelOption, PoseOption, SettingOption, StyleOption
from .images import ImageAttachment
from .model_adapters import SynthesisRequest
from .selection import (
    SelectionState,
    active_model,
    find_setting,
    find_style,
    selected_poses,
)

logger = logging.getLogger(__name__)

PROMPT_TITLE = "Product Photography Mockup Generation."

QUALITY_SUFFIX = "Lighting should wrap around the fabric naturally. High fidelity, 4k."

SECTION_SEPARATOR = "\n\n"


def _custom_header(model: CustomModel) -> str:
    return "\n".join(
        [
            "TASK:",
            "The first image provided is the REFERENCE MODEL.",
            "The second image provided is the CLOTHING ITEM.",
            "",
            "Generate a photorealistic image of the REFERENCE MODEL wearing the CLOTHING ITEM.",
            f"The clothing item must be worn by {model.prompt_fragment}.",
            "You must preserve the facial features, body type, and skin tone "
            "of the REFERENCE MODEL exactly.",
            "You must preserve the texture, pattern, and logo of the CLOTHING ITEM exactly.",
        ]
    )


def _preset_header(model: ModelOption) -> str:
    return "\n".join(
        [
            "TASK:",
            "Generate a photorealistic fashion mockup displaying the clothing item "
            "provided in the image input.",
            f"The clothing item must be worn by {model.prompt_fragment}.",
        ]
    )


def _pose_section(model: ModelOption, pose: PoseOption) -> str:
    if isinstance(model, CustomModel):
        return f"POSE:\nChange the model's pose to: {pose.prompt_fragment}."
    return f"POSE:\nThe subject is {pose.prompt_fragment}."


def build_mockup_prompt(
    model: ModelOption,
    pose: PoseOption,
    setting: SettingOption,
    style: StyleOption,
) -> str:
    """Build the generation prompt for one pose.

    Args:
        model: Preset or custom model
        pose: Pose to render
        setting: Scene setting
        style: Photographic style

    Returns:
        Prompt text with sections in fixed order
    """
    header = _custom_header(model) if isinstance(model, CustomModel) else _preset_header(model)
    sections = [
        PROMPT_TITLE,
        header,
        _pose_section(model, pose),
        f"SETTING:\nThe scene is located {setting.prompt_fragment}.",
        f"STYLE & QUALITY:\n{style.prompt_fragment}. {QUALITY_SUFFIX}",
    ]
    return SECTION_SEPARATOR.join(sections)


def build_attachments(
    model: ModelOption, clothing: ImageAttachment
) -> tuple[ImageAttachment, ...]:
    """Images sent with a mockup prompt, in order."""
    if isinstance(model, CustomModel):
        return (model.reference_image, clothing)
    return (clothing,)


@dataclass(frozen=True)
class MockupTask:
    """One pose's synthesis call."""

    pose: PoseOption
    prompt: str
    attachments: tuple[ImageAttachment, ...]

    def to_request(self) -> SynthesisRequest:
        return SynthesisRequest(prompt=self.prompt, attachments=self.attachments)


def build_mockup_tasks(state: SelectionState) -> list[MockupTask]:
    """Build one task per selected pose, in selection order.

    Args:
        state: Selection with source image, model, setting, style and poses set

    Returns:
        Ordered list of mockup tasks

    Raises:
        ValueError: If the selection cannot be resolved against the catalogs
    """
    model = active_model(state)
    setting = find_setting(state.setting_id)
    style = find_style(state.style_id)
    poses = selected_poses(state)

    if state.source_image is None or model is None:
        raise ValueError("Invalid configuration selected")
    if setting is None or style is None or not poses:
        raise ValueError("Invalid configuration selected")

    attachments = build_attachments(model, state.source_image)
    tasks = [
        MockupTask(
            pose=pose,
            prompt=build_mockup_prompt(model, pose, setting, style),
            attachments=attachments,
        )
        for pose in poses
    ]
    logger.info(
        f"Built {len(tasks)} mockup task(s) for {model.name} "
        f"({len(attachments)} attachment(s) each)"
    )
    return tasks


def build_edit_request(image: ImageAttachment, instruction: str) -> SynthesisRequest:
    """Edit request: the existing image first, then the instruction."""
    return SynthesisRequest(prompt=instruction, attachments=(image,), prompt_last=True)


def edit_prompt_label(instruction: str, source_id: str) -> str:
    """Prompt text recorded on an edited image."""
    return f'Edit: "{instruction}" based on {source_id}'
