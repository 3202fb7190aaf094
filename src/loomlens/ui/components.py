"""Reusable UI rendering helpers for the Loom Lens Gradio interface.

The studio shows each catalog as a gr.Gallery of option cards. These helpers
turn options and the current selection into gallery items and markdown, so
every handler renders the same way.
"""

from typing import Any

import gradio as gr

from loomlens.core.catalog import SETTINGS, STYLES, CustomModel, Option
from loomlens.core.generation import GeneratedImage
from loomlens.core.selection import (
    SelectionState,
    active_model,
    all_models,
    available_poses,
    can_generate,
    find_setting,
    find_style,
    missing_requirements,
    selected_poses,
)

from .models import STEP_LABELS, VIEW_STEPS, UIState, WorkflowView

SELECTED_MARK = "✓"
POSE_MARKS = ["①", "②", "③"]


def option_thumbnail(option: Option) -> Any:
    """Gallery image for an option.

    Presets use their thumbnail URL; custom models show the uploaded photo.
    """
    if isinstance(option, CustomModel):
        return option.reference_image.to_pil()
    return option.thumbnail


def option_caption(option: Option, marker: str = "") -> str:
    caption = f"{option.name} · {option.description}"
    return f"{marker} {caption}" if marker else caption


def option_gallery_items(options, selected_id: str | None) -> list[tuple[Any, str]]:
    """Gallery items for a single-choice catalog, marking the selection."""
    return [
        (
            option_thumbnail(option),
            option_caption(option, SELECTED_MARK if option.id == selected_id else ""),
        )
        for option in options
    ]


def pose_gallery_items(options, selected_ids: tuple[str, ...]) -> list[tuple[Any, str]]:
    """Gallery items for poses, numbering selections in pick order."""
    items = []
    for option in options:
        marker = ""
        if option.id in selected_ids:
            marker = POSE_MARKS[selected_ids.index(option.id)]
        items.append((option_thumbnail(option), option_caption(option, marker)))
    return items


def render_steps(view: WorkflowView) -> str:
    """Markdown step indicator (Upload, Configure, Generate, Result)."""
    current = VIEW_STEPS[view]
    parts = []
    for number, label in enumerate(STEP_LABELS, start=1):
        if number < current:
            parts.append(f"✅ {label}")
        elif number == current:
            parts.append(f"**{number}. {label}**")
        else:
            parts.append(f"{number}. {label}")
    return " → ".join(parts)


def selection_summary(selection: SelectionState) -> str:
    """Markdown summary of the current configuration."""
    model = active_model(selection)
    poses = selected_poses(selection)
    setting = find_setting(selection.setting_id)
    style = find_style(selection.style_id)

    lines = [
        f"**Model:** {model.name if model else 'Not selected'}",
        f"**Poses:** {', '.join(p.name for p in poses) if poses else 'Not selected'}",
        f"**Setting:** {setting.name if setting else 'Not selected'}",
        f"**Style:** {style.name if style else 'Not selected'}",
    ]

    missing = missing_requirements(selection)
    if missing:
        lines.append(f"\n*Still needed: {', '.join(missing)}*")
    else:
        count = len(poses)
        lines.append(f"\n✨ Ready to generate {count} mockup{'s' if count != 1 else ''}")
    return "\n".join(lines)


def result_gallery_items(results: list[GeneratedImage]) -> list[tuple[Any, str]]:
    return [
        (result.image.to_pil(), f"#{index + 1} · {result.created_at:%H:%M:%S}")
        for index, result in enumerate(results)
    ]


def render_view_visibility(view: WorkflowView) -> tuple[dict, dict, dict, dict, dict]:
    """Visibility updates for (upload, studio, generating, results, editor) groups."""
    return (
        gr.update(visible=view is WorkflowView.IDLE),
        gr.update(visible=view is WorkflowView.CONFIGURING),
        gr.update(visible=view is WorkflowView.DISPATCHING),
        gr.update(visible=view in (WorkflowView.REVIEWING, WorkflowView.EDITING)),
        gr.update(visible=view is WorkflowView.EDITING),
    )


def render_studio(state: UIState) -> tuple:
    """Updates for every studio component.

    Returns:
        Tuple of (model_gallery, pose_gallery, setting_gallery, style_gallery,
        summary, generate_button, source_preview)
    """
    selection = state.selection
    model_selected = selection.model_id is not None

    return (
        gr.update(value=option_gallery_items(all_models(selection), selection.model_id)),
        gr.update(
            value=pose_gallery_items(available_poses(selection), selection.pose_ids),
            # Poses are inert until a model is chosen
            label="Poses (up to 3)" if model_selected else "Poses (select a model first)",
        ),
        gr.update(value=option_gallery_items(SETTINGS, selection.setting_id)),
        gr.update(value=option_gallery_items(STYLES, selection.style_id)),
        gr.update(value=selection_summary(selection)),
        gr.update(interactive=can_generate(selection) and not state.busy),
        gr.update(
            value=selection.source_image.to_pil() if selection.source_image else None
        ),
    )


def render_results(state: UIState) -> tuple:
    """Updates for the results view.

    Returns:
        Tuple of (results_gallery, editor_preview, edit_prompt, result_info)
    """
    editing = state.editing_image
    count = len(state.results)
    info = (
        f"**{count} mockup{'s' if count != 1 else ''}** · "
        "select an image to edit or download it"
        if count
        else "*No images were generated. Go back to the studio and try again.*"
    )
    return (
        gr.update(value=result_gallery_items(state.results)),
        gr.update(value=editing.image.to_pil() if editing else None),
        gr.update(value=state.edit_prompt),
        gr.update(value=info),
    )


def render_all(state: UIState) -> tuple:
    """State plus updates for every component wired to ALL_OUTPUTS in the app.

    Returns:
        Tuple of (state, 5 view groups, step indicator, loading message,
        7 studio components, 4 results components)
    """
    return (
        state,
        *render_view_visibility(state.view),
        gr.update(value=render_steps(state.view)),
        gr.update(value=f"### {state.loading_message}" if state.loading_message else ""),
        *render_studio(state),
        *render_results(state),
    )
