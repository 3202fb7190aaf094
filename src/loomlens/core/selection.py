"""Selection state machine for the photoshoot studio.

The user's choices live in an immutable SelectionState. Every user action is a
pure transition that returns a new state, and everything the UI needs to know
about the selection (which poses to show, whether generation can start) is a
pure function of that state.

Transitions never raise. Unknown ids leave the state unchanged.

Usage Example
-------------
    >>> state = SelectionState()
    >>> state = select_model(state, "model_f_1")
    >>> state = toggle_pose(state, "pose_walking")
    >>> state = reduce(state, SelectSetting("set_urban"))
    >>> can_generate(state)
    False
"""

import logging
from dataclasses import dataclass, replace

from .catalog import (
    POSES,
    PRESET_MODELS,
    SETTINGS,
    STYLES,
    CustomModel,
    ModelOption,
    PoseOption,
    PresentationMode,
    SettingOption,
    StyleOption,
    find_option,
)
from .images import ImageAttachment

logger = logging.getLogger(__name__)

MAX_POSES = 3


@dataclass(frozen=True)
class SelectionState:
    """The user's current photoshoot configuration.

    Invariant: every id in ``pose_ids`` admits the active model's effective mode.
    """

    source_image: ImageAttachment | None = None
    custom_models: tuple[CustomModel, ...] = ()
    model_id: str | None = None
    pose_ids: tuple[str, ...] = ()
    setting_id: str | None = None
    style_id: str | None = None


# ---------------------------------------------------------------------------
# Derived values
# ---------------------------------------------------------------------------


def all_models(state: SelectionState) -> tuple[ModelOption, ...]:
    """Custom models (newest first) followed by the presets."""
    return state.custom_models + PRESET_MODELS


def find_model(state: SelectionState, model_id: str | None) -> ModelOption | None:
    return find_option(all_models(state), model_id)


def find_pose(pose_id: str | None) -> PoseOption | None:
    return find_option(POSES, pose_id)


def find_setting(setting_id: str | None) -> SettingOption | None:
    return find_option(SETTINGS, setting_id)


def find_style(style_id: str | None) -> StyleOption | None:
    return find_option(STYLES, style_id)


def active_model(state: SelectionState) -> ModelOption | None:
    return find_model(state, state.model_id)


def active_mode(state: SelectionState) -> PresentationMode | None:
    """Effective presentation mode of the selected model, if any."""
    model = active_model(state)
    return model.effective_mode if model is not None else None


def selected_poses(state: SelectionState) -> list[PoseOption]:
    """Selected poses in the order the user picked them."""
    return [pose for pose in map(find_pose, state.pose_ids) if pose is not None]


def available_poses(state: SelectionState) -> list[PoseOption]:
    """Poses valid for the active model.

    With no model selected every pose is listed; the UI shows them inert.
    """
    mode = active_mode(state)
    if mode is None:
        return list(POSES)
    return [pose for pose in POSES if pose.admits(mode)]


def missing_requirements(state: SelectionState) -> list[str]:
    """Names of the required fields that are still unset, in workflow order."""
    missing = []
    if state.source_image is None:
        missing.append("clothing image")
    if state.model_id is None:
        missing.append("model")
    if not state.pose_ids:
        missing.append("pose")
    if state.setting_id is None:
        missing.append("setting")
    if state.style_id is None:
        missing.append("style")
    return missing


def can_generate(state: SelectionState) -> bool:
    """True iff image, model, setting, style and at least one pose are set."""
    return not missing_requirements(state)


# ---------------------------------------------------------------------------
# Transitions
# ---------------------------------------------------------------------------


def _poses_compatible(pose_ids: tuple[str, ...], mode: PresentationMode) -> bool:
    for pose_id in pose_ids:
        pose = find_pose(pose_id)
        if pose is None or not pose.admits(mode):
            return False
    return True


def select_model(state: SelectionState, model_id: str) -> SelectionState:
    """Select a model, clearing all poses if any is incompatible with it."""
    model = find_model(state, model_id)
    if model is None:
        logger.debug(f"Ignoring unknown model id: {model_id}")
        return state

    pose_ids = state.pose_ids
    if not _poses_compatible(pose_ids, model.effective_mode):
        logger.info(f"Model {model_id} does not admit selected poses, clearing {len(pose_ids)}")
        pose_ids = ()

    return replace(state, model_id=model.id, pose_ids=pose_ids)


def toggle_pose(state: SelectionState, pose_id: str) -> SelectionState:
    """Add or remove a pose.

    Adding is silently ignored once MAX_POSES are selected, while no model is
    selected, or when the pose does not admit the active model's mode.
    """
    if pose_id in state.pose_ids:
        return replace(state, pose_ids=tuple(p for p in state.pose_ids if p != pose_id))

    pose = find_pose(pose_id)
    mode = active_mode(state)
    if pose is None or mode is None or not pose.admits(mode):
        return state
    if len(state.pose_ids) >= MAX_POSES:
        return state

    return replace(state, pose_ids=state.pose_ids + (pose_id,))


def select_setting(state: SelectionState, setting_id: str) -> SelectionState:
    if find_setting(setting_id) is None:
        return state
    return replace(state, setting_id=setting_id)


def select_style(state: SelectionState, style_id: str) -> SelectionState:
    if find_style(style_id) is None:
        return state
    return replace(state, style_id=style_id)


def set_source_image(state: SelectionState, image: ImageAttachment) -> SelectionState:
    return replace(state, source_image=image)


def upload_custom_model(state: SelectionState, image: ImageAttachment) -> SelectionState:
    """Create a custom model from an upload, put it first and select it."""
    model = CustomModel.from_upload(image)
    logger.info(f"Added custom model: {model.id}")
    state = replace(state, custom_models=(model,) + state.custom_models)
    return select_model(state, model.id)


def reset(state: SelectionState, keep_custom_models: bool = False) -> SelectionState:
    """Discard the source image and all selections."""
    custom_models = state.custom_models if keep_custom_models else ()
    return SelectionState(custom_models=custom_models)


# ---------------------------------------------------------------------------
# Reducer
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SelectModel:
    model_id: str


@dataclass(frozen=True)
class TogglePose:
    pose_id: str


@dataclass(frozen=True)
class SelectSetting:
    setting_id: str


@dataclass(frozen=True)
class SelectStyle:
    style_id: str


@dataclass(frozen=True)
class SetSourceImage:
    image: ImageAttachment


@dataclass(frozen=True)
class UploadCustomModel:
    image: ImageAttachment


@dataclass(frozen=True)
class ResetSelection:
    keep_custom_models: bool = False


SelectionAction = (
    SelectModel
    | TogglePose
    | SelectSetting
    | SelectStyle
    | SetSourceImage
    | UploadCustomModel
    | ResetSelection
)


def reduce(state: SelectionState, action: SelectionAction) -> SelectionState:
    """Apply one action to the selection state.

    Args:
        state: Current selection
        action: Action to apply

    Returns:
        The new selection state

    Raises:
        TypeError: If the action type is not a selection action
    """
    if isinstance(action, SelectModel):
        return select_model(state, action.model_id)
    if isinstance(action, TogglePose):
        return toggle_pose(state, action.pose_id)
    if isinstance(action, SelectSetting):
        return select_setting(state, action.setting_id)
    if isinstance(action, SelectStyle):
        return select_style(state, action.style_id)
    if isinstance(action, SetSourceImage):
        return set_source_image(state, action.image)
    if isinstance(action, UploadCustomModel):
        return upload_custom_model(state, action.image)
    if isinstance(action, ResetSelection):
        return reset(state, keep_custom_models=action.keep_custom_models)
    raise TypeError(f"Unknown selection action: {type(action).__name__}")
