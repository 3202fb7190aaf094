"""Option types and the built-in photoshoot catalogs.

Every option carries a prompt fragment, a canonical snippet inserted verbatim
into generation prompts. Model options come in two variants:

- PresetModel: a built-in person or object display with its own mode
- CustomModel: a user-uploaded reference photo, always treated as a person

Both expose ``effective_mode``, which is what pose filtering uses.
"""

import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Literal

from .images import ImageAttachment


class PresentationMode(str, Enum):
    """Whether the subject is a person or an inanimate display."""

    MODEL = "model"
    OBJECT = "object"


@dataclass(frozen=True)
class Option:
    """Base shape shared by every catalog entry."""

    id: str
    name: str
    thumbnail: str
    description: str
    prompt_fragment: str


@dataclass(frozen=True)
class PresetModel(Option):
    """Built-in model from the catalog."""

    mode: PresentationMode
    gender: Literal["male", "female", "neutral"] | None = None

    @property
    def effective_mode(self) -> PresentationMode:
        return self.mode


CUSTOM_MODEL_NAME = "Custom Model"
CUSTOM_MODEL_DESCRIPTION = "User uploaded"
CUSTOM_MODEL_FRAGMENT = "the person in the reference image"


@dataclass(frozen=True)
class CustomModel(Option):
    """Model created from a user-uploaded reference photo."""

    reference_image: ImageAttachment

    @property
    def effective_mode(self) -> PresentationMode:
        # Uploaded references are always people
        return PresentationMode.MODEL

    @classmethod
    def from_upload(cls, image: ImageAttachment) -> "CustomModel":
        """Create a custom model from an uploaded reference image."""
        return cls(
            id=f"custom_{uuid.uuid4().hex[:12]}",
            name=CUSTOM_MODEL_NAME,
            thumbnail=image.to_data_url(),
            description=CUSTOM_MODEL_DESCRIPTION,
            prompt_fragment=CUSTOM_MODEL_FRAGMENT,
            reference_image=image,
        )


ModelOption = PresetModel | CustomModel


@dataclass(frozen=True)
class PoseOption(Option):
    """Pose restricted to a set of presentation modes."""

    allowed_modes: frozenset[PresentationMode]

    def admits(self, mode: PresentationMode) -> bool:
        return mode in self.allowed_modes


@dataclass(frozen=True)
class SettingOption(Option):
    category: Literal["indoor", "outdoor", "studio", "abstract"]


@dataclass(frozen=True)
class StyleOption(Option):
    intensity: Literal["natural", "cinematic", "minimalist"]


def unsplash_url(photo_id: str) -> str:
    return f"https://images.unsplash.com/photo-{photo_id}?auto=format&fit=crop&w=300&q=80"


_PERSON = frozenset({PresentationMode.MODEL})
_OBJECT = frozenset({PresentationMode.OBJECT})

PRESET_MODELS: tuple[PresetModel, ...] = (
    PresetModel(
        id="model_f_1",
        name="Sofia",
        mode=PresentationMode.MODEL,
        gender="female",
        thumbnail=unsplash_url("1534528741775-53994a69daeb"),
        description="Studio Model",
        prompt_fragment=(
            "a professional female fashion model with light skin tone and neutral expression"
        ),
    ),
    PresetModel(
        id="model_f_2",
        name="Chloe",
        mode=PresentationMode.MODEL,
        gender="female",
        thumbnail=unsplash_url("1524504388940-b1c1722653e1"),
        description="Editorial Model",
        prompt_fragment="a high-fashion female model with distinctive features and confident gaze",
    ),
    PresetModel(
        id="model_m_1",
        name="Marcus",
        mode=PresentationMode.MODEL,
        gender="male",
        thumbnail=unsplash_url("1506794778202-cad84cf45f1d"),
        description="Athletic Model",
        prompt_fragment="a professional male fashion model with athletic build and confident gaze",
    ),
    PresetModel(
        id="model_m_2",
        name="David",
        mode=PresentationMode.MODEL,
        gender="male",
        thumbnail=unsplash_url("1500648767791-00dcc994a43e"),
        description="Casual Model",
        prompt_fragment="a relaxed male model with a friendly expression and casual stance",
    ),
    PresetModel(
        id="obj_hanger_1",
        name="Hanger",
        mode=PresentationMode.OBJECT,
        thumbnail=unsplash_url("1517705008128-16196a296a18"),
        description="Minimalist Display",
        prompt_fragment="hanging on a high-quality wooden hanger",
    ),
    PresetModel(
        id="obj_desk_1",
        name="Flat Lay",
        mode=PresentationMode.OBJECT,
        thumbnail=unsplash_url("1493723843689-d988e3659496"),
        description="Surface Fold",
        prompt_fragment="neatly folded and placed on a flat surface",
    ),
)

POSES: tuple[PoseOption, ...] = (
    PoseOption(
        id="pose_stand_front",
        name="Standing",
        allowed_modes=_PERSON,
        thumbnail=unsplash_url("1515886657613-9f3515b0c78f"),
        description="Front facing.",
        prompt_fragment="standing facing the camera, hands relaxed by sides, symmetrical pose",
    ),
    PoseOption(
        id="pose_walking",
        name="Walking",
        allowed_modes=_PERSON,
        thumbnail=unsplash_url("1469334031218-e382a71b716b"),
        description="Dynamic motion.",
        prompt_fragment="walking towards the camera, dynamic movement in fabric, one leg forward",
    ),
    PoseOption(
        id="pose_sitting",
        name="Sitting",
        allowed_modes=_PERSON,
        thumbnail=unsplash_url("1534030347209-7147fd69a398"),
        description="Relaxed stool.",
        prompt_fragment="sitting casually on a minimal stool, one leg crossed, relaxed posture",
    ),
    PoseOption(
        id="pose_side",
        name="Profile",
        allowed_modes=_PERSON,
        thumbnail=unsplash_url("1502323777036-f29e3972d82f"),
        description="Side view.",
        prompt_fragment="standing in side profile view, highlighting the silhouette",
    ),
    PoseOption(
        id="pose_flat_straight",
        name="Symmetrical",
        allowed_modes=_OBJECT,
        thumbnail=unsplash_url("1550614000-4b9519e02a15"),
        description="Perfectly aligned.",
        prompt_fragment="arranged in a perfectly symmetrical flat lay, showing full garment shape",
    ),
    PoseOption(
        id="pose_wrinkled_art",
        name="Artistic",
        allowed_modes=_OBJECT,
        thumbnail=unsplash_url("1489987707025-afc232f7ea0f"),
        description="Natural folds.",
        prompt_fragment="arranged with artistic natural folds and wrinkles for texture",
    ),
)

SETTINGS: tuple[SettingOption, ...] = (
    SettingOption(
        id="set_studio_white",
        name="Pure Studio",
        category="studio",
        thumbnail=unsplash_url("1581850518616-bcb8077a2336"),
        description="Infinity white.",
        prompt_fragment=(
            "in a professional photography studio with an infinity white background "
            "and soft high-key lighting"
        ),
    ),
    SettingOption(
        id="set_urban",
        name="Urban Street",
        category="outdoor",
        thumbnail=unsplash_url("1449824913935-59a10b8d2000"),
        description="Blurred city.",
        prompt_fragment=(
            "on a busy city street with blurred urban architecture in the background, "
            "natural daylight"
        ),
    ),
    SettingOption(
        id="set_nature",
        name="Golden Hour",
        category="outdoor",
        thumbnail=unsplash_url("1470252649378-9c29740c9fa8"),
        description="Warm field.",
        prompt_fragment=(
            "in a natural field during golden hour with warm sun flares and organic background"
        ),
    ),
    SettingOption(
        id="set_ind_loft",
        name="Industrial",
        category="indoor",
        thumbnail=unsplash_url("1505691938895-1cd1027d1a58"),
        description="Concrete loft.",
        prompt_fragment="inside a modern industrial loft with concrete walls and window shadows",
    ),
)

STYLES: tuple[StyleOption, ...] = (
    StyleOption(
        id="style_commercial",
        name="E-Commerce",
        intensity="natural",
        thumbnail=unsplash_url("1441986300917-64674bd600d8"),
        description="Clean & Sharp.",
        prompt_fragment=(
            "shot with a 85mm lens, f/8 aperture, extremely sharp details, "
            "4k commercial product photography, true color"
        ),
    ),
    StyleOption(
        id="style_editorial",
        name="Editorial",
        intensity="cinematic",
        thumbnail=unsplash_url("1496747611176-843222e1e57c"),
        description="Moody & Bold.",
        prompt_fragment=(
            "cinematic editorial fashion photography, dramatic contrast, moody atmosphere, "
            "color graded, film grain"
        ),
    ),
    StyleOption(
        id="style_minimal",
        name="Minimal",
        intensity="minimalist",
        thumbnail=unsplash_url("1494438639946-1ebd1d20bf85"),
        description="Soft & Pastel.",
        prompt_fragment=(
            "minimalist aesthetic, soft pastel color palette, low contrast, dreamy atmosphere"
        ),
    ),
)


def find_option(options, option_id: str | None):
    """Look up an option by id, returning None when absent."""
    if option_id is None:
        return None
    return next((option for option in options if option.id == option_id), None)
