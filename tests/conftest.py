"""Shared pytest fixtures for Loom Lens tests."""

import io
import shutil
import tempfile
from pathlib import Path
from typing import Generator

import pytest
from PIL import Image

from loomlens.core.config import LoomLensConfig
from loomlens.core.images import ImageAttachment
from loomlens.core.model_adapters import ImageAdapterBase, SynthesisRequest
from loomlens.core.selection import (
    SelectionState,
    select_model,
    select_setting,
    select_style,
    set_source_image,
    toggle_pose,
)
from loomlens.ui.models import UIState


def make_png(color: str = "red", size: tuple[int, int] = (8, 8)) -> bytes:
    """Encode a solid-color PNG."""
    buffer = io.BytesIO()
    Image.new("RGB", size, color).save(buffer, format="PNG")
    return buffer.getvalue()


class FakeImageAdapter(ImageAdapterBase):
    """In-memory image adapter that records every request.

    ``responses`` is consumed one entry per synthesize() call. An entry can be
    a list of images to return or an exception to raise. Once exhausted, each
    call returns a single fresh PNG.
    """

    name = "Fake-Image"
    description = "Test double"

    def __init__(self, config: LoomLensConfig, responses=None, ready_error=None):
        super().__init__(config)
        self.requests: list[SynthesisRequest] = []
        self.responses = list(responses or [])
        self.ready_error = ready_error

    def ensure_ready(self) -> None:
        if self.ready_error is not None:
            raise self.ready_error

    def synthesize(self, request: SynthesisRequest) -> list[ImageAttachment]:
        self.requests.append(request)
        if self.responses:
            response = self.responses.pop(0)
            if isinstance(response, Exception):
                raise response
            return response
        return [ImageAttachment("image/png", make_png("blue"))]


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files.

    Yields:
        Path to temporary directory

    Cleanup:
        Directory is removed after test completes
    """
    temp_path = Path(tempfile.mkdtemp())
    try:
        yield temp_path
    finally:
        shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def test_config(temp_dir: Path) -> LoomLensConfig:
    """Create a test configuration writing into a temporary directory.

    Args:
        temp_dir: Temporary directory from fixture

    Returns:
        LoomLensConfig instance for testing
    """
    return LoomLensConfig(
        api_key="test-key",
        outputs_dir=temp_dir / "outputs",
        _env_file=None,
    )


@pytest.fixture
def png_bytes() -> bytes:
    return make_png()


@pytest.fixture
def clothing_image(png_bytes: bytes) -> ImageAttachment:
    """A small PNG standing in for an uploaded clothing photo."""
    return ImageAttachment("image/png", png_bytes)


@pytest.fixture
def reference_image() -> ImageAttachment:
    """A small PNG standing in for an uploaded model photo."""
    return ImageAttachment("image/png", make_png("green"))


@pytest.fixture
def fake_adapter(test_config: LoomLensConfig) -> FakeImageAdapter:
    return FakeImageAdapter(test_config)


@pytest.fixture
def ready_selection(clothing_image: ImageAttachment) -> SelectionState:
    """A complete selection: Sofia, two poses, urban street, editorial."""
    state = set_source_image(SelectionState(), clothing_image)
    state = select_model(state, "model_f_1")
    state = toggle_pose(state, "pose_walking")
    state = toggle_pose(state, "pose_stand_front")
    state = select_setting(state, "set_urban")
    return select_style(state, "style_editorial")


@pytest.fixture
def ui_state(fake_adapter: FakeImageAdapter) -> UIState:
    """Fresh UI state wired to the fake adapter."""
    return UIState(image_adapter=fake_adapter)


@pytest.fixture
def png_factory():
    """Factory for solid-color PNG bytes: ``png_factory("blue")``."""
    return make_png
