"""Tests for loomlens.core.config: configuration management.

Tests cover:
- Default values for all configuration fields.
- Environment variable overrides via the LOOMLENS_ prefix.
- API key lookup from GEMINI_API_KEY and API_KEY.
- Automatic outputs directory creation on initialisation.
- Pydantic validation constraints (port range).
"""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from loomlens.core.config import LoomLensConfig

KEY_VARS = ("GEMINI_API_KEY", "API_KEY", "LOOMLENS_API_KEY")


@pytest.fixture
def clean_env(monkeypatch):
    """Remove any API key variables from the environment."""
    for name in KEY_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestConfigDefaults:
    """Verify that LoomLensConfig provides sensible defaults."""

    def test_default_model(self, clean_env, temp_dir: Path):
        cfg = LoomLensConfig(outputs_dir=temp_dir, _env_file=None)

        assert cfg.image_model_id == "gemini-2.5-flash-image"
        assert cfg.default_image_adapter == "Gemini-Image"

    def test_no_key_by_default(self, clean_env, temp_dir: Path):
        """A missing key must not fail configuration loading."""
        cfg = LoomLensConfig(outputs_dir=temp_dir, _env_file=None)

        assert cfg.api_key is None
        assert not cfg.has_api_key

    def test_custom_models_cleared_on_reset_by_default(self, test_config: LoomLensConfig):
        assert test_config.keep_custom_models_on_reset is False

    def test_default_server_settings(self, test_config: LoomLensConfig):
        assert test_config.gradio_server_name == "0.0.0.0"
        assert test_config.gradio_server_port == 7860
        assert test_config.gradio_share is False


class TestApiKey:
    """Verify the API key is read from the supported variables."""

    @pytest.mark.parametrize("name", KEY_VARS)
    def test_key_from_env(self, clean_env, temp_dir: Path, name: str):
        clean_env.setenv(name, "env-key")

        cfg = LoomLensConfig(outputs_dir=temp_dir, _env_file=None)

        assert cfg.api_key == "env-key"
        assert cfg.has_api_key

    def test_key_from_kwarg(self, test_config: LoomLensConfig):
        assert test_config.api_key == "test-key"

    def test_blank_key_is_missing(self, clean_env, temp_dir: Path):
        cfg = LoomLensConfig(api_key="  ", outputs_dir=temp_dir, _env_file=None)

        assert not cfg.has_api_key


class TestEnvOverrides:
    """Verify LOOMLENS_ prefixed environment variables override defaults."""

    def test_model_override(self, monkeypatch, temp_dir: Path):
        monkeypatch.setenv("LOOMLENS_IMAGE_MODEL_ID", "another-image-model")

        cfg = LoomLensConfig(outputs_dir=temp_dir, _env_file=None)

        assert cfg.image_model_id == "another-image-model"

    def test_keep_custom_models_override(self, monkeypatch, temp_dir: Path):
        monkeypatch.setenv("LOOMLENS_KEEP_CUSTOM_MODELS_ON_RESET", "true")

        cfg = LoomLensConfig(outputs_dir=temp_dir, _env_file=None)

        assert cfg.keep_custom_models_on_reset is True

    def test_port_override(self, monkeypatch, temp_dir: Path):
        monkeypatch.setenv("LOOMLENS_GRADIO_SERVER_PORT", "8080")

        cfg = LoomLensConfig(outputs_dir=temp_dir, _env_file=None)

        assert cfg.gradio_server_port == 8080


class TestDirectories:
    """Verify the outputs directory is created on initialisation."""

    def test_outputs_dir_created(self, temp_dir: Path):
        outputs = temp_dir / "nested" / "outputs"

        LoomLensConfig(outputs_dir=outputs, _env_file=None)

        assert outputs.is_dir()


class TestValidation:
    """Verify field constraints."""

    @pytest.mark.parametrize("port", [80, 70000])
    def test_port_out_of_range(self, temp_dir: Path, port: int):
        with pytest.raises(ValidationError):
            LoomLensConfig(gradio_server_port=port, outputs_dir=temp_dir, _env_file=None)
