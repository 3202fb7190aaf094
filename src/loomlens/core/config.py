"""Configuration management for Loom Lens.

This module provides centralized configuration management using Pydantic Settings.
Configuration is loaded from environment variables with the LOOMLENS_ prefix,
allowing easy customization without code changes.

Environment Variable Loading
-----------------------------
Configuration values are loaded in the following priority order:
1. Environment variables (LOOMLENS_* prefix)
2. .env file in the project root
3. Default values defined in LoomLensConfig

The API key is the one exception to the prefix rule. It is read from
GEMINI_API_KEY, API_KEY or LOOMLENS_API_KEY, whichever is set first.

Example .env file:
    GEMINI_API_KEY=your-key-here
    LOOMLENS_IMAGE_MODEL_ID=gemini-2.5-flash-image
    LOOMLENS_OUTPUTS_DIR=outputs

Global Configuration Instance
------------------------------
A global `config` instance is created automatically at module import time.
A missing API key does not fail here; it fails the first generation call.

Usage Example
-------------
    from loomlens.core.config import config

    print(config.image_model_id)
    print(config.outputs_dir)
"""

from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoomLensConfig(BaseSettings):
    """Main configuration for Loom Lens.

    Attributes
    ----------
    Image Service Settings:
        api_key : str | None
            Key for the image generation service (GEMINI_API_KEY)
        image_model_id : str
            Model identifier used for every synthesis call
        default_image_adapter : str
            Name of the registered image adapter to use

    Workflow Settings:
        keep_custom_models_on_reset : bool
            Keep uploaded custom models when the user starts over

    Paths:
        outputs_dir : Path
            Directory where downloaded mockups are written

    UI Settings:
        gradio_server_name : str
            Server bind address (0.0.0.0 for local network)
        gradio_server_port : int
            Server port (1024-65535)
        gradio_share : bool
            Create public gradio.live link (keep False for local-only)

    Examples
    --------
    Create a custom configuration:

        >>> custom_config = LoomLensConfig(
        ...     api_key="test-key",
        ...     keep_custom_models_on_reset=True,
        ... )
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="LOOMLENS_",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
    )

    # Image service settings
    api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("api_key", "GEMINI_API_KEY", "API_KEY", "LOOMLENS_API_KEY"),
        description="API key for the image generation service",
    )
    image_model_id: str = Field(
        default="gemini-2.5-flash-image",
        description="Model identifier used for every generation and edit call",
    )
    default_image_adapter: str = Field(
        default="Gemini-Image",
        description="Registered image adapter used by new sessions",
    )

    # Workflow settings
    keep_custom_models_on_reset: bool = Field(
        default=False,
        description="Keep uploaded custom models when starting over",
    )

    # Paths
    outputs_dir: Path = Field(
        default=Path("outputs"),
        description="Directory to save downloaded mockups",
    )

    # UI settings
    gradio_server_name: str = Field(
        default="0.0.0.0",
        description="Server bind address (0.0.0.0 for local network)",
    )
    gradio_server_port: int = Field(
        default=7860,
        description="Server port",
        ge=1024,
        le=65535,
    )
    gradio_share: bool = Field(
        default=False,
        description="Create public gradio.live link (keep False for local-only)",
    )

    def __init__(self, **kwargs):
        """Initialize configuration and create the outputs directory.

        Args:
            **kwargs: Configuration overrides (typically from environment variables)
        """
        super().__init__(**kwargs)
        self.outputs_dir.mkdir(parents=True, exist_ok=True)

    @property
    def has_api_key(self) -> bool:
        """Whether an API key is configured."""
        return bool(self.api_key and self.api_key.strip())


# Global configuration instance
# Loads values from environment variables (LOOMLENS_* prefix) and .env file.
config = LoomLensConfig()
