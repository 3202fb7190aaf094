"""Loom Lens - Virtual photoshoot mockups for clothing images."""

__version__ = "0.1.0"

from loomlens.core.config import LoomLensConfig, config
from loomlens.core.model_adapters import ImageAdapterBase, adapter_registry

# Import adapters to ensure they're registered
from loomlens.core.adapters import GeminiImageAdapter  # noqa: F401

__all__ = [
    "ImageAdapterBase",
    "adapter_registry",
    "LoomLensConfig",
    "config",
    "GeminiImageAdapter",
]
