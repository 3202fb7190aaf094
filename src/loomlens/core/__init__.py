"""Core functionality for the Loom Lens virtual photoshoot.

This package holds everything that does not depend on the web UI:

- **catalog.py**: Option types and the built-in model/pose/setting/style catalogs
- **selection.py**: Immutable selection state, pure transitions and derived values
- **prompt_builder.py**: Fixed-structure prompt assembly and mockup tasks
- **generation.py**: Sequential batch dispatch and instruction-based editing
- **images.py**: Upload intake, data-URL conversion and PNG download
- **model_adapters.py**: Image service adapter base class and registry
- **config.py**: Pydantic Settings configuration (LOOMLENS_* environment variables)

Usage Example
-------------
    from loomlens.core import adapter_registry, config
    from loomlens.core.generation import generate_mockups

    adapter = adapter_registry.instantiate(config.default_image_adapter, config)
    result = generate_mockups(selection, adapter)
    for image in result.images:
        print(image.id, image.prompt_used)
"""

# Import adapters to ensure they're registered
from loomlens.core.adapters import GeminiImageAdapter  # noqa: F401
from loomlens.core.config import LoomLensConfig, config
from loomlens.core.model_adapters import (
    ImageAdapterBase,
    MissingCredentialsError,
    ServiceError,
    adapter_registry,
)

__all__ = [
    "ImageAdapterBase",
    "LoomLensConfig",
    "MissingCredentialsError",
    "ServiceError",
    "adapter_registry",
    "config",
]
