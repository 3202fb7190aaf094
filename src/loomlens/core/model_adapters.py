"""Base classes and registry for image service adapters.

Loom Lens delegates all image synthesis to an external generative service. An
adapter wraps one such service behind a single call: send a prompt with an
ordered list of image attachments, get zero or more images back.

Usage Example
-------------
    >>> from loomlens.core.model_adapters import adapter_registry, SynthesisRequest
    >>> from loomlens.core.config import config
    >>>
    >>> adapter = adapter_registry.instantiate("Gemini-Image", config)
    >>> images = adapter.synthesize(
    ...     SynthesisRequest(prompt="a red dress on a hanger", attachments=(clothing,))
    ... )

See Also
--------
- GeminiImageAdapter: Adapter for the Gemini image model
- LoomLensConfig: Configuration options
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from .config import LoomLensConfig
from .images import ImageAttachment

logger = logging.getLogger(__name__)


class ServiceError(RuntimeError):
    """The external image service failed or returned nothing usable."""


class MissingCredentialsError(ServiceError):
    """No API key is configured for the image service."""


@dataclass(frozen=True)
class SynthesisRequest:
    """One call to the image service.

    Attributes
    ----------
    prompt : str
        Prompt or instruction text
    attachments : tuple[ImageAttachment, ...]
        Images sent with the prompt, in order
    prompt_last : bool
        Send the text after the images instead of before them
    """

    prompt: str
    attachments: tuple[ImageAttachment, ...] = ()
    prompt_last: bool = False

    def ordered_parts(self) -> list[str | ImageAttachment]:
        """Text and images in the order they are sent."""
        if self.prompt_last:
            return [*self.attachments, self.prompt]
        return [self.prompt, *self.attachments]


class ImageAdapterBase(ABC):
    """Abstract base class for image service adapters.

    Attributes
    ----------
    name : str
        Registry name of the adapter
    description : str
        Brief description of the service
    config : LoomLensConfig
        Configuration object containing service settings
    """

    name: str = "Base Image Adapter"
    description: str = "Base class for image adapters"
    version: str = "0.1.0"

    def __init__(self, config: LoomLensConfig) -> None:
        self.config = config
        logger.info(f"Initialized {self.name} adapter")

    @abstractmethod
    def ensure_ready(self) -> None:
        """Check the adapter can issue calls.

        Raises
        ------
        MissingCredentialsError
            If the service credential is missing
        """

    @abstractmethod
    def synthesize(self, request: SynthesisRequest) -> list[ImageAttachment]:
        """Issue one synthesis call.

        Returns
        -------
        list[ImageAttachment]
            Every image the service returned, possibly none

        Raises
        ------
        ServiceError
            If the call fails
        """

    def get_model_info(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "version": self.version,
        }


class AdapterRegistry:
    """Registry of available image adapters."""

    def __init__(self) -> None:
        self._adapters: dict[str, type[ImageAdapterBase]] = {}

    def register(self, adapter_class: type[ImageAdapterBase]) -> None:
        adapter_name = adapter_class.name

        if adapter_name in self._adapters:
            logger.warning(f"Image adapter '{adapter_name}' is already registered, overwriting")

        self._adapters[adapter_name] = adapter_class
        logger.info(f"Registered image adapter: {adapter_name}")

    def instantiate(self, adapter_name: str, config: LoomLensConfig) -> ImageAdapterBase:
        """Create an instance of a registered adapter.

        Raises
        ------
        KeyError
            If adapter_name is not registered
        """
        if adapter_name not in self._adapters:
            available = ", ".join(self.list_available())
            raise KeyError(
                f"Image adapter '{adapter_name}' not found. Available adapters: {available}"
            )

        instance = self._adapters[adapter_name](config=config)
        logger.info(f"Instantiated image adapter: {adapter_name}")
        return instance

    def get_adapter_class(self, adapter_name: str) -> type[ImageAdapterBase] | None:
        return self._adapters.get(adapter_name)

    def list_available(self) -> list[str]:
        return list(self._adapters.keys())


# Global adapter registry instance
adapter_registry = AdapterRegistry()
