"""Image intake, conversion and download helpers.

Images travel through Loom Lens as ImageAttachment values: a MIME type plus the
raw encoded bytes. This is the shape the image service consumes and returns,
so uploads are converted once on intake and never re-encoded until download.
"""

import base64
import io
import logging
from dataclasses import dataclass
from pathlib import Path

from PIL import Image, UnidentifiedImageError

logger = logging.getLogger(__name__)

# Formats the image service accepts as-is. Anything else Pillow can decode
# is re-encoded to PNG on intake.
SUPPORTED_MIME_TYPES = ("image/png", "image/jpeg", "image/webp")

DEFAULT_MIME_TYPE = "image/jpeg"
RESPONSE_MIME_TYPE = "image/png"

DOWNLOAD_PREFIX = "loom-lens-mockup"


class ImageDecodeError(ValueError):
    """Raised when an uploaded file cannot be decoded as an image."""


@dataclass(frozen=True)
class ImageAttachment:
    """An encoded image with its media type."""

    mime_type: str
    data: bytes

    def to_base64(self) -> str:
        return base64.b64encode(self.data).decode("ascii")

    def to_data_url(self) -> str:
        """Encode as an embeddable data URL."""
        return f"data:{self.mime_type};base64,{self.to_base64()}"

    def to_pil(self) -> Image.Image:
        """Decode into a PIL image (loaded eagerly)."""
        image = Image.open(io.BytesIO(self.data))
        image.load()
        return image

    def __repr__(self) -> str:
        return f"ImageAttachment(mime_type={self.mime_type!r}, size={len(self.data)})"


def detect_mime_type(data: bytes, default: str = DEFAULT_MIME_TYPE) -> str:
    """Sniff the MIME type of encoded image bytes from their magic numbers.

    Args:
        data: Encoded image bytes
        default: Type returned when the bytes are unrecognised

    Returns:
        Detected MIME type, or ``default``
    """
    if data.startswith(b"\xff\xd8"):
        return "image/jpeg"
    if data.startswith(b"\x89PNG"):
        return "image/png"
    if data.startswith(b"GIF"):
        return "image/gif"
    if data[8:12] == b"WEBP":
        return "image/webp"
    return default


def encode_png(image: Image.Image) -> bytes:
    buffer = io.BytesIO()
    if image.mode not in ("RGB", "RGBA", "L", "LA", "P"):
        image = image.convert("RGBA")
    image.save(buffer, format="PNG")
    return buffer.getvalue()


def load_image_bytes(data: bytes) -> ImageAttachment:
    """Convert uploaded bytes into an ImageAttachment.

    Args:
        data: Raw file contents

    Returns:
        ImageAttachment with the original bytes for supported formats,
        or PNG-encoded bytes for anything else Pillow can decode

    Raises:
        ImageDecodeError: If the bytes are not a decodable image
    """
    try:
        with Image.open(io.BytesIO(data)) as image:
            image.load()
            mime_type = Image.MIME.get(image.format or "", "")
            if mime_type in SUPPORTED_MIME_TYPES:
                return ImageAttachment(mime_type=mime_type, data=data)

            logger.info(f"Re-encoding {image.format or 'unknown'} upload as PNG")
            return ImageAttachment(mime_type="image/png", data=encode_png(image))
    except (UnidentifiedImageError, OSError) as e:
        raise ImageDecodeError(f"Could not read image: {e}") from e


def load_image_file(path: str | Path) -> ImageAttachment:
    """Read an uploaded image file from disk.

    Args:
        path: Path of the uploaded file

    Returns:
        ImageAttachment for the file

    Raises:
        ImageDecodeError: If the file is missing or not a decodable image
    """
    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError as e:
        raise ImageDecodeError(f"Could not read {path.name}: {e}") from e
    attachment = load_image_bytes(data)
    logger.info(f"Loaded {path.name} as {attachment.mime_type} ({len(attachment.data)} bytes)")
    return attachment


def download_filename(index: int) -> str:
    """File name used when a mockup is downloaded."""
    return f"{DOWNLOAD_PREFIX}-{index}.png"


def save_generated_image(image: ImageAttachment, directory: Path, index: int) -> Path:
    """Write a generated image to disk as PNG.

    Args:
        image: Image to save
        directory: Target directory (created if missing)
        index: Position of the image in the result list

    Returns:
        Path of the written file
    """
    directory.mkdir(parents=True, exist_ok=True)
    save_path = directory / download_filename(index)

    if image.mime_type == "image/png":
        save_path.write_bytes(image.data)
    else:
        save_path.write_bytes(encode_png(image.to_pil()))

    logger.info(f"Saved mockup to: {save_path}")
    return save_path
