"""Unit tests for image intake and download helpers."""

import base64
import io

import pytest
from PIL import Image

from loomlens.core.images import (
    ImageAttachment,
    ImageDecodeError,
    detect_mime_type,
    download_filename,
    load_image_bytes,
    load_image_file,
    save_generated_image,
)


def _encode(fmt: str) -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", (4, 4), "white").save(buffer, format=fmt)
    return buffer.getvalue()


class TestImageAttachment:
    """Tests for ImageAttachment."""

    def test_data_url(self, png_bytes: bytes):
        image = ImageAttachment("image/png", png_bytes)

        assert image.to_data_url() == (
            f"data:image/png;base64,{base64.b64encode(png_bytes).decode('ascii')}"
        )

    def test_to_pil(self, png_bytes: bytes):
        image = ImageAttachment("image/png", png_bytes).to_pil()

        assert image.size == (8, 8)

    def test_repr_hides_bytes(self, png_bytes: bytes):
        text = repr(ImageAttachment("image/png", png_bytes))

        assert "image/png" in text
        assert str(len(png_bytes)) in text


class TestDetectMimeType:
    """Tests for detect_mime_type function."""

    @pytest.mark.parametrize(
        "fmt,expected",
        [
            ("PNG", "image/png"),
            ("JPEG", "image/jpeg"),
            ("WEBP", "image/webp"),
            ("GIF", "image/gif"),
        ],
    )
    def test_detects_format(self, fmt, expected):
        assert detect_mime_type(_encode(fmt)) == expected

    def test_unknown_defaults_to_jpeg(self):
        assert detect_mime_type(b"not an image at all") == "image/jpeg"

    def test_unknown_uses_given_default(self):
        assert detect_mime_type(b"not an image at all", default="image/png") == "image/png"

    def test_known_format_ignores_default(self):
        assert detect_mime_type(_encode("JPEG"), default="image/png") == "image/jpeg"


class TestLoadImage:
    """Tests for load_image_bytes and load_image_file."""

    @pytest.mark.parametrize(
        "fmt,expected", [("PNG", "image/png"), ("JPEG", "image/jpeg"), ("WEBP", "image/webp")]
    )
    def test_supported_formats_kept_verbatim(self, fmt, expected):
        """Test that supported uploads are passed through unchanged."""
        data = _encode(fmt)

        image = load_image_bytes(data)

        assert image.mime_type == expected
        assert image.data == data

    def test_other_formats_reencoded_as_png(self):
        """Test that a BMP upload is converted to PNG."""
        image = load_image_bytes(_encode("BMP"))

        assert image.mime_type == "image/png"
        assert image.data.startswith(b"\x89PNG")

    def test_garbage_raises(self):
        with pytest.raises(ImageDecodeError):
            load_image_bytes(b"definitely not pixels")

    def test_load_file(self, temp_dir, png_bytes: bytes):
        path = temp_dir / "shirt.png"
        path.write_bytes(png_bytes)

        image = load_image_file(path)

        assert image == ImageAttachment("image/png", png_bytes)

    def test_missing_file_raises(self, temp_dir):
        with pytest.raises(ImageDecodeError):
            load_image_file(temp_dir / "missing.png")


class TestDownload:
    """Tests for download naming and saving."""

    def test_download_filename(self):
        assert download_filename(0) == "loom-lens-mockup-0.png"
        assert download_filename(3) == "loom-lens-mockup-3.png"

    def test_save_png_verbatim(self, temp_dir, png_bytes: bytes):
        path = save_generated_image(ImageAttachment("image/png", png_bytes), temp_dir / "out", 2)

        assert path == temp_dir / "out" / "loom-lens-mockup-2.png"
        assert path.read_bytes() == png_bytes

    def test_save_converts_to_png(self, temp_dir):
        """Test that non-PNG results are written as PNG."""
        path = save_generated_image(ImageAttachment("image/jpeg", _encode("JPEG")), temp_dir, 0)

        assert path.read_bytes().startswith(b"\x89PNG")
