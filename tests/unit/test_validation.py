"""Unit tests for input validation."""

import pytest

from loomlens.core.selection import SelectionState, select_model
from loomlens.ui.validation import (
    ValidationError,
    validate_edit_instruction,
    validate_selection,
    validate_upload,
)


class TestValidateSelection:
    """Tests for validate_selection function."""

    def test_complete_selection_passes(self, ready_selection: SelectionState):
        validate_selection(ready_selection)

    def test_missing_fields_named(self, clothing_image):
        state = select_model(SelectionState(source_image=clothing_image), "model_f_1")

        with pytest.raises(ValidationError) as exc_info:
            validate_selection(state)

        message = str(exc_info.value)
        assert "pose" in message
        assert "setting" in message
        assert "style" in message
        assert "clothing image" not in message


class TestValidateEditInstruction:
    """Tests for validate_edit_instruction function."""

    def test_valid_instruction_stripped(self):
        assert validate_edit_instruction("  make it darker  ") == "make it darker"

    @pytest.mark.parametrize("instruction", [None, "", "   ", "\n\t"])
    def test_empty_instruction(self, instruction):
        with pytest.raises(ValidationError, match="describe the edit"):
            validate_edit_instruction(instruction)

    def test_too_long(self):
        with pytest.raises(ValidationError, match="too long"):
            validate_edit_instruction("a" * 2001)

    def test_custom_max_length(self):
        assert validate_edit_instruction("a" * 10, max_length=10) == "a" * 10

        with pytest.raises(ValidationError):
            validate_edit_instruction("a" * 11, max_length=10)


class TestValidateUpload:
    """Tests for validate_upload function."""

    def test_valid_upload(self, temp_dir, png_bytes):
        path = temp_dir / "item.png"
        path.write_bytes(png_bytes)

        image = validate_upload(str(path))

        assert image.mime_type == "image/png"
        assert image.data == png_bytes

    def test_no_upload(self):
        with pytest.raises(ValidationError, match="No image uploaded"):
            validate_upload(None)

    def test_corrupted_upload(self, temp_dir):
        path = temp_dir / "broken.png"
        path.write_bytes(b"\x89PNG but not really")

        with pytest.raises(ValidationError, match="Unsupported or corrupted image"):
            validate_upload(path)
