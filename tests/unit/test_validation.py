"""Unit tests for validation utilities."""

import pytest

from retouch.core.encoding import ImagePayload
from retouch.ui.models import MISSING_INPUT_MESSAGE
from retouch.ui.validation import (
    ValidationError,
    validate_edit_inputs,
    validate_instruction_content,
    validate_media_type,
)

ALLOWED = ["image/png", "image/jpeg", "image/webp"]


class TestValidationError:
    """Tests for ValidationError exception."""

    def test_validation_error_is_exception(self):
        """Test that ValidationError is an Exception."""
        assert issubclass(ValidationError, Exception)

    def test_validation_error_message(self):
        """Test that ValidationError preserves error message."""
        msg = "Custom validation error"
        with pytest.raises(ValidationError, match=msg):
            raise ValidationError(msg)


class TestValidateEditInputs:
    """Tests for validate_edit_inputs function."""

    def test_valid_inputs_return_stripped_instruction(self, png_payload):
        assert validate_edit_inputs(png_payload, "  add a hat \n") == "add a hat"

    def test_missing_image(self):
        with pytest.raises(ValidationError, match=MISSING_INPUT_MESSAGE):
            validate_edit_inputs(None, "add a hat")

    def test_empty_image_bytes(self):
        with pytest.raises(ValidationError):
            validate_edit_inputs(ImagePayload(data=b"", media_type="image/png"), "add a hat")

    @pytest.mark.parametrize("instruction", ["", "   ", "\n\t", None])
    def test_blank_instruction(self, png_payload, instruction):
        with pytest.raises(ValidationError, match=MISSING_INPUT_MESSAGE):
            validate_edit_inputs(png_payload, instruction)

    def test_too_long_instruction(self, png_payload):
        with pytest.raises(ValidationError, match="too long"):
            validate_edit_inputs(png_payload, "x" * 10001)


class TestValidateInstructionContent:
    """Tests for validate_instruction_content function."""

    def test_within_limit(self):
        validate_instruction_content("x" * 50, max_length=50)  # Should not raise

    def test_over_limit(self):
        with pytest.raises(ValidationError, match="Maximum is 50"):
            validate_instruction_content("x" * 51, max_length=50)


class TestValidateMediaType:
    """Tests for validate_media_type function."""

    @pytest.mark.parametrize("media_type", ALLOWED + ["IMAGE/PNG"])
    def test_allowed(self, media_type):
        validate_media_type(media_type, ALLOWED)  # Should not raise

    def test_rejected_type_lists_accepted(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_media_type("image/gif", ALLOWED)
        message = str(exc_info.value)
        assert "image/gif" in message
        assert "PNG, JPEG, WEBP" in message

    def test_missing_type_rejected(self):
        with pytest.raises(ValidationError, match="unknown"):
            validate_media_type(None, ALLOWED)
