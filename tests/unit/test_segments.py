"""Unit tests for response segment decoding and image selection."""

import base64

import pytest

from retouch.core.errors import GenerationError, NoImageError, TextOnlyResponseError
from retouch.core.segments import (
    InlineData,
    Text,
    block_reason,
    segments_from_response,
    select_image,
)

from fakes import inline_part, make_response, text_part


class TestSegmentsFromResponse:
    """Tests for segments_from_response function."""

    def test_preserves_order_and_kinds(self):
        response = make_response(text_part("Here you go"), inline_part(b"img", "image/jpeg"))

        segments = segments_from_response(response)

        assert segments == (Text("Here you go"), InlineData(b"img", "image/jpeg"))

    def test_no_candidates_gives_empty_tuple(self):
        assert segments_from_response(make_response(candidates=False)) == ()

    def test_missing_content_gives_empty_tuple(self):
        response = make_response()
        response.candidates[0].content = None
        assert segments_from_response(response) == ()

    def test_skips_empty_parts(self):
        response = make_response(inline_part(b"", "image/png"), text_part(""))
        assert segments_from_response(response) == ()

    def test_missing_mime_type_defaults_to_png(self):
        segments = segments_from_response(make_response(inline_part(b"img", None)))
        assert segments[0].media_type == "image/png"

    def test_base64_text_data_is_decoded(self):
        raw = base64.b64encode(b"raw-bytes").decode()
        segments = segments_from_response(make_response(inline_part(raw)))
        assert segments[0].data == b"raw-bytes"

    def test_invalid_base64_text_data_raises(self):
        with pytest.raises(GenerationError, match="Malformed image data"):
            segments_from_response(make_response(inline_part("%%%not-base64%%%")))


class TestSelectImage:
    """Tests for select_image function."""

    def test_first_inline_segment_wins(self):
        segments = (
            Text("Sure!"),
            InlineData(b"first", "image/png"),
            InlineData(b"second", "image/jpeg"),
        )

        payload = select_image(segments)

        assert payload.data == b"first"
        assert payload.to_data_url() == "data:image/png;base64," + base64.b64encode(b"first").decode()

    def test_text_only_raises_with_text(self):
        with pytest.raises(TextOnlyResponseError, match="Request blocked") as exc_info:
            select_image((Text("Request blocked"),))
        assert exc_info.value.text == "Request blocked"

    def test_summary_used_when_no_text_segments(self):
        with pytest.raises(TextOnlyResponseError, match="summary text"):
            select_image((), summary="summary text")

    def test_empty_raises_no_image(self):
        with pytest.raises(NoImageError, match="No image data found"):
            select_image(())

    def test_whitespace_text_counts_as_nothing(self):
        with pytest.raises(NoImageError):
            select_image((Text("   "),), summary="  ")

    def test_messages_carry_prefix(self):
        with pytest.raises(NoImageError, match="^Failed to edit image: "):
            select_image(())


class TestBlockReason:
    """Tests for block_reason function."""

    def test_returns_reason(self):
        assert block_reason(make_response(block_reason="SAFETY")) == "SAFETY"

    def test_none_without_feedback(self):
        assert block_reason(make_response()) is None
