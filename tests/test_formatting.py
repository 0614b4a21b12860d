"""Unit tests for text formatting helpers."""
from datetime import datetime

import pytest
from hypothesis import given
from hypothesis import strategies as st
from rich.cells import cell_len

from termchat.config import UsernameAlignment
from termchat.ui.formatting import align_text, format_timestamp, wrap_content


class TestAlignText:
    """Tests for align_text."""

    def test_right_alignment_pads_left(self):
        """Test right alignment."""
        assert align_text("bob", UsernameAlignment.RIGHT, 6) == "   bob"

    def test_left_alignment_is_unchanged(self):
        """Test left alignment leaves the text alone."""
        assert align_text("bob", "left", 6) == "bob"

    def test_center_alignment_splits_padding(self):
        """Test center alignment."""
        assert align_text("bob", "center", 7) == "  bob  "
        assert align_text("bob", "center", 6) == " bob  "

    def test_text_wider_than_column_is_unchanged(self):
        """Test that overflowing text is returned as is."""
        assert align_text("a-very-long-name", "right", 4) == "a-very-long-name"

    def test_zero_width_is_rejected(self):
        """Test that a column needs at least one cell."""
        with pytest.raises(ValueError):
            align_text("bob", "right", 0)

    @given(
        st.text(alphabet=st.characters(min_codepoint=0x21, max_codepoint=0x7E), min_size=1, max_size=20),
        st.sampled_from(["right", "center"]),
        st.integers(min_value=20, max_value=40),
    )
    def test_padded_text_fills_column(self, text: str, alignment: str, width: int):
        """Property test: right and center alignment fill the column exactly."""
        aligned = align_text(text, alignment, width)
        assert cell_len(aligned) == width
        assert aligned.strip() == text


class TestFormatTimestamp:
    """Tests for format_timestamp."""

    def test_formats_given_time(self):
        """Test formatting a fixed datetime."""
        when = datetime(2024, 3, 1, 9, 5, 7)
        assert format_timestamp("%H:%M:%S", when) == "09:05:07"

    def test_defaults_to_now(self):
        """Test that the current time is used by default."""
        assert format_timestamp("%Y") == str(datetime.now().year)


class TestWrapContent:
    """Tests for wrap_content."""

    def test_short_text_is_one_line(self):
        assert wrap_content("hello", 20) == ["hello"]

    def test_long_text_wraps_at_width(self):
        lines = wrap_content("one two three four", 8)
        assert lines == ["one two", "three", "four"]

    def test_empty_text_is_one_line(self):
        assert wrap_content("", 10) == [""]

    def test_newlines_start_new_lines(self):
        assert wrap_content("a\nb", 10) == ["a", "b"]
