"""Tests for raw key decoding"""

import pytest

from git_worktree_keeper.ui.keys import (
    KeyPress,
    decode_confirm_key,
    decode_key,
    decode_text_key,
    new_text_decoder,
)


class TestDecodeKey:
    """Test list navigation decoding."""

    @pytest.mark.parametrize(
        "data,expected",
        [
            (bytes([27, 91, 65]), "up"),
            (b"\x1b[B", "down"),
            (b"\r", "enter"),
            (b"\n", "enter"),
            (b"\x03", "cancel"),
            (b"j", "down"),
            (b"k", "up"),
            (b"q", "cancel"),
        ],
    )
    def test_known_keys(self, data, expected):
        """Test every recognized byte pattern."""
        assert decode_key(data) == expected

    @pytest.mark.parametrize(
        "data",
        [bytes([120]), b"\x1b", b"\x1b[", b"\x1b[C", b"\x1b[D", b"\x1bOA", b"jj", b"Q", b"", b"\x1b[1;5A"],
    )
    def test_everything_else_is_ignored(self, data):
        """Test unknown, partial and garbled input decodes to nothing."""
        assert decode_key(data) is None


class TestDecodeTextKey:
    """Test text-field decoding."""

    def test_printable_burst(self):
        """Test several typed characters arrive as several presses."""
        assert decode_text_key(b"ab") == [KeyPress("a", "a"), KeyPress("b", "b")]

    def test_utf8_character(self):
        """Test multi-byte characters decode as one press."""
        assert decode_text_key("é".encode("utf-8")) == [KeyPress("é", "é")]

    def test_split_utf8_character_carries_over(self):
        """Test a character split across two reads is completed by the second."""
        decoder = new_text_decoder()
        assert decode_text_key(b"caf\xc3", decoder) == [KeyPress(c, c) for c in "caf"]
        assert decode_text_key(b"\xa9\r", decoder) == [KeyPress("é", "é"), KeyPress("enter", "\r")]

    @pytest.mark.parametrize(
        "data,key",
        [
            (b"\t", "tab"),
            (b"\x1b[Z", "shift+tab"),
            (b"\x7f", "backspace"),
            (b"\x08", "backspace"),
            (b"\r", "enter"),
            (b"\x1b", "escape"),
            (b"\x03", "ctrl+c"),
            (b"\x1b[A", "up"),
            (b"\x1b[D", "left"),
        ],
    )
    def test_named_keys(self, data, key):
        """Test control keys map to Textual key names."""
        presses = decode_text_key(data)
        assert [p.key for p in presses] == [key]

    def test_mixed_burst(self):
        """Test text followed by enter in one read."""
        keys = [p.key for p in decode_text_key(b"hi\r")]
        assert keys == ["h", "i", "enter"]

    @pytest.mark.parametrize("data", [b"\x1bOP", b"\x1b[15~", b"\x01", b"\x1b[", b""])
    def test_unknown_sequences_dropped(self, data):
        """Test unknown escape sequences and control bytes produce nothing."""
        assert decode_text_key(data) == []


class TestDecodeConfirmKey:
    """Test yes/no decoding."""

    @pytest.mark.parametrize(
        "data,key",
        [
            (b"y", "y"),
            (b"n", "n"),
            (b"h", "h"),
            (b"l", "l"),
            (b"q", "q"),
            (b"\r", "enter"),
            (b"\x1b", "escape"),
            (b"\x03", "ctrl+c"),
            (b"\x1b[D", "left"),
            (b"\x1b[C", "right"),
        ],
    )
    def test_confirm_keys(self, data, key):
        """Test the keys a confirmation understands."""
        assert decode_confirm_key(data) == key

    @pytest.mark.parametrize("data", [b"x", b"yy", b"\t", b"\x1b[Z", b"Y"])
    def test_other_keys(self, data):
        """Test anything else is ignored."""
        assert decode_confirm_key(data) is None
