"""Byte-level key decoding for the raw-keystroke selector.

Key names follow Textual's naming (``up``, ``enter``, ``shift+tab`` ...) so the
same state machines can be driven from either a Textual screen or a raw
terminal.
"""

from dataclasses import dataclass
import codecs
from typing import List, Optional

ESC = b"\x1b"
CSI = b"\x1b["

# Navigation keys understood by the list selector
LIST_KEYS = {
    b"\r": "enter",
    b"\n": "enter",
    b"\x03": "cancel",
    b"j": "down",
    b"k": "up",
    b"q": "cancel",
}

LIST_ARROWS = {
    b"A": "up",
    b"B": "down",
}

CSI_KEYS = {
    b"A": "up",
    b"B": "down",
    b"C": "right",
    b"D": "left",
    b"Z": "shift+tab",
}

CONTROL_KEYS = {
    "\r": "enter",
    "\n": "enter",
    "\t": "tab",
    "\x7f": "backspace",
    "\x08": "backspace",
    "\x03": "ctrl+c",
    "\x1b": "escape",
}

CONFIRM_KEYS = frozenset(
    ["y", "n", "h", "j", "k", "l", "q", "up", "down", "left", "right", "enter", "escape", "ctrl+c"]
)


@dataclass(frozen=True)
class KeyPress:
    """A decoded key, shaped like Textual's key events."""

    key: str
    character: Optional[str] = None


def decode_key(data: bytes) -> Optional[str]:
    """Decode one burst of bytes read while navigating a list.

    Returns ``"up"``, ``"down"``, ``"enter"`` or ``"cancel"``; anything else,
    including partial or garbled escape sequences, returns None and must be
    ignored by the caller.
    """
    if len(data) == 1:
        return LIST_KEYS.get(data)
    if len(data) == 3 and data.startswith(CSI):
        return LIST_ARROWS.get(data[2:3])
    return None


def decode_text_key(data: bytes, decoder: Optional[codecs.IncrementalDecoder] = None) -> List[KeyPress]:
    """Decode a burst of bytes into key presses for dialogs and text fields.

    A burst is either one escape sequence or a run of typed characters (fast
    typing and pastes arrive as several characters at once). Unknown escape
    sequences and non-printable characters are dropped.

    Pass the same incremental ``decoder`` for every burst of one prompt so a
    multi-byte character split across two reads is completed by the next one.
    """
    if data.startswith(CSI):
        if len(data) == 3 and data[2:3] in CSI_KEYS:
            return [KeyPress(CSI_KEYS[data[2:3]])]
        return []
    if data.startswith(ESC) and len(data) > 1:
        return []

    if decoder is None:
        decoder = new_text_decoder()

    presses = []
    for char in decoder.decode(data):
        if char in CONTROL_KEYS:
            presses.append(KeyPress(CONTROL_KEYS[char], char))
        elif char.isprintable():
            presses.append(KeyPress(char, char))
    return presses


def new_text_decoder() -> codecs.IncrementalDecoder:
    """UTF-8 decoder that buffers incomplete sequences and drops invalid bytes."""
    return codecs.getincrementaldecoder("utf-8")(errors="ignore")


def decode_confirm_key(data: bytes) -> Optional[str]:
    """Decode one burst of bytes read while a yes/no question is shown.

    Returns a key name understood by ``ConfirmState.handle_key``, or None.
    """
    presses = decode_text_key(data)
    if len(presses) != 1:
        return None
    key = presses[0].key
    return key if key in CONFIRM_KEYS else None
