"""Terminal capability detection and raw-mode handling."""

import os
import sys
from contextlib import contextmanager
from enum import IntEnum
from typing import Optional

try:
    import termios
except ImportError:  # Windows has no termios; raw mode is simply unavailable there
    termios = None

from git_worktree_keeper.exceptions import RawModeUnavailable
from git_worktree_keeper.logging_config import get_logger

logger = get_logger(__name__)

CONTROLLING_TERMINAL = "/dev/tty"


class Capability(IntEnum):
    """How much terminal control the current process can obtain."""

    NONE = 0
    BASIC = 1
    FULL = 2

    def lower(self) -> Optional["Capability"]:
        """The next less demanding tier, or None below NONE."""
        if self is Capability.NONE:
            return None
        return Capability(self - 1)


def _is_terminal(stream) -> bool:
    try:
        return stream is not None and bool(stream.isatty())
    except (AttributeError, OSError, ValueError):
        return False


def can_open_controlling_terminal(path: str = CONTROLLING_TERMINAL) -> bool:
    """Check whether the controlling terminal device can be opened read/write."""
    if os.name == "nt":
        return False
    try:
        fd = os.open(path, os.O_RDWR)
    except OSError as e:
        logger.debug(f"Cannot open {path}: {e}")
        return False
    os.close(fd)
    return True


def detect_capability(stdout=None, stderr=None, stdin=None, tty_path: str = CONTROLLING_TERMINAL) -> Capability:
    """Classify the process's standard streams into a capability tier.

    Never claims more than it can demonstrate:

    * stdout is a terminal -> FULL
    * the controlling terminal can be opened -> BASIC
    * stderr or stdin is a terminal -> BASIC
    * otherwise -> NONE
    """
    stdout = sys.stdout if stdout is None else stdout
    stderr = sys.stderr if stderr is None else stderr
    stdin = sys.stdin if stdin is None else stdin

    if _is_terminal(stdout):
        capability = Capability.FULL
    elif can_open_controlling_terminal(tty_path):
        capability = Capability.BASIC
    elif _is_terminal(stderr) or _is_terminal(stdin):
        capability = Capability.BASIC
    else:
        capability = Capability.NONE

    logger.debug(f"Detected terminal capability: {capability.name}")
    return capability


@contextmanager
def controlling_terminal(path: str = CONTROLLING_TERMINAL):
    """Open the controlling terminal for unbuffered binary reading and writing.

    Yields:
        (input, output) handles, both the same device, closed on exit

    Raises:
        RawModeUnavailable: If the device cannot be opened
    """
    try:
        handle = open(path, "r+b", buffering=0)
    except OSError as e:
        raise RawModeUnavailable(f"cannot open {path}: {e}") from e
    try:
        yield handle, handle
    finally:
        handle.close()


@contextmanager
def raw_mode(stream):
    """Put the terminal behind ``stream`` into raw mode for the duration.

    Echo, line buffering and signal generation are switched off so every
    keystroke (including Ctrl-C) arrives as bytes. Output processing stays on.
    The previous mode is restored on every exit path.

    Raises:
        RawModeUnavailable: If the stream is not a terminal or the mode change fails
    """
    if termios is None:
        raise RawModeUnavailable("raw terminal mode is not supported on this platform")

    try:
        fd = stream.fileno()
    except (AttributeError, OSError, ValueError) as e:
        raise RawModeUnavailable(f"stream has no usable file descriptor: {e}") from e

    try:
        saved = termios.tcgetattr(fd)
        attrs = termios.tcgetattr(fd)
        attrs[3] &= ~(termios.ECHO | termios.ICANON | termios.ISIG)
        attrs[6][termios.VMIN] = 1
        attrs[6][termios.VTIME] = 0
        termios.tcsetattr(fd, termios.TCSAFLUSH, attrs)
    except termios.error as e:
        raise RawModeUnavailable(f"failed to set raw mode: {e}") from e

    logger.debug(f"Entered raw mode on fd {fd}")
    try:
        yield
    finally:
        try:
            termios.tcsetattr(fd, termios.TCSADRAIN, saved)
            logger.debug(f"Restored terminal mode on fd {fd}")
        except termios.error as e:
            logger.warning(f"Could not restore terminal mode: {e}")
