"""Logging configuration for git-worktree-keeper

Log lines must never land on the terminal a selector is drawing on. In TUI mode
everything goes to the log file; otherwise warnings (and more with --verbose or
--debug) go to stderr, which stays outside a ``$(git-worktree-keeper ...)``
capture.
"""
import logging
import sys
from pathlib import Path

LOG_DIR = Path.home() / '.git-worktree-keeper'
LOG_FILE_NAME = 'git-worktree-keeper.log'

DETAILED_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
SHORT_FORMAT = '[%(name)s] %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

# Prefixes dropped from module names, applied in order
LOGGER_PREFIXES = ('git_worktree_keeper.', 'services.')


class ColoredFormatter(logging.Formatter):
    """Formatter that colors the level name when its stream is a terminal."""

    LEVEL_COLORS = {
        'DEBUG': '\033[36m',
        'INFO': '\033[32m',
        'WARNING': '\033[33m',
        'ERROR': '\033[31m',
        'CRITICAL': '\033[35m',
    }
    RESET = '\033[0m'

    def __init__(self, fmt=None, datefmt=None, stream=None):
        super().__init__(fmt=fmt, datefmt=datefmt)
        self.stream = stream if stream is not None else sys.stderr

    def use_color(self) -> bool:
        isatty = getattr(self.stream, 'isatty', None)
        return bool(isatty and isatty())

    def format(self, record):
        color = self.LEVEL_COLORS.get(record.levelname)
        if color and self.use_color():
            # Copy so other handlers still see the plain level name
            record = logging.makeLogRecord(record.__dict__)
            record.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(record)


def console_level(verbose: bool = False, debug: bool = False) -> int:
    """Level shown on stderr for the given command-line flags."""
    if debug:
        return logging.DEBUG
    if verbose:
        return logging.INFO
    return logging.WARNING


def log_file_path() -> Path:
    return LOG_DIR / LOG_FILE_NAME


def _file_handler() -> logging.Handler:
    LOG_DIR.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_file_path(), mode='w')  # Overwrite each run
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(fmt=DETAILED_FORMAT, datefmt=DATE_FORMAT))
    return handler


def _console_handler(level: int, debug: bool) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    if debug:
        handler.setFormatter(ColoredFormatter(fmt=DETAILED_FORMAT, datefmt=DATE_FORMAT, stream=handler.stream))
    else:
        handler.setFormatter(ColoredFormatter(fmt=SHORT_FORMAT, stream=handler.stream))
    return handler


def setup_logging(verbose: bool = False, debug: bool = False, tui_mode: bool = False) -> None:
    """
    Configure the root logger for one run.

    Args:
        verbose: Show INFO messages on stderr
        debug: Show DEBUG messages with timestamps, and also keep a log file
        tui_mode: Log to the file only, since a full-screen selector owns the
            terminal and stray log lines would corrupt it
    """
    level = console_level(verbose, debug)

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handlers = []
    if tui_mode or debug:
        handlers.append(_file_handler())
    if not tui_mode:
        handlers.append(_console_handler(level, debug))

    # The file handler wants everything; each handler filters what it emits
    root_logger.setLevel(logging.DEBUG if tui_mode else level)
    for handler in handlers:
        root_logger.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for a module, named without the package prefix.

    Args:
        name: Name of the module (typically __name__)

    Returns:
        Logger instance
    """
    for prefix in LOGGER_PREFIXES:
        if name.startswith(prefix):
            name = name[len(prefix):]
    return logging.getLogger(name)
