"""Data models for git-worktree-keeper."""

from .worktree import WorktreeRecord, BARE_BRANCH, DETACHED_BRANCH
from .selection import (
    ConfirmResult,
    InputField,
    InputResult,
    SelectionAction,
    SelectionResult,
    SelectorOptions,
)

__all__ = [
    "BARE_BRANCH",
    "DETACHED_BRANCH",
    "ConfirmResult",
    "InputField",
    "InputResult",
    "SelectionAction",
    "SelectionResult",
    "SelectorOptions",
    "WorktreeRecord",
]
