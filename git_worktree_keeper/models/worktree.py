"""Worktree data models."""

import os
from dataclasses import dataclass

BARE_BRANCH = "(bare)"
DETACHED_BRANCH = "(detached)"


@dataclass(frozen=True)
class WorktreeRecord:
    """One entry of ``git worktree list --porcelain``."""

    path: str
    branch: str = ""
    commit_hash: str = ""
    is_current: bool = False

    @property
    def is_bare(self) -> bool:
        return self.branch == BARE_BRANCH

    @property
    def is_detached(self) -> bool:
        return self.branch == DETACHED_BRANCH

    @property
    def has_branch(self) -> bool:
        """True when the worktree has a real local branch checked out."""
        return bool(self.branch) and not (self.is_bare or self.is_detached)

    @property
    def short_hash(self) -> str:
        return self.commit_hash[:7]

    @property
    def name(self) -> str:
        """Directory name of the worktree."""
        return os.path.basename(self.path.rstrip(os.sep)) or self.path

    def __str__(self) -> str:
        """String representation of worktree."""
        current_marker = " (current)" if self.is_current else ""
        return f"{self.branch or '?'} @ {self.path}{current_marker}"
