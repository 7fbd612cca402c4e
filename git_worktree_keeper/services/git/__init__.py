"""Git-related services for git-worktree-keeper."""

from .operations import GitOperations
from .worktrees import WorktreeService, mark_current, parse_worktree_list, suggest_worktree_path

__all__ = [
    "GitOperations",
    "WorktreeService",
    "mark_current",
    "parse_worktree_list",
    "suggest_worktree_path",
]
