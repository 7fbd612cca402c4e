"""
git-worktree-keeper - Browse, switch, create and remove git worktrees from any terminal
"""

from .__version__ import __version__
from .models import WorktreeRecord
from .services.git import WorktreeService, GitOperations
from .ui.coordinator import SelectionCoordinator

__all__ = [
    "GitOperations",
    "SelectionCoordinator",
    "WorktreeRecord",
    "WorktreeService",
    "__version__",
]
