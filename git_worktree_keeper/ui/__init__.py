"""Interactive selection for git-worktree-keeper."""

from .coordinator import SelectionCoordinator
from .terminal import Capability, detect_capability

__all__ = ["Capability", "SelectionCoordinator", "detect_capability"]
