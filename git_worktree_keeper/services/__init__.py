"""Services for git-worktree-keeper."""

from .validation_service import InputValidationService

__all__ = ["InputValidationService"]
