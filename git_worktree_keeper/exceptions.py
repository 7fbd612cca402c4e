"""Custom exceptions for git-worktree-keeper"""

from typing import Optional


class GitWorktreeKeeperError(Exception):
    """Base exception for all git-worktree-keeper errors."""
    pass


class ValidationError(GitWorktreeKeeperError):
    """Exception raised when a branch name or path is unsafe to hand to git.

    Raised before any git command runs, so no partial mutation can happen.
    """

    def __init__(self, field: str, value: str, reason: str):
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"invalid {field}: {reason}")


class NotAGitRepositoryError(GitWorktreeKeeperError):
    """Exception raised when the working directory is not inside a git repository."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"not a git repository: {path}")


class GitOperationError(GitWorktreeKeeperError):
    """Exception raised for errors in Git operations.

    Carries git's raw diagnostic text in ``stderr`` and, when the diagnostic
    was recognized, an actionable ``hint``.
    """

    def __init__(
        self,
        operation: str,
        target: Optional[str] = None,
        message: Optional[str] = None,
        stderr: str = "",
        hint: Optional[str] = None,
    ):
        self.operation = operation
        self.target = target
        self.message = message
        self.stderr = stderr
        self.hint = hint

        error_msg = f"Git operation '{operation}' failed"
        if target:
            error_msg += f" for '{target}'"
        if message:
            error_msg += f": {message}"
        if hint:
            error_msg += f". {hint}"

        super().__init__(error_msg)


class BranchNotFoundError(GitOperationError):
    """Exception raised when a branch is not found."""

    def __init__(self, branch: str, operation: str = "find_branch", hint: Optional[str] = None, stderr: str = ""):
        super().__init__(operation, branch, f"branch '{branch}' does not exist", stderr=stderr, hint=hint)


class BranchExistsError(GitOperationError):
    """Exception raised when asked to create a branch that already exists."""

    def __init__(self, branch: str):
        super().__init__(
            "add_worktree",
            branch,
            f"branch '{branch}' already exists",
            hint="Remove --create-branch to use the existing branch",
        )


class BranchNotMergedError(GitOperationError):
    """Exception raised when deleting a branch that is not fully merged."""

    def __init__(self, branch: str, stderr: str = ""):
        super().__init__(
            "delete_branch",
            branch,
            f"branch '{branch}' is not fully merged",
            stderr=stderr,
            hint="Use force to delete it anyway",
        )


class WorktreeDirtyError(GitOperationError):
    """Exception raised when removing a worktree with uncommitted changes."""

    def __init__(self, path: str, stderr: str = ""):
        super().__init__(
            "remove_worktree",
            path,
            "worktree contains uncommitted changes",
            stderr=stderr,
            hint="Use --force to remove it anyway",
        )


class WorktreeLockedError(GitOperationError):
    """Exception raised when removing a locked worktree without force."""

    def __init__(self, path: str, stderr: str = ""):
        super().__init__(
            "remove_worktree",
            path,
            "worktree is locked",
            stderr=stderr,
            hint="Use --force to remove it anyway",
        )


class InventoryParseError(GitOperationError):
    """Exception raised when git output cannot be interpreted."""

    def __init__(self, operation: str, output: str):
        super().__init__(operation, message=f"unexpected output {output!r}")
        self.output = output


class TerminalUnavailableError(GitWorktreeKeeperError):
    """Exception raised when a selector cannot acquire the terminal it needs.

    Always recoverable: the coordinator falls back to a less demanding tier.
    """
    pass


class RawModeUnavailable(TerminalUnavailableError):
    """Exception raised when the terminal cannot be switched to raw mode."""
    pass


class InputClosedError(GitWorktreeKeeperError):
    """Exception raised when the input stream ends before an answer was given."""

    def __init__(self, message: str = "input closed before a selection was made"):
        super().__init__(message)


class NoWorktreesError(GitWorktreeKeeperError):
    """Exception raised when there is nothing to select from."""

    def __init__(self):
        super().__init__("no worktrees found")


class SelectionCancelled(GitWorktreeKeeperError):
    """Raised when the user backs out of a selection.

    This is a normal outcome, not a failure: callers exit with status 0.
    """

    def __init__(self):
        super().__init__("selection cancelled")
