"""Git branch operations service"""

from typing import Optional

import git

from git_worktree_keeper.exceptions import (
    BranchNotFoundError,
    BranchNotMergedError,
    GitOperationError,
    InventoryParseError,
)
from git_worktree_keeper.logging_config import get_logger
from git_worktree_keeper.services.git.worktrees import WorktreeService, git_stderr
from git_worktree_keeper.services.validation_service import InputValidationService

logger = get_logger(__name__)


def _parse_count(output: str, operation: str) -> int:
    """Parse the single integer printed by ``git rev-list --count``."""
    text = output.strip()
    try:
        return int(text)
    except ValueError:
        raise InventoryParseError(operation, output) from None


class GitOperations:
    """Service for branch-level Git operations around worktrees."""

    def __init__(self, repo_path: str):
        """Initialize the service.

        Args:
            repo_path: Path to the git repository (string path, not repo object)
        """
        self.repo_path = repo_path
        self.worktree_service = WorktreeService(repo_path)

    def _get_repo(self):
        """Get a git.Repo instance for this repository."""
        return git.Repo(self.repo_path)

    def branch_exists(self, branch: str) -> bool:
        """Check whether a local branch exists."""
        return self.worktree_service.branch_exists(branch)

    def delete_branch(self, branch: str, force: bool = False) -> None:
        """Delete a local branch.

        Args:
            branch: Branch to delete
            force: Use ``-D`` so unmerged branches are deleted too

        Raises:
            ValidationError: If the branch name is unsafe
            BranchNotFoundError: If git does not know the branch
            BranchNotMergedError: If the branch is unmerged and force is False
            GitOperationError: For any other git failure
        """
        InputValidationService.validate_branch_name(branch)

        try:
            self._get_repo().git.branch("-D" if force else "-d", branch)
        except git.exc.GitCommandError as e:
            stderr = git_stderr(e)
            if "not found" in stderr:
                raise BranchNotFoundError(branch, operation="delete_branch", stderr=stderr) from e
            if "not fully merged" in stderr:
                raise BranchNotMergedError(branch, stderr=stderr) from e
            logger.error(f"Failed to delete branch {branch}: {stderr}")
            raise GitOperationError("delete_branch", branch, stderr, stderr=stderr) from e

        logger.info(f"Deleted branch {branch}{' (forced)' if force else ''}")

    def get_upstream(self, branch: str) -> Optional[str]:
        """Return the upstream of ``branch`` (e.g. ``origin/main``), or None."""
        InputValidationService.validate_branch_name(branch)
        try:
            upstream = self._get_repo().git.rev_parse("--abbrev-ref", f"{branch}@{{upstream}}")
        except git.exc.GitCommandError as e:
            logger.debug(f"No upstream for {branch}: {git_stderr(e)}")
            return None
        return upstream.strip() or None

    def count_unpushed_commits(self, branch: str) -> int:
        """Count commits on ``branch`` that its upstream does not have.

        Without an upstream every commit reachable from the branch counts.

        Raises:
            ValidationError: If the branch name is unsafe
            GitOperationError: If git cannot count the commits
            InventoryParseError: If git prints something other than a number
        """
        upstream = self.get_upstream(branch)
        revision = branch if upstream is None else f"{upstream}..{branch}"

        try:
            output = self._get_repo().git.rev_list("--count", revision)
        except git.exc.GitCommandError as e:
            stderr = git_stderr(e)
            raise GitOperationError(
                "count_unpushed_commits", branch, f"failed to count commits: {stderr}", stderr=stderr
            ) from e

        count = _parse_count(output, "count_unpushed_commits")
        logger.debug(f"Branch {branch} has {count} unpushed commits (upstream: {upstream})")
        return count

    def has_unpushed_commits(self, branch: str) -> tuple[bool, int]:
        """Return (has_unpushed, count) for ``branch``."""
        count = self.count_unpushed_commits(branch)
        return count > 0, count
