"""Worktree operations service for git-worktree-keeper."""

import os
import re
from dataclasses import replace
from typing import Iterable, Optional

import git

from git_worktree_keeper.exceptions import (
    BranchExistsError,
    BranchNotFoundError,
    GitOperationError,
    NotAGitRepositoryError,
    WorktreeDirtyError,
    WorktreeLockedError,
)
from git_worktree_keeper.logging_config import get_logger
from git_worktree_keeper.models.worktree import BARE_BRANCH, DETACHED_BRANCH, WorktreeRecord
from git_worktree_keeper.services.validation_service import InputValidationService

logger = get_logger(__name__)

BRANCH_REF_PREFIX = "refs/heads/"

# Substrings of `git worktree remove` diagnostics, across git versions
DIRTY_MARKERS = ("is dirty", "contains modified or untracked files")
STALE_MARKERS = ("does not exist", "is not a working tree")
LOCKED_MARKERS = ("is locked", "locked working tree")

_GITPYTHON_STDERR = re.compile(r"^stderr: '(.*)'$", re.DOTALL)


def git_stderr(error: git.exc.GitCommandError) -> str:
    """Return git's own diagnostic text from a GitCommandError.

    GitPython wraps stderr as ``stderr: '<text>'``; the wrapper is removed so
    the diagnostic can be matched and shown verbatim.
    """
    stderr = (error.stderr if getattr(error, "stderr", None) else str(error)).strip()
    match = _GITPYTHON_STDERR.match(stderr)
    if match:
        stderr = match.group(1).strip()
    return stderr


def _matches(text: str, markers: Iterable[str]) -> bool:
    return any(marker in text for marker in markers)


def parse_worktree_list(output: str) -> list[WorktreeRecord]:
    """Parse ``git worktree list --porcelain`` output.

    Format::

        worktree /path/to/worktree
        HEAD commit_sha
        branch refs/heads/branch-name
        (blank line between worktrees)

    ``bare`` and ``detached`` lines replace the branch line. Unknown lines
    (``locked``, ``prunable`` ...) are ignored. The last record is kept even
    without a trailing blank line. Records that never named a path are dropped.
    """
    records: list[WorktreeRecord] = []
    current: dict[str, str] = {}

    def flush() -> None:
        if not current:
            return
        path = current.get("path")
        if path:
            records.append(
                WorktreeRecord(
                    path=path,
                    branch=current.get("branch", ""),
                    commit_hash=current.get("HEAD", ""),
                )
            )
        else:
            logger.debug(f"Dropping worktree record without a path: {current}")
        current.clear()

    for raw_line in output.splitlines():
        line = raw_line.rstrip("\r")
        if not line.strip():
            flush()
            continue

        if line.startswith("worktree "):
            current["path"] = line[len("worktree "):]
        elif line.startswith("HEAD "):
            current["HEAD"] = line[len("HEAD "):]
        elif line.startswith("branch "):
            current["branch"] = line[len("branch "):].removeprefix(BRANCH_REF_PREFIX)
        elif line == "bare":
            current["branch"] = BARE_BRANCH
        elif line == "detached":
            current["branch"] = DETACHED_BRANCH

    flush()
    return records


def mark_current(records: list[WorktreeRecord], cwd: str) -> list[WorktreeRecord]:
    """Flag the record whose path equals ``cwd`` exactly.

    No normalization is applied: symlinked or trailing-slash variants of the
    same directory do not match. At most one record is flagged.
    """
    marked = []
    found = False
    for record in records:
        is_current = not found and record.path == cwd
        found = found or is_current
        marked.append(replace(record, is_current=is_current))
    return marked


class WorktreeService:
    """Service for managing git worktrees."""

    def __init__(self, repo_path: str):
        """Initialize the worktree service.

        Args:
            repo_path: Path to the git repository (any of its worktrees)
        """
        self.repo_path = repo_path

    @classmethod
    def discover(cls, start_path: Optional[str] = None) -> "WorktreeService":
        """Create a service for the repository containing ``start_path``.

        Raises:
            NotAGitRepositoryError: If no repository encloses the path
        """
        start_path = start_path or os.getcwd()
        try:
            repo = git.Repo(start_path, search_parent_directories=True)
        except (git.exc.InvalidGitRepositoryError, git.exc.NoSuchPathError):
            raise NotAGitRepositoryError(start_path) from None
        try:
            root = repo.working_tree_dir or repo.git_dir
        finally:
            repo.close()
        logger.debug(f"Using repository at {root}")
        return cls(root)

    def _get_repo(self):
        """Get a git.Repo instance for this repository."""
        return git.Repo(self.repo_path)

    def list_worktrees(self, cwd: Optional[str] = None) -> list[WorktreeRecord]:
        """Get all worktrees, with the one at ``cwd`` marked current.

        Args:
            cwd: Directory to compare against; defaults to the process's
                working directory at call time

        Returns:
            List of WorktreeRecord objects in git's order (main worktree first)
        """
        try:
            output = self._get_repo().git.worktree("list", "--porcelain")
        except git.exc.GitCommandError as e:
            stderr = git_stderr(e)
            raise GitOperationError("list_worktrees", message=stderr, stderr=stderr) from e

        records = mark_current(parse_worktree_list(output), cwd if cwd is not None else os.getcwd())
        logger.debug(f"Found {len(records)} worktrees")
        for record in records:
            logger.debug(f"  {record}")
        return records

    def find(self, target: str, worktrees: Optional[list[WorktreeRecord]] = None) -> Optional[WorktreeRecord]:
        """Find a worktree by path, branch name or directory name."""
        if worktrees is None:
            worktrees = self.list_worktrees()
        for worktree in worktrees:
            if worktree.path == target or worktree.branch == target or worktree.name == target:
                return worktree
        return None

    def main_worktree_path(self) -> str:
        """Path of the main worktree, which git always lists first."""
        worktrees = self.list_worktrees()
        return worktrees[0].path if worktrees else self.repo_path

    def resolve_path(self, path: str) -> str:
        """Make a user-supplied worktree path absolute.

        Relative paths are taken relative to the main worktree, so the
        configured default (``../``) always lands beside the repository.
        """
        expanded = os.path.expanduser(path)
        if os.path.isabs(expanded):
            return os.path.normpath(expanded)
        return os.path.normpath(os.path.join(self.main_worktree_path(), expanded))

    def branch_exists(self, branch: str) -> bool:
        """Check whether a local branch exists."""
        InputValidationService.validate_branch_name(branch)
        try:
            self._get_repo().git.rev_parse("--verify", "--quiet", f"{BRANCH_REF_PREFIX}{branch}")
            return True
        except git.exc.GitCommandError:
            return False

    def add_worktree(self, path: str, branch: str, create_branch: bool = False) -> str:
        """Create a worktree for ``branch`` at ``path``.

        Args:
            path: Where to create the worktree
            branch: Branch to check out
            create_branch: Create ``branch`` instead of using an existing one

        Returns:
            Absolute path of the new worktree

        Raises:
            ValidationError: If path or branch is unsafe
            BranchNotFoundError: If the branch is missing and create_branch is False
            BranchExistsError: If the branch exists and create_branch is True
            GitOperationError: If git refuses for any other reason
        """
        InputValidationService.validate_path(path)
        InputValidationService.validate_branch_name(branch)
        abs_path = self.resolve_path(path)
        InputValidationService.validate_path(abs_path)

        exists = self.branch_exists(branch)
        if create_branch and not exists:
            args = ["add", "-b", branch, abs_path]
        elif exists and not create_branch:
            args = ["add", abs_path, branch]
        elif not exists:
            raise BranchNotFoundError(
                branch, operation="add_worktree", hint="Use --create-branch to create it"
            )
        else:
            raise BranchExistsError(branch)

        try:
            self._get_repo().git.worktree(*args)
        except git.exc.GitCommandError as e:
            stderr = git_stderr(e)
            logger.error(f"Failed to add worktree at {abs_path}: {stderr}")
            raise GitOperationError(
                "add_worktree", abs_path, f"git worktree {' '.join(args)}: {stderr}", stderr=stderr
            ) from e

        logger.info(f"Added worktree for {branch} at {abs_path}")
        return abs_path

    def remove_worktree(self, path: str, force: bool = False) -> None:
        """Remove the worktree at ``path``.

        Known git diagnostics are turned into actionable errors. A worktree
        whose directory is already gone is pruned, and counts as removed once
        the inventory no longer lists it.

        Raises:
            ValidationError: If the path is unsafe
            WorktreeDirtyError: If the worktree has uncommitted changes
            WorktreeLockedError: If the worktree is locked and force is False
            GitOperationError: For any other git failure
        """
        InputValidationService.validate_path(path)
        abs_path = os.path.abspath(path)

        args = ["remove"]
        if force:
            args.append("--force")
        args.append(abs_path)

        try:
            self._get_repo().git.worktree(*args)
            logger.info(f"Removed worktree at {abs_path}")
            return
        except git.exc.GitCommandError as e:
            stderr = git_stderr(e)
            logger.debug(f"git worktree remove failed: {stderr}")

        if _matches(stderr, DIRTY_MARKERS):
            raise WorktreeDirtyError(abs_path, stderr=stderr)

        if _matches(stderr, STALE_MARKERS):
            self.prune_worktrees()
            if not any(wt.path == abs_path for wt in self.list_worktrees()):
                logger.info(f"Pruned stale worktree at {abs_path}")
                return
            try:
                self._get_repo().git.worktree(*args)
                logger.info(f"Removed worktree at {abs_path} after pruning")
                return
            except git.exc.GitCommandError as retry_error:
                stderr = git_stderr(retry_error)

        if _matches(stderr, LOCKED_MARKERS) and not force:
            raise WorktreeLockedError(abs_path, stderr=stderr)

        logger.error(f"Failed to remove worktree at {abs_path}: {stderr}")
        raise GitOperationError("remove_worktree", abs_path, stderr, stderr=stderr)

    def prune_worktrees(self) -> None:
        """Prune stale worktree metadata."""
        try:
            self._get_repo().git.worktree("prune")
        except git.exc.GitCommandError as e:
            stderr = git_stderr(e)
            logger.error(f"Failed to prune worktrees: {stderr}")
            raise GitOperationError("prune_worktrees", message=stderr, stderr=stderr) from e
        logger.info("Pruned stale worktree metadata")


def suggest_worktree_path(branch: str, base: str = "../") -> str:
    """Default location for a new worktree of ``branch``."""
    return os.path.join(base, branch.replace("/", "-"))
