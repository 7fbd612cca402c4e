"""Core functionality for git-worktree-keeper"""

import os
import sys
from typing import Optional, Union

from rich.console import Console
from rich.markup import escape

from git_worktree_keeper.config import Config
from git_worktree_keeper.constants import CD_PREFIX, SHELL_INTEGRATION_ENV
from git_worktree_keeper.exceptions import (
    GitOperationError,
    GitWorktreeKeeperError,
    ValidationError,
)
from git_worktree_keeper.logging_config import get_logger
from git_worktree_keeper.models import (
    InputField,
    SelectionAction,
    SelectorOptions,
    WorktreeRecord,
)
from git_worktree_keeper.services.git import GitOperations, WorktreeService, suggest_worktree_path
from git_worktree_keeper.ui.coordinator import SelectionCoordinator

logger = get_logger(__name__)

BRANCH_PROMPT = "Branch name (e.g., feature/new-feature)"
PATH_PROMPT = "Worktree directory path (e.g., ../feature-branch)"


class WorktreeKeeper:
    """Runs the worktree commands: list, switch, new and remove.

    Human-facing messages go to ``console`` (stderr); machine-readable output
    (selected paths, ``CD:`` lines) goes to ``stdout``.
    """

    def __init__(
        self,
        repo_path: str,
        config: Union[Config, dict, None] = None,
        coordinator: Optional[SelectionCoordinator] = None,
        console: Optional[Console] = None,
        stdout=None,
    ):
        """Initialize WorktreeKeeper.

        Args:
            repo_path: Path to the git repository (any of its worktrees)
            config: Configuration dict or Config object
            coordinator: Selector coordinator; built from the config theme if omitted
            console: Rich console for messages; stderr if omitted
            stdout: Stream for paths and ``CD:`` lines; ``sys.stdout`` if omitted
        """
        if isinstance(config, dict):
            config = Config.from_dict(config)
        self.config = config or Config()
        self.repo_path = repo_path

        self.worktree_service = WorktreeService(repo_path)
        self.git_service = GitOperations(repo_path)
        self.coordinator = coordinator or SelectionCoordinator(
            theme=self.config.theme, max_path_length=self.config.max_path_length
        )
        self.console = console or Console(stderr=True)
        self.stdout = stdout

    def _emit(self, line: str) -> None:
        print(line, file=self.stdout or sys.stdout, flush=True)

    def list_worktrees(self, print_mode: bool = False) -> Optional[str]:
        """Show every worktree and act on the chosen one.

        ``select`` prints the path, ``delete`` runs the removal flow and
        ``create`` runs the new-worktree flow. With ``print_mode`` the
        numbered selector is used and only selection is offered.

        Returns:
            The printed path, or None when another action ran
        """
        worktrees = self.worktree_service.list_worktrees()
        if print_mode:
            options = SelectorOptions(title="Git Worktrees", enter_label="print path")
        else:
            options = SelectorOptions(
                title="Git Worktrees", enter_label="print path", allow_delete=True, allow_create=True
            )

        result = self.coordinator.select(worktrees, options, override=print_mode)

        if result.action is SelectionAction.DELETE:
            self.remove_worktree(result.worktree)
            return None
        if result.action is SelectionAction.CREATE:
            self.new()
            return None

        self._emit(result.worktree.path)
        return result.worktree.path

    def switch(self, target: Optional[str] = None, plain: bool = False) -> str:
        """Pick a worktree and print ``CD:<absolute path>`` for the shell wrapper.

        Args:
            target: Path, branch or directory name; selects interactively if omitted
            plain: Force the numbered selector

        Raises:
            GitWorktreeKeeperError: If ``target`` names no worktree
        """
        worktrees = self.worktree_service.list_worktrees()

        if target:
            worktree = self.worktree_service.find(target, worktrees)
            if worktree is None:
                raise GitWorktreeKeeperError(f"worktree '{target}' not found")
        else:
            options = SelectorOptions(title="Switch Worktree", enter_label="switch")
            worktree = self.coordinator.select(worktrees, options, override=plain).worktree

        abs_path = os.path.abspath(worktree.path)
        self._emit(f"{CD_PREFIX}{abs_path}")

        if not os.environ.get(SHELL_INTEGRATION_ENV):
            self.console.print(
                "\n[dim]# To switch automatically, wrap git-worktree-keeper in a shell function "
                "that runs 'cd' on the CD: line.\n"
                f"# Or manually run: cd {abs_path}\n"
                f"# Set {SHELL_INTEGRATION_ENV}=1 to suppress this message[/dim]"
            )
        return abs_path

    def _resolve_create_branch(self, branch: str, create_branch: Optional[bool]) -> bool:
        """Decide whether ``new`` creates the branch.

        An explicit flag wins; otherwise ``auto_create_branch`` creates the
        branch only when it does not exist yet.
        """
        if create_branch is not None:
            return create_branch
        if not self.config.auto_create_branch:
            return False
        return not self.git_service.branch_exists(branch)

    def new(
        self,
        branch: Optional[str] = None,
        path: Optional[str] = None,
        create_branch: Optional[bool] = None,
    ) -> Optional[str]:
        """Create a worktree, asking for whichever of branch and path is missing.

        Args:
            branch: Branch to check out
            path: Worktree location; relative paths are taken from the main worktree
            create_branch: True/False to force, None to follow ``auto_create_branch``

        Returns:
            Absolute path of the new worktree, or None if the prompt was cancelled

        Raises:
            ValidationError: If branch or path is missing or unsafe
            GitOperationError: If git cannot create the worktree
        """
        if not branch or not path:
            fields = []
            if not branch:
                fields.append(InputField(BRANCH_PROMPT))
            if not path:
                default = suggest_worktree_path(branch, self.config.default_worktree_path) if branch else ""
                fields.append(InputField(PATH_PROMPT, default=default))

            answer = self.coordinator.prompt("Create New Worktree", fields)
            if not answer.submitted:
                self.console.print("[yellow]Cancelled[/yellow]")
                return None

            values = iter(value.strip() for value in answer.values)
            if not branch:
                branch = next(values)
            if not path:
                path = next(values) or (
                    suggest_worktree_path(branch, self.config.default_worktree_path) if branch else ""
                )

        if not branch:
            raise ValidationError("branch name", "", "branch name is required")
        if not path:
            raise ValidationError("path", "", "worktree path is required")

        create = self._resolve_create_branch(branch, create_branch)
        self.console.print(f"Creating worktree '{branch}' at '{path}'...")
        abs_path = self.worktree_service.add_worktree(path, branch, create_branch=create)
        self.console.print(f"[green]✅ Successfully created worktree '{branch}' at '{abs_path}'[/green]")
        return abs_path

    def remove(self, force: bool = False) -> bool:
        """Select a worktree other than the current one and remove it.

        Returns:
            True if a worktree was removed
        """
        worktrees = self.worktree_service.list_worktrees()
        removable = [wt for wt in worktrees if not wt.is_current]
        if not removable:
            self.console.print("[yellow]No removable worktrees found (cannot remove current worktree)[/yellow]")
            return False

        options = SelectorOptions(title="Remove Worktree", enter_label="remove")
        result = self.coordinator.select(removable, options)
        return self.remove_worktree(result.worktree, force=force)

    def remove_worktree(self, worktree: WorktreeRecord, force: bool = False) -> bool:
        """Confirm and remove ``worktree``, then offer to delete its branch.

        Returns:
            True if the worktree was removed
        """
        if worktree.is_current:
            raise GitWorktreeKeeperError("cannot remove current worktree")

        if self.config.confirm_delete:
            answer = self.coordinator.confirm("Confirm Removal", f"Remove worktree at {worktree.path}?")
            if answer.cancelled or not answer.confirmed:
                self.console.print("[yellow]Removal cancelled[/yellow]")
                return False

        self.console.print(f"Removing worktree at '{worktree.path}'...")
        self.worktree_service.remove_worktree(worktree.path, force=force)
        self.console.print(f"[green]✅ Successfully removed worktree at '{worktree.path}'[/green]")

        if worktree.has_branch:
            self._offer_branch_deletion(worktree.branch)
        return True

    def _offer_branch_deletion(self, branch: str) -> None:
        """Delete the branch of a removed worktree when the user (or config) wants it.

        Unpushed commits always ask first, and force the deletion if accepted.
        A failed deletion is reported as a warning; the worktree is already gone.
        """
        delete_branch = self.config.delete_branch_on_remove
        try:
            has_unpushed, unpushed_count = self.git_service.has_unpushed_commits(branch)
        except GitOperationError as e:
            logger.debug(f"Could not count unpushed commits on {branch}: {e}")
            has_unpushed, unpushed_count = False, 0

        if has_unpushed:
            answer = self.coordinator.confirm(
                "Branch Deletion Warning",
                f"Branch '{branch}' has {unpushed_count} unpushed commits. Delete branch anyway?",
            )
            delete_branch = answer.confirmed and not answer.cancelled
        elif not delete_branch:
            answer = self.coordinator.confirm("Delete Branch", f"Also delete the local branch '{branch}'?")
            delete_branch = answer.confirmed and not answer.cancelled

        if not delete_branch:
            return

        self.console.print(f"Deleting branch '{branch}'...")
        try:
            self.git_service.delete_branch(branch, force=has_unpushed)
        except GitOperationError as e:
            self.console.print(f"[yellow]⚠️  Warning: Failed to delete branch: {escape(str(e))}[/yellow]")
            return
        self.console.print(f"[green]✅ Successfully deleted branch '{branch}'[/green]")
