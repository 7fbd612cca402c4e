"""Command-line interface for git-worktree-keeper"""

import os
import sys

from rich.console import Console
from rich.markup import escape

from git_worktree_keeper.cli.args import parse_args
from git_worktree_keeper.config import Config
from git_worktree_keeper.core import WorktreeKeeper
from git_worktree_keeper.exceptions import GitWorktreeKeeperError, SelectionCancelled
from git_worktree_keeper.logging_config import get_logger, setup_logging
from git_worktree_keeper.services.git import WorktreeService

console = Console(stderr=True)
logger = get_logger(__name__)


def run_command(keeper: WorktreeKeeper, parsed_args) -> None:
    """Dispatch the parsed command to the keeper."""
    if parsed_args.command == "switch":
        keeper.switch(parsed_args.target, plain=parsed_args.plain)
    elif parsed_args.command == "new":
        keeper.new(parsed_args.branch, parsed_args.path, create_branch=parsed_args.create_branch)
    elif parsed_args.command == "remove":
        keeper.remove(force=parsed_args.force)
    else:
        keeper.list_worktrees(print_mode=parsed_args.print_mode)


def main(argv=None):
    """Main entry point for the application."""
    parsed_args = None
    try:
        parsed_args = parse_args(argv)

        # A full-screen selector owns the terminal, so logs go to the file only
        setup_logging(
            verbose=parsed_args.verbose,
            debug=parsed_args.debug,
            tui_mode=sys.stdout.isatty(),
        )

        config = Config(verbose=parsed_args.verbose, debug=parsed_args.debug)

        if parsed_args.debug:
            console.print("[yellow]Debug mode enabled[/yellow]")
            console.print("[yellow]Configuration:[/yellow]")
            for key, value in config.to_dict().items():
                console.print(f"  {key}: {value}")

        service = WorktreeService.discover(os.getcwd())
        keeper = WorktreeKeeper(service.repo_path, config, console=console)
        run_command(keeper, parsed_args)
        return 0
    except SelectionCancelled:
        console.print("[yellow]Cancelled[/yellow]")
        return 0
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        return 1
    except GitWorktreeKeeperError as e:
        logger.debug(f"Command failed: {e!r}")
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        if parsed_args is not None and parsed_args.debug:
            console.print_exception()
        return 1


if __name__ == "__main__":
    sys.exit(main())
