"""Command-line argument parsing for git-worktree-keeper."""

import argparse
from git_worktree_keeper.__version__ import __version__


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with one subcommand per worktree action."""
    parser = argparse.ArgumentParser(
        prog="git-worktree-keeper",
        description="Interactive git worktree manager",
        epilog="Shell integration: 'switch' prints a CD:<path> line for a wrapper function to cd into. "
        "Set GIT_WORKTREE_KEEPER_SHELL_INTEGRATION=1 once the wrapper is installed.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show verbose output")
    parser.add_argument(
        "--debug", action="store_true", help="Show debug information for troubleshooting"
    )
    parser.add_argument("--version", action="version", version=f"git-worktree-keeper {__version__}")

    subparsers = parser.add_subparsers(dest="command", metavar="command")

    list_parser = subparsers.add_parser(
        "list", aliases=["ls", "l"], help="List worktrees and print the selected path"
    )
    list_parser.add_argument(
        "-p",
        "--print",
        dest="print_mode",
        action="store_true",
        help="Use the plain numbered selector and print the selected path (for scripts)",
    )

    switch_parser = subparsers.add_parser(
        "switch", aliases=["sw", "s", "cd"], help="Switch to a different worktree"
    )
    switch_parser.add_argument("target", nargs="?", help="Worktree path, branch or directory name")
    switch_parser.add_argument(
        "--plain", action="store_true", help="Use the plain numbered selector"
    )

    new_parser = subparsers.add_parser(
        "new", aliases=["add", "create", "n"], help="Create a new worktree"
    )
    new_parser.add_argument("branch", nargs="?", help="Branch to check out")
    new_parser.add_argument("-p", "--path", help="Path for the new worktree")
    new_parser.add_argument(
        "-b",
        "--create-branch",
        action="store_true",
        default=None,
        help="Create a new branch (default: create only if missing, per auto_create_branch)",
    )

    remove_parser = subparsers.add_parser(
        "remove", aliases=["rm", "delete", "del", "r"], help="Remove a worktree"
    )
    remove_parser.add_argument(
        "-f", "--force", action="store_true", help="Force removal even if the worktree is dirty"
    )

    return parser


COMMAND_ALIASES = {
    "ls": "list",
    "l": "list",
    "sw": "switch",
    "s": "switch",
    "cd": "switch",
    "add": "new",
    "create": "new",
    "n": "new",
    "rm": "remove",
    "delete": "remove",
    "del": "remove",
    "r": "remove",
}


def parse_args(argv=None):
    """Parse command-line arguments; the command defaults to ``list``."""
    parsed_args = build_parser().parse_args(argv)
    command = parsed_args.command or "list"
    parsed_args.command = COMMAND_ALIASES.get(command, command)
    if parsed_args.command == "list" and not hasattr(parsed_args, "print_mode"):
        parsed_args.print_mode = False
    return parsed_args
