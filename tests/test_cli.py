"""Tests for argument parsing and the main entry point"""

import importlib
import io

import pytest

from git_worktree_keeper.cli import main, parse_args
from git_worktree_keeper.constants import SHELL_INTEGRATION_ENV


class TestParseArgs:
    """Test command-line parsing."""

    def test_defaults_to_list(self):
        args = parse_args([])
        assert args.command == "list"
        assert args.print_mode is False
        assert not args.verbose and not args.debug

    @pytest.mark.parametrize(
        "alias,command",
        [
            ("ls", "list"),
            ("l", "list"),
            ("sw", "switch"),
            ("s", "switch"),
            ("cd", "switch"),
            ("add", "new"),
            ("create", "new"),
            ("n", "new"),
            ("rm", "remove"),
            ("delete", "remove"),
            ("del", "remove"),
            ("r", "remove"),
        ],
    )
    def test_aliases(self, alias, command):
        """Test every alias resolves to its command."""
        assert parse_args([alias]).command == command

    def test_list_print(self):
        assert parse_args(["list", "-p"]).print_mode is True
        assert parse_args(["ls", "--print"]).print_mode is True

    def test_switch_arguments(self):
        args = parse_args(["switch", "feature", "--plain"])
        assert args.target == "feature"
        assert args.plain is True

        args = parse_args(["sw"])
        assert args.target is None
        assert args.plain is False

    def test_new_arguments(self):
        """Test create_branch stays None unless the flag is given."""
        args = parse_args(["new", "feature", "-p", "../feature"])
        assert args.branch == "feature"
        assert args.path == "../feature"
        assert args.create_branch is None

        assert parse_args(["add", "feature", "-b"]).create_branch is True

    def test_remove_force(self):
        assert parse_args(["rm", "-f"]).force is True
        assert parse_args(["remove"]).force is False

    def test_global_flags(self):
        args = parse_args(["-v", "--debug", "switch"])
        assert args.verbose and args.debug

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            parse_args(["--version"])
        assert exc_info.value.code == 0
        assert "git-worktree-keeper" in capsys.readouterr().out


class TestMain:
    """Test exit codes and output of the entry point."""

    @pytest.fixture(autouse=True)
    def in_repo(self, repo_path, monkeypatch):
        monkeypatch.chdir(repo_path)
        monkeypatch.setenv(SHELL_INTEGRATION_ENV, "1")

    def test_switch_prints_cd_line(self, repo_path, capsys):
        assert main(["switch", "main"]) == 0
        assert capsys.readouterr().out == f"CD:{repo_path}\n"

    def test_unknown_target_fails(self, capsys):
        assert main(["switch", "nope"]) == 1
        assert "worktree 'nope' not found" in capsys.readouterr().err

    def test_print_mode_reads_stdin(self, repo_path, capsys, monkeypatch):
        """Test list --print answers from stdin and prints the path on stdout."""
        monkeypatch.setattr("sys.stdin", io.StringIO("1\n"))
        assert main(["list", "--print"]) == 0

        captured = capsys.readouterr()
        assert captured.out == f"{repo_path}\n"
        assert "Select worktree (1-1)" in captured.err

    def test_quit_exits_cleanly(self, capsys, monkeypatch):
        """Test quitting a selection is not an error."""
        monkeypatch.setattr("sys.stdin", io.StringIO("q\n"))
        assert main(["ls", "-p"]) == 0
        assert capsys.readouterr().out == ""

    def test_closed_input_fails(self, capsys, monkeypatch):
        monkeypatch.setattr("sys.stdin", io.StringIO(""))
        assert main(["list", "--print"]) == 1
        assert "input closed" in capsys.readouterr().err

    def test_new_and_switch(self, temp_dir, capsys):
        """Test creating a worktree and then switching to it by branch."""
        path = temp_dir / "wt-cli"
        assert main(["new", "cli-branch", "--path", str(path)]) == 0
        assert path.is_dir()

        capsys.readouterr()
        assert main(["switch", "cli-branch"]) == 0
        assert capsys.readouterr().out == f"CD:{path}\n"

    def test_validation_error(self, capsys):
        assert main(["new", "bad;name", "--path", "../x"]) == 1
        assert "dangerous character" in capsys.readouterr().err

    def test_keyboard_interrupt(self, capsys, monkeypatch):
        def interrupted(keeper, parsed_args):
            raise KeyboardInterrupt

        cli_main = importlib.import_module("git_worktree_keeper.cli.main")
        monkeypatch.setattr(cli_main, "run_command", interrupted)
        assert main(["list"]) == 1
        assert "Operation cancelled by user" in capsys.readouterr().err

    def test_outside_repository(self, temp_dir, capsys, monkeypatch):
        plain = temp_dir / "plain"
        plain.mkdir()
        monkeypatch.chdir(plain)

        assert main(["list"]) == 1
        assert "not a git repository" in capsys.readouterr().err
