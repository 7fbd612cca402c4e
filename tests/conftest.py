"""Pytest fixtures for git-worktree-keeper tests"""
import os
import tempfile
from contextlib import contextmanager
from pathlib import Path

import pytest
import git

from git_worktree_keeper.models import WorktreeRecord


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing (symlinks resolved, as git reports paths)."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(os.path.realpath(tmpdir))


@pytest.fixture
def git_repo(temp_dir):
    """Create a real Git repository for testing."""
    repo_path = temp_dir / "test_repo"
    repo_path.mkdir()

    # Initialize repository
    repo = git.Repo.init(repo_path)

    # Configure git user for commits
    repo.config_writer().set_value("user", "name", "Test User").release()
    repo.config_writer().set_value("user", "email", "test@example.com").release()

    # Create initial commit on main branch
    test_file = repo_path / "README.md"
    test_file.write_text("# Test Repository\n")
    repo.index.add(["README.md"])
    repo.index.commit("Initial commit")

    # Rename master to main if needed
    repo.git.branch("-M", "main")

    yield repo

    # Cleanup
    repo.close()


@pytest.fixture
def repo_path(git_repo):
    """Working directory of the test repository as a string."""
    return git_repo.working_dir


def commit_file(repo, name: str, content: str = "content\n", message: str = None):
    """Write, stage and commit a file in ``repo``'s working tree."""
    path = Path(repo.working_dir) / name
    path.write_text(content)
    repo.index.add([name])
    return repo.index.commit(message or f"Add {name}")


@pytest.fixture
def sample_worktrees():
    """Two worktrees: the current main checkout and a feature checkout."""
    return [
        WorktreeRecord(path="/repo/main", branch="main", commit_hash="a" * 40, is_current=True),
        WorktreeRecord(path="/repo/feat", branch="feat", commit_hash="b" * 40, is_current=False),
    ]


class ScriptedInput:
    """Binary input that returns one scripted burst per read, then end of input."""

    def __init__(self, chunks):
        self.chunks = list(chunks)
        self.reads = 0

    def read(self, size=-1):
        self.reads += 1
        if not self.chunks:
            return b""
        chunk = self.chunks.pop(0)
        assert size < 0 or len(chunk) <= size
        return chunk


class FakeRawMode:
    """Records raw-mode acquisition and release for a fake terminal."""

    def __init__(self, error: Exception = None):
        self.error = error
        self.entered = 0
        self.exited = 0

    @contextmanager
    def __call__(self, stream):
        if self.error is not None:
            raise self.error
        self.entered += 1
        try:
            yield
        finally:
            self.exited += 1


@pytest.fixture
def fake_raw_mode():
    return FakeRawMode()


@pytest.fixture
def scripted_input():
    """Factory for scripted binary input: ``scripted_input([b"j", b"\\r"])``."""
    return ScriptedInput


@pytest.fixture
def commit():
    """The ``commit_file`` helper, for tests that need extra commits."""
    return commit_file
