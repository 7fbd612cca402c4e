"""Common interface of the interactive selectors."""

from abc import ABC, abstractmethod
from typing import Sequence

from git_worktree_keeper.models import (
    ConfirmResult,
    InputField,
    InputResult,
    SelectionResult,
    SelectorOptions,
    WorktreeRecord,
)


class SelectorStrategy(ABC):
    """One way of asking the user something, suited to one terminal capability.

    Implementations raise ``TerminalUnavailableError`` when they cannot
    acquire the terminal they need, and ``InputClosedError`` when their input
    ends early. Quitting is reported through the returned result, not raised.
    """

    @abstractmethod
    def select(self, worktrees: Sequence[WorktreeRecord], options: SelectorOptions) -> SelectionResult:
        """Let the user pick a worktree (and an action) from a non-empty list."""

    @abstractmethod
    def confirm(self, title: str, message: str) -> ConfirmResult:
        """Ask a yes/no question whose default answer is No."""

    @abstractmethod
    def prompt(self, title: str, fields: Sequence[InputField]) -> InputResult:
        """Ask for one text value per field."""
