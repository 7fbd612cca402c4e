"""Result types returned by the interactive selectors."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from git_worktree_keeper.models.worktree import WorktreeRecord

DEFAULT_MAX_LENGTH = 200


class SelectionAction(Enum):
    """What the user asked to do with the highlighted worktree."""
    SELECT = "select"
    DELETE = "delete"
    CREATE = "create"
    QUIT = "quit"


@dataclass(frozen=True)
class SelectionResult:
    """Outcome of a list selection. ``QUIT`` never carries a worktree."""
    action: SelectionAction
    worktree: Optional[WorktreeRecord] = None

    @classmethod
    def quit(cls) -> "SelectionResult":
        return cls(SelectionAction.QUIT)


@dataclass(frozen=True)
class ConfirmResult:
    """Outcome of a yes/no question.

    ``confirmed`` is only meaningful when ``cancelled`` is False.
    """
    confirmed: bool = False
    cancelled: bool = False


@dataclass
class InputResult:
    """Outcome of a text-input form; one value per requested field."""
    values: List[str] = field(default_factory=list)
    submitted: bool = False


@dataclass(frozen=True)
class InputField:
    """A single text field requested from the user."""
    prompt: str
    default: str = ""
    max_length: int = DEFAULT_MAX_LENGTH


@dataclass(frozen=True)
class SelectorOptions:
    """How a list selection is presented and which actions it permits."""
    title: str = "Git Worktrees"
    enter_label: str = "select"
    allow_delete: bool = False
    allow_create: bool = False
