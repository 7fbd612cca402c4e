"""Chooses a selector for the terminal at hand and falls back when it cannot run."""

import sys
from contextlib import contextmanager, nullcontext
from typing import Callable, ContextManager, Dict, Optional, Sequence, TypeVar

from git_worktree_keeper.config import Theme
from git_worktree_keeper.exceptions import NoWorktreesError, SelectionCancelled, TerminalUnavailableError
from git_worktree_keeper.logging_config import get_logger
from git_worktree_keeper.models import (
    ConfirmResult,
    InputField,
    InputResult,
    SelectionAction,
    SelectionResult,
    SelectorOptions,
    WorktreeRecord,
)
from git_worktree_keeper.ui.selectors import (
    FullScreenSelector,
    KeyboardSelector,
    NumberedSelector,
    SelectorStrategy,
)
from git_worktree_keeper.ui.terminal import Capability, controlling_terminal, detect_capability

logger = get_logger(__name__)

T = TypeVar("T")

StrategyFactory = Callable[[], ContextManager[SelectorStrategy]]


class SelectionCoordinator:
    """Runs every interactive question on the most capable tier that works.

    Args:
        theme: Colors for the full-screen tier
        capability: Skip detection and use this tier
        detector: Called once, lazily, when no capability is given
        factories: Per-tier overrides of the strategy factories; each factory
            returns a context manager yielding a ``SelectorStrategy``
        stdin: Text input of the numbered tier (defaults to ``sys.stdin``)
        stderr: Text output of the numbered tier (defaults to ``sys.stderr``)
        max_path_length: Longest path shown unshortened in the full-screen tier
    """

    def __init__(
        self,
        theme: Optional[Theme] = None,
        capability: Optional[Capability] = None,
        detector: Callable[[], Capability] = detect_capability,
        factories: Optional[Dict[Capability, StrategyFactory]] = None,
        stdin=None,
        stderr=None,
        max_path_length: int = 50,
    ):
        self.theme = theme or Theme()
        self.detector = detector
        self.stdin = stdin
        self.stderr = stderr
        self.max_path_length = max_path_length
        self._capability = capability

        self.factories: Dict[Capability, StrategyFactory] = {
            Capability.FULL: self._full_screen,
            Capability.BASIC: self._keyboard,
            Capability.NONE: self._numbered,
        }
        if factories:
            self.factories.update(factories)

    @property
    def capability(self) -> Capability:
        if self._capability is None:
            self._capability = self.detector()
        return self._capability

    def _full_screen(self) -> ContextManager[SelectorStrategy]:
        return nullcontext(FullScreenSelector(self.theme, self.max_path_length))

    @contextmanager
    def _keyboard(self):
        with controlling_terminal() as (tty_input, tty_output):
            yield KeyboardSelector(tty_input, tty_output)

    def _numbered(self) -> ContextManager[SelectorStrategy]:
        return nullcontext(NumberedSelector(self.stdin or sys.stdin, self.stderr or sys.stderr))

    def _run(self, interaction: str, call: Callable[[SelectorStrategy], T], override: bool = False) -> T:
        """Run ``call`` on the chosen tier, walking down the tiers while they are unavailable."""
        tier = Capability.NONE if override else self.capability
        while True:
            logger.debug(f"Running {interaction} on the {tier.name} tier")
            try:
                with self.factories[tier]() as strategy:
                    return call(strategy)
            except TerminalUnavailableError as e:
                lower = tier.lower()
                if lower is None:
                    raise
                logger.info(f"{tier.name} tier unavailable for {interaction} ({e}), falling back to {lower.name}")
                tier = lower

    def select(
        self,
        worktrees: Sequence[WorktreeRecord],
        options: Optional[SelectorOptions] = None,
        override: bool = False,
    ) -> SelectionResult:
        """Let the user pick a worktree.

        Args:
            worktrees: Candidates, in display order
            options: Title and permitted actions
            override: Force the numbered tier (plain or print-only output)

        Raises:
            NoWorktreesError: If ``worktrees`` is empty; no selector runs
            SelectionCancelled: If the user quit
            InputClosedError: If input ended before an answer
        """
        if not worktrees:
            raise NoWorktreesError()
        options = options or SelectorOptions()

        result = self._run("select", lambda strategy: strategy.select(worktrees, options), override)
        if result.action is SelectionAction.QUIT:
            raise SelectionCancelled()
        return result

    def confirm(self, title: str, message: str, override: bool = False) -> ConfirmResult:
        """Ask a yes/no question; No is the default answer."""
        return self._run("confirm", lambda strategy: strategy.confirm(title, message), override)

    def prompt(self, title: str, fields: Sequence[InputField], override: bool = False) -> InputResult:
        """Ask for one text value per field."""
        return self._run("prompt", lambda strategy: strategy.prompt(title, fields), override)
