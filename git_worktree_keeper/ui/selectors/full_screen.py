"""Full-screen selector built on Textual."""

from typing import Sequence

from git_worktree_keeper.config import Theme
from git_worktree_keeper.exceptions import TerminalUnavailableError
from git_worktree_keeper.logging_config import get_logger
from git_worktree_keeper.models import (
    ConfirmResult,
    InputField,
    InputResult,
    SelectionResult,
    SelectorOptions,
    WorktreeRecord,
)
from git_worktree_keeper.ui.screens import ConfirmScreen, InputScreen, PromptApp, SelectorScreen
from git_worktree_keeper.ui.selectors.base import SelectorStrategy
from git_worktree_keeper.ui.state import ConfirmState, InputState, ListState

logger = get_logger(__name__)


class FullScreenSelector(SelectorStrategy):
    """Runs each interaction as a one-screen Textual app."""

    def __init__(self, theme: Theme, max_path_length: int = 50, app_class=PromptApp):
        self.theme = theme
        self.max_path_length = max_path_length
        self.app_class = app_class

    def _run(self, screen):
        """Run the app hosting ``screen`` and return what the screen dismissed with.

        Returns None when the app exited some other way (e.g. Ctrl-Q).
        """
        logger.debug(f"Running full-screen {type(screen).__name__}")
        app = self.app_class(screen)
        try:
            return app.run()
        except OSError as e:
            raise TerminalUnavailableError(f"full-screen interface unavailable: {e}") from e

    def select(self, worktrees: Sequence[WorktreeRecord], options: SelectorOptions) -> SelectionResult:
        state = ListState(worktrees, options)
        result = self._run(SelectorScreen(state, self.theme, self.max_path_length))
        return result if result is not None else state.result()

    def confirm(self, title: str, message: str) -> ConfirmResult:
        state = ConfirmState(title, message)
        result = self._run(ConfirmScreen(state, self.theme))
        return result if result is not None else ConfirmResult(cancelled=True)

    def prompt(self, title: str, fields: Sequence[InputField]) -> InputResult:
        state = InputState(title, fields)
        result = self._run(InputScreen(state, self.theme))
        return result if result is not None else state.result()
