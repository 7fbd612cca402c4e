"""Line-based fallback selector for environments without terminal control."""

from typing import Sequence

from git_worktree_keeper.constants import (
    CONFIRM_PROMPT,
    NUMBERED_INVALID_INPUT,
    NUMBERED_INVALID_SELECTION,
    NUMBERED_PROMPT,
    RULE_WIDTH,
    SYMBOL_CURRENT_PLAIN,
    SYMBOL_TREE,
)
from git_worktree_keeper.exceptions import InputClosedError
from git_worktree_keeper.models import (
    ConfirmResult,
    InputField,
    InputResult,
    SelectionAction,
    SelectionResult,
    SelectorOptions,
    WorktreeRecord,
)
from git_worktree_keeper.ui.selectors.base import SelectorStrategy

YES_ANSWERS = ("y", "yes")
NO_ANSWERS = ("", "n", "no")
QUIT_ANSWERS = ("q", "quit")


class NumberedSelector(SelectorStrategy):
    """Numbered listing answered by typing a line; works on any text streams.

    Only ``select`` can be quit; a ``prompt`` runs until every field has an
    answer or the input ends.
    """

    def __init__(self, input, output):
        self.input = input
        self.output = output

    def _write(self, text: str) -> None:
        self.output.write(text)
        self.output.flush()

    def _readline(self) -> str:
        line = self.input.readline()
        if not line:
            raise InputClosedError()
        return line.strip()

    def select(self, worktrees: Sequence[WorktreeRecord], options: SelectorOptions) -> SelectionResult:
        count = len(worktrees)
        rule = "-" * RULE_WIDTH

        self._write(f"\n{SYMBOL_TREE} {options.title}:\n{rule}\n")
        for number, worktree in enumerate(worktrees, start=1):
            status = f"{SYMBOL_CURRENT_PLAIN} " if worktree.is_current else "  "
            self._write(f"{status}{number}) {worktree.path} ({worktree.branch})\n")
        self._write(f"{rule}\n")
        self._write(NUMBERED_PROMPT.format(count=count))

        while True:
            answer = self._readline()
            if answer in ("q", "Q"):
                return SelectionResult.quit()
            try:
                number = int(answer)
            except ValueError:
                self._write(NUMBERED_INVALID_INPUT.format(count=count))
                continue
            if not 1 <= number <= count:
                self._write(NUMBERED_INVALID_SELECTION.format(count=count))
                continue
            return SelectionResult(SelectionAction.SELECT, worktrees[number - 1])

    def confirm(self, title: str, message: str) -> ConfirmResult:
        self._write(f"\n{title}\n{message} {CONFIRM_PROMPT}")
        while True:
            answer = self._readline().lower()
            if answer in YES_ANSWERS:
                return ConfirmResult(confirmed=True)
            if answer in NO_ANSWERS:
                return ConfirmResult(confirmed=False)
            if answer in QUIT_ANSWERS:
                return ConfirmResult(cancelled=True)
            self._write("Please answer 'y' or 'n' (or 'q' to cancel): ")

    def prompt(self, title: str, fields: Sequence[InputField]) -> InputResult:
        self._write(f"\n{title}\n")
        values = []
        for input_field in fields:
            if input_field.default:
                self._write(f"{input_field.prompt} [{input_field.default}]: ")
            else:
                self._write(f"{input_field.prompt}: ")
            answer = self._readline() or input_field.default
            values.append(answer[: input_field.max_length])
        return InputResult(values=values, submitted=True)
