"""Interaction state machines shared by the full-screen and raw-keystroke selectors.

Each machine owns no I/O: hosts feed it key names (Textual's naming) or call
its methods directly, then render it and read ``result()`` once ``finished``.
"""

from typing import List, Optional, Sequence

from git_worktree_keeper.models import (
    ConfirmResult,
    InputField,
    InputResult,
    SelectionAction,
    SelectionResult,
    SelectorOptions,
    WorktreeRecord,
)


class ListState:
    """Cursor over a list of worktrees, finished by a single action."""

    def __init__(self, worktrees: Sequence[WorktreeRecord], options: Optional[SelectorOptions] = None):
        self.worktrees = list(worktrees)
        self.options = options or SelectorOptions()
        self.cursor = 0
        self._result: Optional[SelectionResult] = None

    @property
    def finished(self) -> bool:
        return self._result is not None

    @property
    def highlighted(self) -> Optional[WorktreeRecord]:
        if not self.worktrees:
            return None
        return self.worktrees[self.cursor]

    def _finish(self, action: SelectionAction, worktree: Optional[WorktreeRecord] = None) -> bool:
        if self.finished:
            return False
        self._result = SelectionResult(action, worktree)
        return True

    def move_up(self) -> bool:
        if self.finished or self.cursor == 0:
            return False
        self.cursor -= 1
        return True

    def move_down(self) -> bool:
        if self.finished or self.cursor >= len(self.worktrees) - 1:
            return False
        self.cursor += 1
        return True

    def choose(self) -> bool:
        if not self.worktrees:
            return False
        return self._finish(SelectionAction.SELECT, self.highlighted)

    def request_delete(self) -> bool:
        if not self.options.allow_delete or not self.worktrees:
            return False
        return self._finish(SelectionAction.DELETE, self.highlighted)

    def request_create(self) -> bool:
        if not self.options.allow_create:
            return False
        return self._finish(SelectionAction.CREATE)

    def quit(self) -> bool:
        return self._finish(SelectionAction.QUIT)

    def handle_key(self, key: str) -> bool:
        """Apply a key; returns True when the state changed."""
        if key in ("up", "k"):
            return self.move_up()
        if key in ("down", "j"):
            return self.move_down()
        if key == "enter":
            return self.choose()
        if key == "d":
            return self.request_delete()
        if key == "n":
            return self.request_create()
        if key in ("q", "ctrl+c"):
            return self.quit()
        return False

    def result(self) -> SelectionResult:
        return self._result or SelectionResult.quit()


class ConfirmState:
    """A Yes/No question. ``selected`` starts on No."""

    def __init__(self, title: str, message: str):
        self.title = title
        self.message = message
        self.selected = False
        self.finished = False
        self.cancelled = False

    def select(self, value: bool) -> bool:
        if self.finished or self.selected == value:
            return False
        self.selected = value
        return True

    def answer(self, value: bool) -> bool:
        if self.finished:
            return False
        self.selected = value
        self.finished = True
        return True

    def submit(self) -> bool:
        return self.answer(self.selected)

    def cancel(self) -> bool:
        if self.finished:
            return False
        self.cancelled = True
        self.finished = True
        return True

    def handle_key(self, key: str) -> bool:
        """Apply a key; returns True when the state changed."""
        if key in ("left", "up", "h", "k"):
            return self.select(True)
        if key in ("right", "down", "l", "j"):
            return self.select(False)
        if key == "y":
            return self.answer(True)
        if key == "n":
            return self.answer(False)
        if key == "enter":
            return self.submit()
        if key in ("q", "escape", "ctrl+c"):
            return self.cancel()
        return False

    def result(self) -> ConfirmResult:
        if self.cancelled:
            return ConfirmResult(confirmed=False, cancelled=True)
        return ConfirmResult(confirmed=self.finished and self.selected)


class InputState:
    """An ordered form of text fields with one focused field."""

    def __init__(self, title: str, fields: Sequence[InputField]):
        if not fields:
            raise ValueError("at least one input field is required")
        self.title = title
        self.fields = list(fields)
        self.values: List[str] = [f.default[: f.max_length] for f in self.fields]
        self.focused = 0
        self.submitted = False
        self.cancelled = False

    @property
    def finished(self) -> bool:
        return self.submitted or self.cancelled

    @property
    def is_last_field(self) -> bool:
        return self.focused == len(self.fields) - 1

    def all_filled(self) -> bool:
        return all(value.strip() for value in self.values)

    def insert(self, text: str) -> bool:
        """Append characters to the focused field; overflow is dropped."""
        if self.finished:
            return False
        limit = self.fields[self.focused].max_length
        current = self.values[self.focused]
        room = max(limit - len(current), 0)
        if not text or room == 0:
            return False
        self.values[self.focused] = current + text[:room]
        return True

    def backspace(self) -> bool:
        if self.finished or not self.values[self.focused]:
            return False
        self.values[self.focused] = self.values[self.focused][:-1]
        return True

    def set_value(self, index: int, value: str) -> None:
        self.values[index] = value[: self.fields[index].max_length]

    def next_field(self) -> bool:
        if self.finished:
            return False
        self.focused = (self.focused + 1) % len(self.fields)
        return True

    def prev_field(self) -> bool:
        if self.finished:
            return False
        self.focused = (self.focused - 1) % len(self.fields)
        return True

    def enter(self) -> bool:
        """Submit on the last field or when every field has a value, else advance."""
        if self.finished:
            return False
        if self.is_last_field or self.all_filled():
            self.submitted = True
            return True
        return self.next_field()

    def cancel(self) -> bool:
        if self.finished:
            return False
        self.cancelled = True
        return True

    def handle_key(self, key: str, character: Optional[str] = None) -> bool:
        """Apply a key; returns True when the state changed."""
        if key == "enter":
            return self.enter()
        if key == "tab":
            return self.next_field()
        if key == "shift+tab":
            return self.prev_field()
        if key == "backspace":
            return self.backspace()
        if key in ("escape", "ctrl+c"):
            return self.cancel()
        if character and character.isprintable():
            return self.insert(character)
        return False

    def result(self) -> InputResult:
        if not self.submitted:
            return InputResult(values=["" for _ in self.fields], submitted=False)
        return InputResult(values=list(self.values), submitted=True)
