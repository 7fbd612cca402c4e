"""Raw-keystroke selector for terminals that cannot host the full-screen interface."""

from typing import Callable, Optional, Sequence

from git_worktree_keeper.constants import ANSI_CLEAR
from git_worktree_keeper.exceptions import InputClosedError
from git_worktree_keeper.logging_config import get_logger
from git_worktree_keeper.models import (
    ConfirmResult,
    InputField,
    InputResult,
    SelectionResult,
    SelectorOptions,
    WorktreeRecord,
)
from git_worktree_keeper.ui.keys import decode_confirm_key, decode_key, decode_text_key, new_text_decoder
from git_worktree_keeper.ui.render import render_plain_confirm, render_plain_input, render_plain_list
from git_worktree_keeper.ui.selectors.base import SelectorStrategy
from git_worktree_keeper.ui.state import ConfirmState, InputState, ListState
from git_worktree_keeper.ui.terminal import raw_mode

logger = get_logger(__name__)

READ_SIZE = 8

# Action keys honoured only when the selection options enable them
OPTIONAL_LIST_KEYS = {b"d": "d", b"n": "n"}


class KeyboardSelector(SelectorStrategy):
    """Arrow-key navigation over binary terminal streams, redrawn on every change.

    Args:
        input: Binary stream to read keystrokes from
        output: Binary stream to draw on
        mode_factory: Context manager factory that puts ``input`` into raw
            mode; raises ``RawModeUnavailable`` when it cannot
    """

    def __init__(self, input, output, mode_factory: Callable = raw_mode):
        self.input = input
        self.output = output
        self.mode_factory = mode_factory

    def _read(self) -> bytes:
        data = self.input.read(READ_SIZE)
        if not data:
            raise InputClosedError()
        return data

    def _write(self, text: str) -> None:
        self.output.write(text.encode("utf-8"))
        self.output.flush()

    def _list_key(self, data: bytes) -> Optional[str]:
        key = decode_key(data)
        if key == "cancel":
            return "q"
        return key or OPTIONAL_LIST_KEYS.get(data)

    def select(self, worktrees: Sequence[WorktreeRecord], options: SelectorOptions) -> SelectionResult:
        state = ListState(worktrees, options)

        def draw() -> None:
            self._write(
                render_plain_list(
                    state.worktrees,
                    state.cursor,
                    options.title,
                    enter_label=options.enter_label,
                    allow_delete=options.allow_delete,
                    allow_create=options.allow_create,
                )
            )

        with self.mode_factory(self.input):
            draw()
            while not state.finished:
                key = self._list_key(self._read())
                if key is not None and state.handle_key(key) and not state.finished:
                    draw()
            self._write(ANSI_CLEAR)

        logger.debug(f"Keyboard selection finished: {state.result().action.value}")
        return state.result()

    def confirm(self, title: str, message: str) -> ConfirmResult:
        state = ConfirmState(title, message)

        with self.mode_factory(self.input):
            self._write(render_plain_confirm(title, message, state.selected))
            while not state.finished:
                key = decode_confirm_key(self._read())
                if key is not None and state.handle_key(key) and not state.finished:
                    self._write(render_plain_confirm(title, message, state.selected))
            self._write(ANSI_CLEAR)

        return state.result()

    def prompt(self, title: str, fields: Sequence[InputField]) -> InputResult:
        state = InputState(title, fields)
        decoder = new_text_decoder()

        with self.mode_factory(self.input):
            self._write(render_plain_input(title, state.fields, state.values, state.focused))
            while not state.finished:
                changed = False
                for press in decode_text_key(self._read(), decoder):
                    changed = state.handle_key(press.key, press.character) or changed
                    if state.finished:
                        break
                if changed and not state.finished:
                    self._write(render_plain_input(title, state.fields, state.values, state.focused))
            self._write(ANSI_CLEAR)

        return state.result()
