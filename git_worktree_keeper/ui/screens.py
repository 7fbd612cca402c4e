"""Textual screens for the full-screen selector."""

from typing import TypeVar

from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.screen import ModalScreen
from textual.widgets import Static

from git_worktree_keeper.config import Theme
from git_worktree_keeper.models import ConfirmResult, InputResult, SelectionResult
from git_worktree_keeper.ui.render import render_confirm, render_input, render_selector
from git_worktree_keeper.ui.state import ConfirmState, InputState, ListState

ResultType = TypeVar("ResultType")

DIALOG_CSS = """
{name} {{
    align: center middle;
}}

#dialog {{
    width: 80%;
    max-width: 100;
    height: auto;
    background: $surface;
    padding: 1 2;
}}

#body {{
    width: 100%;
    height: auto;
}}
"""


class StateScreen(ModalScreen[ResultType]):
    """A dialog that renders a state machine and dismisses with its result."""

    def __init__(self, state, color_theme: Theme):
        super().__init__()
        self.state = state
        self.color_theme = color_theme

    def compose(self) -> ComposeResult:
        with Vertical(id="dialog"):
            yield Static(id="body")

    def on_mount(self) -> None:
        """Apply the theme border and draw the first frame."""
        self.query_one("#dialog").styles.border = ("round", self.color_theme.primary)
        self.refresh_body()

    def render_body(self):
        """Build the dialog contents from the current state.

        Every subclass overrides this; it is called on mount and after each
        key that changes the state.
        """
        raise NotImplementedError(f"{type(self).__name__} must implement render_body")

    def refresh_body(self) -> None:
        self.query_one("#body", Static).update(self.render_body())

    def apply(self, changed: bool) -> None:
        """Dismiss once the state machine finishes, otherwise redraw on change."""
        if self.state.finished:
            self.dismiss(self.state.result())
        elif changed:
            self.refresh_body()


class SelectorScreen(StateScreen[SelectionResult]):
    """Worktree list with keyboard navigation."""

    DEFAULT_CSS = DIALOG_CSS.format(name="SelectorScreen")

    BINDINGS = [
        Binding("up,k", "cursor_up", "Up", show=False, priority=True),
        Binding("down,j", "cursor_down", "Down", show=False, priority=True),
        Binding("enter", "choose", "Select", priority=True),
        Binding("d", "delete", "Delete", show=False, priority=True),
        Binding("n", "create", "New", show=False, priority=True),
        Binding("q,ctrl+c", "cancel", "Quit", priority=True),
    ]

    def __init__(self, state: ListState, color_theme: Theme, max_path_length: int = 50):
        super().__init__(state, color_theme)
        self.max_path_length = max_path_length

    def render_body(self):
        options = self.state.options
        return render_selector(
            self.state.worktrees,
            self.state.cursor,
            options.title,
            options.allow_delete,
            self.color_theme,
            enter_label=options.enter_label,
            allow_create=options.allow_create,
            max_path_length=self.max_path_length,
        )

    def action_cursor_up(self) -> None:
        self.apply(self.state.move_up())

    def action_cursor_down(self) -> None:
        self.apply(self.state.move_down())

    def action_choose(self) -> None:
        self.apply(self.state.choose())

    def action_delete(self) -> None:
        self.apply(self.state.request_delete())

    def action_create(self) -> None:
        self.apply(self.state.request_create())

    def action_cancel(self) -> None:
        self.apply(self.state.quit())


class ConfirmScreen(StateScreen[ConfirmResult]):
    """Modal confirmation dialog."""

    DEFAULT_CSS = DIALOG_CSS.format(name="ConfirmScreen")

    BINDINGS = [
        Binding("left,up,h,k", "select(True)", "Yes", show=False, priority=True),
        Binding("right,down,l,j", "select(False)", "No", show=False, priority=True),
        Binding("y", "answer(True)", "Yes", priority=True),
        Binding("n", "answer(False)", "No", priority=True),
        Binding("enter", "submit", "Confirm", priority=True),
        Binding("q,escape,ctrl+c", "cancel", "Cancel", priority=True),
    ]

    def __init__(self, state: ConfirmState, color_theme: Theme):
        super().__init__(state, color_theme)

    def render_body(self):
        return render_confirm(self.state.title, self.state.message, self.state.selected, self.color_theme)

    def action_select(self, value: bool) -> None:
        self.apply(self.state.select(value))

    def action_answer(self, value: bool) -> None:
        self.apply(self.state.answer(value))

    def action_submit(self) -> None:
        self.apply(self.state.submit())

    def action_cancel(self) -> None:
        self.apply(self.state.cancel())


class InputScreen(StateScreen[InputResult]):
    """Text form; printable keys go to the focused field."""

    DEFAULT_CSS = DIALOG_CSS.format(name="InputScreen")

    BINDINGS = [
        Binding("enter", "enter", "Submit", priority=True),
        Binding("tab", "next_field", "Next", show=False, priority=True),
        Binding("shift+tab", "prev_field", "Previous", show=False, priority=True),
        Binding("backspace", "backspace", "Delete", show=False, priority=True),
        Binding("escape,ctrl+c", "cancel", "Cancel", priority=True),
    ]

    def __init__(self, state: InputState, color_theme: Theme):
        super().__init__(state, color_theme)

    def render_body(self):
        return render_input(
            self.state.title, self.state.fields, self.state.values, self.state.focused, self.color_theme
        )

    def on_key(self, event: events.Key) -> None:
        """Type printable characters into the focused field."""
        if event.is_printable and event.character:
            event.stop()
            self.apply(self.state.insert(event.character))

    def action_enter(self) -> None:
        self.apply(self.state.enter())

    def action_next_field(self) -> None:
        self.apply(self.state.next_field())

    def action_prev_field(self) -> None:
        self.apply(self.state.prev_field())

    def action_backspace(self) -> None:
        self.apply(self.state.backspace())

    def action_cancel(self) -> None:
        self.apply(self.state.cancel())


class PromptApp(App):
    """Hosts a single dialog screen and exits with its result."""

    TITLE = "git-worktree-keeper"

    def __init__(self, screen: StateScreen):
        super().__init__()
        self._dialog = screen

    def on_mount(self) -> None:
        self.push_screen(self._dialog, callback=self.exit)
