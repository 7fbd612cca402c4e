"""Pure rendering of selector state.

The ``render_*`` functions build rich ``Text`` for the full-screen selector;
the ``render_plain_*`` functions build ANSI strings for the raw-keystroke
selector. None of them read global state: the theme is always passed in.
"""

from typing import List, Sequence

from rich.text import Text

from git_worktree_keeper.config import Theme
from git_worktree_keeper.constants import (
    ANSI_BOLD,
    ANSI_CLEAR,
    ANSI_DIM,
    ANSI_RESET,
    ANSI_REVERSE,
    CONFIRM_HELP,
    ELLIPSIS,
    INPUT_HELP,
    LIST_HELP,
    LIST_HELP_CREATE,
    LIST_HELP_DELETE,
    RULE_WIDTH,
    SYMBOL_CURRENT,
    SYMBOL_CURRENT_PLAIN,
    SYMBOL_OTHER,
    SYMBOL_TREE,
)
from git_worktree_keeper.models import InputField, WorktreeRecord


def shorten_path(path: str, max_length: int = 50) -> str:
    """Keep the tail of ``path`` so it fits in ``max_length`` characters."""
    if len(path) <= max_length:
        return path
    return ELLIPSIS + path[-(max_length - len(ELLIPSIS)):]


def list_help(enter_label: str = "select", allow_delete: bool = False, allow_create: bool = False) -> str:
    """Key help line for a list selection."""
    parts = [LIST_HELP.format(enter_label=enter_label)]
    if allow_delete:
        parts.append(LIST_HELP_DELETE)
    if allow_create:
        parts.append(LIST_HELP_CREATE)
    return "  ".join(parts)


def render_selector(
    worktrees: Sequence[WorktreeRecord],
    cursor: int,
    title: str,
    allow_delete: bool,
    theme: Theme,
    enter_label: str = "select",
    allow_create: bool = False,
    max_path_length: int = 50,
) -> Text:
    """Render the worktree list with the row at ``cursor`` highlighted."""
    text = Text()
    text.append(f"{SYMBOL_TREE} {title}\n\n", style=f"bold {theme.primary}")

    for index, worktree in enumerate(worktrees):
        selected = index == cursor
        row_style = f"bold {theme.text} on {theme.primary}" if selected else theme.text

        text.append("❯ " if selected else "  ", style=theme.secondary)
        if worktree.is_current:
            text.append(f"{SYMBOL_CURRENT} ", style=theme.success)
        else:
            text.append(f"{SYMBOL_OTHER} ", style=theme.muted)

        if not selected and (worktree.is_detached or worktree.is_bare):
            branch_style = theme.warning
        else:
            branch_style = row_style
        text.append(worktree.branch or worktree.name, style=branch_style)
        if worktree.short_hash:
            text.append(f" {worktree.short_hash}", style=theme.muted)
        text.append("\n")
        text.append(f"    {shorten_path(worktree.path, max_path_length)}\n", style=theme.muted)

    text.append("\n")
    text.append(list_help(enter_label, allow_delete, allow_create), style=theme.muted)
    return text


def render_confirm(title: str, message: str, selected: bool, theme: Theme) -> Text:
    """Render a Yes/No question; ``selected`` True highlights Yes.

    Every question guards a destructive action, so Yes is highlighted in the
    error color.
    """
    yes = f"bold {theme.text} on {theme.error}"
    no = f"bold {theme.text} on {theme.primary}"
    inactive = theme.muted

    text = Text()
    text.append(f"{title}\n\n", style=f"bold {theme.warning}")
    text.append(f"{message}\n\n", style=theme.text)
    text.append("[ Yes ]", style=yes if selected else inactive)
    text.append("  ")
    text.append("[ No ]", style=inactive if selected else no)
    text.append("\n\n")
    text.append(CONFIRM_HELP, style=theme.muted)
    return text


def render_input(
    title: str,
    fields: Sequence[InputField],
    values: Sequence[str],
    focused: int,
    theme: Theme,
) -> Text:
    """Render a text form with a block cursor after the focused value."""
    text = Text()
    text.append(f"{title}\n\n", style=f"bold {theme.primary}")
    for index, (field, value) in enumerate(zip(fields, values)):
        is_focused = index == focused
        text.append(f"{field.prompt}\n", style=f"bold {theme.secondary}" if is_focused else theme.muted)
        text.append("> ", style=theme.primary if is_focused else theme.muted)
        text.append(value, style=theme.text)
        if is_focused:
            text.append("█", style=theme.primary)
        text.append("\n\n")
    text.append(INPUT_HELP, style=theme.muted)
    return text


def render_plain_list(
    worktrees: Sequence[WorktreeRecord],
    cursor: int,
    title: str,
    enter_label: str = "select",
    allow_delete: bool = False,
    allow_create: bool = False,
) -> str:
    """Render the worktree list as ANSI text, clearing the screen first."""
    rule = "-" * RULE_WIDTH
    lines: List[str] = [ANSI_CLEAR + f"{ANSI_BOLD}{SYMBOL_TREE} {title}{ANSI_RESET}", rule]
    for index, worktree in enumerate(worktrees):
        status = f"{SYMBOL_CURRENT_PLAIN} " if worktree.is_current else "  "
        highlight = ANSI_REVERSE if index == cursor else ""
        lines.append(f"{highlight}{status}{worktree.path} ({worktree.branch}){ANSI_RESET}")
    lines.append(rule)
    lines.append(f"{ANSI_DIM}{list_help(enter_label, allow_delete, allow_create)}{ANSI_RESET}")
    return "\n".join(lines) + "\n"


def render_plain_confirm(title: str, message: str, selected: bool) -> str:
    """Render a Yes/No question as ANSI text, clearing the screen first."""
    yes = f"{ANSI_REVERSE}[ Yes ]{ANSI_RESET}" if selected else "[ Yes ]"
    no = "[ No ]" if selected else f"{ANSI_REVERSE}[ No ]{ANSI_RESET}"
    lines = [
        ANSI_CLEAR + f"{ANSI_BOLD}{title}{ANSI_RESET}",
        "",
        message,
        "",
        f"{yes}  {no}",
        "",
        CONFIRM_HELP,
    ]
    return "\n".join(lines) + "\n"


def render_plain_input(title: str, fields: Sequence[InputField], values: Sequence[str], focused: int) -> str:
    """Render a text form as ANSI text, clearing the screen first."""
    lines = [ANSI_CLEAR + f"{ANSI_BOLD}{title}{ANSI_RESET}", ""]
    for index, (field, value) in enumerate(zip(fields, values)):
        marker = ">" if index == focused else " "
        lines.append(f"{marker} {field.prompt}: {value}")
    lines.append("")
    lines.append(INPUT_HELP)
    return "\n".join(lines) + "\n"
