"""Shared constants for git-worktree-keeper."""

# Symbol constants
SYMBOL_CURRENT = "●"
SYMBOL_OTHER = "○"
SYMBOL_CURRENT_PLAIN = "*"
SYMBOL_TREE = "🌲"

ELLIPSIS = "..."

# Raw terminal control sequences
ANSI_CLEAR = "\033[2J\033[H"
ANSI_BOLD = "\033[1m"
ANSI_REVERSE = "\033[7m"
ANSI_DIM = "\033[2m"
ANSI_RESET = "\033[0m"
RULE_WIDTH = 60

# Help lines, one per interaction
LIST_HELP = "↑/k up  ↓/j down  Enter {enter_label}  q quit"
LIST_HELP_DELETE = "d delete"
LIST_HELP_CREATE = "n new"
CONFIRM_HELP = "←/→ choose  y yes  n no  Enter confirm  q cancel"
INPUT_HELP = "Tab next field  Shift+Tab previous  Enter submit  Esc cancel"

# Numbered fallback prompts
NUMBERED_PROMPT = "Select worktree (1-{count}) or 'q' to quit: "
NUMBERED_INVALID_INPUT = "Invalid input. Please enter a number (1-{count}) or 'q' to quit: "
NUMBERED_INVALID_SELECTION = "Invalid selection. Please enter a number (1-{count}) or 'q' to quit: "
CONFIRM_PROMPT = "[y/N]: "

# Shell integration
CD_PREFIX = "CD:"
SHELL_INTEGRATION_ENV = "GIT_WORKTREE_KEEPER_SHELL_INTEGRATION"
