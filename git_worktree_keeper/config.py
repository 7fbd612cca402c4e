"""Configuration handling for git-worktree-keeper"""

import re
from dataclasses import dataclass, field, fields

HEX_COLOR = re.compile(r"^#[0-9A-Fa-f]{6}$")


@dataclass(frozen=True)
class Theme:
    """Colors used when rendering the full-screen selector.

    Passed explicitly into every render call; there is no module-level theme.
    """

    primary: str = "#7C3AED"
    secondary: str = "#06B6D4"
    success: str = "#10B981"
    warning: str = "#F59E0B"
    error: str = "#EF4444"
    muted: str = "#6B7280"
    text: str = "#F9FAFB"

    def __post_init__(self):
        """Validate every color is a #RRGGBB hex string."""
        for f in fields(self):
            value = getattr(self, f.name)
            if not isinstance(value, str) or not HEX_COLOR.match(value):
                raise ValueError(f"theme.{f.name} must be a #RRGGBB color, got '{value}'")

    @classmethod
    def from_dict(cls, theme_dict: dict) -> "Theme":
        """Create Theme from dictionary, ignoring unknown and empty keys."""
        known_fields = {f.name for f in fields(cls)}
        filtered = {k: v for k, v in theme_dict.items() if k in known_fields and v}
        return cls(**filtered)


@dataclass
class Config:
    """Configuration for git-worktree-keeper with validation."""

    # Worktree creation
    default_worktree_path: str = "../"
    auto_create_branch: bool = True

    # Removal
    delete_branch_on_remove: bool = False  # Default to false for safety
    confirm_delete: bool = True

    # Display
    max_path_length: int = 50
    theme: Theme = field(default_factory=Theme)

    # Execution modes
    verbose: bool = False
    debug: bool = False

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_default_worktree_path()
        self._validate_max_path_length()
        self._validate_theme()

    def _validate_default_worktree_path(self):
        """Validate default_worktree_path is not empty."""
        if not self.default_worktree_path or not self.default_worktree_path.strip():
            raise ValueError("default_worktree_path cannot be empty")
        self.default_worktree_path = self.default_worktree_path.strip()

    def _validate_max_path_length(self):
        """Validate max_path_length leaves room for an ellipsis."""
        if self.max_path_length < 4:
            raise ValueError(f"max_path_length must be at least 4, got {self.max_path_length}")

    def _validate_theme(self):
        """Accept a plain dict for theme."""
        if isinstance(self.theme, dict):
            self.theme = Theme.from_dict(self.theme)
        elif not isinstance(self.theme, Theme):
            raise ValueError("theme must be a Theme or a dict")

    def to_dict(self) -> dict:
        """Convert config to dictionary."""
        return {
            "default_worktree_path": self.default_worktree_path,
            "auto_create_branch": self.auto_create_branch,
            "delete_branch_on_remove": self.delete_branch_on_remove,
            "confirm_delete": self.confirm_delete,
            "max_path_length": self.max_path_length,
            "theme": {f.name: getattr(self.theme, f.name) for f in fields(self.theme)},
            "verbose": self.verbose,
            "debug": self.debug,
        }

    def get(self, key: str, default=None):
        """Get config value by key."""
        return getattr(self, key, default)

    @classmethod
    def from_dict(cls, config_dict: dict) -> "Config":
        """Create Config from dictionary."""
        known_fields = {
            "default_worktree_path",
            "auto_create_branch",
            "delete_branch_on_remove",
            "confirm_delete",
            "max_path_length",
            "theme",
            "verbose",
            "debug",
        }

        filtered = {k: v for k, v in config_dict.items() if k in known_fields}
        return cls(**filtered)
