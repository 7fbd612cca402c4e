"""Input validation service for git-worktree-keeper."""

import os
import re

from git_worktree_keeper.exceptions import ValidationError

VALID_BRANCH_NAME = re.compile(r"^[A-Za-z0-9._/-]+$")

# Characters a shell would interpret; rejected even though git never runs through a shell
DANGEROUS_CHARACTERS = (";", "&", "|", "$", "`", "(", ")", "<", ">", '"', "'", "\\", "\n", "\r")

TRAVERSAL_PATTERN = "../../../"

RESTRICTED_DIRECTORIES = ("/etc/", "/usr/bin/", "/bin/", "/sbin/", "/root/", "/home/root/")


def _find_dangerous_character(value: str):
    for char in DANGEROUS_CHARACTERS:
        if char in value:
            return char
    return None


class InputValidationService:
    """Service for validating user-supplied names and paths before git sees them."""

    @staticmethod
    def validate_branch_name(branch: str) -> str:
        """
        Ensure a branch name is safe to pass to git.

        Args:
            branch: Branch name as typed by the user

        Returns:
            The branch name, unchanged

        Raises:
            ValidationError: If the name is empty, looks like an option,
                has leading/trailing or doubled dots, or contains characters
                outside ``[A-Za-z0-9._/-]``
        """
        if not branch:
            raise ValidationError("branch name", branch, "branch name cannot be empty")

        if branch.startswith("-"):
            raise ValidationError("branch name", branch, "branch name cannot start with a dash")

        if branch.startswith(".") or branch.endswith("."):
            raise ValidationError("branch name", branch, "branch name cannot start or end with a dot")

        if ".." in branch:
            raise ValidationError("branch name", branch, "branch name cannot contain consecutive dots")

        char = _find_dangerous_character(branch)
        if char is not None:
            raise ValidationError(
                "branch name", branch, f"branch name contains dangerous character: {char!r}"
            )

        if not VALID_BRANCH_NAME.match(branch):
            raise ValidationError("branch name", branch, "branch name contains invalid characters")

        return branch

    @staticmethod
    def validate_path(path: str) -> str:
        """
        Ensure a worktree path is safe to pass to git.

        Args:
            path: Relative or absolute path as typed by the user

        Returns:
            The path, unchanged

        Raises:
            ValidationError: If the path is empty, contains shell
                metacharacters or a deep traversal sequence, or resolves
                into a restricted system directory
        """
        if not path:
            raise ValidationError("path", path, "path cannot be empty")

        char = _find_dangerous_character(path)
        if char is not None:
            raise ValidationError("path", path, f"path contains dangerous character: {char!r}")

        if TRAVERSAL_PATTERN in path:
            raise ValidationError("path", path, "path contains directory traversal sequences")

        abs_path = os.path.abspath(path)
        for restricted in RESTRICTED_DIRECTORIES:
            if abs_path.startswith(restricted):
                raise ValidationError(
                    "path", path, f"path attempts to access restricted directory: {restricted}"
                )

        return path
