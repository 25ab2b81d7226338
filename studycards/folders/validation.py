"""Folder name and color checks, run before anything is written."""

from ..constants import COLOR_NAMES, FORBIDDEN_FOLDER_NAME_CHARS, STUDY_CARD_COLORS
from ..errors import FolderValidationError


def validate_folder_name(name: str, max_length: int = 50) -> None:
    """
    Check a folder name.

    Args:
        name: The proposed name
        max_length: Longest accepted name

    Raises:
        FolderValidationError: If the name is blank, too long, or contains
            one of ``< > : " / \\ | ? *``
    """
    if not name or not name.strip():
        raise FolderValidationError("Folder name cannot be empty")

    if len(name) > max_length:
        raise FolderValidationError(f"Folder name cannot exceed {max_length} characters")

    if any(char in FORBIDDEN_FOLDER_NAME_CHARS for char in name):
        raise FolderValidationError("Folder name contains invalid characters")


def validate_folder_color(color: str) -> None:
    if color not in STUDY_CARD_COLORS:
        choices = ", ".join(f"{COLOR_NAMES[c]} ({c})" for c in STUDY_CARD_COLORS)
        raise FolderValidationError(f"Unknown folder color: {color}; choose one of {choices}")
