"""
Error types raised by the StudyCards engines.

Every folder error is recoverable: the operation is rejected and nothing is
written. Callers can switch on the class to pick a user-facing message.
"""

from typing import Optional


class StudyCardsError(Exception):
    """Base class for all StudyCards errors."""


class FolderError(StudyCardsError):
    """Base class for rejected folder operations."""


class FolderValidationError(FolderError):
    """A folder name or color failed validation."""


class NotEmptyError(FolderError):
    """
    A folder still holds subfolders or card sets and cannot be deleted.
    """

    def __init__(self, folder_id: str, reason: str):
        self.folder_id = folder_id
        self.reason = reason
        if reason == "subfolders":
            message = "Cannot delete folder with subfolders. Move or delete subfolders first."
        else:
            message = "Cannot delete folder with card sets. Move or delete card sets first."
        super().__init__(message)


class CircularReferenceError(FolderError):
    """Moving the folder would make it a descendant of itself."""

    def __init__(self, folder_id: str, new_parent_id: str):
        self.folder_id = folder_id
        self.new_parent_id = new_parent_id
        super().__init__("Cannot move folder: this would create a circular reference")


class DepthExceededError(FolderError):
    """The folder would end up deeper than the configured depth cap."""

    def __init__(self, parent_id: str, max_depth: int):
        self.parent_id = parent_id
        self.max_depth = max_depth
        super().__init__(
            f"Cannot move folder: maximum depth of {max_depth} levels would be exceeded"
        )


class FolderNotFoundError(FolderError):
    """No folder matches the given id (and user id, where scoped)."""

    def __init__(self, folder_id: str, user_id: Optional[str] = None):
        self.folder_id = folder_id
        self.user_id = user_id
        super().__init__(f"Folder not found: {folder_id}")


class PersistenceError(StudyCardsError):
    """The backing store failed (connection, constraint, ...)."""


class CardContentError(StudyCardsError):
    """Stored card face content could not be parsed."""


class DuplicateElementError(ValueError):
    """An element id was added twice to the same card face."""

    def __init__(self, element_id: str):
        self.element_id = element_id
        super().__init__(f"Element id already present on face: {element_id}")
