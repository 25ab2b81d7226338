"""
Persistence interface for the folder engine.

The folder service talks to storage only through this interface. Every method
is one round-trip to the store and therefore an await point.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from ..models import CardSetSummary, FolderRecord


class FolderStore(ABC):
    """
    Abstract base class for folder storage backends.

    Implementations must raise ``FolderNotFoundError`` from ``update_folder``
    and ``delete_folder`` when no row matches the id and user id, and wrap
    backend failures in ``PersistenceError``.
    """

    @abstractmethod
    async def get_folder(self, folder_id: str, user_id: Optional[str] = None) -> Optional[FolderRecord]:
        """
        Fetch a single folder.

        Args:
            folder_id: The folder to fetch
            user_id: Restrict the lookup to this owner when given

        Returns:
            The folder, or None if no row matches
        """
        pass

    @abstractmethod
    async def list_folders(self, user_id: str) -> List[FolderRecord]:
        """Return all folders of a user ordered by ``order_index``."""
        pass

    @abstractmethod
    async def list_card_sets(self, user_id: str) -> Dict[str, List[CardSetSummary]]:
        """Return a user's card set summaries keyed by folder id."""
        pass

    @abstractmethod
    async def search_folders(self, user_id: str, query: str) -> List[FolderRecord]:
        """Return folders whose name contains ``query`` (case-insensitive), by name."""
        pass

    @abstractmethod
    async def insert_folder(
        self,
        name: str,
        color: str,
        user_id: str,
        parent_id: Optional[str] = None,
        order_index: int = 0
    ) -> FolderRecord:
        """Insert a folder and return the stored row."""
        pass

    @abstractmethod
    async def update_folder(self, folder_id: str, user_id: str, changes: Dict[str, Any]) -> FolderRecord:
        """
        Apply column changes to one folder.

        Args:
            folder_id: The folder to change
            user_id: Owner; rows of other users never match
            changes: Column name to new value

        Returns:
            The updated row

        Raises:
            FolderNotFoundError: If no row matches
        """
        pass

    @abstractmethod
    async def delete_folder(self, folder_id: str, user_id: str) -> None:
        """Delete one folder, raising ``FolderNotFoundError`` if no row matches."""
        pass

    @abstractmethod
    async def count_child_folders(self, folder_id: str) -> int:
        pass

    @abstractmethod
    async def count_card_sets(self, folder_id: str) -> int:
        pass

    @abstractmethod
    async def count_cards_in_folder(self, folder_id: str) -> int:
        """Number of flashcards in the card sets filed directly in the folder."""
        pass
