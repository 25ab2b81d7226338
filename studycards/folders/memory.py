"""
In-memory folder store.

Keeps folders and card set summaries in dictionaries. Used by the tests and by
the CLI's ``--memory`` mode; ``calls`` records one entry per round-trip so
tests can check how many store reads an operation issued.
"""

import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from ..errors import FolderNotFoundError
from ..models import CardSetSummary, FolderRecord
from .store import FolderStore


class InMemoryFolderStore(FolderStore):
    """
    Dictionary-backed ``FolderStore``.
    """

    def __init__(self):
        self._folders: Dict[str, FolderRecord] = {}
        # card set id -> (folder id, user id, summary)
        self._card_sets: Dict[str, Tuple[str, str, CardSetSummary]] = {}
        self.calls: List[Tuple[str, Any]] = []

    def add_folder(self, record: FolderRecord) -> FolderRecord:
        """Seed a folder row directly, bypassing validation."""
        self._folders[record.id] = record.model_copy()
        return record

    def add_card_set(self, folder_id: str, user_id: str, name: str,
                     card_count: int = 0, card_set_id: Optional[str] = None) -> CardSetSummary:
        """Attach a card set summary to a folder."""
        summary = CardSetSummary(
            id=card_set_id or str(uuid.uuid4()),
            name=name,
            card_count=card_count
        )
        self._card_sets[summary.id] = (folder_id, user_id, summary)
        return summary

    async def get_folder(self, folder_id: str, user_id: Optional[str] = None) -> Optional[FolderRecord]:
        self.calls.append(("get_folder", folder_id))
        record = self._folders.get(folder_id)
        if record is None or (user_id is not None and record.user_id != user_id):
            return None
        return record.model_copy()

    async def list_folders(self, user_id: str) -> List[FolderRecord]:
        self.calls.append(("list_folders", user_id))
        owned = [f for f in self._folders.values() if f.user_id == user_id]
        return [f.model_copy() for f in sorted(owned, key=lambda f: f.order_index)]

    async def list_card_sets(self, user_id: str) -> Dict[str, List[CardSetSummary]]:
        self.calls.append(("list_card_sets", user_id))
        grouped: Dict[str, List[CardSetSummary]] = {}
        for folder_id, owner, summary in self._card_sets.values():
            if owner == user_id:
                grouped.setdefault(folder_id, []).append(summary.model_copy())
        return grouped

    async def search_folders(self, user_id: str, query: str) -> List[FolderRecord]:
        self.calls.append(("search_folders", query))
        needle = query.lower()
        hits = [
            f for f in self._folders.values()
            if f.user_id == user_id and needle in f.name.lower()
        ]
        return [f.model_copy() for f in sorted(hits, key=lambda f: f.name)]

    async def insert_folder(self, name: str, color: str, user_id: str,
                            parent_id: Optional[str] = None, order_index: int = 0) -> FolderRecord:
        self.calls.append(("insert_folder", name))
        now = datetime.now()
        record = FolderRecord(
            id=str(uuid.uuid4()),
            name=name,
            color=color,
            user_id=user_id,
            parent_id=parent_id,
            order_index=order_index,
            created_at=now,
            updated_at=now
        )
        self._folders[record.id] = record
        return record.model_copy()

    async def update_folder(self, folder_id: str, user_id: str, changes: Dict[str, Any]) -> FolderRecord:
        self.calls.append(("update_folder", folder_id))
        record = self._folders.get(folder_id)
        if record is None or record.user_id != user_id:
            raise FolderNotFoundError(folder_id, user_id)
        updated = record.model_copy(update={**changes, "updated_at": datetime.now()})
        self._folders[folder_id] = updated
        return updated.model_copy()

    async def delete_folder(self, folder_id: str, user_id: str) -> None:
        self.calls.append(("delete_folder", folder_id))
        record = self._folders.get(folder_id)
        if record is None or record.user_id != user_id:
            raise FolderNotFoundError(folder_id, user_id)
        del self._folders[folder_id]

    async def count_child_folders(self, folder_id: str) -> int:
        self.calls.append(("count_child_folders", folder_id))
        return sum(1 for f in self._folders.values() if f.parent_id == folder_id)

    async def count_card_sets(self, folder_id: str) -> int:
        self.calls.append(("count_card_sets", folder_id))
        return sum(1 for owner_folder, _, _ in self._card_sets.values() if owner_folder == folder_id)

    async def count_cards_in_folder(self, folder_id: str) -> int:
        self.calls.append(("count_cards_in_folder", folder_id))
        return sum(
            summary.card_count
            for owner_folder, _, summary in self._card_sets.values()
            if owner_folder == folder_id
        )
