"""
Folder mutation engine.

Validated create/update/delete/move/reorder operations on a user's folder
forest. Every check runs before the write it guards: names and colors are
validated up front, structural checks (cycles, depth, emptiness) read the
store and decide, and only then is the change persisted.
"""

import logging
import random
from typing import Dict, List, Optional, Sequence

from ..config import config
from ..constants import STUDY_CARD_COLORS
from ..errors import (
    CircularReferenceError,
    DepthExceededError,
    FolderNotFoundError,
    NotEmptyError,
    StudyCardsError,
)
from ..models import FolderNode, FolderRecord, FolderStats
from .store import FolderStore
from .tree import build_folder_tree
from .validation import validate_folder_color, validate_folder_name


class FolderService:
    """
    Folder operations scoped to one user at a time.

    Ancestor walks issue one store read per level and are capped at
    ``max_depth`` steps, so they terminate even on corrupted parent chains.
    """

    def __init__(self, store: FolderStore, max_depth: Optional[int] = None,
                 max_name_length: Optional[int] = None):
        """
        Initialize the folder service.

        Args:
            store: Persistence backend for folder rows
            max_depth: Depth cap (root is depth 0); defaults to config value
            max_name_length: Longest folder name; defaults to config value
        """
        self.store = store
        self.max_depth = config.max_folder_depth if max_depth is None else max_depth
        self.max_name_length = (
            config.max_folder_name_length if max_name_length is None else max_name_length
        )

    async def get_all(self, user_id: str) -> List[FolderNode]:
        """
        Load a user's folders and card sets as a tree.

        Args:
            user_id: Owner of the folders

        Returns:
            Root folder nodes with nested children
        """
        records = await self.store.list_folders(user_id)
        card_sets = await self.store.list_card_sets(user_id)
        return build_folder_tree(records, card_sets)

    async def get_by_id(self, folder_id: str, user_id: str) -> Optional[FolderRecord]:
        return await self.store.get_folder(folder_id, user_id)

    async def create(self, name: str, color: str, parent_id: Optional[str], user_id: str,
                     order_index: int = 0) -> FolderRecord:
        """
        Create a folder, either as a root or under an existing folder.

        Args:
            name: Folder name
            color: Palette color
            parent_id: Parent folder, or None for a root folder
            user_id: Owner
            order_index: Position among siblings

        Returns:
            The stored folder

        Raises:
            FolderValidationError: Bad name or color
            FolderNotFoundError: The parent does not exist for this user
            DepthExceededError: The new folder would exceed the depth cap
        """
        validate_folder_name(name, self.max_name_length)
        validate_folder_color(color)

        if parent_id is not None:
            await self._check_parent_depth(parent_id, user_id)

        record = await self.store.insert_folder(
            name=name,
            color=color,
            user_id=user_id,
            parent_id=parent_id,
            order_index=order_index
        )
        logging.info(f"Created folder {record.id} ({record.name!r}) under {parent_id or 'root'}")
        return record

    async def update(self, folder_id: str, user_id: str, name: Optional[str] = None,
                     color: Optional[str] = None, order_index: Optional[int] = None) -> FolderRecord:
        """
        Change a folder's name, color or order index.

        The parent is not changeable here; use ``move``.

        Raises:
            FolderValidationError: Bad name or color
            FolderNotFoundError: No such folder for this user
        """
        changes: Dict[str, object] = {}
        if name is not None:
            validate_folder_name(name, self.max_name_length)
            changes["name"] = name
        if color is not None:
            validate_folder_color(color)
            changes["color"] = color
        if order_index is not None:
            changes["order_index"] = order_index

        if not changes:
            record = await self.store.get_folder(folder_id, user_id)
            if record is None:
                raise FolderNotFoundError(folder_id, user_id)
            return record

        record = await self.store.update_folder(folder_id, user_id, changes)
        logging.info(f"Updated folder {folder_id}: {sorted(changes)}")
        return record

    async def rename(self, folder_id: str, name: str, user_id: str) -> FolderRecord:
        return await self.update(folder_id, user_id, name=name)

    async def delete(self, folder_id: str, user_id: str) -> None:
        """
        Delete an empty folder.

        Raises:
            NotEmptyError: The folder has subfolders or card sets
            FolderNotFoundError: No such folder for this user
        """
        if await self.store.count_child_folders(folder_id) > 0:
            raise NotEmptyError(folder_id, "subfolders")

        if await self.store.count_card_sets(folder_id) > 0:
            raise NotEmptyError(folder_id, "card_sets")

        await self.store.delete_folder(folder_id, user_id)
        logging.info(f"Deleted folder {folder_id}")

    async def move(self, folder_id: str, new_parent_id: Optional[str], user_id: str) -> FolderRecord:
        """
        Re-parent a folder.

        Args:
            folder_id: The folder to move
            new_parent_id: Its new parent, or None to make it a root
            user_id: Owner

        Returns:
            The updated folder

        Raises:
            CircularReferenceError: The new parent is the folder or one of its descendants
            DepthExceededError: The new parent is already at the deepest allowed level
            FolderNotFoundError: The folder or the new parent does not exist
        """
        if new_parent_id is not None:
            if await self._is_descendant(new_parent_id, folder_id, user_id):
                raise CircularReferenceError(folder_id, new_parent_id)
            await self._check_parent_depth(new_parent_id, user_id)

        record = await self.store.update_folder(folder_id, user_id, {"parent_id": new_parent_id})
        logging.info(f"Moved folder {folder_id} under {new_parent_id or 'root'}")
        return record

    async def reorder(self, ordered_ids: Sequence[str], user_id: str) -> None:
        """
        Set ``order_index`` to each folder's position in ``ordered_ids``.

        Writes are issued one at a time and are not transactional: if one
        fails, the earlier ones stay applied.

        The store error of a failed write propagates unchanged, with
        ``applied_ids`` (folders already updated) and ``failed_id`` set on it.
        """
        applied: List[str] = []
        for index, folder_id in enumerate(ordered_ids):
            try:
                await self.store.update_folder(folder_id, user_id, {"order_index": index})
            except StudyCardsError as e:
                logging.warning(f"Reorder stopped at {folder_id} after {len(applied)} updates: {e}")
                e.applied_ids = list(applied)
                e.failed_id = folder_id
                raise
            applied.append(folder_id)

    async def get_folder_path(self, folder_id: str, user_id: Optional[str] = None) -> List[FolderRecord]:
        """
        Return the folder and its ancestors, root first.

        A broken chain (missing parent) or a loop truncates the path instead
        of raising.
        """
        path: List[FolderRecord] = []
        seen = set()
        current: Optional[str] = folder_id

        while current is not None and len(path) < self.max_depth:
            if current in seen:
                logging.warning(f"Parent loop at folder {current} while building path for {folder_id}")
                break
            record = await self.store.get_folder(current, user_id)
            if record is None:
                if path:
                    logging.warning(f"Folder path for {folder_id} broken at missing parent {current}")
                break
            seen.add(current)
            path.append(record)
            current = record.parent_id

        path.reverse()
        return path

    async def search(self, query: str, user_id: str) -> List[FolderRecord]:
        return await self.store.search_folders(user_id, query)

    async def get_stats(self, folder_id: str) -> FolderStats:
        """Count the card sets, subfolders and cards directly in a folder."""
        return FolderStats(
            card_set_count=await self.store.count_card_sets(folder_id),
            subfolder_count=await self.store.count_child_folders(folder_id),
            total_cards=await self.store.count_cards_in_folder(folder_id)
        )

    @staticmethod
    def random_color() -> str:
        return random.choice(STUDY_CARD_COLORS)

    async def _is_descendant(self, candidate_id: str, folder_id: str, user_id: str) -> bool:
        """Whether ``candidate_id`` is ``folder_id`` itself or lies below it."""
        current: Optional[str] = candidate_id
        for _ in range(self.max_depth):
            if current is None:
                return False
            if current == folder_id:
                return True
            record = await self.store.get_folder(current, user_id)
            current = record.parent_id if record else None

        if current is not None:
            logging.warning(f"Ancestor walk from {candidate_id} exceeded {self.max_depth} levels")
        return current == folder_id

    async def _check_parent_depth(self, parent_id: str, user_id: str) -> None:
        """Raise unless a child of ``parent_id`` would stay within the depth cap."""
        parent = await self.store.get_folder(parent_id, user_id)
        if parent is None:
            raise FolderNotFoundError(parent_id, user_id)

        depth = 0
        current = parent.parent_id
        while current is not None and depth < self.max_depth:
            ancestor = await self.store.get_folder(current, user_id)
            if ancestor is None:
                break
            depth += 1
            current = ancestor.parent_id

        if depth >= self.max_depth - 1:
            raise DepthExceededError(parent_id, self.max_depth)
