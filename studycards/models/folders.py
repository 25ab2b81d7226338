"""
Folder models for StudyCards.

``FolderRecord`` is the flat row shape kept by the store. ``FolderNode`` is a
disposable projection of those rows into a tree, rebuilt on demand.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class FolderRecord(BaseModel):
    """
    A folder as persisted: one row per folder, linked to its parent by id.
    """

    id: str = Field(..., description="Unique folder identifier")

    name: str = Field(..., description="Display name, 1-50 characters")

    color: str = Field(..., description="One of the study card palette colors")

    user_id: str = Field(..., description="Owner; folders never reference another user's folders")

    parent_id: Optional[str] = Field(
        default=None,
        description="Parent folder id, or None for a root folder"
    )

    order_index: int = Field(
        default=0,
        description="Position among siblings, ascending"
    )

    created_at: Optional[datetime] = None

    updated_at: Optional[datetime] = None


class CardSetSummary(BaseModel):
    """The part of a card set the folder tree needs to display it."""

    id: str
    name: str
    card_count: int = 0


class FolderNode(FolderRecord):
    """
    A folder together with its sorted subfolders and attached card sets.
    """

    children: List['FolderNode'] = Field(
        default_factory=list,
        description="Subfolders sorted ascending by order_index"
    )

    card_sets: List[CardSetSummary] = Field(
        default_factory=list,
        description="Card sets filed directly in this folder"
    )


class TreeStats(BaseModel):
    """Totals over a folder forest."""

    total_folders: int = 0
    total_card_sets: int = 0
    total_cards: int = 0


class FolderStats(BaseModel):
    """Direct contents of a single folder."""

    card_set_count: int = 0
    subfolder_count: int = 0
    total_cards: int = 0


# Enable forward references for self-referencing model
FolderNode.model_rebuild()
