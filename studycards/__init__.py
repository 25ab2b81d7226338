"""
StudyCards: card content layout and folder hierarchy engine.

Positions text and image elements on flashcard faces and keeps each user's
folder forest consistent (no cycles, bounded depth, no silent deletes).
"""

__version__ = "0.1.0"
__author__ = "StudyCards Project"

# Import main components
from .database import DatabaseManager
from .folders import FolderService, FolderStore, InMemoryFolderStore, build_folder_tree
from .models import CardElement, CardFace, Flashcard, FolderNode, FolderRecord
from .content import add_element, delete_element, move_element, render, update_element

__all__ = [
    "DatabaseManager",
    "FolderService",
    "FolderStore",
    "InMemoryFolderStore",
    "build_folder_tree",
    "CardElement",
    "CardFace",
    "Flashcard",
    "FolderNode",
    "FolderRecord",
    "add_element",
    "delete_element",
    "move_element",
    "render",
    "update_element"
]
