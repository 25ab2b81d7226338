"""Data models for StudyCards."""

from .cards import CardElement, CardFace, Flashcard, Position, Size, TextStyle
from .folders import CardSetSummary, FolderNode, FolderRecord, FolderStats, TreeStats

__all__ = [
    "CardElement",
    "CardFace",
    "Flashcard",
    "Position",
    "Size",
    "TextStyle",
    "CardSetSummary",
    "FolderNode",
    "FolderRecord",
    "FolderStats",
    "TreeStats"
]
