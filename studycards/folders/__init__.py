"""Folder hierarchy: tree building, validated mutations and storage backends."""

from .memory import InMemoryFolderStore
from .service import FolderService
from .store import FolderStore
from .tree import (
    build_folder_tree,
    count_tree,
    export_folder_structure,
    find_node,
    format_folder_path,
    iter_nodes,
)
from .validation import validate_folder_color, validate_folder_name

__all__ = [
    "InMemoryFolderStore",
    "FolderService",
    "FolderStore",
    "build_folder_tree",
    "count_tree",
    "export_folder_structure",
    "find_node",
    "format_folder_path",
    "iter_nodes",
    "validate_folder_color",
    "validate_folder_name"
]
