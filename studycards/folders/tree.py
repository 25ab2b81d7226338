"""
Folder tree builder.

Turns the flat folder rows of one user into a nested forest. The transform is
total: it never raises, so it can be run while concurrent edits are still
settling in the store.
"""

import logging
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Set

from ..models import CardSetSummary, FolderNode, FolderRecord, TreeStats

_RECORD_FIELDS = set(FolderRecord.model_fields)


def build_folder_tree(
    records: Iterable[FolderRecord],
    card_sets: Optional[Mapping[str, Sequence[CardSetSummary]]] = None
) -> List[FolderNode]:
    """
    Build the folder forest from flat records.

    Records whose parent is missing are returned as roots. Siblings are sorted
    by ``order_index``; equal indexes keep input order.

    Args:
        records: Folder rows in any order
        card_sets: Optional card set summaries keyed by folder id

    Returns:
        The root nodes, each with nested ``children``
    """
    card_sets = card_sets or {}

    # First pass: wrap every record
    nodes: Dict[str, FolderNode] = {}
    for record in records:
        if record.id in nodes:
            logging.warning(f"Duplicate folder id {record.id} in tree input; keeping first record")
            continue
        nodes[record.id] = FolderNode(
            **record.model_dump(include=_RECORD_FIELDS),
            card_sets=list(card_sets.get(record.id, []))
        )

    cyclic = _cyclic_ids(nodes)

    # Second pass: link children to parents
    roots: List[FolderNode] = []
    for node in nodes.values():
        parent = nodes.get(node.parent_id) if node.parent_id else None
        if parent is None or node.id in cyclic:
            if node.parent_id and parent is None:
                logging.debug(f"Folder {node.id} references missing parent {node.parent_id}; treating as root")
            roots.append(node)
        else:
            parent.children.append(node)

    _sort_siblings(roots)
    return roots


def _cyclic_ids(nodes: Dict[str, FolderNode]) -> Set[str]:
    """Ids of folders whose parent chain loops back onto itself."""
    cyclic: Set[str] = set()
    settled: Set[str] = set()

    for start in nodes:
        path: List[str] = []
        on_path: Dict[str, int] = {}
        current: Optional[str] = start
        while current is not None and current in nodes and current not in settled:
            if current in on_path:
                loop = path[on_path[current]:]
                logging.warning(f"Folder parent cycle detected: {' -> '.join(loop)}")
                cyclic.update(loop)
                break
            on_path[current] = len(path)
            path.append(current)
            current = nodes[current].parent_id
        settled.update(path)

    return cyclic


def _sort_siblings(siblings: List[FolderNode]) -> None:
    siblings.sort(key=lambda node: node.order_index)
    for node in siblings:
        _sort_siblings(node.children)


def iter_nodes(nodes: Iterable[FolderNode]) -> Iterator[FolderNode]:
    """Walk a forest depth-first, parents before children."""
    for node in nodes:
        yield node
        yield from iter_nodes(node.children)


def find_node(nodes: Iterable[FolderNode], folder_id: str) -> Optional[FolderNode]:
    """Return the node with ``folder_id`` anywhere in the forest, or None."""
    for node in iter_nodes(nodes):
        if node.id == folder_id:
            return node
    return None


def count_tree(nodes: Iterable[FolderNode]) -> TreeStats:
    """Count folders, card sets and cards across a forest."""
    stats = TreeStats()
    for node in iter_nodes(nodes):
        stats.total_folders += 1
        stats.total_card_sets += len(node.card_sets)
        stats.total_cards += sum(card_set.card_count for card_set in node.card_sets)
    return stats


def format_folder_path(path: Sequence[FolderRecord]) -> str:
    """Join folder names root-first, e.g. ``Schule / Mathe / Algebra``."""
    return " / ".join(folder.name for folder in path)


def export_folder_structure(nodes: Iterable[FolderNode]) -> str:
    """
    Render the forest as an indented text outline.

    Returns:
        Text such as::

            Folder Structure:
            - Schule (1 sets)
              - Mathe (3 sets)
    """
    lines = ["Folder Structure:"]

    def export(node: FolderNode, depth: int) -> None:
        lines.append(f"{'  ' * depth}- {node.name} ({len(node.card_sets)} sets)")
        for child in node.children:
            export(child, depth + 1)

    for node in nodes:
        export(node, 0)

    return "\n".join(lines) + "\n"
