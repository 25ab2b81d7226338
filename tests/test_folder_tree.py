"""
Unit tests for building folder trees from flat records.
"""

import itertools
import unittest

from studycards.folders import (
    build_folder_tree,
    count_tree,
    export_folder_structure,
    find_node,
    format_folder_path,
    iter_nodes,
)
from studycards.models import CardSetSummary, FolderRecord


def make_record(folder_id, parent_id=None, order_index=0, name=None):
    return FolderRecord(
        id=folder_id,
        name=name or f"Folder {folder_id}",
        color="#7EC4FF",
        user_id="u1",
        parent_id=parent_id,
        order_index=order_index
    )


class TestBuildFolderTree(unittest.TestCase):
    """Test the flat-to-nested transform."""

    def test_structure_independent_of_input_order(self):
        """Test every permutation of the input builds the same tree."""
        records = [
            make_record("1", None, 0),
            make_record("2", "1", 0),
            make_record("3", "1", 1)
        ]

        for permutation in itertools.permutations(records):
            roots = build_folder_tree(list(permutation))

            self.assertEqual([root.id for root in roots], ["1"])
            self.assertEqual([child.id for child in roots[0].children], ["2", "3"])

    def test_empty_input(self):
        self.assertEqual(build_folder_tree([]), [])

    def test_orphans_become_roots(self):
        """Test a record pointing at a missing parent is kept as a root."""
        roots = build_folder_tree([
            make_record("a", None, 1),
            make_record("orphan", "gone", 0)
        ])

        self.assertEqual([root.id for root in roots], ["orphan", "a"])
        self.assertEqual(roots[0].parent_id, "gone")

    def test_siblings_sorted_recursively(self):
        roots = build_folder_tree([
            make_record("root", None, 0),
            make_record("c", "root", 2),
            make_record("a", "root", 0),
            make_record("b", "root", 1),
            make_record("b2", "b", 5),
            make_record("b1", "b", 1)
        ])

        root = roots[0]
        self.assertEqual([c.id for c in root.children], ["a", "b", "c"])
        self.assertEqual([c.id for c in root.children[1].children], ["b1", "b2"])

    def test_equal_order_index_keeps_input_order(self):
        """Test ties are not broken beyond input order."""
        roots = build_folder_tree([
            make_record("x", None, 0),
            make_record("y", None, 0),
            make_record("z", None, 0)
        ])
        self.assertEqual([r.id for r in roots], ["x", "y", "z"])

        roots = build_folder_tree([
            make_record("z", None, 0),
            make_record("x", None, 0),
            make_record("y", None, 0)
        ])
        self.assertEqual([r.id for r in roots], ["z", "x", "y"])

    def test_card_sets_attached(self):
        summary = CardSetSummary(id="s1", name="Vokabeln", card_count=12)
        roots = build_folder_tree(
            [make_record("1"), make_record("2", "1")],
            {"2": [summary]}
        )

        self.assertEqual(roots[0].card_sets, [])
        self.assertEqual(roots[0].children[0].card_sets, [summary])

    def test_parent_cycle_does_not_raise(self):
        """Test records linked in a loop still produce a finite forest."""
        records = [
            make_record("a", "b"),
            make_record("b", "a"),
            make_record("c", "a")
        ]

        roots = build_folder_tree(records)

        self.assertEqual(sorted(r.id for r in roots), ["a", "b"])
        self.assertEqual(sorted(n.id for n in iter_nodes(roots)), ["a", "b", "c"])
        self.assertEqual([c.id for c in find_node(roots, "a").children], ["c"])

    def test_self_parent_is_root(self):
        roots = build_folder_tree([make_record("self", "self")])
        self.assertEqual([r.id for r in roots], ["self"])
        self.assertEqual(roots[0].children, [])

    def test_duplicate_ids_keep_first(self):
        roots = build_folder_tree([
            make_record("1", name="first"),
            make_record("1", name="second")
        ])

        self.assertEqual(len(roots), 1)
        self.assertEqual(roots[0].name, "first")

    def test_input_records_untouched(self):
        records = [make_record("1"), make_record("2", "1")]
        build_folder_tree(records)

        self.assertFalse(hasattr(records[0], "children"))


class TestTreeUtilities(unittest.TestCase):
    """Test helpers that read a built forest."""

    def setUp(self):
        self.roots = build_folder_tree(
            [
                make_record("s", None, 0, name="Schule"),
                make_record("m", "s", 0, name="Mathe"),
                make_record("d", "s", 1, name="Deutsch"),
                make_record("h", None, 1, name="Hobby")
            ],
            {
                "m": [CardSetSummary(id="1", name="Algebra", card_count=10),
                      CardSetSummary(id="2", name="Geometrie", card_count=5)],
                "h": [CardSetSummary(id="3", name="Gitarre", card_count=1)]
            }
        )

    def test_iter_nodes_depth_first(self):
        self.assertEqual([n.id for n in iter_nodes(self.roots)], ["s", "m", "d", "h"])

    def test_find_node(self):
        self.assertEqual(find_node(self.roots, "d").name, "Deutsch")
        self.assertIsNone(find_node(self.roots, "nope"))

    def test_count_tree(self):
        stats = count_tree(self.roots)

        self.assertEqual(stats.total_folders, 4)
        self.assertEqual(stats.total_card_sets, 3)
        self.assertEqual(stats.total_cards, 16)

    def test_export_folder_structure(self):
        expected = (
            "Folder Structure:\n"
            "- Schule (0 sets)\n"
            "  - Mathe (2 sets)\n"
            "  - Deutsch (0 sets)\n"
            "- Hobby (1 sets)\n"
        )
        self.assertEqual(export_folder_structure(self.roots), expected)

    def test_format_folder_path(self):
        path = [make_record("s", name="Schule"), make_record("m", "s", name="Mathe")]

        self.assertEqual(format_folder_path(path), "Schule / Mathe")
        self.assertEqual(format_folder_path([]), "")


if __name__ == '__main__':
    unittest.main(verbosity=2)
