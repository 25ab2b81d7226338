"""
Unit tests for core StudyCards components.

Tests configuration management, data models and the DuckDB database manager.
"""

import os
import shutil
import tempfile
import unittest
from pathlib import Path

from studycards.config import ConfigManager
from studycards.database import DatabaseManager
from studycards.models import CardElement, CardFace, Flashcard, FolderNode, FolderRecord
from studycards.content import add_element, new_image_element, new_text_element


class TestConfigManager(unittest.TestCase):
    """Test configuration management functionality."""

    def setUp(self):
        """Set up test fixtures."""
        self.temp_dir = tempfile.mkdtemp()
        self.config_path = Path(self.temp_dir) / "test_config.yaml"

    def tearDown(self):
        """Clean up test fixtures."""
        if self.config_path.exists():
            self.config_path.unlink()
        os.rmdir(self.temp_dir)

    def test_config_creation_with_defaults(self):
        """Test config manager falls back to defaults when file missing."""
        config = ConfigManager(str(self.config_path))

        self.assertEqual(config.database_filename, "studycards.db")
        self.assertEqual(config.max_folder_depth, 10)
        self.assertEqual(config.max_folder_name_length, 50)
        self.assertEqual(config.min_zoom, 25)
        self.assertEqual(config.max_zoom, 200)

    def test_config_loading_from_file(self):
        """Test loading configuration from YAML file."""
        test_config = """
database:
  filename: "test.db"

folders:
  max_depth: 5
"""
        with open(self.config_path, 'w') as f:
            f.write(test_config)

        config = ConfigManager(str(self.config_path))

        self.assertEqual(config.database_filename, "test.db")
        self.assertEqual(config.max_folder_depth, 5)
        # Keys missing from the file keep their defaults
        self.assertEqual(config.max_folder_name_length, 50)
        self.assertEqual(config.get("logging.level"), "INFO")

    def test_invalid_yaml_falls_back_to_defaults(self):
        with open(self.config_path, 'w') as f:
            f.write("folders: [unclosed")

        config = ConfigManager(str(self.config_path))

        self.assertEqual(config.max_folder_depth, 10)

    def test_dot_notation_access(self):
        """Test accessing config values with dot notation."""
        config = ConfigManager(str(self.config_path))  # Uses defaults

        self.assertEqual(config.get("folders.max_depth"), 10)
        self.assertEqual(config.get("paths.log_file"), "studycards.log")
        self.assertEqual(config.get("nonexistent.key", "default"), "default")
        self.assertEqual(config.get_section("editor"), {"min_zoom": 25, "max_zoom": 200})

    def test_config_reload(self):
        """Test configuration reloading."""
        with open(self.config_path, 'w') as f:
            f.write("folders:\n  max_depth: 4")

        config = ConfigManager(str(self.config_path))
        self.assertEqual(config.max_folder_depth, 4)

        with open(self.config_path, 'w') as f:
            f.write("folders:\n  max_depth: 6")

        config.reload()
        self.assertEqual(config.max_folder_depth, 6)


class TestDataModels(unittest.TestCase):
    """Test data model validation and functionality."""

    def test_card_element_from_json_aliases(self):
        """Test CardElement accepts the camelCase storage keys."""
        element = CardElement.model_validate({
            "id": "t1",
            "type": "text",
            "content": "Haus",
            "position": {"x": 1, "y": 2},
            "size": {"width": 3, "height": 4},
            "zIndex": 2,
            "style": {"fontWeight": "bold", "backgroundColor": "#FFFFFF"}
        })

        self.assertEqual(element.kind, "text")
        self.assertEqual(element.z_index, 2)
        self.assertEqual(element.rotation, 0)
        self.assertEqual(element.style.font_weight, "bold")
        self.assertEqual(element.style.background_color, "#FFFFFF")
        self.assertEqual(element.style.font_size, 16)

    def test_card_element_rejects_unknown_kind(self):
        with self.assertRaises(ValueError):
            CardElement.model_validate({
                "id": "v", "type": "video",
                "position": {"x": 0, "y": 0}, "size": {"width": 1, "height": 1}
            })

    def test_size_and_rotation_are_permissive(self):
        """Test zero sizes and large rotations are accepted as stored."""
        element = CardElement(
            id="odd", kind="image", content="",
            position={"x": -10, "y": 500}, size={"width": 0, "height": 0},
            rotation=720
        )
        self.assertEqual(element.size.width, 0)
        self.assertEqual(element.rotation, 720)

    def test_card_face_lookup(self):
        face = add_element(CardFace(), new_text_element("Hi", element_id="a"))

        self.assertEqual(face.get("a").content, "Hi")
        self.assertIsNone(face.get("b"))

    def test_folder_node_with_children(self):
        child = FolderNode(id="2", name="Mathe", color="#7EC4FF", user_id="u1", parent_id="1")
        parent = FolderNode(id="1", name="Schule", color="#7EC4FF", user_id="u1", children=[child])

        self.assertEqual(parent.children[0].id, "2")
        self.assertEqual(parent.card_sets, [])
        self.assertIsInstance(parent, FolderRecord)

    def test_folder_record_defaults(self):
        record = FolderRecord(id="1", name="Schule", color="#7EC4FF", user_id="u1")

        self.assertIsNone(record.parent_id)
        self.assertEqual(record.order_index, 0)


class TestDatabaseManager(unittest.TestCase):
    """Test database management functionality."""

    def setUp(self):
        """Set up test database."""
        self.temp_dir = tempfile.mkdtemp()
        self.db_path = Path(self.temp_dir) / "test.db"

    def tearDown(self):
        """Clean up test database."""
        shutil.rmtree(self.temp_dir)

    def test_database_initialization(self):
        """Test database creation and table initialization."""
        with DatabaseManager(str(self.db_path)) as db:
            db.initialize_database()
            # Running twice is harmless
            db.initialize_database()

            self.assertTrue(self.db_path.exists())
            self.assertIsNotNone(db.connection)

    def test_requires_connection(self):
        db = DatabaseManager(str(self.db_path))

        with self.assertRaises(RuntimeError):
            db.initialize_database()

    def test_flashcard_round_trip(self):
        """Test both faces survive storage in the canonical JSON shape."""
        with DatabaseManager(str(self.db_path)) as db:
            db.initialize_database()

            front = add_element(CardFace(), new_text_element("dog", element_id="t"))
            back = add_element(CardFace(), new_image_element("https://example.com/dog.png", element_id="i"))
            saved = db.save_flashcard(Flashcard(card_set_id="set-1", front=front, back=back))

            self.assertIsNotNone(saved.id)
            loaded = db.get_flashcard(saved.id)
            self.assertEqual(loaded.front, front)
            self.assertEqual(loaded.back, back)
            self.assertEqual(loaded.card_set_id, "set-1")

    def test_flashcard_update(self):
        with DatabaseManager(str(self.db_path)) as db:
            db.initialize_database()

            saved = db.save_flashcard(Flashcard(card_set_id="set-1"))
            front = add_element(CardFace(), new_text_element("cat", element_id="t"))
            db.save_flashcard(saved.model_copy(update={"front": front, "review_count": 2}))

            cards = db.list_flashcards("set-1")
            self.assertEqual(len(cards), 1)
            self.assertEqual(cards[0].front.get("t").content, "cat")
            self.assertEqual(cards[0].review_count, 2)

    def test_get_missing_flashcard(self):
        with DatabaseManager(str(self.db_path)) as db:
            db.initialize_database()
            self.assertIsNone(db.get_flashcard("nope"))


if __name__ == '__main__':
    unittest.main(verbosity=2)
