"""
Tests for the command line front end.
"""

import asyncio
import io
import json
import shutil
import sys
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path
from unittest.mock import patch

import main
from studycards.errors import CardContentError
from studycards.folders import FolderService, InMemoryFolderStore


class TestRunCommand(unittest.TestCase):
    """Test folder commands against an in-memory store."""

    def setUp(self):
        self.service = FolderService(InMemoryFolderStore(), max_depth=10)

    def run_cli(self, *argv):
        args = main.parse_arguments(["--user", "u1", *argv])
        return asyncio.run(main.run_command(args, self.service))

    def test_create_and_tree(self):
        output = self.run_cli("create", "Schule", "--color", "#7EC4FF")
        folder_id = output.split()[-1]
        self.run_cli("create", "Mathe", "--parent", folder_id)

        tree = self.run_cli("tree")

        self.assertEqual(tree, "Folder Structure:\n- Schule (0 sets)\n  - Mathe (0 sets)")

    def test_path_and_move(self):
        schule = self.run_cli("create", "Schule").split()[-1]
        mathe = self.run_cli("create", "Mathe").split()[-1]

        self.run_cli("move", mathe, "--parent", schule)

        self.assertEqual(self.run_cli("path", mathe), "Schule / Mathe")
        self.assertIn("root", self.run_cli("move", mathe))

    def test_stats(self):
        folder_id = self.run_cli("create", "Leer").split()[-1]
        self.assertEqual(self.run_cli("stats", folder_id), "Card sets: 0\nSubfolders: 0\nCards: 0")


class TestMain(unittest.TestCase):
    """Test the main entry point end to end."""

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.temp_dir)

    def run_main(self, *argv):
        buffer = io.StringIO()
        with patch("main.setup_logging"), redirect_stdout(buffer):
            main.main(list(argv))
        return buffer.getvalue()

    def test_database_persists_between_invocations(self):
        db = str(Path(self.temp_dir) / "cli.db")

        self.run_main("--db", db, "init")
        self.run_main("--db", db, "create", "Schule")

        self.assertIn("- Schule (0 sets)", self.run_main("--db", db, "tree"))

    def test_folder_error_exits_with_status_one(self):
        with self.assertRaises(SystemExit) as ctx:
            self.run_main("--memory", "delete", "missing")

        self.assertEqual(ctx.exception.code, 1)

    def test_validation_error_is_reported(self):
        buffer = io.StringIO()
        with patch("main.setup_logging"), redirect_stdout(buffer):
            with self.assertRaises(SystemExit):
                main.main(["--memory", "create", "a/b"])

        self.assertIn("invalid characters", buffer.getvalue())

    def test_malformed_card_file_exits_with_status_one(self):
        card_file = Path(self.temp_dir) / "broken.json"
        card_file.write_text("{not json", encoding="utf-8")

        with self.assertRaises(SystemExit) as ctx:
            self.run_main("render", str(card_file))

        self.assertEqual(ctx.exception.code, 1)

    def test_missing_card_file_is_reported(self):
        buffer = io.StringIO()
        missing = str(Path(self.temp_dir) / "nowhere.json")
        with patch("main.setup_logging"), redirect_stdout(buffer):
            with self.assertRaises(SystemExit):
                main.main(["render", missing])

        self.assertIn("Cannot read card file", buffer.getvalue())

    def test_render_face_file_raises_card_content_error(self):
        card_file = Path(self.temp_dir) / "broken.json"
        card_file.write_text("{not json", encoding="utf-8")

        with self.assertRaises(CardContentError):
            main.render_face_file(str(card_file))

    def test_setup_logging_writes_to_stdout(self):
        with patch("main.logging.basicConfig") as basic_config, \
                patch("main.logging.FileHandler"):
            main.setup_logging()

        stream_handler = basic_config.call_args.kwargs["handlers"][0]
        self.assertIs(stream_handler.stream, sys.stdout)

    def test_render_face_file(self):
        card_file = Path(self.temp_dir) / "card.json"
        card_file.write_text(json.dumps({
            "front": {"elements": [
                {"id": "top", "type": "text", "content": "Hund", "zIndex": 1,
                 "position": {"x": 0, "y": 0}, "size": {"width": 300, "height": 200}},
                {"id": "bottom", "type": "image", "content": "dog.png", "zIndex": 0,
                 "position": {"x": 150, "y": 100}, "size": {"width": 150, "height": 100}}
            ]},
            "back": []
        }), encoding="utf-8")

        lines = main.render_face_file(str(card_file)).splitlines()

        self.assertEqual(len(lines), 2)
        self.assertTrue(lines[0].startswith("bottom [image]"))
        self.assertIn("left: 50%", lines[0])
        self.assertTrue(lines[1].startswith("top [text]"))
        self.assertIn("font-size: 8cqh", lines[1])
        self.assertEqual(main.render_face_file(str(card_file), "back"), "")


if __name__ == '__main__':
    unittest.main(verbosity=2)
