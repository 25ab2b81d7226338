#!/usr/bin/env python3
"""
StudyCards - folder and card content command line tool

Main entry point for working with a StudyCards database from the shell:
inspect and edit a user's folder tree, and lay out flashcard faces.
"""

import argparse
import asyncio
import json
import logging
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Optional

from studycards.config import config
from studycards.content import layout_element, parse_face_content, render
from studycards.database import DatabaseManager
from studycards.errors import CardContentError, StudyCardsError
from studycards.folders import (
    FolderService,
    FolderStore,
    InMemoryFolderStore,
    export_folder_structure,
    format_folder_path,
)


def setup_logging():
    """Configure logging for the application."""
    level = getattr(logging, config.get("logging.level", "INFO").upper())
    format_str = config.get("logging.format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    log_file = config.log_filename

    logging.basicConfig(
        level=level,
        format=format_str,
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler(log_file)
        ]
    )


@contextmanager
def open_store(db_path: Optional[str], in_memory: bool = False) -> Iterator[FolderStore]:
    """
    Open the folder store selected on the command line.

    Args:
        db_path: DuckDB file to use (defaults to config value)
        in_memory: Use a throwaway in-memory store instead

    Yields:
        A ready-to-use folder store
    """
    if in_memory:
        yield InMemoryFolderStore()
        return

    with DatabaseManager(db_path) as db:
        db.initialize_database()
        yield db


def render_face_file(path: str, side: str = "front") -> str:
    """
    Lay out one face of a flashcard JSON file.

    The file holds either ``{"front": ..., "back": ...}`` or the face content
    alone (a bare element list or ``{"elements": [...]}``).

    Returns:
        One line per element in stacking order with its CSS box

    Raises:
        CardContentError: The file is missing or not valid card JSON
    """
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise CardContentError(f"Cannot read card file {path}: {e}") from e
    if isinstance(data, dict) and side in data:
        data = data[side]

    lines = []
    for element in render(parse_face_content(data)):
        css = layout_element(element).css()
        declarations = "; ".join(f"{key}: {value}" for key, value in css.items())
        lines.append(f"{element.id} [{element.kind}] {declarations}")
    return "\n".join(lines)


async def run_command(args: argparse.Namespace, service: FolderService) -> str:
    """
    Execute a folder command.

    Args:
        args: Parsed command line arguments
        service: Folder service bound to the selected store

    Returns:
        Text to print for the user
    """
    user = args.user

    if args.command == "init":
        return "Database ready"

    if args.command == "tree":
        return export_folder_structure(await service.get_all(user)).rstrip("\n")

    if args.command == "create":
        color = args.color or service.random_color()
        folder = await service.create(args.name, color, args.parent, user, order_index=args.order)
        return f"Created folder {folder.id}"

    if args.command == "rename":
        folder = await service.rename(args.folder_id, args.name, user)
        return f"Renamed folder {folder.id} to {folder.name}"

    if args.command == "move":
        folder = await service.move(args.folder_id, args.parent, user)
        return f"Moved folder {folder.id} under {folder.parent_id or 'root'}"

    if args.command == "delete":
        await service.delete(args.folder_id, user)
        return f"Deleted folder {args.folder_id}"

    if args.command == "reorder":
        await service.reorder(args.folder_ids, user)
        return f"Reordered {len(args.folder_ids)} folders"

    if args.command == "path":
        return format_folder_path(await service.get_folder_path(args.folder_id, user))

    if args.command == "search":
        folders = await service.search(args.query, user)
        return "\n".join(f"{folder.id}\t{folder.name}" for folder in folders)

    if args.command == "stats":
        stats = await service.get_stats(args.folder_id)
        return (
            f"Card sets: {stats.card_set_count}\n"
            f"Subfolders: {stats.subfolder_count}\n"
            f"Cards: {stats.total_cards}"
        )

    raise ValueError(f"Unknown command: {args.command}")


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="StudyCards - folder and card content tool",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py --user u1 create "Schule"                 # Create a root folder
  python main.py --user u1 create "Mathe" --parent <id>    # Create a subfolder
  python main.py --user u1 move <id> --parent <id>         # Re-parent a folder
  python main.py --user u1 tree                            # Print the folder tree
  python main.py render card.json --side back              # Lay out a card face
        """
    )

    parser.add_argument("--db", type=str, help="DuckDB database file (default from config)")
    parser.add_argument("--memory", action="store_true", help="Use a throwaway in-memory store")
    parser.add_argument("--user", type=str, default="local", help="Owner of the folders (default: local)")
    parser.add_argument("--version", action="version", version="StudyCards 0.1.0")

    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("init", help="Create the database tables")
    commands.add_parser("tree", help="Print the folder tree")

    create = commands.add_parser("create", help="Create a folder")
    create.add_argument("name")
    create.add_argument("--color", help="Palette color (random when omitted)")
    create.add_argument("--parent", help="Parent folder id")
    create.add_argument("--order", type=int, default=0, help="Position among siblings")

    rename = commands.add_parser("rename", help="Rename a folder")
    rename.add_argument("folder_id")
    rename.add_argument("name")

    move = commands.add_parser("move", help="Move a folder")
    move.add_argument("folder_id")
    move.add_argument("--parent", help="New parent folder id (root when omitted)")

    delete = commands.add_parser("delete", help="Delete an empty folder")
    delete.add_argument("folder_id")

    reorder = commands.add_parser("reorder", help="Set sibling order")
    reorder.add_argument("folder_ids", nargs="+")

    path = commands.add_parser("path", help="Print a folder's path")
    path.add_argument("folder_id")

    search = commands.add_parser("search", help="Find folders by name")
    search.add_argument("query")

    stats = commands.add_parser("stats", help="Show what a folder contains")
    stats.add_argument("folder_id")

    render_cmd = commands.add_parser("render", help="Lay out a flashcard face from a JSON file")
    render_cmd.add_argument("file")
    render_cmd.add_argument("--side", choices=["front", "back"], default="front")

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None):
    """Main entry point."""
    args = parse_arguments(argv)
    setup_logging()

    try:
        if args.command == "render":
            output = render_face_file(args.file, args.side)
        else:
            with open_store(args.db, args.memory) as store:
                output = asyncio.run(run_command(args, FolderService(store)))
    except StudyCardsError as e:
        logging.error(f"{args.command} failed: {e}")
        print(f"Error: {e}")
        sys.exit(1)

    if output:
        print(output)


if __name__ == "__main__":
    main()
