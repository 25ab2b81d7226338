"""
Database manager for StudyCards.

This module stores folders, card sets and flashcards in DuckDB and implements
the ``FolderStore`` interface on top of them.
"""

import duckdb
import json
import logging
import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

from ..config import config
from ..content.serialization import dump_face_content, parse_flashcard
from ..errors import FolderNotFoundError, PersistenceError
from ..folders.store import FolderStore
from ..models import CardSetSummary, Flashcard, FolderRecord

FOLDER_COLUMNS = "id, name, color, user_id, parent_id, order_index, created_at, updated_at"

FLASHCARD_COLUMNS = (
    "id, card_set_id, front_content, back_content, order_index, "
    "difficulty_level, review_count, last_reviewed, next_review"
)

# Columns a folder update may touch; everything else is fixed at insert.
UPDATABLE_FOLDER_COLUMNS = ("name", "color", "parent_id", "order_index")


class DatabaseManager(FolderStore):
    """
    Manages the DuckDB database holding a user's folders and cards.
    """

    def __init__(self, db_path: Optional[str] = None):
        """
        Initialize the database manager.

        Args:
            db_path: Path to the DuckDB database file, or ":memory:"
        """
        self.db_path = db_path or config.database_filename
        self.connection = None

    def connect(self):
        """Establish connection to the database."""
        self.connection = duckdb.connect(self.db_path)

    def disconnect(self):
        """Close the database connection."""
        if self.connection:
            self.connection.close()
            self.connection = None

    def __enter__(self):
        """Context manager entry."""
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.disconnect()

    def initialize_database(self):
        """
        Create all necessary tables if they don't exist.

        Parent links are plain columns without foreign keys; the folder
        service enforces structure before writing.
        """
        self._execute("""
            CREATE TABLE IF NOT EXISTS folders (
                id VARCHAR PRIMARY KEY,
                name VARCHAR NOT NULL,
                color VARCHAR NOT NULL,
                user_id VARCHAR NOT NULL,
                parent_id VARCHAR,
                order_index INTEGER NOT NULL DEFAULT 0,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)

        self._execute("""
            CREATE TABLE IF NOT EXISTS card_sets (
                id VARCHAR PRIMARY KEY,
                name VARCHAR NOT NULL,
                description VARCHAR,
                folder_id VARCHAR NOT NULL,
                user_id VARCHAR NOT NULL,
                is_public BOOLEAN NOT NULL DEFAULT false,
                order_index INTEGER NOT NULL DEFAULT 0,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)

        # Face content is stored as JSON text in the bare-array shape
        self._execute("""
            CREATE TABLE IF NOT EXISTS flashcards (
                id VARCHAR PRIMARY KEY,
                card_set_id VARCHAR NOT NULL,
                front_content VARCHAR NOT NULL,
                back_content VARCHAR NOT NULL,
                order_index INTEGER NOT NULL DEFAULT 0,
                difficulty_level INTEGER NOT NULL DEFAULT 0,
                review_count INTEGER NOT NULL DEFAULT 0,
                last_reviewed TIMESTAMP,
                next_review TIMESTAMP,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)
        logging.info(f"Database initialized at {self.db_path}")

    def _execute(self, query: str, params: Optional[Sequence[Any]] = None):
        """Run a statement, translating DuckDB failures into PersistenceError."""
        if not self.connection:
            raise RuntimeError("Database connection not established")

        try:
            return self.connection.execute(query, list(params or []))
        except duckdb.Error as e:
            logging.error(f"Database statement failed: {e}")
            raise PersistenceError(str(e)) from e

    # Folder store

    async def get_folder(self, folder_id: str, user_id: Optional[str] = None) -> Optional[FolderRecord]:
        query = f"SELECT {FOLDER_COLUMNS} FROM folders WHERE id = ?"
        params: List[Any] = [folder_id]
        if user_id is not None:
            query += " AND user_id = ?"
            params.append(user_id)

        row = self._execute(query, params).fetchone()
        return _row_to_folder(row) if row else None

    async def list_folders(self, user_id: str) -> List[FolderRecord]:
        rows = self._execute(f"""
            SELECT {FOLDER_COLUMNS}
            FROM folders
            WHERE user_id = ?
            ORDER BY order_index
        """, [user_id]).fetchall()
        return [_row_to_folder(row) for row in rows]

    async def list_card_sets(self, user_id: str) -> Dict[str, List[CardSetSummary]]:
        rows = self._execute("""
            SELECT cs.id, cs.name, cs.folder_id, COUNT(f.id)
            FROM card_sets cs
            LEFT JOIN flashcards f ON f.card_set_id = cs.id
            WHERE cs.user_id = ?
            GROUP BY cs.id, cs.name, cs.folder_id, cs.order_index
            ORDER BY cs.order_index, cs.name
        """, [user_id]).fetchall()

        grouped: Dict[str, List[CardSetSummary]] = {}
        for card_set_id, name, folder_id, card_count in rows:
            grouped.setdefault(folder_id, []).append(
                CardSetSummary(id=card_set_id, name=name, card_count=card_count)
            )
        return grouped

    async def search_folders(self, user_id: str, query: str) -> List[FolderRecord]:
        rows = self._execute(f"""
            SELECT {FOLDER_COLUMNS}
            FROM folders
            WHERE user_id = ? AND contains(lower(name), lower(?))
            ORDER BY name
        """, [user_id, query]).fetchall()
        return [_row_to_folder(row) for row in rows]

    async def insert_folder(self, name: str, color: str, user_id: str,
                            parent_id: Optional[str] = None, order_index: int = 0) -> FolderRecord:
        now = datetime.now()
        record = FolderRecord(
            id=str(uuid.uuid4()),
            name=name,
            color=color,
            user_id=user_id,
            parent_id=parent_id,
            order_index=order_index,
            created_at=now,
            updated_at=now
        )
        self._execute(f"""
            INSERT INTO folders ({FOLDER_COLUMNS})
            VALUES (?, ?, ?, ?, ?, ?, ?, ?)
        """, [
            record.id, record.name, record.color, record.user_id,
            record.parent_id, record.order_index, record.created_at, record.updated_at
        ])
        return record

    async def update_folder(self, folder_id: str, user_id: str, changes: Dict[str, Any]) -> FolderRecord:
        unknown = set(changes) - set(UPDATABLE_FOLDER_COLUMNS)
        if unknown:
            raise ValueError(f"Cannot update folder columns: {sorted(unknown)}")

        if await self.get_folder(folder_id, user_id) is None:
            raise FolderNotFoundError(folder_id, user_id)

        columns = [column for column in UPDATABLE_FOLDER_COLUMNS if column in changes]
        assignments = ", ".join(f"{column} = ?" for column in columns + ["updated_at"])
        params = [changes[column] for column in columns] + [datetime.now(), folder_id, user_id]
        self._execute(
            f"UPDATE folders SET {assignments} WHERE id = ? AND user_id = ?",
            params
        )

        record = await self.get_folder(folder_id, user_id)
        if record is None:
            raise FolderNotFoundError(folder_id, user_id)
        return record

    async def delete_folder(self, folder_id: str, user_id: str) -> None:
        if await self.get_folder(folder_id, user_id) is None:
            raise FolderNotFoundError(folder_id, user_id)
        self._execute("DELETE FROM folders WHERE id = ? AND user_id = ?", [folder_id, user_id])

    async def count_child_folders(self, folder_id: str) -> int:
        return self._execute(
            "SELECT COUNT(*) FROM folders WHERE parent_id = ?", [folder_id]
        ).fetchone()[0]

    async def count_card_sets(self, folder_id: str) -> int:
        return self._execute(
            "SELECT COUNT(*) FROM card_sets WHERE folder_id = ?", [folder_id]
        ).fetchone()[0]

    async def count_cards_in_folder(self, folder_id: str) -> int:
        return self._execute("""
            SELECT COUNT(f.id)
            FROM flashcards f
            JOIN card_sets cs ON cs.id = f.card_set_id
            WHERE cs.folder_id = ?
        """, [folder_id]).fetchone()[0]

    # Card sets and flashcards

    def add_card_set(self, folder_id: str, user_id: str, name: str,
                     description: Optional[str] = None, order_index: int = 0) -> CardSetSummary:
        """
        Add a card set to a folder.

        Args:
            folder_id: Folder the set is filed in
            user_id: Owner
            name: Set name
            description: Optional free text
            order_index: Position among the folder's sets

        Returns:
            Summary of the new, empty set
        """
        card_set_id = str(uuid.uuid4())
        now = datetime.now()
        self._execute("""
            INSERT INTO card_sets (id, name, description, folder_id, user_id, order_index, created_at, updated_at)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?)
        """, [card_set_id, name, description, folder_id, user_id, order_index, now, now])
        return CardSetSummary(id=card_set_id, name=name)

    def save_flashcard(self, card: Flashcard) -> Flashcard:
        """
        Insert or update a flashcard.

        Args:
            card: The flashcard; a card without id is inserted

        Returns:
            The stored card, with its id assigned
        """
        front = json.dumps(dump_face_content(card.front))
        back = json.dumps(dump_face_content(card.back))
        now = datetime.now()

        if card.id is None:
            card = card.model_copy(update={"id": str(uuid.uuid4())})
            self._execute(f"""
                INSERT INTO flashcards ({FLASHCARD_COLUMNS}, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """, [
                card.id, card.card_set_id, front, back, card.order_index,
                card.difficulty_level, card.review_count, card.last_reviewed,
                card.next_review, now, now
            ])
        else:
            self._execute("""
                UPDATE flashcards
                SET front_content = ?, back_content = ?, order_index = ?,
                    difficulty_level = ?, review_count = ?, last_reviewed = ?,
                    next_review = ?, updated_at = ?
                WHERE id = ?
            """, [
                front, back, card.order_index, card.difficulty_level,
                card.review_count, card.last_reviewed, card.next_review, now, card.id
            ])
        return card

    def get_flashcard(self, card_id: str) -> Optional[Flashcard]:
        """
        Retrieve a flashcard by id.

        Returns:
            The card with both faces parsed, or None if not found
        """
        row = self._execute(
            f"SELECT {FLASHCARD_COLUMNS} FROM flashcards WHERE id = ?", [card_id]
        ).fetchone()
        return _row_to_flashcard(row) if row else None

    def list_flashcards(self, card_set_id: str) -> List[Flashcard]:
        rows = self._execute(f"""
            SELECT {FLASHCARD_COLUMNS}
            FROM flashcards
            WHERE card_set_id = ?
            ORDER BY order_index
        """, [card_set_id]).fetchall()
        return [_row_to_flashcard(row) for row in rows]


def _row_to_folder(row) -> FolderRecord:
    return FolderRecord(
        id=row[0],
        name=row[1],
        color=row[2],
        user_id=row[3],
        parent_id=row[4],
        order_index=row[5],
        created_at=row[6],
        updated_at=row[7]
    )


def _row_to_flashcard(row) -> Flashcard:
    return parse_flashcard({
        "id": row[0],
        "card_set_id": row[1],
        "front_content": row[2],
        "back_content": row[3],
        "order_index": row[4],
        "difficulty_level": row[5],
        "review_count": row[6],
        "last_reviewed": row[7],
        "next_review": row[8]
    })
