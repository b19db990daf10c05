"""SQLite-backed script history and user stores."""

from __future__ import annotations
import sqlite3
import uuid
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator, List, Optional, Union

from ..core.types import ScriptRecord, UserRecord
from .errors import DuplicateUserError

SCHEMA = """
CREATE TABLE IF NOT EXISTS scripts (
    id          TEXT PRIMARY KEY,
    owner_id    TEXT,
    idea        TEXT NOT NULL,
    amount      INTEGER NOT NULL CHECK (amount BETWEEN 1 AND 200),
    content     TEXT NOT NULL,
    created_at  TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_scripts_owner ON scripts(owner_id);
CREATE TABLE IF NOT EXISTS users (
    id             TEXT PRIMARY KEY,
    name           TEXT NOT NULL,
    email          TEXT UNIQUE NOT NULL,
    password_hash  TEXT NOT NULL,
    created_at     TEXT NOT NULL
);
"""

class _SQLiteBase:
    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.init_db()

    @contextmanager
    def _conn(self) -> Iterator[sqlite3.Connection]:
        con = sqlite3.connect(self.path)
        con.row_factory = sqlite3.Row
        try:
            with con:
                yield con
        finally:
            con.close()

    def init_db(self) -> None:
        """Create tables if they do not exist."""
        with self._conn() as con:
            con.executescript(SCHEMA)

class SQLiteScriptStore(_SQLiteBase):
    """ScriptStore persisted in a SQLite file."""

    def add(self, owner_id: Optional[str], idea: str, amount: int, content: str) -> ScriptRecord:
        record = ScriptRecord(id=uuid.uuid4().hex, idea=idea.strip(), amount=amount, content=content,
                              created_at=datetime.now(timezone.utc), owner_id=owner_id)
        with self._conn() as con:
            con.execute(
                "INSERT INTO scripts (id, owner_id, idea, amount, content, created_at) VALUES (?, ?, ?, ?, ?, ?)",
                (record.id, record.owner_id, record.idea, record.amount, record.content,
                 record.created_at.isoformat())
            )
        return record

    def list(self, owner_id: Optional[str], limit: int = 100) -> List[ScriptRecord]:
        with self._conn() as con:
            rows = con.execute(
                "SELECT * FROM scripts WHERE owner_id IS ? ORDER BY created_at DESC, rowid DESC LIMIT ?",
                (owner_id, limit)
            ).fetchall()
        return [_row_to_script(r) for r in rows]

    def get(self, record_id: str, owner_id: Optional[str] = None) -> Optional[ScriptRecord]:
        with self._conn() as con:
            row = con.execute(
                "SELECT * FROM scripts WHERE id = ? AND owner_id IS ?", (record_id, owner_id)
            ).fetchone()
        return _row_to_script(row) if row else None

class SQLiteUserStore(_SQLiteBase):
    """UserStore persisted in a SQLite file."""

    def find_by_email(self, email: str) -> Optional[UserRecord]:
        with self._conn() as con:
            row = con.execute("SELECT * FROM users WHERE email = ?", (email.strip().lower(),)).fetchone()
        return _row_to_user(row) if row else None

    def create(self, name: str, email: str, password_hash: str) -> UserRecord:
        user = UserRecord(id=uuid.uuid4().hex, name=name.strip(), email=email.strip().lower(),
                          password_hash=password_hash, created_at=datetime.now(timezone.utc))
        try:
            with self._conn() as con:
                con.execute(
                    "INSERT INTO users (id, name, email, password_hash, created_at) VALUES (?, ?, ?, ?, ?)",
                    (user.id, user.name, user.email, user.password_hash, user.created_at.isoformat())
                )
        except sqlite3.IntegrityError as e:
            raise DuplicateUserError(f"User already exists: {user.email}") from e
        return user

def _row_to_script(row: sqlite3.Row) -> ScriptRecord:
    return ScriptRecord(id=row["id"], idea=row["idea"], amount=int(row["amount"]), content=row["content"],
                        created_at=datetime.fromisoformat(row["created_at"]), owner_id=row["owner_id"])

def _row_to_user(row: sqlite3.Row) -> UserRecord:
    return UserRecord(id=row["id"], name=row["name"], email=row["email"],
                      password_hash=row["password_hash"],
                      created_at=datetime.fromisoformat(row["created_at"]))
