"""SQLite platform backend.

Provides persistent users, sign-in session and records in a SQLite file.
Uses aiosqlite for async access.
"""

import json
import sqlite3
from datetime import datetime
from pathlib import Path
from typing import Any

import aiosqlite
from werkzeug.security import check_password_hash, generate_password_hash

from ..errors import AuthError, PersistenceError
from .base import PlatformBackend
from .credentials import check_password, normalize_email
from .models import AuthEvent, Record, User


class SQLiteBackend(PlatformBackend):
    """SQLite-backed identity and record store.

    The signed-in user is kept in a single-row session table, so a sign-in
    survives between CLI invocations.
    """

    def __init__(self, path: str | Path = "./weanwise.db"):
        super().__init__()
        self._db_path = Path(path)
        self._connection: aiosqlite.Connection | None = None

    async def connect(self) -> None:
        """Open the database file and create the schema."""
        if self._connection is not None:
            return
        try:
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
            self._connection = await aiosqlite.connect(self._db_path)
        except (OSError, sqlite3.Error) as e:
            raise ConnectionError(f"Failed to open SQLite database {self._db_path}: {e}") from e
        await self._connection.execute("PRAGMA foreign_keys = ON")
        await self._create_schema()

    async def _create_schema(self) -> None:
        """Create database tables."""
        await self._connection.execute("""
            CREATE TABLE IF NOT EXISTS users (
                id TEXT PRIMARY KEY,
                email TEXT NOT NULL UNIQUE,
                password_hash TEXT NOT NULL,
                created_at TEXT NOT NULL
            )
        """)

        await self._connection.execute("""
            CREATE TABLE IF NOT EXISTS auth_session (
                slot INTEGER PRIMARY KEY CHECK (slot = 1),
                user_id TEXT NOT NULL,
                FOREIGN KEY (user_id) REFERENCES users(id) ON DELETE CASCADE
            )
        """)

        await self._connection.execute("""
            CREATE TABLE IF NOT EXISTS records (
                id TEXT PRIMARY KEY,
                table_name TEXT NOT NULL,
                data TEXT NOT NULL,
                created_at TEXT NOT NULL
            )
        """)

        await self._connection.execute("""
            CREATE INDEX IF NOT EXISTS idx_records_table
            ON records(table_name, created_at)
        """)

        await self._connection.commit()

    async def disconnect(self) -> None:
        """Close database connection."""
        if self._connection:
            await self._connection.close()
            self._connection = None

    def _require_connection(self) -> aiosqlite.Connection:
        if self._connection is None:
            raise RuntimeError("Not connected to database")
        return self._connection

    async def sign_up(self, email: str, password: str) -> User:
        conn = self._require_connection()
        email = normalize_email(email)
        check_password(password)

        user = User(email=email)
        try:
            await conn.execute(
                "INSERT INTO users (id, email, password_hash, created_at) VALUES (?, ?, ?, ?)",
                (user.id, user.email, generate_password_hash(password), user.created_at.isoformat())
            )
        except sqlite3.IntegrityError as e:
            raise AuthError("User already registered") from e
        await self._start_session(user)
        return user

    async def sign_in(self, email: str, password: str) -> User:
        conn = self._require_connection()
        async with conn.execute(
            "SELECT id, email, password_hash, created_at FROM users WHERE email = ?",
            (email.strip().lower(),)
        ) as cursor:
            row = await cursor.fetchone()

        if row is None or not check_password_hash(row[2], password):
            raise AuthError("Invalid login credentials")

        user = User(id=row[0], email=row[1], created_at=datetime.fromisoformat(row[3]))
        await self._start_session(user)
        return user

    async def _start_session(self, user: User) -> None:
        conn = self._require_connection()
        await conn.execute("""
            INSERT INTO auth_session (slot, user_id) VALUES (1, ?)
            ON CONFLICT(slot) DO UPDATE SET user_id = excluded.user_id
        """, (user.id,))
        await conn.commit()
        self._emit_auth_event(AuthEvent.SIGNED_IN, user)

    async def sign_out(self) -> None:
        conn = self._require_connection()
        cursor = await conn.execute("DELETE FROM auth_session")
        await conn.commit()
        if cursor.rowcount:
            self._emit_auth_event(AuthEvent.SIGNED_OUT, None)

    async def get_current_user(self) -> User | None:
        conn = self._require_connection()
        async with conn.execute("""
            SELECT u.id, u.email, u.created_at
            FROM auth_session s JOIN users u ON u.id = s.user_id
            WHERE s.slot = 1
        """) as cursor:
            row = await cursor.fetchone()

        if row is None:
            return None
        return User(id=row[0], email=row[1], created_at=datetime.fromisoformat(row[2]))

    async def insert_record(self, table: str, data: dict[str, Any]) -> Record:
        conn = self._require_connection()
        record = Record(table=table, data=dict(data))
        try:
            await conn.execute(
                "INSERT INTO records (id, table_name, data, created_at) VALUES (?, ?, ?, ?)",
                (record.id, table, json.dumps(record.data), record.created_at.isoformat())
            )
            await conn.commit()
        except (TypeError, ValueError, sqlite3.Error) as e:
            raise PersistenceError(f"Failed to insert into {table}: {e}") from e
        return record

    async def select_records(
        self,
        table: str,
        filters: dict[str, Any] | None = None,
        descending: bool = True
    ) -> list[Record]:
        conn = self._require_connection()
        direction = "DESC" if descending else "ASC"
        async with conn.execute(
            f"""
            SELECT id, data, created_at
            FROM records
            WHERE table_name = ?
            ORDER BY created_at {direction}, rowid {direction}
            """,
            (table,)
        ) as cursor:
            rows = await cursor.fetchall()

        records = []
        for record_id, data_json, created_at in rows:
            record = Record(
                id=record_id,
                table=table,
                data=json.loads(data_json),
                created_at=datetime.fromisoformat(created_at)
            )
            if record.matches(filters):
                records.append(record)

        return records

    async def delete_record(
        self,
        table: str,
        record_id: str,
        filters: dict[str, Any] | None = None
    ) -> bool:
        conn = self._require_connection()
        async with conn.execute(
            "SELECT id, data, created_at FROM records WHERE table_name = ? AND id = ?",
            (table, record_id)
        ) as cursor:
            row = await cursor.fetchone()

        if row is None:
            return False
        record = Record(
            id=row[0], table=table, data=json.loads(row[1]), created_at=datetime.fromisoformat(row[2])
        )
        if not record.matches(filters):
            return False

        await conn.execute("DELETE FROM records WHERE id = ?", (record_id,))
        await conn.commit()
        return True

    @property
    def backend_type(self) -> str:
        return "sqlite"

    @property
    def db_path(self) -> Path:
        return self._db_path
