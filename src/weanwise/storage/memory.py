"""In-memory platform backend.

Simple dict-based storage for offline and test use.
Data is lost when the application exits.
"""

from typing import Any

from werkzeug.security import check_password_hash, generate_password_hash

from ..errors import AuthError
from .base import PlatformBackend
from .credentials import check_password, normalize_email
from .models import AuthEvent, Record, User


class InMemoryBackend(PlatformBackend):
    """In-memory identity and record store (session-only).

    Data is stored in memory and lost when the app exits.
    Suitable for single-session use or testing.
    """

    def __init__(self) -> None:
        super().__init__()
        self._users: dict[str, tuple[User, str]] = {}
        self._current: User | None = None
        self._tables: dict[str, list[Record]] = {}

    async def connect(self) -> None:
        """Open backend (no-op for in-memory)."""
        pass

    async def disconnect(self) -> None:
        """Close backend (no-op for in-memory)."""
        pass

    async def sign_up(self, email: str, password: str) -> User:
        email = normalize_email(email)
        check_password(password)
        if email in self._users:
            raise AuthError("User already registered")
        user = User(email=email)
        self._users[email] = (user, generate_password_hash(password))
        self._current = user
        self._emit_auth_event(AuthEvent.SIGNED_IN, user)
        return user

    async def sign_in(self, email: str, password: str) -> User:
        entry = self._users.get(email.strip().lower())
        if entry is None or not check_password_hash(entry[1], password):
            raise AuthError("Invalid login credentials")
        self._current = entry[0]
        self._emit_auth_event(AuthEvent.SIGNED_IN, self._current)
        return self._current

    async def sign_out(self) -> None:
        if self._current is None:
            return
        self._current = None
        self._emit_auth_event(AuthEvent.SIGNED_OUT, None)

    async def get_current_user(self) -> User | None:
        return self._current

    async def insert_record(self, table: str, data: dict[str, Any]) -> Record:
        record = Record(table=table, data=dict(data))
        self._tables.setdefault(table, []).append(record)
        return record

    async def select_records(
        self,
        table: str,
        filters: dict[str, Any] | None = None,
        descending: bool = True
    ) -> list[Record]:
        rows = [r for r in self._tables.get(table, []) if r.matches(filters)]
        rows.sort(key=lambda r: r.created_at)
        if descending:
            rows.reverse()
        return rows

    async def delete_record(
        self,
        table: str,
        record_id: str,
        filters: dict[str, Any] | None = None
    ) -> bool:
        rows = self._tables.get(table, [])
        for i, record in enumerate(rows):
            if record.id == record_id and record.matches(filters):
                del rows[i]
                return True
        return False

    @property
    def backend_type(self) -> str:
        return "memory"
