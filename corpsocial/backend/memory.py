"""
In-memory backend for local development and tests.

Implements every contract in corpsocial.backend.interfaces with plain dicts
guarded by a re-entrant lock. Inserts are published to the in-memory
realtime feed, mirroring the managed backend's postgres change events.
"""

from __future__ import annotations

import secrets
import threading
from collections.abc import Sequence
from datetime import UTC, datetime
from hashlib import sha256
from typing import Any
from uuid import uuid4

from corpsocial.backend.interfaces import (
    AuthProvider,
    AuthStateCallback,
    Backend,
    BlobStore,
    Filters,
    InsertCallback,
    Order,
    QueryResult,
    RealtimeFeed,
    RelationalStore,
    Row,
    Session,
    Subscription,
    TableQuery,
    User,
)
from corpsocial.config import BACKEND_URL, MEDIA_BUCKET
from corpsocial.observability.logging import get_logger

logger = get_logger(__name__)

MIN_PASSWORD_LENGTH = 6


def _now_iso() -> str:
    return datetime.now(UTC).isoformat()


def _matches(row: Row, filters: Filters | None) -> bool:
    if not filters:
        return True
    return all(row.get(column) == value for column, value in filters.items())


def _project(row: Row, columns: str) -> Row:
    if columns.strip() == "*":
        return dict(row)
    wanted = [c.strip() for c in columns.split(",") if c.strip()]
    return {c: row.get(c) for c in wanted}


class _CallbackSubscription(Subscription):
    def __init__(self, registry: list, lock: threading.RLock, handle: Any) -> None:
        self._registry = registry
        self._lock = lock
        self._handle = handle

    def unsubscribe(self) -> None:
        with self._lock:
            if self._handle in self._registry:
                self._registry.remove(self._handle)


class MemoryRealtimeFeed(RealtimeFeed):
    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._subscribers: list[tuple[str, dict[str, Any], InsertCallback]] = []

    def subscribe(
        self, table: str, filters: Filters | None, on_insert: InsertCallback
    ) -> Subscription:
        handle = (table, dict(filters or {}), on_insert)
        with self._lock:
            self._subscribers.append(handle)
        return _CallbackSubscription(self._subscribers, self._lock, handle)

    def publish(self, table: str, row: Row) -> int:
        """Deliver an inserted row to matching subscribers. Returns delivery count."""
        with self._lock:
            targets = [h for h in self._subscribers if h[0] == table and _matches(row, h[1])]
        for _, _, callback in targets:
            callback(dict(row))
        return len(targets)

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)


class MemoryTable(TableQuery):
    def __init__(self, store: MemoryStore, name: str) -> None:
        self._store = store
        self.name = name

    @property
    def _rows(self) -> list[Row]:
        return self._store.rows(self.name)

    def select(
        self,
        columns: str = "*",
        filters: Filters | None = None,
        order: Order | None = None,
        limit: int | None = None,
        in_: tuple[str, Sequence[Any]] | None = None,
    ) -> QueryResult:
        with self._store.lock:
            rows = [r for r in self._rows if _matches(r, filters)]
            if in_ is not None:
                column, values = in_
                allowed = set(values)
                rows = [r for r in rows if r.get(column) in allowed]
            if order is not None:
                rows.sort(key=lambda r: (r.get(order.column) is None, r.get(order.column)))
                if not order.ascending:
                    rows.reverse()
            if limit is not None:
                rows = rows[:limit]
            return QueryResult(data=[_project(r, columns) for r in rows])

    def insert(self, record: Row) -> QueryResult:
        row = dict(record)
        row.setdefault("id", str(uuid4()))
        row.setdefault("created_at", _now_iso())
        with self._store.lock:
            self._rows.append(row)
        self._store.realtime.publish(self.name, row)
        return QueryResult(data=[dict(row)])

    def update(self, values: Row, filters: Filters) -> QueryResult:
        if not filters:
            return QueryResult(error="UPDATE requires a WHERE clause")
        with self._store.lock:
            updated = []
            for row in self._rows:
                if _matches(row, filters):
                    row.update(values)
                    updated.append(dict(row))
            return QueryResult(data=updated)

    def delete(self, filters: Filters) -> QueryResult:
        if not filters:
            return QueryResult(error="DELETE requires a WHERE clause")
        with self._store.lock:
            kept, removed = [], []
            for row in self._rows:
                (removed if _matches(row, filters) else kept).append(row)
            self._store.replace(self.name, kept)
            return QueryResult(data=[dict(r) for r in removed])

    def upsert(self, record: Row, on_conflict: str) -> QueryResult:
        if on_conflict not in record:
            return QueryResult(error=f"upsert record is missing conflict column '{on_conflict}'")
        with self._store.lock:
            existing = self.update(record, {on_conflict: record[on_conflict]})
            if existing.data:
                return existing
            return self.insert(record)


class MemoryStore(RelationalStore):
    def __init__(self, realtime: MemoryRealtimeFeed | None = None) -> None:
        self.lock = threading.RLock()
        self.realtime = realtime or MemoryRealtimeFeed()
        self._tables: dict[str, list[Row]] = {}

    def table(self, name: str) -> MemoryTable:
        return MemoryTable(self, name)

    def rows(self, name: str) -> list[Row]:
        with self.lock:
            return self._tables.setdefault(name, [])

    def replace(self, name: str, rows: list[Row]) -> None:
        with self.lock:
            self._tables[name] = rows


class MemoryBlobStore(BlobStore):
    def __init__(self, base_url: str = BACKEND_URL, bucket: str = MEDIA_BUCKET) -> None:
        self.base_url = base_url.rstrip("/")
        self.bucket = bucket
        self._objects: dict[str, tuple[bytes, str]] = {}
        self._lock = threading.Lock()

    def upload(self, path: str, data: bytes, content_type: str) -> QueryResult:
        with self._lock:
            if path in self._objects:
                return QueryResult(error="The resource already exists")
            self._objects[path] = (bytes(data), content_type)
        return QueryResult(data={"path": path})

    def get_public_url(self, path: str) -> str:
        return f"{self.base_url}/storage/v1/object/public/{self.bucket}/{path}"

    def download(self, path: str) -> tuple[bytes, str] | None:
        return self._objects.get(path)


class MemoryAuthProvider(AuthProvider):
    """Email/password auth with a single active session, like a mobile client."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._users: dict[str, tuple[User, str]] = {}
        self._tokens: dict[str, User] = {}
        self._session: Session | None = None
        self._listeners: list[AuthStateCallback] = []

    @staticmethod
    def _hash(email: str, password: str) -> str:
        return sha256(f"{email}:{password}".encode()).hexdigest()

    def sign_up(self, email: str, password: str) -> QueryResult:
        email = email.strip().lower()
        if len(password) < MIN_PASSWORD_LENGTH:
            return QueryResult(
                error=f"Password should be at least {MIN_PASSWORD_LENGTH} characters"
            )
        with self._lock:
            if email in self._users:
                return QueryResult(error="User already registered")
            user = User(id=str(uuid4()), email=email)
            self._users[email] = (user, self._hash(email, password))
        return QueryResult(data={"user": user, "session": None})

    def sign_in(self, email: str, password: str) -> QueryResult:
        email = email.strip().lower()
        with self._lock:
            record = self._users.get(email)
            if record is None or record[1] != self._hash(email, password):
                return QueryResult(error="Invalid login credentials")
            session = Session(access_token=secrets.token_urlsafe(24), user=record[0])
            self._tokens[session.access_token] = record[0]
            self._session = session
        self._notify("SIGNED_IN", session)
        return QueryResult(data={"user": session.user, "session": session})

    def sign_out(self) -> None:
        with self._lock:
            session = self._session
            self._session = None
            if session is not None:
                self._tokens.pop(session.access_token, None)
        if session is not None:
            self._notify("SIGNED_OUT", None)

    def get_session(self) -> Session | None:
        return self._session

    def get_user(self, access_token: str) -> User | None:
        return self._tokens.get(access_token)

    def on_auth_state_change(self, callback: AuthStateCallback) -> Subscription:
        with self._lock:
            self._listeners.append(callback)
        return _CallbackSubscription(self._listeners, self._lock, callback)

    def _notify(self, event: str, session: Session | None) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            listener(event, session)


def create_memory_backend(base_url: str = BACKEND_URL, bucket: str = MEDIA_BUCKET) -> Backend:
    """Build a fully wired in-memory Backend (store inserts feed the realtime channel)."""
    realtime = MemoryRealtimeFeed()
    logger.info("Using in-memory backend (bucket=%s)", bucket)
    return Backend(
        auth=MemoryAuthProvider(),
        store=MemoryStore(realtime=realtime),
        blobs=MemoryBlobStore(base_url=base_url, bucket=bucket),
        realtime=realtime,
    )
