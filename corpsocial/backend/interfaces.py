"""
Contracts for the managed backend (auth, relational tables, blob storage,
realtime change-feed).

Services never reach for a global client: they receive a `Backend` bundle and
call these interfaces. Every data call returns a `QueryResult` carrying either
data or the backend's error message.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from corpsocial.errors import BackendError

Row = dict[str, Any]
Filters = Mapping[str, Any]


@dataclass(frozen=True)
class User:
    id: str
    email: str


@dataclass(frozen=True)
class Session:
    access_token: str
    user: User


@dataclass(frozen=True)
class Order:
    column: str
    ascending: bool = True


@dataclass
class QueryResult:
    """Outcome of a backend call: data on success, an error message otherwise."""

    data: Any = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def raise_for_error(self, operation: str | None = None) -> Any:
        """Return data, or raise BackendError when the call failed."""
        if self.error is not None:
            raise BackendError(self.error, operation=operation)
        return self.data


AuthStateCallback = Callable[[str, "Session | None"], None]
InsertCallback = Callable[[Row], None]


class Subscription(ABC):
    @abstractmethod
    def unsubscribe(self) -> None:
        raise NotImplementedError


class AuthProvider(ABC):
    @abstractmethod
    def sign_up(self, email: str, password: str) -> QueryResult:
        raise NotImplementedError

    @abstractmethod
    def sign_in(self, email: str, password: str) -> QueryResult:
        raise NotImplementedError

    @abstractmethod
    def sign_out(self) -> None:
        raise NotImplementedError

    @abstractmethod
    def get_session(self) -> Session | None:
        raise NotImplementedError

    @abstractmethod
    def get_user(self, access_token: str) -> User | None:
        raise NotImplementedError

    @abstractmethod
    def on_auth_state_change(self, callback: AuthStateCallback) -> Subscription:
        raise NotImplementedError


class TableQuery(ABC):
    """CRUD on a single table. Filters are column equality checks."""

    @abstractmethod
    def select(
        self,
        columns: str = "*",
        filters: Filters | None = None,
        order: Order | None = None,
        limit: int | None = None,
        in_: tuple[str, Sequence[Any]] | None = None,
    ) -> QueryResult:
        raise NotImplementedError

    @abstractmethod
    def insert(self, record: Row) -> QueryResult:
        raise NotImplementedError

    @abstractmethod
    def update(self, values: Row, filters: Filters) -> QueryResult:
        raise NotImplementedError

    @abstractmethod
    def delete(self, filters: Filters) -> QueryResult:
        raise NotImplementedError

    @abstractmethod
    def upsert(self, record: Row, on_conflict: str) -> QueryResult:
        raise NotImplementedError


class RelationalStore(ABC):
    @abstractmethod
    def table(self, name: str) -> TableQuery:
        raise NotImplementedError


class BlobStore(ABC):
    @abstractmethod
    def upload(self, path: str, data: bytes, content_type: str) -> QueryResult:
        raise NotImplementedError

    @abstractmethod
    def get_public_url(self, path: str) -> str:
        raise NotImplementedError


class RealtimeFeed(ABC):
    """Insert notifications for a table, optionally narrowed by column equality.

    Delivery is at-least-once; ordering is not guaranteed across reconnects.
    """

    @abstractmethod
    def subscribe(
        self, table: str, filters: Filters | None, on_insert: InsertCallback
    ) -> Subscription:
        raise NotImplementedError


@dataclass
class Backend:
    """Capability bundle injected into services and the API app."""

    auth: AuthProvider
    store: RelationalStore
    blobs: BlobStore
    realtime: RealtimeFeed
