"""Managed-backend contracts and the in-memory implementation."""

from corpsocial.backend.interfaces import (
    AuthProvider,
    Backend,
    BlobStore,
    Order,
    QueryResult,
    RealtimeFeed,
    RelationalStore,
    Session,
    Subscription,
    TableQuery,
    User,
)
from corpsocial.backend.memory import create_memory_backend

__all__ = [
    "AuthProvider",
    "Backend",
    "BlobStore",
    "Order",
    "QueryResult",
    "RealtimeFeed",
    "RelationalStore",
    "Session",
    "Subscription",
    "TableQuery",
    "User",
    "create_memory_backend",
]
