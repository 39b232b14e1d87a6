"""Application services: thin callers over the injected Backend."""

from corpsocial.services.auth import AuthService, require_user
from corpsocial.services.chat import ChatService, ChatWorkspace, department_slug
from corpsocial.services.feed import FeedPage, FeedService, my_reactions, reaction_counts
from corpsocial.services.notes import (
    DailyNotes,
    JsonFileKeyValueStore,
    KeyValueStore,
    MemoryKeyValueStore,
    notes_key,
)
from corpsocial.services.profile import ProfileService

__all__ = [
    "AuthService",
    "ChatService",
    "ChatWorkspace",
    "DailyNotes",
    "FeedPage",
    "FeedService",
    "JsonFileKeyValueStore",
    "KeyValueStore",
    "MemoryKeyValueStore",
    "ProfileService",
    "department_slug",
    "my_reactions",
    "notes_key",
    "reaction_counts",
    "require_user",
]
