"""
Domain models (Pydantic v2) for rows read from the managed backend.

Rows arrive as plain dicts; services validate them into these models so
callers get typed fields. Unknown columns are ignored.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from corpsocial.summary.types import Entry


class BackendRow(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)


class Photo(BackendRow):
    id: str
    user_id: str
    author_email: str | None = None
    image_url: str
    caption: str | None = None
    created_at: str | None = None


class Reaction(BackendRow):
    photo_id: str
    user_id: str
    emoji: str


class Channel(BackendRow):
    id: str
    slug: str
    name: str
    is_department: bool = False


class Message(BackendRow):
    id: str
    channel_id: str | None = None
    user_id: str
    author_email: str | None = None
    body: str | None = None
    created_at: str | None = None

    def to_entry(self) -> Entry:
        return Entry(text=self.body or "", created_at=self.created_at)


class Profile(BackendRow):
    user_id: str
    full_name: str | None = None
    department: str | None = None


class Note(BaseModel):
    """A daily checklist item. Stored as JSON, not in the managed backend."""

    id: str
    text: str
    done: bool = False
    created_at: str | None = Field(default=None)

    def to_entry(self) -> Entry:
        return Entry(text=self.text, created_at=self.created_at)
