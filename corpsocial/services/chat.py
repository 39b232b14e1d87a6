"""
Team chat service - general and per-department channels with realtime delivery.

Channels are created lazily by slug. A ChatService holds at most one realtime
subscription; opening another channel replaces it.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import date, datetime

from corpsocial.backend.interfaces import Backend, Order, Row, Subscription
from corpsocial.config import (
    CHAT_PAGE_SIZE,
    GENERAL_CHANNEL_NAME,
    GENERAL_CHANNEL_SLUG,
    SUMMARY_MAX_ENTRIES,
)
from corpsocial.errors import NotFoundError, ValidationError
from corpsocial.models import Channel, Message
from corpsocial.observability.logging import get_logger
from corpsocial.observability.telemetry import counter, log_event
from corpsocial.services.auth import require_user
from corpsocial.services.profile import ProfileService
from corpsocial.summary import Entry, SummaryResult, extract_summary

logger = get_logger(__name__)

MESSAGE_COLUMNS = "id, channel_id, user_id, author_email, body, created_at"


def department_slug(department: str) -> str:
    return f"dept:{department.lower()}"


def summary_entries(messages: Iterable[Message]) -> list[Entry]:
    return [message.to_entry() for message in messages]


@dataclass
class ChatWorkspace:
    """Channels visible to the signed-in user."""

    general: Channel
    department: Channel | None = None

    def channel_for(self, tab: str) -> Channel:
        """The department tab falls back to general when the user has no department."""
        if tab == "department" and self.department is not None:
            return self.department
        return self.general


class ChatService:
    def __init__(self, backend: Backend) -> None:
        self.backend = backend
        self._subscription: Subscription | None = None
        self._subscribed_channel: str | None = None

    def ensure_channel(self, slug: str, name: str, is_department: bool = False) -> Channel:
        channels = self.backend.store.table("channels")
        rows = channels.select("*", filters={"slug": slug}, limit=1).raise_for_error(
            "channels.select"
        )
        if rows:
            return Channel.model_validate(rows[0])
        created = channels.insert(
            {"slug": slug, "name": name, "is_department": is_department}
        ).raise_for_error("channels.insert")
        logger.info("Created channel %s", slug)
        return Channel.model_validate(created[0])

    def open_workspace(self) -> ChatWorkspace:
        require_user(self.backend)
        general = self.ensure_channel(GENERAL_CHANNEL_SLUG, GENERAL_CHANNEL_NAME)
        department = ProfileService(self.backend).department()
        dept_channel = None
        if department:
            dept_channel = self.ensure_channel(department_slug(department), department, True)
        return ChatWorkspace(general=general, department=dept_channel)

    def visible_channel(self, channel_id: str, user_id: str) -> Channel:
        """
        The channel, if the user may read it: general or their own department.

        Raises:
            NotFoundError: unknown channel, or another department's channel
        """
        rows = (
            self.backend.store.table("channels")
            .select("*", filters={"id": channel_id}, limit=1)
            .raise_for_error("channels.select")
        )
        channel = Channel.model_validate(rows[0]) if rows else None
        if channel is not None and channel.slug == GENERAL_CHANNEL_SLUG:
            return channel

        profile = ProfileService(self.backend).load_for(user_id)
        department = profile.department if profile else None
        if channel is None or not department or channel.slug != department_slug(department):
            raise NotFoundError(f"Channel {channel_id} not found")
        return channel

    def load_messages(
        self, channel_id: str, limit: int = CHAT_PAGE_SIZE, newest_first: bool = False
    ) -> list[Message]:
        """Oldest first (or newest first), at most `limit` messages."""
        rows = (
            self.backend.store.table("messages")
            .select(
                MESSAGE_COLUMNS,
                filters={"channel_id": channel_id},
                order=Order("created_at", ascending=not newest_first),
                limit=limit,
            )
            .raise_for_error("messages.select")
        )
        return [Message.model_validate(row) for row in rows or []]

    def open_realtime(self, channel_id: str, on_message: Callable[[Message], None]) -> None:
        """Subscribe to new messages in a channel, dropping any previous subscription."""
        self.close_realtime()

        def _deliver(row: Row) -> None:
            on_message(Message.model_validate(row))

        self._subscription = self.backend.realtime.subscribe(
            "messages", {"channel_id": channel_id}, _deliver
        )
        self._subscribed_channel = channel_id
        logger.debug("Realtime open for channel %s", channel_id)

    def close_realtime(self) -> None:
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None
            self._subscribed_channel = None

    @property
    def subscribed_channel(self) -> str | None:
        return self._subscribed_channel

    def send(self, channel_id: str, body: str) -> Message:
        user = require_user(self.backend)
        text = (body or "").strip()
        if not text:
            raise ValidationError("Mesajul este gol.")
        rows = (
            self.backend.store.table("messages")
            .insert(
                {
                    "channel_id": channel_id,
                    "user_id": user.id,
                    "author_email": user.email,
                    "body": text,
                }
            )
            .raise_for_error("messages.insert")
        )
        counter("chat.message_sent")
        return Message.model_validate(rows[0])

    def delete_message(self, message_id: str) -> bool:
        """Returns False when no message had that id."""
        removed = (
            self.backend.store.table("messages")
            .delete({"id": message_id})
            .raise_for_error("messages.delete")
        )
        return bool(removed)

    def summarize_channel(
        self,
        channel_id: str,
        reference_day: datetime | date | str | None = None,
    ) -> SummaryResult:
        """Activity summary of the channel's loaded messages for the reference day."""
        # Newest first so a long history cannot push the reference day out of the page
        messages = self.load_messages(channel_id, limit=SUMMARY_MAX_ENTRIES, newest_first=True)
        result = extract_summary(summary_entries(messages), reference_day=reference_day)
        log_event(
            "summary.computed",
            source="channel",
            channel_id=channel_id,
            entries=len(messages),
            **result.as_dict(),
        )
        return result
