"""
Photo feed service - listing, emoji reactions, uploads and deletion.

One reaction per user per photo: reacting with the same emoji again removes
it, a different emoji replaces it.
"""

from __future__ import annotations

import time
from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass, field

from corpsocial.backend.interfaces import Backend, Order
from corpsocial.config import FEED_PAGE_SIZE, PHOTO_CONTENT_TYPE, REACTION_EMOJIS
from corpsocial.errors import NotFoundError, ValidationError
from corpsocial.models import Photo, Reaction
from corpsocial.observability.logging import get_logger
from corpsocial.observability.telemetry import counter, log_event
from corpsocial.services.auth import require_user

logger = get_logger(__name__)

PHOTO_COLUMNS = "id, user_id, author_email, image_url, caption, created_at"


@dataclass
class FeedPage:
    photos: list[Photo] = field(default_factory=list)
    reactions: list[Reaction] = field(default_factory=list)


def reaction_counts(reactions: Iterable[Reaction]) -> dict[str, dict[str, int]]:
    """Per photo, how many users picked each emoji."""
    counts: dict[str, dict[str, int]] = defaultdict(dict)
    for reaction in reactions:
        per_photo = counts[reaction.photo_id]
        per_photo[reaction.emoji] = per_photo.get(reaction.emoji, 0) + 1
    return dict(counts)


def my_reactions(reactions: Iterable[Reaction], user_id: str | None) -> dict[str, str]:
    """Emoji the given user picked, per photo."""
    return {r.photo_id: r.emoji for r in reactions if user_id and r.user_id == user_id}


class FeedService:
    def __init__(self, backend: Backend) -> None:
        self.backend = backend

    def load_feed(self, limit: int = FEED_PAGE_SIZE) -> FeedPage:
        rows = (
            self.backend.store.table("photos")
            .select(PHOTO_COLUMNS, order=Order("created_at", ascending=False), limit=limit)
            .raise_for_error("photos.select")
        )
        photos = [Photo.model_validate(row) for row in rows or []]
        if not photos:
            return FeedPage()

        reaction_rows = (
            self.backend.store.table("photo_reactions")
            .select("photo_id, user_id, emoji", in_=("photo_id", [p.id for p in photos]))
            .raise_for_error("photo_reactions.select")
        )
        return FeedPage(
            photos=photos,
            reactions=[Reaction.model_validate(row) for row in reaction_rows or []],
        )

    def toggle_reaction(self, photo_id: str, emoji: str) -> str | None:
        """
        Apply the user's emoji to a photo.

        Returns:
            The user's emoji for the photo after the call (None when removed).
        """
        user = require_user(self.backend)
        if emoji not in REACTION_EMOJIS:
            raise ValidationError(f"Reacție necunoscută: {emoji}")

        reactions = self.backend.store.table("photo_reactions")
        key = {"photo_id": photo_id, "user_id": user.id}
        existing = reactions.select("emoji", filters=key, limit=1).raise_for_error(
            "photo_reactions.select"
        )
        mine = existing[0]["emoji"] if existing else None

        if mine == emoji:
            reactions.delete(key).raise_for_error("photo_reactions.delete")
            counter("feed.reaction_removed")
            return None
        if mine:
            reactions.update({"emoji": emoji}, key).raise_for_error("photo_reactions.update")
        else:
            reactions.insert({**key, "emoji": emoji}).raise_for_error("photo_reactions.insert")
        counter("feed.reaction_set")
        return emoji

    def upload_photo(self, data: bytes, caption: str = "") -> Photo:
        """Upload a JPEG to the media bucket and publish it in the feed."""
        user = require_user(self.backend)
        if not data:
            raise ValidationError("Fișierul este gol (0 bytes). Reîncearcă altă imagine.")

        path = f"{user.id}/{int(time.time() * 1000)}.jpg"
        uploaded = self.backend.blobs.upload(path, data, PHOTO_CONTENT_TYPE).raise_for_error(
            "storage.upload"
        )
        stored_path = (uploaded or {}).get("path", path)
        image_url = self.backend.blobs.get_public_url(stored_path)
        if not image_url:
            raise ValidationError("Nu am putut genera URL-ul public.")

        rows = (
            self.backend.store.table("photos")
            .insert(
                {
                    "user_id": user.id,
                    "author_email": user.email,
                    "image_url": image_url,
                    "caption": caption.strip(),
                }
            )
            .raise_for_error("photos.insert")
        )
        log_event("feed.photo_uploaded", user_id=user.id, bytes=len(data))
        return Photo.model_validate(rows[0])

    def delete_photo(self, photo_id: str) -> None:
        """Delete an own photo together with its reactions."""
        user = require_user(self.backend)
        photos = self.backend.store.table("photos")
        rows = photos.select("id, user_id", filters={"id": photo_id}, limit=1).raise_for_error(
            "photos.select"
        )
        if not rows or rows[0]["user_id"] != user.id:
            raise NotFoundError(f"Photo {photo_id} not found")

        self.backend.store.table("photo_reactions").delete({"photo_id": photo_id}).raise_for_error(
            "photo_reactions.delete"
        )
        photos.delete({"id": photo_id}).raise_for_error("photos.delete")
        logger.info("Photo %s deleted by %s", photo_id, user.id)
