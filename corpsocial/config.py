"""Centralized configuration for the CorpSocial backend.

Typed constants for the backend connection, feed/chat paging, auth caching
and product vocabularies (departments, reaction emojis). Environment variable
overrides use safe defaults so the app starts without extra env configuration.
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

# Load environment variables from .env file before reading overrides
load_dotenv()

# --- App ---
APP_VERSION: str = "1.0.0"
ENVIRONMENT: str = os.getenv("CORPSOCIAL_ENV", "development")

# --- Managed backend ---
BACKEND_URL: str = os.getenv("CORPSOCIAL_BACKEND_URL", "http://localhost:54321")
BACKEND_ANON_KEY: str = os.getenv("CORPSOCIAL_BACKEND_ANON_KEY", "")
MEDIA_BUCKET: str = os.getenv("CORPSOCIAL_MEDIA_BUCKET", "media")

# --- Feed / Chat ---
FEED_PAGE_SIZE: int = int(os.getenv("CORPSOCIAL_FEED_PAGE_SIZE", "50"))
CHAT_PAGE_SIZE: int = int(os.getenv("CORPSOCIAL_CHAT_PAGE_SIZE", "100"))
GENERAL_CHANNEL_SLUG: str = "general"
GENERAL_CHANNEL_NAME: str = "General"
PHOTO_CONTENT_TYPE: str = "image/jpeg"

# --- Daily notes ---
NOTES_DIR: str = os.getenv("CORPSOCIAL_NOTES_DIR", "data/notes")

# --- Summary ---
SUMMARY_MAX_ENTRIES: int = int(os.getenv("CORPSOCIAL_SUMMARY_MAX_ENTRIES", "1000"))

# --- API auth ---
AUTH_CACHE_TTL_SECONDS: int = int(os.getenv("CORPSOCIAL_AUTH_CACHE_TTL", "600"))
AUTH_CACHE_MAX_SIZE: int = 1000

# --- Product vocabularies ---
DEPARTMENTS: tuple[str, ...] = (
    "Engineering",
    "Product",
    "Design",
    "Marketing",
    "Sales",
    "HR",
    "Finance",
    "Operations",
    "Legal",
    "Support",
)
REACTION_EMOJIS: tuple[str, ...] = ("❤", "👍", "🔥", "😂")
