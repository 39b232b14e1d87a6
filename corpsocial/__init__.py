"""CorpSocial - team-social backend with a daily activity summary."""

from __future__ import annotations

__version__ = "1.0.0"
