"""Profile editor service (full name + department)."""

from __future__ import annotations

from corpsocial.backend.interfaces import Backend
from corpsocial.config import DEPARTMENTS
from corpsocial.errors import ValidationError
from corpsocial.models import Profile
from corpsocial.observability.logging import get_logger
from corpsocial.services.auth import require_user

logger = get_logger(__name__)


class ProfileService:
    def __init__(self, backend: Backend) -> None:
        self.backend = backend

    def load(self) -> Profile | None:
        """Profile of the signed-in user, or None if it was never saved."""
        return self.load_for(require_user(self.backend).id)

    def load_for(self, user_id: str) -> Profile | None:
        rows = (
            self.backend.store.table("profiles")
            .select("user_id, full_name, department", filters={"user_id": user_id}, limit=1)
            .raise_for_error("profiles.select")
        )
        return Profile.model_validate(rows[0]) if rows else None

    def department(self) -> str:
        profile = self.load()
        return (profile.department or "") if profile else ""

    def save(self, full_name: str, department: str) -> Profile:
        user = require_user(self.backend)
        if not full_name or not full_name.strip():
            raise ValidationError("Completează numele.")
        if department not in DEPARTMENTS:
            raise ValidationError("Alege un departament.")

        record = {"user_id": user.id, "full_name": full_name.strip(), "department": department}
        rows = (
            self.backend.store.table("profiles")
            .upsert(record, on_conflict="user_id")
            .raise_for_error("profiles.upsert")
        )
        logger.info("Profile saved for %s (department=%s)", user.id, department)
        return Profile.model_validate(rows[0] if rows else record)
