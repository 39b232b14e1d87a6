"""
Authentication service - sign-up, sign-in and session gating.

Wraps the injected AuthProvider. Input checks mirror the app's forms; the
messages raised in ValidationError are shown to the user as-is.
"""

from __future__ import annotations

from corpsocial.backend.interfaces import AuthStateCallback, Backend, Session, Subscription, User
from corpsocial.errors import NotAuthenticatedError, ValidationError
from corpsocial.observability.logging import get_logger
from corpsocial.observability.telemetry import counter, log_event

logger = get_logger(__name__)


def require_user(backend: Backend) -> User:
    """Return the signed-in user or raise NotAuthenticatedError."""
    session = backend.auth.get_session()
    if session is None:
        raise NotAuthenticatedError("Nu ești autentificat.")
    return session.user


class AuthService:
    def __init__(self, backend: Backend) -> None:
        self.backend = backend

    def register(self, full_name: str, email: str, password: str) -> User:
        """
        Create an account and its profile row.

        Raises:
            ValidationError: a field is blank
            BackendError: the provider rejected the sign-up
        """
        if not full_name.strip() or not email.strip() or not password:
            raise ValidationError("Completează toate câmpurile.")

        result = self.backend.auth.sign_up(email.strip(), password)
        data = result.raise_for_error("sign_up") or {}
        user = data.get("user")
        if user is None:
            raise ValidationError("Inregistrare eșuată.")

        self.backend.store.table("profiles").upsert(
            {"user_id": user.id, "full_name": full_name.strip()}, on_conflict="user_id"
        ).raise_for_error("profiles.upsert")

        counter("auth.sign_up")
        log_event("auth.registered", user_id=user.id)
        return user

    def login(self, email: str, password: str) -> Session:
        if not email.strip() or not password:
            raise ValidationError("Completează email și parolă.")

        result = self.backend.auth.sign_in(email.strip(), password)
        data = result.raise_for_error("sign_in")
        session = data["session"]
        counter("auth.sign_in")
        logger.info("User %s signed in", session.user.id)
        return session

    def logout(self) -> None:
        self.backend.auth.sign_out()

    def current_user(self) -> User:
        return require_user(self.backend)

    def is_authenticated(self) -> bool:
        return self.backend.auth.get_session() is not None

    def watch(self, callback: AuthStateCallback) -> Subscription:
        """Forward auth state changes (SIGNED_IN / SIGNED_OUT) to callback."""
        return self.backend.auth.on_auth_state_change(callback)
