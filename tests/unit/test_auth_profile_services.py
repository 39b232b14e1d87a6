"""Tests for AuthService and ProfileService against the in-memory backend"""

import pytest

from corpsocial.errors import BackendError, NotAuthenticatedError, ValidationError
from corpsocial.observability.telemetry import get_counter
from corpsocial.services import AuthService, ProfileService, require_user

# Matches the signed_in fixture
TEST_EMAIL = "ana@example.com"
TEST_PASSWORD = "secret123"


class TestAuthService:
    def test_register_creates_profile_row(self, backend):
        user = AuthService(backend).register("  Ana Pop ", "ana@example.com", "secret123")

        rows = backend.store.table("profiles").select(filters={"user_id": user.id}).data
        assert rows[0]["full_name"] == "Ana Pop"
        assert get_counter("auth.sign_up") == 1

    @pytest.mark.parametrize(
        "full_name,email,password",
        [("", "a@b.c", "secret123"), ("Ana", "  ", "secret123"), ("Ana", "a@b.c", "")],
    )
    def test_register_rejects_blank_fields(self, backend, full_name, email, password):
        with pytest.raises(ValidationError, match="Completează toate câmpurile."):
            AuthService(backend).register(full_name, email, password)

    def test_register_surfaces_provider_error(self, backend, signed_in):
        with pytest.raises(BackendError, match="User already registered"):
            AuthService(backend).register("Alt Nume", TEST_EMAIL, TEST_PASSWORD)

    def test_login_returns_session(self, backend, signed_in):
        assert signed_in.user.email == TEST_EMAIL
        assert AuthService(backend).current_user() == signed_in.user
        assert AuthService(backend).is_authenticated()

    def test_login_rejects_blank(self, backend):
        with pytest.raises(ValidationError, match="Completează email și parolă."):
            AuthService(backend).login("", "x")

    def test_login_wrong_password(self, backend, signed_in):
        with pytest.raises(BackendError, match="Invalid login credentials"):
            AuthService(backend).login(TEST_EMAIL, "wrong-password")

    def test_logout_clears_session(self, backend, signed_in):
        auth = AuthService(backend)
        auth.logout()
        assert not auth.is_authenticated()
        with pytest.raises(NotAuthenticatedError):
            require_user(backend)

    def test_watch_forwards_events(self, backend):
        auth = AuthService(backend)
        events = []
        auth.watch(lambda event, session: events.append((event, session is not None)))
        auth.register("Ana Pop", TEST_EMAIL, TEST_PASSWORD)
        auth.login(TEST_EMAIL, TEST_PASSWORD)
        auth.logout()
        assert events == [("SIGNED_IN", True), ("SIGNED_OUT", False)]


class TestProfileService:
    def test_requires_sign_in(self, backend):
        with pytest.raises(NotAuthenticatedError):
            ProfileService(backend).load()

    def test_registered_profile_has_no_department(self, backend, signed_in):
        profile = ProfileService(backend).load()
        assert profile.full_name == "Ana Pop"
        assert profile.department is None
        assert ProfileService(backend).department() == ""

    def test_save_and_reload(self, backend, signed_in):
        service = ProfileService(backend)
        saved = service.save("Ana Popescu", "Engineering")
        service.save("Ana Popescu", "Design")

        assert saved.department == "Engineering"
        assert service.department() == "Design"
        assert len(backend.store.table("profiles").select().data) == 1

    def test_load_for_other_user_without_session(self, backend, signed_in):
        ProfileService(backend).save("Ana Pop", "Sales")
        AuthService(backend).logout()
        service = ProfileService(backend)
        assert service.load_for(signed_in.user.id).department == "Sales"
        assert service.load_for("nimeni") is None

    def test_save_requires_name(self, backend, signed_in):
        with pytest.raises(ValidationError, match="Completează numele."):
            ProfileService(backend).save("  ", "Engineering")

    def test_save_requires_known_department(self, backend, signed_in):
        with pytest.raises(ValidationError, match="Alege un departament."):
            ProfileService(backend).save("Ana", "Astronauts")
