"""
Tests for the in-memory backend

Covers table CRUD semantics, realtime insert delivery, blob storage and
email/password auth with state-change notifications.
"""

import pytest

from corpsocial.backend import Order, QueryResult
from corpsocial.errors import BackendError


class TestQueryResult:
    def test_ok_returns_data(self):
        assert QueryResult(data=[1]).raise_for_error("select") == [1]

    def test_error_raises_with_operation(self):
        with pytest.raises(BackendError) as exc_info:
            QueryResult(error="permission denied").raise_for_error("photos.insert")
        assert exc_info.value.operation == "photos.insert"
        assert str(exc_info.value) == "photos.insert: permission denied"


class TestMemoryTable:
    def test_insert_assigns_id_and_created_at(self, backend):
        row = backend.store.table("photos").insert({"caption": "hi"}).raise_for_error()[0]
        assert row["id"]
        assert row["created_at"]
        assert row["caption"] == "hi"

    def test_insert_keeps_explicit_values(self, backend):
        row = backend.store.table("photos").insert({"id": "p1", "created_at": "2024-01-01"}).data[0]
        assert (row["id"], row["created_at"]) == ("p1", "2024-01-01")

    def test_select_filters_order_limit(self, backend):
        table = backend.store.table("messages")
        for i, channel in enumerate(["a", "b", "a", "a"]):
            table.insert({"channel_id": channel, "created_at": f"2024-01-0{i + 1}"})

        rows = table.select(
            "created_at",
            filters={"channel_id": "a"},
            order=Order("created_at", ascending=False),
            limit=2,
        ).data
        assert rows == [{"created_at": "2024-01-04"}, {"created_at": "2024-01-03"}]

    def test_select_in(self, backend):
        table = backend.store.table("reactions")
        for photo in ["p1", "p2", "p3"]:
            table.insert({"photo_id": photo})
        rows = table.select("photo_id", in_=("photo_id", ["p1", "p3"])).data
        assert sorted(r["photo_id"] for r in rows) == ["p1", "p3"]

    def test_order_puts_missing_values_last(self, backend):
        table = backend.store.table("t")
        table.insert({"id": "x", "rank": None})
        table.insert({"id": "y", "rank": 2})
        table.insert({"id": "z", "rank": 1})
        ids = [r["id"] for r in table.select("id", order=Order("rank")).data]
        assert ids == ["z", "y", "x"]

    def test_update_and_delete_require_filters(self, backend):
        table = backend.store.table("t")
        table.insert({"id": "x"})
        assert not table.update({"v": 1}, {}).ok
        assert not table.delete({}).ok
        assert len(table.select().data) == 1

    def test_update_and_delete(self, backend):
        table = backend.store.table("t")
        table.insert({"id": "x", "v": 0})
        table.insert({"id": "y", "v": 0})
        assert table.update({"v": 5}, {"id": "x"}).data[0]["v"] == 5
        removed = table.delete({"id": "y"}).data
        assert [r["id"] for r in removed] == ["y"]
        assert table.select("id, v").data == [{"id": "x", "v": 5}]

    def test_upsert_inserts_then_updates(self, backend):
        table = backend.store.table("profiles")
        table.upsert({"user_id": "u1", "full_name": "Ana"}, on_conflict="user_id")
        table.upsert({"user_id": "u1", "department": "HR"}, on_conflict="user_id")
        rows = table.select().data
        assert len(rows) == 1
        assert rows[0]["full_name"] == "Ana"
        assert rows[0]["department"] == "HR"

    def test_upsert_requires_conflict_column(self, backend):
        result = backend.store.table("profiles").upsert({"full_name": "Ana"}, on_conflict="user_id")
        assert "user_id" in result.error


class TestMemoryRealtime:
    def test_insert_reaches_matching_subscriber(self, backend):
        received = []
        backend.realtime.subscribe("messages", {"channel_id": "c1"}, received.append)

        backend.store.table("messages").insert({"channel_id": "c1", "body": "salut"})
        backend.store.table("messages").insert({"channel_id": "c2", "body": "altundeva"})
        backend.store.table("photos").insert({"channel_id": "c1"})

        assert [r["body"] for r in received] == ["salut"]

    def test_unsubscribe_stops_delivery(self, backend):
        received = []
        sub = backend.realtime.subscribe("messages", None, received.append)
        sub.unsubscribe()
        sub.unsubscribe()
        backend.store.table("messages").insert({"body": "x"})
        assert received == []
        assert backend.realtime.subscriber_count == 0


class TestMemoryBlobStore:
    def test_upload_and_public_url(self, backend):
        assert backend.blobs.upload("u1/1.jpg", b"\xff\xd8", "image/jpeg").ok
        assert backend.blobs.download("u1/1.jpg") == (b"\xff\xd8", "image/jpeg")
        assert (
            backend.blobs.get_public_url("u1/1.jpg")
            == "https://backend.test/storage/v1/object/public/media/u1/1.jpg"
        )

    def test_duplicate_path_is_an_error(self, backend):
        backend.blobs.upload("u1/1.jpg", b"a", "image/jpeg")
        assert backend.blobs.upload("u1/1.jpg", b"b", "image/jpeg").error == (
            "The resource already exists"
        )


class TestMemoryAuth:
    def test_sign_up_then_sign_in(self, backend):
        signed_up = backend.auth.sign_up("Ana@Example.com ", "secret123").raise_for_error()
        assert signed_up["session"] is None
        assert signed_up["user"].email == "ana@example.com"

        session = backend.auth.sign_in("ana@example.com", "secret123").data["session"]
        assert backend.auth.get_session() == session
        assert backend.auth.get_user(session.access_token) == signed_up["user"]

    def test_sign_up_errors(self, backend):
        assert backend.auth.sign_up("a@b.c", "123").error == (
            "Password should be at least 6 characters"
        )
        backend.auth.sign_up("a@b.c", "secret123")
        assert backend.auth.sign_up("a@b.c", "secret456").error == "User already registered"

    def test_wrong_password(self, backend):
        backend.auth.sign_up("a@b.c", "secret123")
        assert backend.auth.sign_in("a@b.c", "nope-nope").error == "Invalid login credentials"
        assert backend.auth.get_session() is None

    def test_state_change_events(self, backend):
        events = []
        sub = backend.auth.on_auth_state_change(lambda event, session: events.append(event))
        backend.auth.sign_up("a@b.c", "secret123")
        session = backend.auth.sign_in("a@b.c", "secret123").data["session"]
        backend.auth.sign_out()
        sub.unsubscribe()
        backend.auth.sign_in("a@b.c", "secret123")

        assert events == ["SIGNED_IN", "SIGNED_OUT"]
        assert backend.auth.get_user(session.access_token) is None
