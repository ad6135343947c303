"""Tests for the storage and email adapters and their registries."""

import pytest
from orders.document.storage import get_object_store, reset_object_store
from orders.document.storage.fake_store import FakeObjectStore
from orders.document.storage.local_store import LocalObjectStore
from orders.errors import DependencyError
from orders.notification.channel import get_email_channel, reset_email_channel
from orders.notification.channel.fake_email import FakeEmailAdapter


class TestFakeEmailAdapter:
    def setup_method(self):
        self.adapter = FakeEmailAdapter()

    def test_send_records_email(self):
        result = self.adapter.send(to="test@example.com", subject="Hi", body="Hello!")
        assert result["status"] == "sent"
        assert result["message_id"] is not None
        assert len(self.adapter.sent_emails) == 1
        assert self.adapter.sent_emails[0]["to"] == "test@example.com"

    def test_send_failure(self):
        self.adapter.configure(should_succeed=False, failure_reason="SMTP error")
        result = self.adapter.send(to="a@b.com", subject="Hi", body="Hello")
        assert result["status"] == "failed"
        assert result["error"] == "SMTP error"
        assert len(self.adapter.sent_emails) == 0

    def test_failing_recipient_only(self):
        self.adapter.configure(failing_recipients={"bad@b.com"})
        assert self.adapter.send(to="bad@b.com", subject="Hi", body="x")["status"] == "failed"
        assert self.adapter.send(to="good@b.com", subject="Hi", body="x")["status"] == "sent"

    def test_reset(self):
        self.adapter.send(to="a@b.com", subject="Hi", body="Hello")
        self.adapter.configure(should_succeed=False)
        self.adapter.reset()
        assert len(self.adapter.sent_emails) == 0
        assert self.adapter.should_succeed is True


class TestFakeObjectStore:
    def setup_method(self):
        self.store = FakeObjectStore(bucket="docs", region="sa-east-1")

    def test_put_and_head(self):
        self.store.put("a.pdf", b"%PDF", content_type="application/pdf", metadata={"Order_ID": "ord-1"})
        head = self.store.head("a.pdf")
        assert head["size"] == 4
        assert head["content_type"] == "application/pdf"
        assert head["metadata"] == {"order_id": "ord-1"}

    def test_head_missing_object(self):
        with pytest.raises(DependencyError):
            self.store.head("missing.pdf")

    def test_head_unknown_bucket(self):
        with pytest.raises(DependencyError, match="does not exist"):
            self.store.head("a.pdf", bucket="elsewhere")

    def test_list_objects_sorted_by_key(self):
        self.store.put("b.pdf", b"2")
        self.store.put("a.pdf", b"1")
        assert [obj["key"] for obj in self.store.list_objects()] == ["a.pdf", "b.pdf"]

    def test_list_buckets(self):
        self.store.create_bucket("archive")
        assert [b["name"] for b in self.store.list_buckets()] == ["docs", "archive"]

    def test_url_for(self):
        assert self.store.url_for("a.pdf") == "https://docs.storage.sa-east-1.example.com/a.pdf"

    def test_configured_failure(self):
        self.store.configure(should_succeed=False, failure_reason="InvalidAccessKeyId", auth_failure=True)
        with pytest.raises(DependencyError) as exc:
            self.store.list_objects()
        assert exc.value.auth_failure is True
        assert exc.value.dependency == "object_store"

    def test_reset(self):
        self.store.put("a.pdf", b"1")
        self.store.configure(should_succeed=False)
        self.store.reset()
        assert self.store.list_objects() == []


class TestLocalObjectStore:
    @pytest.fixture()
    def store(self, tmp_path):
        return LocalObjectStore(root=tmp_path, bucket="orders-documents")

    def test_put_and_head(self, store):
        store.put("1-a.pdf", b"%PDF", content_type="application/pdf", metadata={"Order_Id": "o-1"})
        head = store.head("1-a.pdf")
        assert head["size"] == 4
        assert head["content_type"] == "application/pdf"
        assert head["metadata"] == {"order_id": "o-1"}

    def test_objects_are_visible_to_another_instance(self, store, tmp_path):
        store.put("1-a.pdf", b"%PDF", metadata={"order_id": "o-1"})
        other = LocalObjectStore(root=tmp_path, bucket="orders-documents")
        assert [obj["key"] for obj in other.list_objects()] == ["1-a.pdf"]
        assert other.head("1-a.pdf")["metadata"]["order_id"] == "o-1"

    def test_nested_keys_and_metadata_not_listed(self, store):
        store.put("incoming/2-b.pdf", b"x")
        store.put("1-a.pdf", b"y")
        assert [obj["key"] for obj in store.list_objects()] == ["1-a.pdf", "incoming/2-b.pdf"]

    def test_head_missing_object(self, store):
        with pytest.raises(DependencyError):
            store.head("nope.pdf")

    def test_unknown_bucket(self, store):
        with pytest.raises(DependencyError):
            store.list_objects(bucket="elsewhere")

    def test_list_buckets(self, store):
        assert [b["name"] for b in store.list_buckets()] == ["orders-documents"]

    def test_ping(self, store):
        store.ping()


class TestRegistries:
    def test_email_channel_is_singleton(self):
        assert get_email_channel() is get_email_channel()

    def test_unknown_email_adapter(self, monkeypatch):
        reset_email_channel()
        monkeypatch.setenv("EMAIL_ADAPTER", "carrier-pigeon")
        with pytest.raises(ValueError, match="Unknown email adapter"):
            get_email_channel()

    def test_object_store_uses_configured_bucket(self, monkeypatch):
        reset_object_store()
        monkeypatch.setenv("DOCUMENTS_BUCKET", "pedidos-docs")
        assert get_object_store().bucket == "pedidos-docs"

    def test_unknown_object_store_adapter(self, monkeypatch):
        reset_object_store()
        monkeypatch.setenv("OBJECT_STORE_ADAPTER", "tape")
        with pytest.raises(ValueError, match="Unknown object store adapter"):
            get_object_store()

    def test_local_object_store_adapter(self, monkeypatch, tmp_path):
        reset_object_store()
        monkeypatch.setenv("OBJECT_STORE_ADAPTER", "local")
        monkeypatch.setenv("OBJECT_STORE_ROOT", str(tmp_path))
        assert isinstance(get_object_store(), LocalObjectStore)
