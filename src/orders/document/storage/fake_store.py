"""Fake object store — in-memory buckets for testing and local runs.

Configurable failure behavior lets tests exercise dependency errors,
including credential failures.
"""

from datetime import UTC, datetime

from orders.document.storage.port import ObjectStorePort
from orders.errors import DependencyError


class FakeObjectStore(ObjectStorePort):
    """Object store that keeps buckets and objects in memory."""

    def __init__(self, bucket: str, region: str = "local"):
        self.bucket = bucket
        self.region = region
        self._buckets: dict[str, dict] = {}
        self._objects: dict[str, dict[str, dict]] = {}
        self.should_succeed = True
        self.failure_reason = "Object store unavailable"
        self.auth_failure = False
        self.create_bucket(bucket)

    def configure(
        self,
        should_succeed: bool = True,
        failure_reason: str = "Object store unavailable",
        auth_failure: bool = False,
    ):
        """Configure the fake store behavior for testing."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason
        self.auth_failure = auth_failure

    def _check(self):
        if not self.should_succeed:
            raise DependencyError(self.failure_reason, dependency="object_store", auth_failure=self.auth_failure)

    def _bucket(self, bucket: str | None) -> dict[str, dict]:
        name = bucket or self.bucket
        if name not in self._objects:
            raise DependencyError(f"Bucket {name} does not exist", dependency="object_store")
        return self._objects[name]

    def create_bucket(self, name: str):
        if name not in self._objects:
            self._objects[name] = {}
            self._buckets[name] = {"name": name, "creation_date": datetime.now(UTC).isoformat()}

    def put(self, key: str, body: bytes, content_type: str | None = None, metadata: dict | None = None) -> dict:
        self._check()
        objects = self._bucket(None)
        objects[key] = {
            "body": bytes(body),
            "size": len(body),
            "content_type": content_type or "application/octet-stream",
            "last_modified": datetime.now(UTC).isoformat(),
            # Stores fold user metadata keys to lower case
            "metadata": {k.lower(): str(v) for k, v in (metadata or {}).items()},
        }
        return {"bucket": self.bucket, "key": key, "size": len(body)}

    def head(self, key: str, bucket: str | None = None) -> dict:
        self._check()
        objects = self._bucket(bucket)
        if key not in objects:
            raise DependencyError(f"Object {key} not found", dependency="object_store")
        obj = objects[key]
        return {
            "bucket": bucket or self.bucket,
            "key": key,
            "size": obj["size"],
            "content_type": obj["content_type"],
            "last_modified": obj["last_modified"],
            "metadata": dict(obj["metadata"]),
        }

    def list_objects(self, bucket: str | None = None) -> list[dict]:
        self._check()
        objects = self._bucket(bucket)
        return [
            {"key": key, "size": obj["size"], "last_modified": obj["last_modified"]}
            for key, obj in sorted(objects.items())
        ]

    def list_buckets(self) -> list[dict]:
        self._check()
        return [dict(b) for b in self._buckets.values()]

    def url_for(self, key: str) -> str:
        return f"https://{self.bucket}.storage.{self.region}.example.com/{key}"

    def ping(self) -> None:
        self._check()

    def reset(self):
        """Drop every object and restore default behavior (useful between tests)."""
        for objects in self._objects.values():
            objects.clear()
        self.should_succeed = True
        self.failure_reason = "Object store unavailable"
        self.auth_failure = False
