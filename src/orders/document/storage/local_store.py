"""Local object store — buckets as directories on disk.

Lets separate processes (the API server and the CLI invocations) see the
same documents without a cloud account. Object metadata is kept in a JSON
sidecar under ``<bucket>/.meta/``.
"""

import json
from datetime import UTC, datetime
from pathlib import Path

from orders.document.storage.port import ObjectStorePort
from orders.errors import DependencyError

_META_DIR = ".meta"


def _timestamp(seconds: float) -> str:
    return datetime.fromtimestamp(seconds, UTC).isoformat()


class LocalObjectStore(ObjectStorePort):
    """Object store rooted at a directory, one sub-directory per bucket."""

    def __init__(self, root: str | Path, bucket: str, region: str = "local"):
        self.root = Path(root)
        self.bucket = bucket
        self.region = region
        self.create_bucket(bucket)

    def create_bucket(self, name: str):
        (self.root / name / _META_DIR).mkdir(parents=True, exist_ok=True)

    def _bucket_dir(self, bucket: str | None) -> Path:
        path = self.root / (bucket or self.bucket)
        if not path.is_dir():
            raise DependencyError(f"Bucket {bucket or self.bucket} does not exist", dependency="object_store")
        return path

    def put(self, key: str, body: bytes, content_type: str | None = None, metadata: dict | None = None) -> dict:
        bucket_dir = self._bucket_dir(None)
        path = bucket_dir / key
        meta_path = bucket_dir / _META_DIR / f"{key}.json"
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(bytes(body))
            meta_path.parent.mkdir(parents=True, exist_ok=True)
            meta_path.write_text(
                json.dumps(
                    {
                        "content_type": content_type or "application/octet-stream",
                        "metadata": {k.lower(): str(v) for k, v in (metadata or {}).items()},
                    }
                ),
                encoding="utf-8",
            )
        except OSError as exc:
            raise DependencyError(f"Cannot write {key}: {exc}", dependency="object_store") from exc
        return {"bucket": self.bucket, "key": key, "size": len(body)}

    def head(self, key: str, bucket: str | None = None) -> dict:
        bucket_dir = self._bucket_dir(bucket)
        path = bucket_dir / key
        if not path.is_file():
            raise DependencyError(f"Object {key} not found", dependency="object_store")

        meta_path = bucket_dir / _META_DIR / f"{key}.json"
        meta = json.loads(meta_path.read_text(encoding="utf-8")) if meta_path.is_file() else {}
        stat = path.stat()
        return {
            "bucket": bucket or self.bucket,
            "key": key,
            "size": stat.st_size,
            "content_type": meta.get("content_type", "application/octet-stream"),
            "last_modified": _timestamp(stat.st_mtime),
            "metadata": meta.get("metadata", {}),
        }

    def list_objects(self, bucket: str | None = None) -> list[dict]:
        bucket_dir = self._bucket_dir(bucket)
        objects = []
        for path in sorted(bucket_dir.rglob("*")):
            relative = path.relative_to(bucket_dir)
            if not path.is_file() or relative.parts[0] == _META_DIR:
                continue
            stat = path.stat()
            objects.append(
                {"key": relative.as_posix(), "size": stat.st_size, "last_modified": _timestamp(stat.st_mtime)}
            )
        return objects

    def list_buckets(self) -> list[dict]:
        return [
            {"name": path.name, "creation_date": _timestamp(path.stat().st_ctime)}
            for path in sorted(self.root.iterdir())
            if path.is_dir()
        ]

    def url_for(self, key: str) -> str:
        return (self.root / self.bucket / key).resolve().as_uri()

    def ping(self) -> None:
        self._bucket_dir(None)
