"""Object store port — abstract interface for document storage.

All storage adapters implement this interface. Domain code programs against
the port; adapters are swapped via configuration. Adapters raise
DependencyError when the backing service fails.
"""

from abc import ABC, abstractmethod


class ObjectStorePort(ABC):
    """Abstract interface for object store adapters."""

    bucket: str
    region: str

    @abstractmethod
    def put(self, key: str, body: bytes, content_type: str | None = None, metadata: dict | None = None) -> dict:
        """Store an object in the default bucket.

        Returns:
            dict with keys: bucket, key, size
        """
        ...

    @abstractmethod
    def head(self, key: str, bucket: str | None = None) -> dict:
        """Describe an object without fetching its body.

        Returns:
            dict with keys: bucket, key, size, content_type, last_modified, metadata
        """
        ...

    @abstractmethod
    def list_objects(self, bucket: str | None = None) -> list[dict]:
        """List every object in a bucket.

        Returns:
            list of dicts with keys: key, size, last_modified (no metadata)
        """
        ...

    @abstractmethod
    def list_buckets(self) -> list[dict]:
        """List the buckets visible to this adapter.

        Returns:
            list of dicts with keys: name, creation_date
        """
        ...

    @abstractmethod
    def url_for(self, key: str) -> str:
        """Public URL of an object in the default bucket."""
        ...

    @abstractmethod
    def ping(self) -> None:
        """Raise DependencyError if the store cannot be reached."""
        ...
