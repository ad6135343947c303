"""Object store registry — pluggable document storage.

``OBJECT_STORE_ADAPTER`` selects the adapter: ``local`` (directories under
``OBJECT_STORE_ROOT``, shared between processes) or ``fake`` (in-memory, for
tests). ``DOCUMENTS_BUCKET`` names the bucket.
"""

from orders import config

_store_instance = None


def get_object_store():
    """Return the configured object store adapter (singleton)."""
    global _store_instance
    if _store_instance is None:
        adapter = config.object_store_adapter()
        if adapter == "local":
            from orders.document.storage.local_store import LocalObjectStore

            _store_instance = LocalObjectStore(
                root=config.object_store_root(),
                bucket=config.documents_bucket(),
                region=config.storage_region(),
            )
        elif adapter == "fake":
            from orders.document.storage.fake_store import FakeObjectStore

            _store_instance = FakeObjectStore(bucket=config.documents_bucket(), region=config.storage_region())
        else:
            raise ValueError(f"Unknown object store adapter: {adapter}")
    return _store_instance


def reset_object_store():
    """Reset the object store singleton (useful for testing)."""
    global _store_instance
    _store_instance = None
