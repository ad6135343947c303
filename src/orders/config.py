"""Runtime settings read from the environment.

Protean's own settings (providers, event processing) live in domain.toml;
this module only covers what the orders code reads directly.
"""

import os


def documents_bucket() -> str:
    return os.environ.get("DOCUMENTS_BUCKET", "orders-documents")


def storage_region() -> str:
    return os.environ.get("STORAGE_REGION", "us-east-1")


def object_store_adapter() -> str:
    return os.environ.get("OBJECT_STORE_ADAPTER", "local")


def object_store_root() -> str:
    return os.environ.get("OBJECT_STORE_ROOT", "storage")


def email_adapter() -> str:
    return os.environ.get("EMAIL_ADAPTER", "fake")


def notification_sender() -> str:
    return os.environ.get("NOTIFICATION_FROM_EMAIL", "noreply@example.com")


def currency_symbol() -> str:
    return os.environ.get("CURRENCY_SYMBOL", "R$")


def sweep_age_threshold_minutes() -> float:
    """Age past which a RECEIVED order is promoted by the sweep.

    Must stay below the sweep interval (5 minutes) so that every eligible
    order is caught within one extra cycle at most.
    """
    return float(os.environ.get("SWEEP_AGE_THRESHOLD_MINUTES", "4"))
