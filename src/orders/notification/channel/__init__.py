"""Email channel registry — the configured notification transport.

Uses the fake adapter by default; ``EMAIL_ADAPTER`` selects the adapter.
"""

from orders import config

_email_channel = None


def get_email_channel():
    """Return the configured email adapter (singleton)."""
    global _email_channel
    if _email_channel is None:
        adapter = config.email_adapter()
        if adapter == "fake":
            from orders.notification.channel.fake_email import FakeEmailAdapter

            _email_channel = FakeEmailAdapter()
        else:
            raise ValueError(f"Unknown email adapter: {adapter}")
    return _email_channel


def reset_email_channel():
    """Reset the email channel singleton (useful for testing)."""
    global _email_channel
    _email_channel = None
