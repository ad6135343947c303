import pytest
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def orders_bed():
    from orders.domain import orders

    bed = DomainFixture(orders)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(orders_bed):
    with orders_bed.domain_context():
        yield

        from protean import current_domain

        for _, provider in current_domain.providers.items():
            provider._data_reset()
        current_domain.event_store.store._data_reset()


@pytest.fixture(autouse=True)
def _adapters():
    """Fresh email channel and object store for every test."""
    from orders.document.storage import reset_object_store
    from orders.notification.channel import reset_email_channel

    reset_email_channel()
    reset_object_store()
    yield
    reset_email_channel()
    reset_object_store()


@pytest.fixture()
def email_channel():
    from orders.notification.channel import get_email_channel

    return get_email_channel()


@pytest.fixture()
def object_store():
    from orders.document.storage import get_object_store

    return get_object_store()
