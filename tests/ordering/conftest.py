import pytest
from protean import current_domain
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def ordering_bed():
    from ordering.domain import ordering

    bed = DomainFixture(ordering)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(ordering_bed):
    with ordering_bed.domain_context():
        yield

        # Spin sessions live in the memory provider
        for _, provider in current_domain.providers.items():
            provider._data_reset()


@pytest.fixture()
def sheet_store():
    from ordering.sheets import get_sheet_store

    return get_sheet_store()


@pytest.fixture()
def chat():
    from notifications.channel import get_chat_channel

    return get_chat_channel()


@pytest.fixture()
def book(sheet_store):
    from ordering.ledger.order_book import OrderBook

    return OrderBook(sheet_store)
