import os
from pathlib import Path

import pytest
from protean.integrations.pytest import DomainFixture


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Pytest hook to run before collecting tests.

    Selects the Protean config overlay before any domain module is imported.
    """
    os.environ["PROTEAN_ENV"] = session.config.option.env
    os.environ.setdefault("MERCH_ADAPTERS", "fake")
    os.environ.setdefault("MERCH_EMAIL_CHANNEL", "fake")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = Path(item.fspath)

        if "/domain/" in str(test_path):
            item.add_marker(pytest.mark.domain)
        elif "/application/" in str(test_path):
            item.add_marker(pytest.mark.application)
        elif "/integration/" in str(test_path):
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


# ---------------------------------------------------------------------------
# Domains
# ---------------------------------------------------------------------------
@pytest.fixture(scope="session")
def catalogue_bed():
    from catalogue.domain import catalogue

    bed = DomainFixture(catalogue)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(scope="session")
def ordering_bed():
    from ordering.domain import ordering

    bed = DomainFixture(ordering)
    bed.setup()
    yield bed
    bed.teardown()


# ---------------------------------------------------------------------------
# Collaborators
# ---------------------------------------------------------------------------
@pytest.fixture(autouse=True)
def reset_adapters():
    """Every test starts with fresh in-memory collaborators."""
    from accounts import reset_identity_provider
    from notifications.channel import reset_channels
    from ordering.cart.storage import reset_cart_store
    from ordering.receipts import reset_receipt_storage

    yield

    reset_identity_provider()
    reset_channels()
    reset_cart_store()
    reset_receipt_storage()


@pytest.fixture()
def email_channel():
    from notifications.channel import set_email_channel
    from notifications.channel.fake_email import FakeEmailAdapter

    adapter = FakeEmailAdapter()
    set_email_channel(adapter)
    return adapter


@pytest.fixture()
def receipt_storage():
    from ordering.receipts import set_receipt_storage
    from ordering.receipts.fake_adapter import FakeReceiptStorage

    storage = FakeReceiptStorage()
    set_receipt_storage(storage)
    return storage


@pytest.fixture()
def identity_provider():
    from accounts import set_identity_provider
    from accounts.fake_adapter import FakeIdentityProvider

    provider = FakeIdentityProvider()
    set_identity_provider(provider)
    return provider


@pytest.fixture()
def admin_token(identity_provider):
    principal = identity_provider.register_user("desk@arduinodayph.org", "s3cret", role="admin")
    return identity_provider.issue_token(principal)


@pytest.fixture()
def shopper_token(identity_provider):
    principal = identity_provider.register_user("shopper@example.com", "hunter2")
    return identity_provider.issue_token(principal)
