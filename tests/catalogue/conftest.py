import pytest


@pytest.fixture(autouse=True)
def _ctx(catalogue_bed):
    from catalogue.domain import catalogue

    with catalogue_bed.domain_context():
        yield
        for _, provider in catalogue.providers.items():
            provider._data_reset()
