import pytest


def _reset_data(domain):
    for _, provider in domain.providers.items():
        provider._data_reset()


@pytest.fixture(autouse=True)
def _ctx(catalogue_bed, ordering_bed):
    from catalogue.domain import catalogue
    from ordering.domain import ordering

    with catalogue_bed.domain_context(), ordering_bed.domain_context():
        yield
        _reset_data(ordering)
        _reset_data(catalogue)
