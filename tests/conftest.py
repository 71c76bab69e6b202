import pytest

from decode_engine import Decoder, TypeCatalog

from tests.helpers.catalogs import build_provider


@pytest.fixture
def provider():
    return build_provider()


@pytest.fixture
def catalog(provider):
    return TypeCatalog(provider)


@pytest.fixture
def decoder(catalog):
    return Decoder(catalog)
