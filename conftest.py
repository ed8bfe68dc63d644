"""Configures pytest further."""
import pytest

from bigrsa import keygen
from bigrsa import rsa


def pytest_addoption(parser):
    parser.addoption("--skip-slow", action="store_true", default=False, help="skip slower tests")
    parser.addoption("--run-extreme", action="store_true", default=False, help="run extreme key sizes")


def pytest_collection_modifyitems(config, items):
    skipdict = {}
    if config.getoption("--skip-slow"):
        skipdict["slow"] = pytest.mark.skip(reason="Slow test: needs no --skip-slow option")
    if not config.getoption("--run-extreme"):
        skipdict["extreme"] = pytest.mark.skip(reason="Extreme test: needs --run-extreme option")
    if not skipdict:
        return
    for item in items:
        for k, v in skipdict.items():
            if k in item.keywords:
                item.add_marker(v)


@pytest.fixture(scope="session")
def sieve() -> keygen.Sieve:
    """The default small prime table, built once."""
    return keygen.Sieve()


@pytest.fixture(scope="session")
def small_key_pair() -> tuple[rsa.RSAPrivateKey, rsa.RSAPublicKey]:
    """A real key pair of the smallest accepted size, shared by tests that only need some valid key."""
    return rsa.generate_key_pair(128, 2)
