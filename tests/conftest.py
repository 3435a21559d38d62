import pytest

from unipoints.registry import default_registry

from .helpers import make_source


@pytest.fixture(scope="session")
def registry():
    """
    The registry built from the bundled data, loaded once for the whole run.
    """
    return default_registry()


@pytest.fixture
def small_source():
    return make_source()
