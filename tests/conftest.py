import pytest

from urlkit.config import UrlkitConfig


@pytest.fixture(autouse=True)
def setup_function():
    UrlkitConfig.environment = "local"

    # Reset defaults that may be overridden by some tests.
    UrlkitConfig.verbose = 0
    UrlkitConfig.parsing.default_scheme = "http"
