"""
Pytest configuration and shared fixtures for the seqcite test suite.

No test touches the network: HTTP traffic goes through the ``mock_http``
fixture (responses) or is patched with pytest-mock.
"""

import pytest
import responses

from seqcite.config.settings import reset_settings
from seqcite.tools.validators import (
    GEOValidator,
    GSAValidator,
    SRAValidator,
    ValidatorRegistry,
    reset_validator_registry,
)


# ==============================================================================
# Pytest Configuration Hooks
# ==============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)


# ==============================================================================
# Isolation
# ==============================================================================


@pytest.fixture(autouse=True)
def isolated_singletons(monkeypatch):
    """Fresh settings and registry for every test, independent of the shell environment."""
    for name in (
        "SEQCITE_HTTP_TIMEOUT",
        "SEQCITE_METADATA_TIMEOUT",
        "SEQCITE_CACHE_TTL",
        "SEQCITE_CACHE_MAX_ENTRIES",
        "SEQCITE_FETCH_METADATA",
        "SEQCITE_USER_AGENT",
        "SEQCITE_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    reset_settings()
    reset_validator_registry()
    yield
    reset_settings()
    reset_validator_registry()


@pytest.fixture(scope="function")
def mock_http():
    """Intercept all requests traffic; unregistered URLs raise ConnectionError."""
    with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
        yield rsps


# ==============================================================================
# Validators
# ==============================================================================


@pytest.fixture
def sra_validator():
    return SRAValidator(fetch_metadata=False, timeout=5)


@pytest.fixture
def gsa_validator():
    return GSAValidator(fetch_metadata=False, timeout=5)


@pytest.fixture
def geo_validator():
    return GEOValidator(fetch_metadata=False, timeout=5)


@pytest.fixture
def offline_registry(sra_validator, gsa_validator, geo_validator):
    """Registry with the three default validators and metadata lookups disabled."""
    registry = ValidatorRegistry()
    registry.register(sra_validator)
    registry.register(gsa_validator)
    registry.register(geo_validator)
    return registry
