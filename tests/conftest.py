import pytest

from workbench.settings import get_settings


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    """Settings are cached per process; every test starts from a clean env."""
    for name in (
        "WORKBENCH_MAX_BODY_BYTES",
        "WORKBENCH_REQUEST_TIMEOUT_SECONDS",
        "WORKBENCH_MODULE_MAX_BODY_BYTES",
        "WORKBENCH_MODULE_TIMEOUTS",
        "WORKBENCH_SHARED_TEMPLATES",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def sample_sentence():
    return "Hello World! This is a test."
