import pytest

from resourcekit.common.uri import URI
from resourcekit.config.environment import Environment
from resourcekit.resources.memory import InMemoryResources


@pytest.fixture(autouse=True)
def isolated_environment(request, monkeypatch):
    """Keep user settings files and shell variables out of the tests."""
    if request.node.get_closest_marker("no_setup"):
        yield
        return

    for key in ("LOG_LEVEL", "DEBUG", "RESOURCEKIT_LOG_LEVEL", "DEFAULT_ENCODING"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setattr(Environment, "settings", {})
    yield


@pytest.fixture
def memory_resources():
    resources = InMemoryResources()
    yield resources
    resources.dispose()


@pytest.fixture
def memory_uri():
    return URI.parse("memory:/notes/today.md")
