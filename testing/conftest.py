"""
Pytest configuration for the Connected Papers client tests.

Usage:
    # Offline tests (default)
    pytest testing/

    # Include tests that call the live Connected Papers API with TEST_TOKEN
    pytest testing/ --integration
"""

from collections.abc import Generator

import pytest

from core.logging import end_run, start_run


@pytest.fixture(autouse=True)
def logging_run(request: pytest.FixtureRequest) -> Generator[None, None, None]:
    """Rotate logs at test module boundaries.

    Each test module gets its own logging run, which triggers log rotation
    on first write to each module's log file.

    When running with pytest-xdist, each worker uses a separate log directory
    to prevent file corruption from concurrent writes.
    """
    import os

    worker_id = os.environ.get("PYTEST_XDIST_WORKER")
    if worker_id:
        os.environ["CONNECTED_PAPERS_LOG_DIR"] = f"logs/test-{worker_id}"

    # e.g. "testing/test_graph_session.py" -> "test-testing-test_graph_session"
    test_path = request.node.nodeid.split("::")[0]
    test_name = test_path.replace("/", "-").replace(".py", "")
    start_run(f"test-{test_name}")
    yield
    end_run()


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's .env / shell settings out of the tests."""
    for var in (
        "CONNECTED_PAPERS_API_KEY",
        "CONNECTED_PAPERS_BASE_URL",
        "CONNECTED_PAPERS_TIMEOUT",
        "CONNECTED_PAPERS_POLL_INTERVAL",
        "CONNECTED_PAPERS_MODE",
        "CONNECTED_PAPERS_LOG_LEVEL",
        "SEMANTIC_SCHOLAR_API_KEY",
        "SEMANTIC_SCHOLAR_BASE_URL",
        "SEMANTIC_SCHOLAR_TIMEOUT",
    ):
        monkeypatch.delenv(var, raising=False)


def pytest_addoption(parser):
    """Add custom command line options for pytest."""
    parser.addoption(
        "--integration",
        action="store_true",
        default=False,
        help="Run tests that call the live Connected Papers API",
    )


def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: marks tests as integration tests requiring the live API",
    )


def pytest_collection_modifyitems(config, items):
    """Skip integration tests unless --integration is given."""
    if config.getoption("--integration"):
        return
    skip = pytest.mark.skip(reason="needs --integration")
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip)
