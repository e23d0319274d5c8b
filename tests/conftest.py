"""Shared pytest fixtures and configuration."""

import logging
import threading
from types import SimpleNamespace

import pytest

from log_setup import ROOT_LOGGER
from main_server import build_application, make_registration_server
from micro_server import RunningTotal
from registrar import Registrar


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: fast tests with no network")
    config.addinivalue_line("markers", "integration: tests against a live SOAP server")


@pytest.fixture
def registrar() -> Registrar:
    """A fresh registrar with the default course list and ID range."""
    return Registrar()


@pytest.fixture
def live_server():
    """Run the SOAP server on an ephemeral localhost port for one test."""
    app = build_application(Registrar(), RunningTotal(delay=0))
    server = make_registration_server("127.0.0.1", 0, app)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        yield SimpleNamespace(
            host_port=f"127.0.0.1:{server.server_port}",
            app=app,
        )
    finally:
        server.shutdown()
        server.server_close()
        thread.join(timeout=5)


@pytest.fixture
def restore_logging():
    """Drop handlers that `server` installs on the service logger during a test."""
    logger = logging.getLogger(ROOT_LOGGER)
    saved = list(logger.handlers), logger.level
    yield
    logger.handlers[:] = saved[0]
    logger.setLevel(saved[1])
