"""Pytest fixtures shared across the suite.

All tests are network-isolated - socket connections are blocked by default.
"""

from __future__ import annotations

import socket
from collections.abc import Iterator

import pytest

from tests.support.errors import NetworkIsolationError


def _blocked_socket_connect(self: socket.socket, *args: object, **kwargs: object) -> None:
    _ = (self, kwargs)
    raise NetworkIsolationError(repr(args))


@pytest.fixture(autouse=True)
def block_network_access(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Block all network access in tests."""
    monkeypatch.setattr(socket.socket, "connect", _blocked_socket_connect)
    yield


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clear ranker environment variables so a developer .env cannot leak in."""
    for name in (
        "JOBS_PATH",
        "FORMULAS_PATH",
        "FORMULA_NAME",
        "JOB_COUNTRY",
        "JOB_SORT",
        "JOB_STATUS",
        "RANK_LIMIT",
        "OUTPUT_DIR",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
