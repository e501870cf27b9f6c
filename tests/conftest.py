"""Shared test fixtures for duolog test suite."""

import os
from unittest.mock import patch

import pytest

from duolog.lib.log_lib import manager as _manager_mod
from duolog.lib.log_lib import ConsoleChannel, DiagnosticsManager, FileChannel


# ---------------------------------------------------------------------------
# Singleton isolation
# ---------------------------------------------------------------------------
@pytest.fixture(autouse=True)
def _reset_diagnostics():
    """Start every test without a DiagnosticsManager singleton."""
    old = _manager_mod._manager
    _manager_mod._manager = None
    yield
    _manager_mod._manager = old


# ---------------------------------------------------------------------------
# Temporary directory fixtures
# ---------------------------------------------------------------------------
@pytest.fixture
def tmp_home(tmp_path):
    """Provide a temporary home directory (~/Documents/Logs, ~/.duolog)."""
    home = tmp_path / "home"
    home.mkdir()
    with patch.dict(os.environ, {"HOME": str(home), "USERPROFILE": str(home)}):
        with patch("pathlib.Path.home", return_value=home):
            yield home


@pytest.fixture
def log_dir(tmp_home):
    """The default log directory under the temporary home."""
    return tmp_home / "Documents" / "Logs"


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """Run from an empty directory so no stray .duolog.json is found."""
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.chdir(work)
    return work


# ---------------------------------------------------------------------------
# Channel / manager fixtures
# ---------------------------------------------------------------------------
@pytest.fixture
def console():
    """An enabled ConsoleChannel writing to the (captured) process streams."""
    return ConsoleChannel(enabled=True)


@pytest.fixture
def file_channel(tmp_path):
    """A FileChannel rooted in tmp_path, not yet initialized."""
    return FileChannel(log_dir=tmp_path / "logs")


@pytest.fixture
def diag(tmp_path):
    """A DiagnosticsManager with an enabled console and a READY file."""
    manager = DiagnosticsManager(
        console=ConsoleChannel(enabled=True),
        file=FileChannel(log_dir=tmp_path / "logs"),
    )
    manager.initialize_file("test.log")
    return manager

