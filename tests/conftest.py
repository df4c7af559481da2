"""Shared test fixtures for the logweave test suite."""

import io
import os
from unittest.mock import patch

import pytest

from logweave.lib.hook_lib import HookManager
from logweave.output import Logger


# ---------------------------------------------------------------------------
# Temporary directory fixtures
# ---------------------------------------------------------------------------
@pytest.fixture
def tmp_config_home(tmp_path):
    """Provide a temporary home directory for ~/.logweave/config.json."""
    home = tmp_path / "home"
    home.mkdir()
    with patch.dict(os.environ, {"HOME": str(home), "USERPROFILE": str(home)}):
        with patch("pathlib.Path.home", return_value=home):
            yield home


@pytest.fixture
def tmp_project(tmp_path):
    """Provide an empty project directory (no .logweave.json yet)."""
    project = tmp_path / "project"
    project.mkdir()
    return project


# ---------------------------------------------------------------------------
# Pipeline fixtures
# ---------------------------------------------------------------------------
@pytest.fixture
def hooks():
    """A fresh HookManager."""
    return HookManager()


@pytest.fixture
def calls():
    """A list hooks append to, for asserting invocation order."""
    return []


@pytest.fixture
def entry():
    """A minimal, complete entry dict."""
    return {
        "level": "info",
        "message": "hi",
        "args": ["hi"],
        "timestamp": "t0",
    }


# ---------------------------------------------------------------------------
# Output fixtures
# ---------------------------------------------------------------------------
@pytest.fixture
def buf():
    """A StringIO buffer for capturing record output."""
    return io.StringIO()


@pytest.fixture
def errbuf():
    """A StringIO buffer for capturing fallback diagnostics."""
    return io.StringIO()


@pytest.fixture
def logger(buf, errbuf, hooks):
    """A debug-level Logger writing to buffers, without timestamps."""
    return Logger(verbosity="debug", file=buf, fallback=errbuf,
                  hooks=hooks, timestamps=False)
