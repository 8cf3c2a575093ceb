"""Pytest configuration and shared fixtures."""

import logging
import pytest

from recordlite.models import ColumnDef, ViewDef


@pytest.fixture
def events_view():
    """A view with one indexed and one plain column."""
    return ViewDef(
        name="events",
        columns=[
            ColumnDef(name="ts", expr="json_extract(raw,'$.ts')", with_index=True),
            ColumnDef(name="user", expr="json_extract(raw,'$.user')"),
        ],
    )


@pytest.fixture(autouse=True)
def isolate_config(monkeypatch, tmp_path):
    """Keep tests independent of any recordlite config in the environment."""
    for var in ("RECORDLITE_CONFIG", "RECORDLITE_LOG_LEVEL", "RECORDLITE_STRICT_NAMES"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    yield


@pytest.fixture(autouse=True)
def restore_logging():
    """Undo the logging setup done by CLI invocations."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
