import logging

import pytest

from snapflow.logging import LOGGER_NAME
from snapflow.paths import SnapshotCounter
from snapflow.orchestration import SnapshotOrchestrator
from snapflow.settings import main as settings_main
from snapflow.monitoring import SnapshotMetrics


_ENV_KEYS = [
    "SNAPSHOT_TESTING_RECORD",
    "SNAPSHOT_TESTING_TIMEOUT",
    "SNAPSHOT_TESTING_SNAPSHOTS_DIRNAME",
    "SNAPSHOT_TESTING_ARTIFACTS_DIR",
    "SNAPSHOT_TESTING_DIFF_TOOL",
    "SNAPSHOT_TESTING_LOG_LEVEL",
    "SNAPSHOT_TESTING_STRIP_NAME_SEPARATOR",
    "SNAPSHOT_ARTIFACTS",
]


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch, tmp_path):
    """Isolate every test from the environment and the settings singleton."""
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("SNAPSHOT_ARTIFACTS", str(tmp_path / "artifacts"))
    monkeypatch.setattr(settings_main, "_settings", None)
    yield


@pytest.fixture(autouse=True)
def restore_snapflow_logger():
    """Undo handler and level changes made to the snapflow logger tree."""
    snapflow_logger = logging.getLogger(LOGGER_NAME)
    handlers, propagate, level = list(snapflow_logger.handlers), snapflow_logger.propagate, snapflow_logger.level
    yield
    snapflow_logger.handlers[:] = handlers
    snapflow_logger.propagate = propagate
    snapflow_logger.setLevel(level)


@pytest.fixture
def settings(tmp_path):
    return settings_main._Settings(artifacts_dir=tmp_path / "artifacts")


@pytest.fixture
def orchestrator(settings):
    return SnapshotOrchestrator(settings=settings, metrics=SnapshotMetrics(), counter=SnapshotCounter())


@pytest.fixture
def snapshot_dir(tmp_path):
    return tmp_path / "snaps"
