"""Pytest configuration to make the local package importable without installation."""
import itertools
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

# Ensure repository root is on sys.path for module resolution
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from bgdtracker.cli import main as cli_main
from bgdtracker.core.models import RecordCandidate
from bgdtracker.records.store import RecordStore
from bgdtracker.storage.backends import MemoryBackend

VALID_FIELDS = {
    "sl_no": "1",
    "email": "a@gmail.com",
    "mobile_number": "01711111111",
    "login_password": "123456",
    "assigned_person": "P",
    "ivac_center": "Dhaka",
    "total_bgd_file": "2",
    "file_starting_date": "2024-01-01",
}


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep tests away from any local secrets/bgd.env or exported settings."""

    monkeypatch.setenv("BGD_ENV_FILE", str(tmp_path / "missing.env"))
    # setenv first so values loaded from an env file during a test are undone afterwards
    for key in ("BGD_DATA_FILE", "BGD_ADMIN_SECRET", "BGD_DEFAULT_LOGIN_PASSWORD", "BGD_DEFAULT_EMAIL"):
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)


@pytest.fixture
def clock():
    """Deterministic UTC clock advancing one second per call."""

    start = datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc)
    ticks = itertools.count()
    return lambda: start + timedelta(seconds=next(ticks))


@pytest.fixture
def backend() -> MemoryBackend:
    return MemoryBackend()


@pytest.fixture
def store(backend: MemoryBackend, clock) -> RecordStore:
    return RecordStore(backend, clock=clock)


@pytest.fixture
def make_candidate():
    """Build a valid candidate, overriding any fields passed as keywords."""

    def _make(**overrides: str) -> RecordCandidate:
        values = dict(VALID_FIELDS)
        values.update(overrides)
        return RecordCandidate(**values)

    return _make


@pytest.fixture
def data_file(tmp_path: Path) -> Path:
    return tmp_path / "records.json"


@pytest.fixture
def run_cli(monkeypatch: pytest.MonkeyPatch, data_file: Path):
    """Helper to invoke the CLI against a temporary data file."""

    def _run(args: list[str]) -> int:
        monkeypatch.setattr(sys, "argv", ["bgd-tracker", "--data-file", str(data_file), *args])
        return cli_main()

    return _run
