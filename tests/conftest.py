"""Pytest configuration for esh tests."""

import sys
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).resolve().parents[1]
for entry in (REPO_ROOT, REPO_ROOT / "examples"):
    if str(entry) not in sys.path:
        sys.path.append(str(entry))


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch, tmp_path):
    """Keep tests away from the user's home directory and log settings."""
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    for name in ("ESH_LOG", "HELLO_LOG", "TESTSH_LOG"):
        monkeypatch.delenv(name, raising=False)
