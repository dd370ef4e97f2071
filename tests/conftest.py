"""Pytest configuration for local sandbox-friendly temp paths."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

import pytest


_TMP = Path(".tmp").resolve()
_TMP.mkdir(parents=True, exist_ok=True)
os.environ["TMPDIR"] = str(_TMP)
os.environ["TEMP"] = str(_TMP)
os.environ["TMP"] = str(_TMP)
tempfile.tempdir = str(_TMP)

# Settings are read at import time; keep every test away from the real ~/.kirei.
os.environ["KIREI_CONFIG_DIR"] = str(_TMP / "kirei-home")

_TOKEN_ENV_VARS = ("KIREI_GITHUB_TOKEN", "KIREI_LINEAR_TOKEN", "KIREI_TRELLO_TOKEN", "KIREI_JIRA_TOKEN")


def pytest_configure() -> None:
    # Keep explicit hook for clarity; module-level setup above applies first.
    tempfile.tempdir = str(_TMP)


@pytest.fixture(autouse=True)
def _clear_token_env(monkeypatch) -> None:
    for name in _TOKEN_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def store(tmp_path):
    from kirei_store.config_store import ConfigStore

    return ConfigStore(config_dir=tmp_path / "kirei")
