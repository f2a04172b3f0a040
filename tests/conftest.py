"""Shared fixtures for mobkit tests."""
from __future__ import annotations

import logging
import os
from pathlib import Path

import pytest


@pytest.fixture()
def project(tmp_path: Path) -> Path:
    """An empty project root with a ``platforms`` directory."""
    root = tmp_path / "app"
    (root / "platforms").mkdir(parents=True)
    return root


@pytest.fixture(autouse=True)
def _reset_root_logger():
    """Drop handlers installed by the CLI's logging.basicConfig(force=True)."""
    yield
    root = logging.getLogger()
    for handler in list(root.handlers):
        if type(handler) is logging.StreamHandler:
            root.removeHandler(handler)
    root.setLevel(logging.WARNING)


@pytest.fixture()
def isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run from an empty directory so no ./mobkit.yaml is picked up."""
    cwd = tmp_path / "cwd"
    cwd.mkdir()
    monkeypatch.chdir(cwd)
    monkeypatch.setattr("mobkit.config._USER_CONFIG", tmp_path / "no-user-config.yaml")
    return Path(os.getcwd())
