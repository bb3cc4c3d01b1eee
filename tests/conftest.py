"""Pytest configuration and fixtures."""

from pathlib import Path

import pytest

from jot.context import AppContext
from jot.items import Vault
from jot.manager import VaultManager
from jot.registry import REGISTRY_FILENAME, Registry


@pytest.fixture
def app_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolated application directory (registry, config, audit log)."""
    home = tmp_path / "home"
    monkeypatch.setenv("JOT_HOME", str(home))
    return home


@pytest.fixture
def vaults_dir(tmp_path: Path) -> Path:
    """Parent directory for test vaults."""
    path = tmp_path / "vaults"
    path.mkdir()
    return path


@pytest.fixture
def registry(app_dir: Path) -> Registry:
    return Registry.load(app_dir / REGISTRY_FILENAME)


@pytest.fixture
def manager(registry: Registry) -> VaultManager:
    return VaultManager.load(registry)


@pytest.fixture
def current_vault(manager: VaultManager, vaults_dir: Path) -> Vault:
    """A vault called v1, created and entered."""
    manager.create_vault("v1", vaults_dir)
    return manager.enter_vault("v1")


@pytest.fixture
def app(app_dir: Path) -> AppContext:
    return AppContext.create(app_dir)
