"""Shared fixtures for the catalog tests."""

import pytest

from config_manager import ConfigManager
from mock_data import mock_registry
from registry_client import RegistryManager


@pytest.fixture
def manager() -> RegistryManager:
    """Registry manager going to the network (patched by respx in tests)"""
    return RegistryManager(timeout=5.0)


@pytest.fixture
def mock_manager() -> RegistryManager:
    """Registry manager answered by the built-in mock registries"""
    return RegistryManager(timeout=5.0, transport=mock_registry.transport())


@pytest.fixture
def config(tmp_path) -> ConfigManager:
    return ConfigManager(config_dir=tmp_path / "config")
