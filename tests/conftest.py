"""Shared pytest fixtures for resourcemap tests."""

from __future__ import annotations

import logging
from collections.abc import Generator

import pytest
import structlog
from click.testing import CliRunner

from resourcemap.config.models import MappingConfig
from resourcemap.engine.registry import DescriptorRegistry


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def registry() -> DescriptorRegistry:
    """A fresh, empty registry so cache assertions don't see other tests' shapes."""
    return DescriptorRegistry()


@pytest.fixture
def config() -> MappingConfig:
    return MappingConfig()


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    """Keep a resourcemap.toml or RESOURCEMAP_* env var on the host from leaking in."""
    for var in ("RESOURCEMAP_CONFIG", "RESOURCEMAP_TRACE", "RESOURCEMAP_VERBOSE"):
        monkeypatch.delenv(var, raising=False)
    yield


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Undo configure_logging() calls made by CLI invocations."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    pkg = logging.getLogger("resourcemap")
    pkg_level = pkg.level
    engine = logging.getLogger("resourcemap.engine")
    engine_level = engine.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    pkg.setLevel(pkg_level)
    engine.setLevel(engine_level)
    structlog.reset_defaults()
