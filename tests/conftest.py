"""Shared pytest fixtures for mathtrace tests."""

from collections.abc import Callable
from pathlib import Path

import pytest

from mathtrace.core.manifest import CONFIG_ENV_VAR, DisplayConfig, EngineConfig, MathTraceConfig


@pytest.fixture(autouse=True)
def _no_config_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's $MATHTRACE_CONFIG out of the tests."""
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)


@pytest.fixture
def default_config() -> MathTraceConfig:
    """Return the built-in configuration."""
    return MathTraceConfig()


@pytest.fixture
def strict_config() -> MathTraceConfig:
    """Return a configuration with tight limits and short numbers."""
    return MathTraceConfig(
        engine=EngineConfig(max_depth=3, max_tokens=10),
        display=DisplayConfig(precision=4, show_steps=True),
    )


@pytest.fixture
def write_config(tmp_path: Path) -> Callable[[str], Path]:
    """Return a helper that writes mathtrace.toml into tmp_path."""

    def _write(content: str) -> Path:
        path = tmp_path / "mathtrace.toml"
        path.write_text(content, encoding="utf-8")
        return path

    return _write
