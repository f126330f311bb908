"""
Tests for mathtrace.toml loading.

Covers:
- Defaults when no file exists
- [engine] and [display] tables
- Validation errors
- Discovery via working directory and $MATHTRACE_CONFIG
"""

from collections.abc import Callable
from pathlib import Path

import pytest

from mathtrace.core.manifest import (
    CONFIG_ENV_VAR,
    ConfigError,
    MathTraceConfig,
    find_config,
    load_config,
    resolve_config,
)


class TestLoadConfig:
    def test_full_file(self, write_config: Callable[[str], Path]) -> None:
        path = write_config(
            """
[engine]
max_depth = 10
max_tokens = 50

[display]
precision = 6
show_steps = false
"""
        )
        config = load_config(path)
        assert config.engine.max_depth == 10
        assert config.engine.max_tokens == 50
        assert config.display.precision == 6
        assert config.display.show_steps is False
        assert config.source == path

    def test_empty_file_uses_defaults(self, write_config: Callable[[str], Path]) -> None:
        config = load_config(write_config(""))
        defaults = MathTraceConfig()
        assert config.engine == defaults.engine
        assert config.display == defaults.display

    def test_partial_table(self, write_config: Callable[[str], Path]) -> None:
        config = load_config(write_config("[display]\nprecision = 4\n"))
        assert config.display.precision == 4
        assert config.display.show_steps is True
        assert config.engine.max_depth == 64

    def test_example_file_matches_defaults(self) -> None:
        example = Path(__file__).parents[2] / "mathtrace.toml.example"
        config = load_config(example)
        defaults = MathTraceConfig()
        assert config.engine == defaults.engine
        assert config.display == defaults.display

    @pytest.mark.parametrize(
        "content",
        [
            "[engine]\nmax_depth = 0\n",
            "[engine]\nmax_tokens = -5\n",
            "[engine]\nmax_depth = 'deep'\n",
            "[engine]\nmax_depth = true\n",
            "[display]\nprecision = 2.5\n",
            "[display]\nprecision = 18\n",
            "[engine]\nmax_depth = 129\n",
            "[display]\nshow_steps = 'yes'\n",
        ],
    )
    def test_invalid_values(self, write_config: Callable[[str], Path], content: str) -> None:
        with pytest.raises(ConfigError):
            load_config(write_config(content))

    def test_invalid_toml(self, write_config: Callable[[str], Path]) -> None:
        with pytest.raises(ConfigError, match="Invalid TOML"):
            load_config(write_config("[engine\n"))

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="Cannot read"):
            load_config(tmp_path / "nope.toml")


class TestFindConfig:
    def test_none_when_absent(self, tmp_path: Path) -> None:
        assert find_config(tmp_path) is None

    def test_finds_file_in_directory(self, write_config: Callable[[str], Path], tmp_path: Path) -> None:
        path = write_config("")
        assert find_config(tmp_path) == path

    def test_env_var_wins(
        self,
        write_config: Callable[[str], Path],
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        write_config("")
        other = tmp_path / "other.toml"
        other.write_text("", encoding="utf-8")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(other))
        assert find_config(tmp_path) == other

    def test_uses_working_directory(
        self,
        write_config: Callable[[str], Path],
        monkeypatch: pytest.MonkeyPatch,
        tmp_path: Path,
    ) -> None:
        path = write_config("")
        monkeypatch.chdir(tmp_path)
        assert find_config() == path


class TestResolveConfig:
    def test_defaults(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)
        config = resolve_config()
        assert config.source is None
        assert config.engine.max_depth == 64

    def test_explicit_path(self, write_config: Callable[[str], Path]) -> None:
        path = write_config("[engine]\nmax_depth = 5\n")
        assert resolve_config(path).engine.max_depth == 5

    def test_max_depth_upper_bound_accepted(self, write_config: Callable[[str], Path]) -> None:
        path = write_config("[engine]\nmax_depth = 128\n")
        assert resolve_config(path).engine.max_depth == 128
