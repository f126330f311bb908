import logging
import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "mathtrace.toml"
CONFIG_ENV_VAR = "MATHTRACE_CONFIG"

# Each nesting level costs several interpreter frames while parsing
MAX_DEPTH_LIMIT = 128


class ConfigError(Exception):
    """Raised when mathtrace.toml cannot be read or holds invalid values."""


# =============================================================================
# Engine Configuration
# =============================================================================


@dataclass
class EngineConfig:
    """Limits applied to every evaluation.

    Examples in mathtrace.toml:

        [engine]
        max_depth = 64    # nesting levels and chained operands, at most 128
        max_tokens = 256
    """

    max_depth: int = 64
    max_tokens: int = 256


# =============================================================================
# Display Configuration
# =============================================================================


@dataclass
class DisplayConfig:
    """How results and trace lines are rendered by the CLI."""

    precision: int = 12  # significant digits for non-integer values
    show_steps: bool = True


@dataclass
class MathTraceConfig:
    """
    Configuration loaded from mathtrace.toml.

    Every table is optional; missing keys fall back to defaults.
    """

    engine: EngineConfig = field(default_factory=EngineConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    source: Path | None = None


def _positive_int(table: dict, key: str, default: int, section: str) -> int:
    value = table.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ConfigError(f"[{section}] {key} must be a positive integer, got {value!r}")
    return value


def load_config(path: Path) -> MathTraceConfig:
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e

    engine_data = data.get("engine", {})
    display_data = data.get("display", {})

    engine_config = EngineConfig(
        max_depth=_positive_int(engine_data, "max_depth", 64, "engine"),
        max_tokens=_positive_int(engine_data, "max_tokens", 256, "engine"),
    )

    if engine_config.max_depth > MAX_DEPTH_LIMIT:
        raise ConfigError(
            f"[engine] max_depth must be at most {MAX_DEPTH_LIMIT}, got {engine_config.max_depth}"
        )

    precision = _positive_int(display_data, "precision", 12, "display")
    if precision > 17:
        raise ConfigError(f"[display] precision must be at most 17, got {precision}")

    show_steps = display_data.get("show_steps", True)
    if not isinstance(show_steps, bool):
        raise ConfigError(f"[display] show_steps must be a boolean, got {show_steps!r}")

    logger.debug("Loaded config from %s", path)
    return MathTraceConfig(
        engine=engine_config,
        display=DisplayConfig(precision=precision, show_steps=show_steps),
        source=path,
    )


def find_config(start: Path | None = None) -> Path | None:
    """Locate a config file.

    ``$MATHTRACE_CONFIG`` wins; otherwise ``mathtrace.toml`` in ``start``
    (default: the working directory).
    """
    env_path = os.environ.get(CONFIG_ENV_VAR, "")
    if env_path:
        return Path(env_path)
    candidate = (start or Path.cwd()) / CONFIG_FILENAME
    if candidate.is_file():
        return candidate
    return None


def resolve_config(path: Path | None = None) -> MathTraceConfig:
    """Load ``path`` if given, else a discovered config file, else defaults."""
    path = path or find_config()
    if path is None:
        return MathTraceConfig()
    return load_config(path)
