"""User configuration for ohlcsynth.

Defaults for the command line live in a TOML file, by default
``~/.config/ohlcsynth/config.toml``::

    [generator]
    mode = "gbm"
    initial_price = 250.0
    candle_interval = 300
    candle_count = 500
    base_volume = 5000.0
    volume_volatility_multiplier = 2.0
    seed = 42
"""

import logging
import os
from pathlib import Path
from typing import Any, Optional

import toml

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "OHLCSYNTH_CONFIG"

# Keys of the [generator] table that the CLI understands
GENERATOR_KEYS = (
    "mode",
    "initial_price",
    "volatility",
    "trend_strength",
    "candle_interval",
    "candle_count",
    "base_volume",
    "volume_volatility_multiplier",
    "seed",
)


def get_config_path() -> Path:
    """Location of the config file, honouring ``OHLCSYNTH_CONFIG``."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".config" / "ohlcsynth" / "config.toml"


def load_config(config_path: Optional[Path] = None) -> Optional[dict[str, Any]]:
    """Load the TOML config file.

    Returns:
        Parsed config, or None if the file is missing or unreadable.
    """
    config_path = config_path or get_config_path()

    if not config_path.exists():
        return None

    try:
        return toml.load(config_path)
    except (toml.TomlDecodeError, OSError) as e:
        logger.warning("Ignoring unreadable config %s: %s", config_path, e)
        return None


def generator_defaults(config: Optional[dict[str, Any]] = None) -> dict[str, Any]:
    """Extract the known ``[generator]`` keys from a loaded config."""
    if config is None:
        return {}

    section = config.get("generator", {})
    unknown = set(section) - set(GENERATOR_KEYS)
    if unknown:
        logger.warning("Unknown [generator] keys ignored: %s", ", ".join(sorted(unknown)))
    return {key: section[key] for key in GENERATOR_KEYS if key in section}
