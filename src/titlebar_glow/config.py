"""Load and save the glow settings (config.yaml).

    enabled: true
    intensity: 0.3
    offset_x: 50
    diameter: 200
    color_seed: ""

A missing file means defaults. Missing keys fall back to their defaults.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any

import yaml

from titlebar_glow.injector import InjectionParameters
from titlebar_glow.paths import config_path

logger = logging.getLogger(__name__)


@dataclass
class GlowConfig:
    """User settings for the glow effect."""

    enabled: bool = True
    intensity: float = 0.3
    offset_x: float = 50
    diameter: float = 200
    color_seed: str = ""

    def validate(self) -> None:
        if not isinstance(self.enabled, bool):
            raise ValueError(f"enabled must be true or false, got {self.enabled!r}")
        for name in ("intensity", "offset_x", "diameter"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"{name} must be a number, got {value!r}")
        if not 0 <= self.intensity <= 1:
            raise ValueError(f"intensity must be within [0, 1], got {self.intensity}")
        if self.diameter <= 0:
            raise ValueError(f"diameter must be positive, got {self.diameter}")
        if not isinstance(self.color_seed, str):
            raise ValueError(f"color_seed must be a string, got {self.color_seed!r}")

    def to_parameters(self, color_hex: str) -> InjectionParameters:
        return InjectionParameters(
            color_hex=color_hex,
            intensity=self.intensity,
            offset_x=self.offset_x,
            diameter=self.diameter,
        )


CONFIG_KEYS = tuple(f.name for f in fields(GlowConfig))


def config_from_dict(data: dict[str, Any]) -> GlowConfig:
    """Build a validated GlowConfig from a mapping of known keys."""
    unknown = set(data) - set(CONFIG_KEYS)
    if unknown:
        raise ValueError(
            f"Unknown config key(s): {', '.join(sorted(unknown))} "
            f"(valid: {', '.join(CONFIG_KEYS)})"
        )
    config = GlowConfig(**data)
    # YAML reads `color_seed:` as None and `color_seed: 42` as an int
    if config.color_seed is None:
        config.color_seed = ""
    elif not isinstance(config.color_seed, str):
        config.color_seed = str(config.color_seed)
    config.validate()
    return config


def load_config(path: Path | str | None = None) -> GlowConfig:
    """Load config.yaml from disk.

    Args:
        path: Path to the config file. Defaults to config_path().

    Returns:
        Validated GlowConfig; defaults if the file does not exist.

    Raises:
        yaml.YAMLError: If the YAML is malformed.
        ValueError: If the document is not a mapping or a value is invalid.
    """
    cfg_path = Path(path) if path else config_path()
    if not cfg_path.exists():
        logger.debug("No config at %s, using defaults", cfg_path)
        return GlowConfig()

    with open(cfg_path) as f:
        data = yaml.safe_load(f)

    if data is None:
        return GlowConfig()
    if not isinstance(data, dict):
        raise ValueError(f"config at {cfg_path} is not a YAML mapping")
    return config_from_dict(data)


def save_config(config: GlowConfig, path: Path | str | None = None) -> Path:
    """Write the config back to disk, creating parent directories."""
    config.validate()
    cfg_path = Path(path) if path else config_path()
    cfg_path.parent.mkdir(parents=True, exist_ok=True)
    with open(cfg_path, "w") as f:
        yaml.safe_dump(asdict(config), f, sort_keys=False)
    logger.debug("Saved config to %s", cfg_path)
    return cfg_path


def _coerce(key: str, raw: str) -> Any:
    if key == "enabled":
        lowered = raw.strip().lower()
        if lowered in ("true", "yes", "on", "1"):
            return True
        if lowered in ("false", "no", "off", "0"):
            return False
        raise ValueError(f"enabled must be true or false, got {raw!r}")
    if key == "color_seed":
        return raw
    try:
        number = float(raw)
    except ValueError:
        raise ValueError(f"{key} must be a number, got {raw!r}") from None
    return int(number) if number.is_integer() and "." not in raw else number


def update_config(
    key: str,
    value: str,
    path: Path | str | None = None,
) -> tuple[Any, Any]:
    """Set one config key from its string form and save.

    Returns:
        (old_value, new_value) tuple.
    """
    if key not in CONFIG_KEYS:
        raise ValueError(f"Unknown config key '{key}' (valid: {', '.join(CONFIG_KEYS)})")
    config = load_config(path)
    old_value = getattr(config, key)
    new_value = _coerce(key, value)
    setattr(config, key, new_value)
    save_config(config, path)
    return old_value, new_value
