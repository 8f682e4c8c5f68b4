"""YAML configuration loader with validation."""
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Any

import yaml

OUTPUT_FORMATS = ("text", "json")


@dataclass
class Config:
    """graphcycle configuration."""
    verbosity: int = 0
    json_logs: bool = False
    deduplicate_edges: bool = False
    output_format: str = "text"

    def __post_init__(self):
        if self.output_format not in OUTPUT_FORMATS:
            raise ValueError(
                f"Unknown output format {self.output_format!r}, expected one of {OUTPUT_FORMATS}"
            )


def load_config(path: Optional[str] = None) -> Config:
    """Load config from YAML file or return defaults.

    Args:
        path: Path to YAML config file. If None, returns default config.

    Returns:
        Config instance

    Raises:
        FileNotFoundError: If specified path doesn't exist
        yaml.YAMLError: If YAML is invalid
        ValueError: If a setting has an unsupported value or the file isn't UTF-8
    """
    if path is None:
        return Config()

    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(config_path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    return _parse_config(data)


def _parse_config(data: Dict[str, Any]) -> Config:
    """Parse config dict into Config dataclass."""
    if not isinstance(data, dict):
        raise ValueError("Config file must contain a mapping")
    return Config(
        verbosity=_int_setting(data, "verbosity", 0),
        json_logs=_bool_setting(data, "json_logs", False),
        deduplicate_edges=_bool_setting(data, "deduplicate_edges", False),
        output_format=_str_setting(data, "output_format", "text"),
    )


def _int_setting(data: Dict[str, Any], key: str, default: int) -> int:
    value = data.get(key)
    if value is None:
        return default
    # bool is an int subclass
    if isinstance(value, int) and not isinstance(value, bool) and value >= 0:
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value)
    raise ValueError(f"{key} must be a non-negative integer, got {value!r}")


def _bool_setting(data: Dict[str, Any], key: str, default: bool) -> bool:
    value = data.get(key)
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    raise ValueError(f"{key} must be true or false, got {value!r}")


def _str_setting(data: Dict[str, Any], key: str, default: str) -> str:
    value = data.get(key)
    if value is None:
        return default
    if isinstance(value, str):
        return value
    raise ValueError(f"{key} must be a string, got {value!r}")
