"""Loading and saving the farms configuration file."""

from __future__ import annotations

import json
import logging
import sys
from dataclasses import dataclass
from pathlib import Path

from .exceptions import ConfigError
from .models import Farm

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FarmsConfig:
    """Farm list as stored in farms.json."""

    farms: tuple[Farm, ...] = ()

    @classmethod
    def from_dict(cls, payload: dict) -> FarmsConfig:
        """Create a FarmsConfig object from a raw dictionary."""
        farms_raw = payload.get("farms", [])
        if not isinstance(farms_raw, list):
            raise TypeError(f"farms must be a list, got {type(farms_raw).__name__}")
        return cls(farms=tuple(Farm.from_dict(farm) for farm in farms_raw))

    def to_dict(self) -> dict:
        return {"farms": [farm.to_dict() for farm in self.farms]}


def load_config(path: Path) -> FarmsConfig:
    """Load the farm list from the provided path.

    Raises:
        ConfigError: If the file cannot be read or does not describe farms
    """
    try:
        with path.open("r", encoding="utf-8") as handle:
            data = json.load(handle)
    except (OSError, json.JSONDecodeError) as err:
        raise ConfigError(f"Failed to read {path}: {err}") from err

    if not isinstance(data, dict):
        raise ConfigError(f"Invalid config in {path}: expected an object")

    try:
        return FarmsConfig.from_dict(data)
    except (KeyError, TypeError, AttributeError) as err:
        raise ConfigError(f"Invalid config in {path}: {err}") from err


def save_config(path: Path, config: FarmsConfig) -> None:
    """Write the farm list to disk."""
    path.parent.mkdir(parents=True, exist_ok=True)
    try:
        with path.open("w", encoding="utf-8") as handle:
            json.dump(config.to_dict(), handle, indent=2)
    except OSError as err:
        raise ConfigError(f"Failed to write {path}: {err}") from err
    logger.info(
        "Farms config saved",
        extra={"extra_context": {"path": str(path), "farms": len(config.farms)}},
    )


def default_path_placeholder() -> str:
    """Example farm directory for the current platform."""
    if sys.platform == "win32":
        return "D:\\subspace-farm"
    if sys.platform == "darwin":
        return "/Volumes/Subspace/subspace-farm"
    return "/media/subspace-farm"
