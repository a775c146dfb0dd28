#!/usr/bin/env python3
"""
Planet configuration with initialization guards
Ensures the three orbiting bodies are loaded once at startup and never change

Defaults come from constants.planets. Set WEATHER_PLANETS_FILE to a YAML file
to override them:

    planets:
      - name: Ferengi
        radius: 500
        angular_speed: -1
      - name: Vulcano
        radius: 1000
        angular_speed: 5
      - name: Betazoide
        radius: 2000
        angular_speed: -3
"""

import logging
import os
import threading

from pathlib import Path

import yaml

from constants.planets import PLANET_DEFAULTS

from .core_types import Body
from .errors import PlanetConfigError

logger = logging.getLogger(__name__)

REQUIRED_PLANETS = 3

# Thread lock for configuration
_config_lock = threading.Lock()

# Configuration state
_config_initialized = False
_planets: tuple[Body, ...] = ()


def default_planets() -> tuple[Body, ...]:
    """Bodies built from the module constants"""
    return tuple(
        Body(name=name, radius=radius, angular_speed=speed)
        for name, (radius, speed) in PLANET_DEFAULTS.items()
    )


def load_planets_file(path: str | Path) -> tuple[Body, ...]:
    """Parse a YAML planet file into Body values.

    Raises:
        PlanetConfigError: file missing, malformed, or not exactly three planets
    """
    path = Path(path)
    try:
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except OSError as e:
        raise PlanetConfigError(f"Cannot read planet file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise PlanetConfigError(f"Invalid YAML in planet file {path}: {e}") from e

    entries = data.get("planets") if isinstance(data, dict) else None
    if not isinstance(entries, list):
        raise PlanetConfigError(f"{path}: expected a top-level 'planets' list")
    if len(entries) != REQUIRED_PLANETS:
        raise PlanetConfigError(
            f"{path}: expected {REQUIRED_PLANETS} planets, found {len(entries)}"
        )

    bodies = []
    for entry in entries:
        try:
            bodies.append(
                Body(
                    name=str(entry["name"]),
                    radius=float(entry["radius"]),
                    angular_speed=float(entry["angular_speed"]),
                )
            )
        except (KeyError, TypeError, ValueError) as e:
            raise PlanetConfigError(f"{path}: invalid planet entry {entry!r}: {e}") from e
    return tuple(bodies)


def initialize_planet_config(path: str | Path | None = None) -> tuple[Body, ...]:
    """
    Initialize planet configuration.
    This should be called once at process startup.
    Later calls return the already loaded planets unchanged.
    """
    global _config_initialized, _planets

    with _config_lock:
        if _config_initialized:
            return _planets

        source = path or os.environ.get("WEATHER_PLANETS_FILE")
        if source:
            _planets = load_planets_file(source)
            logger.info(f"Planets loaded from {source}: {[b.name for b in _planets]}")
        else:
            _planets = default_planets()
            logger.info(f"Planets: defaults {[b.name for b in _planets]}")

        _config_initialized = True
        return _planets


def get_planets() -> tuple[Body, ...]:
    """Configured planets, initializing from the environment on first use"""
    if not _config_initialized:
        return initialize_planet_config()
    return _planets


def is_config_initialized() -> bool:
    return _config_initialized


def reset_planet_config() -> None:
    """Drop loaded planets. Only meant for tests."""
    global _config_initialized, _planets

    with _config_lock:
        _config_initialized = False
        _planets = ()
